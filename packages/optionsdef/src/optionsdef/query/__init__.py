"""Component queries."""

from .args import QueryArgs
from .engine import QueryEngine

__all__ = ["QueryArgs", "QueryEngine"]
