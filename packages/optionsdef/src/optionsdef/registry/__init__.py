"""Component registry."""

from .base import AddResult, ComponentRegistry

__all__ = ["AddResult", "ComponentRegistry"]
