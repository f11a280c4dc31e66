"""Component types and records."""

from .records import ComponentRecord, component_to_slug, slugs_of
from .types import (
    CHILD_KEYS,
    TYPE_ORDER,
    ComponentType,
    coerce_type,
    is_valid_type,
    next_inferior_type,
    next_superior_type,
)

__all__ = [
    "ComponentRecord",
    "ComponentType",
    "CHILD_KEYS",
    "TYPE_ORDER",
    "coerce_type",
    "component_to_slug",
    "is_valid_type",
    "next_inferior_type",
    "next_superior_type",
    "slugs_of",
]
