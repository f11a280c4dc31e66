# optionsdef/components/types.py
"""The five component types and their fixed order.

``group`` is the shallowest type and ``field`` the deepest::

    group -> set -> member -> section -> field
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ComponentType(str, Enum):
    GROUP = "group"
    SET = "set"
    MEMBER = "member"
    SECTION = "section"
    FIELD = "field"

    @property
    def depth(self) -> int:
        return TYPE_ORDER.index(self)

    @property
    def child_key(self) -> str | None:
        """Key holding this type's children in a nested description."""
        inferior = next_inferior_type(self)
        return CHILD_KEYS[inferior] if inferior is not None else None

    def __str__(self) -> str:
        return self.value


TYPE_ORDER: tuple[ComponentType, ...] = (
    ComponentType.GROUP,
    ComponentType.SET,
    ComponentType.MEMBER,
    ComponentType.SECTION,
    ComponentType.FIELD,
)

# Plural key used for a type's collection, both in the registry and in
# nested descriptions.
CHILD_KEYS: dict[ComponentType, str] = {
    ComponentType.GROUP: "groups",
    ComponentType.SET: "sets",
    ComponentType.MEMBER: "members",
    ComponentType.SECTION: "sections",
    ComponentType.FIELD: "fields",
}


def coerce_type(value: Any) -> ComponentType | None:
    """Return the matching :class:`ComponentType`, or ``None`` if ``value`` is not one.

    Strings are matched case-insensitively and with surrounding whitespace
    ignored.
    """
    if isinstance(value, ComponentType):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ComponentType(value.strip().lower())
    except ValueError:
        return None


def is_valid_type(value: Any) -> bool:
    return coerce_type(value) is not None


def next_superior_type(value: Any) -> ComponentType | None:
    kind = coerce_type(value)
    if kind is None or kind.depth == 0:
        return None
    return TYPE_ORDER[kind.depth - 1]


def next_inferior_type(value: Any) -> ComponentType | None:
    kind = coerce_type(value)
    if kind is None or kind.depth == len(TYPE_ORDER) - 1:
        return None
    return TYPE_ORDER[kind.depth + 1]


__all__ = [
    "ComponentType",
    "TYPE_ORDER",
    "CHILD_KEYS",
    "coerce_type",
    "is_valid_type",
    "next_superior_type",
    "next_inferior_type",
]
