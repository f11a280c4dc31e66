"""Component records stored by the registry.

A record is an opaque descriptor: the registry only reads its ``slug``,
``type`` and ``parent``. The attribute mapping is stored exactly as it was
handed to :meth:`ComponentRegistry.add` and is never inspected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .types import ComponentType


@dataclass(frozen=True, slots=True)
class ComponentRecord:
    """Immutable component descriptor."""

    slug: str
    type: ComponentType
    parent: str = ""
    attrs: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_root(self) -> bool:
        return self.type is ComponentType.GROUP

    @property
    def label(self) -> str:
        if self.parent:
            return f"{self.type}:{self.parent}/{self.slug}"
        return f"{self.type}:{self.slug}"


def component_to_slug(component: ComponentRecord) -> str:
    return component.slug


def slugs_of(components: Iterable[ComponentRecord]) -> list[str]:
    return [component_to_slug(c) for c in components]


__all__ = ["ComponentRecord", "component_to_slug", "slugs_of"]
