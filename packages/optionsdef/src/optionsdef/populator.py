"""Translate a nested component description into registry records.

A description is a mapping of group slugs to group nodes. Each node is a
mapping of attributes, optionally holding its children under the plural key
of the next type down::

    {
        "options": {
            "title": "Options",
            "sets": {
                "general": {
                    "members": {
                        "site": {
                            "sections": {
                                "identity": {
                                    "fields": {
                                        "tagline": {"type": "text"},
                                    },
                                },
                            },
                        },
                    },
                },
            },
        },
    }

A missing child key means the node has no children.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .components.types import ComponentType, next_inferior_type
from .diagnostics import doing_it_wrong
from .hooks import Description
from .registry.base import ComponentRegistry

logger = logging.getLogger(__name__)


def seed_description(group_slugs: Iterable[str]) -> Description:
    """Return a description holding an empty entry for every group slug."""
    return {slug: {"sets": {}} for slug in group_slugs}


def walk_description(registry: ComponentRegistry, description: Mapping[str, Any]) -> int:
    """Depth-first walk registering every node. Returns the number of records created."""
    created = _walk(registry, description, ComponentType.GROUP, parent="")
    logger.debug("Registered %d component(s) from %d group description(s)", created, len(description))
    return created


def _walk(
    registry: ComponentRegistry,
    nodes: Mapping[str, Any],
    kind: ComponentType,
    parent: str,
) -> int:
    child_key = kind.child_key
    created = 0

    for slug, node in nodes.items():
        if not isinstance(node, Mapping):
            registry.report(
                doing_it_wrong(
                    "walk_description",
                    f"The {kind} {slug} must be described by a mapping, got {type(node).__name__}.",
                )
            )
            continue

        if child_key is None:
            attrs = node
        else:
            attrs = {key: value for key, value in node.items() if key != child_key}

        if registry.add(str(slug), kind, attrs, parent):
            created += 1

        if child_key is None:
            continue
        children = node.get(child_key)
        if not children:
            continue
        if not isinstance(children, Mapping):
            registry.report(
                doing_it_wrong(
                    "walk_description",
                    f"The {child_key} of {kind} {slug} must be a mapping, got {type(children).__name__}.",
                )
            )
            continue
        created += _walk(registry, children, next_inferior_type(kind), parent=str(slug))

    return created


__all__ = ["seed_description", "walk_description"]
