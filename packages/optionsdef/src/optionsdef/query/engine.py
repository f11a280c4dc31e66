"""Query resolution over a :class:`ComponentRegistry`.

Records only know their direct parent's slug. To answer "every field whose
group is ``g1``" the engine collapses the hierarchy one level at a time: it
finds the sets under ``g1``, then the members under those sets, then the
sections under those members, and finally keeps the fields whose parent is one
of those sections.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Mapping
from typing import Any

from asgiref.sync import sync_to_async

from ..components.records import ComponentRecord, slugs_of
from ..components.types import ComponentType, coerce_type, next_inferior_type
from ..diagnostics import doing_it_wrong
from ..exceptions import InvalidTypeError
from ..registry.base import ComponentRegistry
from .args import QueryArgs

logger = logging.getLogger(__name__)


class QueryEngine:
    def __init__(
        self,
        registry: ComponentRegistry,
        *,
        default_type: str = ComponentType.FIELD.value,
        default_parent_type: str = ComponentType.SECTION.value,
    ) -> None:
        self.registry = registry
        self.defaults = {"type": default_type, "parent_type": default_parent_type}

    def query(
        self,
        args: QueryArgs | Mapping[str, Any] | None = None,
        single: bool = False,
        **options: Any,
    ) -> list[ComponentRecord] | ComponentRecord | None:
        """
        Return the components matching ``args``.

        Recognized options are ``slug``, ``type``, ``parent_slug`` and
        ``parent_type``. Slug filtering runs first, ancestry filtering second.

        With ``single`` the first match is returned, or ``None`` when nothing
        matches. Otherwise a list in registration order is returned. An unknown
        ``type`` (or ``parent_type`` when ancestry filtering is requested) is
        reported as a diagnostic and yields the empty result.
        """
        query = QueryArgs.parse(args, defaults=self.defaults, **options)
        empty = None if single else []

        kind = coerce_type(query.type)
        if kind is None:
            self._invalid_type(query.type)
            return empty

        results = list(self.registry.collection(kind))
        if query.slug:
            results = self._filter_by_slug(query.slug, results)

        if kind is not ComponentType.GROUP and query.parent_slug:
            parent_kind = coerce_type(query.parent_type)
            if parent_kind is None:
                self._invalid_type(query.parent_type)
                return empty
            if results:
                results = self._filter_by_parent(query.parent_slug, parent_kind, results, kind)

        if single:
            return results[0] if results else None
        return results

    async def aquery(
        self,
        args: QueryArgs | Mapping[str, Any] | None = None,
        single: bool = False,
        **options: Any,
    ) -> list[ComponentRecord] | ComponentRecord | None:
        """Async wrapper around `query`."""
        return await sync_to_async(self.query)(args, single, **options)

    # --- filters ---

    @staticmethod
    def _filter_by_slug(
        slugs: Collection[str], haystack: Iterable[ComponentRecord]
    ) -> list[ComponentRecord]:
        wanted = set(slugs)
        return [component for component in haystack if component.slug in wanted]

    def _filter_by_parent(
        self,
        parent_slugs: Collection[str],
        parent_type: ComponentType,
        haystack: Iterable[ComponentRecord],
        haystack_type: ComponentType,
    ) -> list[ComponentRecord]:
        # An "ancestor" at the same depth or deeper never matches.
        if parent_type.depth >= haystack_type.depth:
            return []

        allowed = set(parent_slugs)
        while (current_type := next_inferior_type(parent_type)) is not haystack_type:
            current_haystack = self._filter_by_parent(
                allowed, parent_type, self.registry.collection(current_type), current_type
            )
            allowed = set(slugs_of(current_haystack))
            logger.debug(
                "Resolved %d %s slug(s) under %s for %s query",
                len(allowed),
                current_type,
                parent_type,
                haystack_type,
            )
            parent_type = current_type

        return [component for component in haystack if component.parent in allowed]

    def _invalid_type(self, value: Any) -> None:
        error = InvalidTypeError(f"The type {value!r} is not a valid type for a component.")
        self.registry.report(
            doing_it_wrong(f"{type(self).__name__}.query", str(error), error=error, stacklevel=4)
        )


__all__ = ["QueryEngine"]
