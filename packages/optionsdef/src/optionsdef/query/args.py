# optionsdef/query/args.py

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from ..components.types import ComponentType


class QueryArgs(BaseModel):
    """Normalized query options.

    ``slug`` and ``parent_slug`` accept a single slug or any iterable of slugs;
    an empty value means "no filter on this axis". ``type`` and
    ``parent_type`` are left unvalidated here so the engine can report an
    unknown type as a diagnostic rather than a validation error.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    slug: tuple[str, ...] = ()
    type: Any = ComponentType.FIELD.value
    parent_slug: tuple[str, ...] = ()
    parent_type: Any = ComponentType.SECTION.value

    @field_validator("slug", "parent_slug", mode="before")
    @classmethod
    def _normalize_slugs(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,) if value else ()
        if isinstance(value, Iterable):
            return tuple(str(item) for item in value)
        return (str(value),)

    @classmethod
    def parse(
        cls,
        args: "QueryArgs | Mapping[str, Any] | None" = None,
        *,
        defaults: Mapping[str, Any] | None = None,
        **options: Any,
    ) -> "QueryArgs":
        """Merge ``defaults``, ``args`` and keyword ``options`` (later wins)."""
        merged: dict[str, Any] = dict(defaults or {})
        if isinstance(args, QueryArgs):
            merged.update(args.model_dump(exclude_unset=True))
        elif args:
            merged.update(args)
        merged.update(options)
        return cls.model_validate(merged)


__all__ = ["QueryArgs"]
