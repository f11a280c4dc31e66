# optionsdef/registry/base.py


import logging
from dataclasses import dataclass
from threading import RLock
from typing import Any, Iterator, Mapping

from asgiref.sync import sync_to_async

from ..components.records import ComponentRecord
from ..components.types import TYPE_ORDER, ComponentType, coerce_type
from ..diagnostics import Diagnostic, doing_it_wrong
from ..exceptions import (
    ComponentError,
    InvalidTypeError,
    MissingParentError,
    RegistryFrozenError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AddResult:
    """Outcome of :meth:`ComponentRegistry.add`.

    Truthy when the record was created.
    """

    ok: bool
    record: ComponentRecord | None = None
    error: ComponentError | None = None

    def __bool__(self) -> bool:
        return self.ok


class ComponentRegistry:
    """Five insertion-ordered component collections, one per :class:`ComponentType`.

    Collections are not deduplicated: registering the same slug twice keeps
    both records and both stay visible to queries.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict
        self._lock = RLock()
        self._collections: dict[ComponentType, list[ComponentRecord]] = {kind: [] for kind in TYPE_ORDER}
        self._snapshots: dict[ComponentType, tuple[ComponentRecord, ...]] | None = None
        self._diagnostics: list[Diagnostic] = []

    # --- registration ---

    def add(
        self,
        slug: str,
        type: Any,
        attrs: Mapping[str, Any] | None = None,
        parent: str = "",
        *,
        strict: bool | None = None,
    ) -> AddResult:
        """
        Register a component of the given type.

        An unknown type or a missing parent for a non-group component does not
        create a record. The problem is reported through the diagnostics
        channel and returned on the result; with ``strict`` enabled the error
        is raised instead.

        :param slug: Component slug. Uniqueness is not enforced.
        :param type: One of the five component type names (case-insensitive).
        :param attrs: Opaque attribute mapping, stored as-is.
        :param parent: Slug of the parent component; required unless ``type`` is ``group``.
        :param strict: Override the registry-wide ``strict`` flag for this call.
        :raises RegistryFrozenError: If the registry has been frozen.
        """
        strict = self.strict if strict is None else strict
        kind = coerce_type(type)

        if kind is None:
            return self._reject(
                InvalidTypeError(f"The type {type!r} is not a valid type for a component."),
                strict=strict,
            )
        if kind is not ComponentType.GROUP and not parent:
            return self._reject(
                MissingParentError(f"The {kind} {slug} was not provided a parent."),
                strict=strict,
            )

        record = ComponentRecord(
            slug=slug,
            type=kind,
            parent=parent or "",
            attrs=attrs if attrs is not None else {},
        )
        with self._lock:
            if self.frozen:
                raise RegistryFrozenError("Registry is frozen")
            self._collections[kind].append(record)
        logger.debug("Registered %s", record.label)
        return AddResult(ok=True, record=record)

    async def aadd(
        self,
        slug: str,
        type: Any,
        attrs: Mapping[str, Any] | None = None,
        parent: str = "",
        *,
        strict: bool | None = None,
    ) -> AddResult:
        """Async wrapper around `add`."""
        return await sync_to_async(self.add)(slug, type, attrs, parent, strict=strict)

    def _reject(self, error: ComponentError, *, strict: bool) -> AddResult:
        if strict:
            raise error
        diagnostic = doing_it_wrong(f"{type(self).__name__}.add", str(error), error=error, stacklevel=4)
        with self._lock:
            self._diagnostics.append(diagnostic)
        return AddResult(ok=False, error=error)

    def report(self, diagnostic: Diagnostic) -> None:
        """Keep a diagnostic raised elsewhere (populator, query engine) with this registry."""
        with self._lock:
            self._diagnostics.append(diagnostic)

    # --- retrieval ---

    def collection(self, type: Any) -> tuple[ComponentRecord, ...]:
        """
        Return the ordered records of one type.

        :raises InvalidTypeError: If ``type`` is not a component type.
        """
        kind = coerce_type(type)
        if kind is None:
            raise InvalidTypeError(f"The type {type!r} is not a valid type for a component.")
        with self._lock:
            if self._snapshots is not None:
                return self._snapshots[kind]
            return tuple(self._collections[kind])

    @property
    def groups(self) -> tuple[ComponentRecord, ...]:
        return self.collection(ComponentType.GROUP)

    @property
    def sets(self) -> tuple[ComponentRecord, ...]:
        return self.collection(ComponentType.SET)

    @property
    def members(self) -> tuple[ComponentRecord, ...]:
        return self.collection(ComponentType.MEMBER)

    @property
    def sections(self) -> tuple[ComponentRecord, ...]:
        return self.collection(ComponentType.SECTION)

    @property
    def fields(self) -> tuple[ComponentRecord, ...]:
        return self.collection(ComponentType.FIELD)

    def slugs(self, type: Any) -> tuple[str, ...]:
        return tuple(record.slug for record in self.collection(type))

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        with self._lock:
            return tuple(self._diagnostics)

    # --- counting ---

    def count(self, type: Any = None) -> int:
        """Count records of one type, or of all types when ``type`` is None."""
        if type is not None:
            return len(self.collection(type))
        return sum(len(self.collection(kind)) for kind in TYPE_ORDER)

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[ComponentRecord]:
        for kind in TYPE_ORDER:
            yield from self.collection(kind)

    # --- mutation / control ---

    @property
    def frozen(self) -> bool:
        return self._snapshots is not None

    def freeze(self) -> None:
        """
        Snapshot every collection into a tuple and reject further registrations.
        """
        with self._lock:
            if self._snapshots is None:
                self._snapshots = {kind: tuple(records) for kind, records in self._collections.items()}

    def clear(self) -> None:
        """
        Clear the registry if not frozen.
        """
        with self._lock:
            if self.frozen:
                raise RegistryFrozenError("Registry is frozen")
            for records in self._collections.values():
                records.clear()
            self._diagnostics.clear()


__all__ = ["AddResult", "ComponentRegistry"]
