# optionsdef/app.py
"""The optionsdef application object.

The app owns one :class:`ComponentRegistry` and runs a predictable lifecycle:

1. ``configure``     -> apply settings from mappings, modules or the env var
2. ``import_hooks``  -> import ``HOOK_MODULES`` so their shared hooks connect
3. ``populate``      -> seed default groups, run description filters, walk the
                        description, run registration callbacks, freeze
4. ``query``         -> read the populated registry

``populate`` succeeds at most once per app; later calls are no-ops. A
populate that raises leaves the registry empty so it can be retried.
"""
from __future__ import annotations

import importlib
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from threading import RLock
from typing import Any

from asgiref.sync import sync_to_async

from .components.types import TYPE_ORDER
from .conf.models import OptionsSettings
from .conf.settings import CONFIG_MODULE_ENVVAR, Settings
from .diagnostics import doing_it_wrong
from .fixups.base import Fixup, FixupStage
from .hooks import (
    Description,
    DescriptionFilter,
    RegistrationCallback,
    import_hook_modules,
    shared_description_filters,
    shared_registration_callbacks,
)
from .populator import seed_description, walk_description
from .query.engine import QueryEngine
from .registry.base import AddResult, ComponentRegistry


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _import_string(path: str):
    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, _, attr = path.rpartition(".")
    module = importlib.import_module(module_name)
    return getattr(module, attr) if attr else module


def _fixup_key(spec: object) -> object:
    try:
        hash(spec)
    except TypeError:
        return id(spec)
    return spec


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

@dataclass
class OptionsApp:
    name: str = "optionsdef"
    conf: Settings = field(default_factory=Settings)
    fixups: list[Fixup] = field(default_factory=list)
    registry: ComponentRegistry = field(default_factory=ComponentRegistry)

    initialized: bool = False
    _settings: OptionsSettings | None = field(default=None, repr=False)
    _engine: QueryEngine | None = field(default=None, repr=False)
    _hooks_imported: bool = False
    _populating: bool = False
    _description_filters: list[DescriptionFilter] = field(default_factory=list, repr=False)
    _registration_callbacks: list[RegistrationCallback] = field(default_factory=list, repr=False)
    _fixups_by_spec: dict[object, Fixup] = field(default_factory=dict, init=False, repr=False)
    _populate_lock: RLock = field(default_factory=RLock, init=False, repr=False)

    def __post_init__(self) -> None:
        specs, self.fixups = list(self.fixups), []
        for spec in specs:
            self.add_fixup(spec)

        self.conf.update_from_module("optionsdef.settings")
        self.conf.update_from_envvar()

    # ------------------------------------------------------------------
    # Configuration helpers
    # ------------------------------------------------------------------
    def configure(self, mapping: Mapping[str, Any] | None = None) -> OptionsApp:
        """Apply ``mapping`` and rebuild everything derived from settings."""
        if mapping:
            self.conf.update(mapping, source="configure")

        self._settings = self.conf.resolve()
        self.registry.strict = self._settings.STRICT
        self._engine = None
        for spec in self._settings.FIXUPS:
            self.add_fixup(spec)
        self.apply_fixups(FixupStage.CONFIGURE)
        return self

    def config_from_object(self, name: str) -> OptionsApp:
        self.conf.update_from_module(name)
        return self.configure()

    def config_from_envvar(self, envvar: str = CONFIG_MODULE_ENVVAR) -> OptionsApp:
        self.conf.update_from_envvar(envvar)
        return self.configure()

    @property
    def settings(self) -> OptionsSettings:
        if self._settings is None:
            self.configure()
        return self._settings

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------
    def add_description_filter(self, callback: DescriptionFilter) -> DescriptionFilter:
        self._description_filters.append(callback)
        return callback

    def add_registration_callback(self, callback: RegistrationCallback) -> RegistrationCallback:
        self._registration_callbacks.append(callback)
        return callback

    def description_filters(self) -> tuple[DescriptionFilter, ...]:
        return shared_description_filters() + tuple(self._description_filters)

    def registration_callbacks(self) -> tuple[RegistrationCallback, ...]:
        return shared_registration_callbacks() + tuple(self._registration_callbacks)

    def import_hooks(self) -> list[str]:
        """Import ``HOOK_MODULES`` once. Returns the modules imported by this call."""
        if self._hooks_imported:
            return []
        imported = import_hook_modules(self.settings.HOOK_MODULES)
        self._hooks_imported = True
        return imported

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def build_description(self) -> Description:
        """Seed the default groups and pass the description through every filter."""
        description = seed_description(self.settings.DEFAULT_GROUPS)
        for callback in self.description_filters():
            filtered = callback(description)
            if not isinstance(filtered, Mapping):
                self.registry.report(
                    doing_it_wrong(
                        f"{type(self).__name__}.build_description",
                        f"Description filter {callback!r} returned {type(filtered).__name__}; "
                        "its result was ignored.",
                    )
                )
                continue
            description = filtered
        return description

    def populate(self) -> OptionsApp:
        with self._populate_lock:
            if self.initialized or self._populating:
                return self
            self._populating = True
            try:
                self.import_hooks()
                self.apply_fixups(FixupStage.POPULATE_PRE)

                walk_description(self.registry, self.build_description())
                for callback in self.registration_callbacks():
                    callback(self.registry)
            except Exception as exc:
                if not self.registry.frozen:
                    self.registry.clear()
                self.apply_fixups(FixupStage.POPULATE_FAILED, error=exc)
                raise
            finally:
                self._populating = False

            self.initialized = True
            if self.settings.FREEZE_ON_POPULATE:
                self.registry.freeze()
            self.apply_fixups(FixupStage.POPULATE_POST)
        return self

    async def apopulate(self) -> OptionsApp:
        """Async wrapper around `populate`."""
        return await sync_to_async(self.populate)()

    # ------------------------------------------------------------------
    # Registry access
    # ------------------------------------------------------------------
    def add(
        self,
        slug: str,
        type: Any,
        attrs: Mapping[str, Any] | None = None,
        parent: str = "",
        *,
        strict: bool | None = None,
    ) -> AddResult:
        return self.registry.add(slug, type, attrs, parent, strict=strict)

    @property
    def engine(self) -> QueryEngine:
        if self._engine is None:
            settings = self.settings
            self._engine = QueryEngine(
                self.registry,
                default_type=settings.DEFAULT_QUERY_TYPE.value,
                default_parent_type=settings.DEFAULT_QUERY_PARENT_TYPE.value,
            )
        return self._engine

    def query(self, args: Mapping[str, Any] | None = None, single: bool = False, **options: Any):
        return self.engine.query(args, single, **options)

    async def aquery(self, args: Mapping[str, Any] | None = None, single: bool = False, **options: Any):
        return await self.engine.aquery(args, single, **options)

    # ------------------------------------------------------------------
    # Presentation helpers
    # ------------------------------------------------------------------
    def component_report_text(self) -> str:
        lines = ["Registered components:"]
        for kind in TYPE_ORDER:
            slugs = self.registry.slugs(kind)
            lines.append(f"- {kind.value}s: {', '.join(slugs) if slugs else '<none>'}")
        return "\n".join(lines) + "\n"

    def print_component_report(self, file=None) -> None:
        if file is None:
            file = sys.stdout
        print(self.component_report_text(), file=file)

    # ------------------------------------------------------------------
    # Fixup helpers
    # ------------------------------------------------------------------
    def add_fixup(self, spec: object) -> Fixup:
        """Resolve ``spec`` to a fixup once; adding the same spec again returns that fixup."""
        key = _fixup_key(spec)
        fixup = self._fixups_by_spec.get(key)
        if fixup is None:
            fixup = self._resolve_fixup(spec)
            self._fixups_by_spec[key] = fixup
            self.fixups.append(fixup)
        return fixup

    def apply_fixups(self, stage: FixupStage, **context: Any) -> list[Any]:
        results: list[Any] = []
        for fixup in self.fixups:
            result = fixup.apply(stage, self, **context)
            if result is not None:
                results.append(result)
        return results

    def _resolve_fixup(self, spec: object) -> Fixup:
        obj = _import_string(spec) if isinstance(spec, str) else spec
        if isinstance(obj, type):
            obj = obj()
        if isinstance(obj, Fixup):
            return obj
        raise TypeError(f"Fixup {spec!r} did not resolve to a Fixup")


__all__ = ["OptionsApp"]
