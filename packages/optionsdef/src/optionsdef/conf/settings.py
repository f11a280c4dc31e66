"""Settings sources for an :class:`OptionsApp`.

Values are looked up in the overrides first, then in :data:`DEFAULTS`. Only
names that :data:`DEFAULTS` knows are accepted from a mapping; anything else
is reported as a diagnostic and dropped, so a misspelt ``DEFAULT_GROUP`` does
not silently leave the default groups in place. Modules are read for known
names only, since they usually hold unrelated constants too.
"""

from __future__ import annotations

import importlib
import logging
import os
from typing import Any, Mapping

from ..diagnostics import doing_it_wrong
from .defaults import DEFAULTS
from .models import OptionsSettings

logger = logging.getLogger(__name__)

CONFIG_MODULE_ENVVAR = "OPTIONSDEF_CONFIG_MODULE"


class Settings:
    def __init__(self, overrides: Mapping[str, Any] | None = None) -> None:
        self._overrides: dict[str, Any] = {}
        self.sources: list[str] = []
        if overrides:
            self.update(overrides, source="init")

    def __getitem__(self, key: str) -> Any:
        if key in self._overrides:
            return self._overrides[key]
        return DEFAULTS[key]

    def __contains__(self, key: object) -> bool:
        return key in DEFAULTS

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def update(self, values: Mapping[str, Any], *, source: str = "mapping") -> list[str]:
        """Apply known settings from ``values``. Returns the names that were applied."""
        applied: list[str] = []
        for key, value in values.items():
            if key not in DEFAULTS:
                doing_it_wrong("Settings.update", f"Unknown setting {key!r} from {source} was ignored.")
                continue
            self._overrides[key] = value
            applied.append(key)
        if applied:
            self.sources.append(source)
            logger.debug("Applied %s from %s", ", ".join(applied), source)
        return applied

    def update_from_module(self, name: str) -> list[str]:
        module = importlib.import_module(name)
        return self.update({k: v for k, v in vars(module).items() if k in DEFAULTS}, source=name)

    def update_from_envvar(self, envvar: str = CONFIG_MODULE_ENVVAR) -> list[str]:
        name = os.environ.get(envvar)
        if not name:
            return []
        return self.update_from_module(name)

    def reset(self, key: str) -> None:
        """Drop an override so the default applies again."""
        self._overrides.pop(key, None)

    def overrides(self) -> dict[str, Any]:
        return dict(self._overrides)

    def resolve(self) -> OptionsSettings:
        """Validate defaults plus overrides into an :class:`OptionsSettings`."""
        return OptionsSettings.model_validate({**DEFAULTS, **self._overrides})
