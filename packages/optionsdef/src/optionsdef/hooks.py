"""Shared hooks that collaborator code can connect before an app exists.

Two channels feed population:

- description filters receive the nested description and return the
  (possibly modified) description to walk;
- registration callbacks receive the registry once the description has been
  walked, and may call ``registry.add`` directly.

Hooks connected here apply to every app. Per-app hooks are attached with
:meth:`OptionsApp.add_description_filter` and
:meth:`OptionsApp.add_registration_callback`; shared hooks run first.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Callable, Iterable, MutableMapping

logger = logging.getLogger(__name__)

Description = MutableMapping[str, Any]
DescriptionFilter = Callable[[Description], Description]
RegistrationCallback = Callable[[Any], None]

_description_filters: list[DescriptionFilter] = []
_registration_callbacks: list[RegistrationCallback] = []


def connect_description_filter(callback: DescriptionFilter) -> DescriptionFilter:
    _description_filters.append(callback)
    return callback


def connect_registration_callback(callback: RegistrationCallback) -> RegistrationCallback:
    _registration_callbacks.append(callback)
    return callback


def shared_description_filters() -> tuple[DescriptionFilter, ...]:
    return tuple(_description_filters)


def shared_registration_callbacks() -> tuple[RegistrationCallback, ...]:
    return tuple(_registration_callbacks)


def clear_shared_hooks() -> None:
    _description_filters.clear()
    _registration_callbacks.clear()


def import_hook_modules(modules: Iterable[str]) -> list[str]:
    """Import each module once, in order, so its shared hooks connect.

    Returns the module names that were imported. Import errors propagate.
    """
    imported: list[str] = []
    for module in modules:
        if not module or module in imported:
            continue
        filters, callbacks = len(_description_filters), len(_registration_callbacks)
        importlib.import_module(module)
        logger.debug(
            "Imported %s: %d description filter(s), %d registration callback(s) connected",
            module,
            len(_description_filters) - filters,
            len(_registration_callbacks) - callbacks,
        )
        imported.append(module)
    return imported


# Decorator aliases ---------------------------------------------------
description_filter = connect_description_filter
on_populate = connect_registration_callback


__all__ = [
    "Description",
    "DescriptionFilter",
    "RegistrationCallback",
    "clear_shared_hooks",
    "connect_description_filter",
    "connect_registration_callback",
    "description_filter",
    "import_hook_modules",
    "on_populate",
    "shared_description_filters",
    "shared_registration_callbacks",
]
