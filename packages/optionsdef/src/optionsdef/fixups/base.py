"""Fixup interfaces and the population report fixup."""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable

from ..components.types import TYPE_ORDER


class FixupStage(Enum):
    """Lifecycle checkpoints that fixups can observe."""

    CONFIGURE = auto()
    POPULATE_PRE = auto()
    POPULATE_POST = auto()
    POPULATE_FAILED = auto()


@runtime_checkable
class Fixup(Protocol):
    """A callable hook invoked at lifecycle checkpoints."""

    def apply(self, stage: FixupStage, app: Any, **context: Any) -> Any:
        ...


def population_summary(registry: Any) -> str:
    """``"groups=11, sets=2, members=0, sections=0, fields=0"`` for a registry."""
    return ", ".join(f"{kind.value}s={registry.count(kind)}" for kind in TYPE_ORDER)


class LoggingFixup:
    """Report what population produced.

    After a successful populate the per-type counts are logged, followed by one
    warning per diagnostic the registry collected. A failed populate is logged
    as an error with the exception that aborted it.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def apply(self, stage: FixupStage, app: Any, **context: Any) -> str | None:
        registry = app.registry
        if stage is FixupStage.POPULATE_POST:
            summary = population_summary(registry)
            self.logger.info("[%s] populated %d component(s): %s", app.name, registry.count(), summary)
            for diagnostic in registry.diagnostics:
                self.logger.warning("[%s] %s", app.name, diagnostic)
            return summary
        if stage is FixupStage.POPULATE_FAILED:
            self.logger.error("[%s] population failed: %s", app.name, context.get("error"))
            return None
        self.logger.debug("[%s] %s", app.name, stage.name)
        return None


__all__ = ["Fixup", "FixupStage", "LoggingFixup", "population_summary"]
