"""Non-fatal developer diagnostics.

Misuse that the registry can recover from (an unknown component type, a
component without a parent) is reported here instead of aborting the caller.
Each report is:

- logged as a warning on this module's logger,
- emitted through :func:`warnings.warn` as a :class:`DoingItWrongWarning`,
- returned as a :class:`Diagnostic` so owners can keep an audit trail.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass

from .exceptions import DoingItWrongWarning, OptionsDefError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single developer-facing report."""

    where: str
    message: str
    error: OptionsDefError | None = None

    def __str__(self) -> str:
        return f"{self.where}: {self.message}"


def doing_it_wrong(
    where: str,
    message: str,
    *,
    error: OptionsDefError | None = None,
    stacklevel: int = 3,
) -> Diagnostic:
    diagnostic = Diagnostic(where=where, message=message, error=error)
    logger.warning("%s was called incorrectly. %s", where, message)
    warnings.warn(str(diagnostic), DoingItWrongWarning, stacklevel=stacklevel)
    return diagnostic


__all__ = ["Diagnostic", "doing_it_wrong"]
