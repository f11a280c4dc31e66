# optionsdef/exceptions.py
"""Exception hierarchy for optionsdef."""


class OptionsDefError(Exception): ...


# ----------------------------------------------------------------------------
# Component errors
# ----------------------------------------------------------------------------
class ComponentError(OptionsDefError): ...


class InvalidTypeError(ComponentError, ValueError):
    """Raised (strict mode) or reported when a type is not one of the five component types."""


class MissingParentError(ComponentError, ValueError):
    """Raised (strict mode) or reported when a non-group component has no parent slug."""


# ----------------------------------------------------------------------------
# Registry errors
# ----------------------------------------------------------------------------
class RegistryError(OptionsDefError): ...


class RegistryFrozenError(RuntimeError, RegistryError): ...


# ----------------------------------------------------------------------------
# Warnings
# ----------------------------------------------------------------------------
class DoingItWrongWarning(UserWarning):
    """Developer-facing warning for recoverable misuse of the registry or query API."""


__all__ = [
    "OptionsDefError",
    "ComponentError",
    "InvalidTypeError",
    "MissingParentError",
    "RegistryError",
    "RegistryFrozenError",
    "DoingItWrongWarning",
]
