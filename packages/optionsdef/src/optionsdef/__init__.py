"""
optionsdef: a five-level registry of configuration components.

Components are arranged as ``group -> set -> member -> section -> field`` and
are registered either from a nested description (through description
filters) or directly (through registration callbacks). Once populated, the
registry answers slug and ancestry queries at any depth::

    from optionsdef import OptionsApp

    app = OptionsApp()

    @app.add_description_filter
    def describe(description):
        description["options"]["sets"]["general"] = {...}
        return description

    app.populate()
    app.query(type="field", parent_type="group", parent_slug="options")
"""

from .app import OptionsApp
from .components import ComponentRecord, ComponentType, TYPE_ORDER
from .exceptions import (
    ComponentError,
    DoingItWrongWarning,
    InvalidTypeError,
    MissingParentError,
    OptionsDefError,
    RegistryFrozenError,
)
from .query import QueryArgs, QueryEngine
from .registry import AddResult, ComponentRegistry

__all__ = [
    "AddResult",
    "ComponentError",
    "ComponentRecord",
    "ComponentRegistry",
    "ComponentType",
    "DoingItWrongWarning",
    "InvalidTypeError",
    "MissingParentError",
    "OptionsApp",
    "OptionsDefError",
    "QueryArgs",
    "QueryEngine",
    "RegistryFrozenError",
    "TYPE_ORDER",
]
