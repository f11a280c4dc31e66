# optionsdef/conf/models.py

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..components.types import ComponentType


class OptionsSettings(BaseModel):
    model_config = ConfigDict(extra="allow")

    # Population
    DEFAULT_GROUPS: list[str] = Field(default_factory=list)
    STRICT: bool = False
    FREEZE_ON_POPULATE: bool = True

    # Hooks / lifecycle
    HOOK_MODULES: list[str] = Field(default_factory=list)
    FIXUPS: list[object] = Field(default_factory=list)

    # Query
    DEFAULT_QUERY_TYPE: ComponentType = ComponentType.FIELD
    DEFAULT_QUERY_PARENT_TYPE: ComponentType = ComponentType.SECTION

    @field_validator("DEFAULT_QUERY_TYPE", "DEFAULT_QUERY_PARENT_TYPE", mode="before")
    @classmethod
    def _lower_type(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value
