from .defaults import DEFAULTS
from .models import OptionsSettings
from .settings import CONFIG_MODULE_ENVVAR, Settings

__all__ = ["CONFIG_MODULE_ENVVAR", "DEFAULTS", "OptionsSettings", "Settings"]
