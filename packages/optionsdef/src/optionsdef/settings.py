# optionsdef/settings.py
"""
User-level override settings for optionsdef.

Loaded by every :class:`optionsdef.OptionsApp` before the module named by
``OPTIONSDEF_CONFIG_MODULE``. Define uppercase constants here to override
``optionsdef.conf.defaults.DEFAULTS``, for example::

    DEFAULT_GROUPS = ("options", "theme")
    STRICT = True
"""
