"""Default configuration values for optionsdef."""

DEFAULTS: dict[str, object] = {
    # Group slugs seeded into the description before filters run
    "DEFAULT_GROUPS": (
        "dashboard",
        "posts",
        "media",
        "links",
        "pages",
        "comments",
        "theme",
        "plugins",
        "users",
        "management",
        "options",
    ),
    # Raise component errors instead of reporting them
    "STRICT": False,
    "FREEZE_ON_POPULATE": True,
    # Modules imported before population so their shared hooks connect
    "HOOK_MODULES": (),
    "FIXUPS": (),
    # Query defaults
    "DEFAULT_QUERY_TYPE": "field",
    "DEFAULT_QUERY_PARENT_TYPE": "section",
}
