import sys
import types

import pytest
from pydantic import ValidationError

from optionsdef import ComponentType, DoingItWrongWarning, OptionsApp
from optionsdef.conf import OptionsSettings, Settings
from optionsdef.hooks import import_hook_modules, shared_registration_callbacks


def test_settings_layers_over_defaults():
    settings = Settings({"STRICT": True})

    assert settings["STRICT"] is True
    assert settings["FREEZE_ON_POPULATE"] is True
    assert settings.overrides() == {"STRICT": True}

    settings.reset("STRICT")
    assert settings["STRICT"] is False
    assert settings.get("NOT_A_SETTING", "fallback") == "fallback"


def test_unknown_setting_is_reported_and_ignored():
    settings = Settings()

    with pytest.warns(DoingItWrongWarning, match="DEFAULT_GROUP"):
        applied = settings.update({"DEFAULT_GROUP": ("options",), "STRICT": True}, source="test")

    assert applied == ["STRICT"]
    assert "DEFAULT_GROUP" not in settings
    assert settings.sources == ["test"]


def test_settings_update_from_module_and_envvar(monkeypatch):
    module = types.ModuleType("temp_conf")
    module.DEFAULT_GROUPS = ("options",)
    module.helper_constant = 3
    module.UNRELATED = "ignored"
    monkeypatch.setitem(sys.modules, "temp_conf", module)

    settings = Settings()
    assert settings.update_from_module("temp_conf") == ["DEFAULT_GROUPS"]
    assert settings["DEFAULT_GROUPS"] == ("options",)

    env_module = types.ModuleType("env_conf")
    env_module.HOOK_MODULES = ("env_hooks",)
    monkeypatch.setitem(sys.modules, "env_conf", env_module)

    assert settings.update_from_envvar() == []

    monkeypatch.setenv("OPTIONSDEF_CONFIG_MODULE", "env_conf")
    settings.update_from_envvar()
    assert settings["HOOK_MODULES"] == ("env_hooks",)
    assert settings.sources == ["temp_conf", "env_conf"]


def test_resolve_validates_overrides():
    settings = Settings({"DEFAULT_QUERY_TYPE": " Member ", "DEFAULT_GROUPS": ("a", "b")})

    resolved = settings.resolve()
    assert resolved.DEFAULT_GROUPS == ["a", "b"]
    assert resolved.DEFAULT_QUERY_TYPE is ComponentType.MEMBER

    settings.update({"DEFAULT_QUERY_PARENT_TYPE": "bogus"})
    with pytest.raises(ValidationError):
        settings.resolve()


def test_app_reads_envvar_module(monkeypatch):
    env_module = types.ModuleType("app_env_conf")
    env_module.DEFAULT_GROUPS = ("theme", "options")
    monkeypatch.setitem(sys.modules, "app_env_conf", env_module)
    monkeypatch.setenv("OPTIONSDEF_CONFIG_MODULE", "app_env_conf")

    app = OptionsApp("env").populate()

    assert app.registry.slugs("group") == ("theme", "options")


def test_options_settings_validation():
    settings = OptionsSettings.model_validate({"DEFAULT_GROUPS": ("a", "b"), "EXTRA": 1})

    assert settings.DEFAULT_GROUPS == ["a", "b"]
    assert settings.DEFAULT_QUERY_TYPE is ComponentType.FIELD
    assert settings.DEFAULT_QUERY_PARENT_TYPE is ComponentType.SECTION

    with pytest.raises(ValidationError):
        OptionsSettings.model_validate({"DEFAULT_QUERY_TYPE": "bogus"})


def test_configure_updates_registry_strictness(app):
    app.configure({"STRICT": True})

    assert app.settings.STRICT is True
    assert app.registry.strict is True


def test_import_hook_modules_connects_shared_hooks(tmp_path, monkeypatch):
    module_name = "optionsdef_hook_module"
    (tmp_path / f"{module_name}.py").write_text(
        "from optionsdef.hooks import on_populate\n"
        "\n"
        "@on_populate\n"
        "def register(registry):\n"
        "    pass\n"
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    try:
        imported = import_hook_modules([module_name, "", module_name])
    finally:
        sys.modules.pop(module_name, None)

    assert imported == [module_name]
    assert [callback.__name__ for callback in shared_registration_callbacks()] == ["register"]


def test_import_hook_modules_propagates_import_errors():
    with pytest.raises(ModuleNotFoundError):
        import_hook_modules(["optionsdef_missing_hooks_module"])


def test_app_imports_hooks_once(app, monkeypatch):
    imported = []

    def fake_import(modules):
        imported.append(list(modules))
        return list(modules)

    monkeypatch.setattr("optionsdef.app.import_hook_modules", fake_import)
    app.configure({"HOOK_MODULES": ["first", "second"]})

    assert app.import_hooks() == ["first", "second"]
    assert app.import_hooks() == []
    assert imported == [["first", "second"]]
