import pytest

from optionsdef import OptionsApp
from optionsdef.conf.settings import CONFIG_MODULE_ENVVAR
from optionsdef.hooks import clear_shared_hooks
from optionsdef.registry import ComponentRegistry


@pytest.fixture(autouse=True)
def _isolate_hooks_and_env(monkeypatch):
    monkeypatch.delenv(CONFIG_MODULE_ENVVAR, raising=False)
    clear_shared_hooks()
    yield
    clear_shared_hooks()


@pytest.fixture
def app():
    return OptionsApp("tests")


@pytest.fixture
def registry():
    return ComponentRegistry()


@pytest.fixture
def chain_registry():
    """group g1 -> set st1 -> member m1 -> section sec1 -> field fl1, plus a sibling g2 branch."""
    reg = ComponentRegistry()
    reg.add("g1", "group")
    reg.add("st1", "set", {}, "g1")
    reg.add("m1", "member", {}, "st1")
    reg.add("sec1", "section", {}, "m1")
    reg.add("fl1", "field", {"label": "First"}, "sec1")

    reg.add("g2", "group")
    reg.add("st2", "set", {}, "g2")
    reg.add("m2", "member", {}, "st2")
    reg.add("sec2", "section", {}, "m2")
    reg.add("fl2", "field", {}, "sec2")
    return reg
