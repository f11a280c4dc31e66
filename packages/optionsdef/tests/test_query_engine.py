import asyncio

import pytest

from optionsdef import DoingItWrongWarning, QueryArgs, QueryEngine
from optionsdef.registry import ComponentRegistry


def _slugs(records):
    return [record.slug for record in records]


@pytest.fixture
def section_registry():
    reg = ComponentRegistry()
    reg.add("s1", "section", {}, "m1")
    reg.add("s2", "section", {}, "m1")
    reg.add("f1", "field", {}, "s1")
    reg.add("f3", "field", {}, "s2")
    reg.add("f2", "field", {}, "s1")
    return reg


def test_defaults_query_all_fields(section_registry):
    engine = QueryEngine(section_registry)

    assert _slugs(engine.query()) == ["f1", "f3", "f2"]


def test_direct_parent_query_keeps_insertion_order(section_registry):
    engine = QueryEngine(section_registry)

    results = engine.query(type="field", parent_type="section", parent_slug="s1")

    assert _slugs(results) == ["f1", "f2"]


def test_slug_filter_accepts_scalar_or_collection(section_registry):
    engine = QueryEngine(section_registry)

    assert _slugs(engine.query(slug="f3")) == ["f3"]
    assert _slugs(engine.query(slug={"f2", "f1"})) == ["f1", "f2"]
    assert _slugs(engine.query(slug=["f1", "missing"])) == ["f1"]
    assert engine.query(slug="missing") == []


def test_slug_and_parent_filters_combine(section_registry):
    engine = QueryEngine(section_registry)

    assert _slugs(engine.query(slug=["f1", "f3"], parent_slug="s1")) == ["f1"]


def test_empty_slug_means_no_filter(section_registry):
    engine = QueryEngine(section_registry)

    assert len(engine.query(slug="", parent_slug=[])) == 3
    assert len(engine.query(slug=None)) == 3


def test_multi_level_ancestry_query(chain_registry):
    engine = QueryEngine(chain_registry)

    assert _slugs(engine.query(type="field", parent_type="group", parent_slug="g1")) == ["fl1"]
    assert engine.query(type="field", parent_type="group", parent_slug="nope") == []


@pytest.mark.parametrize(
    "target, ancestor, expected",
    [
        ("field", "set", ["fl1"]),
        ("field", "member", ["fl1"]),
        ("section", "group", ["sec1"]),
        ("member", "group", ["m1"]),
        ("set", "group", ["st1"]),
    ],
)
def test_every_ancestor_distance_resolves(chain_registry, target, ancestor, expected):
    engine = QueryEngine(chain_registry)
    ancestor_slug = {"group": "g1", "set": "st1", "member": "m1"}[ancestor]

    results = engine.query(type=target, parent_type=ancestor, parent_slug=ancestor_slug)

    assert _slugs(results) == expected


def test_ancestry_query_across_several_ancestors(chain_registry):
    engine = QueryEngine(chain_registry)

    results = engine.query(type="field", parent_type="group", parent_slug=["g2", "g1"])

    assert _slugs(results) == ["fl1", "fl2"]


def test_ancestry_is_resolved_by_slug(chain_registry):
    # A second "st1" under g2 shares its slug with g1's set, so fields under it
    # are reachable from g1 as well.
    chain_registry.add("st1", "set", {}, "g2")
    chain_registry.add("m3", "member", {}, "st1")
    chain_registry.add("sec3", "section", {}, "m3")
    chain_registry.add("fl3", "field", {}, "sec3")
    engine = QueryEngine(chain_registry)

    results = engine.query(type="field", parent_type="group", parent_slug="g1")

    assert _slugs(results) == ["fl1", "fl3"]


def test_duplicate_slugs_are_independently_queryable(registry):
    registry.add("color", "field", {"where": "header"}, "header")
    registry.add("color", "field", {"where": "footer"}, "footer")
    engine = QueryEngine(registry)

    assert len(engine.query(slug="color")) == 2
    assert engine.query(slug="color", parent_slug="footer", single=True).attrs == {"where": "footer"}


def test_parent_filter_ignored_for_groups(chain_registry):
    engine = QueryEngine(chain_registry)

    results = engine.query(type="group", parent_type="group", parent_slug="g1")

    assert _slugs(results) == ["g1", "g2"]


def test_ancestor_at_or_below_target_matches_nothing(chain_registry):
    engine = QueryEngine(chain_registry)

    assert engine.query(type="section", parent_type="field", parent_slug="fl1") == []
    assert engine.query(type="section", parent_type="section", parent_slug="sec1") == []


def test_single_mode(chain_registry):
    engine = QueryEngine(chain_registry)

    first = engine.query(type="group", single=True)
    missing = engine.query(type="field", slug="nope", single=True)

    assert first.slug == "g1"
    assert missing is None


def test_invalid_target_type_returns_sentinel(chain_registry):
    engine = QueryEngine(chain_registry)

    with pytest.warns(DoingItWrongWarning, match="bogus"):
        assert engine.query(type="bogus") == []
    with pytest.warns(DoingItWrongWarning):
        assert engine.query(type="bogus", single=True) is None

    assert len(chain_registry.diagnostics) == 2


def test_invalid_parent_type_only_checked_when_filtering(chain_registry):
    engine = QueryEngine(chain_registry)

    assert _slugs(engine.query(parent_type="bogus")) == ["fl1", "fl2"]

    with pytest.warns(DoingItWrongWarning):
        assert engine.query(parent_type="bogus", parent_slug="sec1") == []


def test_invalid_parent_type_reported_when_slug_matches_nothing(chain_registry):
    engine = QueryEngine(chain_registry)

    with pytest.warns(DoingItWrongWarning, match="bogus"):
        assert engine.query(slug="missing", parent_type="bogus", parent_slug="x") == []
    with pytest.warns(DoingItWrongWarning):
        assert engine.query(slug="missing", parent_type="bogus", parent_slug="x", single=True) is None

    assert len(chain_registry.diagnostics) == 2


def test_attrs_round_trip(registry):
    attrs = {"type": "checkbox", "default": False, "nested": {"k": [1, 2]}}
    registry.add("remember", "field", attrs, "login")
    engine = QueryEngine(registry)

    assert engine.query(slug="remember", single=True).attrs is attrs


def test_query_args_mapping_and_keywords(section_registry):
    engine = QueryEngine(section_registry)

    results = engine.query({"parent_slug": "s2"}, slug=("f3",))

    assert _slugs(results) == ["f3"]
    assert _slugs(engine.query(QueryArgs(parent_slug="s1"))) == ["f1", "f2"]


def test_query_args_normalization():
    args = QueryArgs.parse(slug="a", parent_slug=["b", "c"])

    assert args.slug == ("a",)
    assert args.parent_slug == ("b", "c")
    assert args.type == "field"
    assert args.parent_type == "section"
    assert QueryArgs.parse({"slug": ""}).slug == ()


def test_engine_defaults_are_configurable(chain_registry):
    engine = QueryEngine(chain_registry, default_type="section", default_parent_type="member")

    assert _slugs(engine.query(parent_slug="m2")) == ["sec2"]


def test_aquery(chain_registry):
    engine = QueryEngine(chain_registry)

    results = asyncio.run(engine.aquery(type="set", parent_type="group", parent_slug="g2"))

    assert _slugs(results) == ["st2"]
