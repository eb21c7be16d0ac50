"""Unit tests for constrained template selection."""

from __future__ import annotations

from collections import Counter

import pytest

from pytheater.errors import InvalidLimitsError
from pytheater.regions.catalog import TemplateCatalog
from pytheater.regions.randomizer import Randomizer
from pytheater.regions.selector import SpawnLimits, TemplateSelector


def _catalog(make_template, names, **kwargs) -> TemplateCatalog:
    catalog = TemplateCatalog()
    for name in names:
        catalog.add(make_template(name, **kwargs))
    return catalog


def _select(catalog: TemplateCatalog, limits, seed=0, objtype="sam"):
    selector = TemplateSelector(catalog.exclusions, catalog.get, randomizer=Randomizer(seed))
    spawned = []
    result = selector.select(objtype, catalog.candidates(objtype), limits, spawned.append)
    return result, spawned


@pytest.mark.parametrize("data", [
    {"min": -1, "max": 2},
    {"min": 3, "max": 2},
    {"min": 1.5, "max": 2},
    {"min": 1},
])
def test_invalid_limits_rejected(data):
    with pytest.raises(InvalidLimitsError):
        SpawnLimits.from_dict(data)


@pytest.mark.parametrize("k", [0, 1, 3, 5])
def test_fixed_limit_spawns_exactly_k_distinct(make_template, k):
    catalog = _catalog(make_template, [f"sam{i}" for i in range(5)])
    result, spawned = _select(catalog, SpawnLimits(k, k))
    assert result.limit == k
    assert len(spawned) == k
    assert len(set(spawned)) == k


def test_limit_larger_than_candidates_stops_when_exhausted(make_template):
    catalog = _catalog(make_template, ["a", "b"])
    result, spawned = _select(catalog, SpawnLimits(5, 5))
    assert sorted(spawned) == ["a", "b"]
    assert result.current == 2


def test_no_limits_spawns_everything(make_template):
    catalog = _catalog(make_template, ["a", "b", "c"])
    _, spawned = _select(catalog, None)
    assert sorted(spawned) == ["a", "b", "c"]


def test_empty_candidates_is_empty_result(make_template):
    catalog = TemplateCatalog()
    result, spawned = _select(catalog, SpawnLimits(1, 3))
    assert spawned == []
    assert result.spawned == []


def test_spawn_always_template_always_spawns(make_template):
    catalog = _catalog(make_template, ["a", "b", "c", "d"])
    catalog.add(make_template("forced", spawn_always=True))
    for seed in range(25):
        result, spawned = _select(catalog, SpawnLimits(0, 1), seed=seed)
        assert "forced" in spawned
        assert result.forced == ["forced"]
        # forced spawn already meets a limit of at most one
        assert result.selected == []


def test_forced_spawns_may_exceed_limit(make_template):
    catalog = _catalog(make_template, ["f1", "f2", "f3"], spawn_always=True)
    result, spawned = _select(catalog, SpawnLimits(1, 1))
    assert sorted(spawned) == ["f1", "f2", "f3"]
    assert result.current == 3


def test_candidates_not_mutated(make_template):
    catalog = _catalog(make_template, ["a", "b", "c"])
    candidates = catalog.candidates("sam")
    before = list(candidates)
    selector = TemplateSelector(catalog.exclusions, catalog.get, randomizer=Randomizer(3))
    selector.select("sam", candidates, SpawnLimits(2, 2), lambda name: None)
    assert candidates == before


def test_exclusion_group_spawns_one_member_uniformly(make_template):
    catalog = _catalog(make_template, ["x", "y", "z"], exclusion="grp")
    counts = Counter()
    runs = 3000
    for seed in range(runs):
        _, spawned = _select(catalog, SpawnLimits(3, 3), seed=seed)
        assert len(spawned) == 1
        assert spawned[0] in {"x", "y", "z"}
        counts[spawned[0]] += 1

    for name in ("x", "y", "z"):
        assert abs(counts[name] / runs - 1 / 3) < 0.05


def test_exclusion_members_are_never_forced(make_template):
    catalog = _catalog(make_template, ["x", "y"], exclusion="grp", spawn_always=True)
    result, spawned = _select(catalog, SpawnLimits(0, 0))
    assert spawned == []
    assert result.forced == []


def test_same_seed_same_selection(make_template):
    catalog = _catalog(make_template, [f"sam{i}" for i in range(10)])
    _, first = _select(catalog, SpawnLimits(2, 6), seed=42)
    _, second = _select(catalog, SpawnLimits(2, 6), seed=42)
    assert first == second


def test_randomizer_bounds():
    rng = Randomizer(7)
    with pytest.raises(ValueError):
        rng.randint(3, 2)
    with pytest.raises(ValueError):
        rng.index(0)
    assert all(0 <= rng.index(4) < 4 for _ in range(100))
