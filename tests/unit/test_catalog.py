"""Unit tests for the template registry, exclusion index and stage queue."""

from __future__ import annotations

import pytest

from pytheater.errors import DuplicateTemplateError, ExclusionTypeMismatchError
from pytheater.regions.catalog import (
    CandidateEntry,
    CandidateKind,
    ExclusionIndex,
    StageQueue,
    TemplateCatalog,
)


def test_registry_holds_every_distinct_template(make_template):
    catalog = TemplateCatalog()
    for i in range(7):
        catalog.add(make_template(f"sam{i}"))
    assert len(catalog) == 7
    assert len(catalog.candidates("sam")) == 7


def test_duplicate_name_raises(make_template):
    catalog = TemplateCatalog()
    catalog.add(make_template("sa6"))
    with pytest.raises(DuplicateTemplateError):
        catalog.add(make_template("sa6", objtype="ewr"))
    assert len(catalog) == 1


def test_exclusion_group_is_one_candidate(make_template):
    catalog = TemplateCatalog()
    for name in ("x", "y", "z"):
        catalog.add(make_template(name, exclusion="grp"))
    catalog.add(make_template("plain"))

    entries = catalog.candidates("sam")
    assert entries == [CandidateEntry.exclusion("grp"), CandidateEntry.template("plain")]
    assert catalog.exclusions["grp"].members == ["x", "y", "z"]


def test_mixed_objtype_exclusion_raises_on_second_member(make_template):
    catalog = TemplateCatalog()
    catalog.add(make_template("a", objtype="sam", exclusion="grp"))
    with pytest.raises(ExclusionTypeMismatchError):
        catalog.add(make_template("b", objtype="ewr", exclusion="grp"))
    assert "b" not in catalog
    assert catalog.candidates("ewr") == []


def test_unindexed_template_is_stored_but_not_a_candidate(make_template):
    catalog = TemplateCatalog()
    catalog.add(make_template("hidden"), index=False)
    assert catalog.get("hidden") is not None
    assert catalog.candidates("sam") == []


def test_snapshot_is_independent(make_template):
    catalog = TemplateCatalog()
    catalog.add(make_template("a"))
    snap = catalog.snapshot()
    snap["sam"].clear()
    assert len(catalog.candidates("sam")) == 1


def test_resolve_exclusion_uses_pick_index(make_template):
    index = ExclusionIndex()
    for name in ("x", "y", "z"):
        index.register(make_template(name, exclusion="grp"))
    entry = CandidateEntry.exclusion("grp")
    assert entry.kind is CandidateKind.EXCLUSION
    assert entry.resolve(index, lambda n: n - 1) == "z"
    assert CandidateEntry.template("t").resolve(index, lambda n: 0) == "t"


def test_stage_queue_buckets_and_take(make_template):
    queue = StageQueue()
    queue.add(make_template("late1", stage=2))
    queue.add(make_template("late2", stage=2))
    queue.add(make_template("later", stage=3))

    assert queue.stages() == [2, 3]
    assert "late1" in queue
    assert [t.name for t in queue.take(2)] == ["late1", "late2"]
    assert queue.take(2) == []
    assert queue.take(9) == []
    assert len(queue) == 1


def test_stage_queue_refuses_stage_one(make_template):
    with pytest.raises(ValueError):
        StageQueue().add(make_template("now"))
