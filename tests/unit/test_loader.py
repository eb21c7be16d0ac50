"""Unit tests for loading regions from a theater directory."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pytheater.errors import DuplicateTemplateError, RegionDefinitionError
from pytheater.regions.loader import (
    discover_templates,
    load_region,
    load_region_definition,
    load_regions,
)
from pytheater.settings import TheaterSettings


def _write(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))
    return path


def _region_dir(root: Path, name: str, priority: int = 10, **extra) -> Path:
    region_dir = root / name.lower()
    _write(region_dir / "region.def", {"name": name, "priority": priority, **extra})
    return region_dir


def test_definition_parses_limits_case_insensitively(tmp_path):
    path = _write(tmp_path / "region.def", {
        "region": {
            "name": "Kutaisi",
            "limits": {"SAM": {"min": 1, "max": 2}, "Ewr": {"min": 0, "max": 1}},
            "airspace": False,
        }
    })
    definition = load_region_definition(str(path))
    assert definition.name == "Kutaisi"
    assert definition.priority == 1000
    assert definition.airspace is False
    assert set(definition.limits) == {"sam", "ewr"}
    assert definition.limits["sam"].max == 2


def test_custom_limit_type_warns_and_is_kept(tmp_path, capsys):
    path = _write(tmp_path / "region.def", {
        "name": "Kutaisi",
        "limits": {"Air": {"min": 1, "max": 1}},
    })
    definition = load_region_definition(str(path))
    assert definition.limits["air"].max == 1
    assert "'Air' in limits definition is not a built-in asset type" in capsys.readouterr().err


@pytest.mark.parametrize("data", [
    {"priority": 5},
    {"name": "Kutaisi", "limits": {"sam": {"min": 3, "max": 1}}},
    {"name": "Kutaisi", "priority": "high"},
    {"name": "Kutaisi", "border": [[0, 0], [1, 1]]},
    {"name": "Kutaisi", "limits": {" ": {"min": 0, "max": 1}}},
    ["not", "an", "object"],
])
def test_invalid_definitions_raise(tmp_path, data):
    path = _write(tmp_path / "region.def", data)
    with pytest.raises(RegionDefinitionError) as info:
        load_region_definition(str(path))
    assert info.value.result is not None
    assert not info.value.result.is_valid


def test_discover_templates_pairs_payloads(tmp_path):
    region_dir = _region_dir(tmp_path, "Kutaisi")
    _write(region_dir / "sams" / "sa6.dct", {"objtype": "sam"})
    _write(region_dir / "sams" / "sa6.stm", {"groups": []})
    _write(region_dir / "ewr" / "ewr1.dct", {"objtype": "ewr"})

    found = discover_templates(str(region_dir))
    names = [Path(dct).name for dct, _ in found]
    assert names == ["ewr1.dct", "sa6.dct"]
    assert found[0][1] is None
    assert found[1][1].endswith("sa6.stm")


def test_load_region_registers_templates(tmp_path, asset_manager):
    region_dir = _region_dir(
        tmp_path, "Kutaisi",
        border=[[0, 0], [100, 0], [100, 100], [0, 100]],
    )
    _write(region_dir / "sams" / "sa6.dct", {"objtype": "sam", "theater": "Caucasus"})
    _write(region_dir / "sams" / "sa10.dct", {"objtype": "sam", "theater": "Caucasus", "stage": 2})
    _write(region_dir / "other" / "syria.dct", {"objtype": "sam", "theater": "Syria"})

    settings = TheaterSettings(theater="Caucasus", theater_path=str(tmp_path), seed=1)
    region = load_region(str(region_dir), settings, asset_manager)

    assert region.name == "Kutaisi"
    assert region.priority == 10
    assert region.catalog.names() == ["sa6"]
    assert region.staged.names() == ["sa10"]
    assert region.is_inside((50, 50))


def test_duplicate_template_names_in_region_raise(tmp_path):
    region_dir = _region_dir(tmp_path, "Kutaisi")
    _write(region_dir / "a" / "sa6.dct", {"objtype": "sam", "theater": "Caucasus"})
    _write(region_dir / "b" / "sa6.dct", {"objtype": "sam", "theater": "Caucasus"})

    settings = TheaterSettings(theater="Caucasus", theater_path=str(tmp_path))
    with pytest.raises(DuplicateTemplateError):
        load_region(str(region_dir), settings)


def test_load_regions_orders_by_priority(tmp_path):
    _region_dir(tmp_path, "Batumi", priority=20)
    _region_dir(tmp_path, "Kutaisi", priority=5)
    _region_dir(tmp_path, "Anapa", priority=20)
    (tmp_path / "notes").mkdir()

    settings = TheaterSettings(theater="Caucasus", theater_path=str(tmp_path))
    regions = load_regions(settings)
    assert [r.name for r in regions] == ["Kutaisi", "Anapa", "Batumi"]
