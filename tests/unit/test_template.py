"""Unit tests for template definitions."""

from __future__ import annotations

import json

import pytest

from pytheater.classes.enums import AssetType, Coalition
from pytheater.classes.template import Template, make_airspace_template
from pytheater.errors import TemplateDefinitionError


def test_objtype_is_normalised_to_lowercase():
    tpl = Template(name="sa6", objtype="SAM", theater="Caucasus")
    assert tpl.objtype == AssetType.SAM.value
    assert not tpl.is_staged


def test_objtype_outside_builtin_types_is_accepted():
    assert Template(name="t_air", objtype=" Air ").objtype == "air"


@pytest.mark.parametrize("objtype", ["", "   ", None, 3])
def test_invalid_objtype_rejected(objtype):
    with pytest.raises(TemplateDefinitionError):
        Template(name="x", objtype=objtype)


@pytest.mark.parametrize("stage", [0, -1, 1.5, True])
def test_invalid_stage_rejected(stage):
    with pytest.raises(TemplateDefinitionError):
        Template(name="x", objtype="sam", stage=stage)


def test_coalition_parsed_from_name_or_number():
    assert Template(name="a", objtype="sam", coalition="red").coalition is Coalition.RED
    assert Template(name="b", objtype="sam", coalition=2).coalition is Coalition.BLUE
    with pytest.raises(TemplateDefinitionError):
        Template(name="c", objtype="sam", coalition="purple")


def test_from_dict_maps_known_keys_and_keeps_extras():
    tpl = Template.from_dict({
        "name": "ewr-north",
        "objtype": "ewr",
        "spawnalways": 1,
        "stage": 2,
        "exclusion": "north",
        "cost": 150,
    })
    assert tpl.spawn_always is True
    assert tpl.stage == 2
    assert tpl.is_staged
    assert tpl.exclusion == "north"
    assert tpl.data == {"cost": 150}


def test_from_dict_requires_objtype():
    with pytest.raises(TemplateDefinitionError):
        Template.from_dict({"name": "nothing"})


def test_from_file_defaults_name_and_reads_payload(tmp_path):
    dct = tmp_path / "sa6.dct"
    stm = tmp_path / "sa6.stm"
    dct.write_text(json.dumps({"objtype": "sam", "theater": "Caucasus"}))
    stm.write_text(json.dumps({"groups": [{"units": [{"x": 10, "y": 20}]}]}))

    tpl = Template.from_file(str(dct), str(stm))
    assert tpl.name == "sa6"
    assert tpl.path == str(dct)
    assert tpl.data["tpldata"]["groups"][0]["units"][0]["x"] == 10


def test_from_file_rejects_non_object(tmp_path):
    dct = tmp_path / "bad.dct"
    dct.write_text("[1, 2, 3]")
    with pytest.raises(TemplateDefinitionError):
        Template.from_file(str(dct))


def test_airspace_template_defaults():
    tpl = make_airspace_template("Kutaisi", "Caucasus", (1.0, 0.0))
    assert tpl.objtype == AssetType.AIRSPACE.value
    assert tpl.coalition is Coalition.NEUTRAL
    assert tpl.region_priority == 1000
    assert tpl.volume == {"point": (1.0, 0.0), "radius": 55560}
