"""Unit tests for the region map."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

from pytheater.misc.geometry import RegionBorder  # noqa: E402
from pytheater.visualization import RegionMapVisualizer, save_region_map  # noqa: E402


def _generated_region(make_region, make_template):
    region = make_region(border=RegionBorder.from_vertices([(0, 0), (10, 0), (10, 10), (0, 10)]))
    region.add_template(make_template("red_sam", coalition="red", location=(2, 2)))
    region.add_template(make_template("blue_ewr", objtype="ewr", coalition="blue", location=(8, 8)))
    region.add_template(make_template("unplaced", objtype="fob"))
    region.generate()
    return region


def test_save_region_map_writes_png(tmp_path, make_region, make_template):
    region = _generated_region(make_region, make_template)
    out = tmp_path / "regions.png"
    assert save_region_map([region], str(out), dpi=50, figsize=(4, 4)) == str(out)
    assert out.read_bytes().startswith(b"\x89PNG")


def test_get_bytes_renders_ungenerated_region(make_region):
    viz = RegionMapVisualizer([make_region()], dpi=50, figsize=(3, 3), title="empty")
    assert viz.get_bytes().startswith(b"\x89PNG")
