"""Pytest configuration and shared fixtures.

Adds the repository root to `sys.path` so tests can import `pytheater`
without an editable install.
"""

import sys
from pathlib import Path

import pytest

ROOT_PATH = Path(__file__).resolve().parents[1]
if str(ROOT_PATH) not in sys.path:
    sys.path.insert(0, str(ROOT_PATH))

from pytheater.classes.assets import AssetManager  # noqa: E402
from pytheater.classes.template import Template  # noqa: E402
from pytheater.regions.randomizer import Randomizer  # noqa: E402
from pytheater.regions.region import Region  # noqa: E402

THEATER = "Caucasus"


@pytest.fixture
def randomizer() -> Randomizer:
    return Randomizer(seed=1234)


@pytest.fixture
def asset_manager() -> AssetManager:
    return AssetManager()


@pytest.fixture
def make_template():
    """Build a template for the test theater; keyword overrides pass through."""

    def _make(name: str, objtype: str = "sam", **kwargs) -> Template:
        kwargs.setdefault("theater", THEATER)
        return Template(name=name, objtype=objtype, **kwargs)

    return _make


@pytest.fixture
def make_region(asset_manager, randomizer):
    def _make(name: str = "Kutaisi", **kwargs) -> Region:
        kwargs.setdefault("theater", THEATER)
        kwargs.setdefault("asset_manager", asset_manager)
        kwargs.setdefault("randomizer", randomizer)
        return Region(name, **kwargs)

    return _make
