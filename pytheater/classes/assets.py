from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence

from .enums import AssetType
from .template import Template
from ..misc.logger import create_logger
from ..misc.math_utils import PositionType, calculate_centroid, is_position_in_circle
from ..errors import DuplicateAssetError

if TYPE_CHECKING:
    from ..regions.region import Region

AssetFactory = Callable[[Template, "Region"], "Asset"]

_logger = create_logger(verbose=False, name="Assets")


def asset_name(region_name: str, template_name: str) -> str:
    """Assets are named after their region so every region may own an 'airspace'."""
    return f"{region_name}_{template_name}"


class Asset(ABC):
    """Something spawned into the world from a template."""

    def __init__(self, template: Template, region: "Region"):
        self.template = template
        self.region_name = region.name
        self.name = asset_name(region.name, template.name)
        self.spawned = False

    @property
    def objtype(self) -> str:
        return self.template.objtype

    @abstractmethod
    def generate(self, asset_manager: "AssetManager", region: "Region"):
        """Activate the asset in the world."""

    def get_location(self) -> Optional[PositionType]:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, objtype={self.objtype!r})"


class TemplateAsset(Asset):
    """
    Default asset: a group of units described by the template payload.

    Location is the template's explicit `location`, otherwise the centroid of
    the unit positions found in the template's `.stm` payload.
    """

    def generate(self, asset_manager: "AssetManager", region: "Region"):
        self.spawned = True
        _logger.debug(f"spawned {self.name} ({self.objtype})")

    def get_location(self) -> Optional[PositionType]:
        if self.template.location is not None:
            return tuple(self.template.location)
        points = _unit_positions(self.template.data.get("tpldata"))
        if not points:
            return None
        return calculate_centroid(points)


class AirspaceAsset(Asset):
    """Neutral volume of airspace centered on a region."""

    def __init__(self, template: Template, region: "Region"):
        super().__init__(template, region)
        volume = template.volume or {}
        self.center = tuple(volume.get("point", template.location or (0.0, 0.0, 0.0)))
        self.radius = float(volume.get("radius", 0.0))

    def generate(self, asset_manager: "AssetManager", region: "Region"):
        self.spawned = True
        _logger.debug(f"airspace {self.name} at {self.center}, radius {self.radius:.0f}")

    def get_location(self) -> Optional[PositionType]:
        return self.center

    def contains(self, point: Sequence[float]) -> bool:
        return is_position_in_circle(point, self.center, self.radius)


def _unit_positions(tpldata) -> List[PositionType]:
    """Collect (x, y) unit positions from a static template payload."""
    if not isinstance(tpldata, dict):
        return []
    points: List[PositionType] = []
    for group in tpldata.get("groups", []):
        for unit in group.get("units", []):
            if "x" in unit and "y" in unit:
                points.append((float(unit["x"]), float(unit["y"])))
    return points


class AssetManager:
    """
    Registry of spawned assets and of the factories that build them.

    Object types without a dedicated factory use TemplateAsset.
    """

    def __init__(self, verbose: bool = False):
        self._assets: Dict[str, Asset] = {}
        self._factories: Dict[str, AssetFactory] = {
            AssetType.AIRSPACE.value: AirspaceAsset,
        }
        self.default_factory: AssetFactory = TemplateAsset
        self.logger = create_logger(verbose=verbose, name="AssetManager")

    def register_factory(self, objtype: str, factory: AssetFactory):
        self._factories[objtype.lower()] = factory

    def factory(self, objtype: str) -> AssetFactory:
        return self._factories.get(objtype, self.default_factory)

    def add(self, asset: Asset):
        if asset.name in self._assets:
            raise DuplicateAssetError(f"asset '{asset.name}' already exists")
        self._assets[asset.name] = asset
        self.logger.debug(f"added {asset!r}")

    def get_asset(self, name: str) -> Optional[Asset]:
        return self._assets.get(name)

    def assets(self, objtype: Optional[str] = None) -> List[Asset]:
        if objtype is None:
            return list(self._assets.values())
        return [a for a in self._assets.values() if a.objtype == objtype]

    def __contains__(self, name: object) -> bool:
        return name in self._assets

    def __len__(self) -> int:
        return len(self._assets)
