"""
Loading regions from a theater directory tree.

    <theater_path>/
        <region dir>/
            region.def          JSON: name, priority, limits, airspace, border
            sams/
                sa6.dct         JSON template definition
                sa6.stm         optional JSON payload (groups/units)
            ...

region.def example:

    {
        "name": "Kutaisi",
        "priority": 10,
        "limits": {"SAM": {"min": 1, "max": 2}},
        "airspace": true,
        "border": [[0, 0], [50000, 0], [50000, 50000], [0, 50000]]
    }

A file may also nest these keys under a top-level "region" object.
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..classes.enums import AssetType
from ..classes.template import Template, normalize_objtype
from ..errors import InvalidLimitsError, RegionDefinitionError
from ..misc.geometry import RegionBorder
from ..misc.logger import create_logger
from ..misc.validation_framework import BaseValidator, ValidationSeverity, is_number
from .randomizer import Randomizer
from .region import Region
from .selector import SpawnLimits

REGION_DEF = "region.def"
TEMPLATE_EXT = ".dct"
PAYLOAD_EXT = ".stm"

_logger = create_logger(verbose=False, name="RegionLoader")


@dataclass
class RegionDefinition:
    """Parsed contents of a region.def file."""
    name: str
    priority: int = 1000
    limits: Dict[str, SpawnLimits] = field(default_factory=dict)
    airspace: bool = True
    border: Optional[List[Sequence[float]]] = None
    path: Optional[str] = None


class RegionDefinitionValidator(BaseValidator):
    """Checks the keys of a region.def mapping."""

    def _validate_impl(self, data: Any):
        if not isinstance(data, dict):
            self.add_issue(
                ValidationSeverity.CRITICAL,
                f"region definition must be an object, got {type(data).__name__}",
            )
            return

        if not isinstance(data.get("name"), str) or not data.get("name"):
            self.add_issue(
                ValidationSeverity.CRITICAL,
                f"region name is required and must be a string, got {data.get('name')!r}",
                field="name",
            )

        if "priority" in data and not is_number(data["priority"]):
            self.add_issue(
                ValidationSeverity.ERROR,
                f"priority must be a number, got {data['priority']!r}",
                field="priority",
            )

        if "airspace" in data and not isinstance(data["airspace"], bool):
            self.add_issue(
                ValidationSeverity.ERROR,
                f"airspace must be true or false, got {data['airspace']!r}",
                field="airspace",
            )

        self._validate_limits(data.get("limits", {}))
        self._validate_border(data.get("border"))

    def _validate_limits(self, limits: Any):
        if not isinstance(limits, dict):
            self.add_issue(
                ValidationSeverity.ERROR,
                f"limits must be an object, got {type(limits).__name__}",
                field="limits",
            )
            return

        for key, entry in limits.items():
            if normalize_objtype(key) is None:
                self.add_issue(ValidationSeverity.ERROR, f"invalid object type {key!r} in limits", field="limits")
                continue
            if AssetType.parse(key) is None:
                self.add_issue(
                    ValidationSeverity.WARNING,
                    f"'{key}' in limits definition is not a built-in asset type",
                    field=f"limits.{key}",
                )
            if not isinstance(entry, dict):
                self.add_issue(
                    ValidationSeverity.ERROR,
                    f"limit entry must be an object with min and max, got {entry!r}",
                    field=f"limits.{key}",
                )
                continue
            try:
                SpawnLimits.from_dict(entry)
            except InvalidLimitsError as e:
                self.add_issue(ValidationSeverity.ERROR, str(e), field=f"limits.{key}")

    def _validate_border(self, border: Any):
        if border is None:
            return
        if not isinstance(border, list) or len(border) < 3:
            self.add_issue(
                ValidationSeverity.ERROR,
                "border must be a list of at least 3 vertices",
                field="border",
            )
            return
        for i, vertex in enumerate(border):
            if (not isinstance(vertex, (list, tuple)) or len(vertex) not in (2, 3)
                    or not all(is_number(v) for v in vertex)):
                self.add_issue(
                    ValidationSeverity.ERROR,
                    f"vertex {i} must be [x, z] or [x, y, z], got {vertex!r}",
                    field=f"border[{i}]",
                )


def parse_limits(limits: Dict[str, Any]) -> Dict[str, SpawnLimits]:
    """Convert validated limits, keyed case-insensitively, to objtype -> SpawnLimits."""
    parsed: Dict[str, SpawnLimits] = {}
    for key, entry in limits.items():
        parsed[normalize_objtype(key)] = SpawnLimits.from_dict(entry)
    return parsed


def load_region_definition(path: str) -> RegionDefinition:
    """
    Read and validate a region.def file.

    Raises:
        RegionDefinitionError: If the file fails validation
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and isinstance(data.get("region"), dict):
        data = data["region"]

    result = RegionDefinitionValidator().validate(data)
    for issue in result.get_issues_by_severity(ValidationSeverity.WARNING):
        _logger.warning(f"{issue.message} in file: {path}")
    if not result.is_valid:
        raise RegionDefinitionError(f"{path}\n{result.get_summary()}", result)

    return RegionDefinition(
        name=data["name"],
        priority=data.get("priority", 1000),
        limits=parse_limits(data.get("limits", {})),
        airspace=data.get("airspace", True),
        border=data.get("border"),
        path=path,
    )


def discover_templates(basepath: str) -> List[Tuple[str, Optional[str]]]:
    """
    Find every template file below a region directory.

    Returns:
        (dct_path, stm_path or None) pairs in sorted, depth-first order
    """
    found: List[Tuple[str, Optional[str]]] = []
    for root, dirs, files in os.walk(basepath):
        dirs.sort()
        for filename in sorted(files):
            if filename == REGION_DEF or not filename.endswith(TEMPLATE_EXT):
                continue
            dct_path = os.path.join(root, filename)
            stm_path = dct_path[: -len(TEMPLATE_EXT)] + PAYLOAD_EXT
            found.append((dct_path, stm_path if os.path.isfile(stm_path) else None))
    return found


def load_region(
    path: str,
    settings,
    asset_manager=None,
    randomizer: Optional[Randomizer] = None,
) -> Region:
    """
    Build a Region from its directory: region.def plus every template below it.

    Args:
        path: Region directory
        settings: TheaterSettings of the active theater
        asset_manager: Asset manager the region spawns into
        randomizer: Shared random source (seeded from settings when omitted)
    """
    definition = load_region_definition(os.path.join(path, REGION_DEF))
    border = RegionBorder.from_vertices(definition.border) if definition.border else None

    region = Region(
        definition.name,
        theater=settings.theater,
        priority=definition.priority,
        limits=definition.limits,
        airspace=definition.airspace,
        border=border,
        asset_manager=asset_manager,
        randomizer=randomizer or Randomizer(settings.seed),
        initialize_types=settings.initialize_types,
        verbose=settings.verbose,
        airspace_radius=settings.airspace_radius,
        airspace_priority=settings.airspace_priority,
        path=path,
    )

    for dct_path, stm_path in discover_templates(path):
        region.logger.debug(f"=> process template: {dct_path}")
        region.add_template(Template.from_file(dct_path, stm_path))

    region.logger.debug(f"'{region.name}' loaded")
    return region


def load_regions(settings, asset_manager=None, randomizer: Optional[Randomizer] = None) -> List[Region]:
    """
    Load every region directory under settings.theater_path.

    Returns:
        Regions ordered by priority, then name
    """
    randomizer = randomizer or Randomizer(settings.seed)
    regions: List[Region] = []
    for entry in sorted(os.listdir(settings.theater_path)):
        region_dir = os.path.join(settings.theater_path, entry)
        if os.path.isfile(os.path.join(region_dir, REGION_DEF)):
            regions.append(load_region(region_dir, settings, asset_manager, randomizer))
    regions.sort(key=lambda r: (r.priority, r.name))
    return regions
