from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence

from .enums import AssetType, Coalition
from ..errors import TemplateDefinitionError

# Keys of a .dct definition that map onto Template fields; anything else
# is kept in Template.data untouched.
_KNOWN_KEYS = {
    "name": "name",
    "objtype": "objtype",
    "theater": "theater",
    "exclusion": "exclusion",
    "stage": "stage",
    "spawnalways": "spawn_always",
    "coalition": "coalition",
    "desc": "desc",
    "regionname": "region_name",
    "regionprio": "region_priority",
    "location": "location",
    "volume": "volume",
}


# Name of the template a region synthesizes for its airspace
AIRSPACE_TEMPLATE_NAME = "airspace"


def normalize_objtype(value: Any) -> Optional[str]:
    """
    Lower-cased object-type tag, or None when `value` is not a non-empty string.

    Tags outside AssetType are accepted; which types spawn at startup is
    configured per region.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip().lower()


@dataclass(frozen=True)
class Template:
    """
    Immutable definition of something a region can spawn.

    Only `name`, `objtype`, `exclusion`, `stage`, `spawn_always` and `theater`
    drive region generation. Everything else is payload for the asset that
    gets built from the template.
    """
    name: str
    objtype: str
    theater: Optional[str] = None
    exclusion: Optional[str] = None
    stage: int = 1
    spawn_always: bool = False
    coalition: Coalition = Coalition.NEUTRAL
    desc: str = ""
    region_name: Optional[str] = None
    region_priority: Optional[int] = None
    location: Optional[Sequence[float]] = field(default=None, compare=False, hash=False)
    volume: Optional[Dict[str, Any]] = field(default=None, compare=False, hash=False)
    data: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)
    path: Optional[str] = field(default=None, compare=False, hash=False)

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise TemplateDefinitionError(f"Template name must be a non-empty string ({self.path})")
        objtype = normalize_objtype(self.objtype)
        if objtype is None:
            raise TemplateDefinitionError(
                f"Template '{self.name}' has invalid objtype {self.objtype!r} ({self.path})"
            )
        object.__setattr__(self, "objtype", objtype)
        if isinstance(self.stage, bool) or not isinstance(self.stage, int) or self.stage < 1:
            raise TemplateDefinitionError(
                f"Template '{self.name}' stage must be an integer >= 1, got {self.stage!r}"
            )
        object.__setattr__(self, "coalition", _parse_coalition(self.coalition, self.name))

    @property
    def is_staged(self) -> bool:
        """True when the template waits for a later stage."""
        return self.stage != 1

    @classmethod
    def from_dict(cls, definition: Mapping[str, Any], path: Optional[str] = None) -> "Template":
        """
        Build a template from a parsed definition.

        Args:
            definition: Mapping using the definition-file keys
                (objtype, exclusion, stage, spawnalways, theater, ...)
            path: Source file, kept for diagnostics

        Raises:
            TemplateDefinitionError: If objtype is missing or invalid
        """
        if "objtype" not in definition:
            raise TemplateDefinitionError(f"Template definition without objtype ({path})")

        kwargs: Dict[str, Any] = {"path": path}
        data: Dict[str, Any] = {}
        for key, value in definition.items():
            target = _KNOWN_KEYS.get(key.lower()) if isinstance(key, str) else None
            if target is None:
                data[key] = value
            else:
                kwargs[target] = value
        kwargs["data"] = data
        if "spawn_always" in kwargs:
            kwargs["spawn_always"] = bool(kwargs["spawn_always"])
        return cls(**kwargs)

    @classmethod
    def from_file(cls, dct_path: str, stm_path: Optional[str] = None) -> "Template":
        """
        Load a template from a JSON .dct file and optional .stm payload.

        The template name defaults to the .dct file name without extension.
        """
        with open(dct_path, "r", encoding="utf-8") as f:
            definition = json.load(f)
        if not isinstance(definition, dict):
            raise TemplateDefinitionError(f"Template file must hold a JSON object: {dct_path}")

        definition.setdefault("name", os.path.splitext(os.path.basename(dct_path))[0])
        if stm_path is not None:
            with open(stm_path, "r", encoding="utf-8") as f:
                definition["tpldata"] = json.load(f)
        return cls.from_dict(definition, path=dct_path)


def _parse_coalition(value: Any, name: str) -> Coalition:
    if isinstance(value, Coalition):
        return value
    if isinstance(value, str):
        try:
            return Coalition[value.strip().upper()]
        except KeyError:
            pass
    elif isinstance(value, int) and not isinstance(value, bool):
        try:
            return Coalition(value)
        except ValueError:
            pass
    raise TemplateDefinitionError(f"Template '{name}' has invalid coalition {value!r}")


def make_airspace_template(
    region_name: str,
    theater: Optional[str],
    point: Sequence[float],
    radius: float = 55560,
    priority: int = 1000,
) -> Template:
    """
    Build the airspace template a region synthesizes around its centroid.

    The default radius is 30 nautical miles in meters.
    """
    location = tuple(point)
    return Template(
        name=AIRSPACE_TEMPLATE_NAME,
        objtype=AssetType.AIRSPACE.value,
        theater=theater,
        coalition=Coalition.NEUTRAL,
        desc="airspace",
        region_name=region_name,
        region_priority=priority,
        location=location,
        volume={"point": location, "radius": radius},
    )
