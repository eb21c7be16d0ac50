from __future__ import annotations

from enum import Enum, IntEnum
from typing import FrozenSet, Optional


class AssetType(str, Enum):
    """Object-type tags a template can declare (`objtype`)."""
    # strategic
    AMMODUMP = "ammodump"
    FUELDUMP = "fueldump"
    C2 = "c2"
    EWR = "ewr"
    MISSILE = "missile"
    OCA = "oca"
    PORT = "port"
    SAM = "sam"
    FACILITY = "facility"
    BUNKER = "bunker"
    CHECKPOINT = "checkpoint"
    FACTORY = "factory"
    # tactical
    SHORAD = "shorad"
    SPECIALFORCES = "specialforces"
    FOB = "fob"
    LOGISTICS = "logistics"
    JTAC = "jtac"
    # bases
    AIRBASE = "airbase"
    FARP = "farp"
    # other
    AIRSPACE = "airspace"
    WAYPOINT = "waypoint"
    PLAYERGROUP = "playergroup"

    @classmethod
    def parse(cls, text: str) -> Optional["AssetType"]:
        """Case-insensitive lookup; None for names that are not asset types."""
        if not isinstance(text, str):
            return None
        try:
            return cls(text.strip().lower())
        except ValueError:
            return None


STRATEGIC: FrozenSet[AssetType] = frozenset({
    AssetType.AMMODUMP, AssetType.FUELDUMP, AssetType.C2, AssetType.EWR,
    AssetType.MISSILE, AssetType.OCA, AssetType.PORT, AssetType.SAM,
    AssetType.FACILITY, AssetType.BUNKER, AssetType.CHECKPOINT,
    AssetType.FACTORY,
})

TACTICAL: FrozenSet[AssetType] = frozenset({
    AssetType.SHORAD, AssetType.SPECIALFORCES, AssetType.FOB,
    AssetType.LOGISTICS, AssetType.JTAC,
})

BASES: FrozenSet[AssetType] = frozenset({AssetType.AIRBASE, AssetType.FARP})

# Object types a region spawns from its templates at startup. Airspace is
# synthesized separately by Region.generate.
INITIALIZE_AT_STARTUP: FrozenSet[str] = frozenset(
    t.value for t in STRATEGIC | TACTICAL | BASES
)


class Coalition(IntEnum):
    NEUTRAL = 0
    RED = 1
    BLUE = 2


class InventoryCategory(str, Enum):
    AIRFRAMES = "airframes"
    MUNITIONS = "munitions"
    GROUND_UNITS = "ground units"
    NAVAL = "naval"
    TRAINS = "trains"
    OTHER = "other"


# Categories every base ledger starts with
STOCK_CATEGORIES = (
    InventoryCategory.AIRFRAMES.value,
    InventoryCategory.MUNITIONS.value,
    InventoryCategory.GROUND_UNITS.value,
    InventoryCategory.NAVAL.value,
    InventoryCategory.TRAINS.value,
)
