from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .classes.assets import Asset, AssetManager
from .misc.logger import TheaterLogger, create_logger
from .regions.loader import load_regions
from .regions.randomizer import Randomizer
from .regions.region import Region
from .settings import TheaterSettings
from .systems.inventory import InventoryRegistry


@dataclass
class Theater:
    """
    Owner of a theater's regions, asset manager and base inventories.

    Regions generate once at startup in priority order; later stages are
    released with `advance_stage` when the campaign moves on.

    Example:
        >>> settings = TheaterSettings(theater="Caucasus", theater_path="theaters/caucasus")
        >>> theater = Theater.from_settings(settings)
        >>> theater.generate()
        >>> theater.advance_stage(2)
    """
    settings: TheaterSettings
    regions: List[Region] = field(default_factory=list)
    asset_manager: AssetManager = field(default_factory=AssetManager)
    inventories: InventoryRegistry = field(default_factory=InventoryRegistry)
    stage: int = 1
    logger: TheaterLogger = field(init=False, repr=False)

    def __post_init__(self):
        self.logger = create_logger(verbose=self.settings.verbose, name="Theater")
        self.regions.sort(key=lambda r: (r.priority, r.name))

    @classmethod
    def from_settings(cls, settings: TheaterSettings) -> "Theater":
        """Load regions (and inventories, when present) from settings.theater_path."""
        asset_manager = AssetManager(verbose=settings.verbose)
        regions = load_regions(settings, asset_manager, Randomizer(settings.seed))
        if os.path.isdir(settings.inventories_path):
            inventories = InventoryRegistry.from_directory(settings.inventories_path)
        else:
            inventories = InventoryRegistry()
        return cls(settings, regions, asset_manager, inventories)

    def get_region(self, name: str) -> Optional[Region]:
        for region in self.regions:
            if region.name == name:
                return region
        return None

    def generate(self) -> Dict[str, List[Asset]]:
        """Run startup generation for every region, highest priority first."""
        spawned: Dict[str, List[Asset]] = {}
        for region in self.regions:
            spawned[region.name] = region.generate(self.asset_manager)
        self.logger.info(
            f"{self.settings.theater}: generated {len(self.asset_manager)} assets "
            f"in {len(self.regions)} regions"
        )
        return spawned

    def advance_stage(self, stage: int) -> Dict[str, List[Asset]]:
        """Release every region's templates queued for `stage`."""
        if stage <= self.stage:
            self.logger.warning(f"stage {stage} is not after current stage {self.stage}")
        spawned = {
            region.name: region.generate_staged_templates(stage, self.asset_manager)
            for region in self.regions
        }
        self.stage = max(self.stage, stage)
        return spawned

    def region_at(self, point: Sequence[float]) -> Optional[Region]:
        """First region (in priority order) whose border contains the point."""
        for region in self.regions:
            if region.is_inside(point):
                return region
        return None
