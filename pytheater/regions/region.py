"""
Region: the unit of world generation.

A region owns the templates discovered for it, spawns a random subset of them
once at startup (within per-objtype limits and exclusion groups) and then
wraps everything it spawned in a neutral airspace centered on the spawned
assets. Templates tagged with a later stage wait in a queue until the
theater advances to that stage.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from ..classes.enums import INITIALIZE_AT_STARTUP
from ..classes.template import AIRSPACE_TEMPLATE_NAME, Template, make_airspace_template
from ..misc.geometry import RegionBorder, point_in_triangle_fast
from ..misc.logger import create_logger
from ..misc.math_utils import ORIGIN, PositionType
from .catalog import StageQueue, TemplateCatalog
from ..errors import DuplicateTemplateError, RegionStateError, TemplateDefinitionError
from .randomizer import Randomizer
from .selector import CentroidAccumulator, SelectionResult, SpawnLimits, TemplateSelector

if TYPE_CHECKING:
    from ..classes.assets import Asset, AssetManager

PointInTriangle = Callable[..., bool]

AIRSPACE_RADIUS = 55560  # 30NM
AIRSPACE_PRIORITY = 1000


class RegionState(Enum):
    UNINITIALIZED = "uninitialized"
    GENERATING = "generating"
    DONE = "done"
    FAILED = "failed"


class Region:
    """
    A named area of the theater and the templates that may spawn in it.

    Example:
        >>> region = Region("Kutaisi", theater="Caucasus",
        ...                 limits={"sam": SpawnLimits(1, 2)},
        ...                 asset_manager=AssetManager())
        >>> for tpl in templates:
        ...     region.add_template(tpl)
        >>> assets = region.generate()
    """

    def __init__(
        self,
        name: str,
        theater: Optional[str],
        priority: int = 1000,
        limits: Optional[Mapping[str, SpawnLimits]] = None,
        airspace: bool = True,
        border: Optional[RegionBorder] = None,
        asset_manager: Optional["AssetManager"] = None,
        randomizer: Optional[Randomizer] = None,
        initialize_types: Iterable[str] = INITIALIZE_AT_STARTUP,
        point_in_triangle: PointInTriangle = point_in_triangle_fast,
        verbose: bool = False,
        airspace_radius: float = AIRSPACE_RADIUS,
        airspace_priority: int = AIRSPACE_PRIORITY,
        path: Optional[str] = None,
    ):
        self.name = name
        self.theater = theater
        self.priority = priority
        self.limits: Dict[str, SpawnLimits] = dict(limits or {})
        self.airspace = airspace
        self.border = border
        self.asset_manager = asset_manager
        self.randomizer = randomizer or Randomizer()
        self.initialize_types = frozenset(initialize_types)
        self.point_in_triangle = point_in_triangle
        self.airspace_radius = airspace_radius
        self.airspace_priority = airspace_priority
        self.path = path
        self.verbose = verbose
        self.logger = create_logger(verbose=verbose, name="Region", debug=verbose)

        self._catalog = TemplateCatalog()
        self._staged = StageQueue()
        self._centroid = CentroidAccumulator()

        self.state = RegionState.UNINITIALIZED
        self.location: Optional[PositionType] = None
        self.assets: List["Asset"] = []
        self.selections: Dict[str, SelectionResult] = {}
        self.staged_selections: Dict[int, Dict[str, SelectionResult]] = {}

    def __repr__(self) -> str:
        return f"Region({self.name!r}, priority={self.priority}, state={self.state.value})"

    # --- registration ---------------------------------------------------

    @property
    def catalog(self) -> TemplateCatalog:
        return self._catalog

    @property
    def staged(self) -> StageQueue:
        return self._staged

    @property
    def centroid(self) -> CentroidAccumulator:
        """Running centroid of every located asset spawned so far, stages included."""
        return self._centroid

    def add_template(self, template: Template) -> bool:
        """
        Register a template with this region.

        Stage-1 templates become selection candidates immediately; later
        stages wait in the stage queue. Templates built for another theater
        are dropped with a warning.

        Returns:
            True if the template was registered or queued, False if dropped

        Raises:
            DuplicateTemplateError: If the name is already registered or queued
            ExclusionTypeMismatchError: If its exclusion group mixes objtypes
            TemplateDefinitionError: If it uses the reserved airspace name
        """
        if template.name == AIRSPACE_TEMPLATE_NAME:
            raise TemplateDefinitionError(
                f"template name '{AIRSPACE_TEMPLATE_NAME}' is reserved for the region airspace; {template.path}"
            )
        if template.name in self._catalog or template.name in self._staged:
            raise DuplicateTemplateError(
                f"duplicate template '{template.name}' defined; {template.path}"
            )

        if template.theater != self.theater:
            self.logger.warning(
                f"Region({self.name}):Template({template.name}) not for map({self.theater})"
                f":template({template.theater}) - ignoring"
            )
            return False

        if template.is_staged:
            self.logger.debug(f"  + add stage template: {template.name} stage: {template.stage}")
            self._staged.add(template)
        else:
            self.logger.debug(f"  + add template: {template.name}")
            self._catalog.add(template)
        return True

    def get_template_by_name(self, name: str) -> Optional[Template]:
        return self._catalog.get(name)

    # --- generation -----------------------------------------------------

    def _resolve_asset_manager(self, asset_manager: Optional["AssetManager"]) -> "AssetManager":
        manager = asset_manager or self.asset_manager
        if manager is None:
            raise RegionStateError(f"Region '{self.name}' has no asset manager to spawn into")
        return manager

    def _spawn(self, name: str, asset_manager: "AssetManager", centroid: CentroidAccumulator) -> Optional["Asset"]:
        template = self.get_template_by_name(name)
        if template is None:
            self.logger.warning(f"Region({self.name}): no template named '{name}', skipping")
            return None

        asset = asset_manager.factory(template.objtype)(template, self)
        asset_manager.add(asset)
        asset.generate(asset_manager, self)
        self.assets.append(asset)

        location = asset.get_location()
        if location is not None:
            centroid.add(location)
        return asset

    def _selector(self, exclusions) -> TemplateSelector:
        return TemplateSelector(
            exclusions,
            self.get_template_by_name,
            randomizer=self.randomizer,
            verbose=self.verbose,
        )

    def generate(self, asset_manager: Optional["AssetManager"] = None) -> List["Asset"]:
        """
        Spawn this region's startup assets. Runs once per session.

        Returns:
            Assets spawned by this call, airspace last

        Raises:
            RegionStateError: If called a second time or without an asset manager
        """
        if self.state is not RegionState.UNINITIALIZED:
            raise RegionStateError(f"Region '{self.name}' already generated ({self.state.value})")
        manager = self._resolve_asset_manager(asset_manager)

        self.state = RegionState.GENERATING
        first = len(self.assets)
        try:
            self._generate(manager)
        except Exception:
            self.state = RegionState.FAILED
            self.logger.error(f"'{self.name}' generation failed after {len(self.assets) - first} assets")
            raise

        self.state = RegionState.DONE
        spawned = self.assets[first:]
        self.logger.info(f"'{self.name}' generated {len(spawned)} assets")
        return spawned

    def _generate(self, manager: "AssetManager"):
        candidates = self._catalog.snapshot()
        selector = self._selector(self._catalog.exclusions)

        for objtype in sorted(self.initialize_types):
            entries = candidates.get(objtype)
            if not entries:
                continue
            self.selections[objtype] = selector.select(
                objtype,
                entries,
                self.limits.get(objtype),
                lambda name: self._spawn(name, manager, self._centroid),
            )

        self.location = self._centroid.point_or(ORIGIN)
        if self.airspace:
            self._spawn_airspace(manager)

    def _spawn_airspace(self, asset_manager: "AssetManager"):
        template = make_airspace_template(
            self.name,
            self.theater,
            self.location,
            radius=self.airspace_radius,
            priority=self.airspace_priority,
        )
        self._catalog.add(template, index=False)
        # airspace does not move the region centroid
        self._spawn(template.name, asset_manager, CentroidAccumulator())

    def generate_staged_templates(self, stage: int, asset_manager: Optional["AssetManager"] = None) -> List["Asset"]:
        """
        Spawn the templates queued for `stage`.

        The stage's templates run through the same selector as startup
        generation, with exclusion groups scoped to the stage. The bucket is
        emptied once the pass succeeds, so a repeated call for the same stage
        does nothing. A pass that fails validation leaves the bucket and the
        region registry untouched.

        Returns:
            Assets spawned by this call

        Raises:
            RegionStateError: If the region is still generating
            ExclusionTypeMismatchError: If a staged exclusion group mixes objtypes
        """
        if self.state is RegionState.GENERATING:
            raise RegionStateError(f"Region '{self.name}' is still generating")

        templates = self._staged.pending(stage)
        if not templates:
            self.logger.debug(f"'{self.name}' has no templates for stage {stage}")
            return []
        manager = self._resolve_asset_manager(asset_manager)

        stage_catalog = TemplateCatalog()
        for template in templates:
            stage_catalog.add(template)
        for template in templates:
            if template.name not in self._catalog:
                self._catalog.add(template, index=False)

        first = len(self.assets)
        selector = self._selector(stage_catalog.exclusions)
        results: Dict[str, SelectionResult] = {}
        for objtype, entries in sorted(stage_catalog.snapshot().items()):
            results[objtype] = selector.select(
                objtype,
                entries,
                self.limits.get(objtype),
                lambda name: self._spawn(name, manager, self._centroid),
            )
        self.staged_selections[stage] = results
        self._staged.take(stage)

        spawned = self.assets[first:]
        self.logger.info(f"'{self.name}' stage {stage} generated {len(spawned)} assets")
        return spawned

    # --- queries --------------------------------------------------------

    def is_inside(self, point: Sequence[float]) -> bool:
        """True if the point lies within any triangle of the region border."""
        if self.border is None:
            return False
        for triangle, precalc in zip(self.border.triangles, self.border.precalcs):
            if self.point_in_triangle(point, triangle, precalc):
                return True
        return False
