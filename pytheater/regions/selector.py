"""
Constrained random selection of templates for one object type.

A pass works on a private copy of the objtype's candidate list:

1. limit = randint(min, max) (everything when the objtype has no limits)
2. forced pass: every plain template flagged spawn_always spawns and counts
   toward the limit; exclusion groups are never forced
3. random pass: while candidates remain and current < limit, pick a uniform
   candidate; an exclusion group spawns one uniform member

Running out of candidates before the limit is reached is not an error.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Sequence

from ..misc.logger import create_logger
from ..misc.math_utils import PositionType, running_centroid, to_horizontal
from .catalog import CandidateEntry, CandidateKind, ExclusionIndex
from ..errors import InvalidLimitsError
from .randomizer import Randomizer


@dataclass(frozen=True)
class SpawnLimits:
    """Configured spawn-count bounds for one objtype."""
    min: int
    max: int

    def __post_init__(self):
        for label, value in (("min", self.min), ("max", self.max)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidLimitsError(f"limit {label} must be an integer, got {value!r}")
        if self.min < 0:
            raise InvalidLimitsError(f"limit min must be non-negative, got {self.min}")
        if self.min > self.max:
            raise InvalidLimitsError(f"limit min {self.min} exceeds max {self.max}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SpawnLimits":
        try:
            return cls(min=data["min"], max=data["max"])
        except KeyError as e:
            raise InvalidLimitsError(f"limits entry missing key {e}") from e

    @classmethod
    def everything(cls, count: int) -> "SpawnLimits":
        return cls(min=count, max=count)


@dataclass
class LimitsRun:
    """Counters of a single selection pass."""
    min: int
    max: int
    limit: int
    current: int = 0

    @property
    def satisfied(self) -> bool:
        return self.current >= self.limit


@dataclass
class CentroidAccumulator:
    """Running mean of spawned asset locations, projected to (x, z)."""
    point: Optional[PositionType] = None
    count: int = 0

    def add(self, location: Sequence[float]):
        self.point, self.count = running_centroid(to_horizontal(location), self.point, self.count)

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def point_or(self, default: PositionType) -> PositionType:
        return default if self.point is None else self.point


@dataclass
class SelectionResult:
    objtype: str
    limit: int = 0
    forced: List[str] = field(default_factory=list)
    selected: List[str] = field(default_factory=list)

    @property
    def spawned(self) -> List[str]:
        """Template names in materialization order."""
        return self.forced + self.selected

    @property
    def current(self) -> int:
        return len(self.forced) + len(self.selected)


class TemplateSelector:
    """Picks which templates of an objtype spawn, honoring limits and exclusions."""

    def __init__(
        self,
        exclusions: ExclusionIndex,
        lookup: Callable[[str], Any],
        randomizer: Optional[Randomizer] = None,
        verbose: bool = False,
    ):
        """
        Args:
            exclusions: Exclusion groups referenced by EXCLUSION candidates
            lookup: Resolves a template name to its Template (or None)
            randomizer: Random source; a fresh unseeded one by default
            verbose: Log each pick
        """
        self.exclusions = exclusions
        self.lookup = lookup
        self.randomizer = randomizer or Randomizer()
        self.logger = create_logger(verbose=verbose, name="Selector", debug=verbose)

    def _is_forced(self, entry: CandidateEntry) -> bool:
        if entry.kind is not CandidateKind.TEMPLATE:
            return False
        template = self.lookup(entry.name)
        return template is not None and template.spawn_always

    def select(
        self,
        objtype: str,
        candidates: Sequence[CandidateEntry],
        limits: Optional[SpawnLimits],
        materialize: Callable[[str], Any],
    ) -> SelectionResult:
        """
        Run one selection pass.

        Args:
            objtype: Object type being generated (for diagnostics)
            candidates: Candidate entries; not modified
            limits: Configured bounds, or None to spawn every candidate
            materialize: Called with each chosen template name

        Returns:
            SelectionResult listing forced and randomly selected names
        """
        result = SelectionResult(objtype)
        if not candidates:
            return result

        if limits is None:
            limits = SpawnLimits.everything(len(candidates))
        run = LimitsRun(min=limits.min, max=limits.max, limit=self.randomizer.randint(limits.min, limits.max))
        result.limit = run.limit

        forced: List[CandidateEntry] = []
        remaining: List[CandidateEntry] = []
        for entry in candidates:
            (forced if self._is_forced(entry) else remaining).append(entry)

        for entry in forced:
            materialize(entry.name)
            result.forced.append(entry.name)
            run.current += 1

        while remaining and not run.satisfied:
            entry = remaining.pop(self.randomizer.index(len(remaining)))
            name = entry.resolve(self.exclusions, self.randomizer.index)
            materialize(name)
            result.selected.append(name)
            run.current += 1

        self.logger.debug(
            f"{objtype}: limit {run.limit} ({run.min}..{run.max}), "
            f"spawned {run.current}, {len(remaining)} candidates left"
        )
        return result
