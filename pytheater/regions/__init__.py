"""
Region template selection and spawn limiting.

Regions collect templates, pick which of them spawn within per-objtype
limits and exclusion groups, and defer staged templates until the theater
advances.
"""

from ..errors import (
    TheaterConfigurationError,
    DuplicateTemplateError,
    ExclusionTypeMismatchError,
    InvalidLimitsError,
    TemplateDefinitionError,
    RegionDefinitionError,
    DuplicateAssetError,
    RegionStateError,
)
from .catalog import CandidateEntry, CandidateKind, ExclusionGroup, ExclusionIndex, StageQueue, TemplateCatalog
from .randomizer import Randomizer
from .selector import CentroidAccumulator, SelectionResult, SpawnLimits, TemplateSelector
from .region import Region, RegionState
from .loader import RegionDefinition, load_region, load_region_definition, load_regions

__all__ = [
    "TheaterConfigurationError",
    "DuplicateTemplateError",
    "ExclusionTypeMismatchError",
    "InvalidLimitsError",
    "TemplateDefinitionError",
    "RegionDefinitionError",
    "DuplicateAssetError",
    "RegionStateError",
    "CandidateEntry",
    "CandidateKind",
    "ExclusionGroup",
    "ExclusionIndex",
    "StageQueue",
    "TemplateCatalog",
    "Randomizer",
    "CentroidAccumulator",
    "SelectionResult",
    "SpawnLimits",
    "TemplateSelector",
    "Region",
    "RegionState",
    "RegionDefinition",
    "load_region",
    "load_region_definition",
    "load_regions",
]
