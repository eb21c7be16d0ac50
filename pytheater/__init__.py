__version__ = "0.1.0"

# --- Configuration ---
from .settings import TheaterSettings

# --- Templates and Assets ---
from .classes.enums import AssetType, Coalition, InventoryCategory
from .classes.template import Template, make_airspace_template
from .classes.assets import Asset, AirspaceAsset, AssetManager, TemplateAsset

# --- Regions ---
from .regions import (
    Randomizer,
    Region,
    RegionState,
    SpawnLimits,
    TemplateSelector,
    load_region,
    load_regions,
)

# --- Errors ---
from .errors import (
    TheaterConfigurationError,
    DuplicateTemplateError,
    ExclusionTypeMismatchError,
    InvalidLimitsError,
    TemplateDefinitionError,
    RegionDefinitionError,
    DuplicateAssetError,
    RegionStateError,
)

# --- Inventory ---
from .systems.inventory import Inventory, InventoryRegistry, CheckResult

# --- Theater ---
from .theater import Theater

from .misc.logger import create_logger
_logger = create_logger(verbose=False, name="pytheater")
_logger.info(f"pytheater {__version__} loaded.")

# --- Visualization ---
from .visualization import RegionMapVisualizer, save_region_map
