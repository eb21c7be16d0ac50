"""Campaign systems that run alongside region generation."""

from .inventory import (
    CheckResult,
    Inventory,
    InventoryError,
    InventoryRegistry,
    UnknownBaseError,
    UnknownStockItemError,
)

__all__ = [
    "CheckResult",
    "Inventory",
    "InventoryError",
    "InventoryRegistry",
    "UnknownBaseError",
    "UnknownStockItemError",
]
