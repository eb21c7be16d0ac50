"""
Per-base stock ledgers.

Each base owns an Inventory keyed by category then item name:

    {
        "airframes":    {"F-16C_50": 12},
        "munitions":    {"AIM-120C": 40, "Mk-82": 200},
        "ground units": {},
        "naval":        {},
        "trains":       {},
    }

A departure is validated with `check` and booked with `withdraw`.
`withdraw` never re-validates quantities; callers check first, or use
`checkout`, which does both under the ledger's lock.
"""
from __future__ import annotations

import json
import os
import threading
from dataclasses import dataclass, field
from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Optional, Tuple, Union

from ..classes.enums import STOCK_CATEGORIES, InventoryCategory
from ..misc.logger import create_logger

WithdrawalRequest = Mapping[str, Mapping[str, float]]

FLIGHT_CREW = "Flight Crew"
JET_FUEL = "Jet Fuel"

INVENTORY_FILE = "inventory.json"
MASTER_FILE = "master.json"
LINK_FILE = "link.json"
DISPLAY_NAMES_FILE = "display_names.json"
CREW_FILE = "crew.json"

_logger = create_logger(verbose=False, name="Inventory")


class InventoryError(Exception):
    """Base exception for inventory bookkeeping problems."""
    pass


class UnknownStockItemError(InventoryError):
    """Raised when a withdrawal names an item the base never stocked."""
    pass


class UnknownBaseError(InventoryError, KeyError):
    """Raised when no ledger exists for a base."""
    pass


@dataclass
class CheckResult:
    """Per line-item validity of a withdrawal request."""
    items: Dict[str, Dict[str, bool]] = field(default_factory=dict)
    all: bool = True

    def invalid_items(self) -> List[Tuple[str, str]]:
        return [
            (category, item)
            for category, lines in self.items.items()
            for item, ok in lines.items()
            if not ok
        ]

    def to_dict(self) -> Dict[str, bool]:
        """Flat {item: valid, ..., "all": valid} view."""
        flat: Dict[str, bool] = {}
        for lines in self.items.values():
            for item, ok in lines.items():
                flat[item] = flat.get(item, True) and ok
        flat["all"] = self.all
        return flat


def _quantity(value: Any) -> float:
    """Accept plain numbers or {"qty": n} records."""
    if isinstance(value, Mapping):
        value = value.get("qty", 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InventoryError(f"stock quantity must be a number, got {value!r}")
    return value


class Inventory:
    """Stock ledger of a single base."""

    def __init__(self, base_name: str, stock: Optional[Mapping[str, Mapping[str, Any]]] = None):
        self.base_name = base_name
        self._stock: Dict[str, Dict[str, float]] = {category: {} for category in STOCK_CATEGORIES}
        for category, items in (stock or {}).items():
            self._stock.setdefault(category, {}).update(
                {item: _quantity(qty) for item, qty in items.items()}
            )
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Inventory({self.base_name!r})"

    @property
    def stock(self) -> Dict[str, Dict[str, float]]:
        """Copy of the current stock."""
        return {category: dict(items) for category, items in self._stock.items()}

    def quantity(self, category: str, item: str) -> float:
        return self._stock.get(category, {}).get(item, 0)

    def check(self, request: WithdrawalRequest) -> CheckResult:
        """
        Validate a withdrawal request against current stock.

        A line is valid only when stock is strictly greater than the requested
        quantity; asking for exactly what is left fails. Items the base does
        not stock at all are invalid.
        """
        result = CheckResult()
        for category, lines in request.items():
            stocked = self._stock.get(category)
            for item, qty in lines.items():
                ok = stocked is not None and item in stocked and stocked[item] > qty
                result.items.setdefault(category, {})[item] = ok
                result.all = result.all and ok
        if not result.all:
            _logger.debug(f"{self.base_name}: request rejected, short on {result.invalid_items()}")
        return result

    def withdraw(self, request: WithdrawalRequest):
        """
        Subtract every requested quantity. Does not re-check quantities.

        Raises:
            UnknownStockItemError: If a line names an item the base never stocked
                (nothing is subtracted in that case)
        """
        for category, lines in request.items():
            for item in lines:
                if item not in self._stock.get(category, {}):
                    raise UnknownStockItemError(
                        f"{self.base_name} has no '{item}' in '{category}'"
                    )
        for category, lines in request.items():
            for item, qty in lines.items():
                self._stock[category][item] -= qty
                _logger.debug(f"{self.base_name} withdraw {category}/{item}: {qty}")

    def deposit(self, request: WithdrawalRequest):
        """Add quantities (landings, deliveries). Unknown items start from zero."""
        for category, lines in request.items():
            stocked = self._stock.setdefault(category, {})
            for item, qty in lines.items():
                stocked[item] = stocked.get(item, 0) + qty

    def checkout(self, request: WithdrawalRequest) -> CheckResult:
        """Check and, only if every line passes, withdraw as one step."""
        with self._lock:
            result = self.check(request)
            if result.all:
                self.withdraw(request)
            return result


AmmoLines = Union[Mapping[str, int], Iterable[Tuple[str, int]]]


class InventoryRegistry:
    """
    Every base ledger of a theater plus the item reference tables.

    Ledgers are created explicitly (`create` or `from_directory`); `get` never
    invents an empty ledger for an unknown base.
    """

    def __init__(
        self,
        info: Optional[Mapping[str, Any]] = None,
        links: Optional[Mapping[str, str]] = None,
        display_names: Optional[Mapping[str, str]] = None,
        crew: Optional[Mapping[str, int]] = None,
    ):
        self._inventories: Dict[str, Inventory] = {}
        self.info: Dict[str, Any] = dict(info or {})
        self.links: Dict[str, str] = dict(links or {})
        self.display_names: Dict[str, str] = dict(display_names or {})
        self.crew: Dict[str, int] = dict(crew or {})

    def create(self, base_name: str, stock: Optional[Mapping[str, Mapping[str, Any]]] = None) -> Inventory:
        if base_name in self._inventories:
            raise InventoryError(f"inventory for '{base_name}' already exists")
        inventory = Inventory(base_name, stock)
        self._inventories[base_name] = inventory
        _logger.debug(f"new inventory: {base_name}")
        return inventory

    def get(self, base_name: str) -> Inventory:
        try:
            return self._inventories[base_name]
        except KeyError:
            raise UnknownBaseError(f"no inventory for base '{base_name}'") from None

    def bases(self) -> List[str]:
        return list(self._inventories)

    def __contains__(self, base_name: object) -> bool:
        return base_name in self._inventories

    def __len__(self) -> int:
        return len(self._inventories)

    def display_name(self, item: str) -> str:
        return self.display_names.get(item, item)

    def resolve_link(self, type_name: str) -> str:
        """Stock item a munition type is booked against (itself if unlinked)."""
        return self.links.get(type_name, type_name)

    def compute_withdrawal(
        self,
        airframe: str,
        ammo: AmmoLines = (),
        fuel_fraction: Optional[float] = None,
        fuel_mass_max: Optional[float] = None,
    ) -> Dict[str, Dict[str, float]]:
        """
        Build the withdrawal request of an aircraft leaving a base.

        Args:
            airframe: Aircraft type name
            ammo: Munition type -> count carried
            fuel_fraction: Internal fuel as a fraction of capacity
            fuel_mass_max: Internal fuel capacity (kg)

        Returns:
            Request with one airframe, the munitions (booked against linked
            stock items), and crew/fuel lines under "other" when known
        """
        lines = ammo.items() if isinstance(ammo, Mapping) else ammo
        munitions: Dict[str, float] = {}
        for type_name, count in lines:
            item = self.resolve_link(type_name)
            munitions[item] = munitions.get(item, 0) + count

        request: Dict[str, Dict[str, float]] = {
            InventoryCategory.AIRFRAMES.value: {airframe: 1},
            InventoryCategory.MUNITIONS.value: munitions,
        }
        other: Dict[str, float] = {}
        if airframe in self.crew:
            other[FLIGHT_CREW] = self.crew[airframe]
        if fuel_fraction is not None and fuel_mass_max is not None:
            other[JET_FUEL] = fuel_fraction * fuel_mass_max
        if other:
            request[InventoryCategory.OTHER.value] = other
        return request

    @classmethod
    def from_directory(cls, path: str) -> "InventoryRegistry":
        """
        Load ledgers and reference tables from a directory.

        inventory.json (base -> category -> item -> qty) is required;
        master.json, link.json, display_names.json and crew.json are optional.
        """
        def read(name: str, required: bool = False) -> Dict[str, Any]:
            file_path = os.path.join(path, name)
            if not os.path.isfile(file_path):
                if required:
                    raise InventoryError(f"missing {file_path}")
                return {}
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)

        registry = cls(
            info=read(MASTER_FILE),
            links=_flatten(read(LINK_FILE)),
            display_names=_flatten(read(DISPLAY_NAMES_FILE)),
            crew=read(CREW_FILE),
        )
        for item, display in registry.display_names.items():
            if isinstance(registry.info.get(item), dict):
                registry.info[item]["displayName"] = display

        for base_name, stock in read(INVENTORY_FILE, required=True).items():
            registry.create(base_name, stock)
        _logger.info(f"loaded {len(registry)} inventories from {path}")
        return registry


def _flatten(table: Mapping[str, Any]) -> Dict[str, str]:
    """Accept {item: value} or {category: {item: value}} reference tables."""
    flat: Dict[str, str] = {}
    for key, value in table.items():
        if isinstance(value, Mapping):
            flat.update(value)
        else:
            flat[key] = value
    return flat
