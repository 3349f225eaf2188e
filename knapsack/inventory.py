"""
inventory.py — Item Set & Capacity
===================================
The configuration surface both solvers read.  The playground panel
edits it; the engine only ever reads `items` and `capacity`.

Responsibilities:
  1. CRUD on items                          (add / remove / update)
  2. Capacity editing                       (clamped to the slider range)
  3. Random item-set generation             (randomize)
  4. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Items are kept in insertion order.  Input order matters: it is the
    greedy tie-break and the DP row order.
  - Every mutation bumps `revision`.  Anything holding stepper state
    compares revisions and resets when they differ.
  - Editor input is clamped here (weight 1..20, value >= 1, capacity
    5..20).  The solvers themselves never clamp.
"""

import random
from typing import List, Optional

from knapsack.errors import ConfigurationError
from knapsack.item import (
    Item, ITEM_COLORS, ITEM_ICONS, MIN_WEIGHT, MAX_WEIGHT, MIN_VALUE, new_item_id,
)


MIN_CAPACITY = 5
MAX_CAPACITY = 20   # keeps the DP grid readable
DEFAULT_CAPACITY = 10

DEFAULT_ITEMS = [
    Item(id="1", name="Laptop", weight=3, value=10, color=ITEM_COLORS[0], icon=ITEM_ICONS[0]),
    Item(id="2", name="Camera", weight=4, value=12, color=ITEM_COLORS[1], icon=ITEM_ICONS[1]),
    Item(id="3", name="Food",   weight=2, value=4,  color=ITEM_COLORS[2], icon=ITEM_ICONS[2]),
    Item(id="4", name="Water",  weight=1, value=2,  color=ITEM_COLORS[3], icon=ITEM_ICONS[3]),
    Item(id="5", name="Gold",   weight=5, value=20, color=ITEM_COLORS[4], icon=ITEM_ICONS[4]),
]

RANDOM_NAMES = ["Gem", "Relic", "Potion", "Sword", "Shield", "Map", "Coin", "Helm"]


def _as_int(raw, what: str) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{what} must be a number, got {raw!r}") from None


def clamp_weight(weight: int) -> int:
    return max(MIN_WEIGHT, min(MAX_WEIGHT, _as_int(weight, "Weight")))


def clamp_value(value: int) -> int:
    return max(MIN_VALUE, _as_int(value, "Value"))


def clamp_capacity(capacity: int) -> int:
    return max(MIN_CAPACITY, min(MAX_CAPACITY, _as_int(capacity, "Capacity")))


class Inventory:
    """
    Attributes:
        items    : Ordered list of Items.
        capacity : Knapsack capacity.
        revision : Incremented on every change.
    """

    def __init__(self, items: Optional[List[Item]] = None, capacity: int = DEFAULT_CAPACITY):
        self.items:    List[Item] = list(DEFAULT_ITEMS if items is None else items)
        self.capacity: int        = capacity
        self.revision: int        = 0

    # ==================================================================
    # ITEM CRUD
    # ==================================================================
    def add_item(self, name: str, weight: int = 1, value: int = 1) -> Item:
        name = (name or "").strip()
        if not name:
            raise ConfigurationError("Item name must not be empty")
        idx = len(self.items)
        item = Item(
            id=self._unique_id(),
            name=name,
            weight=clamp_weight(weight),
            value=clamp_value(value),
            color=ITEM_COLORS[idx % len(ITEM_COLORS)],
            icon=ITEM_ICONS[idx % len(ITEM_ICONS)],
        )
        self.items.append(item)
        self._touch()
        return item

    def remove_item(self, item_id: str) -> None:
        kept = [i for i in self.items if i.id != item_id]
        if len(kept) == len(self.items):
            return
        self.items = kept
        self._touch()

    def update_item(
        self,
        item_id: str,
        name: Optional[str] = None,
        weight: Optional[int] = None,
        value: Optional[int] = None,
    ) -> Item:
        """Replace an item with an edited copy.  Items themselves never mutate."""
        for idx, old in enumerate(self.items):
            if old.id != item_id:
                continue
            new_name = old.name if name is None else name.strip()
            if not new_name:
                raise ConfigurationError("Item name must not be empty")
            new = Item(
                id=old.id,
                name=new_name,
                weight=old.weight if weight is None else clamp_weight(weight),
                value=old.value if value is None else clamp_value(value),
                color=old.color,
                icon=old.icon,
            )
            self.items[idx] = new
            self._touch()
            return new
        raise ConfigurationError(f"Unknown item id '{item_id}'")

    def get_item(self, item_id: str) -> Optional[Item]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    # ==================================================================
    # CAPACITY
    # ==================================================================
    def set_capacity(self, capacity: int) -> int:
        self.capacity = clamp_capacity(capacity)
        self._touch()
        return self.capacity

    # ==================================================================
    # GENERATOR
    # ==================================================================
    def randomize(self, seed: Optional[int] = None) -> List[Item]:
        """Replace the item set with 4–7 random items."""
        if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
            raise ConfigurationError(f"Seed must be an integer, got {seed!r}")
        rng = random.Random(seed)
        count = rng.randint(4, 7)
        self.items = [
            Item(
                id=f"{new_item_id()}-{i}",
                name=RANDOM_NAMES[i % len(RANDOM_NAMES)],
                weight=rng.randint(1, 8),
                value=rng.randint(5, 49),
                color=ITEM_COLORS[i % len(ITEM_COLORS)],
                icon=ITEM_ICONS[i % len(ITEM_ICONS)],
            )
            for i in range(count)
        ]
        self._touch()
        return self.items

    def reset_defaults(self) -> None:
        self.items = list(DEFAULT_ITEMS)
        self.capacity = DEFAULT_CAPACITY
        self._touch()

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "items":    [i.to_dict() for i in self.items],
            "capacity": self.capacity,
            "revision": self.revision,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Inventory":
        inv = cls(
            items=[Item.from_dict(d) for d in data.get("items", [])],
            capacity=data.get("capacity", DEFAULT_CAPACITY),
        )
        inv.revision = data.get("revision", 0)
        return inv

    # ==================================================================
    # Internal
    # ==================================================================
    def _unique_id(self) -> str:
        existing = {i.id for i in self.items}
        nid = new_item_id()
        while nid in existing:
            nid = new_item_id()
        return nid

    def _touch(self) -> None:
        self.revision += 1

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"Inventory(items={len(self.items)}, capacity={self.capacity}, rev={self.revision})"
