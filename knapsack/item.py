"""
item.py — Knapsack Item
=======================
One candidate for the knapsack.  Items are immutable: editing an item
in the playground produces a new Item, so a running simulation can
never see a weight or value change underneath it.

Design decisions:
  - `color` and `icon` are presentation hints only.  No solver reads them.
  - `ratio` is computed, never stored, so it can't drift from
    value / weight.
"""

from dataclasses import dataclass
import uuid


# ---------------------------------------------------------------------------
# Palettes: assigned round-robin by list position
# ---------------------------------------------------------------------------
ITEM_ICONS = ["💻", "📷", "🍔", "💧", "🏆", "🎸", "📱", "👟", "📚", "🔦", "💊", "🔑"]
ITEM_COLORS = [
    "#3b82f6", "#a855f7", "#22c55e", "#06b6d4",
    "#eab308", "#ef4444", "#ec4899", "#f97316", "#14b8a6",
]

MIN_WEIGHT = 1
MAX_WEIGHT = 20     # editor limit; the solvers accept any weight >= 1
MIN_VALUE  = 1


def new_item_id() -> str:
    return str(uuid.uuid4())[:8]


@dataclass(frozen=True)
class Item:
    """
    Attributes:
        id     : Unique identifier within one configuration.
        name   : Display name.
        weight : Positive integer.
        value  : Positive integer.
        color  : Hex color for the renderer.
        icon   : Emoji shown next to the name.
    """

    id:     str
    name:   str
    weight: int
    value:  int
    color:  str = ITEM_COLORS[0]
    icon:   str = ITEM_ICONS[0]

    @property
    def ratio(self) -> float:
        return self.value / self.weight

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":     self.id,
            "name":   self.name,
            "weight": self.weight,
            "value":  self.value,
            "color":  self.color,
            "icon":   self.icon,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Item":
        return cls(
            id=data["id"],
            name=data["name"],
            weight=data["weight"],
            value=data["value"],
            color=data.get("color", ITEM_COLORS[0]),
            icon=data.get("icon", ITEM_ICONS[0]),
        )

    def __repr__(self) -> str:
        return f"Item(id={self.id}, name={self.name}, w={self.weight}, v={self.value})"
