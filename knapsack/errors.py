"""
errors.py — Configuration Validation
=====================================
The algorithmic core trusts nothing about its inputs except what
`check_config` has verified.  Every public entry point (reference
solvers, stepper resets) calls it first and fails fast; nothing is
clamped here.  Clamping is the editor's job (see Inventory).
"""

from typing import Iterable


class ConfigurationError(ValueError):
    """Items or capacity that the solvers cannot accept."""


def _is_int(value) -> bool:
    # bool is an int subclass, but True is not a weight
    return isinstance(value, int) and not isinstance(value, bool)


def check_config(items: Iterable, capacity) -> None:
    """
    Raise ConfigurationError unless:
      • capacity is an int ≥ 0
      • every item has an int weight ≥ 1 and an int value ≥ 1
      • item ids are unique
    """
    if not _is_int(capacity):
        raise ConfigurationError(f"Capacity must be an integer, got {capacity!r}")
    if capacity < 0:
        raise ConfigurationError(f"Capacity must be >= 0, got {capacity}")

    seen = set()
    for item in items:
        if not _is_int(item.weight) or item.weight < 1:
            raise ConfigurationError(
                f"Item '{item.name}' has invalid weight {item.weight!r} (must be an integer >= 1)"
            )
        if not _is_int(item.value) or item.value < 1:
            raise ConfigurationError(
                f"Item '{item.name}' has invalid value {item.value!r} (must be an integer >= 1)"
            )
        if item.id in seen:
            raise ConfigurationError(f"Duplicate item id '{item.id}'")
        seen.add(item.id)
