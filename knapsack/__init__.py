"""
knapsack/
---------
Configuration layer.  Public API:

    from knapsack import Item, Inventory
    from knapsack import ConfigurationError, check_config
"""

from knapsack.errors    import ConfigurationError, check_config
from knapsack.item      import Item
from knapsack.inventory import Inventory

__all__ = [
    "Item",
    "Inventory",
    "ConfigurationError",
    "check_config",
]
