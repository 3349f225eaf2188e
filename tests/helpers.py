# tests/helpers.py

import itertools

from knapsack import Item


def make_items(*specs):
    """make_items(("a", 6, 30), ("b", 5, 20)) → Items with id == name."""
    return [Item(id=name, name=name, weight=w, value=v) for name, w, v in specs]


# greedy takes "a" and is stuck at 30; the optimum is b + c = 40
TRAP_ITEMS = make_items(("a", 6, 30), ("b", 5, 20), ("c", 5, 20))
TRAP_CAPACITY = 10


def brute_force(items, capacity):
    """Best total value over every subset."""
    best = 0
    for r in range(len(items) + 1):
        for combo in itertools.combinations(items, r):
            if sum(i.weight for i in combo) <= capacity:
                best = max(best, sum(i.value for i in combo))
    return best
