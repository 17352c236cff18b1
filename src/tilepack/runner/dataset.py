"""Dataset generation and item orderings for layout experiments."""

from typing import Callable

import numpy as np

from tilepack.core.models import Item


def generate_items(
    count: int = 100,
    min_size: float = 40.0,
    max_size: float = 240.0,
    seed: int | None = None,
) -> list[Item]:
    """
    Generate random tiles for experimentation.

    Args:
        count: Number of items to generate
        min_size: Smallest width/height
        max_size: Largest width/height
        seed: Random seed for reproducibility (default: None)

    Returns:
        List of Item objects with sizes rounded to two decimals
    """
    rng = np.random.default_rng(seed)
    sizes = np.round(rng.uniform(min_size, max_size, size=(count, 2)), 2)
    return [
        Item(id=i, width=float(w), height=float(h))
        for i, (w, h) in enumerate(sizes)
    ]


def random_order(items: list[Item], seed: int | None = 0) -> list[Item]:
    """
    Return items in random order.

    Args:
        items: List of items
        seed: Random seed for the shuffle (default: 0)

    Returns:
        Shuffled copy of items
    """
    rng = np.random.default_rng(seed)
    return [items[i] for i in rng.permutation(len(items))]


def area_sorted_order(items: list[Item]) -> list[Item]:
    """
    Sort items by area (largest first), ties by id.

    Args:
        items: List of items

    Returns:
        Items sorted by area descending
    """
    return sorted(items, key=lambda it: (-it.area, it.id))


def height_sorted_order(items: list[Item]) -> list[Item]:
    """
    Sort items by height (tallest first), ties by id.

    Args:
        items: List of items

    Returns:
        Items sorted by height descending
    """
    return sorted(items, key=lambda it: (-it.height, it.id))


# Map of ordering strategy names to functions
ORDERING_STRATEGIES: dict[str, Callable[[list[Item]], list[Item]]] = {
    "random": random_order,
    "area_sorted": area_sorted_order,
    "height_sorted": height_sorted_order,
}


def get_ordering_strategy(name: str) -> Callable[[list[Item]], list[Item]]:
    """
    Get an ordering strategy function by name.

    Args:
        name: Strategy name (random, area_sorted, height_sorted)

    Returns:
        Ordering function

    Raises:
        ValueError: If strategy name is not recognized
    """
    if name not in ORDERING_STRATEGIES:
        raise ValueError(
            f"Unknown ordering strategy: {name}. "
            f"Available: {list(ORDERING_STRATEGIES.keys())}"
        )
    return ORDERING_STRATEGIES[name]
