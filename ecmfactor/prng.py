"""
Seed generators for curve selection.

A seed generator is a function ``(upper, state) -> (seed, next_state)``
returning a seed in ``[6, upper - 2]``. State is passed in and handed
back explicitly, never shared, so a factorisation is reproducible from
its initial state. A generator that has run out of seeds returns
``(None, state)``.
"""

import random
from typing import Any, Callable, Optional, Tuple

SeedGenerator = Callable[[int, Any], Tuple[Optional[int], Any]]

MIN_SEED = 6


def mk_std_gen(seed: int) -> Tuple:
    """Initial state for ``uniform_seed`` derived from an integer seed."""
    return random.Random(seed).getstate()


def uniform_seed(upper: int, state: Tuple) -> Tuple[int, Tuple]:
    """
    Draw a seed uniformly from [6, upper - 2].

    Args:
        upper: The modulus the curve will be taken over
        state: A ``random.Random`` state tuple (see mk_std_gen)

    Returns:
        Tuple of (seed, next_state)
    """
    if upper - 2 < MIN_SEED:
        raise ValueError(f"Modulus too small for curve seeds: {upper}")
    rng = random.Random()
    rng.setstate(state)
    seed = rng.randint(MIN_SEED, upper - 2)
    return seed, rng.getstate()


def step_seed(upper: int, k: int) -> Tuple[Optional[int], int]:
    """
    Step through seeds k, k+1, ... in order; state is the next seed.

    Returns ``(None, k)`` once every seed below ``upper - 1`` is used up.
    """
    if k < upper - 1:
        return k, k + 1
    return None, k
