"""
Curve search loop.

Runs single-curve attempts with fresh seeds until one yields a divisor or
the attempt budget for the current parameter level is used up. Parameter
escalation is not done here; see refiner.CurveRefiner.
"""

import logging
from dataclasses import dataclass
from math import gcd
from typing import Any, Callable, List, Optional, Tuple

from .params import CurveParams
from .prng import SeedGenerator

logger = logging.getLogger(__name__)

CurveAttempt = Callable[[int, int, int, int], Optional[int]]


@dataclass
class SearchOutcome:
    """Result of one search: a divisor (or None if exhausted) and the threaded PRNG state."""
    divisor: Optional[int]
    attempts_left: int
    state: Any

    @property
    def exhausted(self) -> bool:
        return self.divisor is None


def search(n: int, params: CurveParams, seed_generator: SeedGenerator,
           state: Any, curve: CurveAttempt) -> SearchOutcome:
    """
    Try curves on n until a divisor turns up or the budget runs out.

    The budget counts down from ``params.attempts`` and the search stops
    once it drops below zero, so up to attempts + 1 curves are tried. A
    seed generator returning None ends the search early.

    Args:
        n: Composite without small prime factors
        params: Curve bounds and attempt budget
        seed_generator: Function (n, state) -> (seed, next_state)
        state: Current PRNG state
        curve: Single-curve attempt (n, seed, b1, b2) -> divisor or None

    Returns:
        SearchOutcome; ``attempts_left`` is the budget at the attempt that
        succeeded, or -1 when exhausted
    """
    attempts = params.attempts
    while attempts >= 0:
        seed, state = seed_generator(n, state)
        if seed is None:
            logger.debug("Seed generator exhausted for %d", n)
            break
        divisor = curve(n, seed, params.b1, params.b2)
        if divisor is not None:
            if not 1 < divisor < n or n % divisor:
                raise ValueError(f"Curve attempt returned {divisor}, not a proper divisor of {n}")
            logger.debug("Curve seed %d (B1=%d, B2=%d) found divisor %d of %d",
                         seed, params.b1, params.b2, divisor, n)
            return SearchOutcome(divisor, attempts, state)
        attempts -= 1
    return SearchOutcome(None, -1, state)


def split(n: int, d: int) -> List[Tuple[int, int]]:
    """
    Split n at a discovered divisor d into pieces with exponent multipliers.

    If d and its cofactor are coprime they are returned as they are.
    Otherwise g = gcd(d, n/d) divides both, so n = (d/g) * (c/g) * g^2 and
    the three pieces come back with multipliers 1, 1, 2. Pieces equal to 1
    are left out.

    Example:
        >>> split(15, 3)
        [(3, 1), (5, 1)]
        >>> split(12, 6)
        [(3, 1), (2, 2)]
    """
    c = n // d
    g = gcd(c, d)
    if g == 1:
        pieces = [(d, 1), (c, 1)]
    else:
        logger.debug("Degenerate split of %d: gcd(%d, %d) = %d", n, d, c, g)
        pieces = [(d // g, 1), (c // g, 1), (g, 2)]
    return [(piece, mult) for piece, mult in pieces if piece > 1]
