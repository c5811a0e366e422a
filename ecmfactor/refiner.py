"""
Recursive factor refinement.

Drives the curve search over a composite and everything it splits into
until all pieces are certified prime, escalating the curve parameters
when a round confirms no prime at all. Recursion is unrolled into
explicit work lists, so deep splits do not grow the Python stack.
"""

import logging
from math import isqrt
from typing import Any, Callable, List, Optional, Tuple

from .curves import montgomery_factorisation
from .factor_list import FactorList, UnresolvedResidue, merge_all, scale
from .params import CurveParams, find_params
from .powers import highest_power, large_pf_power
from .prng import SeedGenerator
from .search import CurveAttempt, search, split

logger = logging.getLogger(__name__)

DEFAULT_DIGITS = 8
DIGITS_STEP = 4
MAX_DIGITS = 64


class CurveRefiner:
    """
    Factor composites without small prime factors by repeated ECM.

    A refinement proceeds in rounds. Each round picks curve parameters for
    the current digit estimate and spends the attempt budget on the
    composite and on every composite piece split off from it. Pieces the
    budget could not resolve are handed to new rounds, with the estimate
    raised by ``digits_step`` if the round confirmed no prime. Once the
    estimate would exceed ``max_digits`` the remaining pieces are reported
    as UnresolvedResidue entries.
    """

    def __init__(self, prime_test: Callable[[int], bool], seed_generator: SeedGenerator,
                 prime_bound: Optional[int] = None,
                 curve: CurveAttempt = montgomery_factorisation,
                 digits_step: int = DIGITS_STEP, max_digits: int = MAX_DIGITS):
        """
        Args:
            prime_test: Primality oracle
            seed_generator: Function (n, state) -> (seed, next_state)
            prime_bound: Divisors up to this bound are taken to be prime
                without testing. Only valid if the input has no prime
                factors up to sqrt(prime_bound).
            curve: Single-curve attempt (n, seed, b1, b2) -> divisor or None
            digits_step: Digit estimate increase per unsuccessful round
            max_digits: Highest digit estimate to escalate to
        """
        if digits_step <= 0:
            raise ValueError(f"digits_step must be positive, got {digits_step}")
        self.prime_test = prime_test
        self.seed_generator = seed_generator
        self.prime_bound = prime_bound
        self.curve = curve
        self.digits_step = digits_step
        self.max_digits = max_digits

    def is_terminal(self, k: int) -> bool:
        """True if k needs no further splitting."""
        if self.prime_bound is not None and k <= self.prime_bound:
            return True
        return self.prime_test(k)

    def perfect_power(self, k: int) -> Tuple[int, int]:
        if self.prime_bound is None:
            return highest_power(k)
        return large_pf_power(isqrt(self.prime_bound), k)

    def refine(self, n: int, digits: int, state: Any) -> Tuple[FactorList, Any]:
        """
        Factor n completely, as far as the search power allows.

        Args:
            n: Integer > 1 without small prime factors
            digits: Estimated digit length of the smallest prime factor
            state: PRNG state for the seed generator

        Returns:
            Tuple of (sorted factor list, final PRNG state)
        """
        if self.is_terminal(n):
            return [(n, 1)], state

        results: List[FactorList] = []
        rounds = [(n, 1, digits)]
        while rounds:
            m, mult, digs = rounds.pop()
            primes, composites, state = self.refine_round(m, find_params(digs), state)
            results.append(scale(mult, primes))
            if not composites:
                continue

            if primes:
                next_digits = digs
            else:
                next_digits = digs + self.digits_step
                if next_digits > self.max_digits:
                    for k, j in composites:
                        logger.warning("Giving up on composite %d at %d digits", k, digs)
                        results.append([UnresolvedResidue(k, mult * j)])
                    continue
                logger.debug("No prime found in %d at %d digits, trying %d digits",
                             m, digs, next_digits)
            for k, j in reversed(composites):
                rounds.append((k, mult * j, next_digits))

        return merge_all(results), state

    def refine_round(self, m: int, params: CurveParams,
                     state: Any) -> Tuple[FactorList, List[Tuple[int, int]], Any]:
        """
        Spend one parameter level on m.

        Every composite piece split off is searched again with the budget
        left over from the attempt that found it, minus one.

        Returns:
            Tuple of (confirmed prime powers, unresolved composites with
            exponent multipliers, final PRNG state)
        """
        confirmed: List[FactorList] = []
        composites: List[Tuple[int, int]] = []
        work = [(m, 1, params.attempts)]
        while work:
            k, mult, budget = work.pop()

            base, exp = self.perfect_power(k)
            if exp > 1:
                if self.is_terminal(base):
                    confirmed.append([(base, exp * mult)])
                    continue
                k, mult = base, mult * exp

            outcome = search(k, params._replace(attempts=budget),
                             self.seed_generator, state, self.curve)
            state = outcome.state
            if outcome.exhausted:
                composites.append((k, mult))
                continue

            for piece, j in reversed(split(k, outcome.divisor)):
                if self.is_terminal(piece):
                    confirmed.append([(piece, j * mult)])
                else:
                    work.append((piece, j * mult, outcome.attempts_left - 1))

        return merge_all(confirmed), composites, state
