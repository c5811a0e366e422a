"""
Factorisation entry points.

``factorise`` is the validated front door. The other functions expose the
pieces it is built from, for callers that want to pick the primality
test, the seed generator and its state, the prime bound, or the initial
digit estimate themselves.
"""

import logging
from typing import Any, Callable, Optional

from .curves import montgomery_factorisation
from .errors import InvalidInputError
from .factor_list import FactorList
from .primality import is_prime
from .prng import SeedGenerator, mk_std_gen, step_seed, uniform_seed, MIN_SEED
from .refiner import DEFAULT_DIGITS, DIGITS_STEP, MAX_DIGITS, CurveRefiner
from .search import CurveAttempt
from .sieve import small_factors

logger = logging.getLogger(__name__)

SMALL_FACTOR_BOUND = 100000
PRIME_BOUND = 10 ** 10  # SMALL_FACTOR_BOUND ** 2
SEED_MASK = 0xdeadbeef

# factorise_with default: prime_bound follows small_factor_bound squared
BOUND_SQUARED = object()


def _check_input(n: Any) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidInputError(f"Can only factorise integers, got {n!r}")
    if n == 0:
        raise InvalidInputError("0 has no prime factorisation")
    return n


def factorise(n: int) -> FactorList:
    """
    Prime factorisation of n.

    Includes a factor (-1, 1) for negative n; the factorisation of 1 is
    empty. The curve seeds are derived from n, so results are reproducible.

    Args:
        n: Nonzero integer

    Returns:
        List of (prime, exponent) sorted by prime. Composite pieces the
        search could not split appear as UnresolvedResidue entries.

    Raises:
        InvalidInputError: If n is zero or not an integer

    Example:
        >>> factorise(-12)
        [(-1, 1), (2, 2), (3, 1)]
    """
    n = _check_input(n)
    if n < 0:
        return [(-1, 1)] + factorise(-n)
    if n == 1:
        return []
    return factorise_unchecked(n)


def factorise_unchecked(n: int) -> FactorList:
    """Like factorise, without input checking; requires n > 1."""
    return default_std_gen_factorisation_unchecked(mk_std_gen(n ^ SEED_MASK), n)


def default_std_gen_factorisation(state: Any, n: int) -> FactorList:
    """
    Strip small prime factors, then run curve factorisation on the rest.

    Args:
        state: Initial state for uniform_seed (see mk_std_gen)
        n: Nonzero integer

    Raises:
        InvalidInputError: If n is zero or not an integer
    """
    n = _check_input(n)
    if n < 0:
        return [(-1, 1)] + default_std_gen_factorisation(state, -n)
    if n == 1:
        return []
    return default_std_gen_factorisation_unchecked(state, n)


def default_std_gen_factorisation_unchecked(state: Any, n: int) -> FactorList:
    """Like default_std_gen_factorisation, requires n > 1."""
    factors, residue = small_factors(SMALL_FACTOR_BOUND, n)
    if residue is None:
        return factors
    return factors + std_gen_factorisation(PRIME_BOUND, state, None, residue)


def step_factorisation(n: int, max_digits: int = MAX_DIGITS) -> FactorList:
    """
    Like factorise_unchecked, but steps through the curve seeds 6, 7, 8, ...
    in order instead of drawing them at random. Requires n > 1.
    """
    factors, residue = small_factors(SMALL_FACTOR_BOUND, n)
    if residue is None:
        return factors
    return factors + curve_factorisation(PRIME_BOUND, is_prime, step_seed, MIN_SEED,
                                         None, residue, max_digits=max_digits)


def std_gen_factorisation(prime_bound: Optional[int], state: Any,
                          digits: Optional[int], n: int) -> FactorList:
    """
    Curve factorisation with the Baillie-PSW test and uniform seeds.

    Small prime factors must have been stripped before.

    Args:
        prime_bound: Divisors up to this bound are taken to be prime
        state: Initial state for uniform_seed (see mk_std_gen)
        digits: Estimated digit length of the smallest prime factor
        n: The number to factorise
    """
    return curve_factorisation(prime_bound, is_prime, uniform_seed, state, digits, n)


def curve_factorisation(prime_bound: Optional[int], prime_test: Callable[[int], bool],
                        seed_generator: SeedGenerator, state: Any,
                        digits: Optional[int], n: int, *,
                        curve: CurveAttempt = montgomery_factorisation,
                        digits_step: int = DIGITS_STEP,
                        max_digits: int = MAX_DIGITS) -> FactorList:
    """
    Fully parameterised curve factorisation driver.

    If n is known to have no prime divisors below b, any divisor found
    below b*b must be prime, so passing b*b as ``prime_bound`` skips the
    primality test for those. A custom ``prime_test`` helps when all prime
    divisors have a structure that is easy to test for. The seed generator
    and its initial state decide which curves are tried; a lucky choice
    makes a large difference, so if one state takes too long, try another.

    Small prime factors must have been stripped before. The method is
    unlikely to succeed if n has more than one really large prime factor.

    Args:
        prime_bound: Lower bound for composite divisors, or None
        prime_test: Primality oracle
        seed_generator: Function (n, state) -> (seed, next_state) with
            6 <= seed <= n - 2
        state: Initial PRNG state
        digits: Estimated digit length of the smallest prime factor
            (default 8)
        n: The number to factorise, n > 1
        curve: Single-curve attempt (n, seed, b1, b2) -> divisor or None
        digits_step: Digit estimate increase per unsuccessful round
        max_digits: Highest digit estimate before giving up on a piece

    Returns:
        List of (prime, exponent) sorted by prime, with UnresolvedResidue
        entries for pieces that could not be split
    """
    refiner = CurveRefiner(prime_test, seed_generator, prime_bound=prime_bound,
                           curve=curve, digits_step=digits_step, max_digits=max_digits)
    factors, _ = refiner.refine(n, DEFAULT_DIGITS if digits is None else digits, state)
    return factors


def factorise_with(n: int, *, small_factor_bound: int = SMALL_FACTOR_BOUND,
                   prime_bound: Any = BOUND_SQUARED,
                   digits: Optional[int] = None, digits_step: int = DIGITS_STEP,
                   max_digits: int = MAX_DIGITS, seed: Optional[int] = None,
                   method: str = "random") -> FactorList:
    """
    Validated factorisation with every search setting exposed.

    This is what the command line runs; the keyword arguments mirror the
    ``factorisation`` section of ecmfactor.yaml.

    Args:
        n: Nonzero integer
        small_factor_bound: Trial division bound
        prime_bound: Divisors up to this bound are taken to be prime; must
            not exceed small_factor_bound squared, which is also the
            default. None disables the shortcut.
        digits: Initial digit estimate (default 8)
        digits_step: Digit estimate increase per unsuccessful round
        max_digits: Highest digit estimate before giving up on a piece
        seed: PRNG seed; None derives one from n
        method: 'random' for uniformly drawn seeds, 'step' for 6, 7, 8, ...

    Raises:
        InvalidInputError: If n is zero or not an integer
        ValueError: For an unknown method, or a prime_bound above
            small_factor_bound squared
    """
    n = _check_input(n)
    if prime_bound is BOUND_SQUARED:
        prime_bound = small_factor_bound ** 2
    elif prime_bound is not None and prime_bound > small_factor_bound ** 2:
        raise ValueError(
            f"prime_bound {prime_bound} exceeds small_factor_bound squared "
            f"({small_factor_bound ** 2})"
        )
    if n < 0:
        return [(-1, 1)] + factorise_with(
            -n, small_factor_bound=small_factor_bound, prime_bound=prime_bound,
            digits=digits, digits_step=digits_step, max_digits=max_digits,
            seed=seed, method=method)
    if n == 1:
        return []

    if method == "random":
        generator, state = uniform_seed, mk_std_gen(n ^ SEED_MASK if seed is None else seed)
    elif method == "step":
        generator, state = step_seed, MIN_SEED if seed is None else max(seed, MIN_SEED)
    else:
        raise ValueError(f"Unknown seed method: {method}")

    factors, residue = small_factors(small_factor_bound, n)
    if residue is None:
        return factors
    logger.info("Running curve factorisation on %d-digit cofactor", len(str(residue)))
    return factors + curve_factorisation(prime_bound, is_prime, generator, state, digits,
                                         residue, digits_step=digits_step,
                                         max_digits=max_digits)
