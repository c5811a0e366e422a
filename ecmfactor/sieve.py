"""
Prime generation and small factor stripping.

Primes come from a sieve of Eratosthenes; ``iter_primes`` sieves in
segments so stage 2 of a curve can walk the primes up to B2 without
holding them all in memory.
"""

import logging
from math import isqrt
from typing import Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

SEGMENT_SIZE = 1 << 18


def primes_up_to(limit: int) -> List[int]:
    """
    Return all primes <= limit.

    Example:
        >>> primes_up_to(20)
        [2, 3, 5, 7, 11, 13, 17, 19]
    """
    if limit < 2:
        return []
    sieve = bytearray([1]) * (limit + 1)
    sieve[0] = sieve[1] = 0
    for p in range(2, isqrt(limit) + 1):
        if sieve[p]:
            sieve[p * p::p] = bytes(len(range(p * p, limit + 1, p)))
    return [i for i, flag in enumerate(sieve) if flag]


def iter_primes(start: int, stop: int) -> Iterator[int]:
    """
    Yield the primes p with start <= p <= stop in ascending order.

    Sieves segment by segment using the base primes up to sqrt(stop), so
    memory stays bounded by SEGMENT_SIZE however large ``stop`` is. The
    generator is finite; call again to restart.
    """
    start = max(start, 2)
    if stop < start:
        return
    base = primes_up_to(isqrt(stop))
    low = start
    while low <= stop:
        high = min(low + SEGMENT_SIZE - 1, stop)
        segment = bytearray([1]) * (high - low + 1)
        for p in base:
            if p * p > high:
                break
            first = max(p * p, (low + p - 1) // p * p)
            if first > high:
                continue
            segment[first - low::p] = bytes(len(range(first, high + 1, p)))
        for i, flag in enumerate(segment):
            if flag:
                yield low + i
        low = high + 1


def _split_off(p: int, m: int) -> Tuple[int, int]:
    k = 0
    while m % p == 0:
        m //= p
        k += 1
    return k, m


def small_factors(bound: int, n: int) -> Tuple[List[Tuple[int, int]], Optional[int]]:
    """
    Trial division by all primes up to ``bound``.

    Args:
        bound: Largest prime to divide by
        n: Number to factor, n > 1

    Returns:
        Tuple of (prime factors with multiplicities, residue). The residue
        is None when the factorisation is complete, otherwise a cofactor > 1
        with no prime factor <= bound. A cofactor below (bound+1)**2 cannot
        be composite and is returned as a prime factor instead.

    Example:
        >>> small_factors(100000, 360)
        ([(2, 3), (3, 2), (5, 1)], None)
    """
    factors: List[Tuple[int, int]] = []
    m = n
    k, m = _split_off(2, m)
    if k:
        factors.append((2, k))
    if m == 1:
        return factors, None

    for p in iter_primes(3, bound):
        if m < p * p:
            factors.append((m, 1))
            return factors, None
        k, m = _split_off(p, m)
        if k:
            factors.append((p, k))
            if m == 1:
                return factors, None

    if m < (bound + 1) ** 2:
        factors.append((m, 1))
        return factors, None
    logger.debug("Trial division up to %d left cofactor %d", bound, m)
    return factors, m
