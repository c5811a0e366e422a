"""
Integer roots and perfect power detection.
"""

from typing import Tuple

from .sieve import primes_up_to


def integer_root(n: int, k: int) -> int:
    """
    Return the k-th root of n rounded down to the nearest integer.

    Newton iteration on integers, started from a power of two that is
    guaranteed to be above the root.

    Example:
        >>> integer_root(1000, 3)
        10
        >>> integer_root(1001, 3)
        10
    """
    if n < 0:
        raise ValueError(f"integer_root of negative number: {n}")
    if k < 1:
        raise ValueError(f"Root degree must be positive, got {k}")
    if n < 2 or k == 1:
        return n
    s = 1 << (n.bit_length() // k + 1)
    while True:
        t = ((k - 1) * s + n // s ** (k - 1)) // k
        if t >= s:
            return s
        s = t


def integer_log(base: int, n: int) -> int:
    """Largest e with base**e <= n (n >= 1, base >= 2)."""
    e = 0
    power = base
    while power <= n:
        power *= base
        e += 1
    return e


def _exact_root(n: int, p: int):
    r = integer_root(n, p)
    if r ** p == n:
        return r
    return None


def _strip_powers(n: int, exponents) -> Tuple[int, int]:
    base, exp = n, 1
    progress = True
    while progress:
        progress = False
        for p in exponents:
            if base < 2 ** p:
                break
            r = _exact_root(base, p)
            if r is not None:
                base, exp = r, exp * p
                progress = True
                break
    return base, exp


def highest_power(n: int) -> Tuple[int, int]:
    """
    Find the largest e and base b with n == b**e.

    Args:
        n: Integer > 1

    Returns:
        Tuple of (base, exponent); exponent is 1 if n is no perfect power

    Example:
        >>> highest_power(2 ** 10)
        (2, 10)
        >>> highest_power(36)
        (6, 2)
    """
    if n < 4:
        return n, 1
    return _strip_powers(n, primes_up_to(n.bit_length()))


def large_pf_power(bound: int, n: int) -> Tuple[int, int]:
    """
    Like highest_power, for n known to have no prime factor below ``bound``.

    Every base of n is then at least ``bound``, so only exponents up to
    log_bound(n) need to be tried; for typical curve residues that is a
    handful of root extractions instead of one per prime up to log2(n).
    """
    if bound < 2:
        return highest_power(n)
    max_exp = integer_log(bound, n)
    if max_exp < 2:
        return n, 1
    return _strip_powers(n, primes_up_to(max_exp))
