"""
Probabilistic primality testing.

``is_prime`` is the Baillie-PSW test: a strong probable prime test to
base 2 followed by a strong Lucas probable prime test. No composite is
known to pass both, and none exists below 2^64.
"""

from math import isqrt
from typing import Iterable, Tuple

SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47)


def jacobi(a: int, n: int) -> int:
    """Jacobi symbol (a/n) for odd positive n."""
    if n <= 0 or n % 2 == 0:
        raise ValueError(f"n must be odd positive, got {n}")
    a %= n
    result = 1
    while a:
        while a % 2 == 0:
            a //= 2
            if n % 8 in (3, 5):
                result = -result
        # quadratic reciprocity
        if a % 4 == 3 and n % 4 == 3:
            result = -result
        a, n = n % a, a
    return result if n == 1 else 0


def miller_rabin(n: int, bases: Iterable[int]) -> bool:
    """
    Strong probable prime test of odd n > 3 to each of the given bases.

    Returns:
        False if some base proves n composite, True otherwise
    """
    # Write n-1 as 2^r * d
    r, d = 0, n - 1
    while d % 2 == 0:
        r += 1
        d //= 2

    for a in bases:
        a %= n
        if a in (0, 1, n - 1):
            continue
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(r - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def _selfridge_params(n: int) -> Tuple[int, int, int]:
    """D from 5, -7, 9, -11, ... with (D/n) = -1; P = 1, Q = (1 - D) / 4."""
    d = 5
    while True:
        j = jacobi(d, n)
        if j == -1:
            return d, 1, (1 - d) // 4
        if j == 0 and abs(d) != n:
            return 0, 0, 0
        d = -d - 2 if d > 0 else -d + 2


def _half(x: int, n: int) -> int:
    if x % 2:
        x += n
    return (x // 2) % n


def strong_lucas(n: int) -> bool:
    """Strong Lucas probable prime test with Selfridge parameters, odd n > 2."""
    root = isqrt(n)
    if root * root == n:
        return False
    d_param, p, q = _selfridge_params(n)
    if d_param == 0:
        return False

    # n + 1 = d * 2^s
    d = n + 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1

    u, v, qk = 1, p, q % n
    for bit in bin(d)[3:]:
        u, v = (u * v) % n, (v * v - 2 * qk) % n
        qk = (qk * qk) % n
        if bit == '1':
            u, v = _half(p * u + v, n), _half(d_param * u + p * v, n)
            qk = (qk * q) % n

    if u == 0 or v == 0:
        return True
    for _ in range(s - 1):
        v = (v * v - 2 * qk) % n
        qk = (qk * qk) % n
        if v == 0:
            return True
    return False


def is_prime(n: int) -> bool:
    """
    Baillie-PSW probable prime test.

    Args:
        n: Number to test

    Returns:
        True if n is (probably) prime, False if definitely composite

    Example:
        >>> is_prime(97)
        True
        >>> is_prime(561)
        False
    """
    if n < 2:
        return False
    for p in SMALL_PRIMES:
        if n % p == 0:
            return n == p
    if n < SMALL_PRIMES[-1] ** 2:
        return True
    if not miller_rabin(n, (2,)):
        return False
    return strong_lucas(n)
