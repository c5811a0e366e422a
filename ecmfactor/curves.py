"""
Montgomery curve arithmetic and the single-curve ECM attempt.

Points are kept in projective (X : Z) form on the curve
B*y^2 = x^3 + A*x^2 + x modulo n; only the constant a24 = (A + 2) / 4 is
needed for doubling, and addition is differential (it needs P - Q).
Arithmetic is done modulo a composite n, so "point at infinity" shows up
as Z sharing a factor with n, which is what the method looks for.
"""

import logging
from math import gcd
from typing import Optional, Tuple

from .powers import integer_log
from .sieve import iter_primes

logger = logging.getLogger(__name__)

Point = Tuple[int, int]


class MontgomeryCurve:
    """A Montgomery curve modulo n, identified by its a24 constant."""

    def __init__(self, n: int, a24: int):
        self.n = n
        self.a24 = a24 % n

    @classmethod
    def from_seed(cls, seed: int, n: int):
        """
        Build a curve and starting point from a seed (Suyama's parameterisation).

        Args:
            seed: Curve seed sigma, 6 <= seed <= n - 2
            n: Modulus

        Returns:
            Tuple of (curve, point, divisor). ``divisor`` is a nontrivial
            divisor of n if the curve constant could not be inverted because
            of one, in which case curve and point are None.
        """
        u = (seed * seed - 5) % n
        v = (4 * seed) % n
        x = pow(u, 3, n)
        z = pow(v, 3, n)
        a24_num = pow(v - u, 3, n) * (3 * u + v) % n
        a24_den = 16 * x * v % n
        g = gcd(a24_den, n)
        if g != 1:
            if g == n:
                return None, None, None
            return None, None, g
        a24 = a24_num * pow(a24_den, -1, n)
        return cls(n, a24), (x, z), None

    def double(self, p: Point) -> Point:
        x, z = p
        n = self.n
        r = x + z
        s = x - z
        rr = r * r % n
        ss = s * s % n
        t = rr - ss
        return rr * ss % n, t * (ss + self.a24 * t) % n

    def add(self, diff: Point, p: Point, q: Point) -> Point:
        """Return p + q given diff = p - q (or q - p)."""
        x0, z0 = diff
        x1, z1 = p
        x2, z2 = q
        n = self.n
        a = (x1 - z1) * (x2 + z2)
        b = (x1 + z1) * (x2 - z2)
        apb = a + b
        amb = a - b
        return z0 * apb * apb % n, x0 * amb * amb % n

    def multiply(self, k: int, p: Point) -> Point:
        """Scalar multiplication by the Montgomery ladder."""
        if k == 0:
            return 0, 0
        if k == 1:
            return p
        low, high = p, self.double(p)
        for bit in bin(k)[3:]:
            if bit == '1':
                low = self.add(p, high, low)
                high = self.double(high)
            else:
                high = self.add(p, high, low)
                low = self.double(low)
        return low


def _max_power(p: int, bound: int) -> int:
    return p ** max(integer_log(p, bound), 1)


def montgomery_factorisation(n: int, seed: int, b1: int, b2: int) -> Optional[int]:
    """
    Try to find a factor of n on the curve determined by ``seed``.

    Stage 1 multiplies the starting point by the largest power of every
    prime up to b1 that does not exceed b1, i.e. by lcm(1..b1). Stage 2
    then multiplies by each prime between b1 and b2 in turn. If the order of
    the point modulo some prime factor p of n divides the accumulated
    multiplier, but not modulo the others, gcd(Z, n) reveals p.

    It is assumed that n has no small prime factors.

    Args:
        n: Composite to search
        seed: Curve seed, 6 <= seed <= n - 2
        b1: Stage 1 bound
        b2: Stage 2 bound

    Returns:
        A nontrivial divisor of n (not necessarily prime), or None
    """
    curve, point, divisor = MontgomeryCurve.from_seed(seed, n)
    if curve is None:
        if divisor is not None:
            logger.debug("Curve constant for seed %d not invertible modulo %d", seed, n)
        return divisor

    for p in (2, 3, 5):
        point = curve.multiply(_max_power(p, b1), point)

    stage2 = False
    for p in iter_primes(7, b2):
        z = point[1]
        if z == 0:
            return None
        if p > b1 and not stage2:
            g = gcd(z, n)
            if g != 1:
                return g
            stage2 = True
        if p <= b1:
            point = curve.multiply(_max_power(p, b1), point)
        else:
            point = curve.multiply(p, point)

    g = gcd(point[1], n)
    if 1 < g < n:
        return g
    return None
