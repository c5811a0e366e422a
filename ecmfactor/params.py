"""
Curve parameter table for ECM.

Maps an estimate of the decimal size of the smallest unknown prime factor
to the stage bounds (B1, B2) and the number of curves to try with them.
The values are roughly those listed on Dario Alpern's ECM site.
"""

from typing import NamedTuple, Tuple


class CurveParams(NamedTuple):
    """Stage 1 bound, stage 2 bound and curve budget for one search level."""
    b1: int
    b2: int
    attempts: int


# (digits, B1, B2, curves)
CURVE_PARAMS: Tuple[Tuple[int, int, int, int], ...] = (
    (12, 400, 10000, 10),
    (15, 2000, 50000, 25),
    (20, 11000, 150000, 90),
    (25, 50000, 500000, 300),
    (30, 250000, 1500000, 700),
    (35, 1000000, 4000000, 1800),
    (40, 3000000, 12000000, 5100),
    (45, 11000000, 45000000, 10600),
    (50, 43000000, 200000000, 19300),
    (55, 80000000, 400000000, 30000),
    (60, 120000000, 700000000, 50000),
)

DEFAULT_PARAMS = CurveParams(100, 1000, 7)


def find_params(digits: int) -> CurveParams:
    """
    Get curve parameters for a factor of the given digit length.

    Returns the parameters of the last table row whose threshold is at most
    ``digits``, or DEFAULT_PARAMS below the first threshold.

    Example:
        >>> find_params(8)
        CurveParams(b1=100, b2=1000, attempts=7)
        >>> find_params(22)
        CurveParams(b1=11000, b2=150000, attempts=90)
    """
    params = DEFAULT_PARAMS
    for threshold, b1, b2, attempts in CURVE_PARAMS:
        if digits < threshold:
            break
        params = CurveParams(b1, b2, attempts)
    return params
