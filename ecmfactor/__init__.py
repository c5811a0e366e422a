"""
ecmfactor - integer factorisation by the elliptic curve method.

Small prime factors are removed by trial division, the rest is split by
Montgomery curve ECM until every piece passes the Baillie-PSW test.

    >>> from ecmfactor import factorise
    >>> factorise(600851475143)
    [(71, 1), (839, 1), (1471, 1), (6857, 1)]
"""

from .curves import MontgomeryCurve, montgomery_factorisation
from .errors import FactorisationError, IncompleteFactorisationError, InvalidInputError
from .factor_list import (
    UnresolvedResidue,
    ensure_complete,
    is_complete,
    merge,
    merge_all,
    product,
    unresolved,
)
from .factorisation import (
    curve_factorisation,
    default_std_gen_factorisation,
    default_std_gen_factorisation_unchecked,
    factorise,
    factorise_unchecked,
    factorise_with,
    std_gen_factorisation,
    step_factorisation,
)
from .params import CurveParams, find_params
from .primality import is_prime
from .prng import mk_std_gen, step_seed, uniform_seed
from .refiner import CurveRefiner
from .sieve import small_factors

__version__ = "1.0.0"

__all__ = [
    "CurveParams",
    "CurveRefiner",
    "FactorisationError",
    "IncompleteFactorisationError",
    "InvalidInputError",
    "MontgomeryCurve",
    "UnresolvedResidue",
    "curve_factorisation",
    "default_std_gen_factorisation",
    "default_std_gen_factorisation_unchecked",
    "ensure_complete",
    "factorise",
    "factorise_unchecked",
    "factorise_with",
    "find_params",
    "is_complete",
    "is_prime",
    "merge",
    "merge_all",
    "mk_std_gen",
    "montgomery_factorisation",
    "product",
    "small_factors",
    "std_gen_factorisation",
    "step_factorisation",
    "step_seed",
    "unresolved",
    "uniform_seed",
]
