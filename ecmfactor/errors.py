"""
Exception types raised by the factorisation engine.
"""
from typing import List, Tuple


class FactorisationError(Exception):
    """Base class for factorisation errors."""


class InvalidInputError(FactorisationError, ValueError):
    """Raised for inputs that have no prime factorisation (zero, non-integers)."""


class IncompleteFactorisationError(FactorisationError):
    """
    Raised when a caller demands a complete factorisation but some
    composite pieces could not be split with the configured search power.
    """

    def __init__(self, n: int, residues: List[Tuple[int, int]]):
        self.n = n
        self.residues = residues
        listed = ", ".join(f"{value}^{exp}" if exp > 1 else str(value)
                           for value, exp in residues)
        super().__init__(f"Factorisation of {n} is incomplete, unresolved: {listed}")
