"""
Factor list utilities.

A factorisation is a list of ``(prime, exponent)`` tuples sorted by prime,
each prime appearing once. Composite pieces the curve search could not
split are carried as ``UnresolvedResidue`` entries in their sorted
position, so the product of all entries always equals the input.
"""

from typing import List, NamedTuple, Sequence, Tuple

from .errors import IncompleteFactorisationError

FactorList = List[Tuple[int, int]]


class UnresolvedResidue(NamedTuple):
    """A composite factor that is not certified prime."""
    value: int
    exponent: int = 1

    @property
    def certified(self) -> bool:
        return False


def _entry(template: Tuple[int, int], exponent: int) -> Tuple[int, int]:
    if isinstance(template, UnresolvedResidue):
        return UnresolvedResidue(template[0], exponent)
    return (template[0], exponent)


def merge(xs: Sequence[Tuple[int, int]], ys: Sequence[Tuple[int, int]]) -> FactorList:
    """
    Merge two sorted factor lists, summing exponents of equal primes.

    Args:
        xs: Factor list sorted strictly ascending by prime
        ys: Factor list sorted strictly ascending by prime

    Returns:
        Sorted union of both lists

    Example:
        >>> merge([(2, 1), (5, 2)], [(2, 3), (3, 1)])
        [(2, 4), (3, 1), (5, 2)]
    """
    result: FactorList = []
    i = j = 0
    while i < len(xs) and j < len(ys):
        p, k = xs[i]
        q, m = ys[j]
        if p < q:
            result.append(xs[i])
            i += 1
        elif p > q:
            result.append(ys[j])
            j += 1
        else:
            result.append(_entry(xs[i], k + m))
            i += 1
            j += 1
    result.extend(xs[i:])
    result.extend(ys[j:])
    return result


def merge_all(seqs: Sequence[Sequence[Tuple[int, int]]]) -> FactorList:
    """
    Merge any number of sorted factor lists.

    Lists are merged pairwise in rounds (a balanced fold), so folding k
    lists costs O(total * log k) rather than the O(total * k) of a left fold.
    """
    pending = [list(s) for s in seqs if s]
    if not pending:
        return []
    while len(pending) > 1:
        merged = [merge(pending[i], pending[i + 1])
                  for i in range(0, len(pending) - 1, 2)]
        if len(pending) % 2:
            merged.append(pending[-1])
        pending = merged
    return pending[0]


def scale(k: int, xs: Sequence[Tuple[int, int]]) -> FactorList:
    """Multiply every exponent in ``xs`` by ``k``."""
    if k == 1:
        return list(xs)
    return [_entry(entry, entry[1] * k) for entry in xs]


def product(factors: Sequence[Tuple[int, int]]) -> int:
    """Multiply a factor list back out."""
    result = 1
    for value, exp in factors:
        result *= value ** exp
    return result


def unresolved(factors: Sequence[Tuple[int, int]]) -> List[UnresolvedResidue]:
    """Return the entries of ``factors`` that are not certified prime."""
    return [entry for entry in factors if isinstance(entry, UnresolvedResidue)]


def is_complete(factors: Sequence[Tuple[int, int]]) -> bool:
    """True if every entry of ``factors`` is a certified prime."""
    return not unresolved(factors)


def ensure_complete(n: int, factors: Sequence[Tuple[int, int]]) -> FactorList:
    """
    Return ``factors`` unchanged if complete, else raise.

    Raises:
        IncompleteFactorisationError: If any entry is an UnresolvedResidue
    """
    residues = unresolved(factors)
    if residues:
        raise IncompleteFactorisationError(n, [tuple(r) for r in residues])
    return list(factors)
