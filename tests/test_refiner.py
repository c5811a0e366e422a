"""
Tests for the recursive factor refiner.

Most tests plug in a scripted curve attempt so the splitting logic can be
checked exactly; one runs real curves on a small semiprime.
"""
import pytest

from ecmfactor.factor_list import UnresolvedResidue, is_complete, product
from ecmfactor.primality import is_prime
from ecmfactor.prng import mk_std_gen, uniform_seed
from ecmfactor.refiner import CurveRefiner

P, Q, R = 1000003, 1000033, 1000037


class ScriptedCurve:
    """Returns a fixed divisor for each known modulus, None otherwise."""

    def __init__(self, divisors):
        self.divisors = divisors
        self.calls = 0

    def __call__(self, n, seed, b1, b2):
        self.calls += 1
        return self.divisors.get(n)


def never_called(n, seed, b1, b2):
    raise AssertionError(f"curve attempt should not run for {n}")


def make_refiner(curve, prime_test=is_prime, **kwargs):
    return CurveRefiner(prime_test, uniform_seed, curve=curve, **kwargs)


def refine(refiner, n, digits=8):
    factors, _ = refiner.refine(n, digits, mk_std_gen(42))
    return factors


def test_prime_short_circuits():
    assert refine(make_refiner(never_called), P) == [(P, 1)]


def test_prime_bound_skips_oracle():
    def oracle(n):
        raise AssertionError("oracle should not be consulted")
    refiner = make_refiner(never_called, prime_test=oracle, prime_bound=10 ** 10)
    assert refine(refiner, P) == [(P, 1)]


def test_prime_power():
    assert refine(make_refiner(never_called), P ** 5) == [(P, 5)]


def test_prime_power_with_prime_bound():
    refiner = make_refiner(never_called, prime_bound=10 ** 10)
    assert refine(refiner, P ** 3) == [(P, 3)]


def test_composite_power_multiplies_exponents():
    curve = ScriptedCurve({P * Q: P})
    assert refine(make_refiner(curve), (P * Q) ** 3) == [(P, 3), (Q, 3)]


def test_coprime_split():
    curve = ScriptedCurve({P * Q * R: Q})
    # Q found first, P*R is then split on its own
    curve.divisors[P * R] = R
    assert refine(make_refiner(curve), P * Q * R) == [(P, 1), (Q, 1), (R, 1)]


def test_degenerate_split_counts_shared_factor_twice():
    # d = P*Q and n/d = P share P
    curve = ScriptedCurve({P * P * Q: P * Q})
    assert refine(make_refiner(curve), P * P * Q) == [(P, 2), (Q, 1)]


def test_degenerate_split_with_composite_gcd():
    # d = P*Q*R, n/d = P*Q, so g = P*Q carries multiplicity 2 and is split later
    n = P ** 2 * Q ** 2 * R
    curve = ScriptedCurve({n: P * Q * R, P * Q: Q})
    factors = refine(make_refiner(curve), n)
    assert factors == [(P, 2), (Q, 2), (R, 1)]
    assert product(factors) == n


def test_degenerate_split_all_three_pieces():
    n = P ** 3 * Q * R
    curve = ScriptedCurve({n: P * P * Q, P * Q: P})
    assert refine(make_refiner(curve), n) == [(P, 3), (Q, 1), (R, 1)]


def test_exhausted_budget_reports_unresolved_residue():
    calls = []

    def curve(n, seed, b1, b2):
        calls.append((b1, b2))
        return None

    n = P * Q
    refiner = make_refiner(curve, prime_test=lambda k: False, max_digits=16)
    factors = refine(refiner, n)

    assert factors == [(n, 1)]
    assert isinstance(factors[0], UnresolvedResidue)
    assert not is_complete(factors)
    # digits 8, 12, 16: budgets of 7, 10 and 25 plus one attempt each
    assert len(calls) == 8 + 11 + 26
    assert calls[0] == (100, 1000)
    assert calls[8] == (400, 10000)
    assert calls[-1] == (2000, 50000)


def test_unresolved_piece_keeps_confirmed_factors():
    n = P * Q * R * R
    curve = ScriptedCurve({n: R})
    refiner = make_refiner(curve, max_digits=8)
    factors = refine(refiner, n)
    assert factors == [(R, 2), (P * Q, 1)]
    assert isinstance(factors[1], UnresolvedResidue)
    assert product(factors) == n


def test_escalates_when_no_prime_found():
    seen = []

    def curve(n, seed, b1, b2):
        seen.append(b1)
        if b1 >= 400 and n == P * Q:
            return P
        return None

    factors = refine(make_refiner(curve), P * Q)
    assert factors == [(P, 1), (Q, 1)]
    assert seen[:8] == [100] * 8
    assert seen[8] == 400


def test_invalid_digits_step():
    with pytest.raises(ValueError):
        CurveRefiner(is_prime, uniform_seed, digits_step=0)


def test_real_curves_split_semiprime():
    refiner = CurveRefiner(is_prime, uniform_seed)
    factors, state = refiner.refine(10007 * P, 8, mk_std_gen(7))
    assert factors == [(10007, 1), (P, 1)]
    assert state != mk_std_gen(7)
