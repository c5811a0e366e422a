"""
Tests for the factorisation entry points.

Covers the documented scenarios, the sign and zero handling, and the
product/ordering invariants over a range of inputs.
"""
import pytest

from ecmfactor import (
    InvalidInputError,
    UnresolvedResidue,
    curve_factorisation,
    default_std_gen_factorisation,
    factorise,
    factorise_unchecked,
    factorise_with,
    is_complete,
    is_prime,
    mk_std_gen,
    product,
    std_gen_factorisation,
    step_factorisation,
    uniform_seed,
)

P, Q = 1000003, 1000033
S1, S2 = 100003, 100019  # just above the trial division bound


def assert_valid_factorisation(n, factors):
    """Product matches, primes ascend strictly and all pass the oracle."""
    assert product(factors) == n
    primes = [p for p, _ in factors if p != -1]
    assert primes == sorted(set(primes))
    for p, k in factors:
        assert k >= 1
        if p != -1:
            assert is_prime(p), f"{p} is not prime"
            assert n % p == 0


class TestScenarios:
    def test_one(self):
        assert factorise(1) == []

    def test_zero(self):
        with pytest.raises(InvalidInputError, match="0 has no prime factorisation"):
            factorise(0)

    def test_zero_is_value_error(self):
        with pytest.raises(ValueError):
            factorise(0)

    def test_negative(self):
        assert factorise(-12) == [(-1, 1), (2, 2), (3, 1)]
        assert factorise(-1) == [(-1, 1)]

    def test_prime(self):
        assert factorise(97) == [(97, 1)]

    def test_power_of_two(self):
        assert factorise(2 ** 10) == [(2, 10)]

    def test_project_euler(self):
        assert factorise(600851475143) == [(71, 1), (839, 1), (1471, 1), (6857, 1)]

    def test_large_prime_power(self):
        assert factorise(24 * P ** 2) == [(2, 3), (3, 1), (P, 2)]

    def test_mersenne_prime(self):
        assert factorise(2 ** 61 - 1) == [(2 ** 61 - 1, 1)]

    def test_semiprime_needs_curves(self):
        assert factorise(P * Q) == [(P, 1), (Q, 1)]

    def test_non_integers_rejected(self):
        for bad in (2.0, "12", None, True):
            with pytest.raises(InvalidInputError):
                factorise(bad)


@pytest.mark.parametrize("n", list(range(2, 3000)) + [2 ** 32 + 1, 10 ** 12 + 39, 123456789])
def test_product_invariant(n):
    assert_valid_factorisation(n, factorise(n))


@pytest.mark.parametrize("n", [-2, -97, -360, -600851475143])
def test_negative_prepends_minus_one(n):
    assert factorise(n) == [(-1, 1)] + factorise(-n)


def test_factorise_unchecked_matches_factorise():
    for n in (2, 360, 600851475143, 7 * P ** 2):
        assert factorise_unchecked(n) == factorise(n)


def test_default_std_gen_factorisation():
    state = mk_std_gen(2024)
    assert default_std_gen_factorisation(state, -360) == [(-1, 1), (2, 3), (3, 2), (5, 1)]
    assert default_std_gen_factorisation(state, 1) == []
    with pytest.raises(InvalidInputError):
        default_std_gen_factorisation(state, 0)


def test_std_gen_factorisation_of_cofactor():
    factors = std_gen_factorisation(10 ** 10, mk_std_gen(5), None, S1 * S2)
    assert factors == [(S1, 1), (S2, 1)]


def test_std_gen_factorisation_prime_input():
    assert std_gen_factorisation(None, mk_std_gen(5), 20, 2 ** 89 - 1) == [(2 ** 89 - 1, 1)]


def test_step_factorisation():
    assert step_factorisation(600851475143) == [(71, 1), (839, 1), (1471, 1), (6857, 1)]
    assert step_factorisation(6 * S1 * S2) == [(2, 1), (3, 1), (S1, 1), (S2, 1)]


def test_curve_factorisation_exhausted_budget_terminates():
    calls = []

    def curve(n, seed, b1, b2):
        calls.append(seed)
        return None

    n = P * Q
    factors = curve_factorisation(None, lambda k: False, uniform_seed, mk_std_gen(1),
                                  None, n, curve=curve, max_digits=12)
    assert factors == [UnresolvedResidue(n, 1)]
    assert not is_complete(factors)
    assert len(calls) == 8 + 11


def test_curve_factorisation_custom_digit_step():
    bounds = []

    def curve(n, seed, b1, b2):
        bounds.append(b1)
        return None

    curve_factorisation(None, lambda k: False, uniform_seed, mk_std_gen(1),
                        12, P * Q, curve=curve, digits_step=3, max_digits=20)
    # digits 12, then 15 and 18 (which share a table row), then 21 is past the limit
    assert bounds.count(400) == 11
    assert bounds.count(2000) == 26 + 26
    assert len(bounds) == 63


class TestFactoriseWith:
    def test_defaults_match_factorise(self):
        assert factorise_with(600851475143) == factorise(600851475143)
        assert factorise_with(-12) == [(-1, 1), (2, 2), (3, 1)]
        assert factorise_with(1) == []

    def test_step_method(self):
        assert factorise_with(S1 * S2, method="step") == [(S1, 1), (S2, 1)]

    def test_seed_is_reproducible(self):
        assert factorise_with(S1 * S2, seed=3) == factorise_with(S1 * S2, seed=3)

    def test_small_bound(self):
        assert factorise_with(7 * S1 * S2, small_factor_bound=1000,
                              prime_bound=None) == [(7, 1), (S1, 1), (S2, 1)]

    def test_prime_bound_follows_small_bound(self):
        factors = factorise_with(1009 * 1013, small_factor_bound=1000)
        assert factors == [(1009, 1), (1013, 1)]
        assert_valid_factorisation(1009 * 1013, factors)

    def test_cube_above_small_bound(self):
        assert factorise_with(1009 ** 3, small_factor_bound=1000) == [(1009, 3)]

    def test_prime_bound_above_square_rejected(self):
        with pytest.raises(ValueError, match="exceeds small_factor_bound squared"):
            factorise_with(1009 * 1013, small_factor_bound=1000, prime_bound=10 ** 10)

    def test_unknown_method(self):
        with pytest.raises(ValueError, match="Unknown seed method"):
            factorise_with(P * Q, method="gray")

    def test_zero(self):
        with pytest.raises(InvalidInputError):
            factorise_with(0)
