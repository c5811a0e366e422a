"""Tests for integer roots and perfect power detection."""
import pytest

from ecmfactor.powers import highest_power, integer_log, integer_root, large_pf_power


class TestIntegerRoot:
    def test_exact_roots(self):
        assert integer_root(1000, 3) == 10
        assert integer_root(2 ** 100, 10) == 1024
        assert integer_root(12345678901234567890 ** 2, 2) == 12345678901234567890

    def test_rounds_down(self):
        assert integer_root(999, 3) == 9
        assert integer_root(1001, 3) == 10
        assert integer_root(10 ** 40 - 1, 2) == 10 ** 20 - 1

    def test_small_values(self):
        assert integer_root(0, 5) == 0
        assert integer_root(1, 5) == 1
        assert integer_root(7, 1) == 7
        assert integer_root(3, 2) == 1

    def test_invalid(self):
        with pytest.raises(ValueError):
            integer_root(-8, 3)
        with pytest.raises(ValueError):
            integer_root(8, 0)


def test_integer_log():
    assert integer_log(2, 1) == 0
    assert integer_log(2, 1024) == 10
    assert integer_log(2, 1023) == 9
    assert integer_log(10, 10 ** 12) == 12


class TestHighestPower:
    def test_prime_powers(self):
        assert highest_power(2 ** 10) == (2, 10)
        assert highest_power(3 ** 7) == (3, 7)
        assert highest_power(1000003 ** 6) == (1000003, 6)

    def test_composite_base(self):
        assert highest_power(36) == (6, 2)
        assert highest_power(6 ** 15) == (6, 15)

    def test_not_a_power(self):
        assert highest_power(2) == (2, 1)
        assert highest_power(12) == (12, 1)
        assert highest_power(2 ** 10 * 3) == (2 ** 10 * 3, 1)

    def test_exponent_is_maximal(self):
        base, exp = highest_power(2 ** 12)
        assert (base, exp) == (2, 12)


class TestLargePFPower:
    def test_finds_power_of_large_base(self):
        assert large_pf_power(100000, 1000003 ** 3) == (1000003, 3)
        assert large_pf_power(100000, (1000003 * 1000033) ** 2) == (1000003 * 1000033, 2)

    def test_not_a_power(self):
        n = 1000003 * 1000033
        assert large_pf_power(100000, n) == (n, 1)

    def test_too_small_for_any_power(self):
        assert large_pf_power(100000, 5000000) == (5000000, 1)

    def test_small_bound_falls_back(self):
        assert large_pf_power(1, 2 ** 10) == (2, 10)
