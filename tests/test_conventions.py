"""
Unit tests for conventions module.
"""

import math
import pytest

from ratesboot.conventions import (
    NAN,
    EPSILON,
    SQRT_EPSILON,
    isnan,
    Frequency,
    CompoundingConvention,
    continuous_rate,
    compound_yield,
    convert_rate,
)


class TestNumerics:
    """Tests for sentinel and epsilon constants."""

    def test_nan_sentinel(self):
        """NaN is detected and is not equal to itself."""
        assert isnan(NAN)
        assert NAN != NAN
        assert not isnan(0.0)

    def test_epsilon(self):
        """Epsilon is float64 machine epsilon."""
        assert 1.0 + EPSILON != 1.0
        assert 1.0 + EPSILON / 2 == 1.0
        assert abs(SQRT_EPSILON - 1.4901161193847656e-08) < 1e-20


class TestFrequency:
    """Tests for payment frequency parsing."""

    def test_from_int(self):
        assert Frequency.from_value(2) == Frequency.SEMIANNUAL
        assert Frequency.from_value(12) == Frequency.MONTHLY

    def test_from_string(self):
        assert Frequency.from_value("semi") == Frequency.SEMIANNUAL
        assert Frequency.from_value("Quarterly") == Frequency.QUARTERLY
        assert Frequency.from_value("4") == Frequency.QUARTERLY

    def test_unknown_frequency(self):
        with pytest.raises(ValueError):
            Frequency.from_value(3)
        with pytest.raises(ValueError):
            Frequency.from_value("fortnightly")

    def test_period(self):
        assert Frequency.QUARTERLY.period == 0.25


class TestRateConversion:
    """Tests for continuous/periodic rate conversion."""

    def test_continuous_rate(self):
        """Annual yield y equals continuous log(1 + y)."""
        assert abs(continuous_rate(0.05, 1) - math.log(1.05)) < 1e-15

    def test_round_trip(self):
        """Converting to a periodic yield and back recovers the rate."""
        r = 0.042
        assert abs(continuous_rate(compound_yield(r, 2), 2) - r) < 1e-14

    def test_periodic_yield_exceeds_continuous(self):
        """A semiannual yield is above the equivalent continuous rate."""
        assert compound_yield(0.05, 2) > 0.05

    def test_convert_rate(self):
        y = convert_rate(0.05, CompoundingConvention.CONTINUOUS, CompoundingConvention.ANNUAL)
        assert abs(y - math.expm1(0.05)) < 1e-15

    def test_convert_simple_rejected(self):
        with pytest.raises(ValueError):
            convert_rate(0.05, CompoundingConvention.SIMPLE)

    def test_nonpositive_periods(self):
        with pytest.raises(ValueError):
            continuous_rate(0.05, 0)
