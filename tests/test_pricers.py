"""
Unit tests for pricers module.
"""

import math
import pytest

from ratesboot.conventions import SQRT_EPSILON
from ratesboot.curves import (
    ConstantCurve,
    CouponBond,
    PiecewiseFlatCurve,
    ZeroCouponBond,
    create_flat_curve,
    extrapolate,
    forward_rate_agreement,
)
from ratesboot.pricers import (
    InstrumentPricer,
    convexity,
    duration,
    dv01,
    macaulay_duration,
    oas,
    present,
    price,
    yield_,
)


@pytest.fixture
def sample_curve():
    """Upward sloping piecewise flat curve."""
    return PiecewiseFlatCurve([1.0, 2.0, 5.0, 10.0], [0.03, 0.035, 0.04, 0.045])


@pytest.fixture
def sample_bond():
    """5Y 4% semiannual bond."""
    return CouponBond(5.0, 0.04, 2)


class TestPresentValue:
    """Tests for present value, duration and convexity."""

    def test_flat_forward_round_trip(self):
        """Zero coupon bond paying exp(r) at 1 prices at 1 on a flat r curve."""
        r = 0.1
        zcb = ZeroCouponBond(1.0, math.exp(r))
        view = extrapolate(PiecewiseFlatCurve(), 0.0, r)

        assert abs(present(zcb, view) - 1.0) < 1e-15
        assert abs(duration(zcb, view) + 1.0) < 1e-15
        assert abs(convexity(zcb, view) - 1.0) < 1e-15

    def test_present_value_sum(self, sample_curve, sample_bond):
        expected = sum(c * sample_curve.discount(u) for u, c in sample_bond.flows())
        assert present(sample_bond, sample_curve) == pytest.approx(expected, abs=1e-14)

    def test_idempotent(self, sample_curve, sample_bond):
        """Valuation is pure: repeated calls give identical results."""
        assert present(sample_bond, sample_curve) == present(sample_bond, sample_curve)
        assert duration(sample_bond, sample_curve) == duration(sample_bond, sample_curve)
        assert convexity(sample_bond, sample_curve) == convexity(sample_bond, sample_curve)

    def test_duration_is_shift_derivative(self, sample_curve, sample_bond):
        """Duration matches a central difference under parallel shifts."""
        h = 1e-5
        up = present(sample_bond, sample_curve + h)
        down = present(sample_bond, sample_curve + (-h))
        numerical = (up - down) / (2 * h)

        assert abs(duration(sample_bond, sample_curve) - numerical) < 1e-6

    def test_convexity_is_second_derivative(self, sample_curve, sample_bond):
        h = 1e-4
        base = present(sample_bond, sample_curve)
        up = present(sample_bond, sample_curve + h)
        down = present(sample_bond, sample_curve + (-h))
        numerical = (up - 2 * base + down) / (h * h)

        assert abs(convexity(sample_bond, sample_curve) - numerical) < 1e-3

    def test_macaulay_duration_zero(self, sample_curve):
        """Macaulay duration of a zero is minus its maturity."""
        zcb = ZeroCouponBond(3.0)
        assert macaulay_duration(zcb, sample_curve) == pytest.approx(-3.0, abs=1e-14)

    def test_macaulay_duration_of_zero_value(self):
        """An at-market FRA has zero value and no Macaulay duration."""
        fra = forward_rate_agreement(1.0, 2.0, 0.0)
        curve = ConstantCurve(0.0)

        assert present(fra, curve) == 0.0
        assert math.isnan(macaulay_duration(fra, curve))
        assert math.isnan(InstrumentPricer(curve).risk(fra).macaulay_duration)

    def test_dv01_positive_for_long_bond(self, sample_curve, sample_bond):
        assert dv01(sample_bond, sample_curve) > 0
        assert dv01(sample_bond, sample_curve) == pytest.approx(
            -duration(sample_bond, sample_curve) * 1e-4
        )

    def test_empty_curve_gives_nan(self, sample_bond):
        assert math.isnan(present(sample_bond, PiecewiseFlatCurve()))


class TestYield:
    """Tests for price at yield and yield from price."""

    def test_price_at_yield(self, sample_bond):
        y = 0.05
        expected = sum(c * math.exp(-y * u) for u, c in sample_bond.flows())
        assert price(sample_bond, y) == pytest.approx(expected, abs=1e-14)

    def test_yield_recovers_rate(self, sample_bond):
        p = price(sample_bond, 0.05)
        result = yield_(sample_bond, p)

        assert result.converged
        assert abs(result.root - 0.05) < 1e-8

    def test_yield_from_other_seed(self, sample_bond):
        p = price(sample_bond, 0.08)
        root, tol, iters = yield_(sample_bond, p, y0=0.0)

        assert abs(root - 0.08) < 1e-8
        assert tol <= SQRT_EPSILON


class TestOAS:
    """Tests for option adjusted spread."""

    def test_oas_recovers_spread(self, sample_bond):
        curve = create_flat_curve(0.04)
        p = present(sample_bond, ConstantCurve(0.05))
        result = oas(sample_bond, curve, p)

        assert result.converged
        assert abs(result.root - 0.01) < 1e-8

    def test_oas_zero_at_model_price(self, sample_curve, sample_bond):
        p = present(sample_bond, sample_curve)
        result = oas(sample_bond, sample_curve, p, s0=0.002)
        assert abs(result.root) < 1e-8


class TestInstrumentPricer:
    """Tests for the curve-bound pricer."""

    def test_risk(self, sample_curve, sample_bond):
        pricer = InstrumentPricer(sample_curve)
        risk = pricer.risk(sample_bond)

        assert risk.pv == present(sample_bond, sample_curve)
        assert risk.duration == duration(sample_bond, sample_curve)
        assert risk.convexity == pricer.convexity(sample_bond)
        assert risk.macaulay_duration == pytest.approx(
            macaulay_duration(sample_bond, sample_curve)
        )
        assert set(risk.to_dict()) == {
            "pv", "duration", "macaulay_duration", "convexity", "dv01"
        }

    def test_pricer_oas(self, sample_curve, sample_bond):
        pricer = InstrumentPricer(sample_curve)
        p = pricer.present_value(sample_bond) - 0.01
        assert pricer.oas(sample_bond, p).root > 0
