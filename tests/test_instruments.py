"""
Unit tests for cash flow instruments.
"""

import numpy as np
import pytest

from ratesboot.conventions import Frequency
from ratesboot.curves import (
    CashFlowInstrument,
    CouponBond,
    ZeroCouponBond,
    deposit,
    forward_rate_agreement,
    instrument_from_quote,
)
from ratesboot.curves.instruments import payments, periods


class TestCashFlowInstrument:
    """Tests for the generic instrument."""

    def test_accessors(self):
        inst = CashFlowInstrument([0.5, 1.0, 1.5], [0.1, 0.2, 1.3])

        assert inst.size() == 3
        assert len(inst) == 3
        assert inst.time(1) == 1.0
        assert inst.cash(2) == 1.3
        assert inst.first() == (0.5, 0.1)
        assert inst.last() == (1.5, 1.3)
        assert inst.maturity == 1.5
        np.testing.assert_array_equal(inst.times(), [0.5, 1.0, 1.5])
        np.testing.assert_array_equal(inst.cashes(), [0.1, 0.2, 1.3])

    def test_flows_read_only(self):
        inst = CashFlowInstrument([1.0, 2.0], [0.05, 1.05])
        with pytest.raises(ValueError):
            inst.times()[0] = 0.5
        with pytest.raises(ValueError):
            inst.cashes()[0] = 0.0

    def test_size_mismatch(self):
        with pytest.raises(ValueError):
            CashFlowInstrument([1.0, 2.0], [1.0])

    def test_unsorted_times(self):
        with pytest.raises(ValueError):
            CashFlowInstrument([2.0, 1.0], [1.0, 1.0])
        with pytest.raises(ValueError):
            CashFlowInstrument([1.0, 1.0], [1.0, 1.0])

    def test_empty_and_nonfinite(self):
        with pytest.raises(ValueError):
            CashFlowInstrument([], [])
        with pytest.raises(ValueError):
            CashFlowInstrument([1.0], [float("nan")])

    def test_to_frame(self):
        frame = CashFlowInstrument([1.0, 2.0], [0.05, 1.05]).to_frame()
        assert list(frame.columns) == ["time", "cash"]
        assert len(frame) == 2


class TestZeroCouponBond:
    """Tests for zero coupon bonds."""

    def test_default_amount(self):
        zcb = ZeroCouponBond(2.0)
        assert zcb.last() == (2.0, 1.0)
        assert zcb.size() == 1

    def test_zero_amount_means_one(self):
        assert ZeroCouponBond(1.0, 0.0).cash(0) == 1.0

    def test_nonpositive_maturity(self):
        with pytest.raises(ValueError):
            ZeroCouponBond(0.0)


class TestCouponBond:
    """Tests for coupon bond schedule generation."""

    def test_semiannual_schedule(self):
        bond = CouponBond(2.0, 0.05, Frequency.SEMIANNUAL)

        np.testing.assert_array_equal(bond.times(), [0.5, 1.0, 1.5, 2.0])
        np.testing.assert_allclose(bond.cashes(), [0.025, 0.025, 0.025, 1.025])

    def test_quarterly_schedule(self):
        bond = CouponBond(1.0, 0.06, 4)
        np.testing.assert_array_equal(bond.times(), [0.25, 0.5, 0.75, 1.0])
        assert bond.last() == pytest.approx((1.0, 1.015))

    def test_short_first_period(self):
        """Schedule runs back from maturity; the first period may be short."""
        bond = CouponBond(1.25, 0.04, 2)

        np.testing.assert_array_equal(bond.times(), [0.25, 0.75, 1.25])
        np.testing.assert_allclose(bond.cashes(), [0.02, 0.02, 1.02])

    def test_monthly_periods_do_not_reach_zero(self):
        t = periods(1.0, Frequency.MONTHLY)
        assert len(t) == 12
        assert t[0] == pytest.approx(1.0 / 12.0)
        assert len(payments(1.0, 0.12, 12)) == 12

    def test_invalid_bond(self):
        with pytest.raises(ValueError):
            CouponBond(0.0, 0.05)
        with pytest.raises(ValueError):
            CouponBond(2.0, 0.05, 3)


class TestMoneyMarket:
    """Tests for deposit and FRA instruments."""

    def test_deposit(self):
        dep = deposit(0.5, 0.04)
        assert dep.last() == pytest.approx((0.5, 1.02))

    def test_fra(self):
        fra = forward_rate_agreement(1.0, 2.0, 0.06)
        assert fra.flows() == [(1.0, -1.0), pytest.approx((2.0, 1.06))]

    def test_fra_bad_tenors(self):
        with pytest.raises(ValueError):
            forward_rate_agreement(2.0, 1.0, 0.06)
        with pytest.raises(ValueError):
            forward_rate_agreement(0.0, 1.0, 0.06)
        with pytest.raises(ValueError):
            deposit(0.0, 0.05)


class TestInstrumentFromQuote:
    """Tests for quote dictionary parsing."""

    def test_deposit_quote(self):
        inst, price = instrument_from_quote(
            {"instrument_type": "deposit", "maturity": 0.25, "quote": 0.04}
        )
        assert price == 1.0
        assert inst.last() == pytest.approx((0.25, 1.01))

    def test_fra_quote(self):
        inst, price = instrument_from_quote(
            {"instrument_type": "FRA", "start": 0.5, "maturity": 1.0, "quote": 0.05}
        )
        assert price == 0.0
        assert inst.size() == 2

    def test_bond_quote(self):
        inst, price = instrument_from_quote({
            "instrument_type": "BOND", "maturity": 3.0, "coupon": 0.05,
            "frequency": 1, "price": 1.01,
        })
        assert isinstance(inst, CouponBond)
        assert inst.size() == 3
        assert price == 1.01

    def test_cashflows_quote(self):
        inst, price = instrument_from_quote({
            "instrument_type": "CASHFLOWS", "times": [1, 2], "cashes": [0.1, 1.1],
            "price": 1.0,
        })
        assert inst.last() == pytest.approx((2.0, 1.1))

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            instrument_from_quote({"instrument_type": "SWAPTION"})
