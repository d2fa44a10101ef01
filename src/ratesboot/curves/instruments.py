"""
Cash flow instruments for curve construction and valuation.

An instrument is an ordered list of (time, amount) pairs: times u_i are year
fractions from the valuation date, strictly increasing; amounts c_i are
signed. Instruments know nothing about curves.

Defines:
- CashFlowInstrument: arbitrary flows
- ZeroCouponBond: single flow c at u
- CouponBond: periodic coupons plus principal at maturity
- deposit / forward_rate_agreement: money market instruments as flows
- instrument_from_quote: build (instrument, price) from a quote dict
"""

from typing import Any, Dict, List, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from ..conventions import Frequency

# Coupon periods closer than this to time 0 are dropped
_PERIOD_EPS = 1e-12


class Instrument:
    """
    Base instrument: validated, read-only cash flow arrays.

    Raises:
        ValueError: If times and amounts differ in size, are empty or not
            finite, or times are not strictly increasing
    """

    def __init__(self, times: Sequence[float], cashes: Sequence[float]):
        u = np.array(times, dtype=float).ravel()
        c = np.array(cashes, dtype=float).ravel()
        if u.size != c.size:
            raise ValueError(
                f"Times and cash flows must have the same size: {u.size} != {c.size}"
            )
        if u.size == 0:
            raise ValueError("Instrument must have at least one cash flow")
        if not (np.all(np.isfinite(u)) and np.all(np.isfinite(c))):
            raise ValueError("Cash flow times and amounts must be finite")
        if np.any(np.diff(u) <= 0):
            raise ValueError("Cash flow times must be strictly increasing")
        u.flags.writeable = False
        c.flags.writeable = False
        self._u = u
        self._c = c

    def size(self) -> int:
        """Number of cash flows."""
        return int(self._u.size)

    def __len__(self) -> int:
        return self.size()

    def time(self, i: int) -> float:
        """Time of the i-th cash flow."""
        return float(self._u[i])

    def times(self) -> np.ndarray:
        """All cash flow times (read-only)."""
        return self._u

    def cash(self, i: int) -> float:
        """Amount of the i-th cash flow."""
        return float(self._c[i])

    def cashes(self) -> np.ndarray:
        """All cash flow amounts (read-only)."""
        return self._c

    def first(self) -> Tuple[float, float]:
        """First (time, amount) pair."""
        return float(self._u[0]), float(self._c[0])

    def last(self) -> Tuple[float, float]:
        """Last (time, amount) pair; the largest time."""
        return float(self._u[-1]), float(self._c[-1])

    @property
    def maturity(self) -> float:
        return float(self._u[-1])

    def flows(self) -> List[Tuple[float, float]]:
        return [(float(u), float(c)) for u, c in zip(self._u, self._c)]

    def to_frame(self) -> pd.DataFrame:
        """Cash flows as a DataFrame with columns time and cash."""
        return pd.DataFrame({"time": self._u, "cash": self._c})

    def __eq__(self, other) -> bool:
        if not isinstance(other, Instrument):
            return NotImplemented
        return (np.array_equal(self._u, other._u)
                and np.array_equal(self._c, other._c))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(flows={self.size()}, maturity={self.maturity})"


class CashFlowInstrument(Instrument):
    """Instrument with arbitrary cash flows."""


class ZeroCouponBond(Instrument):
    """
    Zero coupon bond paying c at time u.

    An amount of 0 is read as the default 1.
    """

    def __init__(self, u: float, c: float = 1.0):
        if c == 0:
            c = 1.0
        if not u > 0:
            raise ValueError(f"Zero coupon bond maturity must be positive: {u}")
        super().__init__([u], [c])


def periods(u: float, frequency: Union[Frequency, int]) -> List[float]:
    """
    Coupon times working backwards from maturity u in steps of 1/frequency,
    stopping before time 0.
    """
    freq = Frequency.from_value(frequency)
    t = []
    k = 0
    while True:
        tk = u - k / freq.value
        if tk <= _PERIOD_EPS:
            break
        t.append(tk)
        k += 1
    t.reverse()
    return t


def payments(u: float, coupon: float, frequency: Union[Frequency, int]) -> List[float]:
    """Coupon c/frequency every period with principal 1 added to the last."""
    freq = Frequency.from_value(frequency)
    n = len(periods(u, freq))
    p = [coupon / freq.value] * n
    p[-1] += 1.0
    return p


class CouponBond(Instrument):
    """
    Bond paying coupon/frequency each period and 1 + coupon/frequency at
    maturity. A short first period still pays a full coupon.

    Attributes:
        maturity_years: Maturity in years
        coupon: Annual coupon rate
        frequency: Payment frequency
    """

    def __init__(
        self,
        maturity: float,
        coupon: float,
        frequency: Union[Frequency, int, str] = Frequency.SEMIANNUAL
    ):
        if not maturity > 0:
            raise ValueError(f"Bond maturity must be positive: {maturity}")
        freq = Frequency.from_value(frequency)
        self.maturity_years = float(maturity)
        self.coupon = float(coupon)
        self.frequency = freq
        super().__init__(periods(maturity, freq), payments(maturity, coupon, freq))

    def __repr__(self) -> str:
        return (f"CouponBond(maturity={self.maturity_years}, coupon={self.coupon}, "
                f"frequency={self.frequency.name})")


def deposit(t: float, rate: float) -> ZeroCouponBond:
    """
    Money market deposit: pay 1 today, receive 1 + rate * t at t.

    Prices at 1.
    """
    if not t > 0:
        raise ValueError(f"Deposit maturity must be positive: {t}")
    return ZeroCouponBond(t, 1.0 + rate * t)


def forward_rate_agreement(t1: float, t2: float, rate: float) -> CashFlowInstrument:
    """
    Forward rate agreement as flows: pay 1 at t1, receive 1 + rate*(t2 - t1)
    at t2. Prices at 0.
    """
    if not 0 < t1 < t2:
        raise ValueError(f"FRA requires 0 < t1 < t2: t1={t1}, t2={t2}")
    return CashFlowInstrument([t1, t2], [-1.0, 1.0 + rate * (t2 - t1)])


def instrument_from_quote(quote: Dict[str, Any]) -> Tuple[Instrument, float]:
    """
    Build an instrument and its price from a quote dictionary.

    Example quote formats:
        {"instrument_type": "DEPOSIT", "maturity": 0.25, "quote": 0.053}
        {"instrument_type": "FRA", "start": 0.25, "maturity": 0.5, "quote": 0.052}
        {"instrument_type": "ZCB", "maturity": 2.0, "price": 0.90}
        {"instrument_type": "BOND", "maturity": 5.0, "coupon": 0.05,
         "frequency": 2, "price": 1.01}
        {"instrument_type": "CASHFLOWS", "times": [...], "cashes": [...],
         "price": 0.98}

    Returns:
        Tuple of (instrument, price)
    """
    inst_type = str(quote.get("instrument_type", "")).upper()

    if inst_type == "DEPOSIT":
        return deposit(float(quote["maturity"]), float(quote["quote"])), 1.0
    if inst_type == "FRA":
        fra = forward_rate_agreement(
            float(quote["start"]), float(quote["maturity"]), float(quote["quote"])
        )
        return fra, 0.0
    if inst_type in ("ZCB", "ZERO"):
        zcb = ZeroCouponBond(float(quote["maturity"]), float(quote.get("cash", 1.0)))
        return zcb, float(quote["price"])
    if inst_type == "BOND":
        bond = CouponBond(
            float(quote["maturity"]),
            float(quote["coupon"]),
            quote.get("frequency", Frequency.SEMIANNUAL),
        )
        return bond, float(quote["price"])
    if inst_type == "CASHFLOWS":
        flows = CashFlowInstrument(quote["times"], quote["cashes"])
        return flows, float(quote["price"])

    raise ValueError(f"Unknown instrument type: {quote.get('instrument_type')!r}")


__all__ = [
    "Instrument",
    "CashFlowInstrument",
    "ZeroCouponBond",
    "CouponBond",
    "periods",
    "payments",
    "deposit",
    "forward_rate_agreement",
    "instrument_from_quote",
]
