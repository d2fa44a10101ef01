"""
Instrument valuation against a forward curve.

Pure reductions over an instrument's cash flows (u_i, c_i):
- present value:  sum c_i D(u_i)
- duration:      -sum u_i c_i D(u_i)    (d PV / d parallel shift)
- convexity:      sum u_i^2 c_i D(u_i)  (d^2 PV / d parallel shift^2)

plus the inversions price -> flat yield and price -> option adjusted
spread, both solved with the secant method.

Conventions:
- Rates and shifts are continuously compounded
- Solver failures are not checked here: yield_ and oas return the
  RootResult and the caller decides what to accept
"""

from dataclasses import dataclass
from typing import Any, Dict

from ..conventions import NAN, SQRT_EPSILON
from ..curves.curve import ConstantCurve, Curve
from ..curves.instruments import Instrument
from ..solvers import RootResult, Secant

# One basis point as a rate shift
BASIS_POINT = 1e-4


def present(instrument: Instrument, curve: Curve) -> float:
    """Present value of the instrument's cash flows on the curve."""
    pv = 0.0
    for u, c in zip(instrument.times(), instrument.cashes()):
        pv += float(c) * curve.discount(float(u))
    return pv


def duration(instrument: Instrument, curve: Curve) -> float:
    """Derivative of present value with respect to a parallel rate shift."""
    dv = 0.0
    for u, c in zip(instrument.times(), instrument.cashes()):
        u = float(u)
        dv -= u * float(c) * curve.discount(u)
    return dv


def macaulay_duration(instrument: Instrument, curve: Curve) -> float:
    """Duration divided by present value, NaN when the value is zero."""
    pv = present(instrument, curve)
    if pv == 0:
        return NAN
    return duration(instrument, curve) / pv


def convexity(instrument: Instrument, curve: Curve) -> float:
    """Second derivative of present value with respect to a parallel shift."""
    cx = 0.0
    for u, c in zip(instrument.times(), instrument.cashes()):
        u = float(u)
        cx += u * u * float(c) * curve.discount(u)
    return cx


def dv01(instrument: Instrument, curve: Curve) -> float:
    """Value change for a 1bp downward parallel shift (positive for a long bond)."""
    return -duration(instrument, curve) * BASIS_POINT


def price(instrument: Instrument, y: float) -> float:
    """Price at constant continuously compounded yield y."""
    return present(instrument, ConstantCurve(y))


def yield_(
    instrument: Instrument,
    price: float = 0.0,
    y0: float = 0.01,
    tol: float = SQRT_EPSILON,
    max_iter: int = 100
) -> RootResult:
    """
    Constant yield matching a price.

    Args:
        instrument: Instrument to value
        price: Target present value
        y0: Initial guess; the secant seeds are (y0, y0 + 0.1)
        tol: Solver tolerance
        max_iter: Maximum secant iterations

    Returns:
        RootResult with the yield as root
    """
    def pv_gap(y: float) -> float:
        return present(instrument, ConstantCurve(y)) - price

    return Secant(y0, y0 + 0.1, tol, max_iter).solve(pv_gap)


yield_to_maturity = yield_


def oas(
    instrument: Instrument,
    curve: Curve,
    price: float,
    s0: float = 0.0,
    tol: float = SQRT_EPSILON,
    max_iter: int = 100
) -> RootResult:
    """
    Option adjusted spread: the parallel shift s with
    present(instrument, curve + s) == price.

    The secant seeds are (s0, s0 + 0.01).
    """
    def pv_gap(s: float) -> float:
        return present(instrument, curve + ConstantCurve(s)) - price

    return Secant(s0, s0 + 0.01, tol, max_iter).solve(pv_gap)


@dataclass
class InstrumentRisk:
    """
    Valuation and risk of a single instrument on a curve.

    Attributes:
        pv: Present value
        duration: d PV / d shift
        macaulay_duration: duration / pv
        convexity: d^2 PV / d shift^2
        dv01: PV change for a 1bp downward shift
    """
    pv: float
    duration: float
    macaulay_duration: float
    convexity: float
    dv01: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for reporting."""
        return {
            "pv": self.pv,
            "duration": self.duration,
            "macaulay_duration": self.macaulay_duration,
            "convexity": self.convexity,
            "dv01": self.dv01,
        }


class InstrumentPricer:
    """
    Values instruments on a fixed curve.

    Attributes:
        curve: Curve used for discounting (read only)
    """

    def __init__(self, curve: Curve):
        self.curve = curve

    def present_value(self, instrument: Instrument) -> float:
        return present(instrument, self.curve)

    def duration(self, instrument: Instrument) -> float:
        return duration(instrument, self.curve)

    def convexity(self, instrument: Instrument) -> float:
        return convexity(instrument, self.curve)

    def oas(self, instrument: Instrument, price: float, s0: float = 0.0) -> RootResult:
        return oas(instrument, self.curve, price, s0)

    def risk(self, instrument: Instrument) -> InstrumentRisk:
        """All valuation measures in one pass over the reductions."""
        pv = present(instrument, self.curve)
        dur = duration(instrument, self.curve)
        return InstrumentRisk(
            pv=pv,
            duration=dur,
            macaulay_duration=dur / pv if pv != 0 else NAN,
            convexity=convexity(instrument, self.curve),
            dv01=-dur * BASIS_POINT,
        )


__all__ = [
    "BASIS_POINT",
    "present",
    "duration",
    "macaulay_duration",
    "convexity",
    "dv01",
    "price",
    "yield_",
    "yield_to_maturity",
    "oas",
    "InstrumentRisk",
    "InstrumentPricer",
]
