"""
Forward curve representation and operations.

Every curve is defined by two functions of time u (years):
- forward(u): instantaneous forward rate
- integral(u): integral of the forward rate from 0 to u

from which the derived quantities follow:
- discount(u) = exp(-integral(u))
- spot(u) = integral(u) / u

Curve kinds:
- ConstantCurve: the same forward everywhere
- PiecewiseFlatCurve: owns ordered knots (t_k, f_k), append-only
- ExtrapolatedCurve: view over a curve, flat at a trial rate past time t
- ShiftedCurve: view over a curve with a constant spread added

Queries never raise; degenerate inputs (empty curve, negative time, spot at
u <= 0) return NaN.
"""

from abc import ABC, abstractmethod
from numbers import Real
from typing import List, Optional, Tuple, Union
import math

import numpy as np
import pandas as pd

from ..conventions import NAN
from . import pwflat

# exp overflows a float past this argument
_MAX_EXP = 709.0


def _exp(x: float) -> float:
    if math.isnan(x):
        return NAN
    return math.exp(x) if x < _MAX_EXP else math.inf


class Curve(ABC):
    """
    Abstract forward curve.

    Subclasses implement forward() and integral(); discount() and spot()
    are derived from them.
    """

    @abstractmethod
    def forward(self, u: float) -> float:
        """Instantaneous forward rate at time u."""

    @abstractmethod
    def integral(self, u: float) -> float:
        """Integral of the forward rate from 0 to u."""

    def __call__(self, u: float) -> float:
        return self.forward(u)

    def discount(
        self,
        u: float,
        t: Optional[float] = None,
        rate: Optional[float] = None
    ) -> float:
        """
        Discount factor D(u) = exp(-integral(u)).

        Args:
            u: Time in years
            t: If given with rate, discount on the curve extrapolated
               flat at rate beyond t
            rate: Extrapolation rate

        Returns:
            Discount factor (NaN if the integral is undefined)
        """
        if t is not None:
            return extrapolate(self, t, rate).discount(u)
        return _exp(-self.integral(u))

    def spot(self, u: float) -> float:
        """Continuously compounded spot rate integral(u)/u, NaN for u <= 0."""
        if not u > 0:
            return NAN
        return self.integral(u) / u

    def __add__(self, other: Union[Real, "ConstantCurve"]) -> "ShiftedCurve":
        if isinstance(other, ConstantCurve):
            return ShiftedCurve(self, other.rate)
        if isinstance(other, Real):
            return ShiftedCurve(self, float(other))
        return NotImplemented

    __radd__ = __add__


class ConstantCurve(Curve):
    """Curve with a single forward rate everywhere (no knots)."""

    def __init__(self, rate: float = 0.0):
        self.rate = float(rate)

    def forward(self, u: float) -> float:
        if u < 0:
            return NAN
        return self.rate

    def integral(self, u: float) -> float:
        if u < 0:
            return NAN
        return self.rate * u

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConstantCurve):
            return NotImplemented
        return self.rate == other.rate

    def __repr__(self) -> str:
        return f"ConstantCurve(rate={self.rate})"


class PiecewiseFlatCurve(Curve):
    """
    Piecewise flat forward curve.

    Knot rate f_k applies on the interval (t_{k-1}, t_k] with t_0 = 0;
    the last rate is extrapolated flat. Knots are appended with push_back(),
    which keeps times non-decreasing; they are never edited individually.

    Attributes:
        times: Knot times (read-only array copy)
        rates: Knot forward rates (read-only array copy)
    """

    def __init__(self, times=(), rates=()):
        t = [float(x) for x in times]
        f = [float(x) for x in rates]
        if len(t) != len(f):
            raise ValueError(
                f"Times and rates must have the same size: {len(t)} != {len(f)}"
            )
        if not all(math.isfinite(x) for x in t + f):
            raise ValueError("Knot times and rates must be finite")
        if not pwflat.monotonic(t):
            raise ValueError("Knot times must be non-negative and non-decreasing")
        self._t: List[float] = t
        self._f: List[float] = f

    def forward(self, u: float) -> float:
        return pwflat.forward(u, self._t, self._f)

    def integral(self, u: float) -> float:
        return pwflat.integral(u, self._t, self._f)

    def size(self) -> int:
        """Number of knots."""
        return len(self._t)

    def __len__(self) -> int:
        return len(self._t)

    @property
    def times(self) -> np.ndarray:
        arr = np.array(self._t, dtype=float)
        arr.flags.writeable = False
        return arr

    @property
    def rates(self) -> np.ndarray:
        arr = np.array(self._f, dtype=float)
        arr.flags.writeable = False
        return arr

    def back(self) -> Tuple[float, float]:
        """Last knot (time, rate)."""
        if not self._t:
            raise IndexError("back() on an empty curve")
        return self._t[-1], self._f[-1]

    def push_back(self, t, f: Optional[float] = None) -> "PiecewiseFlatCurve":
        """
        Append a knot.

        Args:
            t: Knot time, or a (time, rate) pair
            f: Forward rate on (last time, t]

        Returns:
            self, for chaining

        Raises:
            ValueError: If t precedes the last knot time or is not finite
        """
        if f is None:
            t, f = t
        t = float(t)
        f = float(f)
        if not (math.isfinite(t) and math.isfinite(f)):
            raise ValueError(f"Knot must be finite: ({t}, {f})")
        if t < 0:
            raise ValueError(f"Knot time must be non-negative: {t}")
        if self._t and t < self._t[-1]:
            raise ValueError(
                f"Knot time {t} is before last curve time {self._t[-1]}"
            )
        self._t.append(t)
        self._f.append(f)
        return self

    def clear(self) -> bool:
        """Remove all knots. Returns True if the curve was already empty."""
        empty = not self._t and not self._f
        self._t.clear()
        self._f.clear()
        return empty

    def copy(self) -> "PiecewiseFlatCurve":
        return PiecewiseFlatCurve(self._t, self._f)

    def to_frame(self) -> pd.DataFrame:
        """Knots as a DataFrame with columns time and rate."""
        return pd.DataFrame({"time": self._t, "rate": self._f})

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> "PiecewiseFlatCurve":
        """Rebuild a curve from to_frame() output."""
        missing = {"time", "rate"} - set(frame.columns)
        if missing:
            raise ValueError(f"Missing curve columns: {sorted(missing)}")
        return cls(frame["time"].tolist(), frame["rate"].tolist())

    def __eq__(self, other) -> bool:
        if not isinstance(other, PiecewiseFlatCurve):
            return NotImplemented
        return self._t == other._t and self._f == other._f

    def __repr__(self) -> str:
        if not self._t:
            return "PiecewiseFlatCurve(knots=0)"
        return (f"PiecewiseFlatCurve(knots={len(self._t)}, "
                f"last=({self._t[-1]}, {self._f[-1]}))")


class ExtrapolatedCurve(Curve):
    """
    View of a curve extended flat at `rate` beyond time `t`.

    Holds a reference to the base curve; nothing is copied and the base is
    never modified. For u <= t the base curve answers, for u > t the
    integral is base.integral(t) + rate * (u - t).
    """

    def __init__(self, curve: Curve, t: float, rate: float):
        self.curve = curve
        self.t = float(t)
        self.rate = float(rate)

    def _integral_to_t(self) -> float:
        if self.t <= 0:
            return 0.0
        return self.curve.integral(self.t)

    def forward(self, u: float) -> float:
        if u < 0:
            return NAN
        if u <= self.t:
            return self.curve.forward(u)
        return self.rate

    def integral(self, u: float) -> float:
        if u < 0:
            return NAN
        if u <= self.t:
            if u == 0:
                return 0.0
            return self.curve.integral(u)
        return self._integral_to_t() + self.rate * (u - self.t)

    def __repr__(self) -> str:
        return f"ExtrapolatedCurve({self.curve!r}, t={self.t}, rate={self.rate})"


class ShiftedCurve(Curve):
    """View of a curve with a constant spread added to every forward rate."""

    def __init__(self, curve: Curve, spread: float):
        self.curve = curve
        self.spread = float(spread)

    def forward(self, u: float) -> float:
        return self.curve.forward(u) + self.spread

    def integral(self, u: float) -> float:
        return self.curve.integral(u) + self.spread * u

    def __repr__(self) -> str:
        return f"ShiftedCurve({self.curve!r}, spread={self.spread})"


def extrapolate(curve: Curve, t: float, rate: float) -> ExtrapolatedCurve:
    """
    Extend a curve flat at `rate` beyond time t without modifying it.

    Used by the bootstrap to try a candidate forward rate for the segment
    past the last committed knot.
    """
    return ExtrapolatedCurve(curve, t, rate)


def create_flat_curve(
    rate: float,
    max_tenor_years: float = 30.0
) -> PiecewiseFlatCurve:
    """
    Create a piecewise flat curve at a single rate with knots at key tenors.

    Args:
        rate: Flat continuously compounded forward rate
        max_tenor_years: Last knot time

    Returns:
        Flat curve
    """
    curve = PiecewiseFlatCurve()
    for t in [0.25, 0.5, 1, 2, 5, 10, 20, max_tenor_years]:
        if t <= max_tenor_years:
            curve.push_back(t, rate)
    return curve


__all__ = [
    "Curve",
    "ConstantCurve",
    "PiecewiseFlatCurve",
    "ExtrapolatedCurve",
    "ShiftedCurve",
    "extrapolate",
    "create_flat_curve",
]
