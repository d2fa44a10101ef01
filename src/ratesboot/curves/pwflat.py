"""
Piecewise flat forward functions on knot arrays.

Knots (t_k, f_k) with t_0 = 0 implied: f_k applies on (t_{k-1}, t_k].
Beyond the last knot the forward is extrapolated flat at f_last.

These are the primitives behind PiecewiseFlatCurve; they return `default`
(NaN unless given) instead of raising for an empty knot set or u < 0.
"""

from bisect import bisect_left
from typing import Sequence

from ..conventions import NAN


def monotonic(t: Sequence[float]) -> bool:
    """True if times are non-negative and non-decreasing."""
    if len(t) and t[0] < 0:
        return False
    return all(t[i - 1] <= t[i] for i in range(1, len(t)))


def forward(
    u: float,
    t: Sequence[float],
    f: Sequence[float],
    default: float = NAN
) -> float:
    """
    Forward rate at time u.

    The rate of the first knot with t_k >= u, flat past the last knot.
    """
    if u < 0 or not len(t):
        return default
    k = bisect_left(t, u)
    if k == len(t):
        return f[-1]
    return f[k]


def integral(
    u: float,
    t: Sequence[float],
    f: Sequence[float],
    default: float = NAN
) -> float:
    """Integral of the forward rate from 0 to u."""
    if u < 0 or not len(t):
        return default
    total = 0.0
    t0 = 0.0
    for tk, fk in zip(t, f):
        if u <= tk:
            return total + fk * (u - t0)
        total += fk * (tk - t0)
        t0 = tk
    return total + f[-1] * (u - t0)


__all__ = [
    "monotonic",
    "forward",
    "integral",
]
