"""
Numeric constants and rate conventions shared across the library.

Sentinels:
- NAN: "no value" marker returned by curve queries and bootstrap steps
- EPSILON / SQRT_EPSILON: float64 machine epsilon and its square root,
  the default root-finding tolerance

Conventions:
- Frequency: coupon payments per year
- CompoundingConvention: how a quoted rate compounds

Times are year fractions from the valuation date; rates are decimals.
"""

from enum import Enum
from typing import Union
import math

import numpy as np


NAN = float("nan")
EPSILON = float(np.finfo(np.float64).eps)
SQRT_EPSILON = math.sqrt(EPSILON)


def isnan(x: float) -> bool:
    """True if x is the not-a-number sentinel."""
    return x != x


class Frequency(Enum):
    """Payment frequency (periods per year)."""
    ANNUAL = 1
    SEMIANNUAL = 2
    QUARTERLY = 4
    MONTHLY = 12

    @classmethod
    def from_value(cls, value: Union[int, str, "Frequency"]) -> "Frequency":
        """Parse a frequency from an int (1, 2, 4, 12) or a name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            mapping = {
                "ANNUAL": cls.ANNUAL,
                "SEMI": cls.SEMIANNUAL,
                "SEMIANNUAL": cls.SEMIANNUAL,
                "SEMI_ANNUAL": cls.SEMIANNUAL,
                "QUARTERLY": cls.QUARTERLY,
                "MONTHLY": cls.MONTHLY,
            }
            key = value.upper().replace(" ", "").replace("-", "")
            if key in mapping:
                return mapping[key]
            if key.isdigit():
                value = int(key)
            else:
                raise ValueError(f"Unknown frequency: {value}")
        try:
            return cls(int(value))
        except ValueError:
            raise ValueError(f"Unknown frequency: {value}") from None

    @property
    def period(self) -> float:
        """Length of one period in years."""
        return 1.0 / self.value


class CompoundingConvention(Enum):
    """Interest rate compounding convention."""
    CONTINUOUS = "Continuous"
    ANNUAL = "Annual"
    SEMI_ANNUAL = "SemiAnnual"
    QUARTERLY = "Quarterly"
    SIMPLE = "Simple"

    @property
    def periods_per_year(self) -> int:
        """Compounding periods per year (0 for continuous and simple)."""
        return {
            CompoundingConvention.ANNUAL: 1,
            CompoundingConvention.SEMI_ANNUAL: 2,
            CompoundingConvention.QUARTERLY: 4,
        }.get(self, 0)


def continuous_rate(y: float, n: int) -> float:
    """
    Continuously compounded rate equivalent to yield y compounded n times a year.

    Uses (1 + y/n)^n = e^r.
    """
    if n <= 0:
        raise ValueError(f"Compounding periods must be positive: {n}")
    return n * math.log1p(y / n)


def compound_yield(r: float, n: int) -> float:
    """Yield compounded n times a year equivalent to continuous rate r."""
    if n <= 0:
        raise ValueError(f"Compounding periods must be positive: {n}")
    return n * math.expm1(r / n)


def convert_rate(
    rate: float,
    source: CompoundingConvention,
    target: CompoundingConvention = CompoundingConvention.CONTINUOUS
) -> float:
    """
    Convert a rate between periodic and continuous compounding.

    Simple rates depend on the accrual period and are not converted here.
    """
    if CompoundingConvention.SIMPLE in (source, target):
        raise ValueError("Simple rates need an accrual period to convert")
    r = rate
    if source != CompoundingConvention.CONTINUOUS:
        r = continuous_rate(rate, source.periods_per_year)
    if target == CompoundingConvention.CONTINUOUS:
        return r
    return compound_yield(r, target.periods_per_year)


__all__ = [
    "NAN",
    "EPSILON",
    "SQRT_EPSILON",
    "isnan",
    "Frequency",
    "CompoundingConvention",
    "continuous_rate",
    "compound_yield",
    "convert_rate",
]
