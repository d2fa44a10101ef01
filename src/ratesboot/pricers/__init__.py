"""
Pricers package - valuation of instruments on a curve.

Provides present value, duration, convexity, yield and option adjusted
spread for any cash flow instrument.
"""

from .valuation import (
    present,
    duration,
    macaulay_duration,
    convexity,
    dv01,
    price,
    yield_,
    yield_to_maturity,
    oas,
    InstrumentRisk,
    InstrumentPricer,
)

__all__ = [
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
