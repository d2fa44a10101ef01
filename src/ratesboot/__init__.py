"""
RatesBoot: Piecewise Flat Forward Curve Bootstrapping

A small library for:
- Representing forward curves as piecewise flat knots
- Describing instruments as cash flow schedules
- Valuing instruments on a curve (PV, duration, convexity, yield, OAS)
- Bootstrapping a curve that reprices a list of instruments exactly

Scope: single curve, continuously compounded rates, times in years.
"""

__version__ = "0.1.0"

# Core modules
from .conventions import (
    NAN,
    EPSILON,
    SQRT_EPSILON,
    isnan,
    Frequency,
    CompoundingConvention,
    continuous_rate,
    compound_yield,
)
from .solvers import Secant, RootResult, RootFindingError, secant

# Curves (import before pricers)
from .curves import (
    Curve,
    ConstantCurve,
    PiecewiseFlatCurve,
    ExtrapolatedCurve,
    ShiftedCurve,
    extrapolate,
    create_flat_curve,
    Instrument,
    CashFlowInstrument,
    ZeroCouponBond,
    CouponBond,
    deposit,
    forward_rate_agreement,
    instrument_from_quote,
    BootstrapError,
    BootstrapConfig,
    BootstrapResult,
    PiecewiseFlatBootstrapper,
    bootstrap0,
    bootstrap,
    bootstrap_deposit,
    bootstrap_fra,
    bootstrap_from_quotes,
)

# Pricers
from .pricers import (
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
    # Version
    "__version__",
    # Conventions
    "NAN",
    "EPSILON",
    "SQRT_EPSILON",
    "isnan",
    "Frequency",
    "CompoundingConvention",
    "continuous_rate",
    "compound_yield",
    # Solvers
    "Secant",
    "RootResult",
    "RootFindingError",
    "secant",
    # Curves
    "Curve",
    "ConstantCurve",
    "PiecewiseFlatCurve",
    "ExtrapolatedCurve",
    "ShiftedCurve",
    "extrapolate",
    "create_flat_curve",
    # Instruments
    "Instrument",
    "CashFlowInstrument",
    "ZeroCouponBond",
    "CouponBond",
    "deposit",
    "forward_rate_agreement",
    "instrument_from_quote",
    # Bootstrap
    "BootstrapError",
    "BootstrapConfig",
    "BootstrapResult",
    "PiecewiseFlatBootstrapper",
    "bootstrap0",
    "bootstrap",
    "bootstrap_deposit",
    "bootstrap_fra",
    "bootstrap_from_quotes",
    # Pricers
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
