"""
Curves package - forward curve construction and manipulation.

Provides:
- PiecewiseFlatCurve: Append-only piecewise flat forward curve
- ConstantCurve, ExtrapolatedCurve, ShiftedCurve: Other curve kinds and views
- Instruments: Cash flow instruments priced against curves
- Bootstrap: Sequential curve construction from instrument prices
"""

from .curve import (
    Curve,
    ConstantCurve,
    PiecewiseFlatCurve,
    ExtrapolatedCurve,
    ShiftedCurve,
    extrapolate,
    create_flat_curve,
)
from .instruments import (
    Instrument,
    CashFlowInstrument,
    ZeroCouponBond,
    CouponBond,
    deposit,
    forward_rate_agreement,
    instrument_from_quote,
)
from .bootstrap import (
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

__all__ = [
    "Curve",
    "ConstantCurve",
    "PiecewiseFlatCurve",
    "ExtrapolatedCurve",
    "ShiftedCurve",
    "extrapolate",
    "create_flat_curve",
    "Instrument",
    "CashFlowInstrument",
    "ZeroCouponBond",
    "CouponBond",
    "deposit",
    "forward_rate_agreement",
    "instrument_from_quote",
    "BootstrapError",
    "BootstrapConfig",
    "BootstrapResult",
    "PiecewiseFlatBootstrapper",
    "bootstrap0",
    "bootstrap",
    "bootstrap_deposit",
    "bootstrap_fra",
    "bootstrap_from_quotes",
]
