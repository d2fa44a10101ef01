"""
Curve bootstrapping engine.

Builds a piecewise flat forward curve that reprices a list of instruments:
1. Take the curve built so far and its last knot time t
2. Solve for the forward rate on (t, maturity] that reprices the next
   instrument, with the curve extrapolated flat at the trial rate
3. Append (maturity, rate) as a new knot

Instruments are consumed in the order given; each must mature after the
previous one. Earlier knots are never revisited.

Closed forms for deposits and FRAs are provided alongside the general
secant-based step.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging
import math

import pandas as pd

from ..conventions import NAN, SQRT_EPSILON, isnan
from ..pricers.valuation import present
from ..solvers import RootResult, Secant
from .curve import Curve, PiecewiseFlatCurve, extrapolate
from .instruments import Instrument, instrument_from_quote

logger = logging.getLogger(__name__)

# Guess used when neither the caller nor the curve supplies one
FALLBACK_GUESS = 0.01
# Distance between the two secant seeds
SEED_STEP = 0.01


class BootstrapError(RuntimeError):
    """
    Bootstrap run failure.

    Attributes:
        index: 1-based position of the offending instrument
        reason: Cause of the failure
        curve: Curve built before the failure
    """

    def __init__(self, index: int, reason: str, curve: Optional[PiecewiseFlatCurve] = None):
        self.index = index
        self.reason = reason
        self.curve = curve
        super().__init__(f"Instrument {index}: {reason}")


@dataclass(frozen=True)
class BootstrapConfig:
    """
    Bootstrap settings.

    Attributes:
        default_guess: Initial forward rate guess for the first instrument
        tol: Secant tolerance on the repricing residual
        max_iter: Secant iteration limit per instrument
        verify: Whether to reprice all instruments after the run
        repricing_tolerance: Maximum allowed |PV - price| when verifying
    """
    default_guess: float = 0.03
    tol: float = SQRT_EPSILON
    max_iter: int = 100
    verify: bool = True
    repricing_tolerance: float = SQRT_EPSILON


@dataclass
class BootstrapResult:
    """Result of curve bootstrap."""
    curve: PiecewiseFlatCurve
    repricing_errors: Dict[int, float]
    success: bool
    message: str
    report: pd.DataFrame = field(default_factory=pd.DataFrame)


def _usable_guess(f: float) -> bool:
    # seeds (f, f + SEED_STEP) must be finite and distinct
    return math.isfinite(f) and f + SEED_STEP != f


def _solve_step(
    instrument: Instrument,
    curve: Curve,
    t: float,
    f: Optional[float],
    price: float,
    tol: float,
    max_iter: int
) -> Tuple[float, float, Optional[RootResult]]:
    u_last, _ = instrument.last()
    if not u_last > t:
        return NAN, NAN, None

    guess = NAN if f is None else float(f)
    if not _usable_guess(guess):
        guess = curve.forward(t)
    if not _usable_guess(guess):
        guess = FALLBACK_GUESS

    def pv_gap(f_: float) -> float:
        return present(instrument, extrapolate(curve, t, f_)) - price

    try:
        solver = Secant(guess, guess + SEED_STEP, tol, max_iter)
    except ValueError as e:
        logger.debug("Secant rejected settings: %s", e)
        return NAN, NAN, RootResult(NAN, NAN, 0, False)
    result = solver.solve(pv_gap)
    if not result.converged:
        return NAN, NAN, result
    return u_last, result.root, result


def bootstrap0(
    instrument: Instrument,
    curve: Curve,
    t: float = 0.0,
    f: float = NAN,
    price: float = 0.0,
    tol: float = SQRT_EPSILON,
    max_iter: int = 100
) -> Tuple[float, float]:
    """
    Bootstrap a single instrument.

    Args:
        instrument: Instrument to reprice
        curve: Curve fixed up to time t
        t: Last committed curve time
        f: Forward rate guess; NaN or infinite uses curve.forward(t), then 1%
        price: Market price of the instrument
        tol: Secant tolerance
        max_iter: Secant iteration limit

    Returns:
        New knot (maturity, forward rate), or (NaN, NaN) if the instrument
        does not mature after t or the root finder fails; never raises
        on numeric input
    """
    u, rate, _ = _solve_step(instrument, curve, t, f, price, tol, max_iter)
    return u, rate


def bootstrap(
    instruments: Sequence[Instrument],
    prices: Sequence[float],
    t: float = 0.0,
    f: float = 0.03,
    tol: float = SQRT_EPSILON,
    max_iter: int = 100,
    report: Optional[List[Dict[str, Any]]] = None
) -> PiecewiseFlatCurve:
    """
    Bootstrap a piecewise flat curve from instruments and prices.

    Args:
        instruments: Instruments in increasing maturity order
        prices: Market prices, one per instrument
        t: Starting curve time
        f: Initial forward rate guess (NaN for the 1% fallback)
        tol: Secant tolerance
        max_iter: Secant iteration limit per instrument
        report: Optional list receiving one dict per committed knot

    Returns:
        Curve repricing every instrument

    Raises:
        ValueError: If instruments and prices differ in size
        BootstrapError: If an entry is not an instrument or a step fails
    """
    instruments = list(instruments)
    prices = list(prices)
    if len(instruments) != len(prices):
        raise ValueError(
            f"Instruments and prices must have the same size: "
            f"{len(instruments)} != {len(prices)}"
        )

    curve = PiecewiseFlatCurve()

    for k, (inst, p) in enumerate(zip(instruments, prices), start=1):
        if not isinstance(inst, Instrument):
            raise BootstrapError(k, f"invalid instrument {inst!r}", curve)

        t_new, f_new, result = _solve_step(inst, curve, t, f, float(p), tol, max_iter)
        if isnan(t_new) or isnan(f_new):
            if result is None:
                reason = f"maturity {inst.maturity} does not extend curve beyond {t}"
            else:
                reason = (f"root finder failed after {result.iterations} iterations "
                          f"(residual {result.tolerance})")
            raise BootstrapError(k, reason, curve)

        curve.push_back(t_new, f_new)
        logger.debug("Knot %s: t=%s f=%s (%s iterations)", k, t_new, f_new, result.iterations)

        if report is not None:
            report.append({
                "step": k,
                "instrument": type(inst).__name__,
                "maturity": t_new,
                "price": float(p),
                "forward": f_new,
                "spot": curve.spot(t_new),
                "discount": curve.discount(t_new),
                "iterations": result.iterations,
                "residual": result.tolerance,
            })

        t, f = t_new, f_new

    return curve


def bootstrap_deposit(rate: float, t: float) -> Tuple[float, float]:
    """
    Knot repricing a cash deposit at simple rate r to t.

    (1 + r t) exp(-f t) = 1, so f = log(1 + r t) / t.
    """
    if not t > 0:
        raise ValueError(f"Deposit maturity must be positive: {t}")
    return t, math.log1p(rate * t) / t


def bootstrap_fra(rate: float, t1: float, t2: float) -> Tuple[float, float]:
    """
    Knot repricing a forward rate agreement at simple rate r over [t1, t2],
    given a curve whose last knot is at t1.

    (1 + r (t2 - t1)) exp(-f (t2 - t1)) = 1.
    """
    if not 0 <= t1 < t2:
        raise ValueError(f"FRA requires 0 <= t1 < t2: t1={t1}, t2={t2}")
    tau = t2 - t1
    return t2, math.log1p(rate * tau) / tau


class PiecewiseFlatBootstrapper:
    """
    Bootstrap a piecewise flat forward curve and report on the fit.

    The bootstrapper:
    1. Runs the sequential bootstrap in the order given
    2. Collects a per-knot report
    3. Verifies that every instrument reprices within tolerance

    Attributes:
        config: BootstrapConfig
    """

    def __init__(self, config: Optional[BootstrapConfig] = None):
        self.config = config or BootstrapConfig()

    def bootstrap(
        self,
        instruments: Sequence[Instrument],
        prices: Sequence[float],
        verify: Optional[bool] = None
    ) -> BootstrapResult:
        """
        Bootstrap curve from instruments.

        Args:
            instruments: Instruments in increasing maturity order
            prices: Market prices
            verify: Override config.verify

        Returns:
            BootstrapResult with curve and diagnostics

        Raises:
            ValueError: If instruments and prices differ in size
        """
        cfg = self.config
        instruments = list(instruments)
        prices = list(prices)
        verify = cfg.verify if verify is None else verify

        if len(instruments) != len(prices):
            raise ValueError(
                f"Instruments and prices must have the same size: "
                f"{len(instruments)} != {len(prices)}"
            )
        if not instruments:
            return BootstrapResult(
                curve=PiecewiseFlatCurve(),
                repricing_errors={},
                success=False,
                message="No instruments provided"
            )

        rows: List[Dict[str, Any]] = []
        try:
            curve = bootstrap(
                instruments, prices,
                t=0.0, f=cfg.default_guess,
                tol=cfg.tol, max_iter=cfg.max_iter,
                report=rows
            )
        except BootstrapError as e:
            logger.debug("Bootstrap stopped: %s", e)
            return BootstrapResult(
                curve=e.curve if e.curve is not None else PiecewiseFlatCurve(),
                repricing_errors={},
                success=False,
                message=f"Bootstrap failed at instrument {e.index}: {e.reason}",
                report=pd.DataFrame(rows)
            )

        repricing_errors: Dict[int, float] = {}
        if verify:
            repricing_errors = self._verify_repricing(curve, instruments, prices)
            max_error = max(abs(e) for e in repricing_errors.values())
            if not max_error <= cfg.repricing_tolerance:
                return BootstrapResult(
                    curve=curve,
                    repricing_errors=repricing_errors,
                    success=False,
                    message=(f"Repricing error {max_error:.2e} exceeds tolerance "
                             f"{cfg.repricing_tolerance:.2e}"),
                    report=pd.DataFrame(rows)
                )

        return BootstrapResult(
            curve=curve,
            repricing_errors=repricing_errors,
            success=True,
            message="Bootstrap successful",
            report=pd.DataFrame(rows)
        )

    def _verify_repricing(
        self,
        curve: Curve,
        instruments: List[Instrument],
        prices: List[float]
    ) -> Dict[int, float]:
        """
        Reprice every instrument on the finished curve.

        Returns dict of {1-based index: present value - price}.
        """
        errors = {}
        for k, (inst, p) in enumerate(zip(instruments, prices), start=1):
            errors[k] = present(inst, curve) - float(p)
        logger.debug("Repricing errors: %s", errors)
        return errors


def bootstrap_from_quotes(
    quotes: List[Dict[str, Any]],
    config: Optional[BootstrapConfig] = None
) -> PiecewiseFlatCurve:
    """
    Convenience function to bootstrap a curve from quote dictionaries.

    Args:
        quotes: Quote dicts in increasing maturity order; see
            instrument_from_quote for the accepted formats
        config: Bootstrap settings

    Returns:
        Bootstrapped curve

    Raises:
        RuntimeError: If the bootstrap fails

    Example:
        {"instrument_type": "DEPOSIT", "maturity": 0.25, "quote": 0.053}
        {"instrument_type": "BOND", "maturity": 2.0, "coupon": 0.05, "price": 1.0}
    """
    instruments = []
    prices = []
    for q in quotes:
        inst, p = instrument_from_quote(q)
        instruments.append(inst)
        prices.append(p)

    result = PiecewiseFlatBootstrapper(config).bootstrap(instruments, prices)

    if not result.success:
        raise RuntimeError(f"Bootstrap failed: {result.message}")

    return result.curve


__all__ = [
    "FALLBACK_GUESS",
    "SEED_STEP",
    "BootstrapError",
    "BootstrapConfig",
    "BootstrapResult",
    "bootstrap0",
    "bootstrap",
    "bootstrap_deposit",
    "bootstrap_fra",
    "PiecewiseFlatBootstrapper",
    "bootstrap_from_quotes",
]
