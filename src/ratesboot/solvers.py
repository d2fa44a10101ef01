"""
One-dimensional root finding.

The secant method drives every price-to-rate inversion in the library:
bootstrap steps, yield to maturity and option-adjusted spread. It needs no
derivative and no bracket, only two seed points.

Failures are reported through the returned RootResult rather than raised,
so tight loops can test `converged` cheaply. Callers that want an exception
use RootResult.raise_if_failed().
"""

from dataclasses import dataclass
from typing import Callable, Iterator
import logging
import math

from .conventions import NAN, SQRT_EPSILON

logger = logging.getLogger(__name__)

Func = Callable[[float], float]


class RootFindingError(RuntimeError):
    """Raised when a root finder result is escalated to a hard failure."""


@dataclass(frozen=True)
class RootResult:
    """
    Outcome of a root search.

    Attributes:
        root: Last iterate (NaN if the iteration broke down)
        tolerance: Achieved |g(root)|
        iterations: Secant updates performed
        converged: Whether the stopping criterion was met
    """
    root: float
    tolerance: float
    iterations: int
    converged: bool = True

    def __iter__(self) -> Iterator:
        # unpacks as (root, tolerance, iterations)
        return iter((self.root, self.tolerance, self.iterations))

    def raise_if_failed(self) -> float:
        """Return the root, raising RootFindingError if not converged."""
        if not self.converged:
            raise RootFindingError(
                f"Root finder did not converge after {self.iterations} iterations "
                f"(root={self.root}, tolerance={self.tolerance})"
            )
        return self.root


class Secant:
    """
    Secant method root finder.

    x_{n+1} = x_n - g(x_n) (x_n - x_{n-1}) / (g(x_n) - g(x_{n-1}))

    Stops when |g(x_{n+1})| <= tol or |x_{n+1} - x_n| <= tol.

    Attributes:
        x0, x1: Seed points
        tol: Absolute tolerance on function value and step
        max_iter: Maximum number of secant updates
    """

    def __init__(
        self,
        x0: float,
        x1: float,
        tol: float = SQRT_EPSILON,
        max_iter: int = 100
    ):
        if x0 == x1:
            raise ValueError("Secant seed points must differ")
        if tol <= 0:
            raise ValueError(f"Tolerance must be positive: {tol}")
        if max_iter < 1:
            raise ValueError(f"max_iter must be at least 1: {max_iter}")
        self.x0 = float(x0)
        self.x1 = float(x1)
        self.tol = float(tol)
        self.max_iter = int(max_iter)

    def solve(self, func: Func) -> RootResult:
        """
        Find x with func(x) == 0.

        Args:
            func: Scalar function

        Returns:
            RootResult; a zero or non-finite secant denominator ends the
            search with converged=False and a NaN root.
        """
        x0, x1 = self.x0, self.x1
        g0, g1 = func(x0), func(x1)

        if math.isfinite(g1) and abs(g1) <= self.tol:
            return RootResult(x1, abs(g1), 0, True)
        if math.isfinite(g0) and abs(g0) <= self.tol:
            return RootResult(x0, abs(g0), 0, True)

        for n in range(1, self.max_iter + 1):
            denominator = g1 - g0
            if not math.isfinite(denominator) or denominator == 0:
                logger.debug("Secant breakdown at iter %s: g0=%s g1=%s", n, g0, g1)
                return RootResult(NAN, abs(g1), n - 1, False)

            x2 = x1 - g1 * (x1 - x0) / denominator
            if not math.isfinite(x2):
                logger.debug("Secant step not finite at iter %s", n)
                return RootResult(NAN, abs(g1), n, False)

            g2 = func(x2)
            logger.debug("Secant iter %s: x=%s g=%s", n, x2, g2)

            x0, g0, x1, g1 = x1, g1, x2, g2
            if not math.isfinite(g1):
                return RootResult(NAN, abs(g1), n, False)
            if abs(g1) <= self.tol or abs(x1 - x0) <= self.tol:
                return RootResult(x1, abs(g1), n, True)

        logger.debug("Secant exhausted %s iterations at x=%s", self.max_iter, x1)
        return RootResult(x1, abs(g1), self.max_iter, False)


def secant(
    func: Func,
    x0: float,
    x1: float,
    tol: float = SQRT_EPSILON,
    max_iter: int = 100
) -> RootResult:
    """Convenience wrapper: Secant(x0, x1, tol, max_iter).solve(func)."""
    return Secant(x0, x1, tol, max_iter).solve(func)


__all__ = [
    "RootFindingError",
    "RootResult",
    "Secant",
    "secant",
]
