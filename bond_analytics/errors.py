from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .solvers import BisectionResult


class BondAnalyticsError(Exception):
    """Base class for errors raised by the engine."""


class InvalidTerms(BondAnalyticsError, ValueError):
    """Bond terms that cannot be valued (non-positive face/price/maturity/frequency, negative coupon)."""


class YieldUnset(BondAnalyticsError):
    """A yield-dependent measure was requested before a required yield was established."""


class RootFindingNonConvergent(BondAnalyticsError):
    """
    Bisection exhausted its iteration budget without meeting its stopping rule.

    The best-effort estimate is still available on ``result.rate``.
    """

    def __init__(self, result: "BisectionResult", message: Optional[str] = None):
        self.result = result
        if message is None:
            message = (
                f"bisection did not converge after {result.iterations} iterations "
                f"(rate={result.rate:.10f}, price={result.price:.6f}, target={result.target:.6f})"
            )
        super().__init__(message)
