from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# stop(target, pv, low, high) -> bool, evaluated after the bracket is narrowed
StopRule = Callable[[float, float, float, float], bool]


@dataclass(frozen=True)
class BisectionResult:
    rate: float
    price: float
    target: float
    converged: bool
    iterations: int
    low: float
    high: float

    @property
    def width(self) -> float:
        return self.high - self.low


def price_tolerance(tol: float) -> StopRule:
    """Stop as soon as the midpoint reprices within tol of the target."""
    if tol <= 0:
        raise ValueError("tolerance must be positive")

    def stop(target: float, pv: float, low: float, high: float) -> bool:
        return abs(target - pv) < tol

    return stop


def interval_width(eps: float) -> StopRule:
    """Stop once the bracket is no wider than eps; price error is not checked."""
    if eps <= 0:
        raise ValueError("interval width must be positive")

    def stop(target: float, pv: float, low: float, high: float) -> bool:
        return high - low <= eps

    return stop


def solve_yield_by_bisection(
    price_fn: Callable[[float], float],
    target_price: float,
    stop: StopRule,
    max_iterations: Optional[int] = None,
    low: float = 0.0,
    high: float = 1.0,
) -> BisectionResult:
    """
    Bisection for the rate r in [low, high] with price_fn(r) ~= target_price.

    Relies on price_fn decreasing in r: a price below target means the rate is
    too high, so the upper half is discarded. Targets outside
    [price_fn(high), price_fn(low)] cannot be bracketed and the result drifts
    to the nearer bound with converged=False.

    max_iterations=None runs until the stop rule fires. The returned rate is
    always the last midpoint evaluated.
    """
    if max_iterations is not None and max_iterations < 1:
        raise ValueError("max_iterations must be at least 1")
    if not low < high:
        raise ValueError(f"empty bracket: low={low!r} high={high!r}")

    mid = 0.5 * (low + high)
    pv = float("nan")
    i = 0
    while max_iterations is None or i < max_iterations:
        i += 1
        mid = 0.5 * (low + high)
        pv = price_fn(mid)

        if pv < target_price:
            high = mid
        else:
            low = mid

        if stop(target_price, pv, low, high):
            logger.debug("bisection converged: rate=%.10f after %d iterations", mid, i)
            return BisectionResult(mid, pv, target_price, True, i, low, high)

    logger.debug("bisection exhausted %d iterations at rate=%.10f", i, mid)
    return BisectionResult(mid, pv, target_price, False, i, low, high)
