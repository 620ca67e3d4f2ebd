from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .bonds import BondTerms, present_value
from .config import get_settings
from .errors import RootFindingNonConvergent, YieldUnset
from .solvers import (
    BisectionResult,
    interval_width,
    price_tolerance,
    solve_yield_by_bisection,
)
from . import risk

logger = logging.getLogger(__name__)

# Console convention for "derive the yield from the market price".
UNSET_YIELD = -1.0


def ytm_result(
    terms: BondTerms,
    tolerance: Optional[float] = None,
    max_iterations: Optional[int] = None,
) -> BisectionResult:
    """Bisection on [0, 1] for the yield that reprices to terms.market_price."""
    settings = get_settings()
    if tolerance is None:
        tolerance = settings.ytm_tolerance
    if max_iterations is None:
        max_iterations = settings.ytm_max_iterations

    result = solve_yield_by_bisection(
        lambda r: present_value(terms, r),
        terms.market_price,
        price_tolerance(tolerance),
        max_iterations=max_iterations,
    )
    if not result.converged:
        logger.warning(
            "YTM did not converge within %d iterations (tol=%g); best estimate %.6f reprices to %.6f vs %.6f",
            result.iterations, tolerance, result.rate, result.price, terms.market_price,
        )
    return result


def break_even_result(terms: BondTerms, reference_price: float, width: Optional[float] = None) -> BisectionResult:
    """Bisection on [0, 1] until the bracket is narrower than width; no iteration cap."""
    if width is None:
        width = get_settings().break_even_width
    return solve_yield_by_bisection(
        lambda r: present_value(terms, r),
        float(reference_price),
        interval_width(width),
    )


@dataclass(frozen=True)
class ValuationState:
    required_yield: Optional[float] = None
    source: str = "unset"
    solve: Optional[BisectionResult] = None

    @property
    def is_set(self) -> bool:
        return self.required_yield is not None

    @classmethod
    def unset(cls) -> "ValuationState":
        return cls()

    @classmethod
    def supplied(cls, required_yield: float) -> "ValuationState":
        return cls(float(required_yield), "supplied", None)

    @classmethod
    def derived(
        cls,
        terms: BondTerms,
        tolerance: Optional[float] = None,
        max_iterations: Optional[int] = None,
    ) -> "ValuationState":
        res = ytm_result(terms, tolerance, max_iterations)
        logger.info("required yield derived from market price %.6f: %.6f", terms.market_price, res.rate)
        return cls(res.rate, "derived", res)


@dataclass(frozen=True)
class BondValuation:
    """
    Bond terms paired with a valuation state.

    Build with BondValuation.create(...) to derive the yield from the market
    price when none is supplied; both terms and state are immutable.
    """

    terms: BondTerms
    state: ValuationState = field(default_factory=ValuationState.unset)

    @classmethod
    def create(
        cls,
        terms: BondTerms,
        required_yield: Optional[float] = None,
        tolerance: Optional[float] = None,
        max_iterations: Optional[int] = None,
    ) -> "BondValuation":
        if required_yield is None or required_yield == UNSET_YIELD:
            return cls(terms, ValuationState.derived(terms, tolerance, max_iterations))
        return cls(terms, ValuationState.supplied(required_yield))

    def with_terms(self, terms: BondTerms) -> "BondValuation":
        return BondValuation(terms, self.state)

    @property
    def required_yield(self) -> float:
        if not self.state.is_set:
            raise YieldUnset("required yield is not set; supply one or derive it from the market price.")
        return self.state.required_yield

    # ---- pricing / root finding ----

    def present_value(self, rate: Optional[float] = None) -> float:
        return present_value(self.terms, self.required_yield if rate is None else rate)

    def ytm_result(self, tolerance: Optional[float] = None, max_iterations: Optional[int] = None) -> BisectionResult:
        return ytm_result(self.terms, tolerance, max_iterations)

    def ytm(self, tolerance: Optional[float] = None, max_iterations: Optional[int] = None, strict: bool = False) -> float:
        res = self.ytm_result(tolerance, max_iterations)
        if strict and not res.converged:
            raise RootFindingNonConvergent(res)
        return res.rate

    def break_even_result(self, reference_price: float) -> BisectionResult:
        return break_even_result(self.terms, reference_price)

    def break_even_yield(self, reference_price: float) -> float:
        return self.break_even_result(reference_price).rate

    # ---- sensitivities ----

    def macaulay_duration(self) -> float:
        return risk.macaulay_duration(self.terms, self.required_yield)

    def modified_duration(self) -> float:
        return risk.modified_duration(self.terms, self.required_yield)

    def convexity(self) -> float:
        return risk.convexity(self.terms, self.required_yield)

    def dv01(self) -> float:
        return risk.dv01(self.terms, self.required_yield)

    def current_yield(self) -> float:
        return risk.current_yield(self.terms)
