from __future__ import annotations

import numpy as np

from .bonds import BondTerms, present_value

# Durations and convexity are in coupon-period units and are scaled by the
# observed market price, not by PV at the required yield.


def macaulay_duration(terms: BondTerms, required_yield: float) -> float:
    t = terms.period_index()
    dfs = terms.discount_factors(required_yield)
    weighted = float(np.sum(t * terms.cashflows() * dfs))
    return weighted / terms.market_price


def modified_duration(terms: BondTerms, required_yield: float) -> float:
    mac = macaulay_duration(terms, required_yield)
    return mac / (1.0 + required_yield / terms.payment_frequency)


def convexity(terms: BondTerms, required_yield: float) -> float:
    t = terms.period_index()
    dfs = terms.discount_factors(required_yield, shift=2)
    weighted = float(np.sum(t * (t + 1.0) * terms.cashflows() * dfs))
    return weighted / terms.market_price


def current_yield(terms: BondTerms) -> float:
    # per-period coupon over price; not annualized
    return terms.coupon / terms.market_price


def dv01(terms: BondTerms, required_yield: float, bp: float = 1.0) -> float:
    """Price change for a +bp parallel move in the yield (negative for a plain bond)."""
    bump = bp / 10000.0
    return present_value(terms, required_yield + bump) - present_value(terms, required_yield)
