from __future__ import annotations

import dataclasses
from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from .bonds import BondTerms, present_value
from .valuation import BondValuation, ValuationState

FREQUENCY_LABELS = {1: "Annual", 2: "Semi-Annual", 4: "Quarterly", 12: "Monthly"}

DEFAULT_SCENARIO_SHIFTS = (-0.02, -0.01, 0.0, 0.01, 0.02)


def frequency_label(freq: int) -> str:
    return FREQUENCY_LABELS.get(int(freq), f"{int(freq)}x per year")


def price_sensitivity(valuation: BondValuation, step: float = 0.005, steps: int = 2) -> pd.DataFrame:
    """Price at y + k*step for k = -steps..steps."""
    base = valuation.required_yield
    shifts = np.arange(-steps, steps + 1, dtype=float) * step
    yields = base + shifts
    prices = [present_value(valuation.terms, float(y)) for y in yields]
    return pd.DataFrame({"shift": shifts, "yield": yields, "price": prices})


def _risk_row(valuation: BondValuation, y: float) -> dict:
    shifted = BondValuation(valuation.terms, ValuationState.supplied(y))
    return {
        "yield": y,
        "price": shifted.present_value(),
        "macaulay_duration": shifted.macaulay_duration(),
        "modified_duration": shifted.modified_duration(),
        "convexity": shifted.convexity(),
    }


def scenario_analysis(valuation: BondValuation, shifts: Sequence[float] = DEFAULT_SCENARIO_SHIFTS) -> pd.DataFrame:
    """Price and risk measures re-evaluated at each shifted yield."""
    base = valuation.required_yield
    rows = []
    for shift in shifts:
        row = {"shift": float(shift)}
        row.update(_risk_row(valuation, base + float(shift)))
        rows.append(row)
    return pd.DataFrame(rows)


def frequency_analysis(valuation: BondValuation, frequencies: Iterable[int] = (1, 2, 4)) -> pd.DataFrame:
    """
    Same bond, yield and market price, re-valued under other coupon frequencies.
    The coupon rate stays annual, so the per-period coupon scales with 1/f.
    """
    y = valuation.required_yield
    rows = []
    for freq in frequencies:
        terms = dataclasses.replace(valuation.terms, payment_frequency=int(freq))
        temp = valuation.with_terms(terms)
        rows.append(
            {
                "frequency": int(freq),
                "label": frequency_label(freq),
                "price": temp.present_value(y),
                "macaulay_duration": temp.macaulay_duration(),
                "modified_duration": temp.modified_duration(),
                "convexity": temp.convexity(),
            }
        )
    return pd.DataFrame(rows)


def amortization_schedule(terms: BondTerms) -> pd.DataFrame:
    """Payment per period; the final one includes the face value."""
    t = terms.period_index()
    return pd.DataFrame(
        {
            "period": t.astype(int),
            "payment_time": t / terms.payment_frequency,
            "payment": terms.cashflows(),
        }
    )
