from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from .scenarios import (
    amortization_schedule,
    frequency_analysis,
    price_sensitivity,
    scenario_analysis,
)
from .valuation import BondValuation


def build_report(valuation: BondValuation) -> Dict[str, Any]:
    """Headline analytics plus the sensitivity / scenario / frequency / amortization tables."""
    terms = valuation.terms
    # a derived yield already carries its YTM solve
    ytm = valuation.state.solve if valuation.state.source == "derived" else valuation.ytm_result()
    break_even = valuation.break_even_result(terms.market_price)

    return {
        "required_yield": valuation.required_yield,
        "yield_source": valuation.state.source,
        "price": valuation.present_value(),
        "ytm": ytm.rate,
        "ytm_converged": ytm.converged,
        "macaulay_duration": valuation.macaulay_duration(),
        "modified_duration": valuation.modified_duration(),
        "convexity": valuation.convexity(),
        "current_yield": valuation.current_yield(),
        "dv01": valuation.dv01(),
        "break_even_yield": break_even.rate,
        "sensitivity": price_sensitivity(valuation),
        "scenarios": scenario_analysis(valuation),
        "frequencies": frequency_analysis(valuation),
        "amortization": amortization_schedule(terms),
    }


def _yield(x: float) -> str:
    return f"{x:.4f}"


def _risk_lines(row: pd.Series) -> List[str]:
    return [
        f"Price: {row['price']}",
        f"Macaulay Duration: {row['macaulay_duration']}",
        f"Modified Duration: {row['modified_duration']}",
        f"Convexity: {row['convexity']}",
    ]


def format_report(report: Dict[str, Any]) -> str:
    """Plain-text rendering: yields at 4 decimals, prices and risk measures at full precision."""
    lines = ["Bond Analysis:"]
    if report["yield_source"] == "derived":
        lines.append(f"Required Yield (derived from market price): {_yield(report['required_yield'])}")
    lines += [
        f"Present Value (Price): {report['price']}",
        f"Yield to Maturity (YTM): {_yield(report['ytm'])}"
        + ("" if report["ytm_converged"] else " (not converged; best estimate)"),
        f"Macaulay Duration: {report['macaulay_duration']}",
        f"Modified Duration: {report['modified_duration']}",
        f"Convexity: {report['convexity']}",
        f"Current Yield: {_yield(report['current_yield'])}",
        f"DV01: {report['dv01']}",
        "",
        "Price Sensitivity Analysis:",
    ]
    for _, r in report["sensitivity"].iterrows():
        lines.append(f"Yield: {_yield(r['yield'])} | Price: {r['price']}")

    lines += ["", f"Break-Even Yield: {_yield(report['break_even_yield'])}", "", "Scenario Analysis:"]
    for _, r in report["scenarios"].iterrows():
        lines.append(f"Yield: {_yield(r['yield'])}")
        lines += _risk_lines(r)
        lines.append("")

    lines.append("Frequency Analysis:")
    for _, r in report["frequencies"].iterrows():
        lines.append(f"Payment Frequency: {r['label']}")
        lines += _risk_lines(r)
        lines.append("")

    lines.append("Amortization Schedule:")
    for _, r in report["amortization"].iterrows():
        lines.append(f"Period: {int(r['period'])} | Payment Time: {r['payment_time']} | Payment: {r['payment']}")

    return "\n".join(lines)
