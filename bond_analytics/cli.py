"""
Bond analytics console front end.

Usage:
    python -m bond_analytics                                  # prompt for every input
    python -m bond_analytics --face-value 1000 --coupon-rate 0.05 \\
        --market-price 950 --years 8 --frequency 2 --required-yield -1

Any input not given as an option is read from stdin in the order: face value,
coupon rate, market price, remaining years, payment frequency, required yield.
A required yield of -1 derives it from the market price.
"""

from __future__ import annotations

import argparse
import logging
from typing import Callable, List, Optional, Sequence, Tuple

from .bonds import BondTerms
from .config import get_settings
from .errors import InvalidTerms
from .report import build_report, format_report
from .valuation import UNSET_YIELD, BondValuation

logger = logging.getLogger(__name__)

# (option dest, prompt, converter), in stdin order
INPUTS: List[Tuple[str, str, Callable[[str], object]]] = [
    ("face_value", "Enter Face Value (e.g. 1000): ", float),
    ("coupon_rate", "Enter Coupon Rate (e.g. 0.05 for 5%): ", float),
    ("market_price", "Enter Market Price (e.g. 950): ", float),
    ("years", "Enter Remaining Maturity in Years (e.g. 8): ", int),
    ("frequency", "Enter Payment Frequency (1 for annual, 2 for semi-annual): ", int),
    (
        "required_yield",
        "Enter Required Yield (e.g. 0.06 for 6%, or -1 if you want it to be calculated based on price): ",
        float,
    ),
]


def setup_logging() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format=settings.log_format)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="bond-analytics", description="Price/yield analytics for a plain coupon bond.")
    p.add_argument("--face-value", dest="face_value", type=float)
    p.add_argument("--coupon-rate", dest="coupon_rate", type=float, help="annual rate as a decimal")
    p.add_argument("--market-price", dest="market_price", type=float)
    p.add_argument("--years", dest="years", type=int, help="whole years to maturity")
    p.add_argument("--frequency", dest="frequency", type=int, help="coupon payments per year")
    p.add_argument(
        "--required-yield",
        dest="required_yield",
        type=float,
        help=f"annual yield as a decimal; {UNSET_YIELD:g} derives it from the market price",
    )
    return p


def collect_inputs(args: argparse.Namespace, read: Callable[[str], str] = input) -> dict:
    values = {}
    for dest, prompt, conv in INPUTS:
        v = getattr(args, dest)
        if v is None:
            raw = read(prompt).strip()
            try:
                v = conv(raw)
            except ValueError:
                raise SystemExit(f"Error: invalid value for {dest.replace('_', ' ')}: {raw!r}")
        values[dest] = v
    return values


def main(argv: Optional[Sequence[str]] = None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)

    try:
        values = collect_inputs(args)
    except EOFError:
        raise SystemExit("Error: input ended before all bond parameters were read")

    try:
        terms = BondTerms(
            face_value=values["face_value"],
            coupon_rate=values["coupon_rate"],
            market_price=values["market_price"],
            remaining_years=values["years"],
            payment_frequency=values["frequency"],
        )
    except InvalidTerms as e:
        raise SystemExit(f"Error: {e}")

    if values["required_yield"] == UNSET_YIELD:
        print("Calculating required yield (YTM) based on the market price...")
    logger.debug("terms: %s", terms)
    try:
        valuation = BondValuation.create(terms, values["required_yield"])
        text = format_report(build_report(valuation))
    except ValueError as e:
        # yields at or below -frequency, directly or after a scenario shift
        raise SystemExit(f"Error: {e}")

    print()
    print(text)
    return 0
