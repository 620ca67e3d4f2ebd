from __future__ import annotations

import numbers

import numpy as np
from dataclasses import dataclass

from .errors import InvalidTerms


@dataclass(frozen=True)
class BondTerms:
    face_value: float
    coupon_rate: float
    market_price: float
    remaining_years: int
    payment_frequency: int = 2

    def __post_init__(self) -> None:
        if not self.face_value > 0:
            raise InvalidTerms(f"face_value must be positive, got {self.face_value!r}.")
        if not self.market_price > 0:
            raise InvalidTerms(f"market_price must be positive, got {self.market_price!r}.")
        if not self.coupon_rate >= 0:
            raise InvalidTerms(f"coupon_rate must be non-negative, got {self.coupon_rate!r}.")
        _require_positive_int("remaining_years", self.remaining_years)
        _require_positive_int("payment_frequency", self.payment_frequency)

    @property
    def periods(self) -> int:
        return self.remaining_years * self.payment_frequency

    @property
    def coupon(self) -> float:
        """Coupon paid each period (currency units)."""
        return self.face_value * self.coupon_rate / self.payment_frequency

    def period_index(self) -> np.ndarray:
        return np.arange(1, self.periods + 1, dtype=float)

    def cashflows(self) -> np.ndarray:
        """Per-period amounts: coupon every period, face added to the last one."""
        cfs = np.full(self.periods, self.coupon, dtype=float)
        cfs[-1] += self.face_value
        return cfs

    def discount_factors(self, rate: float, shift: int = 0) -> np.ndarray:
        """
        (1 + rate/f)^-(t + shift) for t = 1..periods.

        shift=2 gives the t+2 powers used by convexity.
        """
        base = 1.0 + rate / self.payment_frequency
        if base <= 0.0:
            raise ValueError(
                f"rate {rate!r} is at or below -payment_frequency ({-self.payment_frequency}); "
                "periodic discount base must be positive."
            )
        return base ** -(self.period_index() + shift)


def _require_positive_int(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidTerms(f"{name} must be an integer, got {value!r}.")
    if value <= 0:
        raise InvalidTerms(f"{name} must be positive, got {value!r}.")


def present_value(terms: BondTerms, rate: float) -> float:
    """
    Discounted coupons plus discounted face at a flat annual nominal rate,
    compounded payment_frequency times per year:

      PV(r) = sum_t C/(1+r/f)^t + F/(1+r/f)^n
    """
    dfs = terms.discount_factors(rate)
    return float(np.sum(terms.cashflows() * dfs))
