"""Static holdings book shown next to the performance chart."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Tuple


@dataclass(frozen=True)
class Holding:
    ticker: str
    date_added: date
    amount_invested: float
    purchase_price: float
    shares: float
    current_price: float
    current_value: float
    gain_loss: float
    return_percent: float


# Mock positions; values are display data, not derived here.
DEFAULT_HOLDINGS: Tuple[Holding, ...] = (
    Holding("NVDA", date(2024, 1, 15), 1000.0, 495.22, 2.019, 875.28, 1767.44, 767.44, 76.74),
    Holding("TSLA", date(2024, 3, 20), 1500.0, 175.50, 8.547, 242.84, 2075.95, 575.95, 38.40),
    Holding("PLTR", date(2024, 6, 10), 800.0, 23.45, 34.117, 38.76, 1322.37, 522.37, 65.30),
)


def default_holdings() -> Tuple[Holding, ...]:
    return DEFAULT_HOLDINGS


__all__ = ["DEFAULT_HOLDINGS", "Holding", "default_holdings"]
