# src/formatting.py

from __future__ import annotations
from datetime import date, datetime
from typing import Any, Dict, Iterable, List

from src.constants import BENCHMARK_LABEL, NO_HOLDINGS_TEXT, PORTFOLIO_LABEL

# NOTE:
# - Display-only helpers: everything user-facing (signs, percent strings,
#   date labels) is produced here, never in the compute core.
# - All helpers are PURE; callers pass in summaries/holdings explicitly.


def format_signed_pct(value: float, decimals: int = 1) -> str:
    """+13.4% / -2.1%; zero counts as positive."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.{decimals}f}%"


def tone(value: float) -> str:
    return "positive" if value >= 0 else "negative"


def format_display_date(value: date | datetime | str) -> str:
    """'Jan 5, 2024' style label. Accepts ISO strings as well as dates."""
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    return f"{value:%b} {value.day}, {value.year}"


def summary_cards(summary: Any) -> List[Dict[str, str]]:
    """
    Card payloads for the three headline numbers.
    `summary` is anything with portfolio/benchmark/difference *_pct attributes
    (compute SummaryResult or the API SummaryResponse).
    """
    cards = [
        ("portfolio", PORTFOLIO_LABEL, summary.portfolio_return_pct),
        ("benchmark", BENCHMARK_LABEL, summary.benchmark_return_pct),
        ("difference", "Difference", summary.difference_pct),
    ]
    return [
        {"key": key, "label": label, "text": format_signed_pct(val), "tone": tone(val)}
        for key, label, val in cards
    ]


def holdings_table_rows(holdings: Iterable[Any]) -> List[Dict[str, str]]:
    """Rows for the holdings DataTable: ticker, date added, return."""
    rows = []
    for h in holdings:
        rows.append(
            {
                "ticker": h.ticker,
                "date_added": format_display_date(h.date_added),
                "return": format_signed_pct(h.return_percent, decimals=2),
                "tone": tone(h.return_percent),
            }
        )
    if not rows:
        # Placeholder row so the table never renders blank.
        rows.append({"ticker": NO_HOLDINGS_TEXT, "date_added": "", "return": "", "tone": "neutral"})
    return rows
