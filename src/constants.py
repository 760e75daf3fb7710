# src/constants.py

from __future__ import annotations

APP_TITLE = "Portfolio vs S&P 500"

PORTFOLIO_LABEL = "My Portfolio"
BENCHMARK_LABEL = "S&P 500"

COLOR_PORTFOLIO = "#0366d6"
COLOR_PORTFOLIO_FILL = "rgba(3, 102, 214, 0.1)"
COLOR_BENCHMARK = "#666"
COLOR_BENCHMARK_FILL = "rgba(102, 102, 102, 0.05)"

COLOR_POSITIVE = "#1a7f37"
COLOR_NEGATIVE = "#cf222e"

DEFAULT_WINDOW = "ALL"

NO_HOLDINGS_TEXT = "No holdings yet."

# Range buttons, left to right.
WINDOW_BUTTONS = ["1M", "3M", "6M", "1Y", "5Y", "ALL"]
