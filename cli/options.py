from __future__ import annotations

from datetime import date
from typing import Any, Callable, Dict, Optional

import click

WINDOW_CHOICES = ["1M", "3M", "6M", "1Y", "5Y", "ALL"]


def _iso_date(_: click.Context, __: click.Parameter, value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError as exc:
        raise click.BadParameter("Use ISO 8601 dates (YYYY-MM-DD).") from exc


def _upper(_: click.Context, __: click.Parameter, value: Optional[str]) -> Optional[str]:
    return value.upper() if value else value


def window_options(func: Callable[..., Any]) -> Callable[..., Any]:
    options = [
        click.option(
            "--window",
            default="ALL",
            show_default=True,
            type=click.Choice(WINDOW_CHOICES, case_sensitive=False),
            callback=_upper,
            help="Viewing window.",
        ),
        click.option("--as-of", callback=_iso_date, help="Reference date (YYYY-MM-DD); server today if omitted."),
    ]

    for option in reversed(options):
        func = option(func)
    return func


def build_window_params(**kwargs: Any) -> Dict[str, Any]:
    return {key: value for key, value in kwargs.items() if value is not None}
