from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import Query

from .compute.timeseries import ViewingWindow


class WindowQueryParams:
    def __init__(
        self,
        window: str = Query(default=ViewingWindow.ALL.value, description="Viewing window (1M, 3M, 6M, 1Y, 5Y, ALL)"),
        as_of: Optional[date] = Query(default=None, description="Reference date (YYYY-MM-DD); defaults to today"),
    ):
        # Parsed by the store so unknown labels surface as InvalidWindowError.
        self.window = window
        self.as_of = as_of

    def __call__(self) -> tuple[str, Optional[date]]:
        return self.window, self.as_of
