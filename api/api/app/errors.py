"""Error taxonomy shared by the compute core and its callers."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for dashboard errors."""


class EmptySeriesError(DashboardError, ValueError):
    """Raised when a summary is requested for a series with no points."""


class InvalidWindowError(DashboardError, ValueError):
    """Raised when a viewing window label is not one of the supported windows."""

    def __init__(self, window: object) -> None:
        self.window = window
        super().__init__(f"Unsupported viewing window: {window!r}")


class InvalidSeriesError(DashboardError, ValueError):
    """Raised when a base series breaks the ordering/normalization invariants."""


__all__ = ["DashboardError", "EmptySeriesError", "InvalidWindowError", "InvalidSeriesError"]
