"""Mock data sources for the dashboard (generated history and holdings)."""

from api.app.data.generator import generate_mock_series
from api.app.data.holdings import Holding, default_holdings

__all__ = ["Holding", "default_holdings", "generate_mock_series"]
