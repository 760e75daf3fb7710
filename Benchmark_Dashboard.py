#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Portfolio vs Benchmark Dashboard
================================

Single page:
    • Holdings table (ticker, date added, return)
    • Range buttons 1M / 3M / 6M / 1Y / 5Y / ALL
    • Performance chart: portfolio vs S&P 500, both normalized to 100 at the
      start of the history
    • Summary cards: portfolio return, benchmark return, difference

The selected window lives in the radio control; every change re-runs
select_range -> aggregate -> summarize against the shared base series.
"""

from __future__ import annotations

import logging
import os
import webbrowser
from typing import Any, List

from dash import Dash, Input, Output, dash_table, dcc, html, no_update
import plotly.graph_objects as go

from api.app.compute import aggregate, select_range, summarize
from api.app.compute.timeseries import Series
from api.app.errors import EmptySeriesError
from api.app.services.dashboard_store import DashboardStore, store as default_store
from src.charts import build_performance_figure
from src.constants import APP_TITLE, COLOR_NEGATIVE, COLOR_POSITIVE, DEFAULT_WINDOW, WINDOW_BUTTONS
from src.formatting import holdings_table_rows, summary_cards
from src.tabs import _single_graph_child, pretty_card, summary_card

logger = logging.getLogger(__name__)


# ------------------------------ pipeline --------------------------------

def run_pipeline(window: str, data_store: DashboardStore) -> Series:
    base = data_store.base_series
    selection = select_range(base, window, data_store.today())
    return tuple(aggregate(selection.points, selection.granularity))


def render_chart(window: str, data_store: DashboardStore) -> go.Figure:
    return build_performance_figure(run_pipeline(window, data_store))


def render_summary(window: str, data_store: DashboardStore) -> List[Any] | Any:
    """Summary cards for `window`; keeps the cards on screen when there is nothing to summarize."""
    try:
        result = summarize(run_pipeline(window, data_store))
    except EmptySeriesError:
        logger.warning("No points for window %s; keeping previous summary", window)
        return no_update
    return [summary_card(card) for card in summary_cards(result)]


# ------------------------------ Dash UI --------------------------------

def build_layout(data_store: DashboardStore) -> html.Div:
    return html.Div(
        style={"fontFamily": "Georgia, 'Times New Roman', serif", "padding": "18px", "background": "#f6f7fb"},
        children=[
            html.H2(APP_TITLE, style={"marginTop": 0}),

            pretty_card([
                html.H4("Holdings", style={"marginTop": 0}),
                dash_table.DataTable(
                    id="holdings-table",
                    data=holdings_table_rows(data_store.holdings()),
                    columns=[
                        {"name": "Ticker", "id": "ticker"},
                        {"name": "Date Added", "id": "date_added"},
                        {"name": "Return", "id": "return"},
                    ],
                    style_header={"fontWeight": "bold"},
                    style_cell={"padding": "6px", "whiteSpace": "normal", "textAlign": "left"},
                    style_data_conditional=[
                        {"if": {"filter_query": '{tone} = "positive"', "column_id": "return"}, "color": COLOR_POSITIVE},
                        {"if": {"filter_query": '{tone} = "negative"', "column_id": "return"}, "color": COLOR_NEGATIVE},
                    ],
                    page_size=20,
                ),
            ]),

            html.Div(style={"height": "14px"}),

            pretty_card([
                html.Div(
                    [
                        html.H4("Performance", style={"margin": 0}),
                        dcc.RadioItems(
                            id="window-radio",
                            options=[{"label": w, "value": w} for w in WINDOW_BUTTONS],
                            value=DEFAULT_WINDOW,
                            inline=True,
                            inputStyle={"marginRight": "4px", "marginLeft": "10px"},
                        ),
                    ],
                    style={"display": "flex", "justifyContent": "space-between", "alignItems": "center"},
                ),
                _single_graph_child(go.Figure(), graph_id="performance-graph"),
            ]),

            html.Div(style={"height": "14px"}),

            html.Div(
                id="summary-cards",
                style={"display": "grid", "gridTemplateColumns": "repeat(3, 1fr)", "gap": "14px"},
            ),
        ],
    )


def create_app(data_store: DashboardStore | None = None) -> Dash:
    data_store = data_store or default_store
    dash_app = Dash(__name__, suppress_callback_exceptions=True)
    dash_app.title = APP_TITLE
    dash_app.layout = build_layout(data_store)

    @dash_app.callback(
        Output("performance-graph", "figure"),
        Input("window-radio", "value"),
    )
    def _update_chart(window):
        return render_chart(window or DEFAULT_WINDOW, data_store)

    @dash_app.callback(
        Output("summary-cards", "children"),
        Input("window-radio", "value"),
    )
    def _update_summary(window):
        return render_summary(window or DEFAULT_WINDOW, data_store)

    return dash_app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    webbrowser.open_new("http://127.0.0.1:8050/")
    app.run(debug=True, use_reloader=False, port=8050)
