# src/charts.py
from __future__ import annotations
from typing import Optional, Sequence
import plotly.graph_objects as go

from src.constants import (
    BENCHMARK_LABEL,
    COLOR_BENCHMARK,
    COLOR_BENCHMARK_FILL,
    COLOR_PORTFOLIO,
    COLOR_PORTFOLIO_FILL,
    PORTFOLIO_LABEL,
)
from src.formatting import format_display_date


# PURPOSE
#   Pure Plotly figure builders for the dashboard. They take the aggregated
#   series (sequence of TimePoint) and return `go.Figure` objects. No Dash
#   callbacks, no global state access.
#
# WHAT LIVES HERE (current)
#   - build_performance_figure(points, title=None) -> go.Figure
#       Portfolio vs benchmark index lines (normalized, start = 100).
#
# DO NOT
#   - Register Dash callbacks in this file.
#   - Run the range/aggregation pipeline here; callers pass the result in.


def build_performance_figure(
    points: Sequence,
    *,
    title: Optional[str] = None,
) -> go.Figure:
    """
    Portfolio line (solid, filled) + benchmark line (dashed).
    The y axis shows the normalized index with a % suffix, as in the summary cards.
    """
    f = go.Figure()
    if not points:
        f.update_layout(margin=dict(l=80, r=20, t=30, b=10))
        return f

    labels = [format_display_date(p.date) for p in points]
    hover_fmt = "%{y:.1f}%"

    f.add_trace(go.Scatter(
        x=labels,
        y=[p.portfolio_value for p in points],
        name=PORTFOLIO_LABEL,
        mode="lines",
        line=dict(width=2, color=COLOR_PORTFOLIO, shape="spline", smoothing=0.4),
        fill="tozeroy",
        fillcolor=COLOR_PORTFOLIO_FILL,
        hovertemplate=f"{PORTFOLIO_LABEL}: {hover_fmt}<extra></extra>",
    ))
    f.add_trace(go.Scatter(
        x=labels,
        y=[p.benchmark_value for p in points],
        name=BENCHMARK_LABEL,
        mode="lines",
        line=dict(width=2, color=COLOR_BENCHMARK, dash="dash", shape="spline", smoothing=0.4),
        fill="tozeroy",
        fillcolor=COLOR_BENCHMARK_FILL,
        hovertemplate=f"{BENCHMARK_LABEL}: {hover_fmt}<extra></extra>",
    ))

    values = [p.portfolio_value for p in points] + [p.benchmark_value for p in points]
    pad = max((max(values) - min(values)) * 0.05, 1.0)
    if title:
        f.update_layout(title=dict(text=title, y=0.97))
    f.update_layout(
        hovermode="x unified",
        margin=dict(l=80, r=20, t=60 if title else 30, b=40),
        font=dict(family="serif"),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0),
        plot_bgcolor="white",
    )
    # Filled traces would otherwise pull the axis down to zero.
    f.update_yaxes(
        ticksuffix="%",
        range=[min(values) - pad, max(values) + pad],
        gridcolor="rgba(0, 0, 0, 0.05)",
    )
    f.update_xaxes(showgrid=False, type="category", nticks=12)
    return f
