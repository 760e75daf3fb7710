# src/tabs.py

from __future__ import annotations
from typing import Dict, Optional
from dash import html, dcc
import plotly.graph_objects as go

from src.constants import COLOR_NEGATIVE, COLOR_POSITIVE

# PURPOSE
#   Pure Dash layout helpers (no callbacks, no global reads).
#   They accept Figures / card payloads and return HTML components.
#
# WHAT LIVES HERE (current)
#   - _single_graph_child(fig, height=460, graph_id=None, config=None)
#   - pretty_card(children)
#   - summary_card(card)

def _single_graph_child(
    fig: go.Figure,
    height: int = 460,
    graph_id: Optional[str] = None,
    config: Optional[dict] = None,
):
    """
    Wrap a single Plotly figure into a Graph inside a Div so callers can drop it anywhere.
    """
    gid = graph_id or "performance-graph"
    cfg = {"displaylogo": False, "modeBarButtonsToRemove": ["lasso2d"]} | (config or {})
    return html.Div(
        dcc.Graph(id=gid, figure=fig, config=cfg, style={"height": f"{height}px"})
    )

def pretty_card(children):
    return html.Div(
        children,
        style={
            "border": "1px solid #ddd",
            "borderRadius": "12px",
            "padding": "14px",
            "boxShadow": "0 2px 6px rgba(0,0,0,0.06)",
            "background": "white",
        },
    )

def summary_card(card: Dict[str, str]):
    """One headline number; `card` comes from src.formatting.summary_cards."""
    color = COLOR_POSITIVE if card["tone"] == "positive" else COLOR_NEGATIVE
    return pretty_card([
        html.Div(card["label"], style={"fontSize": "13px", "color": "#555"}),
        html.Div(
            card["text"],
            id=f"summary-{card['key']}",
            className=f"summary-value {card['tone']}",
            style={"fontSize": "26px", "fontWeight": 600, "color": color},
        ),
    ])
