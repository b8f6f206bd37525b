"""
src/layout/main.py
───────────────────
Root layout: routing, client-side stores, navbar, page container, footer.

Stores:
  store-data-version   bumped by the load callback after each commit / error
  store-viewport       serialized ViewportController state (per browser tab)
"""
from dash import dcc, html

from src.layout.navbar import BORDER, NAV_BG, create_navbar

MUTED = "#8b949e"


def _footer() -> html.Footer:
    return html.Footer(
        "Pump Pressure Monitor · global z-score > 2.5σ · rolling window max(20, N/50) · ±2σ bands",
        style={
            "textAlign": "center",
            "fontSize": ".72rem",
            "color": MUTED,
            "padding": ".7rem",
            "marginTop": "2rem",
            "borderTop": f"1px solid {BORDER}",
        },
    )


def create_layout() -> html.Div:
    return html.Div(
        [
            dcc.Location(id="url", refresh=False),
            dcc.Store(id="store-data-version", data=0),
            dcc.Store(id="store-viewport", storage_type="session"),
            create_navbar(),
            html.Div(id="page-content", style={"minHeight": "calc(100vh - 60px)"}),
            _footer(),
        ],
        style={"backgroundColor": NAV_BG, "color": "#c9d1d9", "minHeight": "100vh"},
    )
