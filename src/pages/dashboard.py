"""
src/pages/dashboard.py
───────────────────────
Pump pressure dashboard: KPI row, trend chart with pan / zoom controls,
anomaly summary and pressure distribution.

Static structure; data injected via callbacks.
"""
import dash_bootstrap_components as dbc
from dash import dcc, html

MUTED = "#8b949e"
BORDER = "#30363d"

_LABEL_STYLE = {"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"}

_BTN_STYLE = {
    "background": "transparent",
    "border": f"1px solid {BORDER}",
    "color": "#c9d1d9",
    "borderRadius": "4px",
    "fontSize": ".8rem",
    "fontWeight": "700",
    "padding": "2px 10px",
    "cursor": "pointer",
}

# (id, label, title) in display order
VIEWPORT_BUTTONS = [
    ("chart-pan-left-btn", "←", "Pan left"),
    ("chart-zoom-out-btn", "−", "Zoom out"),
    ("chart-reset-btn", "Fit All", "Show the entire series"),
    ("chart-zoom-in-btn", "+", "Zoom in"),
    ("chart-pan-right-btn", "→", "Pan right"),
]


def _viewport_controls() -> html.Div:
    return html.Div(
        [
            html.Button(label, id=btn_id, n_clicks=0, title=title, style=_BTN_STYLE)
            for btn_id, label, title in VIEWPORT_BUTTONS
        ]
        + [html.Span(id="chart-view-label", style={"fontSize": ".72rem", "color": MUTED, "marginLeft": "10px"})],
        style={"display": "flex", "gap": "6px", "alignItems": "center"},
    )


def layout() -> html.Div:
    return html.Div(
        [
            # ── Page header ───────────────────────────────────────────────────
            html.Div(
                [
                    html.H2("Pump Pressure Monitor", className="page-title"),
                    html.P(
                        "Pressure readings, rolling statistics and z-score anomaly detection",
                        className="page-subtitle",
                    ),
                ],
                className="page-header",
            ),

            # ── Load error (hidden unless the last load failed) ───────────────
            dbc.Alert(
                [
                    html.Div("Unable to load pump data", style={"fontWeight": "700"}),
                    html.Div(id="dashboard-error-message", style={"fontSize": ".82rem", "margin": "4px 0 8px"}),
                    dbc.Button("Retry", id="dashboard-retry-btn", n_clicks=0, color="danger", size="sm"),
                ],
                id="dashboard-error",
                color="danger",
                is_open=False,
                className="mb-3",
            ),

            # ── KPI row (dynamic) ─────────────────────────────────────────────
            dcc.Loading(html.Div(id="dashboard-kpi-row", className="mb-4"), type="dot"),

            # ── Pressure trend ────────────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div(
                                    [
                                        html.Div("Pressure Readings Over Time", className="chart-title"),
                                        _viewport_controls(),
                                    ],
                                    style={"display": "flex", "justifyContent": "space-between",
                                           "alignItems": "center", "flexWrap": "wrap", "gap": "8px"},
                                ),
                                dbc.Checklist(
                                    id="chart-options",
                                    options=[
                                        {"label": " Rolling mean", "value": "rolling"},
                                        {"label": " ±2σ bands", "value": "bands"},
                                        {"label": " Anomalies", "value": "anomalies"},
                                        {"label": " Broken states", "value": "broken"},
                                    ],
                                    value=["rolling", "bands", "anomalies", "broken"],
                                    inline=True,
                                    style={"fontSize": ".82rem", "color": "#c9d1d9", "padding": "6px 0"},
                                    inputStyle={"marginRight": "4px"},
                                ),
                                dcc.Graph(id="dashboard-pressure-chart", config={"displayModeBar": False}),
                            ],
                            className="chart-card",
                        ),
                        md=12,
                    ),
                ],
                className="g-3 mb-3",
            ),

            # ── Anomaly summary + distribution ────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Anomaly Summary", className="chart-title"),
                                html.Div(id="dashboard-anomaly-summary"),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Pressure Distribution", className="chart-title"),
                                dcc.Graph(id="dashboard-distribution-chart", config={"displayModeBar": False}),
                            ],
                            className="chart-card",
                        ),
                        md=8,
                    ),
                ],
                className="g-3",
            ),
            html.Div(id="dashboard-source", style={**_LABEL_STYLE, "textTransform": "none", "marginTop": "12px"}),
        ],
        style={"padding": "1.5rem"},
    )
