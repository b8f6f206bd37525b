"""
src/pages/assistant.py
───────────────────────
Assistant page: the context handed to the chat assistant and a console for
its read-only data tools.
"""
import dash_bootstrap_components as dbc
from dash import dcc, html

from config.settings import settings
from src.assistant.tools import TOOL_SPECS

MUTED = "#8b949e"

_LABEL_STYLE = {"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"}


def layout() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Assistant Tools", className="page-title"),
                    html.P("Data the chat assistant can read about the current pump series",
                           className="page-subtitle"),
                ],
                className="page-header",
            ),

            # ── Tool console ──────────────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        [
                            html.Label("Tool", style=_LABEL_STYLE),
                            dcc.Dropdown(
                                id="assistant-tool",
                                options=[{"label": spec.name, "value": spec.name} for spec in TOOL_SPECS],
                                value=TOOL_SPECS[0].name,
                                clearable=False,
                                className="dark-dropdown",
                            ),
                        ],
                        md=4,
                    ),
                    dbc.Col(
                        [
                            html.Label("Count (getPumpData)", style=_LABEL_STYLE),
                            dbc.Input(id="assistant-count", type="number", min=1, step=1,
                                      value=settings.DEFAULT_POINT_COUNT, size="sm"),
                        ],
                        md=2,
                    ),
                    dbc.Col(html.Div(id="assistant-tool-description",
                                     style={"fontSize": ".82rem", "color": MUTED, "paddingTop": "22px"}), md=6),
                ],
                className="g-3 mb-3",
            ),
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Tool Result", className="chart-title"),
                                html.Pre(id="assistant-tool-result",
                                         style={"fontSize": ".72rem", "maxHeight": "420px", "overflowY": "auto"}),
                            ],
                            className="chart-card",
                        ),
                        md=7,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Assistant Context", className="chart-title"),
                                html.Pre(id="assistant-context",
                                         style={"fontSize": ".72rem", "whiteSpace": "pre-wrap"}),
                            ],
                            className="chart-card",
                        ),
                        md=5,
                    ),
                ],
                className="g-3",
            ),
        ],
        style={"padding": "1.5rem"},
    )
