"""
src/callbacks/dashboard.py
───────────────────────────
Dashboard page callbacks: data loading, viewport transitions and rendering.
"""
from __future__ import annotations

import logging

import dash_bootstrap_components as dbc
from dash import Input, Output, State, ctx, html

from config.display import METRIC_COLORS, PRESSURE_UNIT
from config.settings import settings
from src.analytics.series import ChartSeries, pressure_distribution
from src.analytics.thresholds import chart_y_range
from src.analytics.viewport import ViewMode, ViewportController
from src.data.loader import reload
from src.data.store import Dataset, store
from src.layout.components.kpi_card import kpi_card
from src.layout.components.pressure_chart import distribution_figure, empty_figure, pressure_figure

logger = logging.getLogger(__name__)

MUTED = "#8b949e"

_VIEWPORT_ACTIONS = {
    "chart-pan-left-btn": "pan_left",
    "chart-zoom-out-btn": "zoom_out",
    "chart-reset-btn": "reset",
    "chart-zoom-in-btn": "zoom_in",
    "chart-pan-right-btn": "pan_right",
}


def _kpi_row(dataset: Dataset | None) -> dbc.Row:
    if dataset is None:
        return dbc.Row([dbc.Col(html.Div("No data loaded.", style={"color": MUTED}), md=12)])
    m = dataset.analysis.metrics
    cards = [
        ("Average Pressure", f"{m.average_pressure:.2f} {PRESSURE_UNIT}", "average_pressure", ""),
        ("Max Pressure", f"{m.max_pressure:.2f} {PRESSURE_UNIT}", "max_pressure", ""),
        ("Min Pressure", f"{m.min_pressure:.2f} {PRESSURE_UNIT}", "min_pressure", ""),
        ("Anomalies", str(m.anomaly_count), "anomaly_count", "|z| > 2.5σ"),
        ("Broken State", str(m.broken_state_duration), "broken_state_duration", "readings"),
        ("Anomaly Frequency", f"{m.anomaly_frequency:.2f}%", "anomaly_frequency", "of all readings"),
    ]
    cols = [
        dbc.Col(kpi_card(label, value, METRIC_COLORS[key], sub_label=sub), xs=6, md=2)
        for label, value, key, sub in cards
    ]
    return dbc.Row(cols, className="g-3")


def _y_range(chart: ChartSeries) -> tuple[float, float] | None:
    values = [v for v in (*chart.pressure, *chart.upper_band, *chart.lower_band) if v is not None]
    if not values:
        return None
    return chart_y_range(min(values), max(values))


def _anomaly_summary(dataset: Dataset | None) -> list:
    if dataset is None:
        return [html.Div("No data", style={"color": MUTED})]

    m = dataset.analysis.metrics
    regions = dataset.chart.regions
    mean = dataset.analysis.statistics.mean
    items = [
        html.Div([
            html.Div(str(m.anomaly_count), style={"fontSize": "1.8rem", "fontWeight": "700",
                                                 "color": "#da3633" if m.anomaly_count else "#2ea44f"}),
            html.Div("Anomalous readings", style={"fontSize": ".7rem", "color": MUTED}),
        ], style={"marginBottom": "10px"}),
        html.Div([
            html.Div(f"{len(regions)}", style={"fontSize": "1.2rem", "fontWeight": "700", "color": "#e8a020"}),
            html.Div("Anomalous regions", style={"fontSize": ".7rem", "color": MUTED}),
        ], style={"marginBottom": "10px"}),
        html.Div([
            html.Div(f"{dataset.analysis.window_size}", style={"fontSize": "1.2rem", "fontWeight": "700", "color": MUTED}),
            html.Div("Rolling window (readings)", style={"fontSize": ".7rem", "color": MUTED}),
        ], style={"marginBottom": "14px"}),
    ]

    if regions:
        items.append(html.Div("Detected regions:", style={"fontSize": ".7rem", "color": MUTED,
                                                          "textTransform": "uppercase", "marginBottom": "6px"}))
        for region in regions[:5]:
            start = dataset.chart.timestamps[region.start]
            peak = max(dataset.chart.pressure[region.start:region.end + 1], key=lambda v: abs(v - mean))
            items.append(
                html.Div(
                    f"• {start:%m/%d %H:%M} ({region.length} pts, {peak:.2f} {PRESSURE_UNIT})",
                    style={"fontSize": ".72rem", "color": "#f0883e", "marginBottom": "3px"},
                )
            )
        if len(regions) > 5:
            items.append(html.Div(f"+ {len(regions) - 5} more", style={"fontSize": ".7rem", "color": MUTED}))
    return items


def _view_label(controller: ViewportController) -> str:
    window = controller.visible_window()
    if controller.mode is ViewMode.FULL:
        return f"All {controller.n_points} readings"
    return f"Readings {window.start + 1}–{window.end + 1} of {controller.n_points}"


def next_viewport(state: dict | None, trigger: str | None, n_points: int, generation: int) -> dict:
    """
    Viewport state after a button press or a data-version change.

    A version change that carries no new dataset (a failed Retry) keeps the
    current zoom and pan.
    """
    controller = ViewportController.from_state(n_points, state)
    if trigger == "store-data-version":
        if (state or {}).get("generation") != generation:
            controller.set_length(n_points)
    elif trigger in _VIEWPORT_ACTIONS:
        controller.apply(_VIEWPORT_ACTIONS[trigger])
    return {**controller.to_state(), "generation": generation}


def register(app) -> None:

    # ── Load / retry ──────────────────────────────────────────────────────────
    @app.callback(
        Output("store-data-version", "data"),
        Input("dashboard-retry-btn", "n_clicks"),
    )
    def load_data(n_clicks: int | None) -> int:
        if n_clicks or store.current is None:
            outcome = reload(store, settings.CSV_SOURCE)
            logger.debug("Load #%d finished: %s", outcome.token, outcome.status.value)
        return store.version

    # ── Viewport transitions ──────────────────────────────────────────────────
    @app.callback(
        Output("store-viewport", "data"),
        [Input(btn_id, "n_clicks") for btn_id in _VIEWPORT_ACTIONS]
        + [Input("store-data-version", "data")],
        State("store-viewport", "data"),
    )
    def update_viewport(*args) -> dict:
        n_points = len(store.current) if store.current is not None else 0
        return next_viewport(args[-1], ctx.triggered_id, n_points, store.generation)

    # ── Render ────────────────────────────────────────────────────────────────
    @app.callback(
        [
            Output("dashboard-kpi-row", "children"),
            Output("dashboard-error", "is_open"),
            Output("dashboard-error-message", "children"),
            Output("dashboard-pressure-chart", "figure"),
            Output("chart-view-label", "children"),
            Output("dashboard-anomaly-summary", "children"),
            Output("dashboard-distribution-chart", "figure"),
            Output("dashboard-source", "children"),
        ],
        [
            Input("store-data-version", "data"),
            Input("store-viewport", "data"),
            Input("chart-options", "value"),
        ],
    )
    def render_dashboard(version: int | None, viewport: dict | None, options: list | None):
        dataset = store.current
        error = store.error
        options = options or []

        if dataset is None:
            message = "Loading pump data…" if error is None else "No data loaded"
            return (
                _kpi_row(None),
                error is not None,
                error or "",
                empty_figure(message),
                "",
                _anomaly_summary(None),
                empty_figure(height=240),
                "",
            )

        controller = ViewportController.from_state(len(dataset), viewport)
        window = controller.visible_window()
        visible = dataset.chart.window(window.start, window.end)

        start, end = dataset.time_range
        source_label = (
            f"Source: {dataset.source} · {len(dataset)} data points · "
            f"{start:%Y-%m-%d %H:%M} → {end:%Y-%m-%d %H:%M} · loaded {dataset.loaded_at:%H:%M:%S} UTC"
        )

        return (
            _kpi_row(dataset),
            error is not None,
            error or "",
            pressure_figure(visible, options, _y_range(visible)),
            _view_label(controller),
            _anomaly_summary(dataset),
            distribution_figure(pressure_distribution(dataset.readings)),
            source_label,
        )
