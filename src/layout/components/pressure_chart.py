"""
src/layout/components/pressure_chart.py
────────────────────────────────────────
Plotly figures for the pressure trend and the pressure distribution.
"""
from __future__ import annotations

import plotly.graph_objects as go

from config.display import (
    ANOMALY_REGION_FILL,
    ANOMALY_REGION_LINE,
    PRESSURE_UNIT,
    SERIES_COLORS,
    SERIES_LABELS,
    SeriesKind,
)
from src.analytics.series import ChartSeries, DistributionBucket

CARD_BG = "#161b22"
GRID_CLR = "#30363d"
MUTED = "#8b949e"
PLOTLY_TMPL = "plotly_dark"

ALL_OPTIONS = ("rolling", "bands", "anomalies", "broken")


def _layout(height: int = 320) -> dict:
    return {
        "template": PLOTLY_TMPL,
        "paper_bgcolor": CARD_BG,
        "plot_bgcolor": CARD_BG,
        "margin": {"l": 10, "r": 10, "t": 10, "b": 10},
        "font": {"color": "#c9d1d9", "size": 11},
        "xaxis": {"gridcolor": GRID_CLR},
        "yaxis": {"gridcolor": GRID_CLR, "title": {"text": f"Pressure ({PRESSURE_UNIT})"}},
        "legend": {"bgcolor": "rgba(0,0,0,0)", "font": {"size": 10}, "orientation": "h", "y": 1.08},
        "height": height,
        "showlegend": True,
    }


def empty_figure(message: str = "No data available", height: int = 320) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(**_layout(height))
    fig.add_annotation(text=message, showarrow=False, font={"color": MUTED, "size": 13},
                       xref="paper", yref="paper", x=0.5, y=0.5)
    return fig


def _line(fig: go.Figure, chart: ChartSeries, kind: SeriesKind, values: list, dash: str | None = None, width: float = 1.0) -> None:
    line = {"color": SERIES_COLORS[kind], "width": width}
    if dash:
        line["dash"] = dash
    fig.add_scatter(
        x=chart.timestamps,
        y=values,
        mode="lines",
        line=line,
        name=SERIES_LABELS[kind],
        connectgaps=False,
        hovertemplate="%{x|%b %d, %Y %I:%M %p}<br>%{y:.2f} " + PRESSURE_UNIT + "<extra></extra>",
    )


def _markers(fig: go.Figure, chart: ChartSeries, kind: SeriesKind, values: list, symbol: str) -> None:
    if all(v is None for v in values):
        return
    fig.add_scatter(
        x=chart.timestamps,
        y=values,
        mode="markers",
        marker={"color": SERIES_COLORS[kind], "size": 7, "symbol": symbol,
                "line": {"color": "white", "width": 1}},
        name=SERIES_LABELS[kind],
        hovertemplate="%{x|%b %d, %Y %I:%M %p}<br>%{y:.2f} " + PRESSURE_UNIT + "<extra></extra>",
    )


def pressure_figure(
    chart: ChartSeries,
    options: list[str] | tuple[str, ...] = ALL_OPTIONS,
    y_range: tuple[float, float] | None = None,
    height: int = 320,
) -> go.Figure:
    """
    Trend chart for a (possibly windowed) ChartSeries.

    Options: "rolling", "bands", "anomalies", "broken".
    Anomaly regions are drawn as shaded vertical ranges; the x axis gets one
    tick per calendar day of the visible points.
    """
    if len(chart) == 0:
        return empty_figure(height=height)

    fig = go.Figure()

    if "bands" in options:
        _line(fig, chart, SeriesKind.UPPER_BAND, chart.upper_band, dash="dot")
        _line(fig, chart, SeriesKind.LOWER_BAND, chart.lower_band, dash="dot")

    _line(fig, chart, SeriesKind.PRESSURE, chart.pressure, width=1.6)

    if "rolling" in options:
        _line(fig, chart, SeriesKind.ROLLING_MEAN, chart.rolling_mean, dash="dash", width=1.6)

    if "anomalies" in options:
        for region in chart.regions:
            fig.add_vrect(
                x0=chart.timestamps[region.start],
                x1=chart.timestamps[region.end],
                fillcolor=ANOMALY_REGION_FILL,
                line={"color": ANOMALY_REGION_LINE, "width": 1},
                layer="below",
            )
        _markers(fig, chart, SeriesKind.ANOMALY, chart.anomaly_values, "circle-open")

    if "broken" in options:
        _markers(fig, chart, SeriesKind.BROKEN, chart.broken_values, "x")

    ticks = chart.ticks()
    fig.update_layout(**_layout(height))
    fig.update_xaxes(
        tickmode="array",
        tickvals=[t.timestamp for t in ticks],
        ticktext=[t.label for t in ticks],
        tickangle=-15,
    )
    if y_range is not None:
        fig.update_yaxes(range=list(y_range))
    return fig


def distribution_figure(buckets: list[DistributionBucket], height: int = 240) -> go.Figure:
    if not buckets:
        return empty_figure(height=height)
    fig = go.Figure()
    fig.add_bar(
        x=[b.range for b in buckets],
        y=[b.count for b in buckets],
        marker={"color": SERIES_COLORS[SeriesKind.PRESSURE]},
        customdata=[b.percentage for b in buckets],
        hovertemplate="%{x} " + PRESSURE_UNIT + "<br>%{y} readings (%{customdata:.1f}%)<extra></extra>",
        name="Readings",
    )
    fig.update_layout(**{**_layout(height), "showlegend": False,
                         "yaxis": {"gridcolor": GRID_CLR, "title": {"text": "Readings"}}})
    return fig
