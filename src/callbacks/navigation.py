"""
src/callbacks/navigation.py: URL routing and the collapsible navbar on small screens.
"""
from __future__ import annotations

from dash import Input, Output, State

from src.pages import assistant, dashboard

PAGES = {
    "/": dashboard.layout,
    "/assistant": assistant.layout,
}


def register(app) -> None:

    @app.callback(Output("page-content", "children"), Input("url", "pathname"))
    def route(pathname: str | None):
        # Unknown paths fall back to the dashboard
        return PAGES.get(pathname or "/", dashboard.layout)()

    @app.callback(
        Output("navbar-collapse", "is_open"),
        Input("navbar-toggler", "n_clicks"),
        State("navbar-collapse", "is_open"),
        prevent_initial_call=True,
    )
    def toggle_navbar(n_clicks: int, is_open: bool) -> bool:
        return not is_open
