"""
src/callbacks/assistant.py: Assistant page tool console callback.
"""
from __future__ import annotations

import json

from dash import Input, Output

from config.settings import settings
from src.assistant.tools import TOOL_SPECS, build_context, call_tool
from src.data.store import store

_SPECS = {spec.name: spec for spec in TOOL_SPECS}


def tool_params(name: str, count: int | None) -> dict:
    """Keyword arguments for a console tool call; a blank count uses the default."""
    if not _SPECS[name].parameters:
        return {}
    return {"count": int(count) if count is not None else settings.DEFAULT_POINT_COUNT}


def register(app) -> None:

    @app.callback(
        [
            Output("assistant-tool-description", "children"),
            Output("assistant-tool-result", "children"),
            Output("assistant-context", "children"),
        ],
        [
            Input("assistant-tool", "value"),
            Input("assistant-count", "value"),
            Input("store-data-version", "data"),
        ],
    )
    def run_tool(name: str, count: int | None, version: int | None):
        result = call_tool(name, store.current, **tool_params(name, count))
        return _SPECS[name].description, json.dumps(result, indent=2), build_context(store.current)
