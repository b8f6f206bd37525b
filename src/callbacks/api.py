"""
src/callbacks/api.py
─────────────────────
JSON routes on the Dash Flask server exposing the assistant tools.

  GET /api/tools               → tool descriptions
  GET /api/tools/<name>        → tool result (getPumpData accepts ?count=N)
  GET /api/context             → assistant context text
"""
from __future__ import annotations

import logging

from flask import jsonify, make_response, request

from src.assistant.tools import TOOL_SPECS, build_context, call_tool
from src.data.store import store

logger = logging.getLogger(__name__)


def _json_error(msg: str, status: int = 400):
    return make_response(jsonify({"error": str(msg)}), int(status))


def register(app) -> None:
    server = app.server

    @server.route("/api/tools")
    def list_tools():
        return jsonify([spec.describe() for spec in TOOL_SPECS])

    @server.route("/api/tools/<name>")
    def run_tool(name: str):
        params = {}
        if "count" in request.args:
            try:
                params["count"] = int(request.args["count"])
            except ValueError:
                return _json_error(f"count must be an integer, got {request.args['count']!r}")
        try:
            result = call_tool(name, store.current, **params)
        except KeyError:
            return _json_error(f"unknown tool: {name}", 404)
        except TypeError:
            return _json_error(f"{name} does not accept parameters: {sorted(params)}")
        logger.debug("Tool %s called with %s", name, params)
        return jsonify({"tool": name, "result": result})

    @server.route("/api/context")
    def assistant_context():
        return jsonify({"context": build_context(store.current)})
