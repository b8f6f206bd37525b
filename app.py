"""
app.py
──────
Pump Pressure Monitor: application entry point.

Startup sequence:
  1. Configure logging; seed the local CSV source with simulated data if missing
  2. Load and analyze the configured source once
  3. Create Dash app with DARKLY bootstrap theme
  4. Register page callbacks and the assistant JSON routes
  5. Close the store at interpreter exit so late loads are discarded
  6. Run dev server (or expose `server` for gunicorn in production)
"""
import atexit
import logging

import dash
import dash_bootstrap_components as dbc

from config.logging_config import configure_logging
from config.settings import settings
from src.data.loader import reload
from src.data.simulator import ensure_sample_csv
from src.data.store import store
from src.layout.main import create_layout

# ── 1. Logging + sample data ──────────────────────────────────────────────────
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

if ensure_sample_csv(settings.CSV_SOURCE):
    logger.info("Seeded %s with simulated pump data", settings.CSV_SOURCE)

# ── 2. Initial load (errors are shown in the dashboard, with Retry) ───────────
outcome = reload(store, settings.CSV_SOURCE)
logger.info("Initial load: %s", outcome.status.value)

# ── 3. Dash app ───────────────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.DARKLY],
    suppress_callback_exceptions=True,
    meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    title="Pump Monitor",
)

server = app.server  # gunicorn entry point
app.layout = create_layout()

# ── 4. Register callbacks ─────────────────────────────────────────────────────
from src.callbacks import api, assistant, dashboard, navigation

navigation.register(app)
dashboard.register(app)
assistant.register(app)
api.register(app)

# ── 5. Teardown ───────────────────────────────────────────────────────────────
atexit.register(store.close)

# ── 6. Run ────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    app.run(
        debug=settings.DEBUG,
        host=settings.HOST,
        port=settings.PORT,
    )
