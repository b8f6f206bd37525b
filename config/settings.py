"""
config/settings.py
──────────────────
Application configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass


@dataclass
class Settings:
    # Server
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"
    PORT: int = int(os.getenv("PORT", "8050"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # Data source: local CSV path or http(s) URL
    CSV_SOURCE: str = os.getenv("CSV_SOURCE", "data/pump_pressure_data.csv")
    FETCH_TIMEOUT_S: float = float(os.getenv("FETCH_TIMEOUT_S", "10"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Sample data (seeded when CSV_SOURCE is a missing local file)
    SIMULATION_SEED: int = int(os.getenv("SIMULATION_SEED", "42"))
    HISTORY_DAYS: int = int(os.getenv("HISTORY_DAYS", "14"))
    SAMPLE_INTERVAL_MIN: int = int(os.getenv("SAMPLE_INTERVAL_MIN", "10"))

    # Assistant tools
    DEFAULT_POINT_COUNT: int = int(os.getenv("DEFAULT_POINT_COUNT", "10"))


settings = Settings()
