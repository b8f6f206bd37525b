"""
src/data/source.py
──────────────────
Raw CSV retrieval from a local path or an http(s) URL.

Exactly one outcome per call: the full document text, or IngestionError.
"""
from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlparse

import requests

from config.settings import settings
from src.data.ingestion import IngestionError

logger = logging.getLogger(__name__)


def is_remote(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def fetch_csv_text(source: str, timeout: float = settings.FETCH_TIMEOUT_S) -> str:
    """
    Return the whole CSV document at `source`.

    Raises:
        IngestionError: transport, HTTP status or file-system failure.
    """
    if not source:
        raise IngestionError("no data source configured")

    if is_remote(source):
        logger.info("Fetching pump data from %s", source)
        try:
            resp = requests.get(source, timeout=timeout)
            resp.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "?"
            reason = exc.response.reason if exc.response is not None else ""
            raise IngestionError(f"Failed to fetch: {status} {reason}".rstrip()) from exc
        except requests.RequestException as exc:
            raise IngestionError(f"Failed to fetch {source}: {exc}") from exc
        return resp.text

    path = Path(source)
    logger.info("Reading pump data from %s", path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise IngestionError(f"Failed to read {path}: {exc}") from exc
