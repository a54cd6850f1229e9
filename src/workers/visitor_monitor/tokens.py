"""
Location token loading.

The token file is a JSON array of ``{"location": ..., "token": ...}``
objects. Order is kept: it is the fetch order within a tick.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from core.exceptions import ConfigError
from workers.visitor_monitor.models import LocationToken

logger = logging.getLogger(__name__)

_TOKENS_ADAPTER = TypeAdapter(list[LocationToken])


def parse_location_tokens(raw: str | bytes) -> list[LocationToken]:
    """Validate a JSON document into LocationToken entries."""
    try:
        return _TOKENS_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise ConfigError(f"Malformed token source: {exc}") from exc


def load_location_tokens(path: str | Path) -> list[LocationToken]:
    """
    Read the token file at ``path``.

    Raises:
        ConfigError: the file is unreadable, not JSON, or has the wrong shape.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ConfigError(f"Cannot read token source {path}: {exc}") from exc

    tokens = parse_location_tokens(raw)
    if not tokens:
        logger.warning("Token source %s contains no locations.", path)
    logger.info("Loaded %d location tokens from %s", len(tokens), path)
    return tokens
