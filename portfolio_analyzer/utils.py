"""Shared utility helpers for the portfolio analyzer."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from urllib.parse import urlparse

__all__ = ["round_half_up", "parse_timestamp", "ensure_aware", "validate_url"]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, sending .5 upwards.

    Python's :func:`round` uses banker's rounding (``round(2.5) == 2``),
    which would make 12.5 points display as 12 instead of 13.
    """
    return int(math.floor(value + 0.5))


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: str) -> datetime:
    """Parse GitHub API timestamp string.

    Args:
        value: ISO format timestamp string

    Returns:
        Parsed timezone-aware datetime object
    """
    if value.endswith("Z"):
        value = value.replace("Z", "+00:00")
    return ensure_aware(datetime.fromisoformat(value))


def validate_url(url: str, name: str = "URL") -> None:
    """Validate URL format.

    Args:
        url: The URL to validate.
        name: Name of the URL field for error messages.

    Raises:
        ValueError: If the URL format is invalid.
    """
    if not url or not url.strip():
        raise ValueError(f"{name} cannot be empty")

    result = urlparse(url.strip())
    if not result.scheme:
        raise ValueError(f"{name} must include a scheme (http:// or https://)")
    if result.scheme not in ("http", "https"):
        raise ValueError(f"{name} must use http or https scheme")
    if not result.netloc:
        raise ValueError(f"{name} must include a hostname")
