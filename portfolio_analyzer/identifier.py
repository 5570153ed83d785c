"""Turn user input into a GitHub account identifier."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from .constants import DEFAULT_PROFILE_HOSTS


def extract_identifier(
    raw: Optional[str], hosts: Iterable[str] = DEFAULT_PROFILE_HOSTS
) -> str:
    """Extract the account handle from a username or profile URL.

    ``"https://github.com/alice/"`` and ``"  alice "`` both yield ``"alice"``.
    Query strings and fragments after the handle are dropped.
    A URL on a recognised host with nothing after the host yields ``""``,
    which callers treat as "nothing to analyze".

    Args:
        raw: Free-form input typed by the user
        hosts: Host markers that identify a profile URL

    Returns:
        Canonical identifier, or an empty string
    """
    if not raw or not raw.strip():
        return ""

    for host in hosts:
        if host and host in raw:
            _, _, remainder = raw.partition(f"{host}/")
            segment = re.split(r"[/?#]", remainder, maxsplit=1)[0]
            return segment.strip()

    return raw.strip()
