"""
Post meta keys and default resolution for the social share feature.

Stored values are read as Optional: None means the key is absent. Each
accessor resolves absence through an explicit default instead of relying
on truthiness of whatever the store returned.
"""

from __future__ import annotations

import math
import re
from typing import Any

from src.domain.entities import ShareLinkRecord

# Activation status, controls front-end visibility of the share widget
STATUS_KEY = "social_share_status"

# Generated short links keyed by provider
SHORTLINKS_KEY = "share_post_bitlinks"

DEFAULT_ACTIVATION = True

# Leading integer of a stored string, e.g. "12abc" -> 12
_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


def prefixed_key(prefix: str, key: str) -> str:
    """Namespace a meta key with the configured option prefix."""
    return f"{prefix}{key}"


def resolve_activation_flag(value: Any | None) -> bool:
    """
    Resolve a stored activation value to a boolean.

    Absent (None) resolves to DEFAULT_ACTIVATION. A stored value is read as
    an integer and enabled when non-zero: floats are truncated and strings
    use their leading integer, so "true", "abc" and 0.5 are all disabled.
    """
    if value is None:
        return DEFAULT_ACTIVATION

    if isinstance(value, bool):
        return value

    if isinstance(value, float):
        return math.isfinite(value) and int(value) != 0

    if isinstance(value, int):
        return value != 0

    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return match is not None and int(match.group()) != 0

    return bool(value)


def resolve_share_links(value: Any | None) -> ShareLinkRecord:
    """Resolve stored share links, defaulting to an empty record."""
    if value is None:
        return {}

    if not isinstance(value, dict):
        return {}

    return {str(provider): str(url) for provider, url in value.items() if url}
