"""
Sharing component models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# --- Validation Error ---


@dataclass(frozen=True)
class SharingValidationError:
    """Sharing validation error."""

    code: str
    message: str
    field_name: str | None = None


# --- Input / Output ---


@dataclass(frozen=True)
class TrackedUrlInput:
    """Input for building a provider-specific tracked URL."""

    post_url: str
    provider: str
    utm_campaign: str | None = None
    utm_medium: str = "social"


@dataclass(frozen=True)
class TrackedUrlOutput:
    """Tracked URL for a provider, or errors."""

    url: str | None
    provider: str
    utm_source: str
    errors: list[SharingValidationError] = field(default_factory=list)
    success: bool = True
