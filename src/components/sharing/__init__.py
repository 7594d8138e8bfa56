"""
Sharing component - UTM tagged share URLs per provider.
"""

from .component import (
    DEFAULT_UTM_MEDIUM,
    DEFAULT_UTM_SOURCE_MAP,
    add_utm_params,
    build_content_url,
    build_tracked_url,
    campaign_from_url,
    validate_post_url,
)
from .models import (
    SharingValidationError,
    TrackedUrlInput,
    TrackedUrlOutput,
)

__all__ = [
    # Pure functions
    "add_utm_params",
    "build_content_url",
    "build_tracked_url",
    "campaign_from_url",
    "validate_post_url",
    # Constants
    "DEFAULT_UTM_MEDIUM",
    "DEFAULT_UTM_SOURCE_MAP",
    # Models
    "SharingValidationError",
    "TrackedUrlInput",
    "TrackedUrlOutput",
]
