"""
Sharing component - Provider-specific tracked URLs with UTM parameters.

Every share link points at the post URL tagged with the provider as
utm_source, so traffic from each short link can be attributed.

Invariants:
- Existing query parameters on the post URL are preserved
- UTM params follow standard naming (utm_source, utm_medium, utm_campaign)
"""

from __future__ import annotations

from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from .models import SharingValidationError, TrackedUrlInput, TrackedUrlOutput

# --- Default Configuration ---

DEFAULT_UTM_MEDIUM = "social"

DEFAULT_UTM_SOURCE_MAP: dict[str, str] = {
    "twitter": "twitter",
    "linkedin": "linkedin",
    "facebook": "facebook",
    "native": "share",
}


# --- Pure Functions ---


def validate_post_url(url: str) -> list[SharingValidationError]:
    """
    Validate that url is an absolute http(s) URL.

    Returns:
        List of validation errors (empty if valid)
    """
    errors: list[SharingValidationError] = []

    if not url:
        errors.append(
            SharingValidationError(
                code="EMPTY_URL",
                message="Post URL cannot be empty",
                field_name="postUrl",
            )
        )
        return errors

    parsed = urlparse(url)

    if parsed.scheme not in ("http", "https"):
        errors.append(
            SharingValidationError(
                code="INVALID_SCHEME",
                message="Post URL scheme must be http or https",
                field_name="postUrl",
            )
        )

    if not parsed.netloc:
        errors.append(
            SharingValidationError(
                code="MISSING_HOST",
                message="Post URL must include host",
                field_name="postUrl",
            )
        )

    return errors


def add_utm_params(
    url: str,
    utm_source: str,
    utm_medium: str = DEFAULT_UTM_MEDIUM,
    utm_campaign: str | None = None,
) -> str:
    """
    Add UTM parameters to a URL, preserving existing query parameters.

    UTM values override any UTM params already present.
    """
    parsed = urlparse(url)

    utm_params = [("utm_source", utm_source), ("utm_medium", utm_medium)]
    if utm_campaign:
        utm_params.append(("utm_campaign", utm_campaign))
    overridden = {key for key, _ in utm_params}

    # Repeated keys (?tag=a&tag=b) survive in their original order
    pairs = [
        (key, value)
        for key, value in parse_qsl(parsed.query, keep_blank_values=True)
        if key not in overridden
    ]
    pairs.extend(utm_params)

    return urlunparse(parsed._replace(query=urlencode(pairs)))


def campaign_from_url(url: str) -> str | None:
    """Use the last path segment of a permalink (the post slug) as campaign."""
    path = urlparse(url).path.strip("/")
    if not path:
        return None
    return path.rsplit("/", 1)[-1] or None


def build_content_url(base_url: str, post_id: int) -> str:
    """Fallback permalink for a post without one: '{base}/?p={id}'."""
    return f"{base_url.rstrip('/')}/?p={post_id}"


def build_tracked_url(
    inp: TrackedUrlInput,
    utm_source_map: dict[str, str] | None = None,
) -> TrackedUrlOutput:
    """
    Build the tracked URL a provider's short link should point to.

    Args:
        inp: Post URL, provider and UTM values
        utm_source_map: Optional overrides of the provider -> utm_source mapping

    Returns:
        TrackedUrlOutput with the tagged URL or errors
    """
    source_map = {**DEFAULT_UTM_SOURCE_MAP, **(utm_source_map or {})}
    utm_source = source_map.get(inp.provider, inp.provider)

    errors = validate_post_url(inp.post_url)
    if errors:
        return TrackedUrlOutput(
            url=None,
            provider=inp.provider,
            utm_source=utm_source,
            errors=errors,
            success=False,
        )

    campaign = inp.utm_campaign or campaign_from_url(inp.post_url)
    url = add_utm_params(
        inp.post_url,
        utm_source=utm_source,
        utm_medium=inp.utm_medium,
        utm_campaign=campaign,
    )

    return TrackedUrlOutput(url=url, provider=inp.provider, utm_source=utm_source)
