"""
Social share component models - frozen dataclass inputs and outputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.domain.entities import ShareLinkRecord


@dataclass(frozen=True)
class ShareValidationError:
    """Validation or generation error for social share operations."""

    code: str
    message: str
    field: str | None = None


# --- Link Generation ---


@dataclass(frozen=True)
class GenerateLinksInput:
    """Body of the bitlinks request: {postId, postUrl, postTitle}."""

    post_id: int
    post_url: str
    post_title: str


@dataclass(frozen=True)
class GenerateLinksOutput:
    """Generated links; errors lists providers that failed."""

    post_id: int
    links: ShareLinkRecord = field(default_factory=dict)
    errors: list[ShareValidationError] = field(default_factory=list)
    success: bool = True


# --- Activation Toggle ---


@dataclass(frozen=True)
class SetActivationInput:
    post_id: int
    active: bool


@dataclass(frozen=True)
class SetActivationOutput:
    post_id: int
    active: bool
    errors: list[ShareValidationError] = field(default_factory=list)
    success: bool = True


# --- Presentation ---


@dataclass(frozen=True)
class MetaboxData:
    """Data handed to the Social Share panel template."""

    # Provider -> short URL, empty until generated
    links: ShareLinkRecord
    # Share widget activated on the post
    checked: bool
    # Post not published: hides the "Yes, Regenerate" button
    hidden: bool


@dataclass(frozen=True)
class MetaboxOutput:
    data: MetaboxData | None
    errors: list[ShareValidationError] = field(default_factory=list)
    success: bool = True


# --- Admin Assets ---


@dataclass(frozen=True)
class ScriptConfig:
    """Localized configuration for the metabox script."""

    rest_api: str
    nonce: str
    endpoint: str
    post_id: int | None

    def as_dict(self) -> dict[str, Any]:
        return {
            "restApi": self.rest_api,
            "nonce": self.nonce,
            "endpoint": self.endpoint,
            "postId": self.post_id,
        }


@dataclass(frozen=True)
class AssetPlan:
    """Styles and scripts to enqueue for an admin request."""

    styles: tuple[str, ...]
    scripts: tuple[str, ...] = ()
    script_config: ScriptConfig | None = None
