"""
Social share component port definitions - protocols for dependencies.
"""

from __future__ import annotations

from typing import Any, Protocol

from src.domain.entities import MetaboxRegistration
from src.ports.repo import MetaStorePort, PostRepoPort
from src.ports.shortener import ShortenerPort

from .models import GenerateLinksOutput

__all__ = [
    "AssetRegistryPort",
    "LinkGenerationInvokerPort",
    "MetaStorePort",
    "MetaboxRegistryPort",
    "PostRepoPort",
    "ShortenerPort",
]


class LinkGenerationInvokerPort(Protocol):
    """Triggers short link generation for a post."""

    def generate_short_links(
        self, post_id: int, post_url: str, post_title: str
    ) -> GenerateLinksOutput:
        ...


class AssetRegistryPort(Protocol):
    """Admin asset queue (styles, scripts, localized script data)."""

    def enqueue_style(self, handle: str) -> None:
        ...

    def enqueue_script(self, handle: str) -> None:
        ...

    def localize_script(self, handle: str, object_name: str, data: dict[str, Any]) -> None:
        ...


class MetaboxRegistryPort(Protocol):
    """Collects metaboxes for the post edit screen."""

    def add(self, registration: MetaboxRegistration) -> None:
        ...
