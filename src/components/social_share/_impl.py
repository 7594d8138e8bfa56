"""
Social share functional core and services.

- ShareMeta: typed accessors over the post meta store
- LinkGenerationService: builds tracked URLs per provider, shortens and persists them
- plan_assets / get_shortlink_base: pure helpers for the admin shell
"""

from __future__ import annotations

import logging
from typing import Any

from src.components.sharing import (
    TrackedUrlInput,
    build_tracked_url,
    campaign_from_url,
    validate_post_url,
)
from src.core.events import AdminContext
from src.domain.entities import ShareLinkRecord
from src.domain.meta import (
    SHORTLINKS_KEY,
    STATUS_KEY,
    prefixed_key,
    resolve_activation_flag,
    resolve_share_links,
)
from src.ports.repo import MetaStorePort
from src.ports.shortener import ShortenerError, ShortenerPort
from src.rules.models import Rules

from .models import (
    AssetPlan,
    GenerateLinksInput,
    GenerateLinksOutput,
    ScriptConfig,
    ShareValidationError,
)

logger = logging.getLogger(__name__)

POST_OVERVIEW_PAGE = "edit.php"
SHORTEN_FAILED = "SHORTEN_FAILED"
SCRIPT_OBJECT_NAME = "AppSocialShare"


# --- Meta Accessors ---


class ShareMeta:
    """Reads and writes the feature's post meta under the configured prefix."""

    def __init__(self, store: MetaStorePort, prefix: str = "") -> None:
        self._store = store
        self.status_key = prefixed_key(prefix, STATUS_KEY)
        self.shortlinks_key = prefixed_key(prefix, SHORTLINKS_KEY)

    def read_activation_flag(self, post_id: int) -> bool:
        """Activation flag; True when never set."""
        return resolve_activation_flag(self._store.get(post_id, self.status_key))

    def write_activation_flag(self, post_id: int, active: bool) -> None:
        self._store.set(post_id, self.status_key, 1 if active else 0)

    def read_share_links(self, post_id: int) -> ShareLinkRecord:
        """Stored share links; empty when never generated."""
        return resolve_share_links(self._store.get(post_id, self.shortlinks_key))

    def write_share_links(self, post_id: int, links: ShareLinkRecord) -> None:
        # Regeneration overwrites the whole record
        self._store.set(post_id, self.shortlinks_key, dict(links))


# --- Pure Functions ---


def get_shortlink_base(rules: Rules) -> str:
    """Short domain for generated links: public bit.ly in development."""
    if rules.environment == "development":
        return rules.shortener.development_domain
    return rules.shortener.branded_domain


def is_post_overview(page: str) -> bool:
    return page == POST_OVERVIEW_PAGE


def asset_handle(rules: Rules) -> str:
    return f"{rules.asset_prefix}-admin-social-share-metabox"


def plan_assets(context: AdminContext, rules: Rules) -> AssetPlan:
    """
    The metabox style is always enqueued. The script (and its localized
    config) is skipped on the plugin's own admin page and the post overview.
    """
    handle = asset_handle(rules)

    if context.is_plugin_admin_page or is_post_overview(context.page):
        return AssetPlan(styles=(handle,))

    config = ScriptConfig(
        rest_api=context.rest_url,
        nonce=context.nonce,
        endpoint=f"{rules.rest_namespace}/socialshare",
        post_id=context.post_id,
    )
    return AssetPlan(styles=(handle,), scripts=(handle,), script_config=config)


def validate_generate_input(inp: GenerateLinksInput) -> list[ShareValidationError]:
    errors: list[ShareValidationError] = []

    if inp.post_id <= 0:
        errors.append(
            ShareValidationError(
                code="INVALID_POST_ID",
                message="postId must be a positive integer",
                field="postId",
            )
        )

    for err in validate_post_url(inp.post_url):
        errors.append(
            ShareValidationError(code=err.code, message=err.message, field=err.field_name)
        )

    return errors


def _coerce_post_id(raw_id: Any) -> int:
    # JSON numbers or digit strings; booleans and fractions are rejected
    if isinstance(raw_id, bool):
        return 0
    if isinstance(raw_id, int):
        return raw_id
    if isinstance(raw_id, str) and raw_id.strip().isdigit():
        return int(raw_id.strip())
    return 0


def parse_bitlinks_body(
    body: Any,
) -> tuple[GenerateLinksInput | None, list[ShareValidationError]]:
    """
    Parse a raw {postId, postUrl, postTitle} request body.

    Shared by the HTTP route and the in-process invoker. A missing or null
    postTitle is read as an empty title.
    """
    if not isinstance(body, dict):
        return None, [
            ShareValidationError(
                code="INVALID_BODY",
                message="Request body must be a JSON object",
            )
        ]

    errors: list[ShareValidationError] = []

    post_id = _coerce_post_id(body.get("postId"))
    if post_id <= 0:
        errors.append(
            ShareValidationError(
                code="INVALID_POST_ID",
                message="postId must be a positive integer",
                field="postId",
            )
        )

    post_url = body.get("postUrl")
    if not isinstance(post_url, str) or not post_url:
        errors.append(
            ShareValidationError(code="EMPTY_URL", message="postUrl is required", field="postUrl")
        )

    post_title = body.get("postTitle")
    if post_title is None:
        post_title = ""
    if not isinstance(post_title, str):
        errors.append(
            ShareValidationError(
                code="INVALID_TITLE", message="postTitle must be a string", field="postTitle"
            )
        )

    if errors:
        return None, errors

    return GenerateLinksInput(post_id=post_id, post_url=str(post_url), post_title=post_title), []


# --- Service ---


class LinkGenerationService:
    """Generates and persists the share link record for a post."""

    def __init__(self, meta: ShareMeta, shortener: ShortenerPort, rules: Rules) -> None:
        self._meta = meta
        self._shortener = shortener
        self._rules = rules

    def generate(self, inp: GenerateLinksInput) -> GenerateLinksOutput:
        errors = validate_generate_input(inp)
        if errors:
            return GenerateLinksOutput(post_id=inp.post_id, errors=errors, success=False)

        sharing = self._rules.sharing
        domain = get_shortlink_base(self._rules)
        links: ShareLinkRecord = {}
        # Post slug from the permalink, post id for ?p= style URLs
        campaign = campaign_from_url(inp.post_url) or str(inp.post_id)

        logger.info(
            "Generating share links for post %s (%d providers)",
            inp.post_id,
            len(sharing.providers),
        )

        for provider in sharing.providers:
            tracked = build_tracked_url(
                TrackedUrlInput(
                    post_url=inp.post_url,
                    provider=provider,
                    utm_campaign=campaign,
                    utm_medium=sharing.utm_medium,
                ),
                utm_source_map=sharing.utm_source_map,
            )
            if tracked.url is None:
                errors.extend(
                    ShareValidationError(code=e.code, message=e.message, field=provider)
                    for e in tracked.errors
                )
                continue

            try:
                links[provider] = self._shortener.shorten(
                    tracked.url, domain, title=inp.post_title or None
                )
            except ShortenerError as e:
                logger.warning(
                    "Shortening failed for post %s provider %s: %s", inp.post_id, provider, e
                )
                errors.append(
                    ShareValidationError(
                        code=SHORTEN_FAILED,
                        message=f"{provider}: {e}",
                        field=provider,
                    )
                )

        if not links:
            return GenerateLinksOutput(post_id=inp.post_id, errors=errors, success=False)

        self._meta.write_share_links(inp.post_id, links)
        logger.info("Stored %d share links for post %s", len(links), inp.post_id)

        return GenerateLinksOutput(post_id=inp.post_id, links=links, errors=errors, success=True)
