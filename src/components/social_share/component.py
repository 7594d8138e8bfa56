"""
Social share component - share links generated when a post is first published.

Shell Layer - wires the transition gate, meta accessors and link generation
to lifecycle events, and exposes run_* entry points for the API and CLI.

Invariants:
- Generation runs at most once per transition event, only on a genuine
  change onto 'publish' for posts of type 'post'
- A failed generation never propagates to the status change that triggered it
- Missing posts are a no-op at every entry point
"""

from __future__ import annotations

import logging
from typing import Any

from src.components.sharing import build_content_url
from src.core.events import (
    ADD_META_BOXES_POST,
    ADMIN_ENQUEUE_SCRIPTS,
    TRANSITION_POST_STATUS,
    AdminContext,
    EventDispatcher,
    MetaBoxesEvent,
    TransitionEvent,
)
from src.domain.entities import POST_TYPE, STATUS_PUBLISH, MetaboxRegistration, Post
from src.domain.transitions import should_generate_links
from src.rules.models import Rules

from ._impl import (
    SCRIPT_OBJECT_NAME,
    LinkGenerationService,
    ShareMeta,
    parse_bitlinks_body,
    plan_assets,
)
from .models import (
    AssetPlan,
    GenerateLinksInput,
    GenerateLinksOutput,
    MetaboxData,
    MetaboxOutput,
    SetActivationInput,
    SetActivationOutput,
    ShareValidationError,
)
from .ports import (
    AssetRegistryPort,
    LinkGenerationInvokerPort,
    MetaboxRegistryPort,
    PostRepoPort,
)

logger = logging.getLogger(__name__)

METABOX_ID = "mp_social_share"
METABOX_TITLE = "Social Share"


# --- Shell Layer Functions ---


def run_generate(
    input_data: GenerateLinksInput,
    service: LinkGenerationService,
) -> GenerateLinksOutput:
    """Generate and store share links for a post."""
    return service.generate(input_data)


def handle_bitlinks_request(
    body: Any,
    service: LinkGenerationService,
) -> GenerateLinksOutput:
    """
    Handle a raw bitlinks request body {postId, postUrl, postTitle}.

    Single entry point for POST /socialshare/bitlinks and the in-process
    invoker, so both validate identically.
    """
    input_data, errors = parse_bitlinks_body(body)
    if input_data is None:
        post_id = body.get("postId") if isinstance(body, dict) else None
        return GenerateLinksOutput(
            post_id=post_id if isinstance(post_id, int) and not isinstance(post_id, bool) else 0,
            errors=errors,
            success=False,
        )
    return run_generate(input_data, service)


def run_set_activation(
    input_data: SetActivationInput,
    meta: ShareMeta,
) -> SetActivationOutput:
    """Persist the activation toggle for a post."""
    if input_data.post_id <= 0:
        return SetActivationOutput(
            post_id=input_data.post_id,
            active=input_data.active,
            errors=[
                ShareValidationError(
                    code="INVALID_POST_ID",
                    message="postId must be a positive integer",
                    field="postId",
                )
            ],
            success=False,
        )

    meta.write_activation_flag(input_data.post_id, input_data.active)
    return SetActivationOutput(post_id=input_data.post_id, active=input_data.active)


def build_metabox_data(post: Post, meta: ShareMeta) -> MetaboxData:
    return MetaboxData(
        links=meta.read_share_links(post.id),
        checked=meta.read_activation_flag(post.id),
        hidden=post.status != STATUS_PUBLISH,
    )


def run_get_metabox(
    post_id: int,
    posts: PostRepoPort,
    meta: ShareMeta,
) -> MetaboxOutput:
    """Metabox data for a stored post."""
    post = posts.get_by_id(post_id)
    if post is None:
        return MetaboxOutput(
            data=None,
            errors=[
                ShareValidationError(
                    code="POST_NOT_FOUND",
                    message=f"Post {post_id} not found",
                    field="postId",
                )
            ],
            success=False,
        )

    return MetaboxOutput(data=build_metabox_data(post, meta))


def resolve_post_url(post: Post, rules: Rules) -> str:
    return post.permalink or build_content_url(rules.site_url, post.id)


def run_regenerate(
    post_id: int,
    posts: PostRepoPort,
    service: LinkGenerationService,
    rules: Rules,
) -> GenerateLinksOutput:
    """Regenerate links for a stored post from its permalink and title."""
    post = posts.get_by_id(post_id)
    if post is None:
        return GenerateLinksOutput(
            post_id=post_id,
            errors=[
                ShareValidationError(
                    code="POST_NOT_FOUND",
                    message=f"Post {post_id} not found",
                    field="postId",
                )
            ],
            success=False,
        )

    return run_generate(
        GenerateLinksInput(
            post_id=post.id,
            post_url=resolve_post_url(post, rules),
            post_title=post.title,
        ),
        service,
    )


# --- Invoker ---


class InternalRequestInvoker:
    """
    Dispatches an in-process bitlinks request, equivalent to
    POST /{namespace}/socialshare/bitlinks, to the same handler the route uses.
    """

    def __init__(self, service: LinkGenerationService) -> None:
        self._service = service

    def generate_short_links(
        self, post_id: int, post_url: str, post_title: str
    ) -> GenerateLinksOutput:
        body = {"postId": post_id, "postUrl": post_url, "postTitle": post_title}
        return handle_bitlinks_request(body, self._service)


# --- Feature ---


class SocialShare:
    """
    Social share feature for posts.

    Registers its listeners on a dispatcher, generates share links when a
    post is first published and provides the admin metabox data.
    """

    def __init__(
        self,
        rules: Rules,
        meta: ShareMeta,
        invoker: LinkGenerationInvokerPort,
        assets: AssetRegistryPort | None = None,
        metaboxes: MetaboxRegistryPort | None = None,
    ) -> None:
        self._rules = rules
        self._meta = meta
        self._invoker = invoker
        self._assets = assets
        self._metaboxes = metaboxes

    def register(self, dispatcher: EventDispatcher, site_id: int) -> bool:
        """Subscribe listeners. Only the configured site gets the feature."""
        if site_id != self._rules.site_id:
            logger.debug("Social share not registered for site %s", site_id)
            return False

        dispatcher.subscribe(ADMIN_ENQUEUE_SCRIPTS, self.enqueue)
        dispatcher.subscribe(ADD_META_BOXES_POST, self._on_meta_boxes)
        dispatcher.subscribe(TRANSITION_POST_STATUS, self.generate_short_urls)
        return True

    # --- Admin Assets ---

    def enqueue(self, context: AdminContext) -> AssetPlan:
        plan = plan_assets(context, self._rules)

        if self._assets is not None:
            for handle in plan.styles:
                self._assets.enqueue_style(handle)
            for handle in plan.scripts:
                self._assets.enqueue_script(handle)
                if plan.script_config is not None:
                    self._assets.localize_script(
                        handle, SCRIPT_OBJECT_NAME, plan.script_config.as_dict()
                    )

        return plan

    # --- Metabox ---

    def _on_meta_boxes(self, event: MetaBoxesEvent) -> None:
        self.fields(event.post)

    def fields(self, post: Post | None) -> MetaboxRegistration | None:
        if post is None:
            return None

        registration = MetaboxRegistration(
            id=METABOX_ID,
            title=METABOX_TITLE,
            screen=POST_TYPE,
            context="side",
        )
        if self._metaboxes is not None:
            self._metaboxes.add(registration)
        return registration

    def render(self, post: Post | None) -> MetaboxData | None:
        if post is None:
            return None
        return build_metabox_data(post, self._meta)

    # --- Transition ---

    def generate_short_urls(self, event: TransitionEvent) -> bool:
        """
        Trigger link generation when a post first lands on 'publish'.

        Returns True when generation was invoked (whatever its outcome).
        """
        post = event.post
        if post is None:
            return False

        if not should_generate_links(event.old_status, event.new_status, post.type):
            return False

        post_url = resolve_post_url(post, self._rules)

        try:
            result = self._invoker.generate_short_links(post.id, post_url, post.title)
        except Exception:
            logger.exception("Share link generation raised for post %s", post.id)
            return True

        if not result.success:
            logger.warning(
                "Share link generation failed for post %s: %s",
                post.id,
                "; ".join(err.message for err in result.errors),
            )

        return True
