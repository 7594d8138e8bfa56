"""
Social share REST routes, mounted under /{rest_namespace}.

Endpoints:
- POST /socialshare/bitlinks          generate (or regenerate) share links
- GET  /socialshare/{post_id}         metabox data {links, checked, hidden}
- PUT  /socialshare/{post_id}/status  activation toggle
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from src.adapters.sqlite.repos import SQLitePostRepo
from src.api.deps import get_link_generation_service, get_post_repo, get_share_meta
from src.components.social_share import (
    SHORTEN_FAILED,
    GenerateLinksOutput,
    LinkGenerationService,
    SetActivationInput,
    ShareMeta,
    ShareValidationError,
    handle_bitlinks_request,
    run_get_metabox,
    run_set_activation,
)

router = APIRouter()


# --- Request/Response Models ---


class ErrorItem(BaseModel):
    code: str
    message: str
    field: str | None = None


class BitlinksResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    post_id: int = Field(..., alias="postId")
    links: dict[str, str]
    errors: list[ErrorItem]


class MetaboxResponse(BaseModel):
    links: dict[str, str]
    checked: bool
    hidden: bool


class ActivationRequest(BaseModel):
    active: bool


class ActivationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    post_id: int = Field(..., alias="postId")
    active: bool


# --- Helper Functions ---


def _error_items(errors: list[ShareValidationError]) -> list[dict[str, str | None]]:
    return [{"code": e.code, "message": e.message, "field": e.field} for e in errors]


def _failure_status(result: GenerateLinksOutput) -> int:
    # Every provider failed upstream vs. a bad request body
    if result.errors and all(e.code == SHORTEN_FAILED for e in result.errors):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_400_BAD_REQUEST


# --- Routes ---


@router.post("/socialshare/bitlinks", response_model=BitlinksResponse)
def create_bitlinks(
    body: Any = Body(default=None),
    service: LinkGenerationService = Depends(get_link_generation_service),
) -> BitlinksResponse:
    """
    Generate share links for a post and store them in its meta.

    The body is validated by the same handler the publish listener uses;
    any validation failure is a 400.
    """
    result = handle_bitlinks_request(body, service)

    if not result.success:
        raise HTTPException(
            status_code=_failure_status(result),
            detail=_error_items(result.errors),
        )

    return BitlinksResponse(
        post_id=result.post_id,
        links=result.links,
        errors=[ErrorItem(**item) for item in _error_items(result.errors)],
    )


@router.get("/socialshare/{post_id}", response_model=MetaboxResponse)
def get_social_share(
    post_id: int,
    posts: SQLitePostRepo = Depends(get_post_repo),
    meta: ShareMeta = Depends(get_share_meta),
) -> MetaboxResponse:
    """Links and toggle state for the Social Share panel."""
    result = run_get_metabox(post_id, posts, meta)

    if result.data is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=_error_items(result.errors),
        )

    return MetaboxResponse(
        links=result.data.links,
        checked=result.data.checked,
        hidden=result.data.hidden,
    )


@router.put("/socialshare/{post_id}/status", response_model=ActivationResponse)
def set_social_share_status(
    post_id: int,
    data: ActivationRequest,
    meta: ShareMeta = Depends(get_share_meta),
) -> ActivationResponse:
    """Activate or deactivate the share widget for a post."""
    result = run_set_activation(SetActivationInput(post_id=post_id, active=data.active), meta)

    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_error_items(result.errors),
        )

    return ActivationResponse(post_id=result.post_id, active=result.active)
