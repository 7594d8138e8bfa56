from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

# --- Statuses ---
# Posts may carry any other CMS status ("future", "private", "trash", ...),
# so Post.status stays a plain string.
STATUS_DRAFT = "draft"
STATUS_PUBLISH = "publish"

POST_TYPE = "post"

# Provider name -> generated short URL
ShareLinkRecord = dict[str, str]

# --- Content ---

class Post(BaseModel):
    id: int
    type: str = POST_TYPE
    slug: str = ""
    title: str
    status: str = STATUS_DRAFT

    # Resolved by the CMS once the post is publishable
    permalink: str | None = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

# --- Metabox ---

class MetaboxRegistration(BaseModel):
    id: str
    title: str
    screen: str
    context: Literal["normal", "side", "advanced"] = "side"
