import logging
from datetime import datetime

from src.core.events import TRANSITION_POST_STATUS, EventDispatcher, TransitionEvent
from src.domain.entities import STATUS_DRAFT, STATUS_PUBLISH, Post
from src.ports.repo import PostRepoPort

logger = logging.getLogger(__name__)


class PublishService:
    """
    Changes post status and announces every status write as a transition
    event, including saves that keep the same status.
    """

    def __init__(self, repo: PostRepoPort, dispatcher: EventDispatcher):
        self.repo = repo
        self.dispatcher = dispatcher

    def set_status(self, post_id: int, new_status: str) -> Post:
        post = self.repo.get_by_id(post_id)
        if not post:
            raise ValueError("Post not found")

        old_status = post.status
        post = post.model_copy(update={"status": new_status, "updated_at": datetime.utcnow()})
        self.repo.save(post)

        logger.info("Post %s status %s -> %s", post.id, old_status, new_status)
        self.dispatcher.dispatch(
            TRANSITION_POST_STATUS,
            TransitionEvent(new_status=new_status, old_status=old_status, post=post),
        )
        return post

    def publish_now(self, post_id: int) -> Post:
        return self.set_status(post_id, STATUS_PUBLISH)

    def unpublish(self, post_id: int) -> Post:
        return self.set_status(post_id, STATUS_DRAFT)

    def update(self, post: Post) -> Post:
        """Save edits to a post; fires a transition with unchanged status."""
        existing = self.repo.get_by_id(post.id)
        old_status = existing.status if existing else "new"

        self.repo.save(post)
        self.dispatcher.dispatch(
            TRANSITION_POST_STATUS,
            TransitionEvent(new_status=post.status, old_status=old_status, post=post),
        )
        return post
