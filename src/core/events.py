"""
EventDispatcher - In-process lifecycle event subscription.

Listeners subscribe to a named event and are invoked synchronously,
in registration order, on the dispatching thread.

Key behaviors:
- Listener registry keyed by event name
- Dispatch to an event with no listeners is a no-op
- Listener exceptions propagate to the dispatcher's caller
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from src.domain.entities import Post

logger = logging.getLogger(__name__)

# --- Event Names ---

TRANSITION_POST_STATUS = "transition_post_status"
ADMIN_ENQUEUE_SCRIPTS = "admin_enqueue_scripts"
ADD_META_BOXES_POST = "add_meta_boxes_post"


# --- Event Payloads ---


@dataclass(frozen=True)
class TransitionEvent:
    """A post's status changed (or was re-saved with the same status)."""

    new_status: str | None
    old_status: str | None
    post: Post | None


@dataclass(frozen=True)
class AdminContext:
    """Explicit admin request context, replaces the CMS "current page" global."""

    page: str
    rest_url: str
    nonce: str
    post_id: int | None = None
    is_plugin_admin_page: bool = False


@dataclass(frozen=True)
class MetaBoxesEvent:
    """The post edit screen is collecting its metaboxes."""

    post: Post | None


Listener = Callable[[Any], None]


# --- Dispatcher ---


class EventDispatcher:
    """Synchronous listener registry keyed by event name."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def subscribe(self, event_name: str, listener: Listener) -> None:
        """Register a listener; listeners run in the order they subscribed."""
        self._listeners[event_name].append(listener)

    def unsubscribe(self, event_name: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_name, [])
        if listener in listeners:
            listeners.remove(listener)

    def listeners(self, event_name: str) -> list[Listener]:
        return list(self._listeners.get(event_name, []))

    def dispatch(self, event_name: str, event: Any) -> int:
        """
        Invoke every listener for event_name with the event payload.

        Returns the number of listeners invoked.
        """
        listeners = self.listeners(event_name)
        logger.debug("Dispatching %s to %d listener(s)", event_name, len(listeners))

        for listener in listeners:
            listener(event)

        return len(listeners)
