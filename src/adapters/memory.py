"""
In-memory adapters for the post repository, meta store and admin registries.

Used for wiring without a database (tests, dry runs).
"""

from __future__ import annotations

import copy
from typing import Any

from src.domain.entities import MetaboxRegistration, Post


class InMemoryPostRepo:
    def __init__(self) -> None:
        self._posts: dict[int, Post] = {}

    def save(self, post: Post) -> Post:
        self._posts[post.id] = post
        return post

    def get_by_id(self, post_id: int) -> Post | None:
        return self._posts.get(post_id)

    def list_posts(self, filters: dict[str, Any]) -> list[Post]:
        posts = list(self._posts.values())
        for key in ("status", "type"):
            if key in filters:
                posts = [p for p in posts if getattr(p, key) == filters[key]]
        return sorted(posts, key=lambda p: p.id)


class InMemoryMetaStore:
    def __init__(self) -> None:
        self._meta: dict[tuple[int, str], Any] = {}

    def get(self, post_id: int, key: str) -> Any | None:
        # Copies keep stored records isolated from caller mutation
        return copy.deepcopy(self._meta.get((post_id, key)))

    def exists(self, post_id: int, key: str) -> bool:
        return (post_id, key) in self._meta

    def set(self, post_id: int, key: str, value: Any) -> None:
        self._meta[(post_id, key)] = copy.deepcopy(value)

    def delete(self, post_id: int, key: str) -> None:
        self._meta.pop((post_id, key), None)


class InMemoryAssetRegistry:
    def __init__(self) -> None:
        self.styles: list[str] = []
        self.scripts: list[str] = []
        self.localized: dict[str, dict[str, Any]] = {}

    def enqueue_style(self, handle: str) -> None:
        if handle not in self.styles:
            self.styles.append(handle)

    def enqueue_script(self, handle: str) -> None:
        if handle not in self.scripts:
            self.scripts.append(handle)

    def localize_script(self, handle: str, object_name: str, data: dict[str, Any]) -> None:
        self.localized[f"{handle}:{object_name}"] = dict(data)


class InMemoryMetaboxRegistry:
    def __init__(self) -> None:
        self.metaboxes: list[MetaboxRegistration] = []

    def add(self, registration: MetaboxRegistration) -> None:
        self.metaboxes.append(registration)
