from typing import Any, Protocol

from src.domain.entities import Post


class PostRepoPort(Protocol):
    def save(self, post: Post) -> Post:
        ...

    def get_by_id(self, post_id: int) -> Post | None:
        ...

    def list_posts(self, filters: dict[str, Any]) -> list[Post]:
        ...


class MetaStorePort(Protocol):
    """Key/value metadata keyed by post id. Values are JSON-serialisable."""

    def get(self, post_id: int, key: str) -> Any | None:
        """Return the stored value, or None when the key is absent."""
        ...

    def exists(self, post_id: int, key: str) -> bool:
        ...

    def set(self, post_id: int, key: str, value: Any) -> None:
        ...

    def delete(self, post_id: int, key: str) -> None:
        ...
