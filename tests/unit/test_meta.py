"""
Meta default resolution and ShareMeta accessor tests.
"""

from __future__ import annotations

import pytest

from src.adapters.memory import InMemoryMetaStore
from src.components.social_share import ShareMeta
from src.domain.meta import (
    SHORTLINKS_KEY,
    STATUS_KEY,
    prefixed_key,
    resolve_activation_flag,
    resolve_share_links,
)


class TestResolveActivationFlag:
    def test_absent_defaults_to_enabled(self) -> None:
        assert resolve_activation_flag(None) is True

    @pytest.mark.parametrize(
        "value", [False, 0, "0", "", "false", "off", "true", "abc", 0.5, -0.9, float("nan")]
    )
    def test_disabled_values(self, value: object) -> None:
        assert resolve_activation_flag(value) is False

    @pytest.mark.parametrize("value", [True, 1, "1", " 2", "-1", -3, "12abc", 1.9])
    def test_enabled_values(self, value: object) -> None:
        assert resolve_activation_flag(value) is True


class TestResolveShareLinks:
    def test_absent_defaults_to_empty(self) -> None:
        assert resolve_share_links(None) == {}

    def test_non_mapping_is_empty(self) -> None:
        assert resolve_share_links("https://bit.ly/x") == {}

    def test_drops_empty_urls(self) -> None:
        stored = {"twitter": "https://bit.ly/a", "facebook": ""}
        assert resolve_share_links(stored) == {"twitter": "https://bit.ly/a"}


def test_prefixed_key() -> None:
    assert prefixed_key("undisclosed_", STATUS_KEY) == "undisclosed_social_share_status"


class TestShareMeta:
    @pytest.fixture
    def store(self) -> InMemoryMetaStore:
        return InMemoryMetaStore()

    @pytest.fixture
    def meta(self, store: InMemoryMetaStore) -> ShareMeta:
        return ShareMeta(store, prefix="undisclosed_")

    def test_unset_values_use_defaults(self, meta: ShareMeta) -> None:
        assert meta.read_activation_flag(7) is True
        assert meta.read_share_links(7) == {}

    def test_activation_round_trip(self, meta: ShareMeta, store: InMemoryMetaStore) -> None:
        meta.write_activation_flag(7, False)

        assert meta.read_activation_flag(7) is False
        assert store.get(7, "undisclosed_" + STATUS_KEY) == 0

    def test_share_links_overwritten(self, meta: ShareMeta, store: InMemoryMetaStore) -> None:
        meta.write_share_links(7, {"twitter": "https://bit.ly/a", "facebook": "https://bit.ly/b"})
        meta.write_share_links(7, {"twitter": "https://bit.ly/c"})

        assert meta.read_share_links(7) == {"twitter": "https://bit.ly/c"}
        assert store.exists(7, "undisclosed_" + SHORTLINKS_KEY)

    def test_posts_are_isolated(self, meta: ShareMeta) -> None:
        meta.write_activation_flag(1, False)
        assert meta.read_activation_flag(2) is True
