"""
Transition gate tests.

Generation triggers only when a post genuinely changes status onto
'publish' from a non-publish status.
"""

from __future__ import annotations

import itertools

import pytest

from src.domain.transitions import (
    is_first_publish,
    is_status_change,
    should_generate_links,
)

STATUSES = ["draft", "pending", "publish", "future", "private", "trash", "auto-draft", None]
TYPES = ["post", "page", "attachment", "", None]


@pytest.mark.parametrize(
    ("old", "new", "item_type", "expected"),
    [
        ("draft", "publish", "post", True),
        ("pending", "publish", "post", True),
        ("future", "publish", "post", True),
        ("publish", "publish", "post", False),
        ("pending", "draft", "post", False),
        ("draft", "pending", "post", False),
        ("publish", "draft", "post", False),
        ("draft", "publish", "page", False),
        ("draft", "draft", "post", False),
    ],
)
def test_should_generate_links_scenarios(
    old: str, new: str, item_type: str, expected: bool
) -> None:
    assert should_generate_links(old, new, item_type) is expected


def test_matches_definition_for_all_inputs() -> None:
    """True iff type is post, status changed, and it lands on publish from elsewhere."""
    for old, new, item_type in itertools.product(STATUSES, STATUSES, TYPES):
        expected = (
            item_type == "post" and old != new and new == "publish" and old != "publish"
        )
        assert should_generate_links(old, new, item_type) is expected, (old, new, item_type)


def test_no_op_save_of_published_post_does_not_retrigger() -> None:
    # Publish, then an unrelated update re-saves with the same status
    assert should_generate_links("draft", "publish", "post") is True
    assert should_generate_links("publish", "publish", "post") is False


def test_unknown_status_values_never_match() -> None:
    assert should_generate_links("bogus", "PUBLISH", "post") is False
    assert should_generate_links(None, None, "post") is False


def test_gate_is_stateless() -> None:
    results = {should_generate_links("draft", "publish", "post") for _ in range(5)}
    assert results == {True}


def test_helpers() -> None:
    assert is_status_change("draft", "publish") is True
    assert is_status_change("publish", "publish") is False
    assert is_first_publish("draft", "publish") is True
    assert is_first_publish("publish", "publish") is False
    assert is_first_publish("publish", "draft") is False
