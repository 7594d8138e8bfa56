from src.domain.entities import POST_TYPE, STATUS_PUBLISH


def is_status_change(old_status: str | None, new_status: str | None) -> bool:
    """
    Post updates fire a transition even when the status is unchanged,
    so a real change must be detected explicitly.
    """
    return old_status != new_status


def is_first_publish(old_status: str | None, new_status: str | None) -> bool:
    """True when the post lands on 'publish' from any other status."""
    return new_status == STATUS_PUBLISH and old_status != STATUS_PUBLISH


def should_generate_links(
    old_status: str | None,
    new_status: str | None,
    item_type: str | None,
) -> bool:
    """
    Decide whether a status transition should trigger share link generation.

    Pure function. Unknown or missing values never match, they simply
    yield False.
    """
    if item_type != POST_TYPE:
        return False

    if not is_status_change(old_status, new_status):
        return False

    return is_first_publish(old_status, new_status)
