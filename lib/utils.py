# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone

from pydantic import HttpUrl, TypeAdapter, ValidationError


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


# =============================================================================
# URL Utilities
# =============================================================================

_HTTP_URL = TypeAdapter(HttpUrl)


def is_valid_url(value: object) -> bool:
    """
    Check that a value is a well-formed absolute http(s) URL.

    Args:
        value: Candidate value (anything that is not a string is rejected)

    Returns:
        True if pydantic's HttpUrl accepts the value

    Example:
        is_valid_url("https://x.com/m.jpg")            # True
        is_valid_url("https://exa mple.com/m.jpg")     # False
        is_valid_url("not a url")                      # False
    """
    if not isinstance(value, str) or not value:
        return False
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        return False
    return True


# =============================================================================
# Pagination Utilities
# =============================================================================

def page_offset(page: int, limit: int) -> int:
    """Zero-based offset of the first row on a 1-indexed page."""
    return (page - 1) * limit


def total_pages(total_items: int, limit: int) -> int:
    """Number of pages needed for total_items (ceil division, 0 for empty)."""
    return -(-total_items // limit) if total_items > 0 else 0
