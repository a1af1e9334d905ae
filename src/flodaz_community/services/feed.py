"""Offset/limit windowing for the post feed."""
from __future__ import annotations

from dataclasses import dataclass

from flodaz_community.core.errors import ValidationError

ALL_TYPES = "all"


@dataclass(frozen=True)
class PageWindow:
    """Offset/limit pair for one feed page."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def paginate(page: int, limit: int, *, max_limit: int | None = None) -> PageWindow:
    """Validate a page request and return its window.

    Raises:
        ValidationError: If ``page`` or ``limit`` is below 1.
    """
    if page < 1:
        raise ValidationError("page must be a positive integer")
    if limit < 1:
        raise ValidationError("limit must be a positive integer")
    if max_limit is not None:
        limit = min(limit, max_limit)
    return PageWindow(page=page, limit=limit)


def has_more(returned: int, limit: int) -> bool:
    """Guess whether another page exists.

    A full page is reported as "more available" even when it was the last
    one; the feed only needs this for a load-more control, not for totals.
    """
    return returned == limit


def normalize_type_filter(post_type: str | None) -> str | None:
    """Map an empty value or ``"all"`` to no filter."""
    if not post_type or post_type == ALL_TYPES:
        return None
    return post_type
