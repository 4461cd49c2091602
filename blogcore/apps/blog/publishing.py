"""Publish state of posts.

A post is live when it is not a draft and its ``published_at`` is not in
the future. Public listings filter through :func:`live_clause`; admin
listings may skip it.
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import and_

from blogcore.apps.blog.models import Post
from blogcore.core.utils.utils import to_storage_time, utc_now


def current_time(now: Optional[datetime] = None) -> datetime:
    return to_storage_time(now) if now is not None else utc_now()  # type: ignore


def is_live(post: Post, now: Optional[datetime] = None) -> bool:
    if post.draft or post.published_at is None:
        return False
    return to_storage_time(post.published_at) <= current_time(now)  # type: ignore


def live_clause(now: Optional[datetime] = None) -> Any:
    return and_(
        Post.draft == False,  # noqa: E712
        Post.published_at <= current_time(now),  # type: ignore
    )


def non_draft_clause() -> Any:
    """Draft filter alone; scheduled posts still match."""
    return Post.draft == False  # noqa: E712


def newest_first() -> tuple:
    return (Post.published_at.desc(), Post.id)  # type: ignore
