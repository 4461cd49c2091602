"""Comment repository."""

from typing import List

from sqlmodel import select

from blogcore.apps.blog.models import Comment
from blogcore.core.bases.base_repository import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Comment repository class."""

    model = Comment

    def for_post(self, post_id: int) -> List[Comment]:
        stmt = (
            select(Comment)
            .where(Comment.blog_post_id == post_id)
            .order_by(Comment.created_at, Comment.id)  # type: ignore
        )
        return list(self.session.exec(stmt).all())
