"""Comment model."""

from typing import Optional

from sqlalchemy import Text
from sqlmodel import Field, Relationship

from blogcore.core.database import BaseModel
from blogcore.apps.blog.models.post import Post


class Comment(BaseModel, table=True):
    """Reader comment; owned by its post."""

    __tablename__ = "blog_comments"  # type: ignore
    blog_post_id: int = Field(foreign_key="blog_posts.id", index=True)
    name: str = Field()
    email: str = Field()
    message: str = Field(sa_type=Text)

    post: Optional[Post] = Relationship(back_populates="comments")
