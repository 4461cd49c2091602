"""Tag model."""

from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship

from blogcore.core.database import BaseModel
from blogcore.apps.blog.models.post import Post


class PostTag(BaseModel, table=True):
    """Free-form tag carried by a post."""

    __tablename__ = "blog_post_tags"  # type: ignore
    __table_args__ = (UniqueConstraint("blog_post_id", "name", name="uq_post_tag"),)

    blog_post_id: int = Field(foreign_key="blog_posts.id", index=True)
    name: str = Field(max_length=100, index=True)

    post: Optional[Post] = Relationship(back_populates="tags")
