"""Categorization model."""

from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship

from blogcore.core.database import BaseModel
from blogcore.apps.blog.models.category import Category
from blogcore.apps.blog.models.post import Post


class Categorization(BaseModel, table=True):
    """Join record between a post and a category."""

    __tablename__ = "blog_categorizations"  # type: ignore
    __table_args__ = (
        UniqueConstraint(
            "blog_post_id", "blog_category_id", name="uq_categorization_pair"
        ),
    )

    blog_post_id: int = Field(foreign_key="blog_posts.id", index=True)
    blog_category_id: int = Field(foreign_key="blog_categories.id", index=True)

    post: Optional[Post] = Relationship(back_populates="categorizations")
    category: Optional[Category] = Relationship(back_populates="categorizations")
