"""Post model."""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Text, UniqueConstraint
from sqlmodel import Field, Relationship

from blogcore.core.database import BaseModel, UTCTimestamp

if TYPE_CHECKING:
    from blogcore.apps.blog.models.categorization import Categorization
    from blogcore.apps.blog.models.comment import Comment
    from blogcore.apps.blog.models.tag import PostTag

SEO_FIELDS = ("meta_title", "meta_description")
POST_TRANSLATED_FIELDS = (
    "title",
    "body",
    "custom_url",
    "custom_teaser",
    "slug",
) + SEO_FIELDS


class Post(BaseModel, table=True):
    """Post model class.

    Only attributes that are the same in every locale live here; see
    :class:`PostTranslation` for the rest.
    """

    __tablename__ = "blog_posts"  # type: ignore
    draft: bool = Field(default=False, index=True)
    published_at: Optional[datetime] = Field(
        default=None, index=True, sa_type=UTCTimestamp
    )
    access_count: int = Field(default=0)
    user_id: Optional[int] = Field(default=None, index=True)
    username: Optional[str] = Field(default=None)
    source_url: Optional[str] = Field(default=None)

    translations: List["PostTranslation"] = Relationship(
        back_populates="post",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    comments: List["Comment"] = Relationship(
        back_populates="post",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    categorizations: List["Categorization"] = Relationship(
        back_populates="post",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    tags: List["PostTag"] = Relationship(
        back_populates="post",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    titles: List["PostTitle"] = Relationship(
        back_populates="post",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class PostTranslation(BaseModel, table=True):
    """Locale-specific attributes of a post, SEO metadata included."""

    __tablename__ = "blog_post_translations"  # type: ignore
    __table_args__ = (
        UniqueConstraint("blog_post_id", "locale", name="uq_post_translation_locale"),
        UniqueConstraint("locale", "slug", name="uq_post_translation_slug"),
        UniqueConstraint("locale", "title", name="uq_post_translation_title"),
    )

    blog_post_id: int = Field(foreign_key="blog_posts.id", index=True)
    locale: str = Field(max_length=10, index=True)
    title: Optional[str] = Field(default=None)
    body: Optional[str] = Field(default=None, sa_type=Text)
    custom_url: Optional[str] = Field(default=None)
    custom_teaser: Optional[str] = Field(default=None, sa_type=Text)
    slug: Optional[str] = Field(default=None, index=True)
    meta_title: Optional[str] = Field(default=None)
    meta_description: Optional[str] = Field(default=None, sa_type=Text)

    post: Optional[Post] = Relationship(back_populates="translations")


class PostTitle(BaseModel, table=True):
    """One row per distinct title a post uses in any of its locales.

    The unique index keeps a title from belonging to two posts, whichever
    locales they use it in.
    """

    __tablename__ = "blog_post_titles"  # type: ignore

    blog_post_id: int = Field(foreign_key="blog_posts.id", index=True)
    title: str = Field(unique=True)

    post: Optional[Post] = Relationship(back_populates="titles")
