"""Category model."""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship

from blogcore.core.database import BaseModel

if TYPE_CHECKING:
    from blogcore.apps.blog.models.categorization import Categorization

CATEGORY_TRANSLATED_FIELDS = ("title", "slug")


class Category(BaseModel, table=True):
    """Category model class."""

    __tablename__ = "blog_categories"  # type: ignore

    translations: List["CategoryTranslation"] = Relationship(
        back_populates="category",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    categorizations: List["Categorization"] = Relationship(
        back_populates="category",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    titles: List["CategoryTitle"] = Relationship(
        back_populates="category",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class CategoryTranslation(BaseModel, table=True):
    __tablename__ = "blog_category_translations"  # type: ignore
    __table_args__ = (
        UniqueConstraint(
            "blog_category_id", "locale", name="uq_category_translation_locale"
        ),
        UniqueConstraint("locale", "slug", name="uq_category_translation_slug"),
        UniqueConstraint("locale", "title", name="uq_category_translation_title"),
    )

    blog_category_id: int = Field(foreign_key="blog_categories.id", index=True)
    locale: str = Field(max_length=10, index=True)
    title: Optional[str] = Field(default=None)
    slug: Optional[str] = Field(default=None, index=True)

    category: Optional[Category] = Relationship(back_populates="translations")


class CategoryTitle(BaseModel, table=True):
    """Category titles across all locales; a title names one category only."""

    __tablename__ = "blog_category_titles"  # type: ignore

    blog_category_id: int = Field(foreign_key="blog_categories.id", index=True)
    title: str = Field(unique=True)

    category: Optional[Category] = Relationship(back_populates="titles")
