"""Category repository."""

from typing import List, Optional

from sqlmodel import Session

from blogcore.apps.blog.models import (
    CATEGORY_TRANSLATED_FIELDS,
    Category,
    CategoryTitle,
    CategoryTranslation,
)
from blogcore.core.bases.base_repository import BaseRepository
from blogcore.core.slugs import SlugResolver
from blogcore.core.translations import TranslationStore


class CategoryRepository(BaseRepository[Category]):
    """Category repository class."""

    model = Category

    def __init__(self, session: Session):
        super().__init__(session)
        self.translations: TranslationStore[Category, CategoryTranslation] = (
            TranslationStore(
                session,
                Category,
                CategoryTranslation,
                owner_key="blog_category_id",
                fields=CATEGORY_TRANSLATED_FIELDS,
                title_registry=CategoryTitle,
            )
        )
        self.slugs = SlugResolver(self.translations)

    def by_slug(self, slug: str, locale: str) -> Optional[Category]:
        category_id = self.slugs.resolve(slug, locale)
        return self.get(category_id) if category_id is not None else None

    def by_title(self, title: str, locale: Optional[str] = None) -> Optional[Category]:
        ids = self.translations.query_by_translated_field("title", title, locale)
        return self.get(ids[0]) if ids else None

    def title_taken(self, title: str, exclude_id: Optional[int] = None) -> bool:
        ids = self.translations.query_by_translated_field("title", title)
        return any(category_id != exclude_id for category_id in ids)

    def translated(self, locale: str) -> List[Category]:
        """Categories with a translation in ``locale``, by title."""
        stmt = self.translations.with_translations(locale).order_by(
            CategoryTranslation.title, Category.id  # type: ignore
        )
        return list(self.session.exec(stmt).all())
