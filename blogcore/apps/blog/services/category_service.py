"""Category service."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from sqlmodel import Session

from blogcore.apps.blog.facade import CategoryEntry
from blogcore.apps.blog.models import CATEGORY_TRANSLATED_FIELDS, Category
from blogcore.apps.blog.repositories import CategoryRepository, TaxonomyRepository
from blogcore.apps.blog.schemas.category import CategoryCreate, CategoryUpdate
from blogcore.core.bases.base_repository import RepositoryError
from blogcore.core.bases.base_service import BaseService, field_error, is_blank
from blogcore.core.i18n import normalize_locale, resolve_locale
from blogcore.core.response.schemas import ErrorDetail
from blogcore.core.utils.logging import get_logger

logger = get_logger("categories")


class CategoryService(BaseService[Category]):
    """Category service class."""

    entity_name = "Category"

    def __init__(self, session: Session):
        repository = CategoryRepository(session)
        super().__init__(repository)
        self.repository: CategoryRepository = repository
        self.taxonomy = TaxonomyRepository(session)

    def _entry(
        self,
        category: Optional[Category],
        locale: str,
        now: Optional[datetime] = None,
        with_count: bool = False,
    ) -> Optional[CategoryEntry]:
        if category is None:
            return None
        translation = self.repository.translations.get_translation(category.id, locale)
        if translation is None:
            return None
        count = self.taxonomy.post_count(category, locale, now) if with_count else None
        return CategoryEntry(category, translation, post_count=count)

    # ----------------- READ ----------------- #
    def get(self, category_id: int, locale: Optional[str] = None) -> Optional[CategoryEntry]:
        return self._entry(self.repository.get(category_id), resolve_locale(locale))

    def find_by_slug(
        self, slug: str, locale: Optional[str] = None
    ) -> Optional[CategoryEntry]:
        locale = resolve_locale(locale)
        return self._entry(self.repository.by_slug(slug, locale), locale)

    def by_title(self, title: str, locale: Optional[str] = None) -> Optional[CategoryEntry]:
        locale = resolve_locale(locale)
        return self._entry(self.repository.by_title(title, locale), locale)

    def list(
        self, locale: Optional[str] = None, now: Optional[datetime] = None
    ) -> List[CategoryEntry]:
        """Categories translated into ``locale``, each with its live post count."""
        locale = resolve_locale(locale)
        return [
            self._entry(category, locale, now, with_count=True)  # type: ignore
            for category in self.repository.translated(locale)
        ]

    def post_count(
        self, category_id: int, locale: Optional[str] = None, now: Optional[datetime] = None
    ) -> int:
        category = self._get_or_404(category_id)
        return self.taxonomy.post_count(category, resolve_locale(locale), now)

    # ----------------- WRITE ----------------- #
    def _validate_translations(
        self, category_id: Optional[int], buffers: Dict[str, Dict[str, Any]]
    ) -> None:
        errors: List[ErrorDetail] = []
        for locale, buffer in buffers.items():
            title = buffer.get("title")
            if is_blank(title):
                errors.append(field_error("title", "REQUIRED", "can't be blank", locale))
            elif self.repository.title_taken(title, exclude_id=category_id):  # type: ignore
                errors.append(
                    field_error("title", "TAKEN", "has already been taken", locale)
                )
        self._raise_if_invalid(errors)

    def _store(
        self,
        category: Category,
        buffers: Dict[str, Dict[str, Any]],
        slug_sources: Dict[str, Optional[str]],
        operation: str,
    ) -> None:
        try:
            self.repository.add(category)
            for locale, buffer in buffers.items():
                source = slug_sources.get(locale)
                if source is None and is_blank(buffer.get("slug")):
                    source = buffer.get("title")
                if source is not None:
                    buffer["slug"] = self.repository.slugs.unique_slug(
                        source, locale, category.id
                    )
                self.repository.translations.upsert_translation(category.id, locale, buffer)
        except RepositoryError as e:
            self._abort()
            raise self._storage_error(e, operation) from e
        self._commit(operation)

    def create(
        self, data: Union[CategoryCreate, Dict[str, Any]], locale: Optional[str] = None
    ) -> CategoryEntry:
        if isinstance(data, dict):
            data = CategoryCreate.model_validate(data)
        if not data.translations:
            self._raise_if_invalid(
                [field_error("translations", "REQUIRED", "at least one translation is required")]
            )
        buffers = {
            normalize_locale(tr_locale): translation.model_dump()
            for tr_locale, translation in data.translations.items()
        }
        entry_locale = normalize_locale(locale) if locale else next(iter(buffers))
        if entry_locale not in buffers:
            self._raise_if_invalid(
                [
                    field_error(
                        "locale",
                        "NOT_TRANSLATED",
                        f"the category has no {entry_locale} translation",
                    )
                ]
            )
        self._validate_translations(None, buffers)

        category = Category()
        slug_sources = {
            tr_locale: buffer["slug"] or buffer["title"]
            for tr_locale, buffer in buffers.items()
        }
        self._store(category, buffers, slug_sources, "create")
        logger.info("Created category %s with locales %s", category.id, sorted(buffers))
        return self._entry(category, entry_locale)  # type: ignore

    def update(
        self,
        category_id: int,
        data: Union[CategoryUpdate, Dict[str, Any]],
        locale: Optional[str] = None,
    ) -> Optional[CategoryEntry]:
        if isinstance(data, dict):
            data = CategoryUpdate.model_validate(data)
        category = self._get_or_404(category_id)

        buffers: Dict[str, Dict[str, Any]] = {}
        slug_sources: Dict[str, Optional[str]] = {}
        for raw_locale, translation in data.translations.items():
            tr_locale = normalize_locale(raw_locale)
            current = self.repository.translations.get_translation(category.id, tr_locale)
            buffer = {
                name: getattr(current, name) if current is not None else None
                for name in CATEGORY_TRANSLATED_FIELDS
            }
            edits = translation.model_dump(exclude_unset=True)
            slug_sources[tr_locale] = None
            if not is_blank(edits.get("slug")):
                slug_sources[tr_locale] = edits["slug"]
            elif "title" in edits and edits["title"] != buffer["title"]:
                slug_sources[tr_locale] = edits["title"]
            buffer.update(edits)
            buffers[tr_locale] = buffer
        self._validate_translations(category.id, buffers)

        self._store(category, buffers, slug_sources, "update")
        logger.info("Updated category %s", category.id)
        return self._entry(category, resolve_locale(locale))
