import re
from typing import Any, Optional

from sqlmodel import select

from blogcore.core.translations import TranslationStore
from blogcore.core.utils.utils import ascii_fold


def slugify(text: Optional[str]) -> str:
    """Create URL-safe slug from text."""
    if not text:
        return ""
    slug = ascii_fold(text).lower().strip()
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


class SlugResolver:
    """Per-locale slugs stored in the ``slug`` column of a translation table.

    Slugs are unique within a locale only; the same entity may carry a
    different slug in every locale.
    """

    def __init__(self, store: TranslationStore):
        self.store = store
        self.translation_model = store.translation_model

    def slug_for(self, entity_id: Any, locale: str) -> Optional[str]:
        row = self.store.get_translation(entity_id, locale)
        return row.slug if row is not None else None  # type: ignore

    def resolve(self, slug: str, locale: str) -> Optional[Any]:
        """Id of the entity owning ``slug`` in ``locale``, or None."""
        if not slug:
            return None
        ids = self.store.query_by_translated_field("slug", slug, locale)
        return ids[0] if ids else None

    def unique_slug(
        self, source: Optional[str], locale: str, entity_id: Any = None
    ) -> str:
        """Normalize ``source`` and suffix ``-2``, ``-3``... until it is free."""
        base = slugify(source)
        if not base:
            base = str(entity_id) if entity_id is not None else "item"

        taken = self._taken_slugs(base, locale, entity_id)
        candidate = base
        counter = 2
        while candidate in taken:
            candidate = f"{base}-{counter}"
            counter += 1
        return candidate

    def _taken_slugs(self, base: str, locale: str, entity_id: Any) -> set:
        slug_column = self.translation_model.slug  # type: ignore
        stmt = select(slug_column).where(
            self.translation_model.locale == locale,  # type: ignore
            (slug_column == base) | slug_column.like(f"{base}-%"),
        )
        if entity_id is not None:
            stmt = stmt.where(self.store.owner_column != entity_id)
        return set(self.store.session.exec(stmt).all())
