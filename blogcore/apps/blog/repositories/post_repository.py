"""Post repository.

Every query that touches translated attributes takes the locale as an
argument and joins the translation table on it; posts with no row for that
locale are left out. Ties on ``published_at`` fall back to storage order.
"""

from datetime import date, datetime
from typing import Any, List, Optional

from sqlmodel import Session, select

from blogcore.apps.blog.models import (
    POST_TRANSLATED_FIELDS,
    Post,
    PostTitle,
    PostTranslation,
)
from blogcore.apps.blog.publishing import (
    live_clause,
    newest_first,
    non_draft_clause,
)
from blogcore.core.bases.base_repository import BaseRepository
from blogcore.core.response import schemas
from blogcore.core.slugs import SlugResolver
from blogcore.core.translations import TranslationStore
from blogcore.core.utils.utils import month_bounds, to_storage_time, year_bounds


class PostRepository(BaseRepository[Post]):
    """Post repository class."""

    model = Post

    def __init__(self, session: Session):
        super().__init__(session)
        self.translations: TranslationStore[Post, PostTranslation] = TranslationStore(
            session,
            Post,
            PostTranslation,
            owner_key="blog_post_id",
            fields=POST_TRANSLATED_FIELDS,
            title_registry=PostTitle,
        )
        self.slugs = SlugResolver(self.translations)

    def with_translations(self, locale: str, **conditions) -> Any:
        return self.translations.with_translations(locale, **conditions)

    # ----------------- LOOKUP ----------------- #
    def by_slug(self, slug: str, locale: str) -> Optional[Post]:
        post_id = self.slugs.resolve(slug, locale)
        return self.get(post_id) if post_id is not None else None

    def by_title(self, title: str, locale: Optional[str] = None) -> Optional[Post]:
        ids = self.translations.query_by_translated_field("title", title, locale)
        return self.get(ids[0]) if ids else None

    def title_taken(self, title: str, exclude_id: Optional[int] = None) -> bool:
        """True when another post uses ``title`` in any locale."""
        ids = self.translations.query_by_translated_field("title", title)
        return any(post_id != exclude_id for post_id in ids)

    # ----------------- NAVIGATION ----------------- #
    def next(self, post: Post, locale: str) -> Optional[Post]:
        stmt = (
            self.with_translations(locale)
            .where(Post.published_at > post.published_at)  # type: ignore
            .where(non_draft_clause())
            .order_by(Post.published_at.asc(), Post.id)  # type: ignore
        )
        return self.session.exec(stmt).first()

    def previous(self, post: Post, locale: str) -> Optional[Post]:
        return self.published_before(post.published_at, locale).first()  # type: ignore

    def published_before(self, moment: datetime, locale: str) -> Any:
        """Non-draft posts published strictly before ``moment``, newest first."""
        stmt = (
            self.with_translations(locale)
            .where(Post.published_at < to_storage_time(moment))  # type: ignore
            .where(non_draft_clause())
            .order_by(*newest_first())
        )
        return self.session.exec(stmt)

    def published_dates_older_than(
        self, moment: datetime, locale: str
    ) -> List[datetime]:
        return [post.published_at for post in self.published_before(moment, locale)]  # type: ignore

    def by_month(self, day: date, locale: Optional[str] = None) -> List[Post]:
        start, end = month_bounds(day)
        stmt = self.with_translations(locale) if locale else select(Post)
        stmt = stmt.where(
            Post.published_at >= start,  # type: ignore
            Post.published_at <= end,  # type: ignore
        ).order_by(*newest_first())
        return list(self.session.exec(stmt).all())

    def by_year(self, day: date, locale: str) -> List[Post]:
        start, end = year_bounds(day)
        stmt = (
            self.with_translations(locale)
            .where(
                Post.published_at >= start,  # type: ignore
                Post.published_at <= end,  # type: ignore
            )
            .order_by(*newest_first())
        )
        return list(self.session.exec(stmt).all())

    def live_stmt(self, locale: str, now: Optional[datetime] = None) -> Any:
        return (
            self.with_translations(locale)
            .where(live_clause(now))
            .order_by(*newest_first())
        )

    def live(self, locale: str, now: Optional[datetime] = None) -> List[Post]:
        return list(self.session.exec(self.live_stmt(locale, now)).all())

    def live_page(
        self,
        locale: str,
        page: int = 1,
        per_page: int = 10,
        now: Optional[datetime] = None,
    ) -> schemas.PaginatedResponse:
        return self.paginate(self.live_stmt(locale, now), page=page, per_page=per_page)

    def recent(
        self, count: int, locale: str, now: Optional[datetime] = None
    ) -> List[Post]:
        stmt = self.live_stmt(locale, now).limit(count)
        return list(self.session.exec(stmt).all())

    def popular(self, count: int, locale: str) -> List[Post]:
        stmt = (
            self.with_translations(locale)
            .order_by(Post.access_count.desc(), Post.id)  # type: ignore
            .limit(count)
        )
        return list(self.session.exec(stmt).all())

    def drafts(self, locale: Optional[str] = None) -> List[Post]:
        stmt = self.with_translations(locale) if locale else select(Post)
        stmt = stmt.where(Post.draft == True).order_by(*newest_first())  # noqa: E712
        return list(self.session.exec(stmt).all())

    # ----------------- WRITE ----------------- #
    def increment_access_count(self, post: Post) -> Post:
        post.access_count = (post.access_count or 0) + 1
        return self.add(post)
