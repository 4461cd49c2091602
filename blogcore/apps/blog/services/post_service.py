"""Post service."""

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from sqlmodel import Session, select

from blogcore.apps.blog.facade import CategoryEntry, PostEntry
from blogcore.apps.blog.integrations.authors import (
    Author,
    AuthorProvider,
    resolve_author,
)
from blogcore.apps.blog.integrations.settings_store import (
    BlogSettings,
    MemorySettingsStore,
    SettingsStore,
)
from blogcore.apps.blog.integrations.url_validator import (
    RedirectValidator,
    UrlValidator,
)
from blogcore.apps.blog.models import (
    POST_TRANSLATED_FIELDS,
    Comment,
    Post,
    PostTranslation,
)
from blogcore.apps.blog.repositories import (
    CategoryRepository,
    CommentRepository,
    PostRepository,
    TaxonomyRepository,
)
from blogcore.apps.blog.schemas.post import CommentCreate, PostCreate, PostUpdate
from blogcore.core.bases.base_repository import RepositoryError
from blogcore.core.bases.base_service import BaseService, field_error, is_blank
from blogcore.core.config import settings
from blogcore.core.i18n import normalize_locale, resolve_locale
from blogcore.core.response import schemas
from blogcore.core.response.schemas import ErrorDetail
from blogcore.core.utils.logging import get_logger
from blogcore.core.utils.utils import to_storage_time, utc_now

logger = get_logger("posts")

PostRef = Union[Post, PostEntry, int]


class PostService(BaseService[Post]):
    """Post service class.

    Reads the ambient locale when a call leaves ``locale`` out; everything
    below this layer receives it explicitly.
    """

    entity_name = "Post"

    def __init__(
        self,
        session: Session,
        *,
        settings_store: Optional[SettingsStore] = None,
        author_provider: Optional[AuthorProvider] = None,
        author_required: bool = False,
        url_validator: Optional[UrlValidator] = None,
        validate_source_urls: Optional[bool] = None,
        default_locale: Optional[str] = None,
    ):
        repository = PostRepository(session)
        super().__init__(repository)
        self.repository: PostRepository = repository
        self.taxonomy = TaxonomyRepository(session, repository)
        self.categories = CategoryRepository(session)
        self.comments = CommentRepository(session)
        self.blog_settings = BlogSettings(
            settings_store or MemorySettingsStore(),
            posts_per_page=settings.POSTS_PER_PAGE,
            share_this_key=settings.SHARE_THIS_KEY,
        )
        self.author_provider = author_provider
        self.author_required = author_required
        self.validate_source_urls = (
            settings.VALIDATE_SOURCE_URL
            if validate_source_urls is None
            else validate_source_urls
        )
        self._url_validator = url_validator
        self.default_locale = normalize_locale(default_locale or settings.DEFAULT_LOCALE)

    @property
    def url_validator(self) -> UrlValidator:
        if self._url_validator is None:
            self._url_validator = RedirectValidator(timeout=settings.SOURCE_URL_TIMEOUT)
        return self._url_validator

    # ----------------- ENTRIES ----------------- #
    def author_of(self, post: Post) -> Author:
        return resolve_author(post.user_id, post.username, self.author_provider)

    def _entry(self, post: Optional[Post], locale: str) -> Optional[PostEntry]:
        if post is None:
            return None
        translation = self.repository.translations.get_translation(post.id, locale)
        if translation is None:
            return None
        return PostEntry(post, translation, self.author_of(post))

    def _entries(self, posts: Iterable[Post], locale: str) -> List[PostEntry]:
        posts = list(posts)
        if not posts:
            return []
        stmt = select(PostTranslation).where(
            PostTranslation.locale == locale,
            PostTranslation.blog_post_id.in_([p.id for p in posts]),  # type: ignore
        )
        by_post = {t.blog_post_id: t for t in self.repository.session.exec(stmt).all()}
        return [
            PostEntry(post, by_post[post.id], self.author_of(post))
            for post in posts
            if post.id in by_post
        ]

    def _post(self, ref: PostRef) -> Post:
        if isinstance(ref, PostEntry):
            return ref.record
        if isinstance(ref, Post):
            return ref
        return self._get_or_404(ref)

    # ----------------- READ ----------------- #
    def get(self, post_id: int, locale: Optional[str] = None) -> Optional[PostEntry]:
        return self._entry(self.repository.get(post_id), resolve_locale(locale))

    def find_by_slug(self, slug: str, locale: Optional[str] = None) -> Optional[PostEntry]:
        locale = resolve_locale(locale)
        return self._entry(self.repository.by_slug(slug, locale), locale)

    def find_by_title(self, title: str, locale: Optional[str] = None) -> Optional[PostEntry]:
        locale = resolve_locale(locale)
        return self._entry(self.repository.by_title(title, locale), locale)

    def translation(self, post_id: int, locale: str) -> Optional[PostTranslation]:
        return self.repository.translations.get_translation(post_id, normalize_locale(locale))

    def locales(self, post_id: int) -> List[str]:
        return self.repository.translations.locales_for(post_id)

    def next(self, ref: PostRef, locale: Optional[str] = None) -> Optional[PostEntry]:
        locale = resolve_locale(locale)
        return self._entry(self.repository.next(self._post(ref), locale), locale)

    def previous(self, ref: PostRef, locale: Optional[str] = None) -> Optional[PostEntry]:
        locale = resolve_locale(locale)
        return self._entry(self.repository.previous(self._post(ref), locale), locale)

    def recent(
        self,
        count: Optional[int] = None,
        locale: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> List[PostEntry]:
        locale = resolve_locale(locale)
        if count is None:
            count = self.blog_settings.posts_per_page()
        return self._entries(self.repository.recent(count, locale, now), locale)

    def popular(self, count: int, locale: Optional[str] = None) -> List[PostEntry]:
        locale = resolve_locale(locale)
        return self._entries(self.repository.popular(count, locale), locale)

    def by_month(self, day: date, locale: Optional[str] = None) -> List[PostEntry]:
        locale = resolve_locale(locale)
        return self._entries(self.repository.by_month(day, locale), locale)

    def by_year(self, day: date, locale: Optional[str] = None) -> List[PostEntry]:
        locale = resolve_locale(locale)
        return self._entries(self.repository.by_year(day, locale), locale)

    def archive_dates(
        self, before: Optional[datetime] = None, locale: Optional[str] = None
    ) -> List[datetime]:
        return self.repository.published_dates_older_than(
            before or utc_now(), resolve_locale(locale)
        )

    def uncategorized(
        self, locale: Optional[str] = None, now: Optional[datetime] = None
    ) -> List[PostEntry]:
        locale = resolve_locale(locale)
        return self._entries(self.taxonomy.uncategorized(locale, now), locale)

    def in_category(
        self, category_id: int, locale: Optional[str] = None, now: Optional[datetime] = None
    ) -> List[PostEntry]:
        locale = resolve_locale(locale)
        category = self.categories.get(category_id)
        if category is None:
            return []
        return self._entries(self.taxonomy.posts_in(category, locale, now), locale)

    def tagged_with(
        self, name: str, locale: Optional[str] = None, now: Optional[datetime] = None
    ) -> List[PostEntry]:
        locale = resolve_locale(locale)
        return self._entries(self.taxonomy.tagged_with(name, locale, now), locale)

    def tag_counts(
        self, locale: Optional[str] = None, now: Optional[datetime] = None
    ) -> Dict[str, int]:
        return self.taxonomy.tag_counts(resolve_locale(locale), now)

    def tags_of(self, ref: PostRef) -> set:
        return self.taxonomy.tags_of(self._post(ref))

    def categories_of(self, ref: PostRef, locale: Optional[str] = None) -> List[CategoryEntry]:
        locale = resolve_locale(locale)
        entries = []
        for category in self.taxonomy.categories_of(self._post(ref)):
            translation = self.categories.translations.get_translation(category.id, locale)
            if translation is not None:
                entries.append(CategoryEntry(category, translation))
        return entries

    def live_page(
        self,
        page: int = 1,
        locale: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> schemas.PaginatedResponse:
        locale = resolve_locale(locale)
        per_page = self.blog_settings.posts_per_page()
        result = self.repository.live_page(locale, page=page, per_page=per_page, now=now)
        return result.model_copy(update={"data": self._entries(result.data, locale)})

    def drafts(self, locale: Optional[str] = None) -> List[PostEntry]:
        locale = resolve_locale(locale)
        return self._entries(self.repository.drafts(locale), locale)

    def comments_for(self, post_id: int) -> List[Comment]:
        return self.comments.for_post(post_id)

    # ----------------- VALIDATION ----------------- #
    def _validate_translation(
        self, post_id: Optional[int], locale: str, buffer: Dict[str, Any]
    ) -> List[ErrorDetail]:
        errors = []
        title = buffer.get("title")
        if is_blank(title):
            errors.append(field_error("title", "REQUIRED", "can't be blank", locale))
        elif self.repository.title_taken(title, exclude_id=post_id):  # type: ignore
            errors.append(
                field_error("title", "TAKEN", "has already been taken", locale)
            )
        if is_blank(buffer.get("body")):
            errors.append(field_error("body", "REQUIRED", "can't be blank", locale))
        return errors

    def _validate_base(
        self, values: Dict[str, Any], check_source_url: bool
    ) -> List[ErrorDetail]:
        errors = []
        if values.get("published_at") is None:
            errors.append(field_error("published_at", "REQUIRED", "can't be blank"))

        if self.author_required:
            user_id = values.get("user_id")
            identity = None
            if user_id is not None and self.author_provider is not None:
                identity = self.author_provider.get_identity(user_id)
            if identity is None:
                errors.append(field_error("author", "REQUIRED", "can't be blank"))
        elif is_blank(values.get("username")):
            errors.append(field_error("username", "REQUIRED", "can't be blank"))

        source_url = values.get("source_url")
        if check_source_url and self.validate_source_urls and not is_blank(source_url):
            result = self.url_validator.check(source_url.strip())  # type: ignore
            if not result.reachable:
                errors.append(
                    field_error("source_url", "UNREACHABLE", result.reason or "is unreachable")
                )
        return errors

    def _validate_category_ids(self, category_ids: Optional[List[int]]) -> List[ErrorDetail]:
        if not category_ids:
            return []
        missing = [cid for cid in category_ids if not self.categories.exists(cid)]
        if missing:
            return [
                field_error(
                    "category_ids", "NOT_FOUND", f"unknown categories: {missing}"
                )
            ]
        return []

    def _validate_entry_locale(
        self, entry_locale: str, locales: Iterable[str]
    ) -> List[ErrorDetail]:
        if entry_locale in locales:
            return []
        return [
            field_error(
                "locale", "NOT_TRANSLATED", f"the post has no {entry_locale} translation"
            )
        ]

    def _validate_create(
        self, data: PostCreate, entry_locale: str, check_source_url: bool = True
    ) -> None:
        errors = self._validate_base(data.model_dump(), check_source_url=check_source_url)
        if not data.translations:
            errors.append(
                field_error("translations", "REQUIRED", "at least one translation is required")
            )
        elif self.default_locale not in data.translations:
            errors.append(
                field_error(
                    "translations",
                    "DEFAULT_LOCALE_REQUIRED",
                    f"a {self.default_locale} translation is required",
                )
            )
        else:
            errors.extend(self._validate_entry_locale(entry_locale, data.translations))
        for locale, translation in data.translations.items():
            errors.extend(
                self._validate_translation(None, locale, translation.model_dump())
            )
        errors.extend(self._validate_category_ids(data.category_ids))
        self._raise_if_invalid(errors)

    # ----------------- WRITE ----------------- #
    def _write_translation(
        self,
        post: Post,
        locale: str,
        buffer: Dict[str, Any],
        slug_source: Optional[str] = None,
    ) -> PostTranslation:
        """Upsert one locale; the slug is derived again when given a source."""
        if slug_source is None and is_blank(buffer.get("slug")):
            slug_source = buffer.get("title")
        if slug_source is not None:
            buffer["slug"] = self.repository.slugs.unique_slug(slug_source, locale, post.id)
        return self.repository.translations.upsert_translation(post.id, locale, buffer)

    def create(
        self,
        data: Union[PostCreate, Dict[str, Any]],
        *,
        skip_url_validation: bool = False,
        locale: Optional[str] = None,
    ) -> PostEntry:
        """Create a post with all of its translations in one transaction."""
        if isinstance(data, dict):
            data = PostCreate.model_validate(data)
        data = data.model_copy(
            update={
                "translations": {
                    normalize_locale(k): v for k, v in data.translations.items()
                }
            }
        )
        entry_locale = normalize_locale(locale) if locale else self.default_locale
        self._validate_create(
            data, entry_locale, check_source_url=not skip_url_validation
        )

        post = Post(
            draft=data.draft,
            published_at=to_storage_time(data.published_at),
            user_id=data.user_id,
            username=data.username,
            source_url=data.source_url,
        )
        try:
            self.repository.add(post)
            for tr_locale, translation in data.translations.items():
                buffer = translation.model_dump()
                self._write_translation(
                    post, tr_locale, buffer, slug_source=buffer["slug"] or buffer["title"]
                )
            self.taxonomy.categorize(post, data.category_ids)
            self.taxonomy.set_tags(post, data.tags)
        except RepositoryError as e:
            self._abort()
            raise self._storage_error(e, "create") from e
        self._commit("create")
        logger.info(
            "Created post %s with locales %s", post.id, sorted(data.translations)
        )
        return self._entry(post, entry_locale)  # type: ignore

    def update(
        self,
        post_id: int,
        data: Union[PostUpdate, Dict[str, Any]],
        *,
        skip_url_validation: bool = False,
        locale: Optional[str] = None,
    ) -> PostEntry:
        """Apply changes; each touched locale is rewritten as a whole."""
        if isinstance(data, dict):
            data = PostUpdate.model_validate(data)
        post = self._get_or_404(post_id)

        changes = data.model_dump(
            exclude_unset=True, exclude={"translations", "category_ids", "tags"}
        )
        merged = {
            "published_at": post.published_at,
            "user_id": post.user_id,
            "username": post.username,
            "source_url": post.source_url,
        }
        merged.update(changes)
        source_changed = "source_url" in changes and changes["source_url"] != post.source_url
        errors = self._validate_base(
            merged, check_source_url=source_changed and not skip_url_validation
        )

        buffers: Dict[str, Dict[str, Any]] = {}
        slug_sources: Dict[str, Optional[str]] = {}
        for raw_locale, translation in data.translations.items():
            tr_locale = normalize_locale(raw_locale)
            current = self.repository.translations.get_translation(post.id, tr_locale)
            buffer = {
                name: getattr(current, name) if current is not None else None
                for name in POST_TRANSLATED_FIELDS
            }
            edits = translation.model_dump(exclude_unset=True)
            slug_sources[tr_locale] = None
            if not is_blank(edits.get("slug")):
                slug_sources[tr_locale] = edits["slug"]
            elif "title" in edits and edits["title"] != buffer["title"]:
                slug_sources[tr_locale] = edits["title"]
            buffer.update(edits)
            buffers[tr_locale] = buffer
            errors.extend(self._validate_translation(post.id, tr_locale, buffer))
        errors.extend(self._validate_category_ids(data.category_ids))
        entry_locale = normalize_locale(locale) if locale else self.default_locale
        errors.extend(
            self._validate_entry_locale(
                entry_locale, set(self.locales(post.id)) | set(buffers)
            )
        )
        self._raise_if_invalid(errors)

        for name, value in changes.items():
            if name == "published_at":
                value = to_storage_time(value)
            setattr(post, name, value)
        try:
            self.repository.add(post)
            for tr_locale, buffer in buffers.items():
                self._write_translation(
                    post, tr_locale, buffer, slug_source=slug_sources[tr_locale]
                )
            if data.category_ids is not None:
                self.taxonomy.categorize(post, data.category_ids)
            if data.tags is not None:
                self.taxonomy.set_tags(post, data.tags)
        except RepositoryError as e:
            self._abort()
            raise self._storage_error(e, "update") from e
        self._commit("update")
        logger.info("Updated post %s", post.id)
        return self._entry(post, entry_locale)  # type: ignore

    def register_view(self, post_id: int) -> int:
        post = self._get_or_404(post_id)
        self.repository.increment_access_count(post)
        self._commit("update")
        return post.access_count

    def add_comment(
        self, post_id: int, data: Union[CommentCreate, Dict[str, Any]]
    ) -> Comment:
        if isinstance(data, dict):
            data = CommentCreate.model_validate(data)
        post = self._get_or_404(post_id)
        errors = []
        if not self.blog_settings.comments_allowed():
            errors.append(field_error("comments", "DISABLED", "comments are closed"))
        for name in ("name", "email", "message"):
            if is_blank(getattr(data, name)):
                errors.append(field_error(name, "REQUIRED", "can't be blank"))
        self._raise_if_invalid(errors)

        comment = Comment(blog_post_id=post.id, **data.model_dump())  # type: ignore
        post.comments.append(comment)
        self.repository.add(post)
        self._commit("comment")
        return comment

    def teasers_enabled(self) -> bool:
        return self.blog_settings.teasers_enabled()

    def toggle_teasers(self) -> bool:
        return self.blog_settings.toggle_teasers()

    def share_this_enabled(self) -> bool:
        return self.blog_settings.share_this_enabled()

    def comments_allowed(self) -> bool:
        return self.blog_settings.comments_allowed()
