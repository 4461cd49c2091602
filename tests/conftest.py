from datetime import datetime, timedelta

import pytest

from blogcore.apps.blog.integrations.settings_store import MemorySettingsStore
from blogcore.apps.blog.services import CategoryService, PostService
from blogcore.core.database import Database
from blogcore.core.utils.utils import utc_now


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.disconnect()


@pytest.fixture
def session(database):
    with database.get_session() as session:
        yield session


@pytest.fixture
def settings_store():
    return MemorySettingsStore()


@pytest.fixture
def post_service(session, settings_store):
    return PostService(
        session,
        settings_store=settings_store,
        default_locale="en",
        validate_source_urls=False,
    )


@pytest.fixture
def category_service(session):
    return CategoryService(session)


@pytest.fixture
def future():
    return utc_now() + timedelta(days=30)


@pytest.fixture
def make_post(post_service):
    """Create a post; ``fr``/``de`` keyword arguments add translations."""

    def _make(
        title,
        published_at=datetime(2024, 1, 1, 9, 0),
        draft=False,
        body="Some body text",
        username="editor",
        categories=(),
        tags=(),
        **locales,
    ):
        translations = {"en": {"title": title, "body": body}}
        for locale, locale_title in locales.items():
            translations[locale] = {"title": locale_title, "body": f"{body} ({locale})"}
        return post_service.create(
            {
                "draft": draft,
                "published_at": published_at,
                "username": username,
                "translations": translations,
                "category_ids": list(categories),
                "tags": list(tags),
            }
        )

    return _make


@pytest.fixture
def make_category(category_service):
    def _make(title, **locales):
        translations = {"en": {"title": title}}
        for locale, locale_title in locales.items():
            translations[locale] = {"title": locale_title}
        return category_service.create({"translations": translations})

    return _make
