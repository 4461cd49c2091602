import pytest
from sqlmodel import select

from blogcore.apps.blog.models import Post, PostTitle, PostTranslation
from blogcore.apps.blog.repositories import PostRepository
from blogcore.core.bases.base_repository import ConflictError, RepositoryError


@pytest.fixture
def store(session):
    return PostRepository(session).translations


def test_get_translation_has_no_locale_fallback(store, make_post):
    entry = make_post("Hello", fr="Bonjour")

    assert store.get_translation(entry.id, "fr").title == "Bonjour"
    assert store.get_translation(entry.id, "en").title == "Hello"
    assert store.get_translation(entry.id, "de") is None


def test_upsert_replaces_whole_locale_row(session, store, make_post):
    entry = make_post("Hello")
    store.upsert_translation(
        entry.id, "en", {"title": "Hello", "body": "New body", "slug": "hello"}
    )
    session.commit()

    row = store.get_translation(entry.id, "en")
    assert row.body == "New body"
    assert row.meta_title is None
    rows = session.exec(
        select(PostTranslation).where(PostTranslation.blog_post_id == entry.id)
    ).all()
    assert len(rows) == 1


def test_upsert_inserts_new_locale(session, store, make_post):
    entry = make_post("Hello")
    store.upsert_translation(entry.id, "de", {"title": "Hallo", "body": "Text", "slug": "hallo"})
    session.commit()

    assert store.locales_for(entry.id) == ["de", "en"]


def test_upsert_rejects_unknown_fields(store, make_post):
    entry = make_post("Hello")
    with pytest.raises(ValueError):
        store.upsert_translation(entry.id, "en", {"draft": True})


def test_upsert_surfaces_storage_conflict(store, make_post):
    make_post("Hello")
    other = make_post("Other")
    with pytest.raises(RepositoryError):
        store.upsert_translation(other.id, "en", {"title": "Hello", "body": "x", "slug": "x"})


def test_query_by_translated_field(store, make_post):
    first = make_post("Hello", fr="Bonjour")
    second = make_post("Second", fr="Deuxième")

    assert store.query_by_translated_field("title", "Bonjour") == [first.id]
    assert store.query_by_translated_field("title", "Bonjour", "en") == []
    assert store.query_by_translated_field("locale", "fr") == [first.id, second.id]
    with pytest.raises(ValueError):
        store.query_by_translated_field("draft", False)


def test_split_conditions_routes_predicates(store):
    base, translated = store.split_conditions(
        {"title": "Hello", "draft": False, "locale": "en", "access_count": 3}
    )

    assert base == {"draft": False, "access_count": 3}
    assert translated == {"title": "Hello", "locale": "en"}
    with pytest.raises(ValueError):
        store.split_conditions({"nope": 1})


def test_with_translations_joins_on_locale(session, store, make_post):
    both = make_post("Hello", fr="Bonjour")
    make_post("English only")
    draft = make_post("Draft", draft=True, fr="Brouillon")

    french = session.exec(store.with_translations("fr")).all()
    assert {p.id for p in french} == {both.id, draft.id}

    mixed = session.exec(store.with_translations("fr", draft=False, title="Bonjour")).all()
    assert [p.id for p in mixed] == [both.id]
    assert all(isinstance(p, Post) for p in mixed)


def titles_of(session, post_id):
    stmt = select(PostTitle.title).where(PostTitle.blog_post_id == post_id)
    return sorted(session.exec(stmt).all())


def test_storage_rejects_title_reused_in_another_locale(session, store):
    first, second = Post(), Post()
    session.add_all([first, second])
    session.flush()

    store.upsert_translation(first.id, "en", {"title": "Same", "body": "x", "slug": "same"})
    with pytest.raises(ConflictError):
        store.upsert_translation(
            second.id, "fr", {"title": "Same", "body": "x", "slug": "same"}
        )


def test_one_post_may_hold_its_title_in_several_locales(session, store, make_post):
    entry = make_post("Lasagne", fr="Lasagne", de="Lasagne")

    assert titles_of(session, entry.id) == ["Lasagne"]


def test_renaming_releases_the_old_title(session, store, make_post):
    entry = make_post("Old name", fr="Ancien nom")
    store.upsert_translation(entry.id, "en", {"title": "New name", "body": "x", "slug": "x"})
    session.commit()

    assert titles_of(session, entry.id) == ["Ancien nom", "New name"]
    other = make_post("Old name")
    assert titles_of(session, other.id) == ["Old name"]
