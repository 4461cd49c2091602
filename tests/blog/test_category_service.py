from datetime import datetime

import pytest

from blogcore.core import exceptions


def test_create_and_find_by_slug(category_service):
    entry = category_service.create(
        {"translations": {"en": {"title": "Travel Notes"}, "fr": {"title": "Carnets de voyage"}}}
    )

    assert entry.slug == "travel-notes"
    assert category_service.find_by_slug("carnets-de-voyage", "fr").id == entry.id
    assert category_service.find_by_slug("travel-notes", "fr") is None
    assert category_service.by_title("Carnets de voyage", "fr").id == entry.id


def test_category_title_must_be_unique(category_service, make_category):
    make_category("News")

    with pytest.raises(exceptions.ValidationException) as excinfo:
        category_service.create({"translations": {"de": {"title": "News"}}})
    assert excinfo.value.error_details[0].code == "TAKEN"


def test_category_requires_title(category_service):
    with pytest.raises(exceptions.ValidationException):
        category_service.create({"translations": {"en": {"title": "  "}}})
    with pytest.raises(exceptions.ValidationException):
        category_service.create({"translations": {}})


def test_colliding_category_slugs(make_category):
    assert make_category("C++").slug == "c"
    assert make_category("C#").slug == "c-2"


def test_update_category_title(category_service, make_category):
    entry = make_category("News", fr="Actualités")

    updated = category_service.update(
        entry.id, {"translations": {"en": {"title": "Latest News"}}}, locale="en"
    )

    assert updated.slug == "latest-news"
    assert category_service.get(entry.id, "fr").slug == "actualites"


def test_list_includes_live_post_counts(category_service, make_category, make_post):
    news = make_category("News", fr="Actualités")
    make_category("Tech")
    make_post("One", categories=[news.id], fr="Un")
    make_post("Two", categories=[news.id])
    make_post("Draft", categories=[news.id], draft=True)

    english = {e.title: e.post_count for e in category_service.list("en")}
    french = {e.title: e.post_count for e in category_service.list("fr")}

    assert english == {"News": 2, "Tech": 0}
    assert french == {"Actualités": 1}
    assert category_service.post_count(news.id, "en", now=datetime(2023, 1, 1)) == 0


def test_delete_missing_category(category_service):
    with pytest.raises(exceptions.NotFoundException):
        category_service.delete(12)


def test_category_title_race_is_caught_by_storage(category_service, make_category, monkeypatch):
    make_category("News")
    monkeypatch.setattr(category_service.repository, "title_taken", lambda *a, **k: False)

    with pytest.raises(exceptions.ConflictException):
        category_service.create({"translations": {"fr": {"title": "News"}}})
    assert category_service.count() == 1


def test_create_rejects_locale_without_translation(category_service):
    with pytest.raises(exceptions.ValidationException) as excinfo:
        category_service.create({"translations": {"en": {"title": "News"}}}, locale="fr")

    assert excinfo.value.fields() == ["locale"]
    assert category_service.count() == 0
