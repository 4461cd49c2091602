from datetime import datetime

from blogcore.apps.blog.facade import PostEntry
from blogcore.apps.blog.integrations.authors import FallbackAuthor
from blogcore.apps.blog.models import Post, PostTranslation


def build_entry(**translation):
    post = Post(id=1, draft=False, published_at=datetime(2024, 1, 1), username="writer")
    return PostEntry(post, PostTranslation(blog_post_id=1, locale="en", **translation))


def test_seo_fields_alias_the_translation():
    entry = build_entry(title="Hello", meta_title="Old")

    entry.meta_title = "Hello | Blog"
    entry.meta_description = "All about hello"

    assert entry.translation.meta_title == "Hello | Blog"
    assert entry.seo == {"meta_title": "Hello | Blog", "meta_description": "All about hello"}


def test_translated_and_base_attributes_are_routed():
    entry = build_entry(title="Hello")

    entry.title = "Hi"
    entry.draft = True

    assert entry.translation.title == "Hi"
    assert entry.record.draft is True
    assert entry.author == FallbackAuthor(username="writer")
    assert entry.author_username == "writer"


def test_seo_changes_persist(session, post_service):
    entry = post_service.create(
        {
            "published_at": datetime(2024, 1, 1),
            "username": "writer",
            "translations": {"en": {"title": "Hello", "body": "Body", "meta_title": "Hi"}},
        }
    )
    entry.meta_description = "Greeting"
    session.add(entry.translation)
    session.commit()

    reloaded = post_service.get(entry.id, "en")
    assert reloaded.seo == {"meta_title": "Hi", "meta_description": "Greeting"}


def test_teaser():
    assert build_entry(body="Short body").teaser() == "Short body"
    assert build_entry(body="word " * 100).teaser(length=12) == "word word..."
    assert build_entry(body="Long", custom_teaser="Custom").teaser() == "Custom"


def test_to_dict():
    data = build_entry(title="Hello", slug="hello").to_dict()
    assert data["title"] == "Hello"
    assert data["author_username"] == "writer"
    assert data["meta_title"] is None
