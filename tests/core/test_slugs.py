import pytest

from blogcore.apps.blog.repositories import PostRepository
from blogcore.core.slugs import slugify


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Hello World", "hello-world"),
        ("  Hello,   World!  ", "hello-world"),
        ("Crème brûlée à la carte", "creme-brulee-a-la-carte"),
        ("2024: a -- year", "2024-a-year"),
        ("!!!", ""),
        (None, ""),
    ],
)
def test_slugify(text, expected):
    assert slugify(text) == expected


def test_slug_derived_from_title(make_post):
    entry = make_post("Hello World")
    assert entry.slug == "hello-world"


def test_colliding_slug_gets_counter_suffix(make_post):
    first = make_post("Hello World")
    second = make_post("Hello, World!")
    third = make_post("hello world?")

    assert first.slug == "hello-world"
    assert second.slug == "hello-world-2"
    assert third.slug == "hello-world-3"


def test_slugs_are_unique_per_locale_only(session, make_post):
    english = make_post("Hello World", fr="Bonjour")
    other = make_post("Something else", fr="Hello World!")
    repository = PostRepository(session)

    assert english.slug == "hello-world"
    assert repository.slugs.slug_for(other.id, "fr") == "hello-world"


def test_resolve_is_locale_scoped(session, make_post):
    entry = make_post("Hello World", fr="Bonjour le monde")
    repository = PostRepository(session)

    assert repository.slugs.resolve("hello-world", "en") == entry.id
    assert repository.slugs.resolve("bonjour-le-monde", "fr") == entry.id
    assert repository.slugs.resolve("hello-world", "fr") is None
    assert repository.slugs.resolve("missing", "en") is None


def test_slug_for_reads_stored_slug(session, make_post):
    entry = make_post("Hello World", fr="Bonjour")
    repository = PostRepository(session)

    assert repository.slugs.slug_for(entry.id, "fr") == "bonjour"
    assert repository.slugs.slug_for(entry.id, "de") is None


def test_unique_slug_ignores_own_row(session, make_post):
    entry = make_post("Hello World")
    repository = PostRepository(session)

    assert repository.slugs.unique_slug("Hello World", "en", entry.id) == "hello-world"
    assert repository.slugs.unique_slug("Hello World", "en") == "hello-world-2"


def test_blank_slug_source_falls_back_to_id(session, make_post):
    entry = make_post("???")
    assert entry.slug == str(entry.id)
