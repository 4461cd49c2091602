"""Smoke tests for the CLI."""

from datetime import datetime

import pytest
from typer.testing import CliRunner

from blogcore.apps.blog.services import CategoryService, PostService
from blogcore.cli import app
from blogcore.core.database import Database


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def database_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'blog.db'}"
    database = Database(url)
    database.create_all()
    with database.get_session() as session:
        category = CategoryService(session).create({"translations": {"en": {"title": "News"}}})
        posts = PostService(session, default_locale="en", validate_source_urls=False)
        for day, title in ((1, "First post"), (15, "Second post")):
            posts.create(
                {
                    "published_at": datetime(2024, 1, day),
                    "username": "editor",
                    "category_ids": [category.id],
                    "translations": {"en": {"title": title, "body": f"{title} body"}},
                }
            )
    database.disconnect()
    return url


def test_init_db(runner, tmp_path):
    result = runner.invoke(app, ["init-db", "--database-url", f"sqlite:///{tmp_path / 'new.db'}"])
    assert result.exit_code == 0
    assert "Tables ready" in result.output


def test_recent(runner, database_url):
    result = runner.invoke(app, ["recent", "--database-url", database_url])
    assert result.exit_code == 0
    assert result.output.index("second-post") < result.output.index("first-post")


def test_show(runner, database_url):
    result = runner.invoke(app, ["show", "first-post", "--database-url", database_url])
    assert result.exit_code == 0
    assert "First post body" in result.output
    assert "→ second-post" in result.output


def test_show_missing_slug(runner, database_url):
    result = runner.invoke(app, ["show", "nope", "--database-url", database_url])
    assert result.exit_code == 1


def test_archive_and_categories(runner, database_url):
    archive = runner.invoke(app, ["archive", "2024", "1", "--database-url", database_url])
    assert archive.exit_code == 0
    assert "first-post" in archive.output

    empty = runner.invoke(app, ["archive", "2023", "--database-url", database_url])
    assert "Nothing published" in empty.output

    categories = runner.invoke(app, ["categories", "--database-url", database_url])
    assert "News  (2)" in categories.output
