from datetime import date
from typing import Optional

import typer

from blogcore.apps.blog.services import CategoryService, PostService
from blogcore.core.config import settings
from blogcore.core.database import Database

app = typer.Typer(help="Query and maintain the blog content store.")

DatabaseOption = typer.Option(
    settings.DATABASE_URI, "--database-url", "-d", help="SQLAlchemy database URL"
)
LocaleOption = typer.Option(
    settings.DEFAULT_LOCALE, "--locale", "-l", help="Locale to read translations in"
)


# ---------------------------
# Helpers
# ---------------------------
def open_database(url: str) -> Database:
    database = Database(url)
    database.create_all()
    return database


def print_entry(entry) -> None:
    published = entry.published_at.strftime("%Y-%m-%d %H:%M") if entry.published_at else "-"
    state = "live" if entry.is_live() else ("draft" if entry.draft else "scheduled")
    print(f"{published}  {entry.slug}  {entry.title}  [{state}]")


# ---------------------------
# Commands
# ---------------------------
@app.command()
def init_db(database_url: str = DatabaseOption):
    """Create all blog tables."""
    open_database(database_url)
    print(f"✅ Tables ready on {database_url}")


@app.command()
def recent(
    limit: int = typer.Option(5, "--limit", "-n", min=1),
    database_url: str = DatabaseOption,
    locale: str = LocaleOption,
):
    """List the most recent live posts."""
    with open_database(database_url).get_session() as session:
        entries = PostService(session).recent(limit, locale=locale, now=settings.get_now())
        if not entries:
            print("📭 No live posts.")
            return
        for entry in entries:
            print_entry(entry)


@app.command()
def show(
    slug: str,
    database_url: str = DatabaseOption,
    locale: str = LocaleOption,
):
    """Show one post by its slug."""
    with open_database(database_url).get_session() as session:
        service = PostService(session)
        entry = service.find_by_slug(slug, locale=locale)
        if entry is None:
            print(f"❌ No post with slug '{slug}' in locale '{locale}'.")
            raise typer.Exit(1)

        print(entry.title)
        print(f"by {entry.author_username or 'unknown'}")
        print_entry(entry)
        print()
        print(entry.body)

        newer = service.next(entry, locale=locale)
        older = service.previous(entry, locale=locale)
        if older is not None:
            print(f"← {older.slug}")
        if newer is not None:
            print(f"→ {newer.slug}")


@app.command()
def archive(
    year: int,
    month: Optional[int] = typer.Argument(None, min=1, max=12),
    database_url: str = DatabaseOption,
    locale: str = LocaleOption,
):
    """List posts published in a year, or in one month of it."""
    with open_database(database_url).get_session() as session:
        service = PostService(session)
        if month is None:
            entries = service.by_year(date(year, 1, 1), locale=locale)
        else:
            entries = service.by_month(date(year, month, 1), locale=locale)
        if not entries:
            print("📭 Nothing published in that period.")
            return
        for entry in entries:
            print_entry(entry)


@app.command()
def categories(
    database_url: str = DatabaseOption,
    locale: str = LocaleOption,
):
    """List categories with their live post counts."""
    with open_database(database_url).get_session() as session:
        entries = CategoryService(session).list(locale=locale, now=settings.get_now())
        if not entries:
            print("📁 No categories.")
            return
        for entry in entries:
            print(f"{entry.slug}  {entry.title}  ({entry.post_count})")


# ---------------------------
# Entrypoint
# ---------------------------
if __name__ == "__main__":
    app()
