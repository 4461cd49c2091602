"""Categories and tags attached to posts."""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Set

from sqlalchemy import exists
from sqlmodel import Session, func, select

from blogcore.apps.blog.models import Categorization, Category, Post, PostTag
from blogcore.apps.blog.repositories.post_repository import PostRepository
from blogcore.apps.blog.publishing import live_clause, newest_first
from blogcore.core.bases.base_repository import BaseRepository, RepositoryError


class TaxonomyRepository(BaseRepository[Categorization]):
    model = Categorization

    def __init__(self, session: Session, posts: Optional[PostRepository] = None):
        super().__init__(session)
        self.posts = posts or PostRepository(session)

    # ----------------- CATEGORIES ----------------- #
    def posts_in_stmt(
        self, category: Category, locale: str, now: Optional[datetime] = None
    ):
        return (
            self.posts.with_translations(locale)
            .join(Categorization, Categorization.blog_post_id == Post.id)  # type: ignore
            .where(Categorization.blog_category_id == category.id)
            .where(live_clause(now))
        )

    def post_count(
        self, category: Category, locale: str, now: Optional[datetime] = None
    ) -> int:
        return self.count_stmt(self.posts_in_stmt(category, locale, now))

    def posts_in(
        self, category: Category, locale: str, now: Optional[datetime] = None
    ) -> List[Post]:
        stmt = self.posts_in_stmt(category, locale, now).order_by(*newest_first())
        return list(self.session.exec(stmt).all())

    def uncategorized(self, locale: str, now: Optional[datetime] = None) -> List[Post]:
        has_category = exists().where(Categorization.blog_post_id == Post.id)
        stmt = (
            self.posts.with_translations(locale)
            .where(live_clause(now))
            .where(~has_category)
            .order_by(*newest_first())
        )
        return list(self.session.exec(stmt).all())

    def categories_of(self, post: Post) -> List[Category]:
        stmt = (
            select(Category)
            .join(Categorization, Categorization.blog_category_id == Category.id)  # type: ignore
            .where(Categorization.blog_post_id == post.id)
            .order_by(Category.id)  # type: ignore
        )
        return list(self.session.exec(stmt).all())

    def categorize(self, post: Post, category_ids: Iterable[int]) -> List[Categorization]:
        """Make ``category_ids`` the complete set of categories of ``post``."""
        wanted = list(dict.fromkeys(category_ids))
        if wanted:
            found = self.session.exec(
                select(Category.id).where(Category.id.in_(wanted))  # type: ignore
            ).all()
            missing = set(wanted) - set(found)
            if missing:
                raise RepositoryError(f"Unknown category ids: {sorted(missing)}")

        current = {link.blog_category_id: link for link in post.categorizations}
        for category_id, link in current.items():
            if category_id not in wanted:
                post.categorizations.remove(link)
        for category_id in wanted:
            if category_id not in current:
                post.categorizations.append(
                    Categorization(blog_post_id=post.id, blog_category_id=category_id)  # type: ignore
                )
        self.session.add(post)
        self.session.flush()
        return list(post.categorizations)

    # ----------------- TAGS ----------------- #
    def set_tags(self, post: Post, names: Iterable[str]) -> Set[str]:
        wanted = normalize_tags(names)
        current = {tag.name: tag for tag in post.tags}
        for name, tag in current.items():
            if name not in wanted:
                post.tags.remove(tag)
        for name in wanted:
            if name not in current:
                post.tags.append(PostTag(blog_post_id=post.id, name=name))  # type: ignore
        self.session.add(post)
        self.session.flush()
        return self.tags_of(post)

    def tags_of(self, post: Post) -> Set[str]:
        return {tag.name for tag in post.tags}

    def tagged_with(
        self, name: str, locale: str, now: Optional[datetime] = None
    ) -> List[Post]:
        stmt = (
            self.posts.with_translations(locale)
            .join(PostTag, PostTag.blog_post_id == Post.id)  # type: ignore
            .where(PostTag.name == name.strip())
            .where(live_clause(now))
            .order_by(*newest_first())
        )
        return list(self.session.exec(stmt).all())

    def tag_counts(self, locale: str, now: Optional[datetime] = None) -> Dict[str, int]:
        stmt = (
            select(PostTag.name, func.count(PostTag.id))  # type: ignore
            .join(Post, PostTag.blog_post_id == Post.id)  # type: ignore
            .join(
                self.posts.translations.translation_model,
                self.posts.translations.join_clause(locale),
            )
            .where(live_clause(now))
            .group_by(PostTag.name)
            .order_by(PostTag.name)
        )
        return {name: count for name, count in self.session.exec(stmt).all()}


def normalize_tags(names: Iterable[str]) -> List[str]:
    """Strip, drop blanks and duplicates, keep the given order."""
    cleaned = (" ".join(name.split()) for name in names if name)
    return list(dict.fromkeys(name for name in cleaned if name))
