"""Addressable post and category entries.

An entry merges the base record with its translation for one locale.
Translated attributes, SEO aliases included, read from and write to that
translation row; base attributes go to the base record.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from blogcore.apps.blog.integrations.authors import Author, FallbackAuthor
from blogcore.apps.blog.models import (
    SEO_FIELDS,
    Category,
    CategoryTranslation,
    Post,
    PostTranslation,
)
from blogcore.apps.blog.publishing import is_live


def _base_alias(name: str, writable: bool = True) -> property:
    def getter(self):
        return getattr(self.record, name)

    def setter(self, value):
        setattr(self.record, name, value)

    return property(getter, setter if writable else None)


def _translation_alias(name: str) -> property:
    def getter(self):
        return getattr(self.translation, name)

    def setter(self, value):
        setattr(self.translation, name, value)

    return property(getter, setter)


class PostEntry:
    def __init__(self, post: Post, translation: PostTranslation, author: Optional[Author] = None):
        self.record = post
        self.translation = translation
        self.author: Author = author or FallbackAuthor(username=post.username)

    id = _base_alias("id", writable=False)
    draft = _base_alias("draft")
    published_at = _base_alias("published_at")
    access_count = _base_alias("access_count", writable=False)
    user_id = _base_alias("user_id", writable=False)
    username = _base_alias("username")
    source_url = _base_alias("source_url")

    title = _translation_alias("title")
    body = _translation_alias("body")
    custom_url = _translation_alias("custom_url")
    custom_teaser = _translation_alias("custom_teaser")
    slug = _translation_alias("slug")

    # SEO_FIELDS
    meta_title = _translation_alias("meta_title")
    meta_description = _translation_alias("meta_description")

    @property
    def locale(self) -> str:
        return self.translation.locale

    @property
    def author_username(self) -> Optional[str]:
        return self.author.username

    @property
    def seo(self) -> Dict[str, Optional[str]]:
        return {name: getattr(self.translation, name) for name in SEO_FIELDS}

    def is_live(self, now: Optional[datetime] = None) -> bool:
        return is_live(self.record, now)

    def teaser(self, length: int = 200) -> str:
        if self.custom_teaser:
            return self.custom_teaser
        body = " ".join((self.body or "").split())
        if len(body) <= length:
            return body
        return body[:length].rsplit(" ", 1)[0] + "..."

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "locale": self.locale,
            "title": self.title,
            "slug": self.slug,
            "body": self.body,
            "custom_url": self.custom_url,
            "custom_teaser": self.custom_teaser,
            "draft": self.draft,
            "published_at": self.published_at,
            "access_count": self.access_count,
            "author_username": self.author_username,
            "source_url": self.source_url,
            **self.seo,
        }

    def __repr__(self) -> str:
        return f"<PostEntry id={self.id} locale={self.locale} slug={self.slug!r}>"


class CategoryEntry:
    def __init__(
        self,
        category: Category,
        translation: CategoryTranslation,
        post_count: Optional[int] = None,
    ):
        self.record = category
        self.translation = translation
        self.post_count = post_count

    id = _base_alias("id", writable=False)
    title = _translation_alias("title")
    slug = _translation_alias("slug")

    @property
    def locale(self) -> str:
        return self.translation.locale

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "locale": self.locale,
            "title": self.title,
            "slug": self.slug,
            "post_count": self.post_count,
        }

    def __repr__(self) -> str:
        return f"<CategoryEntry id={self.id} locale={self.locale} slug={self.slug!r}>"
