"""Blog models.

Every table is imported here so relationship targets resolve no matter
which model a caller imports first.
"""

from blogcore.apps.blog.models.post import (
    POST_TRANSLATED_FIELDS,
    SEO_FIELDS,
    Post,
    PostTitle,
    PostTranslation,
)
from blogcore.apps.blog.models.category import (
    CATEGORY_TRANSLATED_FIELDS,
    Category,
    CategoryTitle,
    CategoryTranslation,
)
from blogcore.apps.blog.models.categorization import Categorization
from blogcore.apps.blog.models.comment import Comment
from blogcore.apps.blog.models.tag import PostTag

__all__ = [
    "CATEGORY_TRANSLATED_FIELDS",
    "POST_TRANSLATED_FIELDS",
    "SEO_FIELDS",
    "Categorization",
    "Category",
    "CategoryTitle",
    "CategoryTranslation",
    "Comment",
    "Post",
    "PostTag",
    "PostTitle",
    "PostTranslation",
]
