from blogcore.apps.blog.schemas.category import (
    CategoryCreate,
    CategoryTranslationIn,
    CategoryUpdate,
)
from blogcore.apps.blog.schemas.post import (
    CommentCreate,
    PostCreate,
    PostTranslationIn,
    PostUpdate,
)

__all__ = [
    "CategoryCreate",
    "CategoryTranslationIn",
    "CategoryUpdate",
    "CommentCreate",
    "PostCreate",
    "PostTranslationIn",
    "PostUpdate",
]
