"""Blog app."""

from blogcore.apps.blog.services import CategoryService, PostService

__all__ = ["CategoryService", "PostService"]
