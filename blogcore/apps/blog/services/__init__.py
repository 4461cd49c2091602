from blogcore.apps.blog.services.category_service import CategoryService
from blogcore.apps.blog.services.post_service import PostService

__all__ = ["CategoryService", "PostService"]
