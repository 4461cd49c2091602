from blogcore.apps.blog.repositories.category_repository import CategoryRepository
from blogcore.apps.blog.repositories.comment_repository import CommentRepository
from blogcore.apps.blog.repositories.post_repository import PostRepository
from blogcore.apps.blog.repositories.taxonomy_repository import TaxonomyRepository

__all__ = [
    "CategoryRepository",
    "CommentRepository",
    "PostRepository",
    "TaxonomyRepository",
]
