"""Repository layer for database operations."""

from app.repositories.base import OwnedRepository
from app.repositories.post import PostRepository
from app.repositories.taxonomy import TagRepository, TaxonomyRepository, TopicRepository
from app.repositories.user import UserRepository

__all__ = [
    "OwnedRepository",
    "PostRepository",
    "TagRepository",
    "TaxonomyRepository",
    "TopicRepository",
    "UserRepository",
]
