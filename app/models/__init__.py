"""Database models for the application."""

from app.models.post import PostDB, PostTagLink, PostTopicLink, PostViewDB
from app.models.taxonomy import TagDB, TopicDB
from app.models.user import UserDB

__all__ = [
    "PostDB",
    "PostTagLink",
    "PostTopicLink",
    "PostViewDB",
    "TagDB",
    "TopicDB",
    "UserDB",
]
