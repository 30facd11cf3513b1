# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    PostListQuery,
    PostQueryListDep,
    PostServiceDep,
    UserDBDep,
    get_current_user,
    get_post_list_query,
    get_post_service,
)

__all__ = [
    "PostListQuery",
    "PostQueryListDep",
    "PostServiceDep",
    "UserDBDep",
    "get_current_user",
    "get_post_list_query",
    "get_post_service",
]
