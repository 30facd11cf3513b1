# app/dependencies/dependencies.py

"""Application dependencies: authentication, repositories and services."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_401_UNAUTHORIZED

from app.configs import settings
from app.configs.settings import MAX_PER_PAGE
from app.db import get_session
from app.managers.token_manager import decode_access_token
from app.models import UserDB
from app.repositories import PostRepository, TagRepository, TopicRepository, UserRepository
from app.repositories.post import PostType
from app.services import PostService

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UserDB:
    """
    Get current authenticated user using user_id from token claims.

    Parameters
    ----------
    credentials : HTTPAuthorizationCredentials | None
        Bearer credentials, None when the header is missing.
    session : AsyncSession
        Database session.

    Returns
    -------
    UserDB
        Current authenticated user.

    Raises
    ------
    HTTPException
        401 when the token is missing, invalid or names an unknown user;
        400 when the user is inactive.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    token_data = decode_access_token(credentials.credentials)
    if not token_data:
        raise _unauthorized("Could not validate credentials")

    user = await UserRepository(session).get_by_id(token_data.user_id)
    if not user:
        raise _unauthorized("User not found")

    if not user.is_active:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Inactive user")

    return user


UserDBDep = Annotated[UserDB, Depends(get_current_user)]


def get_post_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PostService:
    """
    Resolve the `PostService` dependency.

    All repositories share the request session, so a save and its tag and
    topic syncs commit together.
    """
    return PostService(
        PostRepository(session),
        TagRepository(session),
        TopicRepository(session),
    )


PostServiceDep = Annotated[PostService, Depends(get_post_service)]


@dataclass(frozen=True)
class PostListQuery:
    """
    Query container for the posts listing.

    Parameters
    ----------
    post_type : PostType
        "draft" or "published".
    page : int
        1-based page number.
    per_page : int
        Page size.
    """

    post_type: PostType = "published"
    page: int = 1
    per_page: int = 15


def get_post_list_query(
    post_type: Annotated[
        str | None,
        Query(alias="postType", description="'draft'; any other value lists published posts"),
    ] = None,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    per_page: Annotated[
        int | None,
        Query(alias="perPage", ge=1, le=MAX_PER_PAGE, description="Posts per page"),
    ] = None,
) -> PostListQuery:
    """
    Dependency to construct `PostListQuery` from query parameters.

    Returns
    -------
    PostListQuery
        Aggregated query parameters object.
    """
    return PostListQuery(
        post_type="draft" if post_type == "draft" else "published",
        page=page,
        per_page=per_page or settings.POSTS_PER_PAGE,
    )


PostQueryListDep = Annotated[PostListQuery, Depends(get_post_list_query)]
