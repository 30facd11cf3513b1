# app/routes/posts.py

"""
Post Routes.

Endpoints behind the admin panel's post editor. Every route acts on the
authenticated user's own posts only.

Summary
-------
Endpoints include:
  - List drafts or published posts, with per-state counts
  - Load a post for editing, or bootstrap a new one via the `create` id
  - Save (create or update) a post with its tags and topic
  - Delete a post

Dependencies
------------
  - `UserDBDep`: The authenticated user.
  - `PostServiceDep`: Post service bound to the request transaction.

Rate Limiting
-------------
All endpoints define explicit limits and include `429` response examples. Tiered
limits apply when `X-API-Key` is present.
"""

from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Body, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_204_NO_CONTENT

from app.configs import file_logger
from app.dependencies import PostQueryListDep, PostServiceDep, UserDBDep
from app.managers import limiter
from app.managers.rate_limiter import DELETE_LIMIT, READ_LIMIT, WRITE_LIMIT
from app.schemas.post import PostIndexResponse, PostResponse, PostSave, PostShowResponse

router = APIRouter(prefix="/posts", tags=["📝 Posts"])

logger = file_logger(getLogger(__name__))

POST_EXAMPLE = {
    "id": "9b2e6f3c-2d7e-4c1a-9a53-0f0a1f2b3c4d",
    "user_id": "123e4567-e89b-12d3-a456-426614174000",
    "slug": "hello-world",
    "title": "Hello World",
    "summary": "A first post",
    "body": "<p>Hello</p>",
    "published_at": "2025-01-01T09:00:00+00:00",
    "featured_image": None,
    "featured_image_caption": None,
    "meta": {"description": None, "title": None, "canonical_link": None},
    "created_at": "2025-01-01T08:00:00+00:00",
    "updated_at": "2025-01-01T09:00:00+00:00",
    "tags": [{"name": "Go", "slug": "go"}],
    "topic": {"name": "Backend", "slug": "backend"},
}

RATE_LIMITED = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}

NOT_FOUND = {
    "description": "Not found",
    "content": {"application/json": {"example": {"detail": "Post <id> not found"}}},
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=PostIndexResponse,
    summary="List posts",
    description="List the user's drafts or published posts, newest first.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "posts": {
                            "data": [{**POST_EXAMPLE, "views_count": 3}],
                            "total": 1,
                            "page": 1,
                            "perPage": 15,
                            "lastPage": 1,
                        },
                        "draftCount": 0,
                        "publishedCount": 1,
                    },
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="posts_list",
)
@limiter.limit(READ_LIMIT)
async def list_posts(
    request: Request,
    response: Response,
    query: PostQueryListDep,
    current_user: UserDBDep,
    service: PostServiceDep,
) -> PostIndexResponse:
    """
    List one page of the user's posts of the requested type.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    query : PostListQuery
        `postType`, `page` and `perPage` query parameters.
    current_user : UserDB
        Authenticated user.
    service : PostService
        Post service dependency.

    Returns
    -------
    PostIndexResponse
        The page plus `draftCount` and `publishedCount`.
    """
    return await service.index(
        current_user.uuid,
        post_type=query.post_type,
        page=query.page,
        per_page=query.per_page,
    )


@router.get(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostShowResponse,
    summary="Get a post for editing",
    description=(
        "Return the post with its tags and topic plus the user's tags and topics. "
        "The id `create` returns a fresh, unsaved post."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "post": POST_EXAMPLE,
                        "tags": [{"name": "Go", "slug": "go"}],
                        "topics": [{"name": "Backend", "slug": "backend"}],
                    },
                },
            },
        },
        301: {"description": "Post does not exist or belongs to someone else"},
        429: RATE_LIMITED,
    },
    operation_id="posts_show",
)
@limiter.limit(READ_LIMIT)
async def show_post(
    request: Request,
    response: Response,
    post_id: str,
    current_user: UserDBDep,
    service: PostServiceDep,
) -> PostShowResponse:
    """
    Load a post for the editor.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    post_id : str
        Post UUID or `create`.
    current_user : UserDB
        Authenticated user.
    service : PostService
        Post service dependency.

    Returns
    -------
    PostShowResponse
        Post, tags and topics.

    Raises
    ------
    PostMovedError
        If the id does not resolve to one of the user's posts.
    """
    return await service.show(current_user.uuid, post_id)


@router.post(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Save a post",
    description="Create (id `create`) or update a post, then sync its topic and tags.",
    responses={
        200: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        404: NOT_FOUND,
        422: {
            "description": "Validation failed",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Validation failed",
                        "errors": [
                            {
                                "field": "slug",
                                "message": "This has already been taken.",
                                "type": "unique",
                            },
                        ],
                    },
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="posts_save",
)
@router.put(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Update a post",
    description="Same as `POST /posts/{post_id}`.",
    responses={404: NOT_FOUND, 429: RATE_LIMITED},
    operation_id="posts_update",
)
@limiter.limit(WRITE_LIMIT)
async def save_post(
    request: Request,
    response: Response,
    post_id: str,
    payload: Annotated[
        PostSave,
        Body(
            examples={
                "basic": {
                    "summary": "Publish a post with a tag and a topic",
                    "value": {
                        "slug": "hello-world",
                        "title": "Hello World",
                        "body": "<p>Hello</p>",
                        "published_at": "2025-01-01T09:00:00Z",
                        "tags": [{"name": "Go", "slug": "go"}],
                        "topic": {"name": "Backend", "slug": "backend"},
                    },
                },
            },
        ),
    ],
    current_user: UserDBDep,
    service: PostServiceDep,
) -> PostResponse:
    """
    Create or update a post.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    post_id : str
        Post UUID or `create`.
    payload : PostSave
        Post fields, tags and topic.
    current_user : UserDB
        Authenticated user.
    service : PostService
        Post service dependency.

    Returns
    -------
    PostResponse
        The saved post with its tags and topic.

    Raises
    ------
    ValidationError
        If the slug is missing, malformed or already used by another post.
    PostNotFoundError
        If the id is neither `create` nor one of the user's posts.
    """
    return await service.save(current_user.uuid, post_id, payload)


@router.delete(
    "/{post_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete a post",
    description="Delete one of the user's posts with its tag, topic and view rows.",
    responses={
        204: {"description": "No Content"},
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="posts_delete",
)
@limiter.limit(DELETE_LIMIT)
async def delete_post(
    request: Request,
    response: Response,
    post_id: str,
    current_user: UserDBDep,
    service: PostServiceDep,
) -> Response:
    """
    Delete post by ID.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    post_id : str
        Post identifier.
    current_user : UserDB
        Authenticated user.
    service : PostService
        Post service dependency.

    Raises
    ------
    PostNotFoundError
        If the post is not one of the user's posts.
    """
    await service.destroy(current_user.uuid, post_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
