# app/routes/taxonomy.py

"""Tag and topic listings for the editor's pickers."""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response

from app.dependencies import PostServiceDep, UserDBDep
from app.managers import limiter
from app.managers.rate_limiter import READ_LIMIT
from app.schemas.post import TaxonomyItem

router = APIRouter(tags=["🏷️ Taxonomy"])

TAXONOMY_RESPONSES = {
    429: {
        "description": "Rate limit exceeded",
        "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
    },
}


@router.get(
    "/tags",
    response_class=ORJSONResponse,
    response_model=list[TaxonomyItem],
    summary="List tags",
    description="List the user's tags ordered by name.",
    responses={
        200: {"content": {"application/json": {"example": [{"name": "Go", "slug": "go"}]}}},
        **TAXONOMY_RESPONSES,
    },
    operation_id="tags_list",
)
@limiter.limit(READ_LIMIT)
async def list_tags(
    request: Request,
    response: Response,
    current_user: UserDBDep,
    service: PostServiceDep,
) -> list[TaxonomyItem]:
    return await service.tag_items(current_user.uuid)


@router.get(
    "/topics",
    response_class=ORJSONResponse,
    response_model=list[TaxonomyItem],
    summary="List topics",
    description="List the user's topics ordered by name.",
    responses={
        200: {
            "content": {
                "application/json": {"example": [{"name": "Backend", "slug": "backend"}]},
            },
        },
        **TAXONOMY_RESPONSES,
    },
    operation_id="topics_list",
)
@limiter.limit(READ_LIMIT)
async def list_topics(
    request: Request,
    response: Response,
    current_user: UserDBDep,
    service: PostServiceDep,
) -> list[TaxonomyItem]:
    return await service.topic_items(current_user.uuid)
