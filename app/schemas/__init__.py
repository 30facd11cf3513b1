from app.schemas.auth import TokenData
from app.schemas.health import HealthCheckResponse
from app.schemas.post import (
    PostIndexResponse,
    PostListItem,
    PostMeta,
    PostPage,
    PostResponse,
    PostSave,
    PostShowResponse,
    TaxonomyInput,
    TaxonomyItem,
)

__all__ = [
    "HealthCheckResponse",
    "PostIndexResponse",
    "PostListItem",
    "PostMeta",
    "PostPage",
    "PostResponse",
    "PostSave",
    "PostShowResponse",
    "TaxonomyInput",
    "TaxonomyItem",
    "TokenData",
]
