from app.routes.posts import router as posts_router
from app.routes.taxonomy import router as taxonomy_router

__all__ = [
    "posts_router",
    "taxonomy_router",
]
