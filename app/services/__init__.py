from app.services.associations import PostAssociationReconciler
from app.services.posts import PostService

__all__ = ["PostAssociationReconciler", "PostService"]
