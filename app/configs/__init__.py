from app.configs.settings import (
    DEFAULT_POST_TITLE,
    NEW_POST_SENTINEL,
    LimiterConfig,
    pool_kwargs,
    settings,
)
from app.configs.logger import file_logger

__all__ = [
    "DEFAULT_POST_TITLE",
    "NEW_POST_SENTINEL",
    "LimiterConfig",
    "file_logger",
    "pool_kwargs",
    "settings",
]
