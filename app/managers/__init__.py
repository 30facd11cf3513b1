from app.managers.rate_limiter import close_limiter, limiter, rate_limit_exceeded_handler
from app.managers.token_manager import create_access_token, decode_access_token

__all__ = [
    "close_limiter",
    "create_access_token",
    "decode_access_token",
    "limiter",
    "rate_limit_exceeded_handler",
]
