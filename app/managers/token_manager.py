"""
Bearer tokens for the admin panel.

Tokens are HS256 JWTs issued by the identity provider with our issuer and
audience. `create_access_token` exists for local provisioning and tests.
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID, uuid4

from jose import JWTError, jwt

from app.configs import settings
from app.schemas.auth import TokenData

ACCESS_TOKEN_TYPE = "access"


def create_access_token(
    user_id: UUID,
    username: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Sign an access token for an author.

    Args:
        user_id: Author's UUID, carried in the `user_id` claim
        username: Author's username, carried in `sub`
        expires_delta: Lifetime; defaults to `ACCESS_TOKEN_EXPIRE_MINUTES`

    Returns:
        str: Encoded JWT
    """
    issued = datetime.now(UTC)
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": username,
        "user_id": str(user_id),
        "jti": uuid4().hex,
        "type": ACCESS_TOKEN_TYPE,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": issued,
        "exp": issued + lifetime,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _claims(token: str, *, strict: bool = True) -> dict[str, Any] | None:
    # Non-strict skips issuer and audience but still checks signature and expiry
    options = {} if strict else {"verify_aud": False, "verify_iss": False}
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE if strict else None,
            issuer=settings.JWT_ISSUER if strict else None,
            options=options,
        )
    except JWTError:
        return None


def decode_access_token(token: str) -> TokenData | None:
    """
    Validate an access token and extract the author it names.

    Returns None for bad signatures, expired tokens, foreign issuers or
    audiences, non-access tokens and malformed user ids.
    """
    claims = _claims(token)
    if claims is None or claims.get("type") != ACCESS_TOKEN_TYPE:
        return None

    username, user_id, jti = claims.get("sub"), claims.get("user_id"), claims.get("jti")
    if not (username and user_id and jti):
        return None

    try:
        return TokenData(
            username=username,
            user_id=UUID(user_id),
            jti=jti,
            token_type=ACCESS_TOKEN_TYPE,
        )
    except ValueError:
        return None


def get_token_expiry(token: str) -> datetime | None:
    """Return when a token expires, or None if it is invalid."""
    claims = _claims(token, strict=False)
    if claims is None or "exp" not in claims:
        return None
    return datetime.fromtimestamp(claims["exp"], tz=UTC)
