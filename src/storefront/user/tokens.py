"""Bearer tokens — HS256 JWTs carrying the user id (``sub``) and email."""

import os
from datetime import UTC, datetime, timedelta

import jwt
from protean.exceptions import ConfigurationError

from storefront.exceptions import AuthenticationError
from storefront.utils.logging import current_env

ALGORITHM = "HS256"
_DEV_SECRET = "storefront-dev-secret-change-me"


def _secret_key() -> str:
    secret = os.getenv("JWT_SECRET_KEY")
    if secret:
        return secret
    if current_env() == "production":
        raise ConfigurationError("JWT_SECRET_KEY must be set in production")
    return _DEV_SECRET


def _expires_in() -> timedelta:
    return timedelta(minutes=int(os.getenv("JWT_EXPIRES_MINUTES", "60")))


def issue_token(user_id, email: str) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + _expires_in(),
    }
    return jwt.encode(payload, _secret_key(), algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    """Verify ``token`` and return its claims.

    Raises:
        AuthenticationError: if the token is malformed, tampered with or expired.
    """
    try:
        claims = jwt.decode(token, _secret_key(), algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError("Invalid token") from exc

    if not claims.get("sub"):
        raise AuthenticationError("Invalid token")
    return claims
