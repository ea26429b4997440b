"""Bearer-token dependencies for the routers."""

from fastapi import Depends, Header, HTTPException

from storefront.exceptions import AuthenticationError
from storefront.user.authentication import user_for_token
from storefront.utils.logging import add_context

_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def bearer_token(authorization: str | None = Header(None)) -> str:
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing bearer token", headers=_CHALLENGE)
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="Malformed authorization header", headers=_CHALLENGE)
    return token.strip()


def current_user(token: str = Depends(bearer_token)):
    try:
        user = user_for_token(token)
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=str(exc), headers=_CHALLENGE) from exc
    add_context(user_id=str(user.id))
    return user


def require_admin(user=Depends(current_user)):
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def require_self_or_admin(user_id: str, user=Depends(current_user)):
    """Gate routes under ``/{user_id}`` to that user or an admin."""
    if str(user.id) != str(user_id) and not user.is_admin:
        raise HTTPException(status_code=403, detail="Not allowed to access another user's resources")
    return user
