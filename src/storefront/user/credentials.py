"""Password hashing and reset tokens."""

import hashlib
import secrets
from datetime import UTC, datetime, timedelta

import bcrypt

RESET_TOKEN_TTL = timedelta(minutes=10)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def new_reset_token() -> tuple[str, str, datetime]:
    """Return ``(raw_token, token_hash, expires_at)`` for a fresh reset request."""
    token = secrets.token_hex(20)
    return token, hash_reset_token(token), datetime.now(UTC) + RESET_TOKEN_TTL
