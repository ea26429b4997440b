"""Login, token refresh and bearer-token resolution."""

from protean.utils.globals import current_domain

from storefront.exceptions import AuthenticationError
from storefront.user.credentials import verify_password
from storefront.user.tokens import decode_token, issue_token
from storefront.user.user import User


def login(email, password):
    """Return ``(token, user)`` for valid credentials.

    Unknown email and wrong password produce the same error.
    """
    user = current_domain.repository_for(User).find_by_email(email or "")
    if user is None or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid email or password")
    return issue_token(user.id, user.email), user


def user_for_token(token):
    claims = decode_token(token)
    user = current_domain.repository_for(User)._dao.query.filter(id=claims["sub"]).all().first
    if user is None:
        raise AuthenticationError("User no longer exists")
    return user


def refresh_token(token):
    user = user_for_token(token)
    return issue_token(user.id, user.email)


def list_users():
    return current_domain.repository_for(User)._dao.query.order_by("-created_at").all().items
