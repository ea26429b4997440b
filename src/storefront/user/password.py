"""Password change and reset — commands, handler and services."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.credentials import hash_password, hash_reset_token, new_reset_token, verify_password
from storefront.user.user import User


@storefront.command(part_of="User")
class ChangePassword:
    user_id: Identifier(required=True)
    password_hash: String(required=True, max_length=255)


@storefront.command(part_of="User")
class RequestPasswordReset:
    user_id: Identifier(required=True)
    token_hash: String(required=True, max_length=64)
    expires_at: DateTime(required=True)


@storefront.command(part_of="User")
class ResetPassword:
    token_hash: String(required=True, max_length=64)
    password_hash: String(required=True, max_length=255)


@storefront.command_handler(part_of=User)
class PasswordHandler:
    @handle(ChangePassword)
    def change_password(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.change_password(command.password_hash)
        repo.add(user)

    @handle(RequestPasswordReset)
    def request_password_reset(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.start_password_reset(command.token_hash, command.expires_at)
        repo.add(user)

    @handle(ResetPassword)
    def reset_password(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_reset_token(command.token_hash)
        if user is None or not user.reset_token_is_valid(command.token_hash):
            raise ValidationError({"token": ["Password reset token is invalid or has expired"]})

        user.complete_password_reset(command.password_hash)
        repo.add(user)


def _check_new_password(password):
    if not password:
        raise ValidationError({"password": ["Password is required"]})


def change_password(user_id, old_password, new_password):
    user = current_domain.repository_for(User).get(user_id)
    if not verify_password(old_password, user.password_hash):
        raise ValidationError({"old_password": ["Current password is incorrect"]})
    _check_new_password(new_password)

    current_domain.process(
        ChangePassword(user_id=user_id, password_hash=hash_password(new_password)),
        asynchronous=False,
    )


def request_password_reset(email):
    """Issue a reset token for ``email`` and return the raw token.

    Only the SHA-256 digest is stored; the token expires after ten minutes.
    """
    user = current_domain.repository_for(User).find_by_email(email or "")
    if user is None:
        raise ObjectNotFoundError({"email": ["No user is registered with this email"]})

    token, token_hash, expires_at = new_reset_token()
    current_domain.process(
        RequestPasswordReset(user_id=str(user.id), token_hash=token_hash, expires_at=expires_at),
        asynchronous=False,
    )
    return token


def reset_password(token, new_password):
    _check_new_password(new_password)
    current_domain.process(
        ResetPassword(token_hash=hash_reset_token(token), password_hash=hash_password(new_password)),
        asynchronous=False,
    )
