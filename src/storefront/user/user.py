"""User aggregate — an account on the storefront with its credentials and role.

Passwords never reach the aggregate in clear text: callers hash them first
(see ``storefront.user.credentials``). A pending password reset is kept as the
SHA-256 digest of the emailed token plus its expiry.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, String

from storefront.domain import storefront


class UserRole(Enum):
    ADMIN = "admin"
    VENDOR = "vendor"
    CUSTOMER = "customer"


@storefront.aggregate
class User:
    """A person who can sign in to the storefront."""

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    role: String(choices=UserRole, default=UserRole.CUSTOMER.value)
    reset_token_hash: String(max_length=64)
    reset_token_expires_at: DateTime()
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def register(cls, name, email, password_hash, role=UserRole.CUSTOMER.value):
        from storefront.user.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=email.strip().lower(),
            password_hash=password_hash,
            role=role,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                name=user.name,
                email=user.email,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN.value

    def change_password(self, password_hash):
        from storefront.user.events import PasswordChanged

        self.password_hash = password_hash
        self.updated_at = datetime.now(UTC)
        self.raise_(PasswordChanged(user_id=str(self.id), changed_at=self.updated_at))

    def start_password_reset(self, token_hash, expires_at):
        from storefront.user.events import PasswordResetRequested

        self.reset_token_hash = token_hash
        self.reset_token_expires_at = expires_at
        self.updated_at = datetime.now(UTC)
        self.raise_(
            PasswordResetRequested(
                user_id=str(self.id),
                email=self.email,
                expires_at=expires_at,
            )
        )

    def reset_token_is_valid(self, token_hash, now=None):
        if not self.reset_token_hash or self.reset_token_hash != token_hash:
            return False
        if self.reset_token_expires_at is None:
            return False

        expires_at = self.reset_token_expires_at
        # SQL providers may hand back naive timestamps
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return expires_at > (now or datetime.now(UTC))

    def complete_password_reset(self, password_hash):
        self.reset_token_hash = None
        self.reset_token_expires_at = None
        self.change_password(password_hash)


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=email.strip().lower()).all().first

    def find_by_reset_token(self, token_hash: str) -> User | None:
        return self._dao.query.filter(reset_token_hash=token_hash).all().first
