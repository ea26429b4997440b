"""User registration — command, handler and the service that hashes the password first."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.credentials import hash_password
from storefront.user.tokens import issue_token
from storefront.user.user import User, UserRole


@storefront.command(part_of="User")
class RegisterUser:
    """Create an account. Carries the bcrypt hash, never the password."""

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    role: String(choices=UserRole, default=UserRole.CUSTOMER.value)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["A user with this email already exists"]})

        user = User.register(
            name=command.name,
            email=command.email,
            password_hash=command.password_hash,
            role=command.role,
        )
        repo.add(user)
        return str(user.id)


def register_user(name, email, password, role=UserRole.CUSTOMER.value):
    """Register a user and return ``(user_id, access_token)``."""
    if not password:
        raise ValidationError({"password": ["Password is required"]})

    user_id = current_domain.process(
        RegisterUser(
            name=name,
            email=email.strip().lower(),
            password_hash=hash_password(password),
            role=role,
        ),
        asynchronous=False,
    )
    return user_id, issue_token(user_id, email.strip().lower())
