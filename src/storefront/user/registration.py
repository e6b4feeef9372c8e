"""Explicit signup: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    """Create a user account without going through an identity provider."""

    email = String(required=True, max_length=254)
    first_name = String(max_length=100)
    last_name = String(max_length=100)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["A user with this email is already registered"]})

        user = User.register(
            email=command.email,
            first_name=command.first_name,
            last_name=command.last_name,
        )
        repo.add(user)
        logger.info("User registered", user_id=str(user.id))
        return str(user.id)
