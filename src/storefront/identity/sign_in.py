"""Google sign-in: maps an external identity to a local user and issues credentials.

The flow has three steps:

1. Exchange the access token with the identity provider for a profile.
2. Resolve the user by normalized email, creating it on first sign-in
   (``LinkExternalIdentity``, serialized per email address).
3. Issue a fresh access/refresh pair bound to the user id.

The outcome is always a ``SignInResult``: either credentials or a typed
failure, never both.
"""

from dataclasses import dataclass
from enum import Enum

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity import get_provider
from storefront.identity.port import ProviderRejected, ProviderTimeout
from storefront.identity.tokens import REFRESH, decode_token, issue_token_pair
from storefront.serialization import process_serialized
from storefront.user.email import is_valid_email, normalize_email
from storefront.user.queries import load_user
from storefront.user.user import User

logger = structlog.get_logger(__name__)

SIGNED_UP = "Signed up"
SIGNED_IN = "Signed in"
REFRESHED = "Refreshed"


class SignInFailure(Enum):
    PROVIDER_TIMEOUT = "provider_timeout"  # Retryable; ask the user to try again
    PROVIDER_REJECTED = "provider_rejected"


@dataclass(frozen=True)
class Credentials:
    user_id: str
    access_token: str
    refresh_token: str
    message: str


@dataclass(frozen=True)
class SignInResult:
    """Result of a sign-in attempt."""

    success: bool
    credentials: Credentials | None = None
    failure: SignInFailure | None = None
    failure_reason: str | None = None

    @classmethod
    def succeeded(cls, credentials: Credentials) -> "SignInResult":
        return cls(success=True, credentials=credentials)

    @classmethod
    def failed(cls, failure: SignInFailure, reason: str) -> "SignInResult":
        return cls(success=False, failure=failure, failure_reason=reason)


@storefront.command(part_of="User")
class LinkExternalIdentity:
    """Find the user owning a verified email, or create one from the profile."""

    email = String(required=True, max_length=254)
    first_name = String(max_length=100)
    last_name = String(max_length=100)


@storefront.command_handler(part_of=User)
class LinkExternalIdentityHandler:
    @handle(LinkExternalIdentity)
    def link_external_identity(self, command):
        """Returns ``(user_id, created)``. Existing users are left untouched."""
        repo = current_domain.repository_for(User)
        user = repo.find_by_email(command.email)
        if user is not None:
            return str(user.id), False

        user = User.register(
            email=command.email,
            first_name=command.first_name,
            last_name=command.last_name,
        )
        repo.add(user)
        logger.info("User registered through external identity", user_id=str(user.id))
        return str(user.id), True


def sign_up_google(access_token: str) -> SignInResult:
    provider = get_provider()
    try:
        profile = provider.fetch_profile(access_token)
    except ProviderTimeout as exc:
        logger.warning("Identity provider timed out", provider=provider.name, error=str(exc))
        return SignInResult.failed(SignInFailure.PROVIDER_TIMEOUT, str(exc))
    except ProviderRejected as exc:
        logger.info("Identity provider rejected sign-in", provider=provider.name, error=str(exc))
        return SignInResult.failed(SignInFailure.PROVIDER_REJECTED, str(exc))

    email = normalize_email(profile.email)
    if not is_valid_email(email):
        return SignInResult.failed(SignInFailure.PROVIDER_REJECTED, f"Provider returned an invalid email: {email!r}")

    user_id, created = process_serialized(
        f"email:{email}",
        LinkExternalIdentity(
            email=email,
            first_name=profile.given_name,
            last_name=profile.family_name,
        ),
    )

    tokens = issue_token_pair(user_id)
    logger.info("User signed in", user_id=user_id, provider=provider.name, created=created)
    return SignInResult.succeeded(
        Credentials(
            user_id=user_id,
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            message=SIGNED_UP if created else SIGNED_IN,
        )
    )


def refresh_credentials(refresh_token: str) -> Credentials:
    """Trade a valid refresh credential for a fresh pair.

    Raises ``ValidationError`` for a forged, expired or access-type token and
    ``ObjectNotFoundError`` when the user no longer exists.
    """
    claims = decode_token(refresh_token, REFRESH)
    user = load_user(claims["sub"])

    tokens = issue_token_pair(user.id)
    logger.info("Credentials refreshed", user_id=str(user.id))
    return Credentials(
        user_id=str(user.id),
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        message=REFRESHED,
    )
