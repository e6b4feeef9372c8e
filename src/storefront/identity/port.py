"""Identity provider port (abstract interface).

Defines the contract every OAuth identity provider adapter implements: turn
an access token into a verified profile. Exactly two failure modes exist, a
timeout and everything else.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderProfile:
    """The verified identity returned by a provider."""

    email: str
    given_name: str | None = None
    family_name: str | None = None
    subject: str | None = None


class ProviderTimeout(Exception):
    """The provider did not answer within the configured timeout."""


class ProviderRejected(Exception):
    """The provider refused the token or returned an unusable profile."""


class IdentityProvider(ABC):
    """Abstract identity provider interface."""

    name: str = "abstract"

    @abstractmethod
    def fetch_profile(self, access_token: str) -> ProviderProfile:
        """Exchange an access token for the profile it was issued to.

        Raises ProviderTimeout or ProviderRejected.
        """
        ...
