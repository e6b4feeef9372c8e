"""Configurable fake identity provider for development and testing.

Maps access tokens to profiles without any network traffic, and can be told
to time out or reject every request.
"""

from storefront.identity.port import IdentityProvider, ProviderProfile, ProviderRejected, ProviderTimeout

FAILURE_MODES = (None, "timeout", "rejected")


class FakeIdentityProvider(IdentityProvider):
    """Configurable fake identity provider."""

    name = "fake"

    def __init__(self) -> None:
        self.profiles: dict[str, ProviderProfile] = {}
        self.failure_mode: str | None = None
        self.calls: list[str] = []

    def register_token(self, access_token: str, email: str, given_name=None, family_name=None) -> None:
        self.profiles[access_token] = ProviderProfile(
            email=email,
            given_name=given_name,
            family_name=family_name,
            subject=f"fake-{len(self.profiles) + 1}",
        )

    def configure(self, failure_mode: str | None) -> None:
        if failure_mode not in FAILURE_MODES:
            raise ValueError(f"Unknown failure mode: {failure_mode!r}")
        self.failure_mode = failure_mode

    def fetch_profile(self, access_token: str) -> ProviderProfile:
        self.calls.append(access_token)

        if self.failure_mode == "timeout":
            raise ProviderTimeout("Fake provider timed out")
        if self.failure_mode == "rejected":
            raise ProviderRejected("Fake provider rejected the token")

        profile = self.profiles.get(access_token)
        if profile is None:
            raise ProviderRejected("Unknown access token")
        return profile
