"""Identity provider factory.

Provides get_provider() / set_provider() to swap implementations:
- GoogleIdentityProvider for production
- FakeIdentityProvider for development and testing
"""

from storefront.config import setting
from storefront.identity.fake_adapter import FakeIdentityProvider
from storefront.identity.google_adapter import GoogleIdentityProvider
from storefront.identity.port import IdentityProvider

_current_provider: IdentityProvider | None = None


def build_provider(kind: str) -> IdentityProvider:
    if kind == "google":
        return GoogleIdentityProvider(
            userinfo_url=setting("GOOGLE_USERINFO_URL"),
            timeout=setting("IDENTITY_PROVIDER_TIMEOUT"),
        )
    if kind == "fake":
        return FakeIdentityProvider()
    raise ValueError(f"Unknown identity provider: {kind}")


def get_provider() -> IdentityProvider:
    """Return the current identity provider, built from IDENTITY_PROVIDER on first use."""
    global _current_provider
    if _current_provider is None:
        _current_provider = build_provider(setting("IDENTITY_PROVIDER"))
    return _current_provider


def set_provider(provider: IdentityProvider) -> None:
    """Override the active identity provider (useful for tests)."""
    global _current_provider
    _current_provider = provider


def reset_provider() -> None:
    """Forget the active provider; the next get_provider() rebuilds it."""
    global _current_provider
    _current_provider = None
