"""Google identity provider adapter.

Calls the OpenID Connect userinfo endpoint with the caller's access token.
"""

import requests

from storefront.identity.port import IdentityProvider, ProviderProfile, ProviderRejected, ProviderTimeout


class GoogleIdentityProvider(IdentityProvider):
    name = "google"

    def __init__(self, userinfo_url: str, timeout: float, session: requests.Session | None = None) -> None:
        self.userinfo_url = userinfo_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_profile(self, access_token: str) -> ProviderProfile:
        if not access_token:
            raise ProviderRejected("Missing access token")

        try:
            response = self.session.get(
                self.userinfo_url,
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            raise ProviderTimeout(f"Google did not respond within {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise ProviderRejected(f"Google userinfo request failed: {exc}") from exc

        if response.status_code != 200:
            raise ProviderRejected(f"Google rejected the access token (HTTP {response.status_code})")

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderRejected("Google returned a malformed profile") from exc

        if not payload.get("email"):
            raise ProviderRejected("Google profile has no email address")

        # Google sends a boolean; some proxies stringify it
        if str(payload.get("email_verified", False)).lower() != "true":
            raise ProviderRejected("Google email address is not verified")

        return ProviderProfile(
            email=payload["email"],
            given_name=payload.get("given_name"),
            family_name=payload.get("family_name"),
            subject=payload.get("sub"),
        )
