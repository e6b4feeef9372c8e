"""Access and refresh credentials.

Both are signed JWTs bound to a user id. Each carries a random token id, so
two credentials issued in the same second for the same user still differ.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from jose import JWTError, jwt
from protean.exceptions import ValidationError

from storefront.config import setting

ACCESS = "access"
REFRESH = "refresh"


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


def _encode(user_id: str, token_type: str, lifetime: timedelta) -> str:
    now = datetime.now(UTC)
    claims = {
        "sub": str(user_id),
        "type": token_type,
        "jti": uuid4().hex,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(claims, setting("TOKEN_SECRET"), algorithm=setting("TOKEN_ALGORITHM"))


def issue_token_pair(user_id) -> TokenPair:
    return TokenPair(
        access_token=_encode(user_id, ACCESS, timedelta(minutes=setting("ACCESS_TOKEN_TTL_MINUTES"))),
        refresh_token=_encode(user_id, REFRESH, timedelta(days=setting("REFRESH_TOKEN_TTL_DAYS"))),
    )


def decode_token(token: str, expected_type: str = ACCESS) -> dict:
    """Verify signature, expiry and type. Returns the claims."""
    try:
        claims = jwt.decode(token, setting("TOKEN_SECRET"), algorithms=[setting("TOKEN_ALGORITHM")])
    except JWTError as exc:
        raise ValidationError({"token": [f"Invalid or expired token: {exc}"]}) from exc

    if claims.get("type") != expected_type:
        raise ValidationError({"token": [f"Expected a {expected_type} token"]})
    return claims
