"""Bearer token verification.

Tokens are issued by the external identity provider, never by this service.
Claims used:
  - sub:    user ID
  - email:  user email (optional)
  - aud:    audience, checked when JWT_AUDIENCE is set
  - exp:    expiry timestamp
"""

import hashlib
from datetime import datetime, timezone

from jose import JWTError, jwt

from onboarding.core.config import Settings


def decode_token(token: str, settings: Settings) -> dict:
    """Decode and validate a JWT. Returns empty dict on failure."""
    options = {"verify_aud": settings.jwt_audience is not None}
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options=options,
        )
    except JWTError:
        return {}


def token_digest(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def token_expiry(payload: dict) -> datetime | None:
    exp = payload.get("exp")
    if exp is None:
        return None
    return datetime.fromtimestamp(int(exp), tz=timezone.utc)
