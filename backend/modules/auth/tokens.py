"""
Session token issuing and validation.

Session tokens are HS256 JWTs with the Supabase Auth claim layout
(`sub`, `email`, `email_confirmed_at`, `aud="authenticated"`). Supabase
issues them in production; the in-memory identity provider issues its own
with `create_session_token`.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.config import get_settings
from shared.models import AuthenticatedUser

from .exceptions import CredentialExpiredError, InvalidTokenError, MissingTokenError
from .models import JWTPayload


ALGORITHM = "HS256"
AUDIENCE = "authenticated"


def create_session_token(
    user_id: str,
    email: str,
    secret: str,
    email_verified: bool = False,
    ttl_seconds: Optional[float] = None,
    issued_at: Optional[datetime] = None,
) -> str:
    """Sign a session token for `user_id`."""
    if ttl_seconds is None:
        ttl_seconds = get_settings().session_ttl_seconds
    iat = issued_at or datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "aud": AUDIENCE,
        "role": "authenticated",
        "iat": int(iat.timestamp()),
        "exp": int((iat + timedelta(seconds=ttl_seconds)).timestamp()),
    }
    if email_verified:
        payload["email_confirmed_at"] = iat.isoformat()
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


class SessionTokenValidator:
    """Decodes session tokens into AuthenticatedUser values."""

    def __init__(self, secret: Optional[str] = None, audience: str = AUDIENCE):
        self._secret = secret if secret is not None else get_settings().supabase_jwt_secret
        self._audience = audience

    async def validate_token(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate a session token and return the signed-in identity.

        Raises:
            MissingTokenError: No token given
            CredentialExpiredError: Token signature is valid but expired
            InvalidTokenError: Anything else wrong with the token
        """
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                audience=self._audience,
            )
        except jwt.ExpiredSignatureError:
            raise CredentialExpiredError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

        try:
            claims = JWTPayload(**payload)
        except PydanticValidationError as e:
            raise InvalidTokenError(f"Malformed token claims: {e.error_count()} error(s)")
        if not claims.email:
            raise InvalidTokenError("Token has no email claim")

        return AuthenticatedUser(
            id=claims.sub,
            email=claims.email,
            email_verified=claims.email_confirmed_at is not None,
            last_sign_in=datetime.fromtimestamp(claims.iat, tz=timezone.utc),
        )
