"""
Identity provider implementations.

InMemoryIdentityProvider keeps credentials in a dict and issues its own
session tokens; it backs tests and local demos. SupabaseIdentityProvider
talks to Supabase Auth.
"""

import asyncio
import logging
import secrets
import uuid
from dataclasses import dataclass
from typing import Optional

import bcrypt
from supabase import Client

from shared.database import get_supabase_auth_client
from shared.exceptions import ExternalServiceError, FefoError

from .exceptions import (
    CredentialExpiredError,
    EmailAlreadyInUseError,
    EmailNotVerifiedError,
    NoCurrentUserError,
    UnknownEmailError,
    WeakPasswordError,
    WrongPasswordError,
)
from .interfaces import IIdentityProvider
from .tokens import SessionTokenValidator, create_session_token


logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# In-memory
# -----------------------------------------------------------------------------


@dataclass
class _Credential:
    user_id: str
    email: str
    password_hash: str
    email_verified: bool = False


# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _hash_password(password: str) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise WeakPasswordError()
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")


def _verify_password(password: str, password_hash: str) -> bool:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))


class InMemoryIdentityProvider(IIdentityProvider):
    """
    Dict-backed identity provider.

    Test hooks:
    - verify_email(email) simulates the user clicking the verification link
    - expire_session() replaces the session token with an expired one
    - sent_verification_emails records every address a link was sent to
    """

    def __init__(self, secret: Optional[str] = None, session_ttl_seconds: Optional[float] = None):
        self._secret = secret or secrets.token_hex(32)
        self._session_ttl = session_ttl_seconds
        self._validator = SessionTokenValidator(self._secret)
        self._credentials: dict[str, _Credential] = {}
        self._lock = asyncio.Lock()
        self._session_token: Optional[str] = None
        self._session_email: Optional[str] = None
        self.sent_verification_emails: list[str] = []

    @property
    def session_token(self) -> Optional[str]:
        return self._session_token

    def _start_session(self, credential: _Credential) -> None:
        self._session_email = credential.email
        self._session_token = create_session_token(
            credential.user_id,
            credential.email,
            self._secret,
            email_verified=credential.email_verified,
            ttl_seconds=self._session_ttl,
        )

    async def sign_up(self, email: str, password: str) -> str:
        email = email.strip().lower()
        async with self._lock:
            if email in self._credentials:
                raise EmailAlreadyInUseError(email)
            credential = _Credential(
                user_id=str(uuid.uuid4()),
                email=email,
                password_hash=_hash_password(password),
            )
            self._credentials[email] = credential

        self._start_session(credential)
        self.sent_verification_emails.append(email)
        logger.info("Registered identity %s", credential.user_id)
        return credential.user_id

    async def sign_in(self, email: str, password: str) -> str:
        email = email.strip().lower()
        credential = self._credentials.get(email)
        if credential is None:
            raise UnknownEmailError(email)
        if not _verify_password(password, credential.password_hash):
            raise WrongPasswordError()

        self._start_session(credential)
        if not credential.email_verified:
            raise EmailNotVerifiedError(email)
        return credential.user_id

    async def send_verification_email(self) -> None:
        if self._session_email is None:
            raise NoCurrentUserError()
        self.sent_verification_emails.append(self._session_email)

    async def check_email_verified(self) -> bool:
        if self._session_token is None:
            raise NoCurrentUserError()

        try:
            user = await self._validator.validate_token(self._session_token)
        except CredentialExpiredError:
            await self.sign_out()
            raise

        credential = self._credentials.get(user.email)
        if credential is None:
            raise NoCurrentUserError()
        if credential.email_verified and not user.email_verified:
            # Refresh the session so its claims carry the confirmation
            self._start_session(credential)
        return credential.email_verified

    def current_user_id(self) -> Optional[str]:
        if self._session_email is None:
            return None
        credential = self._credentials.get(self._session_email)
        return credential.user_id if credential else None

    async def sign_out(self) -> None:
        self._session_token = None
        self._session_email = None

    def verify_email(self, email: str) -> None:
        self._credentials[email.strip().lower()].email_verified = True

    def expire_session(self) -> None:
        if self._session_email is None:
            return
        credential = self._credentials[self._session_email]
        self._session_token = create_session_token(
            credential.user_id,
            credential.email,
            self._secret,
            email_verified=credential.email_verified,
            ttl_seconds=-60,
        )


# -----------------------------------------------------------------------------
# Supabase
# -----------------------------------------------------------------------------


# Supabase Auth error messages -> our exceptions
_EXPIRED_MARKERS = ("expired", "invalid refresh token", "refresh token not found", "session missing")


def _translate_auth_error(e: Exception, email: str = "") -> FefoError:
    message = str(e).lower()
    if "already registered" in message or "already been registered" in message:
        return EmailAlreadyInUseError(email)
    if "invalid login credentials" in message:
        return WrongPasswordError()
    if "email not confirmed" in message:
        return EmailNotVerifiedError(email)
    if "password should be" in message or "weak password" in message:
        return WeakPasswordError()
    if any(marker in message for marker in _EXPIRED_MARKERS):
        return CredentialExpiredError()
    return ExternalServiceError(
        "Network error. Please try again.",
        service="supabase_auth",
        details={"error": str(e)},
    )


class SupabaseIdentityProvider(IIdentityProvider):
    """
    Identity provider backed by Supabase Auth.

    Uses an anon-key client so the session belongs to the end user, not
    the service role. Supabase sends the verification email on sign up.
    """

    def __init__(self, client: Optional[Client] = None):
        self._client = client or get_supabase_auth_client()
        self._email: Optional[str] = None
        self._user_id: Optional[str] = None

    async def sign_up(self, email: str, password: str) -> str:
        email = email.strip().lower()
        try:
            response = self._client.auth.sign_up({"email": email, "password": password})
        except Exception as e:
            raise _translate_auth_error(e, email) from e

        if response.user is None:
            raise ExternalServiceError("Sign up returned no user", service="supabase_auth")
        self._email = email
        self._user_id = response.user.id
        logger.info("Registered identity %s", self._user_id)
        return self._user_id

    async def sign_in(self, email: str, password: str) -> str:
        email = email.strip().lower()
        try:
            response = self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            raise _translate_auth_error(e, email) from e

        user = response.user
        self._email = email
        self._user_id = user.id
        if user.email_confirmed_at is None:
            raise EmailNotVerifiedError(email)
        return user.id

    async def send_verification_email(self) -> None:
        if self._email is None:
            raise NoCurrentUserError()
        try:
            self._client.auth.resend({"type": "signup", "email": self._email})
        except Exception as e:
            raise _translate_auth_error(e, self._email) from e

    async def check_email_verified(self) -> bool:
        if self._user_id is None:
            raise NoCurrentUserError()
        try:
            self._client.auth.refresh_session()
            response = self._client.auth.get_user()
        except Exception as e:
            error = _translate_auth_error(e, self._email or "")
            if isinstance(error, CredentialExpiredError):
                await self.sign_out()
            raise error from e

        if response is None or response.user is None:
            raise NoCurrentUserError()
        return response.user.email_confirmed_at is not None

    def current_user_id(self) -> Optional[str]:
        return self._user_id

    async def sign_out(self) -> None:
        self._email = None
        self._user_id = None
        try:
            self._client.auth.sign_out()
        except Exception as e:
            raise _translate_auth_error(e) from e
