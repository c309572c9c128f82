"""
Authentication module interface.

The auth flow depends on IIdentityProvider, not a concrete backend.
This enables testing with the in-memory provider and swapping Supabase
Auth for another identity service.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class IIdentityProvider(Protocol):
    """
    Interface for the external identity service.

    Implementations raise the auth module exceptions (WrongPasswordError,
    EmailNotVerifiedError, CredentialExpiredError, ...) for expected
    conditions and ExternalServiceError for transport failures.
    """

    async def sign_up(self, email: str, password: str) -> str:
        """
        Register a new identity and send the verification email.

        Returns:
            The new account ID

        Raises:
            EmailAlreadyInUseError: If the email is already registered
        """
        ...

    async def sign_in(self, email: str, password: str) -> str:
        """
        Sign in and start a session.

        Returns:
            The signed-in account ID

        Raises:
            UnknownEmailError, WrongPasswordError: Bad credentials
            EmailNotVerifiedError: Credentials are fine but the email is unverified
        """
        ...

    async def send_verification_email(self) -> None:
        """Resend the verification email for the current identity."""
        ...

    async def check_email_verified(self) -> bool:
        """
        Refresh the current identity and report whether its email is verified.

        Raises:
            NoCurrentUserError: Nobody is signed in
            CredentialExpiredError: The session expired; the user must sign in again
        """
        ...

    def current_user_id(self) -> Optional[str]:
        """Account ID of the current session, if any."""
        ...

    async def sign_out(self) -> None:
        """End the current session."""
        ...
