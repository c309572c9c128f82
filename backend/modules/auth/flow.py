"""
Signup/signin flow state machine.

AuthFlow owns the state the auth screens render: the current step, the
typed email and username, an error message, a loading flag and the live
username availability indicator. Screens call the transition methods and
subscribe to snapshots.

Transitions:

    WELCOME              --start-->               SIGN_UP_OR_SIGN_IN
    SIGN_UP_OR_SIGN_IN   --submit_sign_up-->      VERIFICATION_PENDING
    SIGN_UP_OR_SIGN_IN   --submit_sign_in-->      AUTHENTICATED | USERNAME_CREATION
                                                  | VERIFICATION_PENDING (unverified)
    VERIFICATION_PENDING --check_verification-->  AUTHENTICATED | USERNAME_CREATION
    VERIFICATION_PENDING --credential expired-->  SIGN_UP_OR_SIGN_IN (delayed)
    USERNAME_CREATION    --create_account-->      AUTHENTICATED
    any                  --sign_out-->            WELCOME

Transition methods called from the wrong step are ignored.
"""

import asyncio
import logging
from typing import Callable, Optional

from modules.accounts import IAccountService
from modules.usernames import IUsernameRegistry
from modules.validation import validate_email, validate_password, validate_username
from shared.config import get_settings
from shared.exceptions import ExternalServiceError, FefoError
from shared.results import is_failure

from .exceptions import CredentialExpiredError, EmailNotVerifiedError, NoCurrentUserError
from .interfaces import IIdentityProvider
from .models import AuthFlowState, AuthSnapshot, AuthStep, UsernameAvailability


logger = logging.getLogger(__name__)

Listener = Callable[[AuthSnapshot], None]

NETWORK_ERROR_MESSAGE = "Network error. Please try again."
NOT_VERIFIED_MESSAGE = "Email not verified yet. Please check your inbox and click the verification link."
CREDENTIAL_EXPIRED_MESSAGE = "Please sign in again to continue. Your email has been verified!"
RESEND_FAILED_MESSAGE = "Failed to send email. Please try again."


def _message_for(error: FefoError) -> str:
    if isinstance(error, ExternalServiceError):
        return NETWORK_ERROR_MESSAGE
    return error.message


class AuthFlow:
    """
    Auth screen state machine.

    Args:
        identity: External identity service
        registry: Username registry (availability and reservation)
        accounts: Profile store (existence check and creation)
        debounce_seconds: Delay before an availability lookup runs
        redirect_seconds: Delay before an expired credential returns to sign in
    """

    def __init__(
        self,
        identity: IIdentityProvider,
        registry: IUsernameRegistry,
        accounts: IAccountService,
        debounce_seconds: Optional[float] = None,
        redirect_seconds: Optional[float] = None,
    ):
        settings = get_settings()
        self._identity = identity
        self._registry = registry
        self._accounts = accounts
        self._debounce = (
            settings.username_check_debounce_seconds if debounce_seconds is None else debounce_seconds
        )
        self._redirect_delay = (
            settings.credential_expired_redirect_seconds if redirect_seconds is None else redirect_seconds
        )

        self.state = AuthFlowState.welcome()
        self.email = ""
        self.username = ""
        self.error_message: Optional[str] = None
        self.is_loading = False
        self.username_availability = UsernameAvailability.UNKNOWN
        self.user_id: Optional[str] = None

        self._listeners: list[Listener] = []
        self._availability_task: Optional[asyncio.Task] = None
        self._availability_generation = 0
        self._redirect_task: Optional[asyncio.Task] = None

    # -------------------------------------------------------------------------
    # Observation
    # -------------------------------------------------------------------------

    def snapshot(self) -> AuthSnapshot:
        return AuthSnapshot(
            state=self.state,
            email=self.email,
            username=self.username,
            error_message=self.error_message,
            is_loading=self.is_loading,
            username_availability=self.username_availability,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def _transition(self, state: AuthFlowState) -> None:
        logger.debug("Auth flow %s -> %s", self.state.step.value, state.step.value)
        self.state = state

    def _expect(self, step: AuthStep, operation: str) -> bool:
        if self.state.step != step:
            logger.warning(
                "Ignoring %s in step %s (expected %s)",
                operation,
                self.state.step.value,
                step.value,
            )
            return False
        return True

    @property
    def pending_availability_check(self) -> Optional[asyncio.Task]:
        return self._availability_task

    @property
    def pending_redirect(self) -> Optional[asyncio.Task]:
        return self._redirect_task

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def start(self) -> AuthFlowState:
        if self._expect(AuthStep.WELCOME, "start"):
            self.error_message = None
            self._transition(AuthFlowState.sign_up_or_sign_in())
            self._notify()
        return self.state

    async def submit_sign_up(self, email: str, password: str) -> AuthFlowState:
        if not self._expect(AuthStep.SIGN_UP_OR_SIGN_IN, "submit_sign_up"):
            return self.state

        self.email = email.strip().lower()
        issue = validate_email(self.email) or validate_password(password)
        if issue is not None:
            self.error_message = issue.message
            self._notify()
            return self.state

        self.error_message = None
        self.is_loading = True
        self._notify()
        try:
            self.user_id = await self._identity.sign_up(self.email, password)
            self._transition(AuthFlowState.verification_pending(self.email))
        except FefoError as e:
            logger.info("Sign up failed: %s", e.code)
            self.error_message = _message_for(e)
        finally:
            self.is_loading = False
        self._notify()
        return self.state

    async def submit_sign_in(self, email: str, password: str) -> AuthFlowState:
        if not self._expect(AuthStep.SIGN_UP_OR_SIGN_IN, "submit_sign_in"):
            return self.state

        self.email = email.strip().lower()
        issue = validate_email(self.email)
        if issue is not None:
            self.error_message = issue.message
            self._notify()
            return self.state
        if not password:
            self.error_message = "Password cannot be empty"
            self._notify()
            return self.state

        self.error_message = None
        self.is_loading = True
        self._notify()
        try:
            user_id = await self._identity.sign_in(self.email, password)
            await self._enter_account(user_id)
        except EmailNotVerifiedError as e:
            self.error_message = e.message
            self._transition(AuthFlowState.verification_pending(self.email))
        except FefoError as e:
            logger.info("Sign in failed: %s", e.code)
            self.error_message = _message_for(e)
        finally:
            self.is_loading = False
        self._notify()
        return self.state

    async def check_verification(self) -> AuthFlowState:
        if not self._expect(AuthStep.VERIFICATION_PENDING, "check_verification"):
            return self.state

        self.error_message = None
        self.is_loading = True
        self._notify()
        try:
            verified = await self._identity.check_email_verified()
            if verified:
                user_id = self._identity.current_user_id()
                if user_id is None:
                    raise NoCurrentUserError()
                await self._enter_account(user_id)
            else:
                self.error_message = NOT_VERIFIED_MESSAGE
        except CredentialExpiredError:
            self.error_message = CREDENTIAL_EXPIRED_MESSAGE
            self._schedule_redirect()
        except NoCurrentUserError as e:
            self.error_message = e.message
            self._transition(AuthFlowState.sign_up_or_sign_in())
        except FefoError as e:
            self.error_message = _message_for(e)
        finally:
            self.is_loading = False
        self._notify()
        return self.state

    async def _enter_account(self, user_id: str) -> None:
        """Route a verified identity to AUTHENTICATED or USERNAME_CREATION."""
        self.user_id = user_id
        if await self._accounts.user_exists(user_id):
            self._transition(AuthFlowState.authenticated())
        else:
            # Signed up and verified but never picked a username
            self._transition(AuthFlowState.username_creation(self.email, user_id))

    async def resend_verification_email(self) -> None:
        if not self._expect(AuthStep.VERIFICATION_PENDING, "resend_verification_email"):
            return
        try:
            await self._identity.send_verification_email()
            self.error_message = None
        except FefoError as e:
            logger.info("Resend verification failed: %s", e.code)
            self.error_message = RESEND_FAILED_MESSAGE
        self._notify()

    async def create_account(self, username: str) -> AuthFlowState:
        if not self._expect(AuthStep.USERNAME_CREATION, "create_account"):
            return self.state

        self.username = username.strip()
        issue = validate_username(self.username)
        if issue is not None:
            self.error_message = issue.message
            self._notify()
            return self.state

        email = self.state.email or self.email
        user_id = self.state.user_id
        self._cancel_availability_check()
        self.error_message = None
        self.is_loading = True
        self._notify()
        try:
            failure = await self._registry.reserve_username(self.username, user_id)
            if failure is not None:
                self.error_message = failure.message
                if failure.reason == "username_taken":
                    self.username_availability = UsernameAvailability.TAKEN
            else:
                await self._accounts.create_user(user_id, email, self.username)
                self._transition(AuthFlowState.authenticated())
        except FefoError as e:
            logger.warning("Account creation failed for %s: %s", user_id, e.code)
            self.error_message = _message_for(e)
        finally:
            self.is_loading = False
        self._notify()
        return self.state

    async def sign_out(self) -> AuthFlowState:
        try:
            await self._identity.sign_out()
        except FefoError as e:
            self._reset()
            self.error_message = f"Failed to sign out: {e.message}"
            self._notify()
            return self.state
        self._reset()
        self._notify()
        return self.state

    def reset_to_welcome(self) -> AuthFlowState:
        """Return to WELCOME without touching the identity session."""
        self._reset()
        self._notify()
        return self.state

    def _reset(self) -> None:
        self._cancel_availability_check()
        if self._redirect_task is not None:
            self._redirect_task.cancel()
            self._redirect_task = None
        self.state = AuthFlowState.welcome()
        self.email = ""
        self.username = ""
        self.error_message = None
        self.is_loading = False
        self.username_availability = UsernameAvailability.UNKNOWN
        self.user_id = None

    # -------------------------------------------------------------------------
    # Credential expiry
    # -------------------------------------------------------------------------

    def _schedule_redirect(self) -> None:
        if self._redirect_task is not None:
            self._redirect_task.cancel()
        self._redirect_task = asyncio.get_running_loop().create_task(self._redirect_after_delay())

    async def _redirect_after_delay(self) -> None:
        await asyncio.sleep(self._redirect_delay)
        self._redirect_task = None
        if self.state.step != AuthStep.VERIFICATION_PENDING:
            return
        self._transition(AuthFlowState.sign_up_or_sign_in())
        self._notify()

    # -------------------------------------------------------------------------
    # Username availability
    # -------------------------------------------------------------------------

    def check_username_availability(self, username: str) -> None:
        """
        Update the availability indicator for the typed username.

        Must be called from a running event loop. Each call cancels the
        previous lookup; the new one runs after the debounce delay.
        """
        self._cancel_availability_check()
        self.username = username
        trimmed = username.strip()

        if not trimmed:
            self.username_availability = UsernameAvailability.UNKNOWN
        elif validate_username(trimmed) is not None:
            self.username_availability = UsernameAvailability.INVALID
        else:
            self.username_availability = UsernameAvailability.CHECKING
            generation = self._availability_generation
            self._availability_task = asyncio.get_running_loop().create_task(
                self._run_availability_check(trimmed, generation)
            )
        self._notify()

    def _cancel_availability_check(self) -> None:
        self._availability_generation += 1
        if self._availability_task is not None:
            self._availability_task.cancel()
            self._availability_task = None

    async def _run_availability_check(self, username: str, generation: int) -> None:
        await asyncio.sleep(self._debounce)
        try:
            available = await self._registry.is_username_available(username)
        except FefoError as e:
            logger.info("Username availability lookup failed: %s", e.code)
            available = None

        if generation != self._availability_generation:
            logger.debug("Discarding stale availability result for %s", username)
            return

        if available is None:
            self.username_availability = UsernameAvailability.UNKNOWN
        elif is_failure(available):
            self.username_availability = UsernameAvailability.INVALID
        elif available:
            self.username_availability = UsernameAvailability.AVAILABLE
        else:
            self.username_availability = UsernameAvailability.TAKEN
        self._availability_task = None
        self._notify()
