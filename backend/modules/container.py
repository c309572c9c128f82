"""
Service container.

Wires the module implementations together around one document store and
one identity provider. Construct one container per process (or per
request in a server context) and pass it to whatever composes the UI or
API layer; there is no module-level instance.
"""

from typing import TYPE_CHECKING, Optional

from shared.store import IDocumentStore, InMemoryDocumentStore

# Type checking imports for interfaces (avoids import-time coupling)
if TYPE_CHECKING:
    from modules.accounts import AccountService, ProfileService
    from modules.auth import AuthFlow, IIdentityProvider
    from modules.events import EventService
    from modules.leaderboard import Leaderboard
    from modules.usernames import UsernameRegistry


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached. Use reset()
    to drop the cached services (the store and identity provider stay).
    """

    def __init__(self, store: IDocumentStore, identity: "Optional[IIdentityProvider]" = None) -> None:
        self._store = store
        self._identity = identity
        self._usernames: "UsernameRegistry | None" = None
        self._accounts: "AccountService | None" = None
        self._leaderboard: "Leaderboard | None" = None
        self._events: "EventService | None" = None
        self._profiles: "ProfileService | None" = None

    @classmethod
    def in_memory(cls) -> "ServiceContainer":
        """Container over an in-memory store and identity provider."""
        from modules.auth import InMemoryIdentityProvider
        return cls(InMemoryDocumentStore(), InMemoryIdentityProvider())

    @classmethod
    def supabase(cls) -> "ServiceContainer":
        """Container over Supabase (documents table and Supabase Auth)."""
        from modules.auth import SupabaseIdentityProvider
        from shared.database import get_supabase_client
        from shared.supabase_store import SupabaseDocumentStore
        return cls(SupabaseDocumentStore(get_supabase_client()), SupabaseIdentityProvider())

    @property
    def store(self) -> IDocumentStore:
        return self._store

    @property
    def identity(self) -> "IIdentityProvider":
        """Get the identity provider."""
        if self._identity is None:
            from modules.auth import InMemoryIdentityProvider
            self._identity = InMemoryIdentityProvider()
        return self._identity

    @property
    def usernames(self) -> "UsernameRegistry":
        """Get the username registry."""
        if self._usernames is None:
            from modules.usernames import UsernameRegistry
            self._usernames = UsernameRegistry(self._store)
        return self._usernames

    @property
    def accounts(self) -> "AccountService":
        """Get the account service."""
        if self._accounts is None:
            from modules.accounts import AccountService
            self._accounts = AccountService(self._store)
        return self._accounts

    @property
    def leaderboard(self) -> "Leaderboard":
        """Get the leaderboard (empty until restore_leaderboard runs)."""
        if self._leaderboard is None:
            from modules.leaderboard import Leaderboard
            self._leaderboard = Leaderboard()
        return self._leaderboard

    @property
    def events(self) -> "EventService":
        """Get the event service; created events are recorded on the leaderboard."""
        if self._events is None:
            from modules.events import EventService
            self._events = EventService(self._store, recorder=self.leaderboard)
        return self._events

    @property
    def profiles(self) -> "ProfileService":
        """Get the profile service."""
        if self._profiles is None:
            from modules.accounts import ProfileService
            self._profiles = ProfileService(
                accounts=self.accounts,
                registry=self.usernames,
                events=self.events,
                leaderboard=self.leaderboard,
            )
        return self._profiles

    def new_auth_flow(self) -> "AuthFlow":
        """Create an auth flow for one app session."""
        from modules.auth import AuthFlow
        return AuthFlow(self.identity, self.usernames, self.accounts)

    async def restore_leaderboard(self) -> None:
        """Rebuild the leaderboard from the persisted events."""
        self.leaderboard.rebuild(await self.events.list_events())

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances over the same store.
        """
        self._usernames = None
        self._accounts = None
        self._leaderboard = None
        self._events = None
        self._profiles = None
