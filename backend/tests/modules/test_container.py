"""Tests for modules/container.py."""

import pytest

from modules.auth import AuthStep, InMemoryIdentityProvider
from modules.container import ServiceContainer
from modules.events import EventDraft


class TestServiceContainer:
    def test_services_are_cached(self):
        """Each property returns the same instance until reset."""
        container = ServiceContainer.in_memory()

        assert container.events is container.events
        assert container.profiles is container.profiles

        events = container.events
        container.reset()

        assert container.events is not events

    def test_identity_defaults_to_in_memory(self, store):
        """Without an identity provider the in-memory one is used."""
        container = ServiceContainer(store)
        assert isinstance(container.identity, InMemoryIdentityProvider)

    @pytest.mark.asyncio
    async def test_created_events_reach_leaderboard(self, store, at, campus_point):
        """The event service records posts on the shared leaderboard."""
        container = ServiceContainer(store)
        draft = EventDraft(
            title="Pizza",
            description="Leftover pizza",
            building_name="Soda Hall",
            location=campus_point,
            start_time=at(2030, 10, 19, 12),
            end_time=at(2030, 10, 19, 14),
            created_by="CS Department",
        )

        await container.events.create_event(draft)

        assert container.leaderboard.rank_of("CS Department") == 1

    @pytest.mark.asyncio
    async def test_restore_leaderboard(self, store, at, campus_point):
        """A fresh container rebuilds the leaderboard from stored events."""
        first = ServiceContainer(store)
        for creator in ("Library Staff", "CS Department", "CS Department"):
            await first.events.create_event(EventDraft(
                title="Snacks",
                description="Snacks",
                building_name="Doe Library",
                location=campus_point,
                start_time=at(2030, 10, 19, 12),
                end_time=at(2030, 10, 19, 14),
                created_by=creator,
            ))

        second = ServiceContainer(store)
        await second.restore_leaderboard()

        assert [(e.user_name, e.points) for e in second.leaderboard.entries] == [
            ("CS Department", 2),
            ("Library Staff", 1),
        ]

    @pytest.mark.asyncio
    async def test_new_auth_flow(self):
        """Auth flows share the container's identity and stores."""
        container = ServiceContainer.in_memory()
        flow = container.new_auth_flow()

        flow.start()
        await flow.submit_sign_up("oski@berkeley.edu", "goBears1")

        assert flow.state.step == AuthStep.VERIFICATION_PENDING
        assert container.identity.current_user_id() is not None
