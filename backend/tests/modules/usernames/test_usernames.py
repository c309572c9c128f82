"""Tests for modules/usernames/service.py."""

import asyncio

import pytest

from modules.usernames import (
    USERNAMES_COLLECTION,
    IUsernameRegistry,
    UsernameRegistry,
    UsernameReservation,
    username_key,
)
from shared.exceptions import ErrorKind
from shared.results import is_failure


@pytest.fixture
def registry(store) -> UsernameRegistry:
    return UsernameRegistry(store)


class TestUsernameRegistryInterface:
    def test_implements_interface(self, registry):
        """UsernameRegistry should satisfy IUsernameRegistry."""
        assert isinstance(registry, IUsernameRegistry)


class TestAvailability:
    @pytest.mark.asyncio
    async def test_free_name_is_available(self, registry):
        """An unreserved valid name should be available."""
        assert await registry.is_username_available("oski") is True

    @pytest.mark.asyncio
    async def test_reserved_name_is_unavailable_any_case(self, registry):
        """Availability should be case-insensitive."""
        await registry.reserve_username("Oski", "u1")
        assert await registry.is_username_available("OSKI") is False

    @pytest.mark.asyncio
    async def test_bad_format_is_a_failure(self, registry):
        """Malformed names should return an invalid_input failure."""
        result = await registry.is_username_available("1x")
        assert is_failure(result)
        assert result.kind == ErrorKind.INVALID_INPUT
        assert result.reason == "invalid_username"


class TestReserve:
    @pytest.mark.asyncio
    async def test_writes_reservation_under_lowercased_key(self, registry, store):
        """The record should keep the display case under a lowercased id."""
        assert await registry.reserve_username("  Alice ", "accountA") is None

        record = await store.get(USERNAMES_COLLECTION, "alice")
        assert record["userId"] == "accountA"
        assert record["username"] == "Alice"
        assert "createdAt" in record

    @pytest.mark.asyncio
    async def test_other_owner_conflicts(self, registry):
        """A second account reserving the same name (any case) should conflict."""
        await registry.reserve_username("Alice", "accountA")

        failure = await registry.reserve_username("alice", "accountB")

        assert failure.kind == ErrorKind.CONFLICT
        assert failure.message == "This username is already taken"

    @pytest.mark.asyncio
    async def test_same_owner_is_idempotent(self, registry):
        """Re-reserving one's own name should succeed every time."""
        assert await registry.reserve_username("Alice", "accountA") is None
        assert await registry.reserve_username("Alice", "accountA") is None

    @pytest.mark.asyncio
    async def test_invalid_name_is_rejected_before_store(self, registry, store):
        """Validation failures should not touch the store."""
        failure = await registry.reserve_username("admin", "accountA")

        assert failure.kind == ErrorKind.INVALID_INPUT
        assert failure.message == "This username is reserved"
        assert await store.list_all(USERNAMES_COLLECTION) == []

    @pytest.mark.asyncio
    async def test_concurrent_reservations_have_one_winner(self, registry, store):
        """Two signups racing for one name must not both succeed."""
        results = await asyncio.gather(
            registry.reserve_username("oski", "accountA"),
            registry.reserve_username("OSKI", "accountB"),
        )

        winners = [r for r in results if r is None]
        losers = [r for r in results if r is not None]
        assert len(winners) == 1
        assert losers[0].kind == ErrorKind.CONFLICT
        assert len(await store.list_all(USERNAMES_COLLECTION)) == 1


class TestLookups:
    @pytest.mark.asyncio
    async def test_username_for_account(self, registry):
        """Reverse lookup should return the display-case name."""
        await registry.reserve_username("OskiBear", "u1")

        assert await registry.get_username_for_account("u1") == "OskiBear"
        assert await registry.get_username_for_account("nobody") is None

    @pytest.mark.asyncio
    async def test_get_reservation(self, registry):
        """get_reservation should map the stored record."""
        await registry.reserve_username("OskiBear", "u1")

        reservation = await registry.get_reservation("oskibear")

        assert isinstance(reservation, UsernameReservation)
        assert reservation.user_id == "u1"
        assert reservation.key == "oskibear"

    @pytest.mark.asyncio
    async def test_delete_username(self, registry):
        """delete_username should free the name."""
        await registry.reserve_username("oski", "u1")
        await registry.delete_username("OSKI")

        assert await registry.is_username_available("oski") is True


class TestChangeUsername:
    @pytest.mark.asyncio
    async def test_moves_reservation(self, registry):
        """The new name should be reserved and the old one released."""
        await registry.reserve_username("oski", "u1")

        assert await registry.change_username("oski", "bear", "u1") is None

        assert await registry.is_username_available("oski") is True
        assert (await registry.get_reservation("bear")).user_id == "u1"

    @pytest.mark.asyncio
    async def test_taken_target_keeps_old_name(self, registry):
        """A taken target should fail and leave the old reservation in place."""
        await registry.reserve_username("oski", "u1")
        await registry.reserve_username("bear", "u2")

        failure = await registry.change_username("oski", "bear", "u1")

        assert failure.kind == ErrorKind.CONFLICT
        assert (await registry.get_reservation("oski")).user_id == "u1"

    @pytest.mark.asyncio
    async def test_case_only_change_rewrites_display(self, registry):
        """alice -> Alice should update the display form in place."""
        await registry.reserve_username("alice", "u1")

        assert await registry.change_username("alice", "Alice", "u1") is None

        assert (await registry.get_reservation("alice")).username == "Alice"


def test_username_key():
    """Keys should be trimmed and lowercased."""
    assert username_key("  OskiBear ") == "oskibear"
