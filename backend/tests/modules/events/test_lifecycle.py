"""Tests for modules/events/lifecycle.py."""

from datetime import timedelta

import pytest

from modules.events import (
    Attendee,
    AttendanceStatus,
    Comment,
    Event,
    EventDraft,
    EventStatusKind,
    EventTag,
)
from modules.events import lifecycle
from shared.exceptions import ErrorKind
from shared.models import GeoPoint
from shared.results import is_failure


@pytest.fixture
def lunch(at, campus_point) -> Event:
    """Monday 12:00-14:00 on campus."""
    return Event(
        id="evt-1",
        title="Pizza in Soda Hall",
        description="Leftover pizza from the CS seminar",
        location=campus_point,
        building_name="Soda Hall",
        start_time=at(2026, 10, 19, 12, 0),
        end_time=at(2026, 10, 19, 14, 0),
        created_by="CS Department",
    )


@pytest.fixture
def draft(at, campus_point) -> EventDraft:
    return EventDraft(
        title="  Bagels  ",
        description="Free bagels at the library entrance",
        building_name="Doe Library",
        location=campus_point,
        start_time=at(2026, 10, 20, 9, 0),
        end_time=at(2026, 10, 20, 10, 0),
        created_by="Library Staff",
        tags=[EventTag.FREE_FOOD, EventTag.SNACKS],
    )


class TestClassify:
    def test_ending_ten_minutes_before_end(self, lunch, at):
        """Same-day event ten minutes before its end is Ending."""
        status = lifecycle.classify(lunch, lunch.end_time - timedelta(minutes=10))
        assert status.kind == EventStatusKind.ENDING
        assert status.label == "Ending"

    def test_active(self, lunch, at):
        """Started and not near its end is Active."""
        status = lifecycle.classify(lunch, at(2026, 10, 19, 13, 0))
        assert status.kind == EventStatusKind.ACTIVE
        assert status.label == "Now"

    def test_active_at_exact_start(self, lunch):
        """now == start counts as started."""
        assert lifecycle.classify(lunch, lunch.start_time).kind == EventStatusKind.ACTIVE

    def test_active_at_start_of_ending_window(self, lunch):
        """now == end - 15min is still Active; Ending starts strictly after."""
        now = lunch.end_time - timedelta(minutes=15)
        assert lifecycle.classify(lunch, now).kind == EventStatusKind.ACTIVE

    def test_naive_now_read_as_utc(self, lunch):
        """A naive now compares against stored times as UTC."""
        now = lunch.start_time.replace(tzinfo=None) + timedelta(hours=1)
        assert lifecycle.classify(lunch, now).kind == EventStatusKind.ACTIVE

    def test_upcoming_today(self, lunch, at):
        """Later today is Upcoming with the "Soon" label."""
        status = lifecycle.classify(lunch, at(2026, 10, 19, 11, 0))
        assert status.kind == EventStatusKind.UPCOMING
        assert status.is_today is True
        assert status.label == "Soon"

    def test_upcoming_future_day_label(self, lunch, at):
        """A future day is Upcoming with a date label."""
        status = lifecycle.classify(lunch, at(2026, 10, 18, 12, 0))
        assert status.kind == EventStatusKind.UPCOMING
        assert status.is_today is False
        assert status.label == "October 19, Monday"

    def test_ended(self, lunch, at):
        """Past its end is Ended."""
        status = lifecycle.classify(lunch, at(2026, 10, 19, 14, 1))
        assert status.kind == EventStatusKind.ENDED
        assert status.label == "Ended"

    def test_exact_end_is_ending_not_ended(self, lunch):
        """now == end is not yet past the end."""
        assert lifecycle.classify(lunch, lunch.end_time).kind == EventStatusKind.ENDING

    def test_overnight_event_never_ending(self, at, campus_point):
        """An event that started yesterday stays Active through its last minutes."""
        overnight = Event(
            id="evt-2",
            title="Hackathon",
            description="Overnight hackathon snacks",
            location=campus_point,
            building_name="Jacobs Hall",
            start_time=at(2026, 10, 18, 20, 0),
            end_time=at(2026, 10, 19, 10, 0),
            created_by="Club",
        )
        status = lifecycle.classify(overnight, at(2026, 10, 19, 9, 55))
        assert status.kind == EventStatusKind.ACTIVE

    def test_late_evening_uses_campus_day(self, at, campus_point):
        """11pm Pacific is still the same campus day as a 10pm start."""
        late = Event(
            id="evt-3",
            title="Late snacks",
            description="Midnight study break",
            location=campus_point,
            building_name="Moffitt",
            start_time=at(2026, 10, 19, 22, 0),
            end_time=at(2026, 10, 19, 23, 30),
            created_by="Library Staff",
        )
        status = lifecycle.classify(late, at(2026, 10, 19, 23, 20))
        assert status.kind == EventStatusKind.ENDING


class TestTimeline:
    def test_event_progresses_through_states(self, at, campus_point):
        """Upcoming today, then Active, Ending and Ended as time advances."""
        now = at(2026, 10, 19, 10, 0)
        event = Event(
            id="evt-4",
            title="Cookies",
            description="Cookies in the lobby",
            location=campus_point,
            building_name="Evans Hall",
            start_time=now + timedelta(hours=1),
            end_time=now + timedelta(hours=2),
            created_by="Math Department",
        )

        assert lifecycle.classify(event, now).kind == EventStatusKind.UPCOMING
        assert lifecycle.classify(event, now).is_today is True
        assert lifecycle.classify(event, event.start_time + timedelta(minutes=1)).kind == EventStatusKind.ACTIVE
        assert lifecycle.classify(event, event.end_time - timedelta(minutes=10)).kind == EventStatusKind.ENDING
        assert lifecycle.classify(event, event.end_time + timedelta(minutes=1)).kind == EventStatusKind.ENDED


class TestActiveFlag:
    def test_refresh_sets_flag_from_end_time(self, lunch, at):
        """is_active should become end_time > now."""
        ended = lifecycle.refresh_active_flag(lunch, at(2026, 10, 19, 15, 0))
        assert ended.is_active is False
        assert lunch.is_active is True

    def test_refresh_returns_same_object_when_unchanged(self, lunch, at):
        """No change should return the input event."""
        assert lifecycle.refresh_active_flag(lunch, at(2026, 10, 19, 13, 0)) is lunch


class TestAddComment:
    def test_appends_trimmed_comment(self, lunch, at):
        """The comment should be trimmed, authored and timestamped."""
        now = at(2026, 10, 19, 12, 30)
        updated = lifecycle.add_comment(lunch, "  still plenty left!  ", "oski", now)

        assert len(updated.comments) == 1
        comment = updated.comments[0]
        assert comment.text == "still plenty left!"
        assert comment.user_name == "oski"
        assert comment.timestamp == now
        assert lunch.comments == []

    def test_blank_comment_is_a_failure(self, lunch, at):
        """Whitespace-only text should return an empty_comment failure."""
        result = lifecycle.add_comment(lunch, "   ", "oski", at(2026, 10, 19, 12, 30))
        assert is_failure(result)
        assert result.reason == "empty_comment"
        assert result.kind == ErrorKind.INVALID_INPUT

    def test_long_comment_is_clamped(self, lunch, at):
        """Text beyond 280 characters should be cut off."""
        updated = lifecycle.add_comment(lunch, "x" * 300, "oski", at(2026, 10, 19, 12, 30))
        assert len(updated.comments[0].text) == 280

    def test_refreshes_active_flag(self, lunch, at):
        """Commenting on an ended event should store is_active False."""
        updated = lifecycle.add_comment(lunch, "missed it", "oski", at(2026, 10, 19, 18, 0))
        assert updated.is_active is False


class TestSetAttendance:
    def test_replaces_previous_status(self, lunch, at):
        """Two statuses for one account leave a single, latest record."""
        now = at(2026, 10, 19, 12, 30)
        once = lifecycle.set_attendance(lunch, "u1", AttendanceStatus.GOING, now)
        twice = lifecycle.set_attendance(once, "u1", AttendanceStatus.MAYBE, now)

        mine = [a for a in twice.attendees if a.user_id == "u1"]
        assert len(mine) == 1
        assert mine[0].status == AttendanceStatus.MAYBE

    def test_other_accounts_untouched(self, lunch, at):
        """Only the caller's RSVP should change."""
        now = at(2026, 10, 19, 12, 30)
        event = lifecycle.set_attendance(lunch, "u1", "going", now)
        event = lifecycle.set_attendance(event, "u2", "notGoing", now)

        assert {(a.user_id, a.status) for a in event.attendees} == {
            ("u1", AttendanceStatus.GOING),
            ("u2", AttendanceStatus.NOT_GOING),
        }

    def test_unknown_status_rejected(self, lunch, at):
        """Statuses outside the three values should raise."""
        with pytest.raises(ValueError):
            lifecycle.set_attendance(lunch, "u1", "definitely", at(2026, 10, 19, 12, 30))


class TestCreateEvent:
    def test_builds_event(self, draft, at):
        """A valid draft should become an event with a fresh id."""
        event = lifecycle.create_event(draft, at(2026, 10, 19, 12, 0))

        assert event.id
        assert event.title == "Bagels"
        assert event.created_by == "Library Staff"
        assert event.is_active is True
        assert event.comments == []
        assert event.attendees == []

    @pytest.mark.parametrize("field,value,message", [
        ("title", "   ", "Title is required"),
        ("description", "", "Description is required"),
        ("building_name", " ", "Location name is required"),
        ("location", None, "Pick a location on the map"),
    ])
    def test_required_fields(self, draft, at, field, value, message):
        """Each missing field should be reported by name."""
        result = lifecycle.create_event(draft.model_copy(update={field: value}), at(2026, 10, 19, 12, 0))
        assert is_failure(result)
        assert result.message == message
        assert result.details["field"] == field

    def test_end_must_follow_start(self, draft, at):
        """end_time <= start_time should fail."""
        bad = draft.model_copy(update={"end_time": draft.start_time})
        result = lifecycle.create_event(bad, at(2026, 10, 19, 12, 0))
        assert result.details["field"] == "end_time"

    def test_duplicate_tags_collapse(self, draft, at):
        """Repeated tags should count once."""
        tagged = draft.model_copy(update={"tags": [EventTag.SNACKS, EventTag.SNACKS, EventTag.DRINKS]})
        event = lifecycle.create_event(tagged, at(2026, 10, 19, 12, 0))
        assert event.tags == [EventTag.SNACKS, EventTag.DRINKS]

    def test_four_distinct_tags_accepted(self, draft, at):
        """Exactly four distinct tags is the limit, not over it."""
        tagged = draft.model_copy(update={"tags": list(EventTag)[:4]})
        event = lifecycle.create_event(tagged, at(2026, 10, 19, 12, 0))
        assert not is_failure(event)
        assert event.tags == list(EventTag)[:4]

    def test_naive_draft_times_read_as_utc(self, draft, at):
        """Naive start and end times are treated as UTC instead of failing to compare."""
        naive = EventDraft(**{
            **draft.model_dump(),
            "start_time": draft.start_time.replace(tzinfo=None),
            "end_time": draft.end_time.replace(tzinfo=None),
        })
        event = lifecycle.create_event(naive, at(2026, 10, 19, 12, 0))

        assert event.start_time == draft.start_time
        assert event.end_time == draft.end_time
        assert event.is_active is True

    def test_too_many_tags(self, draft, at):
        """More than four distinct tags should fail with too_many_tags."""
        tagged = draft.model_copy(update={"tags": list(EventTag)[:5]})
        result = lifecycle.create_event(tagged, at(2026, 10, 19, 12, 0))
        assert result.kind == ErrorKind.TOO_MANY_TAGS
        assert result.message == "Select at most 4 tags"

    def test_outside_campus(self, draft, at):
        """A point far from campus should be rejected."""
        far = draft.model_copy(update={"location": GeoPoint(latitude=37.7749, longitude=-122.4194)})
        result = lifecycle.create_event(far, at(2026, 10, 19, 12, 0))
        assert result.reason == "outside_campus"


class TestRenameCreator:
    def test_rewrites_creator_and_comment_authors(self, lunch, at):
        """created_by and matching comment authors should change."""
        now = at(2026, 10, 19, 12, 30)
        event = lifecycle.add_comment(lunch, "hi", "CS Department", now)
        event = lifecycle.add_comment(event, "yum", "oski", now)

        [renamed] = lifecycle.rename_creator([event], "CS Department", "EECS")

        assert renamed.created_by == "EECS"
        assert [c.user_name for c in renamed.comments] == ["EECS", "oski"]
        assert event.created_by == "CS Department"

    def test_unrelated_events_are_reused(self, lunch):
        """Events without the old name should come back unchanged."""
        [same] = lifecycle.rename_creator([lunch], "nobody", "someone")
        assert same is lunch


class TestVerifyEvent:
    def test_duplicate_attendance(self, lunch):
        """Two RSVPs from one account should fail verification."""
        doubled = lunch.model_copy(update={"attendees": [
            Attendee(id="a1", user_id="u1", status=AttendanceStatus.GOING),
            Attendee(id="a2", user_id="u1", status=AttendanceStatus.MAYBE),
        ]})
        failure = lifecycle.verify_event(doubled)
        assert failure.kind == ErrorKind.DUPLICATE_ATTENDANCE

    def test_valid_event(self, lunch, at):
        """A well-formed event should verify."""
        comment = Comment(id="c1", text="hi", user_name="oski", timestamp=at(2026, 10, 19, 12, 0))
        assert lifecycle.verify_event(lunch.model_copy(update={"comments": [comment]})) is None
