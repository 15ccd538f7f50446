"""
Property-based tests for calendar free-slot suggestion
"""

import asyncio
from datetime import date, datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pydantic
import pytest
from hypothesis import given, settings, strategies as st
from hypothesis.strategies import composite

import models  # noqa: F401
from models.calendar_event import CalendarEvent, CalendarEventType
from schemas.calendar import CalendarEventCreate, CalendarEventUpdate
from services.calendar_service import CalendarService, suggest_free_slots, workday_window
from core.exceptions import ValidationError

DAY = date(2026, 3, 2)
WINDOW_START = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
WINDOW_END = datetime(2026, 3, 2, 17, 0, tzinfo=timezone.utc)

def at(hour, minute=0):
    return datetime(2026, 3, 2, hour, minute, tzinfo=timezone.utc)

@composite
def bounded_events(draw):
    """Events starting inside the working window, each with an end"""
    count = draw(st.integers(min_value=0, max_value=8))
    events = []
    for _ in range(count):
        offset = draw(st.integers(min_value=0, max_value=8 * 60))
        duration = draw(st.integers(min_value=0, max_value=4 * 60))
        start = WINDOW_START + timedelta(minutes=offset)
        events.append((start, start + timedelta(minutes=duration)))
    return events

@composite
def mixed_events(draw):
    """Events where some have no end"""
    events = draw(bounded_events())
    return [(start, end if draw(st.booleans()) else None) for start, end in events]

class TestSuggestFreeSlotsExamples:
    """Worked examples for the slot walk"""

    def test_empty_day_offers_first_hour(self):
        assert suggest_free_slots([], WINDOW_START, WINDOW_END) == [(at(9), at(10))]

    def test_single_meeting_splits_day(self):
        slots = suggest_free_slots([(at(10), at(11))], WINDOW_START, WINDOW_END)
        assert slots == [(at(9), at(10)), (at(11), at(12))]

    def test_short_gap_yields_nothing(self):
        # 45 minutes free before the meeting: enough gap, not enough for a slot
        slots = suggest_free_slots([(at(9, 45), at(16, 30))], WINDOW_START, WINDOW_END)
        assert slots == []

    def test_gap_below_minimum_is_skipped(self):
        slots = suggest_free_slots([(at(9, 15), at(10))], WINDOW_START, WINDOW_END)
        assert slots == [(at(10), at(11))]

    def test_event_without_end_does_not_move_cursor(self):
        slots = suggest_free_slots([(at(12), None)], WINDOW_START, WINDOW_END)
        assert slots == [(at(9), at(10)), (at(9), at(10))]

    def test_fully_booked_day(self):
        assert suggest_free_slots([(at(9), at(17))], WINDOW_START, WINDOW_END) == []

    def test_last_hour_is_offered(self):
        slots = suggest_free_slots([(at(9), at(16))], WINDOW_START, WINDOW_END)
        assert slots == [(at(16), at(17))]

    def test_unsorted_input_is_walked_in_start_order(self):
        slots = suggest_free_slots([(at(13), at(14)), (at(10), at(11))], WINDOW_START, WINDOW_END)
        assert slots == [(at(9), at(10)), (at(11), at(12)), (at(14), at(15))]

    def test_custom_gap_and_length(self):
        slots = suggest_free_slots(
            [(at(9, 30), at(10))],
            WINDOW_START,
            WINDOW_END,
            min_gap=timedelta(minutes=15),
            slot_length=timedelta(minutes=30),
        )
        assert slots == [(at(9), at(9, 30)), (at(10), at(10, 30))]

    def test_workday_window_uses_configured_hours(self):
        start, end = workday_window(DAY, "UTC")
        assert start == WINDOW_START
        assert end == WINDOW_END

class TestSuggestFreeSlotsProperties:
    """Property-based tests for the slot walk"""

    @given(events=mixed_events())
    @settings(deadline=2000, max_examples=100)
    def test_slots_lie_within_working_hours(self, events):
        for start, end in suggest_free_slots(events, WINDOW_START, WINDOW_END):
            assert WINDOW_START <= start < end <= WINDOW_END
            assert end - start == timedelta(minutes=60)

    @given(events=bounded_events())
    @settings(deadline=2000, max_examples=100)
    def test_slots_never_overlap_bounded_events(self, events):
        for slot_start, slot_end in suggest_free_slots(events, WINDOW_START, WINDOW_END):
            for event_start, event_end in events:
                assert slot_end <= event_start or slot_start >= event_end

    @given(events=bounded_events())
    @settings(deadline=2000, max_examples=100)
    def test_one_slot_per_gap_when_all_events_end(self, events):
        slots = suggest_free_slots(events, WINDOW_START, WINDOW_END)
        starts = [start for start, _ in slots]
        assert starts == sorted(set(starts))

class TestSuggestSlotsService:
    """Calendar service operations with a mocked session"""

    def setup_method(self):
        self.mock_db = AsyncMock()
        self.calendar_service = CalendarService(self.mock_db)

    def test_suggest_slots_returns_iso_pairs(self):
        event = CalendarEvent(
            id=uuid4(),
            title="Client meeting",
            type=CalendarEventType.MEETING,
            start_at=at(10),
            end_at=at(11),
        )

        async def run_test():
            result = MagicMock()
            result.scalars.return_value.all.return_value = [event]
            self.mock_db.execute = AsyncMock(return_value=result)
            return await self.calendar_service.suggest_slots(DAY)

        slots = asyncio.run(run_test())

        assert slots == [
            {"start_at": at(9).isoformat(), "end_at": at(10).isoformat()},
            {"start_at": at(11).isoformat(), "end_at": at(12).isoformat()},
        ]
        self.mock_db.execute.assert_awaited_once()

    def test_create_event_drops_unknown_links(self):
        event_data = CalendarEventCreate(
            title="Hearing prep",
            type="meeting",
            start_at=at(13),
            client_id=uuid4(),
            assigned_to_id=uuid4(),
        )

        async def run_test():
            self.mock_db.get = AsyncMock(return_value=None)
            self.mock_db.add = MagicMock()
            self.mock_db.commit = AsyncMock()
            self.mock_db.refresh = AsyncMock()
            return await self.calendar_service.create_event(event_data)

        event = asyncio.run(run_test())

        assert event.client_id is None
        assert event.assigned_to_id is None
        assert event.type == CalendarEventType.MEETING
        self.mock_db.add.assert_called_once()

    def _stored_event(self):
        event = CalendarEvent(
            id=uuid4(),
            title="Client meeting",
            type=CalendarEventType.MEETING,
            start_at=at(10),
            end_at=at(11),
        )
        self.mock_db.get = AsyncMock(return_value=event)
        return event

    def test_update_cannot_move_end_before_stored_start(self):
        event = self._stored_event()

        with pytest.raises(ValidationError) as exc_info:
            asyncio.run(self.calendar_service.update_event(event.id, CalendarEventUpdate(end_at=at(9))))

        assert exc_info.value.error_code == "INVALID_TIME_RANGE"
        assert event.end_at == at(11)
        self.mock_db.commit.assert_not_called()

    def test_update_cannot_move_start_after_stored_end(self):
        event = self._stored_event()

        with pytest.raises(ValidationError):
            asyncio.run(self.calendar_service.update_event(event.id, CalendarEventUpdate(start_at=at(12))))

        assert event.start_at == at(10)

    def test_update_naive_end_is_compared_as_utc(self):
        event = self._stored_event()

        updated = asyncio.run(self.calendar_service.update_event(
            event.id,
            CalendarEventUpdate(end_at=datetime(2026, 3, 2, 12, 0)),
        ))

        assert updated.end_at == datetime(2026, 3, 2, 12, 0)
        self.mock_db.commit.assert_awaited_once()

class TestCalendarEventSchema:
    """Time range checks on new events"""

    def test_end_before_start_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            CalendarEventCreate(title="Meeting", type="meeting", start_at=at(11), end_at=at(10))

    def test_mixed_timezone_awareness_rejected(self):
        with pytest.raises(pydantic.ValidationError) as exc_info:
            CalendarEventCreate(
                title="Meeting",
                type="meeting",
                start_at=at(10),
                end_at=datetime(2026, 3, 2, 11, 0),
            )

        assert "both include a timezone" in str(exc_info.value)

    def test_naive_pair_accepted(self):
        event_data = CalendarEventCreate(
            title="Meeting",
            type="meeting",
            start_at=datetime(2026, 3, 2, 10, 0),
            end_at=datetime(2026, 3, 2, 11, 0),
        )

        assert event_data.end_at - event_data.start_at == timedelta(hours=1)

    def test_open_ended_event_accepted(self):
        assert CalendarEventCreate(title="Deadline", type="deadline", start_at=at(10)).end_at is None
