"""
Tests for request schemas and the stats arithmetic.
"""

from datetime import datetime, timezone, timedelta

import pytest
from pydantic import ValidationError

from eventhub.schemas import EventCreate, RegistrationCancel, RegistrationCreate
from eventhub.services.event_service import compute_stats


class TestEventCreate:

    def test_accepts_camel_case_payload(self):
        event = EventCreate.model_validate({
            "title": "Meetup",
            "dateTime": "2030-03-01T09:00:00Z",
            "location": "Room 1",
            "capacity": 25,
        })
        assert event.date_time == datetime(2030, 3, 1, 9, 0, tzinfo=timezone.utc)
        assert event.capacity == 25

    def test_naive_datetime_is_taken_as_utc(self):
        event = EventCreate(title="t", date_time="2030-03-01T09:00:00", location="l", capacity=1)
        assert event.date_time.tzinfo is not None
        assert event.date_time.utcoffset() == timedelta(0)

    def test_integral_float_capacity_is_accepted(self):
        event = EventCreate(title="t", date_time="2030-03-01T09:00:00Z", location="l", capacity=12.0)
        assert event.capacity == 12
        assert isinstance(event.capacity, int)

    def test_empty_title_counts_as_missing(self):
        with pytest.raises(ValidationError) as excinfo:
            EventCreate(title="", date_time="2030-03-01T09:00:00Z", location="l", capacity=1)
        assert excinfo.value.errors()[0]["type"] == "missing_fields"

    def test_zero_capacity_counts_as_missing(self):
        with pytest.raises(ValidationError) as excinfo:
            EventCreate(title="t", date_time="2030-03-01T09:00:00Z", location="l", capacity=0)
        assert excinfo.value.errors()[0]["type"] == "missing_fields"

    def test_title_length_limit(self):
        with pytest.raises(ValidationError):
            EventCreate(title="x" * 256, date_time="2030-03-01T09:00:00Z", location="l", capacity=1)


class TestRegistrationBodies:

    def test_messages_differ_per_operation(self):
        with pytest.raises(ValidationError) as create_err:
            RegistrationCreate.model_validate({})
        with pytest.raises(ValidationError) as cancel_err:
            RegistrationCancel.model_validate({})
        assert create_err.value.errors()[0]["msg"] == "User ID is required for registration."
        assert cancel_err.value.errors()[0]["msg"] == "User ID is required to cancel a registration."

    def test_user_id_alias(self):
        assert RegistrationCreate.model_validate({"userId": 7}).user_id == 7

    def test_user_id_bounded_by_column_range(self):
        assert RegistrationCreate.model_validate({"userId": 2**31 - 1}).user_id == 2**31 - 1
        with pytest.raises(ValidationError) as excinfo:
            RegistrationCancel.model_validate({"userId": 2**31})
        assert excinfo.value.errors()[0]["type"] == "user_id_range"


class TestComputeStats:

    def test_partial_usage(self):
        stats = compute_stats(capacity=10, total_registrations=3)
        assert stats.total_registrations == 3
        assert stats.remaining_capacity == 7
        assert stats.percentage_capacity_used == 30.0

    def test_zero_capacity_does_not_divide(self):
        stats = compute_stats(capacity=0, total_registrations=0)
        assert stats.percentage_capacity_used == 0

    def test_overbooked_event_goes_negative(self):
        stats = compute_stats(capacity=5, total_registrations=6)
        assert stats.remaining_capacity == -1
        assert stats.percentage_capacity_used == 120.0

    def test_serializes_camel_case(self):
        dumped = compute_stats(capacity=8, total_registrations=1).model_dump(by_alias=True)
        assert dumped == {
            "totalRegistrations": 1,
            "remainingCapacity": 7,
            "percentageCapacityUsed": 12.5,
        }
