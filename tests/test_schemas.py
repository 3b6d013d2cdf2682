"""Field rules for booking and contact submissions."""

from datetime import date

import pytest
from pydantic import ValidationError

from app.schemas.forms import BookingSubmission, ContactSubmission
from helpers import valid_booking, valid_contact


class TestBookingSubmission:
    def test_valid_booking(self):
        booking = BookingSubmission.model_validate(valid_booking())
        assert booking.first_name == "Ada"
        assert booking.last_name == "Lovelace"
        assert booking.date == date(2025, 3, 3)
        assert booking.time == "10:30 AM"

    def test_text_fields_are_trimmed(self):
        booking = BookingSubmission.model_validate(valid_booking(firstName="  Ada  ", time=" 9am "))
        assert booking.first_name == "Ada"
        assert booking.time == "9am"

    def test_email_is_normalized(self):
        booking = BookingSubmission.model_validate(valid_booking(email="  Ada.L@Example.COM "))
        assert booking.email == "ada.l@example.com"

    @pytest.mark.parametrize(
        "value",
        ["2025-03-03T10:00:00Z", "2025-03-03T10:00:00+02:00", "2025-03-03T23:59"],
    )
    def test_date_time_strings_keep_the_calendar_date(self, value):
        booking = BookingSubmission.model_validate(valid_booking(date=value))
        assert booking.date == date(2025, 3, 3)

    @pytest.mark.parametrize("value", ["2025-02-30", "next tuesday", "", "   ", None, 20250303])
    def test_invalid_dates_are_rejected(self, value):
        with pytest.raises(ValidationError):
            BookingSubmission.model_validate(valid_booking(date=value))

    @pytest.mark.parametrize("field", ["firstName", "lastName", "email", "date", "time"])
    def test_every_field_is_required(self, field):
        payload = valid_booking()
        del payload[field]
        with pytest.raises(ValidationError):
            BookingSubmission.model_validate(payload)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"firstName": "   "},
            {"lastName": "x" * 51},
            {"time": "x" * 21},
            {"email": "not-an-email"},
            {"firstName": 123},
        ],
    )
    def test_out_of_bounds_fields_are_rejected(self, overrides):
        with pytest.raises(ValidationError):
            BookingSubmission.model_validate(valid_booking(**overrides))

    def test_length_limits_are_inclusive(self):
        booking = BookingSubmission.model_validate(
            valid_booking(firstName="x" * 50, lastName="y" * 50, time="z" * 20)
        )
        assert len(booking.first_name) == 50

    def test_unknown_fields_are_ignored(self):
        booking = BookingSubmission.model_validate(valid_booking(phone="555-0100"))
        assert not hasattr(booking, "phone")


class TestContactSubmission:
    def test_valid_contact(self):
        contact = ContactSubmission.model_validate(valid_contact())
        assert contact.name == "Bob"
        assert contact.email == "bob@example.com"

    @pytest.mark.parametrize("message", ["too short", " " * 12 + "short" + " " * 12, "m" * 2001])
    def test_message_length_bounds(self, message):
        with pytest.raises(ValidationError):
            ContactSubmission.model_validate(valid_contact(message=message))

    @pytest.mark.parametrize("message", ["m" * 10, "m" * 2000])
    def test_message_length_edges_are_accepted(self, message):
        contact = ContactSubmission.model_validate(valid_contact(message=message))
        assert contact.message == message

    def test_name_limit(self):
        with pytest.raises(ValidationError):
            ContactSubmission.model_validate(valid_contact(name="n" * 101))
