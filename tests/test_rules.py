"""Tests for booking-time policy."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from barbershop.config import Settings
from barbershop.errors import BookingValidationError
from barbershop.rules import normalize_datetime, validate_booking_time

# Monday
NOW = datetime(2026, 6, 1, 10, 0)


@pytest.fixture()
def settings() -> Settings:
    return Settings(secret_key="test-secret")


def _error(start: datetime, settings: Settings) -> str:
    with pytest.raises(BookingValidationError) as exc_info:
        validate_booking_time(start, NOW, settings)
    return exc_info.value.detail


def test_accepts_regular_slot(settings):
    validate_booking_time(datetime(2026, 6, 2, 14, 0), NOW, settings)


def test_rejects_past_dates(settings):
    assert _error(NOW - timedelta(days=1), settings) == "Cannot book an appointment in the past"
    assert _error(NOW, settings) == "Cannot book an appointment in the past"


def test_rejects_short_notice(settings):
    assert "30 minutes in advance" in _error(NOW + timedelta(minutes=20), settings)


def test_accepts_exact_lead_time(settings):
    validate_booking_time(NOW + timedelta(minutes=30), NOW, settings)


def test_rejects_far_future(settings):
    assert "90 days" in _error(datetime(2026, 9, 1, 10, 0), settings)


def test_rejects_outside_opening_hours(settings):
    assert "08:00" in _error(datetime(2026, 6, 2, 7, 59), settings)
    assert "20:00" in _error(datetime(2026, 6, 2, 20, 0), settings)
    validate_booking_time(datetime(2026, 6, 2, 19, 59), NOW, settings)


def test_rejects_sundays(settings):
    assert _error(datetime(2026, 6, 7, 10, 0), settings) == "The shop is closed on Sunday"


def test_policy_can_be_disabled(settings):
    relaxed = settings.model_copy(update={"enforce_shop_policy": False})

    validate_booking_time(datetime(2026, 6, 7, 22, 0), NOW, relaxed)
    with pytest.raises(BookingValidationError):
        validate_booking_time(NOW - timedelta(minutes=1), NOW, relaxed)


def test_normalize_converts_aware_to_shop_time():
    aware = datetime(2026, 6, 2, 17, 0, tzinfo=timezone.utc)

    assert normalize_datetime(aware, "America/Sao_Paulo") == datetime(2026, 6, 2, 14, 0)


def test_normalize_keeps_naive():
    naive = datetime(2026, 6, 2, 14, 0)

    assert normalize_datetime(naive, "America/Sao_Paulo") is naive


def test_first_failing_policy_rule_is_reported(settings):
    # hours, then closed day, then lead time, then horizon
    assert "08:00" in _error(datetime(2026, 9, 6, 7, 0), settings)
    assert _error(datetime(2026, 9, 6, 10, 0), settings) == "The shop is closed on Sunday"

    evening = datetime(2026, 6, 1, 19, 50)
    with pytest.raises(BookingValidationError, match="20:00"):
        validate_booking_time(datetime(2026, 6, 1, 20, 5), evening, settings)

    open_sundays = settings.model_copy(update={"closed_weekdays": []})
    assert "90 days" in _error(datetime(2026, 9, 6, 10, 0), open_sundays)
