# barbershop/rules.py
"""Booking-time policy checked before the conflict check runs."""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from barbershop.config import Settings
from barbershop.errors import BookingValidationError

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class Clock:
    """Current wall-clock time in the shop's timezone, without tzinfo."""

    def __init__(self, timezone: str):
        self.tz = ZoneInfo(timezone)

    def now(self) -> datetime:
        return datetime.now(self.tz).replace(tzinfo=None)


def normalize_datetime(value: datetime, timezone: str) -> datetime:
    """Aware datetimes are converted to shop time; naive ones are taken as shop time."""
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(timezone)).replace(tzinfo=None)


def validate_booking_time(start: datetime, now: datetime, settings: Settings) -> None:
    if start <= now:
        raise BookingValidationError("Cannot book an appointment in the past")

    if not settings.enforce_shop_policy:
        return

    if start.hour < settings.opening_hour or start.hour >= settings.closing_hour:
        raise BookingValidationError(
            f"Appointments must start between {settings.opening_hour:02d}:00 "
            f"and {settings.closing_hour:02d}:00"
        )

    if start.weekday() in settings.closed_weekdays:
        raise BookingValidationError(f"The shop is closed on {WEEKDAY_NAMES[start.weekday()]}")

    if start < now + timedelta(minutes=settings.min_lead_minutes):
        raise BookingValidationError(
            f"Appointments must be booked at least {settings.min_lead_minutes} minutes in advance"
        )

    if start > now + timedelta(days=settings.max_advance_days):
        raise BookingValidationError(
            f"Appointments can be booked at most {settings.max_advance_days} days in advance"
        )
