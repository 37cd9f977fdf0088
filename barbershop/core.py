# barbershop/core.py
"""Appointment conflict detection.

An appointment occupies the half-open interval ``[date, date + duration)``,
so a booking that ends exactly when another starts is not a conflict.
Duration is never stored on the appointment; it is resolved from the
referenced service each time a check runs.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Protocol

from barbershop.errors import BookingValidationError

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MINUTES = 120


def overlaps(start: datetime, end: datetime, other_start: datetime, other_end: datetime) -> bool:
    """True when [start, end) intersects [other_start, other_end)."""
    # new start falls inside existing
    if other_start <= start < other_end:
        return True
    # new end falls inside existing
    if other_start < end <= other_end:
        return True
    # new interval contains existing
    return start <= other_start and end >= other_end


@dataclass(frozen=True)
class CandidateAppointment:
    id: int
    date: datetime
    service_id: int
    service_duration: int
    service_name: str

    @property
    def end(self) -> datetime:
        return self.date + timedelta(minutes=self.service_duration)


class AppointmentLookup(Protocol):
    def find_scheduled_in_window(
        self,
        barber_id: int,
        window_start: datetime,
        window_end: datetime,
        exclude_id: Optional[int] = None,
    ) -> List[CandidateAppointment]: ...


def _hhmm(value: datetime) -> str:
    return value.strftime("%H:%M")


@dataclass(frozen=True)
class ConflictResult:
    conflict: bool
    existing_start: Optional[datetime] = None
    existing_end: Optional[datetime] = None
    existing_service_name: Optional[str] = None
    requested_start: Optional[datetime] = None
    requested_end: Optional[datetime] = None
    requested_service_name: Optional[str] = None

    @classmethod
    def none(cls) -> "ConflictResult":
        return cls(conflict=False)

    @property
    def message(self) -> Optional[str]:
        if not self.conflict:
            return None
        existing = f"existing booking {_hhmm(self.existing_start)}-{_hhmm(self.existing_end)}"
        if self.existing_service_name:
            existing += f" for {self.existing_service_name}"
        requested = f"requested {_hhmm(self.requested_start)}-{_hhmm(self.requested_end)}"
        if self.requested_service_name:
            requested += f" for {self.requested_service_name}"
        if self.existing_start.date() != self.requested_start.date():
            requested += f" on {self.requested_start:%Y-%m-%d}"
        return f"{existing} conflicts with {requested}"

    def to_dict(self) -> dict:
        if not self.conflict:
            return {"conflict": False}
        return {
            "conflict": True,
            "existing_start": self.existing_start,
            "existing_end": self.existing_end,
            "existing_service_name": self.existing_service_name,
            "requested_start": self.requested_start,
            "requested_end": self.requested_end,
            "requested_service_name": self.requested_service_name,
            "message": self.message,
        }


class ConflictChecker:
    """Decides whether a candidate booking overlaps a barber's SCHEDULED appointments.

    Only appointments starting within ``window_minutes`` of the candidate start
    are fetched. No service may last longer than the window, so anything
    outside it cannot overlap.
    """

    def __init__(self, store: AppointmentLookup, window_minutes: int = DEFAULT_WINDOW_MINUTES):
        self.store = store
        self.window = timedelta(minutes=window_minutes)

    def check(
        self,
        barber_id: int,
        candidate_start: datetime,
        duration_minutes: int,
        service_name: Optional[str] = None,
        exclude_appointment_id: Optional[int] = None,
    ) -> ConflictResult:
        if duration_minutes <= 0:
            raise BookingValidationError("Service duration must be a positive number of minutes")

        candidate_end = candidate_start + timedelta(minutes=duration_minutes)

        candidates = self.store.find_scheduled_in_window(
            barber_id,
            candidate_start - self.window,
            candidate_start + self.window,
            exclude_id=exclude_appointment_id,
        )
        logger.debug(
            f"Checking barber {barber_id} slot {candidate_start:%Y-%m-%d %H:%M} "
            f"against {len(candidates)} candidates"
        )

        for existing in candidates:
            if exclude_appointment_id is not None and existing.id == exclude_appointment_id:
                continue
            if overlaps(candidate_start, candidate_end, existing.date, existing.end):
                return ConflictResult(
                    conflict=True,
                    existing_start=existing.date,
                    existing_end=existing.end,
                    existing_service_name=existing.service_name,
                    requested_start=candidate_start,
                    requested_end=candidate_end,
                    requested_service_name=service_name,
                )

        return ConflictResult.none()
