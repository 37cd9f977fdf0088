# barbershop/errors.py

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from barbershop.core import ConflictResult


class BookingError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class BookingValidationError(BookingError):
    status_code = 422


class NotFoundError(BookingError):
    status_code = 404


class ConflictError(BookingError):
    """Request clashes with current state (duplicate, wrong status, record in use)."""

    status_code = 409


class SchedulingConflictError(ConflictError):
    def __init__(self, detail: str, result: Optional["ConflictResult"] = None):
        super().__init__(detail)
        self.result = result
