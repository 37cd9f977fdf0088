# barbershop/booking.py

import logging
from typing import Optional

from barbershop.config import Settings
from barbershop.core import ConflictChecker, ConflictResult
from barbershop.errors import ConflictError, SchedulingConflictError
from barbershop.models import Appointment, AppointmentStatus, PaymentType, Service
from barbershop.rules import Clock, normalize_datetime, validate_booking_time
from barbershop.schemas import AppointmentCreate, AppointmentUpdate
from barbershop.store import AppointmentStore

logger = logging.getLogger(__name__)


class BookingService:
    """Create and change appointments for the authenticated barber."""

    def __init__(self, store: AppointmentStore, clock: Clock, settings: Settings):
        self.store = store
        self.clock = clock
        self.settings = settings
        self.checker = ConflictChecker(store, window_minutes=settings.conflict_window_minutes)

    def check(
        self,
        barber_id: int,
        start,
        service: Service,
        exclude_id: Optional[int] = None,
    ) -> ConflictResult:
        start = normalize_datetime(start, self.settings.shop_timezone)
        return self.checker.check(
            barber_id,
            start,
            service.duration,
            service_name=service.name,
            exclude_appointment_id=exclude_id,
        )

    def _ensure_available(self, barber_id: int, start, service: Service, exclude_id: Optional[int] = None) -> None:
        # held until the commit that persists the booking
        self.store.lock_barber(barber_id)
        result = self.check(barber_id, start, service, exclude_id=exclude_id)
        if result.conflict:
            logger.info(f"Rejected booking for barber {barber_id}: {result.message}")
            raise SchedulingConflictError(result.message, result)

    def create(self, barber_id: int, payload: AppointmentCreate) -> Appointment:
        # 1) Referenced records must exist
        self.store.get_client(payload.client_id)
        service = self.store.get_service(payload.service_id)
        self.store.get_barber(barber_id)

        # 2) Date policy
        start = normalize_datetime(payload.date, self.settings.shop_timezone)
        validate_booking_time(start, self.clock.now(), self.settings)

        # 3) Overlaps with the barber's other bookings
        self._ensure_available(barber_id, start, service)

        appt = Appointment(
            date=start,
            client_id=payload.client_id,
            service_id=payload.service_id,
            barber_id=barber_id,
            status=AppointmentStatus.SCHEDULED,
            payment_type=payload.payment_type,
            notes=payload.notes,
        )
        appt = self.store.save(appt)
        logger.info(f"Appointment {appt.id} booked for barber {barber_id} at {start:%Y-%m-%d %H:%M}")
        return appt

    def update(self, barber_id: int, appointment_id: int, payload: AppointmentUpdate) -> Appointment:
        appt = self.store.get_appointment(appointment_id, barber_id)

        new_start = appt.date
        if payload.date is not None:
            new_start = normalize_datetime(payload.date, self.settings.shop_timezone)
        date_changed = new_start != appt.date

        service_changed = payload.service_id is not None and payload.service_id != appt.service_id
        service = self.store.get_service(payload.service_id if service_changed else appt.service_id)

        if date_changed:
            validate_booking_time(new_start, self.clock.now(), self.settings)

        if (date_changed or service_changed) and appt.status == AppointmentStatus.SCHEDULED:
            self._ensure_available(barber_id, new_start, service, exclude_id=appt.id)

        appt.date = new_start
        appt.service_id = service.id
        if payload.notes is not None:
            appt.notes = payload.notes
        if payload.payment_type is not None:
            appt.payment_type = payload.payment_type

        appt = self.store.save(appt)
        if date_changed or service_changed:
            logger.info(f"Appointment {appt.id} rescheduled to {new_start:%Y-%m-%d %H:%M}")
        return appt

    def set_status(self, barber_id: int, appointment_id: int, status: AppointmentStatus) -> Appointment:
        appt = self.store.get_appointment(appointment_id, barber_id)
        if status == appt.status:
            return appt
        if status == AppointmentStatus.SCHEDULED:
            # reactivating takes the slot back, so it must still be free
            service = self.store.get_service(appt.service_id)
            self._ensure_available(barber_id, appt.date, service, exclude_id=appt.id)
        appt.status = status
        return self.store.save(appt)

    def complete(self, barber_id: int, appointment_id: int, payment_type: Optional[PaymentType] = None) -> Appointment:
        appt = self.store.get_appointment(appointment_id, barber_id)
        if appt.status == AppointmentStatus.CANCELED:
            raise ConflictError("Canceled appointments cannot be completed")
        appt.status = AppointmentStatus.COMPLETED
        if payment_type is not None:
            appt.payment_type = payment_type
        return self.store.save(appt)

    def cancel(self, barber_id: int, appointment_id: int) -> Appointment:
        appt = self.store.get_appointment(appointment_id, barber_id)
        if appt.status == AppointmentStatus.CANCELED:
            raise ConflictError("Appointment already canceled")
        appt.status = AppointmentStatus.CANCELED
        return self.store.save(appt)

    def set_payment(self, barber_id: int, appointment_id: int, payment_type: PaymentType) -> Appointment:
        appt = self.store.get_appointment(appointment_id, barber_id)
        appt.payment_type = payment_type
        return self.store.save(appt)

    def delete(self, barber_id: int, appointment_id: int) -> None:
        appt = self.store.get_appointment(appointment_id, barber_id)
        self.store.delete(appt)
        logger.info(f"Appointment {appointment_id} deleted by barber {barber_id}")
