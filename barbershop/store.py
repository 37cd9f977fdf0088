# barbershop/store.py

import logging
from datetime import date as Date, datetime, time, timedelta
from typing import List, Optional

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from barbershop.core import CandidateAppointment
from barbershop.errors import NotFoundError, SchedulingConflictError
from barbershop.models import Appointment, AppointmentStatus, Barber, Client, Service

logger = logging.getLogger(__name__)


def day_bounds(day: Date):
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


class AppointmentStore:
    """Database access for appointments and the records they reference."""

    def __init__(self, session: Session):
        self.session = session

    # conflict-check contract

    def find_scheduled_in_window(
        self,
        barber_id: int,
        window_start: datetime,
        window_end: datetime,
        exclude_id: Optional[int] = None,
    ) -> List[CandidateAppointment]:
        stmt = (
            select(Appointment.id, Appointment.date, Appointment.service_id, Service.duration, Service.name)
            .join(Service, Service.id == Appointment.service_id)
            .where(Appointment.barber_id == barber_id)
            .where(Appointment.status == AppointmentStatus.SCHEDULED)
            .where(Appointment.date >= window_start)
            .where(Appointment.date <= window_end)
        )
        if exclude_id is not None:
            stmt = stmt.where(Appointment.id != exclude_id)
        stmt = stmt.order_by(Appointment.date)

        rows = self.session.exec(stmt).all()
        logger.debug(
            f"Window query barber={barber_id} [{window_start} .. {window_end}] -> {len(rows)} rows"
        )
        return [
            CandidateAppointment(
                id=row[0],
                date=row[1],
                service_id=row[2],
                service_duration=row[3],
                service_name=row[4],
            )
            for row in rows
        ]

    def get_service_duration(self, service_id: int) -> int:
        return self.get_service(service_id).duration

    # lookups

    def get_service(self, service_id: int) -> Service:
        service = self.session.get(Service, service_id)
        if service is None:
            raise NotFoundError("Service not found")
        return service

    def get_client(self, client_id: int) -> Client:
        client = self.session.get(Client, client_id)
        if client is None:
            raise NotFoundError("Client not found")
        return client

    def get_barber(self, barber_id: int) -> Barber:
        barber = self.session.get(Barber, barber_id)
        if barber is None:
            raise NotFoundError("Barber not found")
        return barber

    def get_appointment(self, appointment_id: int, barber_id: int) -> Appointment:
        appt = self.session.get(Appointment, appointment_id)
        # another barber's appointment is reported as missing
        if appt is None or appt.barber_id != barber_id:
            raise NotFoundError("Appointment not found")
        return appt

    def lock_barber(self, barber_id: int) -> None:
        """Take the barber's write lock so check-then-insert runs one booking at a time.

        A no-op UPDATE row-locks the barber on PostgreSQL/MySQL and, on SQLite,
        opens the write transaction (RESERVED lock) before the conflict read.
        The lock is held until the session commits or rolls back.
        """
        stmt = update(Barber).where(Barber.id == barber_id).values(name=Barber.name)
        result = self.session.connection().execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError("Barber not found")

    # writes

    def save(self, appt: Appointment) -> Appointment:
        self.session.add(appt)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.warning(f"Scheduled-slot index rejected barber {appt.barber_id} at {appt.date}")
            raise SchedulingConflictError("Appointment already exists for that start time")
        self.session.refresh(appt)
        return appt

    def delete(self, appt: Appointment) -> None:
        self.session.delete(appt)
        self.session.commit()

    # listings, always scoped to one barber

    def _for_barber(self, barber_id: int):
        return select(Appointment).where(Appointment.barber_id == barber_id)

    def list_all(self, barber_id: int) -> List[Appointment]:
        return self.session.exec(self._for_barber(barber_id).order_by(Appointment.date)).all()

    def list_between(self, barber_id: int, start: datetime, end: datetime) -> List[Appointment]:
        stmt = (
            self._for_barber(barber_id)
            .where(Appointment.date >= start)
            .where(Appointment.date < end)
            .order_by(Appointment.date)
        )
        return self.session.exec(stmt).all()

    def list_on_day(self, barber_id: int, day: Date) -> List[Appointment]:
        return self.list_between(barber_id, *day_bounds(day))

    def list_after(self, barber_id: int, moment: datetime) -> List[Appointment]:
        stmt = self._for_barber(barber_id).where(Appointment.date > moment).order_by(Appointment.date)
        return self.session.exec(stmt).all()

    def list_by_client(self, barber_id: int, client_id: int) -> List[Appointment]:
        stmt = self._for_barber(barber_id).where(Appointment.client_id == client_id).order_by(Appointment.date)
        return self.session.exec(stmt).all()

    def list_by_status(self, barber_id: int, status: AppointmentStatus, limit: Optional[int] = None) -> List[Appointment]:
        stmt = self._for_barber(barber_id).where(Appointment.status == status).order_by(Appointment.date)
        if limit is not None:
            stmt = stmt.limit(limit)
        return self.session.exec(stmt).all()

    def count(self, barber_id: int, status: Optional[AppointmentStatus] = None) -> int:
        stmt = select(func.count()).select_from(Appointment).where(Appointment.barber_id == barber_id)
        if status is not None:
            stmt = stmt.where(Appointment.status == status)
        return self.session.exec(stmt).one()

    def service_in_use(self, service_id: int) -> bool:
        stmt = select(Appointment.id).where(Appointment.service_id == service_id).limit(1)
        return self.session.exec(stmt).first() is not None

    def client_in_use(self, client_id: int) -> bool:
        stmt = select(Appointment.id).where(Appointment.client_id == client_id).limit(1)
        return self.session.exec(stmt).first() is not None
