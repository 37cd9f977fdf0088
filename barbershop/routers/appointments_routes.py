# barbershop/routers/appointments_routes.py

from datetime import date as Date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Response

from barbershop.auth import CurrentBarber, get_current_barber
from barbershop.booking import BookingService
from barbershop.deps import get_booking_service, get_clock, get_store
from barbershop.models import Appointment, AppointmentStatus
from barbershop.rules import Clock
from barbershop.schemas import (
    AppointmentCreate,
    AppointmentPublic,
    AppointmentUpdate,
    CompleteRequest,
    ConflictPublic,
    PaymentUpdate,
    StatusUpdate,
)
from barbershop.store import AppointmentStore

router = APIRouter(
    prefix="/appointment",
    tags=["appointments"],
)


def to_public(appt: Appointment) -> AppointmentPublic:
    # built while the session is open so client/service can load
    return AppointmentPublic.model_validate(appt)


def to_public_list(appts: List[Appointment]) -> List[AppointmentPublic]:
    return [to_public(a) for a in appts]


@router.post("", response_model=AppointmentPublic, status_code=201)
def create_appointment(
    appt: AppointmentCreate,
    booking: BookingService = Depends(get_booking_service),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return to_public(booking.create(current_barber.id, appt))


@router.get("", response_model=List[AppointmentPublic])
def list_appointments(
    store: AppointmentStore = Depends(get_store),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return to_public_list(store.list_all(current_barber.id))


@router.get("/today", response_model=List[AppointmentPublic])
def list_today(
    store: AppointmentStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return to_public_list(store.list_on_day(current_barber.id, clock.now().date()))


@router.get("/future", response_model=List[AppointmentPublic])
def list_future(
    store: AppointmentStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return to_public_list(store.list_after(current_barber.id, clock.now()))


@router.get("/by-date", response_model=List[AppointmentPublic])
def list_by_date(
    date: Date,
    store: AppointmentStore = Depends(get_store),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return to_public_list(store.list_on_day(current_barber.id, date))


@router.get("/by-client/{client_id}", response_model=List[AppointmentPublic])
def list_by_client(
    client_id: int,
    store: AppointmentStore = Depends(get_store),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return to_public_list(store.list_by_client(current_barber.id, client_id))


@router.get("/status/{status}", response_model=List[AppointmentPublic])
def list_by_status(
    status: AppointmentStatus,
    store: AppointmentStore = Depends(get_store),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return to_public_list(store.list_by_status(current_barber.id, status))


@router.get("/conflicts", response_model=ConflictPublic)
def preview_conflict(
    date: datetime,
    service_id: int,
    exclude_id: Optional[int] = None,
    store: AppointmentStore = Depends(get_store),
    booking: BookingService = Depends(get_booking_service),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    service = store.get_service(service_id)
    result = booking.check(current_barber.id, date, service, exclude_id=exclude_id)
    return result.to_dict()


@router.get("/{appt_id}", response_model=AppointmentPublic)
def get_appointment(
    appt_id: int,
    store: AppointmentStore = Depends(get_store),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return to_public(store.get_appointment(appt_id, current_barber.id))


@router.put("/{appt_id}", response_model=AppointmentPublic)
def update_appointment(
    appt_id: int,
    changes: AppointmentUpdate,
    booking: BookingService = Depends(get_booking_service),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return to_public(booking.update(current_barber.id, appt_id, changes))


@router.patch("/{appt_id}/status", response_model=AppointmentPublic)
def update_status(
    appt_id: int,
    body: StatusUpdate,
    booking: BookingService = Depends(get_booking_service),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return to_public(booking.set_status(current_barber.id, appt_id, body.status))


@router.put("/{appt_id}/complete", response_model=AppointmentPublic)
def complete_appointment(
    appt_id: int,
    body: Optional[CompleteRequest] = None,
    booking: BookingService = Depends(get_booking_service),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    payment_type = body.payment_type if body is not None else None
    return to_public(booking.complete(current_barber.id, appt_id, payment_type))


@router.patch("/{appt_id}/cancel", response_model=AppointmentPublic)
def cancel_appointment(
    appt_id: int,
    booking: BookingService = Depends(get_booking_service),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return to_public(booking.cancel(current_barber.id, appt_id))


@router.patch("/{appt_id}/payment", response_model=AppointmentPublic)
def update_payment(
    appt_id: int,
    body: PaymentUpdate,
    booking: BookingService = Depends(get_booking_service),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return to_public(booking.set_payment(current_barber.id, appt_id, body.payment_type))


@router.delete("/{appt_id}", status_code=204)
def delete_appointment(
    appt_id: int,
    booking: BookingService = Depends(get_booking_service),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    booking.delete(current_barber.id, appt_id)
    return Response(status_code=204)
