# barbershop/routers/services_routes.py

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlmodel import Session, select

from barbershop.auth import CurrentBarber, get_current_barber
from barbershop.config import Settings, get_settings
from barbershop.db import get_session
from barbershop.deps import get_store
from barbershop.errors import BookingValidationError, ConflictError
from barbershop.models import Service
from barbershop.schemas import ServiceCreate, ServicePublic
from barbershop.store import AppointmentStore

router = APIRouter(
    prefix="/service",
    tags=["services"],
)


def _check_duration(duration: int, settings: Settings) -> None:
    # a longer service could overlap bookings outside the conflict window
    if duration > settings.conflict_window_minutes:
        raise BookingValidationError(
            f"Service duration cannot exceed {settings.conflict_window_minutes} minutes"
        )


@router.post("", response_model=ServicePublic, status_code=201)
def create_service(
    service: ServiceCreate,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    _check_duration(service.duration, settings)
    db_service = Service(name=service.name, price=service.price, duration=service.duration)
    session.add(db_service)
    session.commit()
    session.refresh(db_service)
    return db_service


@router.get("", response_model=List[ServicePublic])
def list_services(
    session: Session = Depends(get_session),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return session.exec(select(Service).order_by(Service.name)).all()


@router.put("/{service_id}", response_model=ServicePublic)
def update_service(
    service_id: int,
    service: ServiceCreate,
    store: AppointmentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    _check_duration(service.duration, settings)
    db_service = store.get_service(service_id)
    # existing bookings pick up the new duration at their next conflict check
    db_service.name = service.name
    db_service.price = service.price
    db_service.duration = service.duration
    store.session.add(db_service)
    store.session.commit()
    store.session.refresh(db_service)
    return db_service


@router.delete("/{service_id}", status_code=204)
def delete_service(
    service_id: int,
    store: AppointmentStore = Depends(get_store),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    db_service = store.get_service(service_id)
    if store.service_in_use(service_id):
        raise ConflictError("Service has appointments and cannot be deleted")
    store.session.delete(db_service)
    store.session.commit()
    return Response(status_code=204)
