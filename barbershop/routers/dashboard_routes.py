# barbershop/routers/dashboard_routes.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlmodel import Session, select

from barbershop.auth import CurrentBarber, get_current_barber
from barbershop.db import get_session
from barbershop.deps import get_clock, get_store
from barbershop.models import Appointment, AppointmentStatus, Client, Service
from barbershop.routers.appointments_routes import to_public_list
from barbershop.rules import Clock
from barbershop.schemas import AppointmentPublic, DashboardOverview, DashboardRevenue, PopularService
from barbershop.store import AppointmentStore

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
)

UPCOMING_LIMIT = 5
POPULAR_LIMIT = 5


@router.get("/overview", response_model=DashboardOverview)
def overview(
    store: AppointmentStore = Depends(get_store),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    session = store.session
    return {
        "total_clients": session.exec(select(func.count()).select_from(Client)).one(),
        "total_services": session.exec(select(func.count()).select_from(Service)).one(),
        "total_appointments": store.count(current_barber.id),
        "completed_appointments": store.count(current_barber.id, AppointmentStatus.COMPLETED),
    }


@router.get("/revenue", response_model=DashboardRevenue)
def revenue(
    session: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    finished = session.exec(
        select(Appointment.date, Service.price)
        .join(Service, Service.id == Appointment.service_id)
        .where(Appointment.barber_id == current_barber.id)
        .where(Appointment.status == AppointmentStatus.COMPLETED)
    ).all()

    now = clock.now()
    total = sum(price for _, price in finished)
    month = sum(
        price for when, price in finished
        if when.year == now.year and when.month == now.month
    )
    return {"total_revenue": total, "month_revenue": month}


@router.get("/upcoming-appointments", response_model=List[AppointmentPublic])
def upcoming(
    store: AppointmentStore = Depends(get_store),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    appts = store.list_by_status(current_barber.id, AppointmentStatus.SCHEDULED, limit=UPCOMING_LIMIT)
    return to_public_list(appts)


@router.get("/popular-services", response_model=List[PopularService])
def popular_services(
    session: Session = Depends(get_session),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    quantity = func.count(Appointment.id).label("quantity")
    rows = session.exec(
        select(Service.id, Service.name, quantity)
        .join(Appointment, Appointment.service_id == Service.id)
        .where(Appointment.barber_id == current_barber.id)
        .group_by(Service.id, Service.name)
        .order_by(quantity.desc())
        .limit(POPULAR_LIMIT)
    ).all()
    return [
        {"service_id": service_id, "service_name": name, "quantity": count}
        for service_id, name, count in rows
    ]
