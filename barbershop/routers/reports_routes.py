# barbershop/routers/reports_routes.py

from collections import Counter
from datetime import date as Date, datetime, time, timedelta
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlmodel import Session, select

from barbershop.auth import CurrentBarber, get_current_barber
from barbershop.db import get_session
from barbershop.deps import get_clock, get_store
from barbershop.models import Appointment, Service
from barbershop.rules import Clock
from barbershop.schemas import (
    DateReport,
    HourReport,
    MonthlySummary,
    ServiceReport,
    TotalReport,
    WeeklySummary,
)
from barbershop.store import AppointmentStore

router = APIRouter(
    prefix="/reports",
    tags=["reports"],
)


def _period_totals(session: Session, barber_id: int, start: datetime, end: datetime):
    # every status counts, priced at the service's current price
    count, revenue = session.exec(
        select(func.count(Appointment.id), func.coalesce(func.sum(Service.price), 0.0))
        .join(Service, Service.id == Appointment.service_id)
        .where(Appointment.barber_id == barber_id)
        .where(Appointment.date >= start)
        .where(Appointment.date <= end)
    ).one()
    return count, float(revenue)


@router.get("/appointments-by-service", response_model=List[ServiceReport])
def appointments_by_service(
    session: Session = Depends(get_session),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    count = func.count(Appointment.id).label("count")
    rows = session.exec(
        select(Service.id, Service.name, Service.price, count)
        .join(Appointment, Appointment.service_id == Service.id)
        .where(Appointment.barber_id == current_barber.id)
        .group_by(Service.id, Service.name, Service.price)
        .order_by(count.desc(), Service.name)
    ).all()
    return [
        {
            "service_id": service_id,
            "service_name": name,
            "appointment_count": n,
            "total_revenue": n * price,
        }
        for service_id, name, price, n in rows
    ]


@router.get("/appointments-by-date", response_model=DateReport)
def appointments_by_date(
    date: Date,
    store: AppointmentStore = Depends(get_store),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return {"date": date, "appointments": len(store.list_on_day(current_barber.id, date))}


@router.get("/total-appointments", response_model=TotalReport)
def total_appointments(
    store: AppointmentStore = Depends(get_store),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    return {"total_appointments": store.count(current_barber.id)}


@router.get("/weekly-summary", response_model=WeeklySummary)
def weekly_summary(
    session: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    now = clock.now()
    start = datetime.combine(now.date() - timedelta(days=7), time.min)
    total, revenue = _period_totals(session, current_barber.id, start, now)
    return {"period": "Last 7 days", "total_appointments": total, "total_revenue": revenue}


@router.get("/monthly-summary", response_model=MonthlySummary)
def monthly_summary(
    session: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    now = clock.now()
    start = datetime.combine(now.date().replace(day=1), time.min)
    total, revenue = _period_totals(session, current_barber.id, start, now)
    return {"month": f"{now:%B %Y}", "total_appointments": total, "total_revenue": revenue}


@router.get("/popular-hours", response_model=List[HourReport])
def popular_hours(
    store: AppointmentStore = Depends(get_store),
    current_barber: CurrentBarber = Depends(get_current_barber),
):
    hours = Counter(a.date.hour for a in store.list_all(current_barber.id))
    ranked = sorted(hours.items(), key=lambda item: (-item[1], item[0]))
    return [{"hour": f"{hour:02d}:00", "appointment_count": n} for hour, n in ranked]
