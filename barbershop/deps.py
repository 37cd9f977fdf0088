# barbershop/deps.py

from fastapi import Depends
from sqlmodel import Session

from barbershop.booking import BookingService
from barbershop.config import Settings, get_settings
from barbershop.db import get_session
from barbershop.rules import Clock
from barbershop.store import AppointmentStore


def get_clock(settings: Settings = Depends(get_settings)) -> Clock:
    return Clock(settings.shop_timezone)


def get_store(session: Session = Depends(get_session)) -> AppointmentStore:
    return AppointmentStore(session)


def get_booking_service(
    store: AppointmentStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
) -> BookingService:
    return BookingService(store, clock, settings)
