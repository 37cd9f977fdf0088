# barbershop/models.py

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Column, DateTime, Index, text
from sqlmodel import SQLModel, Field, Relationship


class AppointmentStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class PaymentType(str, Enum):
    PENDING = "PENDING"
    PIX = "PIX"
    CARD = "CARD"
    CASH = "CASH"


class Barber(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    password_hash: str


class Client(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    phone: Optional[str] = Field(default=None, unique=True)


class Service(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    price: float
    duration: int  # minutes


class Appointment(SQLModel, table=True):
    # Only one SCHEDULED booking may start at a given instant for a barber.
    # Overlap itself is enforced by the conflict checker.
    __table_args__ = (
        Index(
            "uq_barber_scheduled_start",
            "barber_id",
            "date",
            unique=True,
            sqlite_where=text("status = 'SCHEDULED'"),
            postgresql_where=text("status = 'SCHEDULED'"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    # naive shop-local time; plain DateTime so no tz is required on bind
    date: datetime = Field(sa_column=Column(DateTime(timezone=False), index=True, nullable=False))
    client_id: int = Field(foreign_key="client.id", index=True)
    service_id: int = Field(foreign_key="service.id")
    barber_id: int = Field(foreign_key="barber.id", index=True)
    status: AppointmentStatus = Field(default=AppointmentStatus.SCHEDULED, index=True)
    payment_type: PaymentType = PaymentType.PENDING
    notes: Optional[str] = None

    client: Optional[Client] = Relationship()
    service: Optional[Service] = Relationship()
