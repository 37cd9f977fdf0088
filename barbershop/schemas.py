# barbershop/schemas.py

from datetime import date as Date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from barbershop.models import AppointmentStatus, PaymentType


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class BarberCreate(BaseModel):
    name: str = Field(min_length=2)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=6, max_length=72)


class BarberPublic(BaseModel):
    id: int
    name: str
    email: str


class ClientCreate(BaseModel):
    name: str = Field(min_length=2)
    phone: Optional[str] = Field(default=None, max_length=15)

    @field_validator("phone")
    @classmethod
    def blank_phone_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v.strip() == "":
            return None
        return v


class ClientPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    phone: Optional[str] = None


class ServiceCreate(BaseModel):
    name: str = Field(min_length=2)
    price: float = Field(ge=0)
    duration: int = Field(gt=0)  # minutes


class ServicePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: float
    duration: int


class AppointmentCreate(BaseModel):
    date: datetime
    client_id: int = Field(gt=0)
    service_id: int = Field(gt=0)
    payment_type: PaymentType = PaymentType.PENDING
    notes: Optional[str] = None


class AppointmentUpdate(BaseModel):
    date: Optional[datetime] = None
    service_id: Optional[int] = Field(default=None, gt=0)
    notes: Optional[str] = None
    payment_type: Optional[PaymentType] = None


class StatusUpdate(BaseModel):
    status: AppointmentStatus


class PaymentUpdate(BaseModel):
    payment_type: PaymentType


class CompleteRequest(BaseModel):
    payment_type: Optional[PaymentType] = None


class AppointmentPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: datetime
    client_id: int
    service_id: int
    barber_id: int
    status: AppointmentStatus
    payment_type: PaymentType
    notes: Optional[str] = None
    client: Optional[ClientPublic] = None
    service: Optional[ServicePublic] = None


class ConflictPublic(BaseModel):
    conflict: bool
    existing_start: Optional[datetime] = None
    existing_end: Optional[datetime] = None
    existing_service_name: Optional[str] = None
    requested_start: Optional[datetime] = None
    requested_end: Optional[datetime] = None
    requested_service_name: Optional[str] = None
    message: Optional[str] = None


class DashboardOverview(BaseModel):
    total_clients: int
    total_services: int
    total_appointments: int
    completed_appointments: int


class DashboardRevenue(BaseModel):
    total_revenue: float
    month_revenue: float


class PopularService(BaseModel):
    service_id: int
    service_name: str
    quantity: int


class ServiceReport(BaseModel):
    service_id: int
    service_name: str
    appointment_count: int
    total_revenue: float


class DateReport(BaseModel):
    date: Date
    appointments: int


class TotalReport(BaseModel):
    total_appointments: int


class WeeklySummary(BaseModel):
    period: str
    total_appointments: int
    total_revenue: float


class MonthlySummary(BaseModel):
    month: str
    total_appointments: int
    total_revenue: float


class HourReport(BaseModel):
    hour: str
    appointment_count: int
