from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Generic, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from lockersys.core.entities.client import ClientStatus
from lockersys.core.entities.locker import LockerSize, LockerStatus
from lockersys.core.entities.page import Page
from lockersys.core.entities.payment import PaymentMethod, PaymentRecordStatus
from lockersys.core.entities.rental import PaymentStatus, RentalStatus

T = TypeVar("T")

# Money is a Decimal internally and a JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """
    Wire models: camelCase on the wire, snake_case in Python.
    snake_case input is accepted too, so older clients keep working.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# -----------------------------
# Envelope
# -----------------------------
class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    message: str | None = None
    data: T | None = None


class PaginatedResponse(CamelModel, Generic[T]):
    success: bool = True
    data: list[T] = Field(default_factory=list)
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page, item_model: type[BaseModel]) -> PaginatedResponse:
        return cls(
            data=[item_model.model_validate(item) for item in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )


class HealthStatus(CamelModel):
    success: bool = True
    message: str
    timestamp: datetime
    database: str


# -----------------------------
# Lockers
# -----------------------------
class LockerCreate(CamelModel):
    number: str
    location: str
    size: LockerSize
    monthly_price: Decimal = Field(ge=0)
    status: LockerStatus = LockerStatus.AVAILABLE


class LockerUpdate(CamelModel):
    number: str | None = None
    location: str | None = None
    size: LockerSize | None = None
    monthly_price: Decimal | None = Field(default=None, ge=0)
    status: LockerStatus | None = None


class LockerOut(CamelModel):
    id: str
    number: str
    location: str
    size: LockerSize
    status: LockerStatus
    monthly_price: Money
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LockerStats(CamelModel):
    total: int
    available: int
    rented: int
    maintenance: int
    reserved: int


# -----------------------------
# Locations
# -----------------------------
class LocationCreate(CamelModel):
    name: str
    description: str | None = None


class LocationUpdate(CamelModel):
    name: str | None = None
    description: str | None = None


class LocationOut(CamelModel):
    id: str
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# -----------------------------
# Clients
# -----------------------------
class ClientCreate(CamelModel):
    name: str
    email: str
    document: str
    phone: str | None = None
    address: str | None = None
    status: ClientStatus = ClientStatus.ACTIVE


class ClientUpdate(CamelModel):
    name: str | None = None
    email: str | None = None
    document: str | None = None
    phone: str | None = None
    address: str | None = None
    status: ClientStatus | None = None


class ClientOut(CamelModel):
    id: str
    name: str
    email: str
    phone: str | None = None
    document: str
    address: str | None = None
    status: ClientStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None


# -----------------------------
# Rentals
# -----------------------------
_CLIENT_ID_ALIASES = AliasChoices("clientId", "client_id", "studentId", "student_id")


class RentalCreate(CamelModel):
    locker_id: str
    client_id: str = Field(validation_alias=_CLIENT_ID_ALIASES)
    start_date: date
    end_date: date
    monthly_price: Decimal
    total_amount: Decimal
    status: RentalStatus = RentalStatus.ACTIVE
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: str | None = None


class RentalUpdate(CamelModel):
    locker_id: str | None = None
    client_id: str | None = Field(default=None, validation_alias=_CLIENT_ID_ALIASES)
    start_date: date | None = None
    end_date: date | None = None
    monthly_price: Decimal | None = None
    total_amount: Decimal | None = None
    status: RentalStatus | None = None
    payment_status: PaymentStatus | None = None
    notes: str | None = None


class RentalOut(CamelModel):
    id: str
    locker_id: str
    client_id: str
    start_date: date
    end_date: date
    months: int
    monthly_price: Money
    total_amount: Money
    status: RentalStatus
    payment_status: PaymentStatus
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    locker: LockerOut | None = None
    client: ClientOut | None = None


class RentalQuote(CamelModel):
    start_date: date
    end_date: date
    months: int
    monthly_price: Money
    total_amount: Money


# -----------------------------
# Payments
# -----------------------------
class PaymentCreate(CamelModel):
    rental_id: str
    amount: Decimal
    payment_date: date
    method: PaymentMethod
    status: PaymentRecordStatus = PaymentRecordStatus.PENDING


class PaymentUpdate(CamelModel):
    amount: Decimal | None = None
    payment_date: date | None = None
    method: PaymentMethod | None = None
    status: PaymentRecordStatus | None = None


class PaymentOut(CamelModel):
    id: str
    rental_id: str
    amount: Money
    payment_date: date
    method: PaymentMethod
    status: PaymentRecordStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None


# -----------------------------
# Dashboard
# -----------------------------
class DashboardStats(CamelModel):
    total_lockers: int
    available_lockers: int
    rented_lockers: int
    maintenance_lockers: int
    reserved_lockers: int
    total_rentals: int
    active_rentals: int
    overdue_rentals: int
    completed_rentals: int
    monthly_revenue: Money
    total_clients: int


# -----------------------------
# Auth
# -----------------------------
class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class RegisterRequest(CamelModel):
    name: str
    email: str
    password: str


class UserOut(CamelModel):
    id: str
    name: str
    email: str
    role: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AuthSession(CamelModel):
    user: UserOut
    token: str
    expires_at: datetime
