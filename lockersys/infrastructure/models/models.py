from __future__ import annotations

import enum
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import (
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lockersys.core.entities.client import ClientStatus
from lockersys.core.entities.locker import LockerSize, LockerStatus
from lockersys.core.entities.payment import PaymentMethod, PaymentRecordStatus
from lockersys.core.entities.rental import PaymentStatus, RentalStatus
from lockersys.infrastructure.database import Base


def _uuid() -> str:
    return str(uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _enum(enum_cls: type[enum.Enum], name: str) -> Enum:
    """Store enum values ('available'), not member names ('AVAILABLE')."""
    return Enum(enum_cls, name=name, values_callable=lambda members: [m.value for m in members])


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)


class UserModel(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False, default="admin")

    session_tokens = relationship("SessionTokenModel", back_populates="user", cascade="all, delete-orphan")


class SessionTokenModel(Base):
    __tablename__ = "session_tokens"

    token_hash: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    revoked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user = relationship("UserModel", back_populates="session_tokens")


class ClientModel(TimestampMixin, Base):
    __tablename__ = "clients"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    document: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[ClientStatus] = mapped_column(
        _enum(ClientStatus, "client_status"), nullable=False, default=ClientStatus.ACTIVE, index=True
    )

    rentals = relationship("RentalModel", back_populates="client")


class LocationModel(TimestampMixin, Base):
    __tablename__ = "locations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class LockerModel(TimestampMixin, Base):
    __tablename__ = "lockers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    size: Mapped[LockerSize] = mapped_column(_enum(LockerSize, "locker_size"), nullable=False, index=True)
    status: Mapped[LockerStatus] = mapped_column(
        _enum(LockerStatus, "locker_status"), nullable=False, default=LockerStatus.AVAILABLE, index=True
    )
    monthly_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    rentals = relationship("RentalModel", back_populates="locker")


class RentalModel(TimestampMixin, Base):
    __tablename__ = "rentals"
    __table_args__ = (
        Index("idx_rentals_dates", "start_date", "end_date"),
        # at most one active rental per locker
        Index(
            "uq_rentals_active_locker",
            "locker_id",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    locker_id: Mapped[str] = mapped_column(ForeignKey("lockers.id", ondelete="RESTRICT"), nullable=False, index=True)
    client_id: Mapped[str] = mapped_column(ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    monthly_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[RentalStatus] = mapped_column(
        _enum(RentalStatus, "rental_status"), nullable=False, default=RentalStatus.ACTIVE, index=True
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        _enum(PaymentStatus, "rental_payment_status"), nullable=False, default=PaymentStatus.PENDING, index=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    locker = relationship("LockerModel", back_populates="rentals")
    client = relationship("ClientModel", back_populates="rentals")
    payments = relationship("PaymentModel", back_populates="rental", cascade="all, delete-orphan")


class PaymentModel(TimestampMixin, Base):
    __tablename__ = "payments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    rental_id: Mapped[str] = mapped_column(ForeignKey("rentals.id", ondelete="CASCADE"), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    payment_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    method: Mapped[PaymentMethod] = mapped_column(_enum(PaymentMethod, "payment_method"), nullable=False, index=True)
    status: Mapped[PaymentRecordStatus] = mapped_column(
        _enum(PaymentRecordStatus, "payment_record_status"),
        nullable=False,
        default=PaymentRecordStatus.PENDING,
        index=True,
    )

    rental = relationship("RentalModel", back_populates="payments")
