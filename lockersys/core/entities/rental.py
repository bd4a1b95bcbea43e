from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from lockersys.core.entities.client import Client
from lockersys.core.entities.locker import Locker


class RentalStatus(str, Enum):
    ACTIVE = "active"
    OVERDUE = "overdue"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


_CENTS = Decimal("0.01")


def months_between(start: date, end: date) -> int:
    """
    Count billable months from `start` to `end`.

    Whole calendar months elapsed, plus one more when the end day-of-month
    reaches the start day-of-month (the trailing partial month is billed in
    full). Equal or reversed dates bill nothing.
    """
    if end <= start:
        return 0

    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day >= start.day:
        months += 1
    return max(0, months)


def total_amount(start: date, end: date, monthly_price: Decimal) -> Decimal:
    months = months_between(start, end)
    return (Decimal(months) * Decimal(monthly_price)).quantize(_CENTS, rounding=ROUND_HALF_UP)


@dataclass(slots=True)
class Rental:
    id: str
    locker_id: str
    client_id: str
    start_date: date
    end_date: date
    monthly_price: Decimal
    total_amount: Decimal
    status: RentalStatus = RentalStatus.ACTIVE
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # Relations, resolved for display
    locker: Locker | None = None
    client: Client | None = None

    @property
    def is_active(self) -> bool:
        return self.status is RentalStatus.ACTIVE

    @property
    def months(self) -> int:
        return months_between(self.start_date, self.end_date)
