from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    PIX = "pix"
    TRANSFER = "transfer"


class PaymentRecordStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True)
class Payment:
    id: str
    rental_id: str
    amount: Decimal
    payment_date: date
    method: PaymentMethod
    status: PaymentRecordStatus = PaymentRecordStatus.PENDING
    created_at: datetime | None = None
    updated_at: datetime | None = None
