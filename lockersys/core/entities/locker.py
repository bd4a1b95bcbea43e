from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class LockerSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class LockerStatus(str, Enum):
    AVAILABLE = "available"
    RENTED = "rented"
    MAINTENANCE = "maintenance"
    RESERVED = "reserved"


RENTABLE_STATUSES = frozenset({LockerStatus.AVAILABLE, LockerStatus.RESERVED})


@dataclass(slots=True)
class Locker:
    id: str
    number: str
    location: str
    size: LockerSize
    monthly_price: Decimal
    status: LockerStatus = LockerStatus.AVAILABLE
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def mark_rented(self) -> None:
        if self.status not in RENTABLE_STATUSES:
            raise ValueError(f"Locker {self.number!r} is not available (status {self.status.value!r})")
        self.status = LockerStatus.RENTED

    def release(self) -> None:
        if self.status is LockerStatus.RENTED:
            self.status = LockerStatus.AVAILABLE
