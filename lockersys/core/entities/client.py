from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ClientStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass(slots=True)
class Client:
    id: str
    name: str
    email: str
    document: str
    phone: str | None = None
    address: str | None = None
    status: ClientStatus = ClientStatus.ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None
