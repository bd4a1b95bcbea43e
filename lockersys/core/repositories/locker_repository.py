from __future__ import annotations

from abc import ABC, abstractmethod

from lockersys.core.entities.locker import Locker, LockerSize, LockerStatus
from lockersys.core.entities.page import Page, PageRequest


class LockerRepository(ABC):
    @abstractmethod
    def get(self, locker_id: str) -> Locker | None:
        raise NotImplementedError

    @abstractmethod
    def get_by_number(self, number: str) -> Locker | None:
        raise NotImplementedError

    @abstractmethod
    def list(
        self,
        page: PageRequest,
        *,
        status: LockerStatus | None = None,
        size: LockerSize | None = None,
        search: str | None = None,
    ) -> Page[Locker]:
        raise NotImplementedError

    @abstractmethod
    def list_available(self) -> list[Locker]:
        raise NotImplementedError

    @abstractmethod
    def count_by_status(self) -> dict[LockerStatus, int]:
        """Return a count for every LockerStatus (zero when no locker has it)."""
        raise NotImplementedError

    @abstractmethod
    def add(self, locker: Locker) -> None:
        raise NotImplementedError

    @abstractmethod
    def update(self, locker: Locker) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, locker_id: str) -> None:
        raise NotImplementedError
