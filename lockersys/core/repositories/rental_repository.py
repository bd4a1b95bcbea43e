from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from lockersys.core.entities.page import Page, PageRequest
from lockersys.core.entities.rental import PaymentStatus, Rental, RentalStatus


class RentalRepository(ABC):
    @abstractmethod
    def get(self, rental_id: str) -> Rental | None:
        """Load a rental with its locker and client relations resolved."""
        raise NotImplementedError

    @abstractmethod
    def find_active_for_locker(self, locker_id: str, *, exclude_id: str | None = None) -> Rental | None:
        raise NotImplementedError

    @abstractmethod
    def exists_for_locker(self, locker_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def exists_for_client(self, client_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def list(
        self,
        page: PageRequest,
        *,
        status: RentalStatus | None = None,
        locker_id: str | None = None,
        client_id: str | None = None,
        search: str | None = None,
    ) -> Page[Rental]:
        raise NotImplementedError

    @abstractmethod
    def count_by_status(self) -> dict[RentalStatus, int]:
        raise NotImplementedError

    @abstractmethod
    def sum_total_amount(self, *, payment_status: PaymentStatus) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def add(self, rental: Rental) -> None:
        raise NotImplementedError

    @abstractmethod
    def update(self, rental: Rental) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, rental_id: str) -> None:
        """Delete a rental together with its payments."""
        raise NotImplementedError
