from __future__ import annotations

from abc import ABC, abstractmethod

from lockersys.core.entities.page import Page, PageRequest
from lockersys.core.entities.payment import Payment


class PaymentRepository(ABC):
    @abstractmethod
    def get(self, payment_id: str) -> Payment | None:
        raise NotImplementedError

    @abstractmethod
    def list(self, page: PageRequest, *, rental_id: str | None = None) -> Page[Payment]:
        raise NotImplementedError

    @abstractmethod
    def add(self, payment: Payment) -> None:
        raise NotImplementedError

    @abstractmethod
    def update(self, payment: Payment) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, payment_id: str) -> None:
        raise NotImplementedError
