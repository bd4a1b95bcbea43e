from __future__ import annotations

from abc import ABC, abstractmethod

from lockersys.core.entities.client import Client, ClientStatus
from lockersys.core.entities.page import Page, PageRequest


class ClientRepository(ABC):
    @abstractmethod
    def get(self, client_id: str) -> Client | None:
        raise NotImplementedError

    @abstractmethod
    def find_duplicate(self, *, email: str, document: str, exclude_id: str | None = None) -> Client | None:
        """Return another client sharing `email` or `document`, if any."""
        raise NotImplementedError

    @abstractmethod
    def list(
        self,
        page: PageRequest,
        *,
        status: ClientStatus | None = None,
        search: str | None = None,
    ) -> Page[Client]:
        raise NotImplementedError

    @abstractmethod
    def count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def add(self, client: Client) -> None:
        raise NotImplementedError

    @abstractmethod
    def update(self, client: Client) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, client_id: str) -> None:
        raise NotImplementedError
