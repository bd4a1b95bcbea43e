from __future__ import annotations

from abc import ABC, abstractmethod

from lockersys.core.entities.location import Location
from lockersys.core.entities.page import Page, PageRequest


class LocationRepository(ABC):
    @abstractmethod
    def get(self, location_id: str) -> Location | None:
        raise NotImplementedError

    @abstractmethod
    def get_by_name(self, name: str) -> Location | None:
        raise NotImplementedError

    @abstractmethod
    def list(self, page: PageRequest, *, search: str | None = None) -> Page[Location]:
        raise NotImplementedError

    @abstractmethod
    def add(self, location: Location) -> None:
        raise NotImplementedError

    @abstractmethod
    def update(self, location: Location) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, location_id: str) -> None:
        raise NotImplementedError
