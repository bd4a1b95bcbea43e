from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from lockersys.core.entities.location import Location
from lockersys.core.entities.page import Page, PageRequest
from lockersys.core.errors import ConflictError, NotFoundError
from lockersys.core.repositories.location_repository import LocationRepository
from lockersys.core.repositories.unit_of_work import UnitOfWork
from lockersys.core.use_cases.common import new_id, optional_text, reject_unknown_fields, require_text

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "description"})


@dataclass(frozen=True, slots=True)
class CreateLocationCommand:
    name: str
    description: str | None = None


def _ensure_unique_name(location_repo: LocationRepository, location: Location) -> None:
    duplicate = location_repo.get_by_name(location.name)
    if duplicate is not None and duplicate.id != location.id:
        raise ConflictError(f"Location {location.name!r} already exists")


class CreateLocationUseCase:
    def __init__(self, *, location_repo: LocationRepository, uow: UnitOfWork) -> None:
        self._location_repo = location_repo
        self._uow = uow

    def execute(self, command: CreateLocationCommand) -> Location:
        location = Location(
            id=new_id(),
            name=require_text(command.name, "name"),
            description=optional_text(command.description),
        )
        _ensure_unique_name(self._location_repo, location)

        with self._uow:
            self._location_repo.add(location)

        logger.info("Location %s created", location.name)
        return self._location_repo.get(location.id)


class GetLocationUseCase:
    def __init__(self, *, location_repo: LocationRepository) -> None:
        self._location_repo = location_repo

    def execute(self, *, location_id: str) -> Location:
        location = self._location_repo.get(location_id)
        if location is None:
            raise NotFoundError("Location not found")
        return location


class ListLocationsUseCase:
    def __init__(self, *, location_repo: LocationRepository) -> None:
        self._location_repo = location_repo

    def execute(self, *, page: PageRequest, search: str | None = None) -> Page[Location]:
        return self._location_repo.list(page, search=optional_text(search))


class UpdateLocationUseCase:
    def __init__(self, *, location_repo: LocationRepository, uow: UnitOfWork) -> None:
        self._location_repo = location_repo
        self._uow = uow

    def execute(self, *, location_id: str, changes: dict[str, Any]) -> Location:
        location = self._location_repo.get(location_id)
        if location is None:
            raise NotFoundError("Location not found")

        reject_unknown_fields(changes, UPDATABLE_FIELDS)

        if "name" in changes:
            location.name = require_text(changes["name"], "name")
            _ensure_unique_name(self._location_repo, location)
        if "description" in changes:
            location.description = optional_text(changes["description"])

        with self._uow:
            self._location_repo.update(location)

        return self._location_repo.get(location.id)


class DeleteLocationUseCase:
    def __init__(self, *, location_repo: LocationRepository, uow: UnitOfWork) -> None:
        self._location_repo = location_repo
        self._uow = uow

    def execute(self, *, location_id: str) -> bool:
        location = self._location_repo.get(location_id)
        if location is None:
            raise NotFoundError("Location not found")

        with self._uow:
            self._location_repo.delete(location.id)

        logger.info("Location %s deleted", location.name)
        return True
