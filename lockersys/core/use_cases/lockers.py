from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from lockersys.core.entities.locker import Locker, LockerSize, LockerStatus
from lockersys.core.entities.page import Page, PageRequest
from lockersys.core.errors import ConflictError, NotFoundError, ValidationError
from lockersys.core.repositories.locker_repository import LockerRepository
from lockersys.core.repositories.rental_repository import RentalRepository
from lockersys.core.repositories.unit_of_work import UnitOfWork
from lockersys.core.use_cases.common import (
    new_id,
    optional_text,
    reject_unknown_fields,
    require_non_negative,
    require_text,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"number", "location", "size", "monthly_price", "status"})


@dataclass(frozen=True, slots=True)
class CreateLockerCommand:
    number: str
    location: str
    size: LockerSize | None
    monthly_price: Decimal | None
    status: LockerStatus = LockerStatus.AVAILABLE


@dataclass(frozen=True, slots=True)
class LockerStatsDTO:
    total: int
    available: int
    rented: int
    maintenance: int
    reserved: int


class CreateLockerUseCase:
    def __init__(self, *, locker_repo: LockerRepository, uow: UnitOfWork) -> None:
        self._locker_repo = locker_repo
        self._uow = uow

    def execute(self, command: CreateLockerCommand) -> Locker:
        number = require_text(command.number, "number")
        location = require_text(command.location, "location")
        if command.size is None:
            raise ValidationError("size is required")
        monthly_price = require_non_negative(command.monthly_price, "monthlyPrice")

        # A new locker has no rental that could justify `rented`
        if command.status is LockerStatus.RENTED:
            raise ConflictError("A locker can only become rented through a rental")

        if self._locker_repo.get_by_number(number) is not None:
            raise ConflictError(f"Locker number {number!r} is already in use")

        locker = Locker(
            id=new_id(),
            number=number,
            location=location,
            size=LockerSize(command.size),
            monthly_price=monthly_price,
            status=LockerStatus(command.status),
        )
        with self._uow:
            self._locker_repo.add(locker)

        logger.info("Locker %s created at %s", locker.number, locker.location)
        return self._locker_repo.get(locker.id)


class GetLockerUseCase:
    def __init__(self, *, locker_repo: LockerRepository) -> None:
        self._locker_repo = locker_repo

    def execute(self, *, locker_id: str) -> Locker:
        locker = self._locker_repo.get(locker_id)
        if locker is None:
            raise NotFoundError("Locker not found")
        return locker


class ListLockersUseCase:
    def __init__(self, *, locker_repo: LockerRepository) -> None:
        self._locker_repo = locker_repo

    def execute(
        self,
        *,
        page: PageRequest,
        status: LockerStatus | None = None,
        size: LockerSize | None = None,
        search: str | None = None,
    ) -> Page[Locker]:
        return self._locker_repo.list(page, status=status, size=size, search=optional_text(search))


class ListAvailableLockersUseCase:
    def __init__(self, *, locker_repo: LockerRepository) -> None:
        self._locker_repo = locker_repo

    def execute(self) -> list[Locker]:
        return self._locker_repo.list_available()


class GetLockerStatsUseCase:
    def __init__(self, *, locker_repo: LockerRepository) -> None:
        self._locker_repo = locker_repo

    def execute(self) -> LockerStatsDTO:
        counts = self._locker_repo.count_by_status()
        return LockerStatsDTO(
            total=sum(counts.values()),
            available=counts[LockerStatus.AVAILABLE],
            rented=counts[LockerStatus.RENTED],
            maintenance=counts[LockerStatus.MAINTENANCE],
            reserved=counts[LockerStatus.RESERVED],
        )


class UpdateLockerUseCase:
    """
    Operator edit of a locker.

    `status` may be edited directly, but never into a state that contradicts
    the locker's active rental (or its absence).
    """

    def __init__(
        self,
        *,
        locker_repo: LockerRepository,
        rental_repo: RentalRepository,
        uow: UnitOfWork,
    ) -> None:
        self._locker_repo = locker_repo
        self._rental_repo = rental_repo
        self._uow = uow

    def execute(self, *, locker_id: str, changes: dict[str, Any]) -> Locker:
        locker = self._locker_repo.get(locker_id)
        if locker is None:
            raise NotFoundError("Locker not found")

        reject_unknown_fields(changes, UPDATABLE_FIELDS)

        if "number" in changes:
            number = require_text(changes["number"], "number")
            duplicate = self._locker_repo.get_by_number(number)
            if duplicate is not None and duplicate.id != locker.id:
                raise ConflictError(f"Locker number {number!r} is already in use")
            locker.number = number
        if "location" in changes:
            locker.location = require_text(changes["location"], "location")
        if "size" in changes:
            if changes["size"] is None:
                raise ValidationError("size is required")
            locker.size = LockerSize(changes["size"])
        if "monthly_price" in changes:
            locker.monthly_price = require_non_negative(changes["monthly_price"], "monthlyPrice")
        if "status" in changes:
            if changes["status"] is None:
                raise ValidationError("status is required")
            new_status = LockerStatus(changes["status"])
            if new_status is not locker.status:
                self._check_status_edit(locker, new_status)
                logger.info("Locker %s status set to %s by operator", locker.number, new_status.value)
            locker.status = new_status

        with self._uow:
            self._locker_repo.update(locker)

        return self._locker_repo.get(locker.id)

    def _check_status_edit(self, locker: Locker, new_status: LockerStatus) -> None:
        has_active_rental = self._rental_repo.find_active_for_locker(locker.id) is not None
        if has_active_rental and new_status is not LockerStatus.RENTED:
            raise ConflictError(f"Locker {locker.number!r} has an active rental; end the rental first")
        if not has_active_rental and new_status is LockerStatus.RENTED:
            raise ConflictError("A locker can only become rented through a rental")


class DeleteLockerUseCase:
    def __init__(
        self,
        *,
        locker_repo: LockerRepository,
        rental_repo: RentalRepository,
        uow: UnitOfWork,
    ) -> None:
        self._locker_repo = locker_repo
        self._rental_repo = rental_repo
        self._uow = uow

    def execute(self, *, locker_id: str) -> bool:
        locker = self._locker_repo.get(locker_id)
        if locker is None:
            raise NotFoundError("Locker not found")

        if self._rental_repo.exists_for_locker(locker.id):
            raise ConflictError(f"Locker {locker.number!r} is referenced by rentals and cannot be deleted")

        with self._uow:
            self._locker_repo.delete(locker.id)

        logger.info("Locker %s deleted", locker.number)
        return True
