from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from lockersys.core.entities.client import Client
from lockersys.core.entities.locker import Locker, LockerStatus
from lockersys.core.entities.page import Page, PageRequest
from lockersys.core.entities.rental import (
    PaymentStatus,
    Rental,
    RentalStatus,
    months_between,
    total_amount,
)
from lockersys.core.errors import ConflictError, NotFoundError, ValidationError
from lockersys.core.repositories.client_repository import ClientRepository
from lockersys.core.repositories.locker_repository import LockerRepository
from lockersys.core.repositories.rental_repository import RentalRepository
from lockersys.core.repositories.unit_of_work import UnitOfWork
from lockersys.core.use_cases.common import (
    new_id,
    optional_text,
    reject_unknown_fields,
    require_positive,
    require_text,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {
        "locker_id",
        "client_id",
        "start_date",
        "end_date",
        "monthly_price",
        "total_amount",
        "status",
        "payment_status",
        "notes",
    }
)


@dataclass(frozen=True, slots=True)
class CreateRentalCommand:
    locker_id: str
    client_id: str
    start_date: date | None
    end_date: date | None
    monthly_price: Decimal | None
    total_amount: Decimal | None
    status: RentalStatus = RentalStatus.ACTIVE
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class RentalQuoteDTO:
    start_date: date
    end_date: date
    months: int
    monthly_price: Decimal
    total_amount: Decimal


def _require_date(value: Any, field: str) -> date:
    if not isinstance(value, date):
        raise ValidationError(f"{field} is required")
    return value


def _check_period(start_date: date, end_date: date) -> None:
    if end_date < start_date:
        raise ValidationError("endDate must be on or after startDate")


class _LockerClaims:
    """
    Keeps a locker's status in step with the active rental that references it.
    Must be called inside the caller's unit of work.
    """

    def __init__(self, *, locker_repo: LockerRepository, rental_repo: RentalRepository) -> None:
        self._locker_repo = locker_repo
        self._rental_repo = rental_repo

    def claim(self, locker: Locker, *, rental_id: str) -> None:
        other = self._rental_repo.find_active_for_locker(locker.id, exclude_id=rental_id)
        if other is not None:
            raise ConflictError(f"Locker {locker.number!r} already has an active rental")

        try:
            locker.mark_rented()
        except ValueError as e:
            raise ConflictError(str(e)) from e

        self._locker_repo.update(locker)
        logger.info("Locker %s marked rented by rental %s", locker.number, rental_id)

    def release(self, locker_id: str, *, rental_id: str) -> None:
        if self._rental_repo.find_active_for_locker(locker_id, exclude_id=rental_id) is not None:
            return

        locker = self._locker_repo.get(locker_id)
        if locker is None:
            return

        was_rented = locker.status is LockerStatus.RENTED
        locker.release()
        self._locker_repo.update(locker)
        if was_rented:
            logger.info("Locker %s released by rental %s", locker.number, rental_id)


class CreateRentalUseCase:
    """
    Insert a rental and, for an active rental, flip its locker to `rented`
    in the same unit of work.
    """

    def __init__(
        self,
        *,
        rental_repo: RentalRepository,
        locker_repo: LockerRepository,
        client_repo: ClientRepository,
        uow: UnitOfWork,
    ) -> None:
        self._rental_repo = rental_repo
        self._locker_repo = locker_repo
        self._client_repo = client_repo
        self._uow = uow
        self._claims = _LockerClaims(locker_repo=locker_repo, rental_repo=rental_repo)

    def execute(self, command: CreateRentalCommand) -> Rental:
        locker_id = require_text(command.locker_id, "lockerId")
        client_id = require_text(command.client_id, "clientId")
        start_date = _require_date(command.start_date, "startDate")
        end_date = _require_date(command.end_date, "endDate")
        monthly_price = require_positive(command.monthly_price, "monthlyPrice")
        amount = require_positive(command.total_amount, "totalAmount")
        _check_period(start_date, end_date)

        locker: Locker | None = self._locker_repo.get(locker_id)
        if locker is None:
            raise ValidationError(f"Locker not found: {locker_id!r}")

        client: Client | None = self._client_repo.get(client_id)
        if client is None:
            raise ValidationError(f"Client not found: {client_id!r}")

        rental = Rental(
            id=new_id(),
            locker_id=locker.id,
            client_id=client.id,
            start_date=start_date,
            end_date=end_date,
            monthly_price=monthly_price,
            total_amount=amount,
            status=command.status,
            payment_status=command.payment_status,
            notes=optional_text(command.notes),
        )

        with self._uow:
            if rental.is_active:
                self._claims.claim(locker, rental_id=rental.id)
            self._rental_repo.add(rental)

        logger.info("Rental %s created for locker %s and client %s", rental.id, locker.number, client.id)
        return self._rental_repo.get(rental.id)


class UpdateRentalUseCase:
    """
    Overwrite the supplied fields of a rental.

    Status and locker changes move the `rented` claim in the same unit of
    work, so re-applying a payload never has a second side effect.
    """

    def __init__(
        self,
        *,
        rental_repo: RentalRepository,
        locker_repo: LockerRepository,
        client_repo: ClientRepository,
        uow: UnitOfWork,
    ) -> None:
        self._rental_repo = rental_repo
        self._locker_repo = locker_repo
        self._client_repo = client_repo
        self._uow = uow
        self._claims = _LockerClaims(locker_repo=locker_repo, rental_repo=rental_repo)

    def execute(self, *, rental_id: str, changes: dict[str, Any]) -> Rental:
        rental = self._rental_repo.get(rental_id)
        if rental is None:
            raise NotFoundError("Rental not found")

        reject_unknown_fields(changes, UPDATABLE_FIELDS)

        was_active = rental.is_active
        previous_locker_id = rental.locker_id

        if "locker_id" in changes:
            locker_id = require_text(changes["locker_id"], "lockerId")
            if self._locker_repo.get(locker_id) is None:
                raise ValidationError(f"Locker not found: {locker_id!r}")
            rental.locker_id = locker_id
        if "client_id" in changes:
            client_id = require_text(changes["client_id"], "clientId")
            if self._client_repo.get(client_id) is None:
                raise ValidationError(f"Client not found: {client_id!r}")
            rental.client_id = client_id
        if "start_date" in changes:
            rental.start_date = _require_date(changes["start_date"], "startDate")
        if "end_date" in changes:
            rental.end_date = _require_date(changes["end_date"], "endDate")
        if "monthly_price" in changes:
            rental.monthly_price = require_positive(changes["monthly_price"], "monthlyPrice")
        if "total_amount" in changes:
            rental.total_amount = require_positive(changes["total_amount"], "totalAmount")
        if "status" in changes:
            if changes["status"] is None:
                raise ValidationError("status is required")
            rental.status = RentalStatus(changes["status"])
        if "payment_status" in changes:
            if changes["payment_status"] is None:
                raise ValidationError("paymentStatus is required")
            rental.payment_status = PaymentStatus(changes["payment_status"])
        if "notes" in changes:
            rental.notes = optional_text(changes["notes"])

        _check_period(rental.start_date, rental.end_date)

        locker_moved = rental.locker_id != previous_locker_id

        with self._uow:
            if was_active and (not rental.is_active or locker_moved):
                self._claims.release(previous_locker_id, rental_id=rental.id)
            if rental.is_active and (not was_active or locker_moved):
                locker = self._locker_repo.get(rental.locker_id)
                self._claims.claim(locker, rental_id=rental.id)
            self._rental_repo.update(rental)

        return self._rental_repo.get(rental.id)


class DeleteRentalUseCase:
    def __init__(
        self,
        *,
        rental_repo: RentalRepository,
        locker_repo: LockerRepository,
        uow: UnitOfWork,
    ) -> None:
        self._rental_repo = rental_repo
        self._uow = uow
        self._claims = _LockerClaims(locker_repo=locker_repo, rental_repo=rental_repo)

    def execute(self, *, rental_id: str) -> bool:
        rental = self._rental_repo.get(rental_id)
        if rental is None:
            raise NotFoundError("Rental not found")

        with self._uow:
            self._rental_repo.delete(rental.id)
            self._claims.release(rental.locker_id, rental_id=rental.id)

        logger.info("Rental %s deleted", rental.id)
        return True


class GetRentalUseCase:
    def __init__(self, *, rental_repo: RentalRepository) -> None:
        self._rental_repo = rental_repo

    def execute(self, *, rental_id: str) -> Rental:
        rental = self._rental_repo.get(rental_id)
        if rental is None:
            raise NotFoundError("Rental not found")
        return rental


class ListRentalsUseCase:
    def __init__(self, *, rental_repo: RentalRepository) -> None:
        self._rental_repo = rental_repo

    def execute(
        self,
        *,
        page: PageRequest,
        status: RentalStatus | None = None,
        locker_id: str | None = None,
        client_id: str | None = None,
        search: str | None = None,
    ) -> Page[Rental]:
        return self._rental_repo.list(
            page,
            status=status,
            locker_id=locker_id,
            client_id=client_id,
            search=optional_text(search),
        )


class QuoteRentalUseCase:
    """
    Price a period with the billing month rule, without touching the store.
    """

    def execute(self, *, start_date: date, end_date: date, monthly_price: Decimal) -> RentalQuoteDTO:
        if monthly_price is None or Decimal(monthly_price) < 0:
            raise ValidationError("monthlyPrice must not be negative")

        return RentalQuoteDTO(
            start_date=start_date,
            end_date=end_date,
            months=months_between(start_date, end_date),
            monthly_price=Decimal(monthly_price),
            total_amount=total_amount(start_date, end_date, monthly_price),
        )
