from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from lockersys.core.entities.page import Page, PageRequest
from lockersys.core.entities.payment import Payment, PaymentMethod, PaymentRecordStatus
from lockersys.core.errors import NotFoundError, ValidationError
from lockersys.core.repositories.payment_repository import PaymentRepository
from lockersys.core.repositories.rental_repository import RentalRepository
from lockersys.core.repositories.unit_of_work import UnitOfWork
from lockersys.core.use_cases.common import new_id, reject_unknown_fields, require_positive, require_text

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"amount", "payment_date", "method", "status"})


@dataclass(frozen=True, slots=True)
class RecordPaymentCommand:
    rental_id: str
    amount: Decimal | None
    payment_date: date | None
    method: PaymentMethod | None
    status: PaymentRecordStatus = PaymentRecordStatus.PENDING


class RecordPaymentUseCase:
    """
    Record a payment against a rental. The rental's paymentStatus is left to
    the operator.
    """

    def __init__(
        self,
        *,
        payment_repo: PaymentRepository,
        rental_repo: RentalRepository,
        uow: UnitOfWork,
    ) -> None:
        self._payment_repo = payment_repo
        self._rental_repo = rental_repo
        self._uow = uow

    def execute(self, command: RecordPaymentCommand) -> Payment:
        rental_id = require_text(command.rental_id, "rentalId")
        amount = require_positive(command.amount, "amount")
        if not isinstance(command.payment_date, date):
            raise ValidationError("paymentDate is required")
        if command.method is None:
            raise ValidationError("method is required")

        if self._rental_repo.get(rental_id) is None:
            raise ValidationError(f"Rental not found: {rental_id!r}")

        payment = Payment(
            id=new_id(),
            rental_id=rental_id,
            amount=amount,
            payment_date=command.payment_date,
            method=PaymentMethod(command.method),
            status=PaymentRecordStatus(command.status),
        )
        with self._uow:
            self._payment_repo.add(payment)

        logger.info("Payment %s of %s recorded for rental %s", payment.id, payment.amount, rental_id)
        return self._payment_repo.get(payment.id)


class GetPaymentUseCase:
    def __init__(self, *, payment_repo: PaymentRepository) -> None:
        self._payment_repo = payment_repo

    def execute(self, *, payment_id: str) -> Payment:
        payment = self._payment_repo.get(payment_id)
        if payment is None:
            raise NotFoundError("Payment not found")
        return payment


class ListPaymentsUseCase:
    def __init__(self, *, payment_repo: PaymentRepository, rental_repo: RentalRepository) -> None:
        self._payment_repo = payment_repo
        self._rental_repo = rental_repo

    def execute(self, *, page: PageRequest, rental_id: str | None = None) -> Page[Payment]:
        if rental_id is not None and self._rental_repo.get(rental_id) is None:
            raise NotFoundError("Rental not found")
        return self._payment_repo.list(page, rental_id=rental_id)


class UpdatePaymentUseCase:
    def __init__(self, *, payment_repo: PaymentRepository, uow: UnitOfWork) -> None:
        self._payment_repo = payment_repo
        self._uow = uow

    def execute(self, *, payment_id: str, changes: dict[str, Any]) -> Payment:
        payment = self._payment_repo.get(payment_id)
        if payment is None:
            raise NotFoundError("Payment not found")

        reject_unknown_fields(changes, UPDATABLE_FIELDS)

        if "amount" in changes:
            payment.amount = require_positive(changes["amount"], "amount")
        if "payment_date" in changes:
            if not isinstance(changes["payment_date"], date):
                raise ValidationError("paymentDate is required")
            payment.payment_date = changes["payment_date"]
        if "method" in changes:
            if changes["method"] is None:
                raise ValidationError("method is required")
            payment.method = PaymentMethod(changes["method"])
        if "status" in changes:
            if changes["status"] is None:
                raise ValidationError("status is required")
            payment.status = PaymentRecordStatus(changes["status"])

        with self._uow:
            self._payment_repo.update(payment)

        return self._payment_repo.get(payment.id)


class DeletePaymentUseCase:
    def __init__(self, *, payment_repo: PaymentRepository, uow: UnitOfWork) -> None:
        self._payment_repo = payment_repo
        self._uow = uow

    def execute(self, *, payment_id: str) -> bool:
        if self._payment_repo.get(payment_id) is None:
            raise NotFoundError("Payment not found")

        with self._uow:
            self._payment_repo.delete(payment_id)
        return True
