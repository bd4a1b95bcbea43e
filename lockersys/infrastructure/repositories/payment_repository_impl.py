from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from lockersys.core.entities.page import Page, PageRequest
from lockersys.core.entities.payment import Payment, PaymentMethod, PaymentRecordStatus
from lockersys.core.repositories.payment_repository import PaymentRepository
from lockersys.infrastructure.models.models import PaymentModel


def to_payment(row: PaymentModel) -> Payment:
    return Payment(
        id=row.id,
        rental_id=row.rental_id,
        amount=row.amount,
        payment_date=row.payment_date,
        method=PaymentMethod(row.method),
        status=PaymentRecordStatus(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class PaymentRepositoryImpl(PaymentRepository):
    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, payment_id: str) -> Payment | None:
        row = self._db.get(PaymentModel, payment_id)
        if row is None:
            return None
        return to_payment(row)

    def list(self, page: PageRequest, *, rental_id: str | None = None) -> Page[Payment]:
        stmt = select(PaymentModel)
        if rental_id is not None:
            stmt = stmt.where(PaymentModel.rental_id == rental_id)

        total = self._db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        rows = self._db.scalars(
            stmt.order_by(PaymentModel.payment_date.desc(), PaymentModel.created_at.desc())
            .offset(page.offset)
            .limit(page.limit)
        ).all()

        return Page(items=[to_payment(r) for r in rows], total=total, page=page.page, limit=page.limit)

    def add(self, payment: Payment) -> None:
        row = PaymentModel(id=payment.id, rental_id=payment.rental_id)
        self._apply(row, payment)
        self._db.add(row)

    def update(self, payment: Payment) -> None:
        row = self._db.get(PaymentModel, payment.id)
        if row is None:
            row = PaymentModel(id=payment.id, rental_id=payment.rental_id)
            self._db.add(row)
        self._apply(row, payment)

    def delete(self, payment_id: str) -> None:
        row = self._db.get(PaymentModel, payment_id)
        if row is not None:
            self._db.delete(row)

    @staticmethod
    def _apply(row: PaymentModel, payment: Payment) -> None:
        row.amount = payment.amount
        row.payment_date = payment.payment_date
        row.method = payment.method
        row.status = payment.status
