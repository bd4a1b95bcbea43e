from __future__ import annotations

from sqlalchemy.orm import Session

from lockersys.core.entities.page import PageRequest
from lockersys.core.use_cases.payments import (
    DeletePaymentUseCase,
    GetPaymentUseCase,
    ListPaymentsUseCase,
    RecordPaymentCommand,
    RecordPaymentUseCase,
    UpdatePaymentUseCase,
)
from lockersys.infrastructure.repositories.payment_repository_impl import PaymentRepositoryImpl
from lockersys.infrastructure.repositories.rental_repository_impl import RentalRepositoryImpl
from lockersys.infrastructure.unit_of_work import SqlAlchemyUnitOfWork
from lockersys.schemas.models import PaginatedResponse, PaymentCreate, PaymentOut, PaymentUpdate


def list_payments_service(
    db: Session,
    *,
    page: int,
    limit: int,
    rental_id: str | None = None,
) -> PaginatedResponse[PaymentOut]:
    use_case = ListPaymentsUseCase(payment_repo=PaymentRepositoryImpl(db), rental_repo=RentalRepositoryImpl(db))
    result = use_case.execute(page=PageRequest.of(page, limit), rental_id=rental_id)
    return PaginatedResponse[PaymentOut].from_page(result, PaymentOut)


def get_payment_service(payment_id: str, db: Session) -> PaymentOut:
    payment = GetPaymentUseCase(payment_repo=PaymentRepositoryImpl(db)).execute(payment_id=payment_id)
    return PaymentOut.model_validate(payment)


def record_payment_service(body: PaymentCreate, db: Session) -> PaymentOut:
    use_case = RecordPaymentUseCase(
        payment_repo=PaymentRepositoryImpl(db),
        rental_repo=RentalRepositoryImpl(db),
        uow=SqlAlchemyUnitOfWork(db),
    )
    payment = use_case.execute(RecordPaymentCommand(**body.model_dump()))
    return PaymentOut.model_validate(payment)


def update_payment_service(payment_id: str, body: PaymentUpdate, db: Session) -> PaymentOut:
    use_case = UpdatePaymentUseCase(payment_repo=PaymentRepositoryImpl(db), uow=SqlAlchemyUnitOfWork(db))
    payment = use_case.execute(payment_id=payment_id, changes=body.model_dump(exclude_unset=True))
    return PaymentOut.model_validate(payment)


def delete_payment_service(payment_id: str, db: Session) -> bool:
    use_case = DeletePaymentUseCase(payment_repo=PaymentRepositoryImpl(db), uow=SqlAlchemyUnitOfWork(db))
    return use_case.execute(payment_id=payment_id)
