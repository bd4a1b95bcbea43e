from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from lockersys.core.entities.page import PageRequest
from lockersys.core.entities.rental import RentalStatus
from lockersys.core.use_cases.rentals import (
    CreateRentalCommand,
    CreateRentalUseCase,
    DeleteRentalUseCase,
    GetRentalUseCase,
    ListRentalsUseCase,
    QuoteRentalUseCase,
    UpdateRentalUseCase,
)
from lockersys.infrastructure.repositories.client_repository_impl import ClientRepositoryImpl
from lockersys.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from lockersys.infrastructure.repositories.rental_repository_impl import RentalRepositoryImpl
from lockersys.infrastructure.unit_of_work import SqlAlchemyUnitOfWork
from lockersys.schemas.models import PaginatedResponse, RentalCreate, RentalOut, RentalQuote, RentalUpdate


def list_rentals_service(
    db: Session,
    *,
    page: int,
    limit: int,
    status: RentalStatus | None = None,
    locker_id: str | None = None,
    client_id: str | None = None,
    search: str | None = None,
) -> PaginatedResponse[RentalOut]:
    use_case = ListRentalsUseCase(rental_repo=RentalRepositoryImpl(db))
    result = use_case.execute(
        page=PageRequest.of(page, limit),
        status=status,
        locker_id=locker_id,
        client_id=client_id,
        search=search,
    )
    return PaginatedResponse[RentalOut].from_page(result, RentalOut)


def get_rental_service(rental_id: str, db: Session) -> RentalOut:
    rental = GetRentalUseCase(rental_repo=RentalRepositoryImpl(db)).execute(rental_id=rental_id)
    return RentalOut.model_validate(rental)


def create_rental_service(body: RentalCreate, db: Session) -> RentalOut:
    use_case = CreateRentalUseCase(
        rental_repo=RentalRepositoryImpl(db),
        locker_repo=LockerRepositoryImpl(db),
        client_repo=ClientRepositoryImpl(db),
        uow=SqlAlchemyUnitOfWork(db),
    )
    rental = use_case.execute(CreateRentalCommand(**body.model_dump()))
    return RentalOut.model_validate(rental)


def update_rental_service(rental_id: str, body: RentalUpdate, db: Session) -> RentalOut:
    use_case = UpdateRentalUseCase(
        rental_repo=RentalRepositoryImpl(db),
        locker_repo=LockerRepositoryImpl(db),
        client_repo=ClientRepositoryImpl(db),
        uow=SqlAlchemyUnitOfWork(db),
    )
    rental = use_case.execute(rental_id=rental_id, changes=body.model_dump(exclude_unset=True))
    return RentalOut.model_validate(rental)


def delete_rental_service(rental_id: str, db: Session) -> bool:
    use_case = DeleteRentalUseCase(
        rental_repo=RentalRepositoryImpl(db),
        locker_repo=LockerRepositoryImpl(db),
        uow=SqlAlchemyUnitOfWork(db),
    )
    return use_case.execute(rental_id=rental_id)


def quote_rental_service(start_date: date, end_date: date, monthly_price: Decimal) -> RentalQuote:
    dto = QuoteRentalUseCase().execute(start_date=start_date, end_date=end_date, monthly_price=monthly_price)
    return RentalQuote(
        start_date=dto.start_date,
        end_date=dto.end_date,
        months=dto.months,
        monthly_price=dto.monthly_price,
        total_amount=dto.total_amount,
    )
