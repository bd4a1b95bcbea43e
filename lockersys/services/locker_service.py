from __future__ import annotations

from sqlalchemy.orm import Session

from lockersys.core.entities.locker import LockerSize, LockerStatus
from lockersys.core.entities.page import PageRequest
from lockersys.core.use_cases.lockers import (
    CreateLockerCommand,
    CreateLockerUseCase,
    DeleteLockerUseCase,
    GetLockerStatsUseCase,
    GetLockerUseCase,
    ListAvailableLockersUseCase,
    ListLockersUseCase,
    UpdateLockerUseCase,
)
from lockersys.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from lockersys.infrastructure.repositories.rental_repository_impl import RentalRepositoryImpl
from lockersys.infrastructure.unit_of_work import SqlAlchemyUnitOfWork
from lockersys.schemas.models import LockerCreate, LockerOut, LockerStats, LockerUpdate, PaginatedResponse


def list_lockers_service(
    db: Session,
    *,
    page: int,
    limit: int,
    status: LockerStatus | None = None,
    size: LockerSize | None = None,
    search: str | None = None,
) -> PaginatedResponse[LockerOut]:
    use_case = ListLockersUseCase(locker_repo=LockerRepositoryImpl(db))
    result = use_case.execute(page=PageRequest.of(page, limit), status=status, size=size, search=search)
    return PaginatedResponse[LockerOut].from_page(result, LockerOut)


def list_available_lockers_service(db: Session) -> list[LockerOut]:
    use_case = ListAvailableLockersUseCase(locker_repo=LockerRepositoryImpl(db))
    return [LockerOut.model_validate(locker) for locker in use_case.execute()]


def get_locker_stats_service(db: Session) -> LockerStats:
    dto = GetLockerStatsUseCase(locker_repo=LockerRepositoryImpl(db)).execute()
    return LockerStats(
        total=dto.total,
        available=dto.available,
        rented=dto.rented,
        maintenance=dto.maintenance,
        reserved=dto.reserved,
    )


def get_locker_service(locker_id: str, db: Session) -> LockerOut:
    locker = GetLockerUseCase(locker_repo=LockerRepositoryImpl(db)).execute(locker_id=locker_id)
    return LockerOut.model_validate(locker)


def create_locker_service(body: LockerCreate, db: Session) -> LockerOut:
    use_case = CreateLockerUseCase(locker_repo=LockerRepositoryImpl(db), uow=SqlAlchemyUnitOfWork(db))
    locker = use_case.execute(CreateLockerCommand(**body.model_dump()))
    return LockerOut.model_validate(locker)


def update_locker_service(locker_id: str, body: LockerUpdate, db: Session) -> LockerOut:
    use_case = UpdateLockerUseCase(
        locker_repo=LockerRepositoryImpl(db),
        rental_repo=RentalRepositoryImpl(db),
        uow=SqlAlchemyUnitOfWork(db),
    )
    locker = use_case.execute(locker_id=locker_id, changes=body.model_dump(exclude_unset=True))
    return LockerOut.model_validate(locker)


def delete_locker_service(locker_id: str, db: Session) -> bool:
    use_case = DeleteLockerUseCase(
        locker_repo=LockerRepositoryImpl(db),
        rental_repo=RentalRepositoryImpl(db),
        uow=SqlAlchemyUnitOfWork(db),
    )
    return use_case.execute(locker_id=locker_id)
