from __future__ import annotations

from sqlalchemy.orm import Session

from lockersys.core.entities.page import PageRequest
from lockersys.core.use_cases.locations import (
    CreateLocationCommand,
    CreateLocationUseCase,
    DeleteLocationUseCase,
    GetLocationUseCase,
    ListLocationsUseCase,
    UpdateLocationUseCase,
)
from lockersys.infrastructure.repositories.location_repository_impl import LocationRepositoryImpl
from lockersys.infrastructure.unit_of_work import SqlAlchemyUnitOfWork
from lockersys.schemas.models import LocationCreate, LocationOut, LocationUpdate, PaginatedResponse


def list_locations_service(
    db: Session,
    *,
    page: int,
    limit: int,
    search: str | None = None,
) -> PaginatedResponse[LocationOut]:
    result = ListLocationsUseCase(location_repo=LocationRepositoryImpl(db)).execute(
        page=PageRequest.of(page, limit), search=search
    )
    return PaginatedResponse[LocationOut].from_page(result, LocationOut)


def get_location_service(location_id: str, db: Session) -> LocationOut:
    location = GetLocationUseCase(location_repo=LocationRepositoryImpl(db)).execute(location_id=location_id)
    return LocationOut.model_validate(location)


def create_location_service(body: LocationCreate, db: Session) -> LocationOut:
    use_case = CreateLocationUseCase(location_repo=LocationRepositoryImpl(db), uow=SqlAlchemyUnitOfWork(db))
    return LocationOut.model_validate(use_case.execute(CreateLocationCommand(**body.model_dump())))


def update_location_service(location_id: str, body: LocationUpdate, db: Session) -> LocationOut:
    use_case = UpdateLocationUseCase(location_repo=LocationRepositoryImpl(db), uow=SqlAlchemyUnitOfWork(db))
    location = use_case.execute(location_id=location_id, changes=body.model_dump(exclude_unset=True))
    return LocationOut.model_validate(location)


def delete_location_service(location_id: str, db: Session) -> bool:
    use_case = DeleteLocationUseCase(location_repo=LocationRepositoryImpl(db), uow=SqlAlchemyUnitOfWork(db))
    return use_case.execute(location_id=location_id)
