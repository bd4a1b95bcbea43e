from __future__ import annotations

from sqlalchemy.orm import Session

from lockersys.core.entities.client import ClientStatus
from lockersys.core.entities.page import PageRequest
from lockersys.core.use_cases.clients import (
    CreateClientCommand,
    CreateClientUseCase,
    DeleteClientUseCase,
    GetClientUseCase,
    ListClientsUseCase,
    UpdateClientUseCase,
)
from lockersys.infrastructure.repositories.client_repository_impl import ClientRepositoryImpl
from lockersys.infrastructure.repositories.rental_repository_impl import RentalRepositoryImpl
from lockersys.infrastructure.unit_of_work import SqlAlchemyUnitOfWork
from lockersys.schemas.models import ClientCreate, ClientOut, ClientUpdate, PaginatedResponse


def list_clients_service(
    db: Session,
    *,
    page: int,
    limit: int,
    status: ClientStatus | None = None,
    search: str | None = None,
) -> PaginatedResponse[ClientOut]:
    use_case = ListClientsUseCase(client_repo=ClientRepositoryImpl(db))
    result = use_case.execute(page=PageRequest.of(page, limit), status=status, search=search)
    return PaginatedResponse[ClientOut].from_page(result, ClientOut)


def get_client_service(client_id: str, db: Session) -> ClientOut:
    client = GetClientUseCase(client_repo=ClientRepositoryImpl(db)).execute(client_id=client_id)
    return ClientOut.model_validate(client)


def create_client_service(body: ClientCreate, db: Session) -> ClientOut:
    use_case = CreateClientUseCase(client_repo=ClientRepositoryImpl(db), uow=SqlAlchemyUnitOfWork(db))
    client = use_case.execute(CreateClientCommand(**body.model_dump()))
    return ClientOut.model_validate(client)


def update_client_service(client_id: str, body: ClientUpdate, db: Session) -> ClientOut:
    use_case = UpdateClientUseCase(client_repo=ClientRepositoryImpl(db), uow=SqlAlchemyUnitOfWork(db))
    client = use_case.execute(client_id=client_id, changes=body.model_dump(exclude_unset=True))
    return ClientOut.model_validate(client)


def delete_client_service(client_id: str, db: Session) -> bool:
    use_case = DeleteClientUseCase(
        client_repo=ClientRepositoryImpl(db),
        rental_repo=RentalRepositoryImpl(db),
        uow=SqlAlchemyUnitOfWork(db),
    )
    return use_case.execute(client_id=client_id)
