from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from lockersys.core.entities.client import Client, ClientStatus
from lockersys.core.entities.page import Page, PageRequest
from lockersys.core.errors import ConflictError, NotFoundError, ValidationError
from lockersys.core.repositories.client_repository import ClientRepository
from lockersys.core.repositories.rental_repository import RentalRepository
from lockersys.core.repositories.unit_of_work import UnitOfWork
from lockersys.core.use_cases.common import new_id, optional_text, reject_unknown_fields, require_text

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"name", "email", "phone", "document", "address", "status"})


@dataclass(frozen=True, slots=True)
class CreateClientCommand:
    name: str
    email: str
    document: str
    phone: str | None = None
    address: str | None = None
    status: ClientStatus = ClientStatus.ACTIVE


def _normalize_email(value: Any) -> str:
    return require_text(value, "email").lower()


class CreateClientUseCase:
    def __init__(self, *, client_repo: ClientRepository, uow: UnitOfWork) -> None:
        self._client_repo = client_repo
        self._uow = uow

    def execute(self, command: CreateClientCommand) -> Client:
        client = Client(
            id=new_id(),
            name=require_text(command.name, "name"),
            email=_normalize_email(command.email),
            document=require_text(command.document, "document"),
            phone=optional_text(command.phone),
            address=optional_text(command.address),
            status=ClientStatus(command.status),
        )
        _ensure_unique(self._client_repo, client)

        with self._uow:
            self._client_repo.add(client)

        logger.info("Client %s created", client.id)
        return self._client_repo.get(client.id)


class GetClientUseCase:
    def __init__(self, *, client_repo: ClientRepository) -> None:
        self._client_repo = client_repo

    def execute(self, *, client_id: str) -> Client:
        client = self._client_repo.get(client_id)
        if client is None:
            raise NotFoundError("Client not found")
        return client


class ListClientsUseCase:
    def __init__(self, *, client_repo: ClientRepository) -> None:
        self._client_repo = client_repo

    def execute(
        self,
        *,
        page: PageRequest,
        status: ClientStatus | None = None,
        search: str | None = None,
    ) -> Page[Client]:
        return self._client_repo.list(page, status=status, search=optional_text(search))


class UpdateClientUseCase:
    def __init__(self, *, client_repo: ClientRepository, uow: UnitOfWork) -> None:
        self._client_repo = client_repo
        self._uow = uow

    def execute(self, *, client_id: str, changes: dict[str, Any]) -> Client:
        client = self._client_repo.get(client_id)
        if client is None:
            raise NotFoundError("Client not found")

        reject_unknown_fields(changes, UPDATABLE_FIELDS)

        if "name" in changes:
            client.name = require_text(changes["name"], "name")
        if "email" in changes:
            client.email = _normalize_email(changes["email"])
        if "document" in changes:
            client.document = require_text(changes["document"], "document")
        if "phone" in changes:
            client.phone = optional_text(changes["phone"])
        if "address" in changes:
            client.address = optional_text(changes["address"])
        if "status" in changes:
            if changes["status"] is None:
                raise ValidationError("status is required")
            client.status = ClientStatus(changes["status"])

        _ensure_unique(self._client_repo, client)

        with self._uow:
            self._client_repo.update(client)

        return self._client_repo.get(client.id)


class DeleteClientUseCase:
    def __init__(
        self,
        *,
        client_repo: ClientRepository,
        rental_repo: RentalRepository,
        uow: UnitOfWork,
    ) -> None:
        self._client_repo = client_repo
        self._rental_repo = rental_repo
        self._uow = uow

    def execute(self, *, client_id: str) -> bool:
        client = self._client_repo.get(client_id)
        if client is None:
            raise NotFoundError("Client not found")

        if self._rental_repo.exists_for_client(client.id):
            raise ConflictError("Client has rentals and cannot be deleted")

        with self._uow:
            self._client_repo.delete(client.id)

        logger.info("Client %s deleted", client.id)
        return True


def _ensure_unique(client_repo: ClientRepository, client: Client) -> None:
    duplicate = client_repo.find_duplicate(email=client.email, document=client.document, exclude_id=client.id)
    if duplicate is None:
        return
    if duplicate.email == client.email:
        raise ConflictError(f"Email {client.email!r} is already in use")
    raise ConflictError(f"Document {client.document!r} is already in use")
