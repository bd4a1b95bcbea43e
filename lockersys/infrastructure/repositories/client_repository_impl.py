from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from lockersys.core.entities.client import Client, ClientStatus
from lockersys.core.entities.page import Page, PageRequest
from lockersys.core.repositories.client_repository import ClientRepository
from lockersys.infrastructure.models.models import ClientModel
from lockersys.infrastructure.repositories.search import LIKE_ESCAPE, contains_pattern


def to_client(row: ClientModel) -> Client:
    return Client(
        id=row.id,
        name=row.name,
        email=row.email,
        document=row.document,
        phone=row.phone,
        address=row.address,
        status=ClientStatus(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class ClientRepositoryImpl(ClientRepository):
    """SQLAlchemy implementation for the client registry."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, client_id: str) -> Client | None:
        row = self._db.get(ClientModel, client_id)
        if row is None:
            return None
        return to_client(row)

    def find_duplicate(self, *, email: str, document: str, exclude_id: str | None = None) -> Client | None:
        stmt = select(ClientModel).where(or_(ClientModel.email == email, ClientModel.document == document))
        if exclude_id is not None:
            stmt = stmt.where(ClientModel.id != exclude_id)
        row = self._db.scalars(stmt).first()
        if row is None:
            return None
        return to_client(row)

    def list(
        self,
        page: PageRequest,
        *,
        status: ClientStatus | None = None,
        search: str | None = None,
    ) -> Page[Client]:
        stmt = select(ClientModel)
        if status is not None:
            stmt = stmt.where(ClientModel.status == status)
        if search:
            pattern = contains_pattern(search)
            stmt = stmt.where(
                or_(
                    ClientModel.name.ilike(pattern, escape=LIKE_ESCAPE),
                    ClientModel.email.ilike(pattern, escape=LIKE_ESCAPE),
                    ClientModel.document.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        total = self._db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        rows = self._db.scalars(
            stmt.order_by(ClientModel.created_at.desc(), ClientModel.name.asc())
            .offset(page.offset)
            .limit(page.limit)
        ).all()

        return Page(items=[to_client(r) for r in rows], total=total, page=page.page, limit=page.limit)

    def count(self) -> int:
        return self._db.scalar(select(func.count(ClientModel.id))) or 0

    def add(self, client: Client) -> None:
        row = ClientModel(id=client.id)
        self._apply(row, client)
        self._db.add(row)

    def update(self, client: Client) -> None:
        row = self._db.get(ClientModel, client.id)
        if row is None:
            row = ClientModel(id=client.id)
            self._db.add(row)
        self._apply(row, client)

    def delete(self, client_id: str) -> None:
        row = self._db.get(ClientModel, client_id)
        if row is not None:
            self._db.delete(row)

    @staticmethod
    def _apply(row: ClientModel, client: Client) -> None:
        row.name = client.name
        row.email = client.email
        row.document = client.document
        row.phone = client.phone
        row.address = client.address
        row.status = client.status
