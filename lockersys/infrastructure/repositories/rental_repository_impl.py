from __future__ import annotations

from decimal import Decimal

from sqlalchemy import exists, func, or_, select
from sqlalchemy.orm import Session, joinedload

from lockersys.core.entities.page import Page, PageRequest
from lockersys.core.entities.rental import PaymentStatus, Rental, RentalStatus
from lockersys.core.repositories.rental_repository import RentalRepository
from lockersys.infrastructure.models.models import ClientModel, LockerModel, RentalModel
from lockersys.infrastructure.repositories.client_repository_impl import to_client
from lockersys.infrastructure.repositories.locker_repository_impl import to_locker
from lockersys.infrastructure.repositories.search import LIKE_ESCAPE, contains_pattern


def to_rental(row: RentalModel, *, with_relations: bool = True) -> Rental:
    rental = Rental(
        id=row.id,
        locker_id=row.locker_id,
        client_id=row.client_id,
        start_date=row.start_date,
        end_date=row.end_date,
        monthly_price=row.monthly_price,
        total_amount=row.total_amount,
        status=RentalStatus(row.status),
        payment_status=PaymentStatus(row.payment_status),
        notes=row.notes,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
    if with_relations:
        rental.locker = to_locker(row.locker) if row.locker is not None else None
        rental.client = to_client(row.client) if row.client is not None else None
    return rental


class RentalRepositoryImpl(RentalRepository):
    """
    SQLAlchemy implementation of the rental ledger store.

    Rentals are always loaded with their locker and client so responses can
    show them without extra round trips.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def _select(self):
        return select(RentalModel).options(joinedload(RentalModel.locker), joinedload(RentalModel.client))

    def get(self, rental_id: str) -> Rental | None:
        # refresh rows already in the session so a moved locker is not served stale
        stmt = self._select().where(RentalModel.id == rental_id).execution_options(populate_existing=True)
        row = self._db.scalars(stmt).first()
        if row is None:
            return None
        return to_rental(row)

    def find_active_for_locker(self, locker_id: str, *, exclude_id: str | None = None) -> Rental | None:
        stmt = select(RentalModel).where(
            RentalModel.locker_id == locker_id,
            RentalModel.status == RentalStatus.ACTIVE,
        )
        if exclude_id is not None:
            stmt = stmt.where(RentalModel.id != exclude_id)
        row = self._db.scalars(stmt).first()
        if row is None:
            return None
        return to_rental(row, with_relations=False)

    def exists_for_locker(self, locker_id: str) -> bool:
        return bool(self._db.scalar(select(exists().where(RentalModel.locker_id == locker_id))))

    def exists_for_client(self, client_id: str) -> bool:
        return bool(self._db.scalar(select(exists().where(RentalModel.client_id == client_id))))

    def list(
        self,
        page: PageRequest,
        *,
        status: RentalStatus | None = None,
        locker_id: str | None = None,
        client_id: str | None = None,
        search: str | None = None,
    ) -> Page[Rental]:
        stmt = (
            select(RentalModel)
            .join(LockerModel, RentalModel.locker_id == LockerModel.id)
            .join(ClientModel, RentalModel.client_id == ClientModel.id)
        )
        if status is not None:
            stmt = stmt.where(RentalModel.status == status)
        if locker_id is not None:
            stmt = stmt.where(RentalModel.locker_id == locker_id)
        if client_id is not None:
            stmt = stmt.where(RentalModel.client_id == client_id)
        if search:
            pattern = contains_pattern(search)
            stmt = stmt.where(
                or_(
                    RentalModel.notes.ilike(pattern, escape=LIKE_ESCAPE),
                    LockerModel.number.ilike(pattern, escape=LIKE_ESCAPE),
                    ClientModel.name.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        total = self._db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        rows = self._db.scalars(
            stmt.options(joinedload(RentalModel.locker), joinedload(RentalModel.client))
            .order_by(RentalModel.created_at.desc())
            .offset(page.offset)
            .limit(page.limit)
        ).all()

        return Page(items=[to_rental(r) for r in rows], total=total, page=page.page, limit=page.limit)

    def count_by_status(self) -> dict[RentalStatus, int]:
        counts = {status: 0 for status in RentalStatus}
        rows = self._db.execute(
            select(RentalModel.status, func.count(RentalModel.id)).group_by(RentalModel.status)
        ).all()
        for status, count in rows:
            counts[RentalStatus(status)] = int(count)
        return counts

    def sum_total_amount(self, *, payment_status: PaymentStatus) -> Decimal:
        total = self._db.scalar(
            select(func.coalesce(func.sum(RentalModel.total_amount), 0)).where(
                RentalModel.payment_status == payment_status
            )
        )
        return Decimal(str(total or 0))

    def add(self, rental: Rental) -> None:
        row = RentalModel(id=rental.id)
        self._apply(row, rental)
        self._db.add(row)

    def update(self, rental: Rental) -> None:
        row = self._db.get(RentalModel, rental.id)
        if row is None:
            row = RentalModel(id=rental.id)
            self._db.add(row)
        self._apply(row, rental)

    def delete(self, rental_id: str) -> None:
        row = self._db.get(RentalModel, rental_id)
        if row is not None:
            # payments go with it through the delete-orphan cascade
            self._db.delete(row)

    @staticmethod
    def _apply(row: RentalModel, rental: Rental) -> None:
        row.locker_id = rental.locker_id
        row.client_id = rental.client_id
        row.start_date = rental.start_date
        row.end_date = rental.end_date
        row.monthly_price = rental.monthly_price
        row.total_amount = rental.total_amount
        row.status = rental.status
        row.payment_status = rental.payment_status
        row.notes = rental.notes
