from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from lockersys.core.entities.locker import Locker, LockerSize, LockerStatus
from lockersys.core.entities.page import Page, PageRequest
from lockersys.core.repositories.locker_repository import LockerRepository
from lockersys.infrastructure.models.models import LockerModel
from lockersys.infrastructure.repositories.search import LIKE_ESCAPE, contains_pattern


def to_locker(row: LockerModel) -> Locker:
    return Locker(
        id=row.id,
        number=row.number,
        location=row.location,
        size=LockerSize(row.size),
        monthly_price=row.monthly_price,
        status=LockerStatus(row.status),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class LockerRepositoryImpl(LockerRepository):
    """
    SQLAlchemy implementation for Locker. Writes are left to the caller's unit of work.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, locker_id: str) -> Locker | None:
        row = self._db.get(LockerModel, locker_id)
        if row is None:
            return None
        return to_locker(row)

    def get_by_number(self, number: str) -> Locker | None:
        row = self._db.scalars(select(LockerModel).where(LockerModel.number == number)).first()
        if row is None:
            return None
        return to_locker(row)

    def list(
        self,
        page: PageRequest,
        *,
        status: LockerStatus | None = None,
        size: LockerSize | None = None,
        search: str | None = None,
    ) -> Page[Locker]:
        stmt = select(LockerModel)
        if status is not None:
            stmt = stmt.where(LockerModel.status == status)
        if size is not None:
            stmt = stmt.where(LockerModel.size == size)
        if search:
            pattern = contains_pattern(search)
            stmt = stmt.where(
                or_(
                    LockerModel.number.ilike(pattern, escape=LIKE_ESCAPE),
                    LockerModel.location.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        total = self._db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        rows = self._db.scalars(
            stmt.order_by(LockerModel.number.asc()).offset(page.offset).limit(page.limit)
        ).all()

        return Page(items=[to_locker(r) for r in rows], total=total, page=page.page, limit=page.limit)

    def list_available(self) -> list[Locker]:
        rows = self._db.scalars(
            select(LockerModel)
            .where(LockerModel.status == LockerStatus.AVAILABLE)
            .order_by(LockerModel.number.asc())
        ).all()
        return [to_locker(r) for r in rows]

    def count_by_status(self) -> dict[LockerStatus, int]:
        counts = {status: 0 for status in LockerStatus}
        rows = self._db.execute(
            select(LockerModel.status, func.count(LockerModel.id)).group_by(LockerModel.status)
        ).all()
        for status, count in rows:
            counts[LockerStatus(status)] = int(count)
        return counts

    def add(self, locker: Locker) -> None:
        row = LockerModel(id=locker.id)
        self._apply(row, locker)
        self._db.add(row)

    def update(self, locker: Locker) -> None:
        row = self._db.get(LockerModel, locker.id)
        if row is None:
            row = LockerModel(id=locker.id)
            self._db.add(row)
        self._apply(row, locker)

    def delete(self, locker_id: str) -> None:
        row = self._db.get(LockerModel, locker_id)
        if row is not None:
            self._db.delete(row)

    @staticmethod
    def _apply(row: LockerModel, locker: Locker) -> None:
        row.number = locker.number
        row.location = locker.location
        row.size = locker.size
        row.monthly_price = locker.monthly_price
        row.status = locker.status
