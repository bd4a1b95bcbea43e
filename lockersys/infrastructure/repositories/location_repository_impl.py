from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from lockersys.core.entities.location import Location
from lockersys.core.entities.page import Page, PageRequest
from lockersys.core.repositories.location_repository import LocationRepository
from lockersys.infrastructure.models.models import LocationModel
from lockersys.infrastructure.repositories.search import LIKE_ESCAPE, contains_pattern


def to_location(row: LocationModel) -> Location:
    return Location(
        id=row.id,
        name=row.name,
        description=row.description,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class LocationRepositoryImpl(LocationRepository):
    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, location_id: str) -> Location | None:
        row = self._db.get(LocationModel, location_id)
        if row is None:
            return None
        return to_location(row)

    def get_by_name(self, name: str) -> Location | None:
        row = self._db.scalars(select(LocationModel).where(func.lower(LocationModel.name) == name.lower())).first()
        if row is None:
            return None
        return to_location(row)

    def list(self, page: PageRequest, *, search: str | None = None) -> Page[Location]:
        stmt = select(LocationModel)
        if search:
            pattern = contains_pattern(search)
            stmt = stmt.where(
                or_(
                    LocationModel.name.ilike(pattern, escape=LIKE_ESCAPE),
                    LocationModel.description.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        total = self._db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        rows = self._db.scalars(
            stmt.order_by(LocationModel.name.asc()).offset(page.offset).limit(page.limit)
        ).all()

        return Page(items=[to_location(r) for r in rows], total=total, page=page.page, limit=page.limit)

    def add(self, location: Location) -> None:
        self._db.add(LocationModel(id=location.id, name=location.name, description=location.description))

    def update(self, location: Location) -> None:
        row = self._db.get(LocationModel, location.id)
        if row is None:
            row = LocationModel(id=location.id)
            self._db.add(row)
        row.name = location.name
        row.description = location.description

    def delete(self, location_id: str) -> None:
        row = self._db.get(LocationModel, location_id)
        if row is not None:
            self._db.delete(row)
