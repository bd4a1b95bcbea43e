from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from lockersys.core.errors import ConflictError, LockerSysError, StorageError
from lockersys.core.repositories.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def translate_storage_error(error: SQLAlchemyError) -> LockerSysError:
    if isinstance(error, IntegrityError):
        return ConflictError("The change conflicts with existing data")
    return StorageError("Storage operation failed")


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of work over one SQLAlchemy session. Store failures surface as
    domain errors, always after the session has been rolled back.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def commit(self) -> None:
        try:
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error("Commit failed, transaction rolled back: %s", e)
            raise translate_storage_error(e) from e

    def rollback(self, exc: BaseException | None = None) -> None:
        self._db.rollback()
        if isinstance(exc, SQLAlchemyError):
            logger.error("Transaction rolled back: %s", exc)
            raise translate_storage_error(exc) from exc
