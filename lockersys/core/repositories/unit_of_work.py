from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType


class UnitOfWork(ABC):
    """
    Transaction boundary for a use case.

    Every repository write inside the `with` block is committed together on a
    clean exit and rolled back together when the block raises.
    """

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc_type is None:
            self.commit()
        else:
            self.rollback(exc)
        return False

    @abstractmethod
    def commit(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def rollback(self, exc: BaseException | None = None) -> None:
        """Discard pending writes. Implementations may re-raise `exc` as a domain error."""
        raise NotImplementedError
