from __future__ import annotations

from abc import ABC, abstractmethod

from lockersys.core.entities.user import SessionToken, User


class UserRepository(ABC):
    @abstractmethod
    def get(self, user_id: str) -> User | None:
        raise NotImplementedError

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        raise NotImplementedError

    @abstractmethod
    def add(self, user: User) -> None:
        raise NotImplementedError


class SessionTokenRepository(ABC):
    @abstractmethod
    def get(self, token_hash: str) -> SessionToken | None:
        raise NotImplementedError

    @abstractmethod
    def upsert(self, token: SessionToken) -> None:
        raise NotImplementedError
