from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from lockersys.core.entities.user import SessionToken, User
from lockersys.core.repositories.user_repository import SessionTokenRepository, UserRepository
from lockersys.infrastructure.models.models import SessionTokenModel, UserModel


class UserRepositoryImpl(UserRepository):
    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, user_id: str) -> User | None:
        row = self._db.get(UserModel, user_id)
        if row is None:
            return None
        return self._to_user(row)

    def get_by_email(self, email: str) -> User | None:
        row = self._db.scalars(select(UserModel).where(UserModel.email == email)).first()
        if row is None:
            return None
        return self._to_user(row)

    def add(self, user: User) -> None:
        self._db.add(
            UserModel(
                id=user.id,
                name=user.name,
                email=user.email,
                password_hash=user.password_hash,
                role=user.role,
            )
        )

    @staticmethod
    def _to_user(row: UserModel) -> User:
        return User(
            id=row.id,
            name=row.name,
            email=row.email,
            password_hash=row.password_hash,
            role=row.role,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


class SessionTokenRepositoryImpl(SessionTokenRepository):
    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, token_hash: str) -> SessionToken | None:
        row = self._db.get(SessionTokenModel, token_hash)
        if row is None:
            return None
        return SessionToken(
            token_hash=row.token_hash,
            user_id=row.user_id,
            expires_at=row.expires_at,
            revoked_at=row.revoked_at,
            created_at=row.created_at,
        )

    def upsert(self, token: SessionToken) -> None:
        row = self._db.get(SessionTokenModel, token.token_hash)
        if row is None:
            row = SessionTokenModel(token_hash=token.token_hash)
            self._db.add(row)

        row.user_id = token.user_id
        row.expires_at = token.expires_at
        row.revoked_at = token.revoked_at
