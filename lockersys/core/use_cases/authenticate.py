from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Protocol

from lockersys.core.entities.user import SessionToken, User
from lockersys.core.errors import AuthError, ConflictError, ValidationError
from lockersys.core.repositories.unit_of_work import UnitOfWork
from lockersys.core.repositories.user_repository import SessionTokenRepository, UserRepository
from lockersys.core.use_cases.common import new_id, require_text

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
# bcrypt only hashes the first 72 bytes
MAX_PASSWORD_BYTES = 72


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str:
        raise NotImplementedError

    def verify(self, password: str, password_hash: str) -> bool:
        raise NotImplementedError


class TokenCodec(Protocol):
    """
    Issues opaque bearer tokens and derives the digest under which they are stored.
    """

    def new_token(self) -> str:
        raise NotImplementedError

    def digest(self, token: str) -> str:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class AuthSessionDTO:
    user: User
    token: str
    expires_at: datetime


class _SessionIssuer:
    def __init__(self, *, token_repo: SessionTokenRepository, codec: TokenCodec, ttl: timedelta) -> None:
        self._token_repo = token_repo
        self._codec = codec
        self._ttl = ttl

    def issue(self, user: User) -> tuple[str, SessionToken]:
        token = self._codec.new_token()
        session = SessionToken(
            token_hash=self._codec.digest(token),
            user_id=user.id,
            expires_at=datetime.now(timezone.utc) + self._ttl,
        )
        self._token_repo.upsert(session)
        return token, session


class LoginUseCase:
    def __init__(
        self,
        *,
        user_repo: UserRepository,
        token_repo: SessionTokenRepository,
        hasher: PasswordHasher,
        codec: TokenCodec,
        token_ttl: timedelta,
        uow: UnitOfWork,
    ) -> None:
        self._user_repo = user_repo
        self._hasher = hasher
        self._uow = uow
        self._issuer = _SessionIssuer(token_repo=token_repo, codec=codec, ttl=token_ttl)

    def execute(self, *, email: str, password: str) -> AuthSessionDTO:
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self._user_repo.get_by_email(email.strip().lower())
        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.warning("Rejected login for %s", email)
            raise AuthError(INVALID_CREDENTIALS)

        with self._uow:
            token, session = self._issuer.issue(user)

        logger.info("User %s logged in", user.email)
        return AuthSessionDTO(user=user, token=token, expires_at=session.expires_at)


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        user_repo: UserRepository,
        token_repo: SessionTokenRepository,
        hasher: PasswordHasher,
        codec: TokenCodec,
        token_ttl: timedelta,
        uow: UnitOfWork,
    ) -> None:
        self._user_repo = user_repo
        self._hasher = hasher
        self._uow = uow
        self._issuer = _SessionIssuer(token_repo=token_repo, codec=codec, ttl=token_ttl)

    def execute(self, *, name: str, email: str, password: str) -> AuthSessionDTO:
        name = require_text(name, "name")
        email = require_text(email, "email").lower()
        password = require_text(password, "password")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")

        if self._user_repo.get_by_email(email) is not None:
            raise ConflictError("Email is already in use")

        user = User(id=new_id(), name=name, email=email, password_hash=self._hasher.hash(password))
        with self._uow:
            self._user_repo.add(user)
            token, session = self._issuer.issue(user)

        logger.info("User %s registered", user.email)
        return AuthSessionDTO(user=self._user_repo.get(user.id), token=token, expires_at=session.expires_at)


class AuthenticateTokenUseCase:
    def __init__(
        self,
        *,
        user_repo: UserRepository,
        token_repo: SessionTokenRepository,
        codec: TokenCodec,
    ) -> None:
        self._user_repo = user_repo
        self._token_repo = token_repo
        self._codec = codec

    def execute(self, *, token: str | None) -> User:
        if not token:
            raise AuthError("Access token required")

        session = self._token_repo.get(self._codec.digest(token))
        if session is None or not session.is_valid():
            raise AuthError("Invalid or expired token")

        user = self._user_repo.get(session.user_id)
        if user is None:
            raise AuthError("Invalid or expired token")
        return user


class LogoutUseCase:
    def __init__(self, *, token_repo: SessionTokenRepository, codec: TokenCodec, uow: UnitOfWork) -> None:
        self._token_repo = token_repo
        self._codec = codec
        self._uow = uow

    def execute(self, *, token: str) -> bool:
        session = self._token_repo.get(self._codec.digest(token))
        if session is None:
            return False

        session.revoke()
        with self._uow:
            self._token_repo.upsert(session)
        return True
