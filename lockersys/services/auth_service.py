from __future__ import annotations

from datetime import timedelta

from sqlalchemy.orm import Session

from lockersys.core.use_cases.authenticate import (
    AuthenticateTokenUseCase,
    AuthSessionDTO,
    LoginUseCase,
    LogoutUseCase,
    RegisterUserUseCase,
)
from lockersys.infrastructure.config import Settings
from lockersys.infrastructure.repositories.user_repository_impl import (
    SessionTokenRepositoryImpl,
    UserRepositoryImpl,
)
from lockersys.infrastructure.security import BcryptPasswordHasher, Sha256TokenCodec
from lockersys.infrastructure.unit_of_work import SqlAlchemyUnitOfWork
from lockersys.schemas.models import AuthSession, LoginRequest, RegisterRequest, UserOut


def _to_auth_session(dto: AuthSessionDTO) -> AuthSession:
    return AuthSession(user=UserOut.model_validate(dto.user), token=dto.token, expires_at=dto.expires_at)


def login_service(body: LoginRequest, db: Session, settings: Settings) -> AuthSession:
    use_case = LoginUseCase(
        user_repo=UserRepositoryImpl(db),
        token_repo=SessionTokenRepositoryImpl(db),
        hasher=BcryptPasswordHasher(),
        codec=Sha256TokenCodec(),
        token_ttl=timedelta(hours=settings.token_ttl_hours),
        uow=SqlAlchemyUnitOfWork(db),
    )
    return _to_auth_session(use_case.execute(email=body.email or "", password=body.password or ""))


def register_service(body: RegisterRequest, db: Session, settings: Settings) -> AuthSession:
    use_case = RegisterUserUseCase(
        user_repo=UserRepositoryImpl(db),
        token_repo=SessionTokenRepositoryImpl(db),
        hasher=BcryptPasswordHasher(),
        codec=Sha256TokenCodec(),
        token_ttl=timedelta(hours=settings.token_ttl_hours),
        uow=SqlAlchemyUnitOfWork(db),
    )
    return _to_auth_session(use_case.execute(name=body.name, email=body.email, password=body.password))


def authenticate_token_service(token: str | None, db: Session) -> UserOut:
    use_case = AuthenticateTokenUseCase(
        user_repo=UserRepositoryImpl(db),
        token_repo=SessionTokenRepositoryImpl(db),
        codec=Sha256TokenCodec(),
    )
    return UserOut.model_validate(use_case.execute(token=token))


def logout_service(token: str, db: Session) -> bool:
    use_case = LogoutUseCase(
        token_repo=SessionTokenRepositoryImpl(db),
        codec=Sha256TokenCodec(),
        uow=SqlAlchemyUnitOfWork(db),
    )
    return use_case.execute(token=token)
