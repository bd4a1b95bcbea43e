from __future__ import annotations

from typing import Iterator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from lockersys.infrastructure.config import Settings
from lockersys.schemas.models import UserOut
from lockersys.services.auth_service import authenticate_token_service

bearer_scheme = HTTPBearer(auto_error=False)


def get_db(request: Request) -> Iterator[Session]:
    """One session per request, from the database handle the lifespan put on app.state."""
    yield from request.app.state.database.session()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_bearer_token(credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme)) -> str | None:
    if credentials is None:
        return None
    return credentials.credentials


def get_current_user(
    token: str | None = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> UserOut:
    # AuthError propagates to the exception handler as a 401 envelope
    return authenticate_token_service(token, db)
