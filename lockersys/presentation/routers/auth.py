from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lockersys.infrastructure.config import Settings
from lockersys.presentation.dependencies import get_bearer_token, get_current_user, get_db, get_settings
from lockersys.schemas.models import ApiResponse, AuthSession, LoginRequest, RegisterRequest, UserOut
from lockersys.services.auth_service import login_service, logout_service, register_service

router = APIRouter(tags=["Auth"])


@router.post("/login", response_model=ApiResponse[AuthSession])
def post_login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[AuthSession]:
    """
    Exchange email and password for a bearer token
    """
    return ApiResponse(message="Login successful", data=login_service(body, db, settings))


@router.post(
    "/register",
    response_model=ApiResponse[AuthSession],
    status_code=201,
    dependencies=[Depends(get_current_user)],
)
def post_register(
    body: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[AuthSession]:
    """
    Create another admin user. Only an authenticated admin may do this.
    """
    return ApiResponse(message="User created successfully", data=register_service(body, db, settings))


@router.get("/me", response_model=ApiResponse[UserOut])
def get_me(user: UserOut = Depends(get_current_user)) -> ApiResponse[UserOut]:
    return ApiResponse(data=user)


@router.post("/logout", response_model=ApiResponse[None], dependencies=[Depends(get_current_user)])
def post_logout(
    token: str | None = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> ApiResponse[None]:
    logout_service(token or "", db)
    return ApiResponse(message="Logged out successfully")
