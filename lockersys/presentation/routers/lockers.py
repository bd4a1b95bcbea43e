from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from lockersys.core.entities.locker import LockerSize, LockerStatus
from lockersys.presentation.dependencies import get_current_user, get_db
from lockersys.schemas.models import (
    ApiResponse,
    LockerCreate,
    LockerOut,
    LockerStats,
    LockerUpdate,
    PaginatedResponse,
)
from lockersys.services.locker_service import (
    create_locker_service,
    delete_locker_service,
    get_locker_service,
    get_locker_stats_service,
    list_available_lockers_service,
    list_lockers_service,
    update_locker_service,
)

router = APIRouter(tags=["Lockers"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=PaginatedResponse[LockerOut])
def get_lockers(
    page: int = Query(1),
    limit: int = Query(10),
    status: LockerStatus | None = Query(None),
    size: LockerSize | None = Query(None),
    search: str | None = Query(None),
    db: Session = Depends(get_db),
) -> PaginatedResponse[LockerOut]:
    """
    List lockers ordered by number
    """
    return list_lockers_service(db, page=page, limit=limit, status=status, size=size, search=search)


@router.get("/available", response_model=ApiResponse[list[LockerOut]])
def get_available_lockers(db: Session = Depends(get_db)) -> ApiResponse[list[LockerOut]]:
    return ApiResponse(data=list_available_lockers_service(db))


@router.get("/stats", response_model=ApiResponse[LockerStats])
def get_locker_stats(db: Session = Depends(get_db)) -> ApiResponse[LockerStats]:
    return ApiResponse(data=get_locker_stats_service(db))


@router.get("/{locker_id}", response_model=ApiResponse[LockerOut])
def get_locker(locker_id: str, db: Session = Depends(get_db)) -> ApiResponse[LockerOut]:
    return ApiResponse(data=get_locker_service(locker_id, db))


@router.post("", response_model=ApiResponse[LockerOut], status_code=201)
def post_locker(body: LockerCreate, db: Session = Depends(get_db)) -> ApiResponse[LockerOut]:
    """
    Register a locker. A locker cannot be created as rented, since no
    active rental would back that status.
    """
    return ApiResponse(message="Locker created successfully", data=create_locker_service(body, db))


@router.put("/{locker_id}", response_model=ApiResponse[LockerOut])
def put_locker(locker_id: str, body: LockerUpdate, db: Session = Depends(get_db)) -> ApiResponse[LockerOut]:
    return ApiResponse(message="Locker updated successfully", data=update_locker_service(locker_id, body, db))


@router.delete("/{locker_id}", response_model=ApiResponse[None])
def delete_locker(locker_id: str, db: Session = Depends(get_db)) -> ApiResponse[None]:
    delete_locker_service(locker_id, db)
    return ApiResponse(message="Locker deleted successfully")
