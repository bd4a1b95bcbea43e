from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from lockersys.presentation.dependencies import get_current_user, get_db
from lockersys.schemas.models import ApiResponse, LocationCreate, LocationOut, LocationUpdate, PaginatedResponse
from lockersys.services.location_service import (
    create_location_service,
    delete_location_service,
    get_location_service,
    list_locations_service,
    update_location_service,
)

router = APIRouter(tags=["Locations"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=PaginatedResponse[LocationOut])
def get_locations(
    page: int = Query(1),
    limit: int = Query(10),
    search: str | None = Query(None),
    db: Session = Depends(get_db),
) -> PaginatedResponse[LocationOut]:
    return list_locations_service(db, page=page, limit=limit, search=search)


@router.get("/{location_id}", response_model=ApiResponse[LocationOut])
def get_location(location_id: str, db: Session = Depends(get_db)) -> ApiResponse[LocationOut]:
    return ApiResponse(data=get_location_service(location_id, db))


@router.post("", response_model=ApiResponse[LocationOut], status_code=201)
def post_location(body: LocationCreate, db: Session = Depends(get_db)) -> ApiResponse[LocationOut]:
    return ApiResponse(message="Location created successfully", data=create_location_service(body, db))


@router.put("/{location_id}", response_model=ApiResponse[LocationOut])
def put_location(location_id: str, body: LocationUpdate, db: Session = Depends(get_db)) -> ApiResponse[LocationOut]:
    return ApiResponse(message="Location updated successfully", data=update_location_service(location_id, body, db))


@router.delete("/{location_id}", response_model=ApiResponse[None])
def delete_location(location_id: str, db: Session = Depends(get_db)) -> ApiResponse[None]:
    delete_location_service(location_id, db)
    return ApiResponse(message="Location deleted successfully")
