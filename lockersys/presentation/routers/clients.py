from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from lockersys.core.entities.client import ClientStatus
from lockersys.presentation.dependencies import get_current_user, get_db
from lockersys.schemas.models import ApiResponse, ClientCreate, ClientOut, ClientUpdate, PaginatedResponse
from lockersys.services.client_service import (
    create_client_service,
    delete_client_service,
    get_client_service,
    list_clients_service,
    update_client_service,
)

# Mounted at /api/clients and, hidden from the schema, at /api/students
router = APIRouter(tags=["Clients"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=PaginatedResponse[ClientOut])
def get_clients(
    page: int = Query(1),
    limit: int = Query(10),
    status: ClientStatus | None = Query(None),
    search: str | None = Query(None),
    db: Session = Depends(get_db),
) -> PaginatedResponse[ClientOut]:
    """
    List clients, newest first. `search` matches name, email or document.
    """
    return list_clients_service(db, page=page, limit=limit, status=status, search=search)


@router.get("/{client_id}", response_model=ApiResponse[ClientOut])
def get_client(client_id: str, db: Session = Depends(get_db)) -> ApiResponse[ClientOut]:
    return ApiResponse(data=get_client_service(client_id, db))


@router.post("", response_model=ApiResponse[ClientOut], status_code=201)
def post_client(body: ClientCreate, db: Session = Depends(get_db)) -> ApiResponse[ClientOut]:
    return ApiResponse(message="Client created successfully", data=create_client_service(body, db))


@router.put("/{client_id}", response_model=ApiResponse[ClientOut])
def put_client(client_id: str, body: ClientUpdate, db: Session = Depends(get_db)) -> ApiResponse[ClientOut]:
    return ApiResponse(message="Client updated successfully", data=update_client_service(client_id, body, db))


@router.delete("/{client_id}", response_model=ApiResponse[None])
def delete_client(client_id: str, db: Session = Depends(get_db)) -> ApiResponse[None]:
    """
    Delete a client. Clients referenced by any rental are kept (409).
    """
    delete_client_service(client_id, db)
    return ApiResponse(message="Client deleted successfully")
