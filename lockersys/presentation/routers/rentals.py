from __future__ import annotations

from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from lockersys.core.entities.rental import RentalStatus
from lockersys.presentation.dependencies import get_current_user, get_db
from lockersys.schemas.models import (
    ApiResponse,
    PaginatedResponse,
    PaymentOut,
    RentalCreate,
    RentalOut,
    RentalQuote,
    RentalUpdate,
)
from lockersys.services.payment_service import list_payments_service
from lockersys.services.rental_service import (
    create_rental_service,
    delete_rental_service,
    get_rental_service,
    list_rentals_service,
    quote_rental_service,
    update_rental_service,
)

router = APIRouter(tags=["Rentals"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=PaginatedResponse[RentalOut])
def get_rentals(
    page: int = Query(1),
    limit: int = Query(10),
    status: RentalStatus | None = Query(None),
    client_id: str | None = Query(None, alias="clientId"),
    locker_id: str | None = Query(None, alias="lockerId"),
    search: str | None = Query(None),
    db: Session = Depends(get_db),
) -> PaginatedResponse[RentalOut]:
    """
    List rentals, newest first, each with its locker and client resolved
    """
    return list_rentals_service(
        db,
        page=page,
        limit=limit,
        status=status,
        locker_id=locker_id,
        client_id=client_id,
        search=search,
    )


@router.get("/quote", response_model=ApiResponse[RentalQuote])
def get_rental_quote(
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    monthly_price: Decimal = Query(..., alias="monthlyPrice"),
) -> ApiResponse[RentalQuote]:
    """
    Price a rental period without storing anything
    """
    return ApiResponse(data=quote_rental_service(start_date, end_date, monthly_price))


@router.get("/{rental_id}", response_model=ApiResponse[RentalOut])
def get_rental(rental_id: str, db: Session = Depends(get_db)) -> ApiResponse[RentalOut]:
    return ApiResponse(data=get_rental_service(rental_id, db))


@router.get("/{rental_id}/payments", response_model=PaginatedResponse[PaymentOut])
def get_rental_payments(
    rental_id: str,
    page: int = Query(1),
    limit: int = Query(10),
    db: Session = Depends(get_db),
) -> PaginatedResponse[PaymentOut]:
    return list_payments_service(db, page=page, limit=limit, rental_id=rental_id)


@router.post("", response_model=ApiResponse[RentalOut], status_code=201)
def post_rental(body: RentalCreate, db: Session = Depends(get_db)) -> ApiResponse[RentalOut]:
    """
    Create a rental. An active rental marks its locker rented in the same
    transaction.

    Returns:
      - 201 with the stored rental
      - 400 on missing fields, unknown locker/client or end before start
      - 409 if the locker already has an active rental or is not rentable
    """
    return ApiResponse(message="Rental created successfully", data=create_rental_service(body, db))


@router.put("/{rental_id}", response_model=ApiResponse[RentalOut])
def put_rental(rental_id: str, body: RentalUpdate, db: Session = Depends(get_db)) -> ApiResponse[RentalOut]:
    return ApiResponse(message="Rental updated successfully", data=update_rental_service(rental_id, body, db))


@router.delete("/{rental_id}", response_model=ApiResponse[None])
def delete_rental(rental_id: str, db: Session = Depends(get_db)) -> ApiResponse[None]:
    delete_rental_service(rental_id, db)
    return ApiResponse(message="Rental deleted successfully")
