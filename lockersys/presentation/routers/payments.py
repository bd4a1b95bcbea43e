from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from lockersys.presentation.dependencies import get_current_user, get_db
from lockersys.schemas.models import ApiResponse, PaginatedResponse, PaymentCreate, PaymentOut, PaymentUpdate
from lockersys.services.payment_service import (
    delete_payment_service,
    get_payment_service,
    list_payments_service,
    record_payment_service,
    update_payment_service,
)

router = APIRouter(tags=["Payments"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=PaginatedResponse[PaymentOut])
def get_payments(
    page: int = Query(1),
    limit: int = Query(10),
    rental_id: str | None = Query(None, alias="rentalId"),
    db: Session = Depends(get_db),
) -> PaginatedResponse[PaymentOut]:
    return list_payments_service(db, page=page, limit=limit, rental_id=rental_id)


@router.get("/{payment_id}", response_model=ApiResponse[PaymentOut])
def get_payment(payment_id: str, db: Session = Depends(get_db)) -> ApiResponse[PaymentOut]:
    return ApiResponse(data=get_payment_service(payment_id, db))


@router.post("", response_model=ApiResponse[PaymentOut], status_code=201)
def post_payment(body: PaymentCreate, db: Session = Depends(get_db)) -> ApiResponse[PaymentOut]:
    return ApiResponse(message="Payment recorded successfully", data=record_payment_service(body, db))


@router.put("/{payment_id}", response_model=ApiResponse[PaymentOut])
def put_payment(payment_id: str, body: PaymentUpdate, db: Session = Depends(get_db)) -> ApiResponse[PaymentOut]:
    return ApiResponse(message="Payment updated successfully", data=update_payment_service(payment_id, body, db))


@router.delete("/{payment_id}", response_model=ApiResponse[None])
def delete_payment(payment_id: str, db: Session = Depends(get_db)) -> ApiResponse[None]:
    delete_payment_service(payment_id, db)
    return ApiResponse(message="Payment deleted successfully")
