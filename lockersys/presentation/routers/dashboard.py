from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lockersys.presentation.dependencies import get_current_user, get_db
from lockersys.schemas.models import ApiResponse, DashboardStats
from lockersys.services.dashboard_service import get_dashboard_stats_service

router = APIRouter(tags=["Dashboard"], dependencies=[Depends(get_current_user)])


@router.get("/stats", response_model=ApiResponse[DashboardStats])
def get_dashboard_stats(db: Session = Depends(get_db)) -> ApiResponse[DashboardStats]:
    """
    Aggregated counters, recomputed on every call
    """
    return ApiResponse(data=get_dashboard_stats_service(db))
