from __future__ import annotations

from sqlalchemy.orm import Session

from lockersys.core.use_cases.dashboard import GetDashboardStatsUseCase
from lockersys.infrastructure.repositories.client_repository_impl import ClientRepositoryImpl
from lockersys.infrastructure.repositories.locker_repository_impl import LockerRepositoryImpl
from lockersys.infrastructure.repositories.rental_repository_impl import RentalRepositoryImpl
from lockersys.schemas.models import DashboardStats


def get_dashboard_stats_service(db: Session) -> DashboardStats:
    use_case = GetDashboardStatsUseCase(
        locker_repo=LockerRepositoryImpl(db),
        rental_repo=RentalRepositoryImpl(db),
        client_repo=ClientRepositoryImpl(db),
    )
    dto = use_case.execute()

    return DashboardStats(
        total_lockers=dto.total_lockers,
        available_lockers=dto.available_lockers,
        rented_lockers=dto.rented_lockers,
        maintenance_lockers=dto.maintenance_lockers,
        reserved_lockers=dto.reserved_lockers,
        total_rentals=dto.total_rentals,
        active_rentals=dto.active_rentals,
        overdue_rentals=dto.overdue_rentals,
        completed_rentals=dto.completed_rentals,
        monthly_revenue=dto.monthly_revenue,
        total_clients=dto.total_clients,
    )
