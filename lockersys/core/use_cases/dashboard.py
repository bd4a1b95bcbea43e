from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from lockersys.core.entities.locker import LockerStatus
from lockersys.core.entities.rental import PaymentStatus, RentalStatus
from lockersys.core.repositories.client_repository import ClientRepository
from lockersys.core.repositories.locker_repository import LockerRepository
from lockersys.core.repositories.rental_repository import RentalRepository


@dataclass(frozen=True, slots=True)
class DashboardStatsDTO:
    """
    Use-case return type for GET /api/dashboard/stats
    """
    total_lockers: int
    available_lockers: int
    rented_lockers: int
    maintenance_lockers: int
    reserved_lockers: int
    total_rentals: int
    active_rentals: int
    overdue_rentals: int
    completed_rentals: int
    monthly_revenue: Decimal
    total_clients: int


class GetDashboardStatsUseCase:
    """
    Fold the current table state into summary counts. Recomputed on every call.
    """

    def __init__(
        self,
        *,
        locker_repo: LockerRepository,
        rental_repo: RentalRepository,
        client_repo: ClientRepository,
    ) -> None:
        self._locker_repo = locker_repo
        self._rental_repo = rental_repo
        self._client_repo = client_repo

    def execute(self) -> DashboardStatsDTO:
        lockers = self._locker_repo.count_by_status()
        rentals = self._rental_repo.count_by_status()

        return DashboardStatsDTO(
            total_lockers=sum(lockers.values()),
            available_lockers=lockers[LockerStatus.AVAILABLE],
            rented_lockers=lockers[LockerStatus.RENTED],
            maintenance_lockers=lockers[LockerStatus.MAINTENANCE],
            reserved_lockers=lockers[LockerStatus.RESERVED],
            total_rentals=sum(rentals.values()),
            active_rentals=rentals[RentalStatus.ACTIVE],
            overdue_rentals=rentals[RentalStatus.OVERDUE],
            completed_rentals=rentals[RentalStatus.COMPLETED],
            monthly_revenue=self._rental_repo.sum_total_amount(payment_status=PaymentStatus.PAID),
            total_clients=self._client_repo.count(),
        )
