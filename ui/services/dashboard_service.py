from __future__ import annotations

"""Summary data for the Dashboard page."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from crm.api_client import ApiClient
from crm.models import Appointment, AppointmentStats, ClientStats, WorkerStats

from .gateway import guarded


@dataclass
class DashboardData:
    appointments: AppointmentStats = field(default_factory=AppointmentStats)
    clients: ClientStats = field(default_factory=ClientStats)
    workers: WorkerStats = field(default_factory=WorkerStats)
    today: List[Appointment] = field(default_factory=list)


class DashboardService:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def load(self) -> Tuple[DashboardData, Optional[str]]:
        """Fetch the three stats endpoints and today's schedule.

        Any failure returns zeroed data plus the error; partial results are
        not mixed with defaults.
        """
        def _fetch() -> DashboardData:
            return DashboardData(
                appointments=self.api.get_appointment_stats(),
                clients=self.api.get_client_stats(),
                workers=self.api.get_worker_stats(),
                today=self.api.get_today_appointments(),
            )

        data, err = guarded(_fetch, "Failed to load dashboard data")
        return data or DashboardData(), err
