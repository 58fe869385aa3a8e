"""Service layer for the dashboard UI.

These services wrap the `crm.api_client.ApiClient` calls and convert API
errors into `(ok, message)` or `(value, error)` results so UI components
can remain thin and focused on presentation.
"""

from .gateway import build_api_client, guarded
from .auth_service import AuthService
from .client_service import ClientService
from .worker_service import WorkerService
from .appointment_service import AppointmentService
from .dashboard_service import DashboardData, DashboardService

__all__ = [
    "build_api_client",
    "guarded",
    "AuthService",
    "ClientService",
    "WorkerService",
    "AppointmentService",
    "DashboardData",
    "DashboardService",
]
