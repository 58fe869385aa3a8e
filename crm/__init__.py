"""Service CRM dashboard core package.

Framework-agnostic pieces shared by the Streamlit UI and the CLI runner:
the API gateway client, the auth session, permissions, list filters,
form models and the appointment status workflow.
"""

from .api_client import ApiClient, ApiError
from .config import Settings, load_settings
from .session import AuthSession, Role
from .permissions import Permission, Permissions, can_access

__all__ = [
    "ApiClient",
    "ApiError",
    "Settings",
    "load_settings",
    "AuthSession",
    "Role",
    "Permission",
    "Permissions",
    "can_access",
]
