from __future__ import annotations

"""Role-based permission checks for dashboard actions.

Admins can do everything. Staff viewers can read everything and may edit,
complete or cancel appointments, but cannot create or delete records or
touch client and worker data.
"""

from enum import Enum
from typing import Optional

from .session import AuthSession


class Permission(str, Enum):
    """Gate levels accepted by `can_access`."""

    ADMIN = "admin"
    STAFF_VIEWER = "staff-viewer"
    ANY = "any"


def can_access(session: Optional[AuthSession], permission: Permission | str) -> bool:
    """Return True when the session satisfies the gate level.

    Unknown levels and anonymous sessions are denied.
    """
    if session is None:
        return False
    try:
        level = Permission(permission)
    except ValueError:
        return False
    is_admin = session.is_admin()
    is_staff = session.is_staff_viewer()
    if level is Permission.ADMIN:
        return is_admin
    # STAFF_VIEWER and ANY admit the same roles
    return is_staff or is_admin


class Permissions:
    """Named action checks for a session."""

    def __init__(self, session: Optional[AuthSession]) -> None:
        self.session = session

    def _authenticated(self) -> bool:
        return self.session is not None and self.session.is_authenticated

    def _admin(self) -> bool:
        return self.session is not None and self.session.is_admin()

    # Clients
    def can_view_clients(self) -> bool:
        return self._authenticated()

    def can_create_client(self) -> bool:
        return self._admin()

    def can_edit_client(self) -> bool:
        return self._admin()

    def can_delete_client(self) -> bool:
        return self._admin()

    # Service workers
    def can_view_workers(self) -> bool:
        return self._authenticated()

    def can_create_worker(self) -> bool:
        return self._admin()

    def can_edit_worker(self) -> bool:
        return self._admin()

    def can_delete_worker(self) -> bool:
        return self._admin()

    # Appointments
    def can_view_appointments(self) -> bool:
        return self._authenticated()

    def can_create_appointment(self) -> bool:
        return self._admin()

    def can_edit_appointment(self) -> bool:
        return self._authenticated()

    def can_delete_appointment(self) -> bool:
        return self._admin()

    def can_complete_appointment(self) -> bool:
        return self._authenticated()

    def can_cancel_appointment(self) -> bool:
        return self._authenticated()


__all__ = ["Permission", "can_access", "Permissions"]
