from __future__ import annotations

"""Appointment status changes.

The dashboard never validates transitions: whatever status the user picks
is sent, and the remote service accepts or rejects it. The only client-side
decision is which endpoint carries the request.
"""

from enum import Enum
from typing import Any, Optional
import logging

from .models import APPOINTMENT_STATUS_LABELS, Appointment, AppointmentStatus

logger = logging.getLogger(__name__)


class StatusRoute(str, Enum):
    COMPLETE = "complete"
    CANCEL = "cancel"
    PATCH = "patch"


def route_for(status: str) -> StatusRoute:
    """Pick the endpoint for a requested status.

    Raises ValueError for values outside the appointment status set.
    """
    target = AppointmentStatus(status)
    if target is AppointmentStatus.COMPLETED:
        return StatusRoute.COMPLETE
    if target is AppointmentStatus.CANCELLED:
        return StatusRoute.CANCEL
    return StatusRoute.PATCH


def request_status_change(api: Any, appointment_id: int, status: str, notes: Optional[str] = None) -> Optional[Appointment]:
    """Ask the service to move an appointment to `status`.

    `notes` is sent as completion notes for ``completed`` and as the
    cancellation reason for ``cancelled``; it is ignored otherwise.
    Errors from the API propagate unchanged.
    """
    route = route_for(status)
    logger.info("Requesting status %s for appointment %s via %s", status, appointment_id, route.value)
    if route is StatusRoute.COMPLETE:
        return api.complete_appointment(appointment_id, notes or None)
    if route is StatusRoute.CANCEL:
        return api.cancel_appointment(appointment_id, notes or None)
    return api.update_appointment(appointment_id, {"status": status})


def status_choices() -> list[tuple[str, str]]:
    """(value, label) pairs in display order."""
    return [(s.value, APPOINTMENT_STATUS_LABELS[s.value]) for s in AppointmentStatus]


def status_badge(status: str) -> str:
    """Upper-case badge text, e.g. ``IN PROGRESS``."""
    return status.replace("_", " ").upper()


__all__ = ["StatusRoute", "route_for", "request_status_change", "status_choices", "status_badge"]
