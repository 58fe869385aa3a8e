from __future__ import annotations

"""List-view filtering.

Status and date facets are pushed to the server as query parameters or
endpoint choice; the free-text search runs locally over whatever the server
returned. The facet value ``"all"`` means "no filter".
"""

from collections import Counter
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from .models import Appointment, AppointmentStatus, Client, ServiceWorker

ALL = "all"
# Key of the is_upcoming tally in quick_counts
UPCOMING = "upcoming"


class DateFacet(str, Enum):
    ALL = "all"
    TODAY = "today"
    UPCOMING = "upcoming"


def status_params(status: Optional[str], **extra: str) -> Dict[str, str]:
    """Build list query parameters, dropping the ``all`` status facet."""
    params: Dict[str, str] = {k: str(v) for k, v in extra.items() if v not in (None, "")}
    if status and status != ALL:
        params["status"] = status
    return params


def _contains(value: Optional[str], needle_lower: str) -> bool:
    return bool(value) and needle_lower in value.lower()


def _matches_person(record: Client | ServiceWorker, search: str) -> bool:
    # Phone is compared as typed so "555-" style fragments match exactly
    needle = search.lower()
    return (
        _contains(record.first_name, needle)
        or _contains(record.last_name, needle)
        or _contains(record.email, needle)
        or (search in (record.phone or ""))
    )


def filter_clients(clients: Iterable[Client], search: str = "", status: Optional[str] = None) -> List[Client]:
    """Filter clients by free text (name, email, phone) and optional status."""
    out: List[Client] = []
    for c in clients:
        if status and status != ALL and c.status != status:
            continue
        if search and not _matches_person(c, search):
            continue
        out.append(c)
    return out


def filter_workers(
    workers: Iterable[ServiceWorker], search: str = "", status: Optional[str] = None
) -> List[ServiceWorker]:
    """Filter workers by free text (name, email, phone) and optional status."""
    out: List[ServiceWorker] = []
    for w in workers:
        if status and status != ALL and w.status != status:
            continue
        if search and not _matches_person(w, search):
            continue
        out.append(w)
    return out


def filter_appointments(
    appointments: Iterable[Appointment], search: str = "", status: Optional[str] = None
) -> List[Appointment]:
    """Filter appointments by client name, worker name or description."""
    needle = search.lower()
    out: List[Appointment] = []
    for a in appointments:
        if status and status != ALL and a.status != status:
            continue
        if needle and not (
            _contains(a.client_name, needle)
            or _contains(a.worker_name, needle)
            or _contains(a.description, needle)
        ):
            continue
        out.append(a)
    return out


def status_counts(appointments: Sequence[Appointment]) -> Dict[str, int]:
    """Per-status counts over the fetched list, with every status present."""
    counts = Counter(a.status for a in appointments)
    return {s.value: counts.get(s.value, 0) for s in AppointmentStatus}


def quick_counts(appointments: Sequence[Appointment]) -> Dict[str, int]:
    """`status_counts` plus the number of appointments flagged `is_upcoming`."""
    counts = status_counts(appointments)
    counts[UPCOMING] = sum(1 for a in appointments if a.is_upcoming)
    return counts


def fetch_appointments(api, status: Optional[str] = ALL, date_facet: str = DateFacet.ALL.value) -> List[Appointment]:
    """Fetch appointments for the given facets.

    ``today`` and ``upcoming`` use their dedicated endpoints and ignore the
    status facet, matching what the server exposes.
    """
    facet = DateFacet(date_facet)
    if facet is DateFacet.TODAY:
        return api.get_today_appointments()
    if facet is DateFacet.UPCOMING:
        return api.get_upcoming_appointments()
    return api.get_appointments(status_params(status))


__all__ = [
    "ALL",
    "DateFacet",
    "status_params",
    "filter_clients",
    "filter_workers",
    "filter_appointments",
    "status_counts",
    "quick_counts",
    "UPCOMING",
    "fetch_appointments",
]
