from __future__ import annotations

"""General-purpose helpers for the UI."""

from datetime import date, datetime, time
from typing import Dict, Optional

from crm.models import (
    APPOINTMENT_STATUS_LABELS,
    CLIENT_STATUS_LABELS,
    WORKER_STATUS_LABELS,
    ServiceWorker,
)
from crm.status_workflow import status_badge as badge_text

STATUS_COLORS: Dict[str, str] = {
    "scheduled": "blue",
    "in_progress": "orange",
    "completed": "green",
    "cancelled": "red",
    "no_show": "gray",
    "active": "green",
    "inactive": "gray",
    "potential": "violet",
    "on_leave": "orange",
}

ALL_OPTION = ("all", "All")


def status_badge(status: str) -> str:
    """Streamlit colored-text markup, e.g. ``:green[COMPLETED]``."""
    color = STATUS_COLORS.get(status, "gray")
    return f":{color}[{badge_text(status)}]"


def facet_options(labels: Dict[str, str], all_label: str) -> Dict[str, str]:
    """Selectbox options for a status facet, with ``all`` first."""
    out = {ALL_OPTION[0]: all_label}
    out.update(labels)
    return out


CLIENT_STATUS_FACETS = facet_options(CLIENT_STATUS_LABELS, "All Clients")
WORKER_STATUS_FACETS = facet_options(WORKER_STATUS_LABELS, "All Workers")
APPOINTMENT_STATUS_FACETS = facet_options(APPOINTMENT_STATUS_LABELS, "All Statuses")
DATE_FACETS = {"all": "All Dates", "today": "Today", "upcoming": "Upcoming"}


def worker_option_label(worker: ServiceWorker) -> str:
    """``Name (skills)`` for dropdowns."""
    return f"{worker.full_name} ({worker.skills})" if worker.skills else worker.full_name


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.strptime(value[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_clock(value: Optional[str]) -> Optional[time]:
    """Parse ``HH:MM`` or ``HH:MM:SS``; None for blanks or junk."""
    if not value:
        return None
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    return None


def or_placeholder(value: Optional[str], placeholder: str = "Not provided") -> str:
    return value if value else placeholder
