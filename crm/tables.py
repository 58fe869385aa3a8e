from __future__ import annotations

"""Tabular views of the entity lists.

Each builder returns a pandas DataFrame with display-ready columns and the
record id kept as the index, so a UI can map a selected row back to a
record. `export_csv` writes the same frame under `output/exports/`.
"""

from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from .io_paths import EXPORTS_DIR
from .models import (
    APPOINTMENT_STATUS_LABELS,
    APPOINTMENT_TYPE_LABELS,
    CLIENT_STATUS_LABELS,
    WORKER_STATUS_LABELS,
    Appointment,
    Client,
    ServiceWorker,
)

CLIENT_COLUMNS = ["Name", "Email", "Phone", "Status", "Appointments"]
WORKER_COLUMNS = ["Name", "Email", "Phone", "Skills", "Status", "Upcoming"]
APPOINTMENT_COLUMNS = ["Date & Time", "Client", "Worker", "Type", "Status", "Duration"]


def format_duration(minutes: int) -> str:
    """Render minutes as ``45 min``, ``1h`` or ``1h 30m``."""
    minutes = int(minutes or 0)
    if minutes < 60:
        return f"{minutes} min"
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest}m" if rest else f"{hours}h"


def format_schedule(appointment: Appointment) -> str:
    # Drop seconds from "HH:MM:SS"
    clock = appointment.scheduled_time[:5] if appointment.scheduled_time else ""
    return f"{appointment.scheduled_date} {clock}".strip()


def clients_frame(clients: Iterable[Client]) -> pd.DataFrame:
    rows = [
        {
            "id": c.id,
            "Name": c.full_name,
            "Email": c.email or "",
            "Phone": c.phone,
            "Status": CLIENT_STATUS_LABELS.get(c.status, c.status),
            "Appointments": c.appointment_count or 0,
        }
        for c in clients
    ]
    return pd.DataFrame(rows, columns=["id", *CLIENT_COLUMNS]).set_index("id")


def workers_frame(workers: Iterable[ServiceWorker]) -> pd.DataFrame:
    rows = [
        {
            "id": w.id,
            "Name": w.full_name,
            "Email": w.email or "",
            "Phone": w.phone,
            "Skills": w.skills or "",
            "Status": WORKER_STATUS_LABELS.get(w.status, w.status),
            "Upcoming": w.upcoming_appointments or 0,
        }
        for w in workers
    ]
    return pd.DataFrame(rows, columns=["id", *WORKER_COLUMNS]).set_index("id")


def appointments_frame(appointments: Iterable[Appointment]) -> pd.DataFrame:
    rows = [
        {
            "id": a.id,
            "Date & Time": format_schedule(a),
            "Client": a.client_name,
            "Worker": a.worker_name or "Unassigned",
            "Type": APPOINTMENT_TYPE_LABELS.get(a.appointment_type, a.appointment_type),
            "Status": APPOINTMENT_STATUS_LABELS.get(a.status, a.status),
            "Duration": format_duration(a.duration_minutes),
        }
        for a in appointments
    ]
    return pd.DataFrame(rows, columns=["id", *APPOINTMENT_COLUMNS]).set_index("id")


def export_csv(df: pd.DataFrame, name: str, out_dir: Optional[Path] = None) -> Path:
    """Write `df` to `<out_dir>/<name>.csv` and return the path."""
    out_dir = out_dir or EXPORTS_DIR
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{name}.csv"
    df.to_csv(path)
    return path


__all__ = [
    "CLIENT_COLUMNS",
    "WORKER_COLUMNS",
    "APPOINTMENT_COLUMNS",
    "format_duration",
    "format_schedule",
    "clients_frame",
    "workers_frame",
    "appointments_frame",
    "export_csv",
]
