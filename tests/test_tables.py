"""DataFrame views of the lists and CSV export."""

from pathlib import Path

import pandas as pd

from crm.models import Appointment, Client, ServiceWorker
from crm.tables import (
    APPOINTMENT_COLUMNS,
    CLIENT_COLUMNS,
    appointments_frame,
    clients_frame,
    export_csv,
    format_duration,
    format_schedule,
    workers_frame,
)


def test_format_duration():
    assert format_duration(45) == "45 min"
    assert format_duration(60) == "1h"
    assert format_duration(90) == "1h 30m"
    assert format_duration(0) == "0 min"


def test_format_schedule_drops_seconds(payloads):
    appt = Appointment.from_dict(payloads["appointment"]())
    assert format_schedule(appt) == "2025-01-15 09:30"


def test_clients_frame_indexed_by_id(payloads):
    df = clients_frame([Client.from_dict(payloads["client"](appointment_count=3, status="potential"))])
    assert list(df.columns) == CLIENT_COLUMNS
    assert df.loc[1, "Status"] == "Potential"
    assert df.loc[1, "Appointments"] == 3


def test_empty_frames_keep_columns():
    assert list(appointments_frame([]).columns) == APPOINTMENT_COLUMNS
    assert clients_frame([]).empty


def test_appointments_frame_labels(payloads):
    appts = [
        Appointment.from_dict(payloads["appointment"]()),
        Appointment.from_dict(
            payloads["appointment"](id=101, worker_name=None, appointment_type="follow_up", status="no_show")
        ),
    ]
    df = appointments_frame(appts)
    assert df.loc[100, "Duration"] == "1h 30m"
    assert df.loc[100, "Type"] == "Service Call"
    assert df.loc[101, "Worker"] == "Unassigned"
    assert df.loc[101, "Type"] == "Follow-up"
    assert df.loc[101, "Status"] == "No Show"


def test_export_csv(tmp_path: Path, payloads):
    df = workers_frame([ServiceWorker.from_dict(payloads["worker"](upcoming_appointments=2))])
    path = export_csv(df, "workers", out_dir=tmp_path / "exports")
    assert path == tmp_path / "exports" / "workers.csv"
    back = pd.read_csv(path, index_col="id")
    assert back.loc[10, "Name"] == "Bob Stone"
    assert back.loc[10, "Upcoming"] == 2
