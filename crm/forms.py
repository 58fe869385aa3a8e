from __future__ import annotations

"""
Form models for the create/edit dialogs.

Each form is a dataclass mirroring the dialog fields. Forms know how to:

- start from defaults (create) or from an existing record (edit)
- run the client-side required-field checks (`validate*`)
- build the JSON payload the API expects (`to_payload` / `to_*_payload`)

Nothing here talks to the network; the UI services submit the payloads.
"""

from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Dict, Iterable, List, Optional

from .models import (
    Appointment,
    AppointmentStatus,
    AppointmentType,
    Client,
    ClientStatus,
    ServiceWorker,
    WorkerStatus,
)
from .validation import ValidationResult

NO_CLIENT = -1


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


@dataclass
class ClientForm:
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    service_location: str = ""
    status: str = ClientStatus.ACTIVE.value
    notes: str = ""

    REQUIRED = (
        ("first_name", "First name is required"),
        ("last_name", "Last name is required"),
        ("phone", "Phone is required"),
        ("address", "Address is required"),
    )

    @classmethod
    def from_client(cls, client: Client) -> "ClientForm":
        return cls(
            first_name=client.first_name,
            last_name=client.last_name,
            email=client.email or "",
            phone=client.phone,
            address=client.address,
            service_location=client.service_location or "",
            status=client.status,
            notes=client.notes or "",
        )

    def validate(self) -> ValidationResult:
        result = ValidationResult()
        for name, message in self.REQUIRED:
            if _blank(getattr(self, name)):
                result.add_error(name, message)
        return result

    def to_payload(self) -> Dict[str, Any]:
        return {
            "first_name": _clean(self.first_name),
            "last_name": _clean(self.last_name),
            "email": _clean(self.email),
            "phone": _clean(self.phone),
            "address": _clean(self.address),
            "service_location": _clean(self.service_location),
            "status": self.status,
            "notes": _clean(self.notes),
        }


@dataclass
class WorkerForm:
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    skills: str = ""
    status: str = WorkerStatus.ACTIVE.value
    availability_notes: str = ""
    notes: str = ""

    REQUIRED = (
        ("first_name", "First name is required"),
        ("last_name", "Last name is required"),
        ("phone", "Phone is required"),
    )

    @classmethod
    def from_worker(cls, worker: ServiceWorker) -> "WorkerForm":
        return cls(
            first_name=worker.first_name,
            last_name=worker.last_name,
            email=worker.email or "",
            phone=worker.phone,
            skills=worker.skills or "",
            status=worker.status,
            availability_notes=worker.availability_notes or "",
            notes=worker.notes or "",
        )

    def validate(self) -> ValidationResult:
        result = ValidationResult()
        for name, message in self.REQUIRED:
            if _blank(getattr(self, name)):
                result.add_error(name, message)
        return result

    def to_payload(self) -> Dict[str, Any]:
        return {
            "first_name": _clean(self.first_name),
            "last_name": _clean(self.last_name),
            "email": _clean(self.email),
            "phone": _clean(self.phone),
            "skills": _clean(self.skills),
            "status": self.status,
            "availability_notes": _clean(self.availability_notes),
            "notes": _clean(self.notes),
        }


@dataclass
class AppointmentForm:
    """Fields shared by the create and edit appointment dialogs.

    Create assigns workers through `service_workers` (one or many, chosen
    with `crm.worker_select.WorkerSelection`); edit uses the single optional
    `service_worker`, where None means unassigned.
    """

    client: int = NO_CLIENT
    service_worker: Optional[int] = None
    service_workers: List[int] = field(default_factory=list)
    appointment_type: str = AppointmentType.SERVICE.value
    status: str = AppointmentStatus.SCHEDULED.value
    scheduled_date: str = ""
    scheduled_time: str = ""
    duration_minutes: int = 60
    location: str = ""
    description: str = ""
    notes: str = ""

    @classmethod
    def from_appointment(cls, appointment: Appointment) -> "AppointmentForm":
        return cls(
            client=appointment.client,
            service_worker=appointment.service_worker,
            service_workers=list(appointment.worker_ids),
            appointment_type=appointment.appointment_type,
            status=appointment.status,
            scheduled_date=appointment.scheduled_date,
            scheduled_time=appointment.scheduled_time,
            duration_minutes=appointment.duration_minutes,
            location=appointment.location or "",
            description=appointment.description or "",
            notes=appointment.notes or "",
        )

    # --- Field helpers ---
    def select_client(self, client_id: int, clients: Iterable[Client]) -> None:
        """Set the client and prefill location from its service location or address."""
        self.client = client_id
        if client_id == NO_CLIENT:
            return
        for c in clients:
            if c.id == client_id:
                self.location = c.service_location or c.address
                return

    def set_date(self, value: Optional[date]) -> None:
        if value is not None:
            self.scheduled_date = value.strftime("%Y-%m-%d")

    def set_time(self, value: Optional[time]) -> None:
        if value is not None:
            self.scheduled_time = value.strftime("%H:%M")

    # --- Validation ---
    def _validate_common(self, result: ValidationResult) -> None:
        if self.client == NO_CLIENT:
            result.add_error("client", "Please select a client")

    def _validate_schedule(self, result: ValidationResult) -> None:
        if _blank(self.scheduled_date) or _blank(self.scheduled_time):
            result.add_error("scheduled_date", "Please select date and time")
        if not self.duration_minutes or int(self.duration_minutes) <= 0:
            result.add_error("duration_minutes", "Duration is required")

    def validate_create(self) -> ValidationResult:
        result = ValidationResult()
        self._validate_common(result)
        if not self.service_workers:
            result.add_error("service_workers", "Please select at least one service worker")
        self._validate_schedule(result)
        return result

    def validate_edit(self) -> ValidationResult:
        result = ValidationResult()
        self._validate_common(result)
        self._validate_schedule(result)
        return result

    # --- Payloads ---
    def _base_payload(self) -> Dict[str, Any]:
        return {
            "client": self.client,
            "appointment_type": self.appointment_type,
            "status": self.status,
            "scheduled_date": self.scheduled_date,
            "scheduled_time": self.scheduled_time,
            "duration_minutes": int(self.duration_minutes),
            "location": self.location,
            "description": self.description,
            "notes": self.notes,
        }

    def to_create_payload(self) -> Dict[str, Any]:
        payload = self._base_payload()
        payload["service_workers"] = list(self.service_workers)
        return payload

    def to_edit_payload(self) -> Dict[str, Any]:
        payload = self._base_payload()
        worker = self.service_worker
        payload["service_worker"] = worker if worker not in (None, NO_CLIENT) else None
        return payload


__all__ = ["NO_CLIENT", "ClientForm", "WorkerForm", "AppointmentForm"]
