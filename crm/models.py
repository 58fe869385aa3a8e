from __future__ import annotations

"""
Record types mirrored from the remote CRM service.

These are plain dataclasses built from the JSON payloads the API returns.
They carry no behaviour beyond display helpers: the remote service owns
every invariant, so unknown keys are ignored and optional keys default
to empty values.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class ClientStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    POTENTIAL = "potential"


class WorkerStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on_leave"


class AppointmentType(str, Enum):
    SERVICE = "service"
    CONSULTATION = "consultation"
    FOLLOW_UP = "follow_up"
    EMERGENCY = "emergency"


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


APPOINTMENT_TYPE_LABELS: Dict[str, str] = {
    AppointmentType.SERVICE.value: "Service Call",
    AppointmentType.CONSULTATION.value: "Consultation",
    AppointmentType.FOLLOW_UP.value: "Follow-up",
    AppointmentType.EMERGENCY.value: "Emergency",
}

APPOINTMENT_STATUS_LABELS: Dict[str, str] = {
    AppointmentStatus.SCHEDULED.value: "Scheduled",
    AppointmentStatus.IN_PROGRESS.value: "In Progress",
    AppointmentStatus.COMPLETED.value: "Completed",
    AppointmentStatus.CANCELLED.value: "Cancelled",
    AppointmentStatus.NO_SHOW.value: "No Show",
}

CLIENT_STATUS_LABELS: Dict[str, str] = {
    ClientStatus.ACTIVE.value: "Active",
    ClientStatus.INACTIVE.value: "Inactive",
    ClientStatus.POTENTIAL.value: "Potential",
}

WORKER_STATUS_LABELS: Dict[str, str] = {
    WorkerStatus.ACTIVE.value: "Active",
    WorkerStatus.INACTIVE.value: "Inactive",
    WorkerStatus.ON_LEAVE.value: "On Leave",
}


def _opt_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return None if value is None else str(value)


def _opt_int(data: Mapping[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    return None if value is None else int(value)


def _full_name(data: Mapping[str, Any]) -> str:
    if data.get("full_name"):
        return str(data["full_name"])
    return f"{data.get('first_name', '')} {data.get('last_name', '')}".strip()


@dataclass
class User:
    """The logged-in account as returned by `/auth/login/`.

    `role` is optional on the wire; see `crm.session.AuthSession.role`
    for how a missing role is resolved.
    """

    id: int
    username: str
    email: str = ""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None
    is_staff: bool = False
    is_superuser: bool = False

    @property
    def display_name(self) -> str:
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or self.username

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "User":
        return cls(
            id=int(data.get("id", 0)),
            username=str(data.get("username", "")),
            email=str(data.get("email") or ""),
            first_name=_opt_str(data, "first_name"),
            last_name=_opt_str(data, "last_name"),
            role=_opt_str(data, "role"),
            is_staff=bool(data.get("is_staff", False)),
            is_superuser=bool(data.get("is_superuser", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "role": self.role,
            "is_staff": self.is_staff,
            "is_superuser": self.is_superuser,
        }


@dataclass
class AuthTokens:
    access: str
    refresh: Optional[str] = None


@dataclass
class Client:
    id: int
    first_name: str
    last_name: str
    full_name: str
    phone: str = ""
    address: str = ""
    status: str = ClientStatus.ACTIVE.value
    email: Optional[str] = None
    service_location: Optional[str] = None
    notes: Optional[str] = None
    appointment_count: Optional[int] = None
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Client":
        return cls(
            id=int(data["id"]),
            first_name=str(data.get("first_name", "")),
            last_name=str(data.get("last_name", "")),
            full_name=_full_name(data),
            phone=str(data.get("phone") or ""),
            address=str(data.get("address") or ""),
            status=str(data.get("status") or ClientStatus.ACTIVE.value),
            email=_opt_str(data, "email"),
            service_location=_opt_str(data, "service_location"),
            notes=_opt_str(data, "notes"),
            appointment_count=_opt_int(data, "appointment_count"),
            created_at=str(data.get("created_at") or ""),
            updated_at=str(data.get("updated_at") or ""),
        )


@dataclass
class ServiceWorker:
    id: int
    first_name: str
    last_name: str
    full_name: str
    phone: str = ""
    status: str = WorkerStatus.ACTIVE.value
    email: Optional[str] = None
    skills: Optional[str] = None
    availability_notes: Optional[str] = None
    notes: Optional[str] = None
    upcoming_appointments: Optional[int] = None
    created_at: str = ""
    updated_at: str = ""

    @property
    def is_active(self) -> bool:
        return self.status == WorkerStatus.ACTIVE.value

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ServiceWorker":
        return cls(
            id=int(data["id"]),
            first_name=str(data.get("first_name", "")),
            last_name=str(data.get("last_name", "")),
            full_name=_full_name(data),
            phone=str(data.get("phone") or ""),
            status=str(data.get("status") or WorkerStatus.ACTIVE.value),
            email=_opt_str(data, "email"),
            skills=_opt_str(data, "skills"),
            availability_notes=_opt_str(data, "availability_notes"),
            notes=_opt_str(data, "notes"),
            upcoming_appointments=_opt_int(data, "upcoming_appointments"),
            created_at=str(data.get("created_at") or ""),
            updated_at=str(data.get("updated_at") or ""),
        )


@dataclass
class Appointment:
    """A scheduled service event.

    The service reports assignment two ways: the legacy single
    `service_worker` FK and the `service_workers` list. `worker_ids`
    merges both so callers do not have to care which one is populated.
    """

    id: int
    client: int
    client_name: str
    scheduled_date: str
    scheduled_time: str
    appointment_type: str = AppointmentType.SERVICE.value
    status: str = AppointmentStatus.SCHEDULED.value
    duration_minutes: int = 60
    service_worker: Optional[int] = None
    service_workers: List[int] = field(default_factory=list)
    worker_name: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    completed_at: Optional[str] = None
    completion_notes: Optional[str] = None
    is_upcoming: bool = False
    created_at: str = ""
    updated_at: str = ""

    @property
    def worker_ids(self) -> List[int]:
        ids = list(self.service_workers)
        if self.service_worker is not None and self.service_worker not in ids:
            ids.insert(0, self.service_worker)
        return ids

    @property
    def type_label(self) -> str:
        return APPOINTMENT_TYPE_LABELS.get(self.appointment_type, self.appointment_type)

    @property
    def status_label(self) -> str:
        return APPOINTMENT_STATUS_LABELS.get(self.status, self.status)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Appointment":
        raw_workers = data.get("service_workers") or []
        workers: List[int] = []
        for w in raw_workers:
            # Nested serializers send objects, flat ones send ids
            workers.append(int(w["id"]) if isinstance(w, Mapping) else int(w))
        return cls(
            id=int(data["id"]),
            client=int(data.get("client", -1)),
            client_name=str(data.get("client_name") or ""),
            scheduled_date=str(data.get("scheduled_date") or ""),
            scheduled_time=str(data.get("scheduled_time") or ""),
            appointment_type=str(data.get("appointment_type") or AppointmentType.SERVICE.value),
            status=str(data.get("status") or AppointmentStatus.SCHEDULED.value),
            duration_minutes=int(data.get("duration_minutes") or 60),
            service_worker=_opt_int(data, "service_worker"),
            service_workers=workers,
            worker_name=_opt_str(data, "worker_name"),
            location=_opt_str(data, "location"),
            description=_opt_str(data, "description"),
            notes=_opt_str(data, "notes"),
            completed_at=_opt_str(data, "completed_at"),
            completion_notes=_opt_str(data, "completion_notes"),
            is_upcoming=bool(data.get("is_upcoming", False)),
            created_at=str(data.get("created_at") or ""),
            updated_at=str(data.get("updated_at") or ""),
        )


@dataclass
class AppointmentStats:
    total: int = 0
    scheduled: int = 0
    completed: int = 0
    cancelled: int = 0
    today: int = 0
    upcoming: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AppointmentStats":
        return cls(**{k: int(data.get(k) or 0) for k in cls.__dataclass_fields__})


@dataclass
class ClientStats:
    total: int = 0
    active: int = 0
    inactive: int = 0
    potential: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClientStats":
        return cls(**{k: int(data.get(k) or 0) for k in cls.__dataclass_fields__})


@dataclass
class WorkerStats:
    total: int = 0
    active: int = 0
    inactive: int = 0
    on_leave: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkerStats":
        return cls(**{k: int(data.get(k) or 0) for k in cls.__dataclass_fields__})


def unwrap_results(payload: Any) -> List[Dict[str, Any]]:
    """Return the record list from a paginated object or a bare list."""
    if payload is None:
        return []
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping) and "results" in payload:
        return list(payload.get("results") or [])
    raise ValueError(f"Unexpected list payload: {type(payload).__name__}")


__all__ = [
    "ClientStatus",
    "WorkerStatus",
    "AppointmentType",
    "AppointmentStatus",
    "APPOINTMENT_TYPE_LABELS",
    "APPOINTMENT_STATUS_LABELS",
    "CLIENT_STATUS_LABELS",
    "WORKER_STATUS_LABELS",
    "User",
    "AuthTokens",
    "Client",
    "ServiceWorker",
    "Appointment",
    "AppointmentStats",
    "ClientStats",
    "WorkerStats",
    "unwrap_results",
]
