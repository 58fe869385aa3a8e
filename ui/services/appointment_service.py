from __future__ import annotations

"""Appointment list, detail, CRUD and status calls.

Create/edit submissions run the form's required-field checks first and
never reach the API when they fail. Status changes go through
`crm.status_workflow`, which picks the complete/cancel/patch endpoint.
"""

from typing import Any, Dict, List, Optional, Tuple
import logging

from crm.api_client import ApiClient
from crm.filters import DateFacet, fetch_appointments, filter_appointments, quick_counts
from crm.forms import AppointmentForm
from crm.models import Appointment, Client, ServiceWorker
from crm.status_workflow import request_status_change

from .gateway import guarded

logger = logging.getLogger(__name__)


class AppointmentService:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def list_appointments(
        self,
        search: str = "",
        status: str = "all",
        date_facet: str = DateFacet.ALL.value,
    ) -> Tuple[List[Appointment], Dict[str, int], Optional[str]]:
        """Return (filtered rows, quick counts of the unfiltered fetch, error)."""
        fetched, err = guarded(lambda: fetch_appointments(self.api, status, date_facet), "Failed to load appointments")
        if err:
            return [], quick_counts([]), err
        fetched = fetched or []
        return filter_appointments(fetched, search=search), quick_counts(fetched), None

    def get(self, appointment_id: int) -> Tuple[Optional[Appointment], Optional[str]]:
        return guarded(lambda: self.api.get_appointment(appointment_id), "Failed to load appointment")

    def form_options(self) -> Tuple[List[Client], List[ServiceWorker], Optional[str]]:
        """Active clients and workers for the dialog dropdowns."""
        clients, err = guarded(lambda: self.api.get_clients({"status": "active"}), "Failed to load clients and workers")
        if err:
            return [], [], err
        workers, err = guarded(lambda: self.api.get_workers({"status": "active"}), "Failed to load clients and workers")
        if err:
            return clients or [], [], err
        return clients or [], workers or [], None

    def create(self, form: AppointmentForm) -> Tuple[bool, str]:
        check = form.validate_create()
        if not check.is_valid:
            return False, check.first_message or "Missing required fields"
        created, err = guarded(lambda: self.api.create_appointment(form.to_create_payload()), "Failed to create appointment")
        if err:
            return False, err
        logger.info("Created appointment %s", created.id)
        return True, "Appointment created successfully"

    def update(self, appointment_id: int, form: AppointmentForm) -> Tuple[bool, str]:
        check = form.validate_edit()
        if not check.is_valid:
            return False, check.first_message or "Missing required fields"
        _, err = guarded(
            lambda: self.api.update_appointment(appointment_id, form.to_edit_payload()),
            "Failed to update appointment",
        )
        if err:
            return False, err
        return True, "Appointment updated successfully"

    def delete(self, appointment_id: int) -> Tuple[bool, str]:
        _, err = guarded(lambda: self.api.delete_appointment(appointment_id), "Failed to delete appointment")
        if err:
            return False, err
        logger.info("Deleted appointment %s", appointment_id)
        return True, "Appointment deleted successfully"

    def change_status(self, appointment_id: int, status: str, notes: Optional[str] = None) -> Tuple[bool, str]:
        _, err = guarded(
            lambda: request_status_change(self.api, appointment_id, status, notes),
            "Failed to update status",
        )
        if err:
            return False, err
        return True, "Status updated successfully"

    def check_conflicts(self, date: str, worker_id: int) -> Tuple[Any, Optional[str]]:
        return guarded(lambda: self.api.check_conflicts(date, worker_id), "Failed to check conflicts")
