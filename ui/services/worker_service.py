from __future__ import annotations

"""Service-worker list, detail and CRUD calls for the Workers page."""

from typing import Any, List, Optional, Tuple
import logging

from crm.api_client import ApiClient
from crm.filters import filter_workers, status_params
from crm.forms import WorkerForm
from crm.models import Appointment, ServiceWorker

from .gateway import guarded

logger = logging.getLogger(__name__)


class WorkerService:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def list_workers(self, search: str = "", status: str = "all") -> Tuple[List[ServiceWorker], Optional[str]]:
        workers, err = guarded(
            lambda: self.api.get_workers(status_params(status)),
            "Failed to fetch service workers, please try again",
        )
        if err:
            return [], err
        return filter_workers(workers or [], search=search), None

    def list_active(self) -> Tuple[List[ServiceWorker], Optional[str]]:
        workers, err = guarded(lambda: self.api.get_workers({"status": "active"}), "Failed to load workers")
        return workers or [], err

    def get_detail(self, worker_id: int) -> Tuple[Optional[ServiceWorker], List[Appointment], Optional[str]]:
        worker, err = guarded(lambda: self.api.get_worker(worker_id), "Failed to load worker")
        if err:
            return None, [], err
        appts, err = guarded(
            lambda: self.api.get_appointments({"worker": str(worker_id)}),
            "Failed to load worker appointments",
        )
        return worker, appts or [], err

    def availability(self, worker_id: int, date: str) -> Tuple[Any, Optional[str]]:
        return guarded(lambda: self.api.get_worker_availability(worker_id, date), "Failed to load availability")

    def create(self, form: WorkerForm) -> Tuple[bool, str]:
        check = form.validate()
        if not check.is_valid:
            return False, check.first_message or "Missing required fields"
        created, err = guarded(lambda: self.api.create_worker(form.to_payload()), "Failed to create worker, please try again")
        if err:
            return False, err
        logger.info("Created worker %s", created.id)
        return True, f"{created.full_name} has been added"

    def update(self, worker_id: int, form: WorkerForm) -> Tuple[bool, str]:
        check = form.validate()
        if not check.is_valid:
            return False, check.first_message or "Missing required fields"
        _, err = guarded(
            lambda: self.api.update_worker(worker_id, form.to_payload()),
            "Failed to update worker, please try again",
        )
        if err:
            return False, err
        return True, "Worker updated successfully"

    def delete(self, worker_id: int, name: str) -> Tuple[bool, str]:
        _, err = guarded(lambda: self.api.delete_worker(worker_id), "Failed to delete worker")
        if err:
            return False, err
        logger.info("Deleted worker %s", worker_id)
        return True, f"{name} has been deleted successfully"
