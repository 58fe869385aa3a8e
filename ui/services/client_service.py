from __future__ import annotations

"""Client list, detail and CRUD calls for the Clients page."""

from typing import List, Optional, Tuple
import logging

from crm.api_client import ApiClient
from crm.filters import filter_clients, status_params
from crm.forms import ClientForm
from crm.models import Appointment, Client

from .gateway import guarded

logger = logging.getLogger(__name__)


class ClientService:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def list_clients(self, search: str = "", status: str = "all") -> Tuple[List[Client], Optional[str]]:
        """Fetch with the status facet server-side, then apply the search locally."""
        clients, err = guarded(
            lambda: self.api.get_clients(status_params(status)),
            "Failed to fetch clients, please try again",
        )
        if err:
            return [], err
        return filter_clients(clients or [], search=search), None

    def list_active(self) -> Tuple[List[Client], Optional[str]]:
        clients, err = guarded(lambda: self.api.get_clients({"status": "active"}), "Failed to load clients")
        return clients or [], err

    def get_detail(self, client_id: int) -> Tuple[Optional[Client], List[Appointment], Optional[str]]:
        """Return the client and its appointments."""
        client, err = guarded(lambda: self.api.get_client(client_id), "Failed to load client")
        if err:
            return None, [], err
        appts, err = guarded(
            lambda: self.api.get_appointments({"client": str(client_id)}),
            "Failed to load client appointments",
        )
        return client, appts or [], err

    def create(self, form: ClientForm) -> Tuple[bool, str]:
        check = form.validate()
        if not check.is_valid:
            return False, check.first_message or "Missing required fields"
        created, err = guarded(lambda: self.api.create_client(form.to_payload()), "Failed to create client, please try again")
        if err:
            return False, err
        logger.info("Created client %s", created.id)
        return True, f"{created.full_name} has been added"

    def update(self, client_id: int, form: ClientForm) -> Tuple[bool, str]:
        check = form.validate()
        if not check.is_valid:
            return False, check.first_message or "Missing required fields"
        _, err = guarded(
            lambda: self.api.update_client(client_id, form.to_payload()),
            "Failed to update client, please try again",
        )
        if err:
            return False, err
        return True, "Client updated successfully"

    def delete(self, client_id: int, name: str) -> Tuple[bool, str]:
        _, err = guarded(lambda: self.api.delete_client(client_id), "Failed to delete client, please try again")
        if err:
            return False, err
        logger.info("Deleted client %s", client_id)
        return True, f"{name} has been deleted successfully"
