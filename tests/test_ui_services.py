"""
UI services turn API calls into (ok, message) / (value, error) results.

The API client is a Mock; only the service layer's decisions are tested
here (validation short-circuits, messages, fallbacks).
"""

from unittest.mock import Mock

from crm.api_client import ApiClient, ApiError
from crm.config import Settings
from crm.forms import AppointmentForm, ClientForm, WorkerForm
from crm.models import Appointment, AppointmentStats, Client, ServiceWorker
from crm.session import AuthSession
from ui.services import (
    AppointmentService,
    AuthService,
    ClientService,
    DashboardService,
    WorkerService,
    build_api_client,
    guarded,
)


def test_guarded_maps_api_error():
    def boom():
        raise ApiError("Request failed", status=500)

    assert guarded(lambda: 42, "Failed") == (42, None)
    assert guarded(boom, "Failed to load") == (None, "Failed to load")


def test_build_api_client_uses_settings():
    session = AuthSession()
    api = build_api_client(Settings(api_url="https://x.test/api/", timeout=3), session)
    assert api.base_url == "https://x.test/api"
    assert api.timeout == 3.0
    assert api.session is session


class TestAuthService:
    def test_requires_credentials(self):
        api = Mock()
        ok, msg = AuthService(api, AuthSession()).login("  ", "pw")
        assert (ok, msg) == (False, "Username and password are required")
        api.login.assert_not_called()

    def test_welcome_message(self):
        api = Mock()
        api.login.return_value = {"access": "a", "user": {"id": 1, "username": "alice", "first_name": "Alice"}}
        session = AuthSession()
        ok, msg = AuthService(api, session).login("alice", "pw")
        assert ok
        assert msg == "Welcome, Alice"
        assert session.is_authenticated

    def test_rejected_login(self):
        api = Mock()
        api.login.side_effect = ApiError("No active account", status=401, detail="No active account")
        ok, msg = AuthService(api, AuthSession()).login("alice", "bad")
        assert (ok, msg) == (False, "No active account")


class TestClientService:
    def test_list_applies_status_server_side_and_search_locally(self, payloads):
        api = Mock()
        api.get_clients.return_value = [
            Client.from_dict(payloads["client"]()),
            Client.from_dict(payloads["client"](id=2, first_name="Zed", full_name="Zed Lee", email=None, phone="1")),
        ]
        clients, err = ClientService(api).list_clients("zed", "inactive")
        api.get_clients.assert_called_once_with({"status": "inactive"})
        assert err is None
        assert [c.id for c in clients] == [2]

    def test_list_error(self):
        api = Mock()
        api.get_clients.side_effect = ApiError("Request failed", status=500)
        assert ClientService(api).list_clients() == ([], "Failed to fetch clients, please try again")

    def test_malformed_success_bodies_become_messages(self, http, response):
        http.request.side_effect = [response(200, {"detail": "maintenance"}), response(201)]
        service = ClientService(ApiClient("http://crm.test/api", http=http))

        assert service.list_clients() == ([], "Failed to fetch clients, please try again")
        form = ClientForm(first_name="Ann", last_name="Lee", phone="555", address="1 Main St")
        assert service.create(form) == (False, "Failed to create client, please try again")

    def test_create_validates_before_calling_api(self):
        api = Mock()
        ok, msg = ClientService(api).create(ClientForm(first_name="Ann"))
        assert (ok, msg) == (False, "Last name is required")
        api.create_client.assert_not_called()

    def test_create_success(self, payloads):
        api = Mock()
        api.create_client.return_value = Client.from_dict(payloads["client"]())
        form = ClientForm(first_name="Ann", last_name="Lee", phone="555", address="1 Main St")
        assert ClientService(api).create(form) == (True, "Ann Lee has been added")

    def test_update_surfaces_server_detail(self):
        api = Mock()
        api.update_client.side_effect = ApiError("x", status=400, field_errors={"email": ["Enter a valid email."]})
        form = ClientForm(first_name="Ann", last_name="Lee", phone="555", address="1 Main St", email="bad")
        assert ClientService(api).update(1, form) == (False, "Enter a valid email.")

    def test_detail_includes_appointments(self, payloads):
        api = Mock()
        api.get_client.return_value = Client.from_dict(payloads["client"]())
        api.get_appointments.return_value = [Appointment.from_dict(payloads["appointment"]())]
        client, appts, err = ClientService(api).get_detail(1)
        api.get_appointments.assert_called_once_with({"client": "1"})
        assert client.id == 1
        assert [a.id for a in appts] == [100]
        assert err is None

    def test_detail_not_found(self):
        api = Mock()
        api.get_client.side_effect = ApiError("Not found.", status=404, detail="Not found.")
        assert ClientService(api).get_detail(99) == (None, [], "Not found.")

    def test_delete(self):
        api = Mock()
        assert ClientService(api).delete(1, "Ann Lee") == (True, "Ann Lee has been deleted successfully")
        api.delete_client.assert_called_once_with(1)


class TestWorkerService:
    def test_detail_uses_worker_filter(self, payloads):
        api = Mock()
        api.get_worker.return_value = ServiceWorker.from_dict(payloads["worker"]())
        api.get_appointments.return_value = []
        worker, appts, err = WorkerService(api).get_detail(10)
        api.get_appointments.assert_called_once_with({"worker": "10"})
        assert worker.full_name == "Bob Stone"
        assert appts == []

    def test_update_requires_phone(self):
        api = Mock()
        ok, msg = WorkerService(api).update(10, WorkerForm(first_name="Bob", last_name="Stone"))
        assert (ok, msg) == (False, "Phone is required")
        api.update_worker.assert_not_called()

    def test_availability(self):
        api = Mock()
        api.get_worker_availability.return_value = {"slots": []}
        assert WorkerService(api).availability(10, "2025-01-15") == ({"slots": []}, None)


class TestAppointmentService:
    def test_list_counts_before_search(self, payloads):
        api = Mock()
        api.get_today_appointments.return_value = [
            Appointment.from_dict(payloads["appointment"]()),
            Appointment.from_dict(payloads["appointment"](id=101, client_name="Zed", status="completed")),
        ]
        rows, counts, err = AppointmentService(api).list_appointments("zed", "scheduled", "today")
        assert [a.id for a in rows] == [101]
        assert counts["scheduled"] == 1
        assert counts["completed"] == 1
        assert counts["upcoming"] == 0
        assert err is None

    def test_create_validation_short_circuits(self):
        api = Mock()
        ok, msg = AppointmentService(api).create(AppointmentForm(client=1))
        assert (ok, msg) == (False, "Please select at least one service worker")
        api.create_appointment.assert_not_called()

    def test_create_shows_field_error(self):
        api = Mock()
        api.create_appointment.side_effect = ApiError(
            "Request failed", status=400, field_errors={"service_workers": ["Worker is already booked"]}
        )
        form = AppointmentForm(client=1, service_workers=[10], scheduled_date="2025-01-15", scheduled_time="09:00")
        assert AppointmentService(api).create(form) == (False, "Worker is already booked")

    def test_change_status_routes(self):
        api = Mock()
        svc = AppointmentService(api)
        assert svc.change_status(5, "completed", "done") == (True, "Status updated successfully")
        api.complete_appointment.assert_called_once_with(5, "done")
        svc.change_status(5, "in_progress")
        api.update_appointment.assert_called_once_with(5, {"status": "in_progress"})

    def test_form_options_active_only(self):
        api = Mock()
        api.get_clients.return_value = []
        api.get_workers.return_value = []
        assert AppointmentService(api).form_options() == ([], [], None)
        api.get_clients.assert_called_once_with({"status": "active"})
        api.get_workers.assert_called_once_with({"status": "active"})


class TestDashboardService:
    def test_load(self):
        api = Mock()
        api.get_appointment_stats.return_value = AppointmentStats(total=4, today=1)
        data, err = DashboardService(api).load()
        assert err is None
        assert data.appointments.total == 4

    def test_failure_returns_zeroed_data(self):
        api = Mock()
        api.get_client_stats.side_effect = ApiError("Request failed", status=500)
        data, err = DashboardService(api).load()
        assert err == "Failed to load dashboard data"
        assert data.appointments.total == 0
        assert data.today == []
