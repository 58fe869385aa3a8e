"""Client-side search and server-side facet parameters for the list views."""

from unittest.mock import Mock

import pytest

from crm.filters import (
    ALL,
    fetch_appointments,
    filter_appointments,
    filter_clients,
    filter_workers,
    quick_counts,
    status_counts,
    status_params,
)
from crm.models import Appointment, Client, ServiceWorker


@pytest.fixture
def clients(payloads):
    return [
        Client.from_dict(payloads["client"]()),
        Client.from_dict(
            payloads["client"](
                id=2, first_name="Carl", last_name="Diaz", full_name="Carl Diaz",
                email="CARL@Corp.io", phone="555-ABC", status="potential",
            )
        ),
    ]


@pytest.fixture
def appointments(payloads):
    return [
        Appointment.from_dict(payloads["appointment"]()),
        Appointment.from_dict(
            payloads["appointment"](
                id=101, client_name="Carl Diaz", worker_name=None, service_worker=None,
                service_workers=[], description="Annual AC check", status="completed",
            )
        ),
        Appointment.from_dict(payloads["appointment"](id=102, client_name="Dee", description=None, status="scheduled")),
    ]


class TestPersonSearch:
    def test_name_and_email_case_insensitive(self, clients):
        assert [c.id for c in filter_clients(clients, search="ann")] == [1]
        assert [c.id for c in filter_clients(clients, search="DIAZ")] == [2]
        assert [c.id for c in filter_clients(clients, search="corp.IO")] == [2]

    def test_phone_is_case_sensitive_substring(self, clients):
        assert [c.id for c in filter_clients(clients, search="555-")] == [1, 2]
        assert [c.id for c in filter_clients(clients, search="ABC")] == [2]
        assert filter_clients(clients, search="abc") == []

    def test_empty_search_and_all_facet_keep_everything(self, clients):
        assert filter_clients(clients) == clients
        assert filter_clients(clients, status=ALL) == clients

    def test_status_facet(self, clients):
        assert [c.id for c in filter_clients(clients, status="potential")] == [2]

    def test_workers_share_the_rules(self, payloads):
        workers = [
            ServiceWorker.from_dict(payloads["worker"]()),
            ServiceWorker.from_dict(payloads["worker"](id=11, first_name="Eve", full_name="Eve Stone", status="on_leave")),
        ]
        assert [w.id for w in filter_workers(workers, search="stone")] == [10, 11]
        assert [w.id for w in filter_workers(workers, search="eve", status="on_leave")] == [11]
        assert filter_workers(workers, search="eve", status="active") == []


class TestAppointmentSearch:
    def test_matches_client_worker_and_description(self, appointments):
        assert [a.id for a in filter_appointments(appointments, search="carl")] == [101]
        assert [a.id for a in filter_appointments(appointments, search="BOB")] == [100, 102]
        assert [a.id for a in filter_appointments(appointments, search="ac check")] == [101]

    def test_missing_fields_do_not_match(self, appointments):
        assert filter_appointments(appointments, search="zzz") == []

    def test_status_counts_cover_every_status(self, appointments):
        counts = status_counts(appointments)
        assert counts == {"scheduled": 2, "in_progress": 0, "completed": 1, "cancelled": 0, "no_show": 0}
        assert status_counts([])["scheduled"] == 0

    def test_quick_counts_add_upcoming(self, payloads):
        rows = [
            Appointment.from_dict(payloads["appointment"](is_upcoming=True)),
            Appointment.from_dict(payloads["appointment"](id=101, is_upcoming=True, status="in_progress")),
            Appointment.from_dict(payloads["appointment"](id=102, status="completed")),
        ]
        counts = quick_counts(rows)
        assert counts["upcoming"] == 2
        assert counts["in_progress"] == 1
        assert list(counts)[-1] == "upcoming"
        assert quick_counts([])["upcoming"] == 0


class TestFacets:
    def test_status_params(self):
        assert status_params(ALL) == {}
        assert status_params(None) == {}
        assert status_params("active") == {"status": "active"}
        assert status_params("all", client="3", worker="") == {"client": "3"}

    def test_list_endpoint_gets_status(self):
        api = Mock()
        fetch_appointments(api, "completed", "all")
        api.get_appointments.assert_called_once_with({"status": "completed"})

    def test_today_and_upcoming_ignore_status(self):
        api = Mock()
        fetch_appointments(api, "completed", "today")
        fetch_appointments(api, "completed", "upcoming")
        api.get_today_appointments.assert_called_once_with()
        api.get_upcoming_appointments.assert_called_once_with()
        api.get_appointments.assert_not_called()

    def test_unknown_date_facet(self):
        with pytest.raises(ValueError):
            fetch_appointments(Mock(), ALL, "yesterday")
