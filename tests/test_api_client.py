"""
Tests for the HTTP gateway: bearer tokens, the single refresh-and-replay on
401, error body mapping and list unwrapping. HTTP is faked with a Mock
standing in for `requests.Session`.
"""

import pytest
import requests

from crm.api_client import GENERIC_ERROR, REQUEST_FAILED, ApiClient, ApiError
from crm.models import AuthTokens, User
from crm.session import AuthSession

BASE = "http://crm.test/api"


def _session(access="acc-1", refresh="ref-1"):
    return AuthSession(user=User(id=1, username="alice"), tokens=AuthTokens(access=access, refresh=refresh))


class TestAuthHeaders:
    def test_bearer_attached_when_token_present(self, http, response):
        http.request.return_value = response(200, [])
        api = ApiClient(BASE + "/", session=_session(), http=http)

        api.get_clients()

        args, kwargs = http.request.call_args
        assert args == ("GET", f"{BASE}/clients/")
        assert kwargs["headers"]["Authorization"] == "Bearer acc-1"
        assert kwargs["timeout"] == 15.0

    def test_no_header_without_session(self, http, response):
        http.request.return_value = response(200, [])
        api = ApiClient(BASE, http=http)

        api.get_workers()

        _, kwargs = http.request.call_args
        assert "Authorization" not in kwargs["headers"]

    def test_login_is_sent_without_bearer(self, http, response):
        http.request.return_value = response(200, {"access": "a", "refresh": "r"})
        api = ApiClient(BASE, session=_session(), http=http)

        api.login("alice", "secret")

        args, kwargs = http.request.call_args
        assert args == ("POST", f"{BASE}/auth/login/")
        assert kwargs["json"] == {"username": "alice", "password": "secret"}
        assert "Authorization" not in kwargs["headers"]


class TestRefreshOn401:
    def test_refreshes_once_and_replays(self, http, response, payloads):
        session = _session()
        http.request.side_effect = [
            response(401, {"detail": "Token expired"}),
            response(200, {"access": "acc-2"}),
            response(200, {"results": [payloads["client"]()]}),
        ]
        api = ApiClient(BASE, session=session, http=http)

        clients = api.get_clients({"status": "active"})

        assert [c.full_name for c in clients] == ["Ann Lee"]
        assert http.request.call_count == 3
        refresh_call = http.request.call_args_list[1]
        assert refresh_call.args == ("POST", f"{BASE}/auth/refresh/")
        assert refresh_call.kwargs["json"] == {"refresh": "ref-1"}
        replay = http.request.call_args_list[2]
        assert replay.args == ("GET", f"{BASE}/clients/")
        assert replay.kwargs["params"] == {"status": "active"}
        assert replay.kwargs["headers"]["Authorization"] == "Bearer acc-2"
        # Refresh token kept when the server does not rotate it
        assert session.access_token == "acc-2"
        assert session.refresh_token == "ref-1"

    def test_second_401_surfaces(self, http, response):
        http.request.side_effect = [
            response(401, {"detail": "Token expired"}),
            response(200, {"access": "acc-2", "refresh": "ref-2"}),
            response(401, {"detail": "Still not allowed"}),
        ]
        session = _session()
        api = ApiClient(BASE, session=session, http=http)

        with pytest.raises(ApiError) as exc_info:
            api.get_client(1)

        assert exc_info.value.status == 401
        assert exc_info.value.detail == "Still not allowed"
        assert http.request.call_count == 3
        assert session.refresh_token == "ref-2"

    def test_failed_refresh_clears_session(self, http, response):
        http.request.side_effect = [
            response(401, {"detail": "Token expired"}),
            response(401, {"detail": "Refresh expired"}),
        ]
        session = _session()
        api = ApiClient(BASE, session=session, http=http)

        with pytest.raises(ApiError) as exc_info:
            api.get_appointments()

        assert exc_info.value.status == 401
        assert http.request.call_count == 2
        assert session.tokens is None
        assert session.user is None
        assert not session.is_authenticated

    def test_no_refresh_without_refresh_token(self, http, response):
        http.request.return_value = response(401, {"detail": "Unauthorized"})
        api = ApiClient(BASE, session=_session(refresh=None), http=http)

        with pytest.raises(ApiError):
            api.get_workers()

        assert http.request.call_count == 1

    def test_anonymous_calls_do_not_refresh(self, http, response):
        http.request.return_value = response(401, {"detail": "Invalid credentials"})
        api = ApiClient(BASE, session=_session(), http=http)

        with pytest.raises(ApiError) as exc_info:
            api.login("alice", "wrong")

        assert exc_info.value.detail == "Invalid credentials"
        assert http.request.call_count == 1


class TestErrorMapping:
    def test_detail_is_used(self, http, response):
        http.request.return_value = response(403, {"detail": "You do not have permission"})
        api = ApiClient(BASE, http=http)

        with pytest.raises(ApiError) as exc_info:
            api.delete_client(3)

        err = exc_info.value
        assert err.status == 403
        assert err.detail == "You do not have permission"
        assert err.message == "You do not have permission"

    def test_missing_detail_falls_back(self, http, response):
        http.request.return_value = response(400, {})
        api = ApiClient(BASE, http=http)

        with pytest.raises(ApiError) as exc_info:
            api.create_client({})

        assert exc_info.value.detail is None
        assert exc_info.value.message == REQUEST_FAILED

    def test_non_json_body_is_generic(self, http, response):
        http.request.return_value = response(502, text="<html>Bad Gateway</html>")
        api = ApiClient(BASE, http=http)

        with pytest.raises(ApiError) as exc_info:
            api.get_client_stats()

        assert exc_info.value.detail == GENERIC_ERROR
        assert exc_info.value.status == 502

    def test_field_errors_preferred_in_user_message(self, http, response):
        http.request.return_value = response(400, {"service_workers": ["Worker is already booked"]})
        api = ApiClient(BASE, http=http)

        with pytest.raises(ApiError) as exc_info:
            api.create_appointment({"client": 1})

        err = exc_info.value
        assert err.field_errors == {"service_workers": ["Worker is already booked"]}
        assert err.user_message("Failed to create appointment") == "Worker is already booked"

    def test_user_message_order(self):
        assert ApiError("x", detail="Server said no").user_message("Fallback") == "Server said no"
        assert ApiError("x").user_message("Fallback") == "Fallback"
        assert ApiError("x").user_message() == "x"

    def test_transport_failure_becomes_api_error(self, http):
        http.request.side_effect = requests.ConnectionError("connection refused")
        api = ApiClient(BASE, http=http)

        with pytest.raises(ApiError) as exc_info:
            api.get_clients()

        assert exc_info.value.message == GENERIC_ERROR
        assert exc_info.value.status is None


class TestPayloads:
    def test_paginated_and_bare_lists_unwrap_the_same(self, http, response, payloads):
        record = payloads["worker"]()
        http.request.side_effect = [response(200, [record]), response(200, {"count": 1, "results": [record]})]
        api = ApiClient(BASE, http=http)

        assert api.get_workers() == api.get_workers()

    def test_delete_204_returns_none(self, http, response):
        http.request.return_value = response(204)
        api = ApiClient(BASE, http=http)

        assert api.delete_appointment(7) is None
        args, _ = http.request.call_args
        assert args == ("DELETE", f"{BASE}/appointments/7/")

    def test_update_uses_patch(self, http, response, payloads):
        http.request.return_value = response(200, payloads["client"](phone="555-9999"))
        api = ApiClient(BASE, http=http)

        client = api.update_client(1, {"phone": "555-9999"})

        args, kwargs = http.request.call_args
        assert args == ("PATCH", f"{BASE}/clients/1/")
        assert kwargs["json"] == {"phone": "555-9999"}
        assert client.phone == "555-9999"

    def test_complete_sends_completion_notes(self, http, response, payloads):
        http.request.return_value = response(200, payloads["appointment"](status="completed"))
        api = ApiClient(BASE, http=http)

        appt = api.complete_appointment(100, "Replaced valve")

        args, kwargs = http.request.call_args
        assert args == ("POST", f"{BASE}/appointments/100/complete/")
        assert kwargs["json"] == {"completion_notes": "Replaced valve"}
        assert appt is not None and appt.status == "completed"

    def test_cancel_sends_notes_and_tolerates_status_body(self, http, response):
        http.request.return_value = response(200, {"status": "cancelled"})
        api = ApiClient(BASE, http=http)

        assert api.cancel_appointment(100, "Client rescheduled") is None
        _, kwargs = http.request.call_args
        assert kwargs["json"] == {"notes": "Client rescheduled"}

    def test_conflicts_and_availability_params(self, http, response):
        http.request.return_value = response(200, [])
        api = ApiClient(BASE, http=http)

        api.check_conflicts("2025-01-15", 10)
        args, kwargs = http.request.call_args
        assert args == ("GET", f"{BASE}/appointments/conflicts/")
        assert kwargs["params"] == {"date": "2025-01-15", "worker_id": "10"}

        api.get_worker_availability(10, "2025-01-15")
        args, kwargs = http.request.call_args
        assert args == ("GET", f"{BASE}/workers/10/availability/")
        assert kwargs["params"] == {"date": "2025-01-15"}

    def test_stats_default_missing_counters(self, http, response):
        http.request.return_value = response(200, {"total": 5, "active": 3})
        api = ApiClient(BASE, http=http)

        stats = api.get_worker_stats()

        assert (stats.total, stats.active, stats.inactive, stats.on_leave) == (5, 3, 0, 0)


class TestMalformedSuccessBodies:
    def test_list_endpoint_with_object_body(self, http, response):
        http.request.return_value = response(200, {"detail": "maintenance"})
        api = ApiClient(BASE, http=http)

        with pytest.raises(ApiError) as exc_info:
            api.get_clients()

        assert exc_info.value.message == GENERIC_ERROR
        assert exc_info.value.user_message("Failed to load clients") == "Failed to load clients"

    def test_create_with_empty_body(self, http, response):
        http.request.return_value = response(201)
        api = ApiClient(BASE, http=http)

        with pytest.raises(ApiError) as exc_info:
            api.create_client({"first_name": "Ann"})

        assert exc_info.value.message == GENERIC_ERROR

    def test_record_without_id(self, http, response, payloads):
        record = payloads["appointment"]()
        del record["id"]
        http.request.return_value = response(200, [record])
        api = ApiClient(BASE, http=http)

        with pytest.raises(ApiError):
            api.get_today_appointments()

    def test_record_with_bad_field(self, http, response, payloads):
        http.request.return_value = response(200, payloads["worker"](id="not-a-number"))
        api = ApiClient(BASE, http=http)

        with pytest.raises(ApiError):
            api.update_worker(10, {"phone": "555-0000"})

    def test_stats_with_list_body(self, http, response):
        http.request.return_value = response(200, [1, 2, 3])
        api = ApiClient(BASE, http=http)

        with pytest.raises(ApiError):
            api.get_appointment_stats()

    def test_complete_echo_with_bad_record(self, http, response):
        http.request.return_value = response(200, {"id": "x", "status": "completed"})
        api = ApiClient(BASE, http=http)

        with pytest.raises(ApiError):
            api.complete_appointment(100)


class TestRefreshTransportFailure:
    def test_unreachable_refresh_clears_session(self, http, response):
        http.request.side_effect = [
            response(401, {"detail": "Token expired"}),
            requests.ConnectionError("connection reset"),
        ]
        session = _session()
        api = ApiClient(BASE, session=session, http=http)

        with pytest.raises(ApiError) as exc_info:
            api.get_clients()

        assert exc_info.value.status is None
        assert http.request.call_count == 2
        assert not session.is_authenticated
