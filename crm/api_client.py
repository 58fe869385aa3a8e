"""HTTP gateway to the remote CRM service.

Every call goes through `ApiClient.request`, which:

- prefixes the configured base URL and sends/receives JSON
- attaches `Authorization: Bearer <access>` when the session holds a token
- on a 401, refreshes the access token once via `/auth/refresh/` and
  replays the request once
- converts every failure (transport, HTTP status, bad JSON) into `ApiError`

The typed endpoint methods decode records through `_record` / `_records`,
so a success body of the wrong shape is an `ApiError` as well.

No retry happens beyond the single refresh; callers
show the error and leave their state untouched.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar
import logging

import requests

from .models import (
    Appointment,
    AppointmentStats,
    Client,
    ClientStats,
    ServiceWorker,
    WorkerStats,
    unwrap_results,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")

GENERIC_ERROR = "An error occurred"
REQUEST_FAILED = "Request failed"


class ApiError(Exception):
    """The single error type surfaced by the gateway.

    Attributes:
        detail: Server-supplied `detail` message, if any
        status: HTTP status code, or None for transport failures and
            bodies that do not decode into the expected records
        field_errors: Remaining keys of a JSON error body, e.g.
            `{"service_workers": ["Worker is already booked"]}`
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        detail: Optional[str] = None,
        field_errors: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.detail = detail
        self.field_errors = field_errors or {}

    @property
    def first_field_error(self) -> Optional[str]:
        for value in self.field_errors.values():
            if isinstance(value, list) and value:
                return str(value[0])
            if isinstance(value, str) and value:
                return value
        return None

    def user_message(self, fallback: Optional[str] = None) -> str:
        """Best message for a notification: field error, then detail, then fallback."""
        return self.first_field_error or self.detail or fallback or self.message


def _error_from_response(response: requests.Response) -> ApiError:
    try:
        body = response.json()
    except ValueError:
        body = {"detail": GENERIC_ERROR}
    detail: Optional[str] = None
    field_errors: Dict[str, Any] = {}
    if isinstance(body, dict):
        raw = body.get("detail")
        detail = str(raw) if raw else None
        field_errors = {k: v for k, v in body.items() if k != "detail"}
    elif isinstance(body, list) and body:
        detail = str(body[0])
    return ApiError(
        detail or REQUEST_FAILED,
        status=response.status_code,
        detail=detail,
        field_errors=field_errors,
    )


class ApiClient:
    """Thin JSON client for the CRM REST API.

    Args:
        base_url: API root, e.g. ``http://localhost:8000/api``
        session: Token holder (normally `crm.session.AuthSession`). It must
            expose `access_token`, `refresh_token`, `update_tokens(access,
            refresh)` and `clear()`. ``None`` means anonymous requests.
        http: Injected `requests.Session`-like object (tests pass a fake)
        timeout: Per-request timeout in seconds
    """

    def __init__(self, base_url: str, session: Any = None, http: Any = None, timeout: float = 15.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.http = http if http is not None else requests.Session()
        self.timeout = timeout

    # --- Core request plumbing ---
    def _headers(self, auth: bool) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        token = getattr(self.session, "access_token", None) if auth else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _send(
        self,
        method: str,
        endpoint: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        auth: bool = True,
    ) -> requests.Response:
        url = f"{self.base_url}{endpoint}"
        logger.debug("%s %s params=%s", method, url, dict(params) if params else {})
        try:
            return self.http.request(
                method,
                url,
                headers=self._headers(auth),
                params=dict(params) if params else None,
                json=json,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiError(GENERIC_ERROR) from exc

    def _refresh_access_token(self) -> bool:
        """Exchange the refresh token for a new access token. Clears the session on failure."""
        refresh = getattr(self.session, "refresh_token", None)
        if not refresh:
            return False
        try:
            response = self._send("POST", "/auth/refresh/", json={"refresh": refresh}, auth=False)
        except ApiError:
            logger.info("Token refresh unreachable; clearing session")
            self.session.clear()
            raise
        if not response.ok:
            logger.info("Token refresh rejected (%s); clearing session", response.status_code)
            self.session.clear()
            return False
        try:
            data = response.json()
        except ValueError:
            data = {}
        access = data.get("access") if isinstance(data, dict) else None
        if not access:
            self.session.clear()
            return False
        self.session.update_tokens(access, data.get("refresh") or refresh)
        logger.debug("Access token refreshed")
        return True

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        auth: bool = True,
    ) -> Any:
        """Send a request and return the decoded JSON body (None for empty bodies)."""
        response = self._send(method, endpoint, params=params, json=json, auth=auth)
        if response.status_code == 401 and auth and self.session is not None:
            if self._refresh_access_token():
                response = self._send(method, endpoint, params=params, json=json, auth=auth)

        if not response.ok:
            error = _error_from_response(response)
            logger.warning("%s %s -> %s: %s", method, endpoint, response.status_code, error.message)
            raise error

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(GENERIC_ERROR, status=response.status_code) from exc

    # --- Auth ---
    def login(self, username: str, password: str) -> Dict[str, Any]:
        return self.request("POST", "/auth/login/", json={"username": username, "password": password}, auth=False)

    # --- Clients ---
    def get_clients(self, params: Optional[Mapping[str, str]] = None) -> List[Client]:
        return _records(Client, self.request("GET", "/clients/", params=params))

    def get_client(self, client_id: int) -> Client:
        return _record(Client, self.request("GET", f"/clients/{client_id}/"))

    def create_client(self, data: Mapping[str, Any]) -> Client:
        return _record(Client, self.request("POST", "/clients/", json=dict(data)))

    def update_client(self, client_id: int, data: Mapping[str, Any]) -> Client:
        return _record(Client, self.request("PATCH", f"/clients/{client_id}/", json=dict(data)))

    def delete_client(self, client_id: int) -> None:
        self.request("DELETE", f"/clients/{client_id}/")

    def get_client_stats(self) -> ClientStats:
        return _record(ClientStats, self.request("GET", "/clients/stats/") or {})

    # --- Workers ---
    def get_workers(self, params: Optional[Mapping[str, str]] = None) -> List[ServiceWorker]:
        return _records(ServiceWorker, self.request("GET", "/workers/", params=params))

    def get_worker(self, worker_id: int) -> ServiceWorker:
        return _record(ServiceWorker, self.request("GET", f"/workers/{worker_id}/"))

    def create_worker(self, data: Mapping[str, Any]) -> ServiceWorker:
        return _record(ServiceWorker, self.request("POST", "/workers/", json=dict(data)))

    def update_worker(self, worker_id: int, data: Mapping[str, Any]) -> ServiceWorker:
        return _record(ServiceWorker, self.request("PATCH", f"/workers/{worker_id}/", json=dict(data)))

    def delete_worker(self, worker_id: int) -> None:
        self.request("DELETE", f"/workers/{worker_id}/")

    def get_worker_stats(self) -> WorkerStats:
        return _record(WorkerStats, self.request("GET", "/workers/stats/") or {})

    def get_worker_availability(self, worker_id: int, date: str) -> Any:
        return self.request("GET", f"/workers/{worker_id}/availability/", params={"date": date})

    # --- Appointments ---
    def get_appointments(self, params: Optional[Mapping[str, str]] = None) -> List[Appointment]:
        return _records(Appointment, self.request("GET", "/appointments/", params=params))

    def get_appointment(self, appointment_id: int) -> Appointment:
        return _record(Appointment, self.request("GET", f"/appointments/{appointment_id}/"))

    def create_appointment(self, data: Mapping[str, Any]) -> Appointment:
        return _record(Appointment, self.request("POST", "/appointments/", json=dict(data)))

    def update_appointment(self, appointment_id: int, data: Mapping[str, Any]) -> Appointment:
        return _record(Appointment, self.request("PATCH", f"/appointments/{appointment_id}/", json=dict(data)))

    def delete_appointment(self, appointment_id: int) -> None:
        self.request("DELETE", f"/appointments/{appointment_id}/")

    def get_today_appointments(self) -> List[Appointment]:
        return _records(Appointment, self.request("GET", "/appointments/today/"))

    def get_upcoming_appointments(self) -> List[Appointment]:
        return _records(Appointment, self.request("GET", "/appointments/upcoming/"))

    def get_appointment_stats(self) -> AppointmentStats:
        return _record(AppointmentStats, self.request("GET", "/appointments/stats/") or {})

    def complete_appointment(self, appointment_id: int, completion_notes: Optional[str] = None) -> Optional[Appointment]:
        data = self.request(
            "POST", f"/appointments/{appointment_id}/complete/", json={"completion_notes": completion_notes}
        )
        return _maybe_appointment(data)

    def cancel_appointment(self, appointment_id: int, notes: Optional[str] = None) -> Optional[Appointment]:
        data = self.request("POST", f"/appointments/{appointment_id}/cancel/", json={"notes": notes})
        return _maybe_appointment(data)

    def check_conflicts(self, date: str, worker_id: int) -> Any:
        return self.request("GET", "/appointments/conflicts/", params={"date": date, "worker_id": str(worker_id)})


_DECODE_ERRORS = (AttributeError, KeyError, TypeError, ValueError)


def _record(cls: Type[R], payload: Any) -> R:
    """Build one record from a success body, or raise `ApiError`."""
    try:
        return cls.from_dict(payload)
    except _DECODE_ERRORS as exc:
        logger.warning("Malformed %s payload: %r", cls.__name__, exc)
        raise ApiError(GENERIC_ERROR) from exc


def _records(cls: Type[R], payload: Any) -> List[R]:
    """Build a record list from a paginated or bare list body, or raise `ApiError`."""
    try:
        return [cls.from_dict(d) for d in unwrap_results(payload)]
    except _DECODE_ERRORS as exc:
        logger.warning("Malformed %s list payload: %r", cls.__name__, exc)
        raise ApiError(GENERIC_ERROR) from exc


def _maybe_appointment(data: Any) -> Optional[Appointment]:
    # complete/cancel may echo the record or just a status message
    if isinstance(data, Mapping) and "id" in data:
        return _record(Appointment, data)
    return None


__all__ = ["ApiClient", "ApiError", "GENERIC_ERROR", "REQUEST_FAILED"]
