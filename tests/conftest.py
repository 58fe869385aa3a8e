"""
Pytest configuration for ensuring the project root is on sys.path.

This allows test modules to import the in-repo package layout like:
    from crm.api_client import ApiClient

Without relying on external environment variables. Also provides a
`requests.Response` stand-in so HTTP can be faked with `unittest.mock`.
"""

import json
import os
import sys
from unittest.mock import Mock

import pytest

# Insert the repository root (one directory up from tests/) at the
# beginning of sys.path to prioritize local modules over site-packages.
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


class FakeResponse:
    """Just enough of `requests.Response` for `ApiClient`."""

    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        if text is not None:
            self.content = text.encode("utf-8")
        elif body is None:
            self.content = b""
        else:
            self.content = json.dumps(body).encode("utf-8")

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        # json.JSONDecodeError is a ValueError, as with requests
        return json.loads(self.content.decode("utf-8"))


@pytest.fixture
def response():
    """Factory: response(status, body=None, text=None)."""
    return FakeResponse


@pytest.fixture
def http():
    """A `requests.Session` stand-in; set `.request.return_value` or `.side_effect`."""
    return Mock()


def client_payload(**overrides):
    data = {
        "id": 1,
        "first_name": "Ann",
        "last_name": "Lee",
        "full_name": "Ann Lee",
        "email": "ann@example.com",
        "phone": "555-0101",
        "address": "1 Main St",
        "service_location": "",
        "status": "active",
    }
    data.update(overrides)
    return data


def worker_payload(**overrides):
    data = {
        "id": 10,
        "first_name": "Bob",
        "last_name": "Stone",
        "full_name": "Bob Stone",
        "email": "bob@example.com",
        "phone": "555-0200",
        "skills": "Plumbing, HVAC",
        "status": "active",
    }
    data.update(overrides)
    return data


def appointment_payload(**overrides):
    data = {
        "id": 100,
        "client": 1,
        "client_name": "Ann Lee",
        "service_worker": 10,
        "service_workers": [10],
        "worker_name": "Bob Stone",
        "appointment_type": "service",
        "status": "scheduled",
        "scheduled_date": "2025-01-15",
        "scheduled_time": "09:30:00",
        "duration_minutes": 90,
        "location": "1 Main St",
        "description": "Leaking sink",
    }
    data.update(overrides)
    return data


@pytest.fixture
def payloads():
    """Builders for JSON records as the service returns them."""
    return {
        "client": client_payload,
        "worker": worker_payload,
        "appointment": appointment_payload,
    }
