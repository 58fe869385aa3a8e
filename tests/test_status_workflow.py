"""Status change routing: complete, cancel or PATCH."""

from unittest.mock import Mock

import pytest

from crm.status_workflow import StatusRoute, request_status_change, route_for, status_badge, status_choices


@pytest.mark.parametrize(
    "status,route",
    [
        ("completed", StatusRoute.COMPLETE),
        ("cancelled", StatusRoute.CANCEL),
        ("scheduled", StatusRoute.PATCH),
        ("in_progress", StatusRoute.PATCH),
        ("no_show", StatusRoute.PATCH),
    ],
)
def test_route_for(status, route):
    assert route_for(status) is route


def test_invalid_status_rejected():
    with pytest.raises(ValueError):
        route_for("archived")


def test_complete_goes_to_complete_endpoint():
    api = Mock()
    request_status_change(api, 5, "completed", "All fixed")
    api.complete_appointment.assert_called_once_with(5, "All fixed")
    api.update_appointment.assert_not_called()


def test_cancel_blank_notes_sent_as_none():
    api = Mock()
    request_status_change(api, 5, "cancelled", "")
    api.cancel_appointment.assert_called_once_with(5, None)


def test_other_statuses_patch_without_transition_checks():
    api = Mock()
    request_status_change(api, 5, "scheduled", "ignored")
    api.update_appointment.assert_called_once_with(5, {"status": "scheduled"})
    api.complete_appointment.assert_not_called()
    api.cancel_appointment.assert_not_called()


def test_api_errors_propagate():
    from crm.api_client import ApiError

    api = Mock()
    api.update_appointment.side_effect = ApiError("Invalid transition", status=400)
    with pytest.raises(ApiError):
        request_status_change(api, 5, "in_progress")


def test_choices_and_badges():
    values = [value for value, _ in status_choices()]
    assert values == ["scheduled", "in_progress", "completed", "cancelled", "no_show"]
    assert dict(status_choices())["no_show"] == "No Show"
    assert status_badge("in_progress") == "IN PROGRESS"
