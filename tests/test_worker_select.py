"""Selection model behind the multi-worker picker."""

import pytest

from crm.models import ServiceWorker
from crm.worker_select import WorkerSelection


@pytest.fixture
def selection(payloads):
    workers = [
        ServiceWorker.from_dict(payloads["worker"]()),
        ServiceWorker.from_dict(
            payloads["worker"](id=11, first_name="Eve", last_name="Ray", full_name="Eve Ray", skills="Electrical")
        ),
        ServiceWorker.from_dict(
            payloads["worker"](id=12, first_name="Gus", last_name="Ray", full_name="Gus Ray", status="on_leave")
        ),
    ]
    return WorkerSelection(workers=workers)


def test_only_active_workers_offered(selection):
    assert [w.id for w in selection.options()] == [10, 11]


def test_search_by_name_or_skill(selection):
    assert [w.id for w in selection.options("ray")] == [11]
    assert [w.id for w in selection.options("hvac")] == [10]
    assert [w.id for w in selection.options("  ELECTRICAL ")] == [11]
    assert selection.options("carpentry") == []


def test_toggle_is_idempotent_in_pairs(selection):
    selection.toggle(11)
    selection.toggle(10)
    assert selection.selected_ids == [11, 10]
    selection.toggle(11)
    assert selection.selected_ids == [10]
    selection.toggle(11)
    assert selection.selected_ids == [10, 11]


def test_remove_and_clear(selection):
    selection.set_selected([10, 11])
    assert selection.remove(10) == [11]
    assert selection.remove(99) == [11]
    selection.clear()
    assert selection.selected_ids == []


def test_set_selected_dedupes_in_order(selection):
    assert selection.set_selected([11, 10, 11]) == [11, 10]
    assert selection.is_selected(10)
    assert not selection.is_selected(12)


def test_summary(selection):
    assert selection.summary() == "Select service workers..."
    selection.set_selected([11, 10, 404])
    assert [w.id for w in selection.selected_workers()] == [11, 10]
    assert selection.summary() == "Eve Ray, Bob Stone"
