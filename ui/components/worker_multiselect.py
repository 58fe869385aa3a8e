from __future__ import annotations

"""Multi-worker picker for new appointments.

Backed by a `crm.worker_select.WorkerSelection` kept in `st.session_state`
under ``<key>_selection``: only active workers are offered, optionally
narrowed by a name/skill query. Already-selected workers stay in the
option list so the filter never drops a selection. Selected workers are
listed under the options with a remove button each; the first one is the
lead worker.
"""

from typing import Iterable, List

import streamlit as st

from crm.models import ServiceWorker
from crm.worker_select import WorkerSelection
from ui.utils.helpers import worker_option_label


def _selection(workers: List[ServiceWorker], key: str, initial: Iterable[int]) -> WorkerSelection:
    state_key = f"{key}_selection"
    if state_key not in st.session_state:
        selection = WorkerSelection()
        selection.set_selected(initial)
        st.session_state[state_key] = selection
    selection = st.session_state[state_key]
    selection.workers = list(workers)
    return selection


def _uncheck(key: str, worker_id: int) -> None:
    # Only touch checkboxes that exist, so a later render keeps its default
    box = f"{key}_opt_{worker_id}"
    if box in st.session_state:
        st.session_state[box] = False


def render_worker_multiselect(workers: List[ServiceWorker], key: str, initial: Iterable[int] = ()) -> List[int]:
    """Render the picker and return the selected worker ids in pick order."""
    selection = _selection(workers, key, initial)

    def _remove(worker_id: int) -> None:
        selection.remove(worker_id)
        _uncheck(key, worker_id)

    def _clear() -> None:
        for worker_id in selection.selected_ids:
            _uncheck(key, worker_id)
        selection.clear()

    st.markdown("**Service Workers \\***")
    query = st.text_input("Filter workers", key=f"{key}_query", placeholder="Search by name or skill...")
    options = selection.options(query)
    shown = {w.id for w in options}
    options += [w for w in selection.selected_workers() if w.id not in shown]

    if not options:
        st.caption("No worker found.")
    for w in options:
        st.checkbox(
            worker_option_label(w),
            value=selection.is_selected(w.id),
            key=f"{key}_opt_{w.id}",
            on_change=selection.toggle,
            args=(w.id,),
        )

    chosen = selection.selected_workers()
    st.caption(selection.summary())
    if chosen:
        cols = st.columns(len(chosen) + 1)
        for col, w in zip(cols, chosen):
            col.button(f"✕ {w.full_name}", key=f"{key}_remove_{w.id}", on_click=_remove, args=(w.id,))
        cols[-1].button("Clear", key=f"{key}_clear", on_click=_clear)
    return list(selection.selected_ids)
