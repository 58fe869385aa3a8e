from __future__ import annotations

"""
Appointment create and edit forms.

The create form is built from plain widgets rather than `st.form` because
choosing a client must prefill the location immediately. Its draft lives
in `st.session_state` under the form key until `reset_appointment_draft`
is called after a successful submit or a cancel.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Tuple

import streamlit as st

from crm.forms import NO_CLIENT, AppointmentForm
from crm.models import APPOINTMENT_STATUS_LABELS, APPOINTMENT_TYPE_LABELS, Client, ServiceWorker
from ui.components.worker_multiselect import render_worker_multiselect
from ui.utils.helpers import parse_clock, parse_iso_date

UNASSIGNED = -1


def _select_index(options: List, value) -> int:
    return options.index(value) if value in options else 0


def _render_schedule_fields(draft: AppointmentForm, key: str) -> AppointmentForm:
    c1, c2 = st.columns(2)
    with c1:
        picked_date = st.date_input("Scheduled Date *", value=parse_iso_date(draft.scheduled_date), key=f"{key}_date")
    with c2:
        picked_time = st.time_input(
            "Scheduled Time *", value=parse_clock(draft.scheduled_time), step=900, key=f"{key}_time"
        )
    draft.set_date(picked_date)
    draft.set_time(picked_time)

    types = list(APPOINTMENT_TYPE_LABELS)
    statuses = list(APPOINTMENT_STATUS_LABELS)
    c3, c4, c5 = st.columns(3)
    with c3:
        draft.duration_minutes = int(
            st.number_input(
                "Duration (min) *",
                min_value=15,
                step=15,
                value=max(15, int(draft.duration_minutes or 60)),
                key=f"{key}_duration",
            )
        )
    with c4:
        draft.appointment_type = st.selectbox(
            "Type",
            options=types,
            index=_select_index(types, draft.appointment_type),
            format_func=lambda t: APPOINTMENT_TYPE_LABELS[t],
            key=f"{key}_type",
        )
    with c5:
        draft.status = st.selectbox(
            "Status",
            options=statuses,
            index=_select_index(statuses, draft.status),
            format_func=lambda s: APPOINTMENT_STATUS_LABELS[s],
            key=f"{key}_status",
        )
    return draft


def reset_appointment_draft(key: str) -> None:
    """Forget the draft and every widget value under `key`."""
    for k in [k for k in st.session_state.keys() if str(k).startswith(key)]:
        del st.session_state[k]


def render_appointment_create_form(
    clients: List[Client], workers: List[ServiceWorker], key: str
) -> Tuple[Optional[AppointmentForm], bool]:
    """Render the create form. Returns (form_on_submit_or_None, cancelled)."""
    draft_key = f"{key}_draft"
    if draft_key not in st.session_state:
        st.session_state[draft_key] = AppointmentForm()
    draft: AppointmentForm = st.session_state[draft_key]

    names: Dict[int, str] = {c.id: c.full_name for c in clients}
    client_ids = [NO_CLIENT] + list(names)
    location_key = f"{key}_location"
    if location_key not in st.session_state:
        st.session_state[location_key] = draft.location

    def _on_client_change() -> None:
        draft.select_client(st.session_state[f"{key}_client"], clients)
        st.session_state[location_key] = draft.location

    st.selectbox(
        "Client *",
        options=client_ids,
        index=_select_index(client_ids, draft.client),
        format_func=lambda cid: names.get(cid, "Select a client"),
        key=f"{key}_client",
        on_change=_on_client_change,
    )
    draft.service_workers = render_worker_multiselect(workers, key=f"{key}_workers", initial=draft.service_workers)
    _render_schedule_fields(draft, key)
    draft.location = st.text_area("Location", key=location_key, height=68, placeholder="Service location")
    draft.description = st.text_area(
        "Description", value=draft.description, height=68, key=f"{key}_description",
        placeholder="Brief description of the service",
    )
    draft.notes = st.text_area("Internal Notes", value=draft.notes, height=68, key=f"{key}_notes")

    b1, b2 = st.columns([1, 1])
    with b1:
        submitted = st.button("Schedule Appointment", type="primary", key=f"{key}_submit")
    with b2:
        cancelled = st.button("Cancel", key=f"{key}_cancel")
    if submitted:
        return draft, False
    return None, bool(cancelled)


def render_appointment_edit_form(
    initial: AppointmentForm, clients: List[Client], workers: List[ServiceWorker], key: str
) -> Tuple[Optional[AppointmentForm], bool]:
    """Render the edit form. Returns (form_on_submit_or_None, cancelled)."""
    draft = replace(initial, service_workers=list(initial.service_workers))
    names: Dict[int, str] = {c.id: c.full_name for c in clients}
    # Keep the current client selectable even if it is no longer active
    if draft.client != NO_CLIENT and draft.client not in names:
        names[draft.client] = f"Client #{draft.client}"
    client_ids = [NO_CLIENT] + list(names)
    worker_names: Dict[int, str] = {w.id: w.full_name for w in workers}
    worker_ids = [UNASSIGNED] + list(worker_names)

    with st.form(key=key):
        draft.client = st.selectbox(
            "Client *",
            options=client_ids,
            index=_select_index(client_ids, draft.client),
            format_func=lambda cid: names.get(cid, "Select a client"),
        )
        current_worker = draft.service_worker if draft.service_worker is not None else UNASSIGNED
        chosen = st.selectbox(
            "Service Worker",
            options=worker_ids,
            index=_select_index(worker_ids, current_worker),
            format_func=lambda wid: worker_names.get(wid, "Unassigned"),
        )
        draft.service_worker = None if chosen == UNASSIGNED else chosen
        _render_schedule_fields(draft, key)
        draft.location = st.text_area("Location", value=draft.location, height=68)
        draft.description = st.text_area("Description", value=draft.description, height=68)
        draft.notes = st.text_area("Internal Notes", value=draft.notes, height=68)
        b1, b2 = st.columns([1, 1])
        with b1:
            submitted = st.form_submit_button("Save Changes", type="primary")
        with b2:
            cancelled = st.form_submit_button("Cancel")

    if submitted:
        return draft, False
    return None, bool(cancelled)
