from __future__ import annotations

"""Service-worker create/edit form."""

from typing import Optional, Tuple

import streamlit as st

from crm.forms import WorkerForm
from crm.models import WORKER_STATUS_LABELS


def render_worker_form(initial: WorkerForm, key: str, submit_label: str) -> Tuple[Optional[WorkerForm], bool]:
    """Render the form. Returns (submitted_form_or_None, cancelled)."""
    statuses = list(WORKER_STATUS_LABELS)
    with st.form(key=key, clear_on_submit=False):
        c1, c2 = st.columns(2)
        with c1:
            first_name = st.text_input("First Name *", value=initial.first_name)
        with c2:
            last_name = st.text_input("Last Name *", value=initial.last_name)
        c3, c4 = st.columns(2)
        with c3:
            email = st.text_input("Email", value=initial.email)
        with c4:
            phone = st.text_input("Phone *", value=initial.phone)
        skills = st.text_input("Skills", value=initial.skills, help="Comma-separated, e.g. plumbing, HVAC")
        status = st.selectbox(
            "Status",
            options=statuses,
            index=statuses.index(initial.status) if initial.status in statuses else 0,
            format_func=lambda s: WORKER_STATUS_LABELS[s],
        )
        availability_notes = st.text_area("Availability Notes", value=initial.availability_notes, height=68)
        notes = st.text_area("Notes", value=initial.notes, height=68)
        b1, b2 = st.columns([1, 1])
        with b1:
            submitted = st.form_submit_button(submit_label, type="primary")
        with b2:
            cancelled = st.form_submit_button("Cancel")

    if not submitted:
        return None, bool(cancelled)
    return (
        WorkerForm(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            skills=skills,
            status=status,
            availability_notes=availability_notes,
            notes=notes,
        ),
        False,
    )
