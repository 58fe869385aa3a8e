from __future__ import annotations

"""
Client create/edit form.

Renders the controlled form and returns the edited `ClientForm` when the
user submits. Required-field checks happen in the service before any API
call; here we only collect values.
"""

from typing import Optional, Tuple

import streamlit as st

from crm.forms import ClientForm
from crm.models import CLIENT_STATUS_LABELS


def render_client_form(initial: ClientForm, key: str, submit_label: str) -> Tuple[Optional[ClientForm], bool]:
    """Render the form. Returns (submitted_form_or_None, cancelled)."""
    statuses = list(CLIENT_STATUS_LABELS)
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
        address = st.text_area("Address *", value=initial.address, height=68)
        service_location = st.text_area(
            "Service Location",
            value=initial.service_location,
            height=68,
            help="Leave empty when service happens at the address above",
        )
        status = st.selectbox(
            "Status",
            options=statuses,
            index=statuses.index(initial.status) if initial.status in statuses else 0,
            format_func=lambda s: CLIENT_STATUS_LABELS[s],
        )
        notes = st.text_area("Notes", value=initial.notes, height=68)
        b1, b2 = st.columns([1, 1])
        with b1:
            submitted = st.form_submit_button(submit_label, type="primary")
        with b2:
            cancelled = st.form_submit_button("Cancel")

    if not submitted:
        return None, bool(cancelled)
    return (
        ClientForm(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            address=address,
            service_location=service_location,
            status=status,
            notes=notes,
        ),
        False,
    )
