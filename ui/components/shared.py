from __future__ import annotations

"""Small display pieces reused across pages."""

from typing import Callable, Optional, Sequence

import streamlit as st

from crm.models import Appointment
from crm.tables import format_duration, format_schedule
from ui.state import UIState
from ui.utils.helpers import status_badge


def render_notices(state: UIState) -> None:
    """Show queued notifications once, then forget them."""
    for level, message in state.drain_notices():
        if level == "success":
            st.toast(message, icon="✅")
        elif level == "error":
            st.error(message)
        elif level == "warning":
            st.warning(message)
        else:
            st.info(message)


def render_info_field(label: str, value: Optional[str]) -> None:
    st.caption(label)
    st.write(value if value else "-")


def render_appointment_card(
    appointment: Appointment,
    on_open: Optional[Callable[[int], None]] = None,
    key_prefix: str = "card",
) -> None:
    """One appointment summary in a bordered box."""
    with st.container(border=True):
        c1, c2 = st.columns([3, 1])
        with c1:
            st.markdown(f"**{appointment.client_name}** · {appointment.type_label}")
            st.caption(
                f"{format_schedule(appointment)} · {format_duration(appointment.duration_minutes)}"
                f" · {appointment.worker_name or 'Unassigned'}"
            )
            if appointment.location:
                st.caption(f"📍 {appointment.location}")
            if appointment.description:
                st.write(appointment.description)
        with c2:
            st.markdown(status_badge(appointment.status))
            if on_open is not None and st.button("Open", key=f"{key_prefix}_open_{appointment.id}"):
                on_open(appointment.id)


def render_record_picker(records: Sequence, label: Callable[[object], str], key: str) -> Optional[int]:
    """Selectbox plus "View details" button; returns the chosen record id on click."""
    if not records:
        return None
    by_id = {r.id: r for r in records}
    c1, c2 = st.columns([4, 1])
    with c1:
        picked = st.selectbox(
            "Open record",
            options=list(by_id),
            format_func=lambda rid: label(by_id[rid]),
            key=f"{key}_picker",
            label_visibility="collapsed",
        )
    with c2:
        if st.button("View details", key=f"{key}_open"):
            return picked
    return None
