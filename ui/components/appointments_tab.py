from __future__ import annotations

"""
Appointments page.

List view: per-status quick counts over the fetched list, search plus
status and date facets, a table and an inline status changer. Detail view:
read-only fields with edit, complete, cancel and delete actions. Each
action is shown only when the session's role allows it; completing and
cancelling ask for optional notes before the request is sent.
"""

import streamlit as st

from .appointment_form import (
    render_appointment_create_form,
    render_appointment_edit_form,
    reset_appointment_draft,
)
from .base_component import BaseComponent
from .shared import render_info_field, render_record_picker
from crm.filters import UPCOMING
from crm.forms import AppointmentForm
from crm.models import APPOINTMENT_STATUS_LABELS, Appointment, AppointmentStatus
from crm.status_workflow import status_choices
from crm.tables import appointments_frame, export_csv, format_duration, format_schedule
from ui.services import AppointmentService
from ui.state import Dialog
from ui.utils.helpers import APPOINTMENT_STATUS_FACETS, DATE_FACETS, or_placeholder, status_badge

CREATE_FORM_KEY = "appt_create"


class AppointmentsTab(BaseComponent):
    def __init__(self, state, appointment_service: AppointmentService) -> None:
        super().__init__(state)
        self.appointment_service = appointment_service
        self.view = state.appointments

    def render(self) -> None:
        if self.view.selected_id is not None:
            self._render_detail(self.view.selected_id)
        else:
            self._render_list()

    # --- List ---
    def _render_list(self) -> None:
        col_a, col_b = st.columns([4, 1])
        with col_a:
            st.header("Appointments")
            st.caption("Schedule and track service appointments")
        with col_b:
            if self.permissions.can_create_appointment() and st.button("+ New Appointment", key="appts_add"):
                self.view.open_dialog(Dialog.CREATE)

        if self.view.dialog == Dialog.CREATE:
            self._render_create()

        c1, c2, c3 = st.columns([2, 1, 1])
        with c1:
            self.view.search = st.text_input(
                "Search",
                value=self.view.search,
                placeholder="Search by client, worker, or description...",
                key="appts_search",
            )
        with c2:
            statuses = list(APPOINTMENT_STATUS_FACETS)
            self.view.status = st.selectbox(
                "Status",
                options=statuses,
                index=statuses.index(self.view.status) if self.view.status in statuses else 0,
                format_func=lambda s: APPOINTMENT_STATUS_FACETS[s],
                key="appts_status",
            )
        with c3:
            facets = list(DATE_FACETS)
            self.view.date_facet = st.selectbox(
                "Date",
                options=facets,
                index=facets.index(self.view.date_facet) if self.view.date_facet in facets else 0,
                format_func=lambda d: DATE_FACETS[d],
                key="appts_date",
            )

        rows, counts, err = self.appointment_service.list_appointments(
            self.view.search, self.view.status, self.view.date_facet
        )
        if err:
            st.error(err)
            return

        count_cols = st.columns(len(counts))
        for col, (status, count) in zip(count_cols, counts.items()):
            col.metric("Upcoming" if status == UPCOMING else APPOINTMENT_STATUS_LABELS.get(status, status), count)

        if not rows:
            st.info("No appointments found")
            return

        df = appointments_frame(rows)
        st.dataframe(df, hide_index=True, use_container_width=True)
        picked = render_record_picker(rows, _appointment_label, key="appts")
        if picked is not None:
            self.view.open_detail(picked)
            st.rerun()

        if self.permissions.can_edit_appointment():
            self._render_quick_status(rows)

        if st.button("Export CSV", key="appts_export"):
            path = export_csv(df, "appointments")
            st.success(f"Exported {len(df)} rows to {path}")

    def _render_quick_status(self, rows) -> None:
        """Inline status change for one appointment of the current list."""
        by_id = {a.id: a for a in rows}
        choices = status_choices()
        with st.expander("Change status"):
            c1, c2, c3 = st.columns([3, 2, 1])
            with c1:
                target_id = st.selectbox(
                    "Appointment",
                    options=list(by_id),
                    format_func=lambda aid: _appointment_label(by_id[aid]),
                    key="appts_quick_id",
                )
            with c2:
                new_status = st.selectbox(
                    "New status",
                    options=[value for value, _ in choices],
                    format_func=lambda s: dict(choices)[s],
                    key="appts_quick_status",
                )
            with c3:
                apply_clicked = st.button("Apply", key="appts_quick_apply")
            if apply_clicked and target_id is not None:
                ok, msg = self.appointment_service.change_status(target_id, new_status)
                self.state.notify_result(ok, msg)
                st.rerun()

    def _render_create(self) -> None:
        with st.container(border=True):
            st.subheader("Schedule New Appointment")
            clients, workers, err = self.appointment_service.form_options()
            if err:
                st.error(err)
            form, cancelled = render_appointment_create_form(clients, workers, key=CREATE_FORM_KEY)
            draft = st.session_state.get(f"{CREATE_FORM_KEY}_draft")
            if draft is not None and draft.service_workers and draft.scheduled_date:
                if st.button("Check worker conflicts", key=f"{CREATE_FORM_KEY}_conflicts"):
                    self._render_conflict_check(draft, {w.id: w.full_name for w in workers})
            if cancelled:
                reset_appointment_draft(CREATE_FORM_KEY)
                self.view.close_dialog()
                st.rerun()
            if form is not None:
                ok, msg = self.appointment_service.create(form)
                if ok:
                    reset_appointment_draft(CREATE_FORM_KEY)
                    self.view.close_dialog()
                    self.state.notify(msg, "success")
                    st.rerun()
                st.error(msg)

    def _render_conflict_check(self, form: AppointmentForm, names) -> None:
        for worker_id in form.service_workers:
            data, err = self.appointment_service.check_conflicts(form.scheduled_date, worker_id)
            st.caption(names.get(worker_id, f"Worker #{worker_id}"))
            if err:
                st.warning(err)
            elif data:
                st.json(data)
            else:
                st.write("No conflicts")

    # --- Detail ---
    def _render_detail(self, appointment_id: int) -> None:
        if st.button("← Back to Appointments", key="appt_back"):
            self.view.back_to_list()
            st.rerun()

        appt, err = self.appointment_service.get(appointment_id)
        if appt is None:
            st.subheader("Appointment Not Found")
            if err:
                st.error(err)
            return

        st.header(f"{appt.type_label} · {appt.client_name}")
        st.markdown(f"{status_badge(appt.status)} · Appointment ID: {appt.id}")
        self._render_actions(appt)

        with st.container(border=True):
            st.subheader("Details")
            c1, c2 = st.columns(2)
            with c1:
                render_info_field("Scheduled", format_schedule(appt))
                render_info_field("Client", appt.client_name)
                render_info_field("Type", appt.type_label)
            with c2:
                render_info_field("Duration", format_duration(appt.duration_minutes))
                render_info_field("Service Worker", or_placeholder(appt.worker_name, "Unassigned"))
                render_info_field("Status", appt.status_label)
            render_info_field("Location", or_placeholder(appt.location))
            if appt.description:
                render_info_field("Description", appt.description)
            if appt.notes:
                render_info_field("Internal Notes", appt.notes)
            if appt.completed_at:
                render_info_field("Completed At", appt.completed_at)
            if appt.completion_notes:
                render_info_field("Completion Notes", appt.completion_notes)

    def _render_actions(self, appt: Appointment) -> None:
        perms = self.permissions
        is_open = appt.status not in (AppointmentStatus.COMPLETED.value, AppointmentStatus.CANCELLED.value)
        c1, c2, c3, c4, _ = st.columns([1, 1, 1, 1, 2])
        with c1:
            if perms.can_edit_appointment() and st.button("Edit", key="appt_edit"):
                self.view.open_dialog(Dialog.EDIT)
        with c2:
            if is_open and perms.can_complete_appointment() and st.button("Complete", key="appt_complete"):
                self.view.open_dialog(Dialog.COMPLETE)
        with c3:
            if is_open and perms.can_cancel_appointment() and st.button("Cancel", key="appt_cancel"):
                self.view.open_dialog(Dialog.CANCEL)
        with c4:
            if perms.can_delete_appointment() and st.button("Delete", key="appt_delete"):
                self.view.open_dialog(Dialog.DELETE)

        if self.view.dialog == Dialog.EDIT:
            self._render_edit(appt)
        elif self.view.dialog == Dialog.COMPLETE:
            self._render_status_dialog(
                appt,
                AppointmentStatus.COMPLETED.value,
                prompt="Mark this appointment as completed?",
                notes_label="Completion notes",
                confirm_label="Mark Completed",
            )
        elif self.view.dialog == Dialog.CANCEL:
            self._render_status_dialog(
                appt,
                AppointmentStatus.CANCELLED.value,
                prompt="Cancel this appointment?",
                notes_label="Reason for cancellation",
                confirm_label="Cancel Appointment",
            )
        elif self.view.dialog == Dialog.DELETE:
            self._render_delete(appt)

    def _render_edit(self, appt: Appointment) -> None:
        with st.container(border=True):
            st.subheader("Edit Appointment")
            clients, workers, err = self.appointment_service.form_options()
            if err:
                st.error(err)
            form, cancelled = render_appointment_edit_form(
                AppointmentForm.from_appointment(appt), clients, workers, key=f"appt_edit_form_{appt.id}"
            )
            if cancelled:
                self.view.close_dialog()
                st.rerun()
            if form is not None:
                ok, msg = self.appointment_service.update(appt.id, form)
                if ok:
                    self.view.close_dialog()
                    self.state.notify(msg, "success")
                    st.rerun()
                st.error(msg)

    def _render_status_dialog(
        self, appt: Appointment, status: str, prompt: str, notes_label: str, confirm_label: str
    ) -> None:
        with st.container(border=True):
            st.write(prompt)
            notes = st.text_area(notes_label, key=f"appt_{status}_notes_{appt.id}", height=68)
            d1, d2, _ = st.columns([1, 1, 3])
            with d1:
                if st.button(confirm_label, type="primary", key=f"appt_{status}_confirm"):
                    ok, msg = self.appointment_service.change_status(appt.id, status, notes.strip() or None)
                    self.state.notify_result(ok, msg)
                    self.view.close_dialog()
                    st.rerun()
            with d2:
                if st.button("Back", key=f"appt_{status}_back"):
                    self.view.close_dialog()
                    st.rerun()

    def _render_delete(self, appt: Appointment) -> None:
        st.warning("Are you sure you want to delete this appointment? This action cannot be undone.")
        d1, d2, _ = st.columns([1, 1, 4])
        with d1:
            if st.button("Yes, delete", type="primary", key="appt_delete_confirm"):
                ok, msg = self.appointment_service.delete(appt.id)
                self.state.notify_result(ok, msg)
                if ok:
                    self.view.back_to_list()
                else:
                    self.view.close_dialog()
                st.rerun()
        with d2:
            if st.button("Keep", key="appt_delete_cancel"):
                self.view.close_dialog()
                st.rerun()


def _appointment_label(appt: Appointment) -> str:
    return f"{format_schedule(appt)} · {appt.client_name} · {appt.status_label}"


def render_appointments_tab(state, appointment_service: AppointmentService) -> None:
    AppointmentsTab(state, appointment_service).render()
