from __future__ import annotations

"""Service Workers page."""

from datetime import date

import streamlit as st

from .base_component import BaseComponent
from .can_access import gate
from .shared import render_appointment_card, render_info_field, render_record_picker
from .worker_form import render_worker_form
from crm.forms import WorkerForm
from crm.models import WORKER_STATUS_LABELS, ServiceWorker
from crm.permissions import Permission
from crm.tables import export_csv, workers_frame
from ui.services import WorkerService
from ui.state import Dialog, Page
from ui.utils.helpers import WORKER_STATUS_FACETS, or_placeholder, status_badge


class WorkersTab(BaseComponent):
    def __init__(self, state, worker_service: WorkerService) -> None:
        super().__init__(state)
        self.worker_service = worker_service
        self.view = state.workers

    def render(self) -> None:
        if self.view.selected_id is not None:
            self._render_detail(self.view.selected_id)
        else:
            self._render_list()

    def _render_list(self) -> None:
        col_a, col_b = st.columns([4, 1])
        with col_a:
            st.header("Service Workers")
            st.caption("Manage your service team")
        with col_b:
            gate(self.state.auth, Permission.ADMIN, self._render_add_button, fallback=lambda: st.caption("View only"))

        if self.view.dialog == Dialog.CREATE:
            with st.container(border=True):
                st.subheader("Add New Service Worker")
                form, cancelled = render_worker_form(WorkerForm(), key="worker_create_form", submit_label="Create Worker")
                if cancelled:
                    self.view.close_dialog()
                    st.rerun()
                if form is not None:
                    ok, msg = self.worker_service.create(form)
                    if ok:
                        self.view.close_dialog()
                        self.state.notify(msg, "success")
                        st.rerun()
                    st.error(msg)

        c1, c2 = st.columns(2)
        with c1:
            self.view.search = st.text_input(
                "Search", value=self.view.search, placeholder="Search by name, email, or phone...", key="workers_search"
            )
        with c2:
            options = list(WORKER_STATUS_FACETS)
            self.view.status = st.selectbox(
                "Status",
                options=options,
                index=options.index(self.view.status) if self.view.status in options else 0,
                format_func=lambda s: WORKER_STATUS_FACETS[s],
                key="workers_status",
            )

        workers, err = self.worker_service.list_workers(self.view.search, self.view.status)
        if err:
            st.error(err)
            return
        if not workers:
            st.info("No service workers found")
            return

        df = workers_frame(workers)
        st.dataframe(df, hide_index=True, use_container_width=True)
        picked = render_record_picker(workers, lambda w: f"{w.full_name} · {w.phone}", key="workers")
        if picked is not None:
            self.view.open_detail(picked)
            st.rerun()

        if st.button("Export CSV", key="workers_export"):
            path = export_csv(df, "workers")
            st.success(f"Exported {len(df)} rows to {path}")

    def _render_add_button(self) -> None:
        if st.button("+ Add Worker", key="workers_add"):
            self.view.open_dialog(Dialog.CREATE)

    def _render_detail(self, worker_id: int) -> None:
        if st.button("← Back to Workers", key="worker_back"):
            self.view.back_to_list()
            st.rerun()

        with st.spinner("Loading worker details..."):
            worker, appointments, err = self.worker_service.get_detail(worker_id)
        if worker is None:
            st.subheader("Worker Not Found")
            if err:
                st.error(err)
            return
        if err:
            st.warning(err)

        st.header(worker.full_name)
        st.markdown(f"{status_badge(worker.status)} · Worker ID: {worker.id}")
        self._render_actions(worker)

        with st.container(border=True):
            st.subheader("Contact Information")
            c1, c2 = st.columns(2)
            with c1:
                render_info_field("Email", or_placeholder(worker.email))
            with c2:
                render_info_field("Phone", worker.phone)
            render_info_field("Skills", or_placeholder(worker.skills, "No skills listed"))
            if worker.availability_notes:
                render_info_field("Availability", worker.availability_notes)
            if worker.notes:
                render_info_field("Notes", worker.notes)
            render_info_field("Status", WORKER_STATUS_LABELS.get(worker.status, worker.status))

        with st.expander("Availability for a day"):
            day = st.date_input("Date", value=date.today(), key=f"worker_avail_{worker.id}")
            if st.button("Check availability", key=f"worker_avail_btn_{worker.id}"):
                data, avail_err = self.worker_service.availability(worker.id, day.isoformat())
                if avail_err:
                    st.error(avail_err)
                else:
                    st.json(data)

        st.subheader(f"Assigned Appointments ({len(appointments)})")
        if not appointments:
            st.info("No appointments assigned yet")
        for appt in appointments:
            render_appointment_card(appt, on_open=self._open_appointment, key_prefix="worker_appt")

    def _render_actions(self, worker: ServiceWorker) -> None:
        c1, c2, _ = st.columns([1, 1, 4])
        with c1:
            if self.permissions.can_edit_worker() and st.button("Edit", key="worker_edit"):
                self.view.open_dialog(Dialog.EDIT)
        with c2:
            if self.permissions.can_delete_worker() and st.button("Delete", key="worker_delete"):
                self.view.open_dialog(Dialog.DELETE)

        if self.view.dialog == Dialog.EDIT:
            with st.container(border=True):
                st.subheader("Edit Service Worker")
                form, cancelled = render_worker_form(
                    WorkerForm.from_worker(worker), key=f"worker_edit_form_{worker.id}", submit_label="Save Changes"
                )
                if cancelled:
                    self.view.close_dialog()
                    st.rerun()
                if form is not None:
                    ok, msg = self.worker_service.update(worker.id, form)
                    if ok:
                        self.view.close_dialog()
                        self.state.notify(msg, "success")
                        st.rerun()
                    st.error(msg)

        if self.view.dialog == Dialog.DELETE:
            st.warning(f"Delete {worker.full_name}? This action cannot be undone.")
            d1, d2, _ = st.columns([1, 1, 4])
            with d1:
                if st.button("Yes, delete", type="primary", key="worker_delete_confirm"):
                    ok, msg = self.worker_service.delete(worker.id, worker.full_name)
                    self.state.notify_result(ok, msg)
                    if ok:
                        self.view.back_to_list()
                    else:
                        self.view.close_dialog()
                    st.rerun()
            with d2:
                if st.button("Keep", key="worker_delete_cancel"):
                    self.view.close_dialog()
                    st.rerun()

    def _open_appointment(self, appointment_id: int) -> None:
        self.state.navigate(Page.APPOINTMENTS)
        self.state.appointments.open_detail(appointment_id)
        st.rerun()


def render_workers_tab(state, worker_service: WorkerService) -> None:
    WorkersTab(state, worker_service).render()
