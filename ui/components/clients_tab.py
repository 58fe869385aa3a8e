from __future__ import annotations

import streamlit as st

from .base_component import BaseComponent
from .can_access import gate
from .client_form import render_client_form
from .shared import render_appointment_card, render_info_field, render_record_picker
from crm.forms import ClientForm
from crm.models import CLIENT_STATUS_LABELS, Client
from crm.permissions import Permission
from crm.tables import clients_frame, export_csv
from ui.services import ClientService
from ui.state import Dialog, Page
from ui.utils.helpers import CLIENT_STATUS_FACETS, or_placeholder, status_badge


class ClientsTab(BaseComponent):
    """Clients page: filterable list, detail view, create/edit/delete.

    List filters: free text over name/email/phone (local) and a status facet
    (server-side). Picking a client opens the detail view with its
    appointments. Create, edit and delete are admin-only.
    """

    def __init__(self, state, client_service: ClientService) -> None:
        super().__init__(state)
        self.client_service = client_service
        self.view = state.clients

    def render(self) -> None:
        if self.view.selected_id is not None:
            self._render_detail(self.view.selected_id)
        else:
            self._render_list()

    # --- List ---
    def _render_list(self) -> None:
        col_a, col_b = st.columns([4, 1])
        with col_a:
            st.header("Clients")
            st.caption("Manage your client database")
        with col_b:
            gate(self.state.auth, Permission.ADMIN, self._render_add_button, fallback=lambda: st.caption("View only"))

        if self.view.dialog == Dialog.CREATE:
            self._render_create()

        c1, c2 = st.columns(2)
        with c1:
            self.view.search = st.text_input(
                "Search", value=self.view.search, placeholder="Search by name, email, or phone...", key="clients_search"
            )
        with c2:
            options = list(CLIENT_STATUS_FACETS)
            self.view.status = st.selectbox(
                "Status",
                options=options,
                index=options.index(self.view.status) if self.view.status in options else 0,
                format_func=lambda s: CLIENT_STATUS_FACETS[s],
                key="clients_status",
            )

        clients, err = self.client_service.list_clients(self.view.search, self.view.status)
        if err:
            st.error(err)
            return
        if not clients:
            st.info("No clients found")
            return

        df = clients_frame(clients)
        st.dataframe(df, hide_index=True, use_container_width=True)
        picked = render_record_picker(clients, lambda c: f"{c.full_name} · {c.phone}", key="clients")
        if picked is not None:
            self.view.open_detail(picked)
            st.rerun()

        if st.button("Export CSV", key="clients_export"):
            path = export_csv(df, "clients")
            st.success(f"Exported {len(df)} rows to {path}")

    def _render_create(self) -> None:
        with st.container(border=True):
            st.subheader("Add New Client")
            form, cancelled = render_client_form(ClientForm(), key="client_create_form", submit_label="Create Client")
            if cancelled:
                self.view.close_dialog()
                st.rerun()
            if form is not None:
                ok, msg = self.client_service.create(form)
                if ok:
                    self.view.close_dialog()
                    self.state.notify(msg, "success")
                    st.rerun()
                st.error(msg)

    def _render_add_button(self) -> None:
        if st.button("+ Add Client", key="clients_add"):
            self.view.open_dialog(Dialog.CREATE)

    # --- Detail ---
    def _render_detail(self, client_id: int) -> None:
        if st.button("← Back to Clients", key="client_back"):
            self.view.back_to_list()
            st.rerun()

        with st.spinner("Loading client details..."):
            client, appointments, err = self.client_service.get_detail(client_id)
        if client is None:
            st.subheader("Client Not Found")
            if err:
                st.error(err)
            return
        if err:
            st.warning(err)

        st.header(client.full_name)
        st.markdown(f"{status_badge(client.status)} · Client ID: {client.id}")
        self._render_actions(client)

        with st.container(border=True):
            st.subheader("Contact Information")
            c1, c2 = st.columns(2)
            with c1:
                render_info_field("Email", or_placeholder(client.email))
            with c2:
                render_info_field("Phone", client.phone)
            render_info_field("Address", client.address)
            if client.service_location:
                render_info_field("Service Location", client.service_location)
            if client.notes:
                render_info_field("Notes", client.notes)
            render_info_field("Status", CLIENT_STATUS_LABELS.get(client.status, client.status))

        st.subheader(f"Appointments ({len(appointments)})")
        if not appointments:
            st.info("No appointments for this client yet")
        for appt in appointments:
            render_appointment_card(appt, on_open=self._open_appointment, key_prefix="client_appt")

    def _render_actions(self, client: Client) -> None:
        c1, c2, _ = st.columns([1, 1, 4])
        with c1:
            if self.permissions.can_edit_client() and st.button("Edit", key="client_edit"):
                self.view.open_dialog(Dialog.EDIT)
        with c2:
            if self.permissions.can_delete_client() and st.button("Delete", key="client_delete"):
                self.view.open_dialog(Dialog.DELETE)

        if self.view.dialog == Dialog.EDIT:
            with st.container(border=True):
                st.subheader("Edit Client")
                form, cancelled = render_client_form(
                    ClientForm.from_client(client), key=f"client_edit_form_{client.id}", submit_label="Save Changes"
                )
                if cancelled:
                    self.view.close_dialog()
                    st.rerun()
                if form is not None:
                    ok, msg = self.client_service.update(client.id, form)
                    if ok:
                        self.view.close_dialog()
                        self.state.notify(msg, "success")
                        st.rerun()
                    st.error(msg)

        if self.view.dialog == Dialog.DELETE:
            st.warning("Are you sure you want to delete this client? This action cannot be undone.")
            d1, d2, _ = st.columns([1, 1, 4])
            with d1:
                if st.button("Yes, delete", type="primary", key="client_delete_confirm"):
                    ok, msg = self.client_service.delete(client.id, client.full_name)
                    self.state.notify_result(ok, msg)
                    if ok:
                        self.view.back_to_list()
                    else:
                        self.view.close_dialog()
                    st.rerun()
            with d2:
                if st.button("Keep", key="client_delete_cancel"):
                    self.view.close_dialog()
                    st.rerun()

    def _open_appointment(self, appointment_id: int) -> None:
        self.state.navigate(Page.APPOINTMENTS)
        self.state.appointments.open_detail(appointment_id)
        st.rerun()


def render_clients_tab(state, client_service: ClientService) -> None:
    ClientsTab(state, client_service).render()
