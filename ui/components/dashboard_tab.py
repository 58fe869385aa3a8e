from __future__ import annotations

import matplotlib.pyplot as plt
import streamlit as st

from .base_component import BaseComponent
from .shared import render_appointment_card
from ui.services import DashboardService
from ui.state import Page
from viz.plots import plot_appointment_stats, plot_client_stats, plot_worker_stats


def _show(fig) -> None:
    st.pyplot(fig)
    plt.close(fig)


class DashboardTab(BaseComponent):
    """Summary cards from the stats endpoints plus today's schedule."""

    def __init__(self, state, dashboard_service: DashboardService) -> None:
        super().__init__(state)
        self.dashboard_service = dashboard_service

    def render(self) -> None:
        st.header("Dashboard")
        with st.spinner("Loading dashboard..."):
            data, err = self.dashboard_service.load()
        if err:
            st.error(err)

        c1, c2, c3, c4 = st.columns(4)
        c1.metric("📅 Today's Appointments", data.appointments.today)
        c2.metric("📆 Upcoming (7 days)", data.appointments.upcoming)
        c3.metric("👥 Active Clients", data.clients.active)
        c4.metric("👷 Active Workers", data.workers.active)

        c5, c6, c7 = st.columns(3)
        with c5:
            st.metric("📊 Total Appointments", data.appointments.total)
            st.caption(f"{data.appointments.completed} completed")
        with c6:
            st.metric("📈 Total Clients", data.clients.total)
            st.caption(f"{data.clients.potential} potential")
        with c7:
            st.metric("📋 Service Workers", data.workers.total)
            st.caption(f"{data.workers.on_leave} on leave")

        with st.expander("Charts", expanded=False):
            g1, g2, g3 = st.columns(3)
            with g1:
                _show(plot_appointment_stats(data.appointments))
            with g2:
                _show(plot_client_stats(data.clients))
            with g3:
                _show(plot_worker_stats(data.workers))

        st.subheader("Today's Schedule")
        if not data.today:
            st.info("No appointments scheduled for today")
            return
        for appt in data.today:
            render_appointment_card(appt, on_open=self._open_appointment, key_prefix="dash")

    def _open_appointment(self, appointment_id: int) -> None:
        self.state.navigate(Page.APPOINTMENTS)
        self.state.appointments.open_detail(appointment_id)
        st.rerun()


def render_dashboard_tab(state, dashboard_service: DashboardService) -> None:
    DashboardTab(state, dashboard_service).render()
