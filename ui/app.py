"""
Service CRM dashboard.

Streamlit entry point: sign-in gate, sidebar navigation and the four
pages (Dashboard, Appointments, Clients, Service Workers). Run with
``streamlit run ui/app.py``.
"""

from pathlib import Path
import logging
import sys

import streamlit as st

# Ensure project root is on sys.path to enable crm imports
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from crm.config import Settings, load_settings
from crm.io_paths import LOGS_DIR
from crm.utils_logging import configure_logging
from ui.state import Page, UIState
from ui.services import (
    AppointmentService,
    AuthService,
    ClientService,
    DashboardService,
    WorkerService,
    build_api_client,
)
from ui.components.appointments_tab import render_appointments_tab
from ui.components.clients_tab import render_clients_tab
from ui.components.dashboard_tab import render_dashboard_tab
from ui.components.login_form import render_login_form
from ui.components.shared import render_notices
from ui.components.workers_tab import render_workers_tab

logger = logging.getLogger(__name__)

st.set_page_config(page_title="Service CRM", page_icon="🛠️", layout="wide")


@st.cache_resource
def _settings() -> Settings:
    settings = load_settings()
    configure_logging(LOGS_DIR, debug=settings.debug)
    logger.info("Dashboard using API at %s", settings.api_url)
    return settings


def _render_sidebar(state: UIState, auth_service: AuthService) -> None:
    with st.sidebar:
        st.title("🛠️ Service CRM")
        pages = [p.value for p in Page]
        choice = Page(st.radio("Navigate", options=pages, index=pages.index(state.page.value)))
        if choice != state.page:
            state.navigate(choice)
            st.rerun()

        st.divider()
        user = state.auth.user
        if user is not None:
            st.write(f"**{user.display_name}**")
            st.caption("Administrator" if state.auth.is_admin() else "Staff Viewer")
        if st.button("Log out"):
            auth_service.logout()
            state.reset()
            st.rerun()


def main() -> None:
    settings = _settings()

    if "ui_state" not in st.session_state:
        st.session_state["ui_state"] = UIState()
    state: UIState = st.session_state["ui_state"]

    api = build_api_client(settings, state.auth)
    auth_service = AuthService(api, state.auth)

    if not state.auth.is_authenticated:
        render_notices(state)
        render_login_form(state, auth_service)
        return

    _render_sidebar(state, auth_service)
    render_notices(state)

    if state.page == Page.DASHBOARD:
        render_dashboard_tab(state, DashboardService(api))
    elif state.page == Page.APPOINTMENTS:
        render_appointments_tab(state, AppointmentService(api))
    elif state.page == Page.CLIENTS:
        render_clients_tab(state, ClientService(api))
    elif state.page == Page.WORKERS:
        render_workers_tab(state, WorkerService(api))


if __name__ == "__main__":
    main()
