from __future__ import annotations

"""
Typed UI state models for the Streamlit dashboard.

Everything here is ephemeral view state kept in `st.session_state`:
which page is shown, the filter inputs of each list, which record is open
in detail view and which dialog is open. Fetched records are never stored
here; pages re-fetch on every rerun, so navigating away discards them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from crm.filters import ALL, DateFacet
from crm.session import AuthSession


class Page(str, Enum):
    DASHBOARD = "Dashboard"
    APPOINTMENTS = "Appointments"
    CLIENTS = "Clients"
    WORKERS = "Service Workers"


class Dialog(str, Enum):
    NONE = ""
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    COMPLETE = "complete"
    CANCEL = "cancel"


@dataclass
class ListViewState:
    """Filters and navigation for one entity page.

    - search: free-text filter applied client-side
    - status: server-side status facet (``all`` disables it)
    - selected_id: record shown in detail view, or None for the list
    - dialog: which dialog is open on this page
    """

    search: str = ""
    status: str = ALL
    selected_id: Optional[int] = None
    dialog: Dialog = Dialog.NONE

    def open_detail(self, record_id: int) -> None:
        self.selected_id = int(record_id)
        self.dialog = Dialog.NONE

    def back_to_list(self) -> None:
        self.selected_id = None
        self.dialog = Dialog.NONE

    def open_dialog(self, dialog: Dialog) -> None:
        self.dialog = dialog

    def close_dialog(self) -> None:
        self.dialog = Dialog.NONE


@dataclass
class AppointmentsViewState(ListViewState):
    date_facet: str = DateFacet.ALL.value


@dataclass
class UIState:
    """Aggregate UI state for one browser session."""

    page: Page = Page.DASHBOARD
    auth: AuthSession = field(default_factory=AuthSession)
    clients: ListViewState = field(default_factory=ListViewState)
    workers: ListViewState = field(default_factory=ListViewState)
    appointments: AppointmentsViewState = field(default_factory=AppointmentsViewState)
    # (level, message) pairs shown once at the top of the next render
    notices: List[Tuple[str, str]] = field(default_factory=list)

    def navigate(self, page: Page) -> None:
        """Switch page and drop any open detail/dialog state."""
        if page != self.page:
            for view in (self.clients, self.workers, self.appointments):
                view.back_to_list()
        self.page = page

    def notify(self, message: str, level: str = "info") -> None:
        self.notices.append((level, message))

    def notify_result(self, ok: bool, message: str) -> None:
        self.notify(message, "success" if ok else "error")

    def drain_notices(self) -> List[Tuple[str, str]]:
        out, self.notices = self.notices, []
        return out

    def reset(self) -> None:
        """Forget all view state, e.g. after logout. The auth session is kept."""
        self.page = Page.DASHBOARD
        self.clients = ListViewState()
        self.workers = ListViewState()
        self.appointments = AppointmentsViewState()
        self.notices = []


__all__ = ["Page", "Dialog", "ListViewState", "AppointmentsViewState", "UIState"]
