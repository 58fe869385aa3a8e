from __future__ import annotations

"""Base component class for the dashboard UI.

All pages/components inherit from `BaseComponent` and implement the
`render()` method. Components receive the central UI state and any
services they need through their constructor to keep them decoupled and
testable.
"""

from dataclasses import dataclass

from crm.permissions import Permissions
from ui.state import UIState


@dataclass
class BaseComponent:
    """Base class for all UI components.

    Attributes:
        state: Central UI state (page, filters, dialogs, auth session)
    """

    state: UIState

    @property
    def permissions(self) -> Permissions:
        return Permissions(self.state.auth)

    def render(self) -> None:
        """Render the component.

        Subclasses must override this method to draw Streamlit widgets
        and perform state updates via services.
        """
        raise NotImplementedError("Subclasses must implement render()")
