"""UI components package for the CRM dashboard.

Each page defines a class inheriting from `BaseComponent` with a
`render()` method, plus a `render_<page>_tab(state, service)` function
that `ui.app` dispatches to. Forms and small shared widgets live beside
them.
"""

from .base_component import BaseComponent  # re-export for convenience

__all__ = [
    "BaseComponent",
]
