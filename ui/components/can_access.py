from __future__ import annotations

"""Permission gate for action buttons.

    gate(state.auth, "admin", lambda: st.button("Delete"), fallback=lambda: st.caption("Admins only"))

Detail views that only need a yes/no use `BaseComponent.permissions`.
"""

from typing import Callable, Optional

from crm.permissions import Permission, can_access
from crm.session import AuthSession


def gate(
    session: Optional[AuthSession],
    permission: Permission | str,
    render: Callable[[], object],
    fallback: Optional[Callable[[], object]] = None,
) -> bool:
    """Call `render` when allowed, else `fallback` (if any). Returns whether access was granted."""
    if can_access(session, permission):
        render()
        return True
    if fallback is not None:
        fallback()
    return False
