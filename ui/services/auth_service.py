from __future__ import annotations

"""Login/logout for the dashboard session."""

from typing import Tuple

from crm.api_client import ApiClient, ApiError
from crm.session import AuthSession


class AuthService:
    """Wraps `AuthSession.login`/`logout` with UI-friendly results."""

    def __init__(self, api: ApiClient, session: AuthSession) -> None:
        self.api = api
        self.session = session

    def login(self, username: str, password: str) -> Tuple[bool, str]:
        if not username.strip() or not password:
            return False, "Username and password are required"
        try:
            user = self.session.login(self.api, username.strip(), password)
        except ApiError as exc:
            return False, exc.user_message("Login failed")
        return True, f"Welcome, {user.display_name}"

    def logout(self) -> None:
        self.session.logout()
