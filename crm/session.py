"""
Process-wide authentication state.

`AuthSession` holds the logged-in user and the bearer tokens. It is the
token holder the `ApiClient` reads on every request and updates on
refresh. Only `login`, `logout` and the client's refresh path mutate it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional
import logging

from .api_client import ApiError
from .models import AuthTokens, User

logger = logging.getLogger(__name__)


class Role(str, Enum):
    ADMIN = "admin"
    STAFF_VIEWER = "staff_viewer"


def resolve_role(user: Optional[User]) -> Optional[Role]:
    """Map a user record to a dashboard role.

    An explicit `role` wins ("staff-viewer" and "staff_viewer" both accepted).
    Otherwise superusers are admins and every other account is a staff viewer.
    """
    if user is None:
        return None
    if user.role:
        normalized = user.role.strip().lower().replace("-", "_")
        if normalized == Role.ADMIN.value:
            return Role.ADMIN
        if normalized == Role.STAFF_VIEWER.value:
            return Role.STAFF_VIEWER
        logger.warning("Unknown role %r for user %s; treating as staff viewer", user.role, user.username)
        return Role.STAFF_VIEWER
    return Role.ADMIN if user.is_superuser else Role.STAFF_VIEWER


@dataclass
class AuthSession:
    """Current user and tokens.

    Attributes:
        user: The logged-in user, or None
        tokens: Access/refresh pair, or None
    """

    user: Optional[User] = None
    tokens: Optional[AuthTokens] = None

    # --- Token holder protocol used by ApiClient ---
    @property
    def access_token(self) -> Optional[str]:
        return self.tokens.access if self.tokens else None

    @property
    def refresh_token(self) -> Optional[str]:
        return self.tokens.refresh if self.tokens else None

    def update_tokens(self, access: str, refresh: Optional[str] = None) -> None:
        current_refresh = self.tokens.refresh if self.tokens else None
        self.tokens = AuthTokens(access=access, refresh=refresh or current_refresh)

    def clear(self) -> None:
        self.user = None
        self.tokens = None

    # --- Lifecycle ---
    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.tokens is not None

    def login(self, client: Any, username: str, password: str) -> User:
        """Authenticate through `client.login` and store the result.

        Raises `ApiError` on rejection; the session is left unchanged then.
        """
        payload = client.login(username, password)
        if not isinstance(payload, Mapping):
            raise ApiError("Login response was not a JSON object")
        access = payload.get("access")
        if not access:
            raise ApiError("Login response did not include an access token")
        user_data = payload.get("user")
        if not isinstance(user_data, Mapping):
            user_data = {"id": 0, "username": username}
        self.user = User.from_dict(user_data)
        self.tokens = AuthTokens(access=str(access), refresh=payload.get("refresh"))
        logger.info("Logged in as %s (%s)", self.user.username, self.role.value if self.role else "-")
        return self.user

    def logout(self) -> None:
        if self.user is not None:
            logger.info("Logged out %s", self.user.username)
        self.clear()

    # --- Derived permissions ---
    @property
    def role(self) -> Optional[Role]:
        return resolve_role(self.user) if self.is_authenticated else None

    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def is_staff_viewer(self) -> bool:
        return self.role == Role.STAFF_VIEWER


__all__ = ["Role", "resolve_role", "AuthSession"]
