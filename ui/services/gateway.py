from __future__ import annotations

"""
Shared plumbing for the UI services.

`build_api_client` wires settings and the auth session into an
`ApiClient`. `guarded` runs one API call and turns an `ApiError` into a
message, so components receive `(value, error)` and never see exceptions.
"""

from typing import Callable, Optional, Tuple, TypeVar
import logging

from crm.api_client import ApiClient, ApiError
from crm.config import Settings
from crm.session import AuthSession

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_api_client(settings: Settings, session: AuthSession) -> ApiClient:
    return ApiClient(settings.api_url, session=session, timeout=settings.timeout)


def guarded(call: Callable[[], T], failure: str) -> Tuple[Optional[T], Optional[str]]:
    """Run `call`; on ApiError return (None, message).

    The message prefers a server field error, then the server detail, then
    `failure`.
    """
    try:
        return call(), None
    except ApiError as exc:
        logger.warning("%s: %s", failure, exc.message)
        return None, exc.user_message(failure)


__all__ = ["build_api_client", "guarded"]
