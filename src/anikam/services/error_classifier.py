"""Error classification and user-facing messages.

Downstream logic switches on ``FetchErrorKind`` rather than on message text.
Raw transport exceptions that have not been wrapped yet are classified by
type.
"""

from __future__ import annotations

import asyncio
import json

import aiohttp

from anikam.services.network_monitor import NetworkStatus
from anikam.shared.constants import UserMessages
from anikam.shared.errors import AniKamError, FetchErrorKind, UpstreamError


def classify_exception(error: BaseException) -> FetchErrorKind:
    """Map a raw exception raised during one HTTP attempt to a FetchErrorKind.

    Timeouts are checked first: aiohttp's ServerTimeoutError is both a
    connection error and a timeout.
    """
    if isinstance(error, UpstreamError):
        return error.kind
    if isinstance(error, asyncio.TimeoutError):
        return FetchErrorKind.TIMEOUT
    # ContentTypeError is a ClientResponseError raised by response.json()
    if isinstance(error, (aiohttp.ContentTypeError, json.JSONDecodeError, ValueError)):
        return FetchErrorKind.PARSE_ERROR
    if isinstance(error, aiohttp.ClientResponseError):
        return FetchErrorKind.HTTP_ERROR
    return FetchErrorKind.NETWORK_FAILURE


def is_network_error(error: BaseException) -> bool:
    """Return whether ``error`` is a connectivity failure rather than an API answer."""
    if isinstance(error, UpstreamError):
        return error.is_network
    if isinstance(error, AniKamError):
        return False
    return isinstance(
        error,
        (aiohttp.ClientConnectionError, asyncio.TimeoutError, OSError),
    )


def is_rate_limit_error(error: BaseException) -> bool:
    if isinstance(error, UpstreamError):
        return error.is_rate_limited
    if isinstance(error, aiohttp.ClientResponseError):
        return error.status == 429
    return False


def get_user_message(error: BaseException, status: NetworkStatus | None = None) -> str:
    """Translate ``error`` into the message shown to end users.

    Network errors get the offline or the unreachable message depending on
    ``status`` (unknown status counts as online). Every other error keeps
    its own message.

    Args:
        error: The failure to describe
        status: Current network status, if a monitor is available

    Returns:
        User-facing message
    """
    if is_network_error(error):
        if status is not None and not status.is_online:
            return UserMessages.OFFLINE
        return UserMessages.UNREACHABLE

    if isinstance(error, AniKamError):
        return error.message
    return str(error) or UserMessages.UNKNOWN


def should_use_fallback(
    error: BaseException,
    has_existing_data: bool,
    query: str | None = None,
) -> bool:
    """Decide whether the static fallback catalog may replace a failed result.

    Fallback is allowed when the error is network-classified, when nothing
    has been loaded yet and the query is empty, or when the upstream rate
    limited a first load. It is never allowed once data is held, so a failed
    "load more" surfaces its error instead of mixing in fabricated records.

    Args:
        error: The failure raised by the client
        has_existing_data: Whether the caller already holds items
        query: The search text, if any

    Returns:
        True when fallback data should be shown
    """
    if has_existing_data:
        return False
    if is_network_error(error):
        return True
    if not query:
        return True
    return is_rate_limit_error(error)
