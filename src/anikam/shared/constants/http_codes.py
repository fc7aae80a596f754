"""HTTP Status Code Constants.

This module contains HTTP status code constants for clear and
type-safe handling of API responses.
"""


class HTTPStatusCodes:
    """HTTP status code constants."""

    # 2xx Success
    OK = 200

    # 4xx Client Errors
    BAD_REQUEST = 400
    NOT_FOUND = 404
    TOO_MANY_REQUESTS = 429

    # 5xx Server Errors
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503

    @staticmethod
    def is_success(code: int) -> bool:
        """Check if status code indicates success (2xx)."""
        return 200 <= code < 300

    @staticmethod
    def is_rate_limited(code: int) -> bool:
        """Check if status code is the upstream's rate limit answer."""
        return code == HTTPStatusCodes.TOO_MANY_REQUESTS
