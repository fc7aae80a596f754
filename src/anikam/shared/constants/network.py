"""
Network Configuration Constants

Constants for the Jikan v4 API client: pacing, timeouts, retry backoff,
endpoint paths and connectivity probing.
"""

from .system import BASE_SECOND


class JikanAPIConfig:
    """Jikan API client constants.

    The upstream allows 3 requests per second and 60 per minute; one
    request per second keeps a single client comfortably below both.
    """

    BASE_URL = "https://api.jikan.moe/v4"
    USER_AGENT = "AniKam/1.0"
    ACCEPT = "application/json"

    # Pacing
    MIN_REQUEST_INTERVAL = 1.0 * BASE_SECOND

    # Per-attempt timeout
    REQUEST_TIMEOUT = 10 * BASE_SECOND

    # Retry settings
    RETRY_ATTEMPTS = 3
    RATE_LIMIT_BACKOFF_BASE = 2.0 * BASE_SECOND  # doubled per attempt
    RATE_LIMIT_BACKOFF_MAX = 15.0 * BASE_SECOND
    HTTP_ERROR_BACKOFF = 1.0 * BASE_SECOND  # multiplied by attempt number
    NETWORK_ERROR_BACKOFF = 3.0 * BASE_SECOND  # multiplied by attempt number

    # Default page size used by feeds
    DEFAULT_PAGE_LIMIT = 24


class JikanEndpoints:
    """Endpoint paths relative to JikanAPIConfig.BASE_URL."""

    ANIME = "/anime"
    MANGA = "/manga"
    TOP_ANIME = "/top/anime"
    TOP_MANGA = "/top/manga"
    SEASONS_NOW = "/seasons/now"
    RANDOM_ANIME = "/random/anime"
    RANDOM_MANGA = "/random/manga"

    @staticmethod
    def anime(anime_id: int) -> str:
        return f"{JikanEndpoints.ANIME}/{anime_id}"

    @staticmethod
    def manga(manga_id: int) -> str:
        return f"{JikanEndpoints.MANGA}/{manga_id}"

    @staticmethod
    def anime_characters(anime_id: int) -> str:
        return f"{JikanEndpoints.ANIME}/{anime_id}/characters"

    @staticmethod
    def anime_videos(anime_id: int) -> str:
        return f"{JikanEndpoints.ANIME}/{anime_id}/videos"

    @staticmethod
    def season(year: int, season: str) -> str:
        return f"/seasons/{year}/{season}"


class NetworkMonitorConfig:
    """Connectivity probe constants."""

    PROBE_URL = "https://httpbin.org/bytes/1"
    PROBE_INTERVAL = 30 * BASE_SECOND
    PROBE_TIMEOUT = 5 * BASE_SECOND
    SLOW_CONNECTION_THRESHOLD = 3 * BASE_SECOND


class UserMessages:
    """Messages shown to end users when the upstream cannot be reached."""

    OFFLINE = "You appear to be offline. Please check your internet connection."
    UNREACHABLE = (
        "Unable to connect to the anime database. This might be due to a slow "
        "connection or server issues. Please try again."
    )
    UNKNOWN = "Unknown error"
