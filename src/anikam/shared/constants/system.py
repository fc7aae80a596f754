"""Base system constants."""

# Base time units
BASE_SECOND = 1
BASE_MINUTE = 60 * BASE_SECOND


class Application:
    """Application metadata constants."""

    NAME = "AniKam"
    VERSION = "0.1.0"
    DESCRIPTION = "Anime and manga catalog client for the Jikan API"
