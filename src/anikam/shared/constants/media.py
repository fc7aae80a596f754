"""
Media Normalization Constants

Translation tables and limits used when turning upstream Jikan records
into UnifiedMedia records.
"""

from typing import ClassVar


class GenreTable:
    """Upstream genre name to internal genre name.

    Names missing from the table are dropped during normalization.
    """

    MAPPING: ClassVar[dict[str, str]] = {
        "Action": "Action",
        "Adventure": "Adventure",
        "Comedy": "Comedy",
        "Drama": "Drama",
        "Fantasy": "Fantasy",
        "Horror": "Horror",
        "Romance": "Romance",
        "Sci-Fi": "Sci-Fi",
        "Science Fiction": "Sci-Fi",
        "Slice of Life": "Slice of Life",
        "Sports": "Sports",
        "Supernatural": "Supernatural",
        "Thriller": "Thriller",
        "Mystery": "Mystery",
        "Historical": "Historical",
        "Psychological": "Psychological",
        "Mecha": "Mecha",
        "Music": "Music",
        "School": "School",
    }


class PlatformTable:
    """Licensor name aliases. Unknown names pass through unchanged."""

    ALIASES: ClassVar[dict[str, str]] = {
        "Funimation": "Funimation",
        "Crunchyroll": "Crunchyroll",
        "Netflix": "Netflix",
        "Hulu": "Hulu",
        "Adult Swim": "Adult Swim",
        "Disney+": "Disney+",
        "Amazon Prime Video": "Prime Video",
        "VIZ Media": "VIZ",
        "Sentai Filmworks": "Sentai",
    }

    EXCLUDED = "Unknown"
    DEFAULT_ANIME: tuple[str, ...] = ("Crunchyroll", "MyAnimeList")
    DEFAULT_MANGA: tuple[str, ...] = ("MyAnimeList", "MangaPlus", "Viz Media")


class AgeRatingTable:
    """Long-form upstream rating to short code."""

    MAPPING: ClassVar[dict[str, str]] = {
        "G - All Ages": "G",
        "PG - Children": "PG",
        "PG-13 - Teens 13 or older": "PG-13",
        "R - 17+ (violence & profanity)": "R",
        "R+ - Mild Nudity": "R+",
        "Rx - Hentai": "X",
    }

    NOT_RATED = "Not Rated"


class StatusText:
    """Upstream free-text status strings, lower-cased."""

    COMPLETED: tuple[str, ...] = ("finished airing", "complete", "finished")
    UPCOMING: tuple[str, ...] = ("not yet aired", "upcoming")
    HIATUS: tuple[str, ...] = ("on hiatus", "hiatus")
    DISCONTINUED: tuple[str, ...] = ("discontinued",)


class MediaLimits:
    """Caps applied to normalized list fields."""

    MAX_GENRES = 6
    MAX_PLATFORMS = 5
    MAX_TAGS = 8
    DESCRIPTION_LENGTH = 200


class MediaText:
    """Placeholder text for normalized records."""

    NO_DESCRIPTION = "No description available."
    NO_SYNOPSIS = "No synopsis available."
    ELLIPSIS = "..."
    SOURCE_UNKNOWN = "Unknown"
    SOURCE_TAG = "Based on {source}"
    MANGA_SOURCE = "Manga"


class QueryValues:
    """Values accepted by the upstream for enumerated query parameters."""

    ANIME_TYPES: frozenset[str] = frozenset(
        {"tv", "movie", "ova", "special", "ona", "music"}
    )
    MANGA_TYPES: frozenset[str] = frozenset(
        {"manga", "novel", "lightnovel", "oneshot", "doujin", "manhwa", "manhua"}
    )
    ANIME_STATUS: frozenset[str] = frozenset({"airing", "complete", "upcoming"})
    MANGA_STATUS: frozenset[str] = frozenset(
        {"publishing", "complete", "hiatus", "discontinued", "upcoming"}
    )
    ANIME_RATINGS: frozenset[str] = frozenset({"g", "pg", "pg13", "r17", "r", "rx"})
    ANIME_ORDER_BY: frozenset[str] = frozenset(
        {
            "mal_id",
            "title",
            "start_date",
            "end_date",
            "episodes",
            "score",
            "scored_by",
            "rank",
            "popularity",
            "members",
            "favorites",
        }
    )
    MANGA_ORDER_BY: frozenset[str] = frozenset(
        {
            "mal_id",
            "title",
            "start_date",
            "end_date",
            "chapters",
            "volumes",
            "score",
            "scored_by",
            "rank",
            "popularity",
            "members",
            "favorites",
        }
    )
    SORT: frozenset[str] = frozenset({"desc", "asc"})
    TOP_ANIME_FILTERS: frozenset[str] = frozenset(
        {"airing", "upcoming", "bypopularity", "favorite"}
    )
    TOP_MANGA_FILTERS: frozenset[str] = frozenset(
        {"publishing", "upcoming", "bypopularity", "favorite"}
    )
    SEASONS: frozenset[str] = frozenset({"winter", "spring", "summer", "fall"})
