"""Normalization of raw Jikan records into UnifiedMedia.

Pure functions: nothing here performs I/O or mutates its input. Anime and
manga records share one target shape but fill their type-specific fields
disjointly.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Iterable, Mapping, Sequence

from anikam.shared.constants import (
    AgeRatingTable,
    GenreTable,
    MediaLimits,
    MediaText,
    PlatformTable,
    StatusText,
)
from anikam.shared.errors import create_metadata_error
from anikam.shared.models import Genre, MediaStatus, MediaType, UnifiedMedia

logger = logging.getLogger(__name__)

RawRecord = Mapping[str, Any]

_HOURS_PATTERN = re.compile(r"(\d+)\s*hr")
_MINUTES_PATTERN = re.compile(r"(\d+)\s*min")

_MANGA_MARKERS = ("chapters", "volumes", "publishing")


def map_status(status_text: str | None, running: bool) -> MediaStatus:
    """Map upstream status text to a MediaStatus.

    "Currently Airing" and "Publishing" only count as airing when the
    upstream's airing/publishing flag agrees; otherwise the record is
    treated as completed.

    Args:
        status_text: Free-text upstream status (case-insensitive)
        running: The upstream ``airing`` or ``publishing`` flag
    """
    text = (status_text or "").strip().lower()
    if text in StatusText.COMPLETED or text in StatusText.DISCONTINUED:
        return MediaStatus.COMPLETED
    if text in StatusText.UPCOMING:
        return MediaStatus.UPCOMING
    if text in StatusText.HIATUS:
        return MediaStatus.HIATUS
    # Running statuses and unknown text both defer to the flag
    return MediaStatus.AIRING if running else MediaStatus.COMPLETED


def map_genres(entries: Iterable[RawRecord]) -> tuple[Genre, ...]:
    """Translate genre entries through the allow-list, dropping unknown names."""
    genres: list[Genre] = []
    for entry in entries:
        name = GenreTable.MAPPING.get(entry.get("name") or "")
        if name is None:
            continue
        genre = Genre(name)
        if genre not in genres:
            genres.append(genre)
        if len(genres) == MediaLimits.MAX_GENRES:
            break
    return tuple(genres)


def parse_duration(duration: str | None) -> int | None:
    """Parse "1 hr 30 min per ep" style text into total minutes.

    Returns:
        Total minutes, or None when neither an hour nor a minute part is present
    """
    if not duration:
        return None

    hours = _HOURS_PATTERN.search(duration)
    minutes = _MINUTES_PATTERN.search(duration)
    if hours is None and minutes is None:
        return None

    total = 0
    if hours:
        total += int(hours.group(1)) * 60
    if minutes:
        total += int(minutes.group(1))
    return total


def map_platforms(licensors: Iterable[RawRecord]) -> tuple[str, ...]:
    """Translate licensor names into platform names.

    Unknown names pass through; a result that would be empty becomes the
    default platform list.
    """
    platforms: list[str] = []
    for licensor in licensors:
        name = licensor.get("name")
        if not name:
            continue
        platform = PlatformTable.ALIASES.get(name, name)
        if platform == PlatformTable.EXCLUDED:
            continue
        platforms.append(platform)

    platforms = platforms[: MediaLimits.MAX_PLATFORMS]
    return tuple(platforms) if platforms else PlatformTable.DEFAULT_ANIME


def map_age_rating(rating: str | None) -> str:
    """Shorten an upstream age rating ("PG-13 - Teens 13 or older" -> "PG-13")."""
    if not rating:
        return AgeRatingTable.NOT_RATED
    mapped = AgeRatingTable.MAPPING.get(rating)
    if mapped:
        return mapped
    tokens = rating.split()
    return tokens[0] if tokens else AgeRatingTable.NOT_RATED


def extract_tags(
    themes: Iterable[RawRecord],
    demographics: Iterable[RawRecord],
    source: str | None,
) -> tuple[str, ...]:
    tags = [entry["name"] for entry in themes if entry.get("name")]
    tags.extend(entry["name"] for entry in demographics if entry.get("name"))
    if source and source != MediaText.SOURCE_UNKNOWN:
        tags.append(MediaText.SOURCE_TAG.format(source=source))
    return tuple(tags[: MediaLimits.MAX_TAGS])


def _list(record: RawRecord, key: str) -> list[RawRecord]:
    value = record.get(key)
    return list(value) if isinstance(value, list) else []


def _first_name(record: RawRecord, key: str) -> str | None:
    for entry in _list(record, key):
        if entry.get("name"):
            return entry["name"]
    return None


def _prop_year(span: Any, end: str) -> int | None:
    if not isinstance(span, Mapping):
        return None
    prop = span.get("prop") or {}
    point = prop.get(end) or {}
    year = point.get("year")
    return year if isinstance(year, int) and year > 0 else None


def _image(record: RawRecord) -> str:
    jpg = (record.get("images") or {}).get("jpg") or {}
    return jpg.get("large_image_url") or jpg.get("image_url") or ""


def _description(synopsis: str | None) -> str:
    if not synopsis:
        return MediaText.NO_DESCRIPTION
    return synopsis[: MediaLimits.DESCRIPTION_LENGTH] + MediaText.ELLIPSIS


def _record_id(record: RawRecord, operation: str) -> str:
    mal_id = record.get("mal_id")
    if isinstance(mal_id, bool) or not isinstance(mal_id, (int, str)) or not str(mal_id).strip():
        raise create_metadata_error(
            "Upstream record has no usable mal_id",
            field="mal_id",
            operation=operation,
        )
    return str(mal_id)


def _positive(value: Any) -> int | None:
    # Upstream uses 0 and null interchangeably for "unknown"
    return value if isinstance(value, int) and value > 0 else None


def _common_fields(record: RawRecord, operation: str) -> dict[str, Any]:
    title = record.get("title") or ""
    synopsis = record.get("synopsis")
    image = _image(record)
    score = record.get("score")
    return {
        "id": _record_id(record, operation),
        "title": title,
        "title_english": record.get("title_english") or title,
        "title_japanese": record.get("title_japanese") or None,
        "description": _description(synopsis),
        "synopsis": synopsis or MediaText.NO_SYNOPSIS,
        "genres": map_genres(_list(record, "genres") + _list(record, "explicit_genres")),
        "rating": float(score) if score else 0.0,
        "popularity": record.get("popularity") or 0,
        "cover_image": image,
        "banner_image": image,
        "mal_score": float(score) if score else None,
    }


def adapt_anime(record: RawRecord) -> UnifiedMedia:
    """Normalize one anime-shaped record.

    Raises:
        DomainError: INVALID_METADATA when the record has no mal_id
    """
    fields = _common_fields(record, "adapt_anime")
    aired = record.get("aired")
    source = record.get("source") or None
    trailer = record.get("trailer") or {}

    return UnifiedMedia(
        **fields,
        type=MediaType.ANIME,
        status=map_status(record.get("status"), bool(record.get("airing"))),
        release_year=_prop_year(aired, "from") or record.get("year") or date.today().year,
        end_year=_prop_year(aired, "to"),
        episodes=_positive(record.get("episodes")),
        seasons=None,
        duration=parse_duration(record.get("duration")),
        trailer=trailer.get("youtube_id") or None,
        studio=_first_name(record, "studios"),
        author=_first_name(record, "producers"),
        source=source,
        platforms=map_platforms(_list(record, "licensors")),
        tags=extract_tags(_list(record, "themes"), _list(record, "demographics"), source),
        age_rating=map_age_rating(record.get("rating")),
    )


def adapt_manga(record: RawRecord) -> UnifiedMedia:
    """Normalize one manga-shaped record.

    Raises:
        DomainError: INVALID_METADATA when the record has no mal_id
    """
    fields = _common_fields(record, "adapt_manga")
    published = record.get("published")

    return UnifiedMedia(
        **fields,
        type=MediaType.MANGA,
        status=map_status(record.get("status"), bool(record.get("publishing"))),
        release_year=_prop_year(published, "from") or date.today().year,
        end_year=_prop_year(published, "to"),
        chapters=_positive(record.get("chapters")),
        volumes=_positive(record.get("volumes")),
        studio=_first_name(record, "serializations"),
        author=_first_name(record, "authors"),
        source=None,
        platforms=PlatformTable.DEFAULT_MANGA,
        tags=extract_tags(
            _list(record, "themes"),
            _list(record, "demographics"),
            MediaText.MANGA_SOURCE,
        ),
        age_rating=AgeRatingTable.NOT_RATED,
    )


def _dedupe(items: Iterable[UnifiedMedia]) -> list[UnifiedMedia]:
    seen: set[tuple[MediaType, str]] = set()
    unique: list[UnifiedMedia] = []
    for item in items:
        key = (item.type, item.id)
        if key in seen:
            logger.debug("Dropping duplicate %s record %s", item.type.value, item.id)
            continue
        seen.add(key)
        unique.append(item)
    return unique


def adapt_anime_list(records: Sequence[RawRecord]) -> list[UnifiedMedia]:
    return _dedupe(adapt_anime(record) for record in records)


def adapt_manga_list(records: Sequence[RawRecord]) -> list[UnifiedMedia]:
    return _dedupe(adapt_manga(record) for record in records)


def looks_like_manga(record: RawRecord) -> bool:
    """Structural check: manga records carry chapters, volumes or publishing."""
    return any(marker in record for marker in _MANGA_MARKERS)


def adapt_mixed(
    records: Sequence[RawRecord],
    media_type: MediaType | str | None = None,
) -> list[UnifiedMedia]:
    """Normalize records of either shape.

    When the caller knows which endpoint produced the records it should
    pass ``media_type``; otherwise each record is dispatched by
    :func:`looks_like_manga`.
    """
    if media_type is not None:
        if MediaType(media_type) is MediaType.MANGA:
            return adapt_manga_list(records)
        return adapt_anime_list(records)

    return _dedupe(
        adapt_manga(record) if looks_like_manga(record) else adapt_anime(record)
        for record in records
    )
