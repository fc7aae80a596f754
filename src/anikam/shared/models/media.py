"""Unified media model.

Every upstream record, anime or manga, is normalized into one
``UnifiedMedia`` before it reaches a feed or the CLI. Instances are
frozen; the adapter and the bundled fallback dataset are the only
producers.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MediaType(str, Enum):
    """Type discriminant of a normalized record."""

    ANIME = "anime"
    MANGA = "manga"


class MediaStatus(str, Enum):
    """Lifecycle status of a normalized record."""

    AIRING = "airing"
    COMPLETED = "completed"
    UPCOMING = "upcoming"
    HIATUS = "hiatus"


class Genre(str, Enum):
    """Genres a normalized record may carry."""

    ACTION = "Action"
    ADVENTURE = "Adventure"
    COMEDY = "Comedy"
    DRAMA = "Drama"
    FANTASY = "Fantasy"
    HORROR = "Horror"
    ROMANCE = "Romance"
    SCI_FI = "Sci-Fi"
    SLICE_OF_LIFE = "Slice of Life"
    SPORTS = "Sports"
    SUPERNATURAL = "Supernatural"
    THRILLER = "Thriller"
    MYSTERY = "Mystery"
    HISTORICAL = "Historical"
    PSYCHOLOGICAL = "Psychological"
    MECHA = "Mecha"
    MUSIC = "Music"
    SCHOOL = "School"


class UnifiedMedia(BaseModel):
    """Normalized anime or manga record.

    Type-specific fields are disjoint: anime records fill ``episodes``,
    ``seasons``, ``duration`` and ``trailer``; manga records fill
    ``chapters`` and ``volumes``. The side that does not apply stays
    ``None`` so that "not applicable" is distinguishable from zero.

    Attributes:
        id: MyAnimeList id as a string, never empty
        type: Which adapter produced the record
        genres: Allow-listed genres, at most 6
        platforms: Where to watch or read, never empty
        tags: Themes, demographics and source tag, at most 8

    Example:
        >>> media = UnifiedMedia(
        ...     id="16498",
        ...     title="Attack on Titan",
        ...     description="...",
        ...     synopsis="...",
        ...     type=MediaType.ANIME,
        ...     status=MediaStatus.COMPLETED,
        ...     release_year=2013,
        ...     platforms=["Crunchyroll"],
        ...     age_rating="R",
        ... )
        >>> media.type
        <MediaType.ANIME: 'anime'>
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="MyAnimeList id")
    title: str = Field(..., description="Default title")
    title_english: str | None = Field(None, description="English title")
    title_japanese: str | None = Field(None, description="Japanese title")
    description: str = Field(..., description="Short description")
    synopsis: str = Field(..., description="Full synopsis")
    type: MediaType = Field(..., description="Media type discriminant")
    status: MediaStatus = Field(..., description="Lifecycle status")
    genres: tuple[Genre, ...] = Field(default=(), max_length=6)
    release_year: int = Field(..., description="First release year")
    end_year: int | None = Field(None, description="Last release year")

    # Anime only
    episodes: int | None = None
    seasons: int | None = None
    duration: int | None = Field(None, description="Episode length in minutes")
    trailer: str | None = Field(None, description="YouTube video id")

    # Manga only
    chapters: int | None = None
    volumes: int | None = None

    rating: float = Field(0.0, description="Score on a 0-10 scale")
    popularity: int = Field(0, description="Popularity rank")
    cover_image: str = ""
    banner_image: str = ""
    studio: str | None = None
    author: str | None = None
    director: str | None = None
    source: str | None = None
    platforms: tuple[str, ...] = Field(..., min_length=1)
    tags: tuple[str, ...] = Field(default=(), max_length=8)
    age_rating: str = Field(..., description="Short age rating code")
    mal_score: float | None = None

    @field_validator("id")
    @classmethod
    def _id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("id must not be blank")
        return value
