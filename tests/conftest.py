"""
Pytest configuration and shared fixtures for AniKam tests.

Provides a scripted stand-in for ``aiohttp.ClientSession``, a manual clock
for pacing and backoff assertions, and raw Jikan records shaped like the
upstream's responses.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from anikam.cli.common.context import CliContext, set_cli_context


class FakeResponse:
    """Minimal response object for ``async with session.get(...)``."""

    def __init__(
        self,
        status: int = 200,
        body: Any = None,
        reason: str = "OK",
        json_error: Exception | None = None,
    ) -> None:
        self.status = status
        self.reason = reason
        self._body = body
        self._json_error = json_error

    async def json(self, content_type: str | None = None) -> Any:
        if self._json_error is not None:
            raise self._json_error
        return self._body

    async def __aenter__(self) -> FakeResponse:
        return self

    async def __aexit__(self, *exc_info: object) -> bool:
        return False


class _RaisingRequest:
    """Request context manager failing on entry, like a refused connection."""

    def __init__(self, error: BaseException) -> None:
        self._error = error

    async def __aenter__(self) -> FakeResponse:
        raise self._error

    async def __aexit__(self, *exc_info: object) -> bool:
        return False


class FakeSession:
    """Scripted ``aiohttp.ClientSession`` replacement.

    Each request consumes the next queued outcome: a FakeResponse is
    returned, an exception is raised when the request is entered.
    """

    def __init__(self, *outcomes: FakeResponse | BaseException) -> None:
        self.outcomes: list[FakeResponse | BaseException] = list(outcomes)
        self.requests: list[tuple[str, str]] = []
        self.headers: list[dict[str, str] | None] = []
        self.closed = False

    def queue(self, *outcomes: FakeResponse | BaseException) -> None:
        self.outcomes.extend(outcomes)

    def _next(self, method: str, url: str) -> FakeResponse | _RaisingRequest:
        self.requests.append((method, url))
        if not self.outcomes:
            raise AssertionError(f"Unexpected {method} {url}")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            return _RaisingRequest(outcome)
        return outcome

    def get(self, url: str, headers: dict[str, str] | None = None, timeout: Any = None):
        self.headers.append(headers)
        return self._next("GET", url)

    def head(self, url: str, timeout: Any = None):
        return self._next("HEAD", url)

    @property
    def urls(self) -> list[str]:
        return [url for _, url in self.requests]

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    """Manual monotonic clock whose ``sleep`` advances time instantly."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, delay: float) -> None:
        self.sleeps.append(delay)
        self.now += delay
        # Still yield so other tasks interleave as with a real sleep
        await asyncio.sleep(0)


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def response() -> type[FakeResponse]:
    """The FakeResponse class, for building scripted outcomes."""
    return FakeResponse


@pytest.fixture
def session_factory() -> type[FakeSession]:
    return FakeSession


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def reset_cli_context() -> None:
    """Start every test from default CLI options."""
    set_cli_context(CliContext())


@pytest.fixture(autouse=True)
def restore_package_logger() -> Iterator[None]:
    """Undo handler and propagation changes made by setup_structured_logger."""
    logger = logging.getLogger("anikam")
    handlers, propagate, level = list(logger.handlers), logger.propagate, logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.propagate = propagate
    logger.setLevel(level)


ANIME_RECORD: dict[str, Any] = {
    "mal_id": 1,
    "title": "Cowboy Bebop",
    "title_english": "Cowboy Bebop",
    "title_japanese": "カウボーイビバップ",
    "type": "TV",
    "source": "Original",
    "episodes": 26,
    "status": "Finished Airing",
    "airing": False,
    "aired": {
        "from": "1998-04-03T00:00:00+00:00",
        "to": "1999-04-24T00:00:00+00:00",
        "prop": {
            "from": {"day": 3, "month": 4, "year": 1998},
            "to": {"day": 24, "month": 4, "year": 1999},
        },
    },
    "duration": "24 min per ep",
    "rating": "R - 17+ (violence & profanity)",
    "score": 8.75,
    "popularity": 43,
    "synopsis": (
        "Crime is timeless. By the year 2071, humanity has expanded across the "
        "galaxy, filling the surface of other planets with settlements like those "
        "on Earth. These new societies are plagued by murder, drug use, and theft, "
        "and intergalactic outlaws are hunted by a growing number of tough bounty hunters."
    ),
    "year": 1998,
    "images": {
        "jpg": {
            "image_url": "https://cdn.myanimelist.net/images/anime/4/19644.jpg",
            "large_image_url": "https://cdn.myanimelist.net/images/anime/4/19644l.jpg",
        }
    },
    "trailer": {"youtube_id": "qig4KOK2R2g"},
    "producers": [{"mal_id": 23, "name": "Bandai Visual"}],
    "licensors": [
        {"mal_id": 102, "name": "Funimation"},
        {"mal_id": 1, "name": "Amazon Prime Video"},
        {"mal_id": 0, "name": "Unknown"},
    ],
    "studios": [{"mal_id": 14, "name": "Sunrise"}],
    "genres": [
        {"mal_id": 1, "name": "Action"},
        {"mal_id": 46, "name": "Award Winning"},
        {"mal_id": 24, "name": "Sci-Fi"},
    ],
    "explicit_genres": [],
    "themes": [{"mal_id": 50, "name": "Adult Cast"}, {"mal_id": 29, "name": "Space"}],
    "demographics": [],
}

MANGA_RECORD: dict[str, Any] = {
    "mal_id": 2,
    "title": "Berserk",
    "title_english": "Berserk",
    "title_japanese": "ベルセルク",
    "type": "Manga",
    "chapters": None,
    "volumes": None,
    "status": "Publishing",
    "publishing": True,
    "published": {
        "from": "1989-08-25T00:00:00+00:00",
        "to": None,
        "prop": {
            "from": {"day": 25, "month": 8, "year": 1989},
            "to": {"day": None, "month": None, "year": None},
        },
    },
    "score": 9.47,
    "popularity": 1,
    "synopsis": "Guts, a former mercenary now known as the Black Swordsman, is out for revenge.",
    "images": {"jpg": {"image_url": "https://cdn.myanimelist.net/images/manga/1/157897.jpg"}},
    "authors": [{"mal_id": 1868, "name": "Miura, Kentarou"}],
    "serializations": [{"mal_id": 2, "name": "Young Animal"}],
    "genres": [
        {"mal_id": 1, "name": "Action"},
        {"mal_id": 2, "name": "Adventure"},
        {"mal_id": 14, "name": "Horror"},
    ],
    "explicit_genres": [],
    "themes": [{"mal_id": 58, "name": "Gore"}],
    "demographics": [{"mal_id": 42, "name": "Seinen"}],
}


@pytest.fixture
def anime_record() -> dict[str, Any]:
    return copy.deepcopy(ANIME_RECORD)


@pytest.fixture
def manga_record() -> dict[str, Any]:
    return copy.deepcopy(MANGA_RECORD)


@pytest.fixture
def make_page() -> Callable[..., dict[str, Any]]:
    """Build a paginated Jikan response body."""

    def _make_page(
        records: list[dict[str, Any]],
        *,
        page: int = 1,
        has_next_page: bool = False,
    ) -> dict[str, Any]:
        return {
            "pagination": {
                "last_visible_page": page + 1 if has_next_page else page,
                "has_next_page": has_next_page,
                "current_page": page,
                "items": {"count": len(records), "total": 100, "per_page": 25},
            },
            "data": records,
        }

    return _make_page


@pytest.fixture
def make_record(anime_record: dict[str, Any]) -> Callable[..., dict[str, Any]]:
    """Build an anime record with a given id and title."""

    def _make_record(mal_id: int, title: str | None = None, **overrides: Any) -> dict[str, Any]:
        record = copy.deepcopy(anime_record)
        record["mal_id"] = mal_id
        record["title"] = title or f"Anime {mal_id}"
        record["title_english"] = None
        record.update(overrides)
        return record

    return _make_record
