"""Jikan v4 API client.

Typed request builders over the resilient fetcher. Every call builds a
canonical query string, serves repeated queries from the response cache and
sends cache misses through the request scheduler so that the upstream's
rate limit is respected. Errors are not caught here.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Mapping
from urllib.parse import urlencode

from pydantic import ValidationError

from anikam.services.request_scheduler import RequestScheduler
from anikam.services.resilient_fetcher import ResilientFetcher
from anikam.services.response_cache import ResponseCache
from anikam.shared.constants import JikanEndpoints, QueryValues
from anikam.shared.errors import (
    FetchErrorKind,
    create_upstream_error,
    create_validation_error,
)
from anikam.shared.models import JikanPage, MediaType, Pagination

logger = logging.getLogger(__name__)

_Shape = Literal["list", "object", "any"]


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(params: Mapping[str, Any]) -> str:
    """Serialize query parameters into a canonical, URL-encoded string.

    ``None`` values are omitted, booleans become ``true``/``false`` and keys
    are sorted, so the same parameters always produce the same string.

    Example:
        >>> build_query({"page": 2, "q": "one piece", "sfw": True, "type": None})
        'page=2&q=one+piece&sfw=true'
    """
    items = sorted(
        (key, _stringify(value)) for key, value in params.items() if value is not None
    )
    return urlencode(items)


def build_endpoint(path: str, params: Mapping[str, Any] | None = None) -> str:
    """Join ``path`` and its query string; the result doubles as the cache key."""
    query = build_query(params or {})
    return f"{path}?{query}" if query else path


def _check_choice(
    name: str,
    value: str | None,
    allowed: frozenset[str],
    operation: str,
) -> None:
    if value is not None and value not in allowed:
        raise create_validation_error(
            f"Invalid {name} '{value}'. Expected one of: {', '.join(sorted(allowed))}",
            field=name,
            operation=operation,
        )


def _check_positive(name: str, value: int | None, operation: str) -> None:
    if value is not None and value < 1:
        raise create_validation_error(
            f"{name} must be a positive integer, got {value}",
            field=name,
            operation=operation,
        )


class JikanClient:
    """Stateless typed surface over the Jikan v4 API.

    Paginated operations return a :class:`JikanPage` with the raw records and
    the upstream pagination block. By-id and random operations return the
    raw ``data`` member of the response.

    Args:
        fetcher: Performs the HTTP exchange with retries
        scheduler: Serializes and paces outbound requests
        cache: Response cache; ``None`` disables caching
    """

    def __init__(
        self,
        fetcher: ResilientFetcher,
        scheduler: RequestScheduler,
        cache: ResponseCache | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.scheduler = scheduler
        self.cache = cache

    async def _request(self, endpoint: str, shape: _Shape) -> dict[str, Any]:
        if self.cache is not None:
            cached = self.cache.get(endpoint)
            if cached is not None:
                logger.debug("Cache hit for: %s", endpoint)
                return cached

        body = await self.scheduler.enqueue(lambda: self.fetcher.fetch_json(endpoint))
        self._check_envelope(body, endpoint, shape)

        if self.cache is not None:
            self.cache.set(endpoint, body)
        return body

    @staticmethod
    def _check_envelope(body: Any, endpoint: str, shape: _Shape) -> None:
        if not isinstance(body, dict) or "data" not in body:
            raise create_upstream_error(
                FetchErrorKind.PARSE_ERROR,
                "Unexpected Jikan response: missing 'data' member",
                endpoint,
            )
        data = body["data"]
        if (shape == "list" and not isinstance(data, list)) or (
            shape == "object" and not isinstance(data, dict)
        ):
            raise create_upstream_error(
                FetchErrorKind.PARSE_ERROR,
                f"Unexpected Jikan response: 'data' is not a {shape}",
                endpoint,
            )

    async def _page(
        self,
        path: str,
        params: Mapping[str, Any],
        media_type: MediaType,
    ) -> JikanPage:
        endpoint = build_endpoint(path, params)
        body = await self._request(endpoint, "list")

        pagination = None
        if body.get("pagination") is not None:
            try:
                pagination = Pagination.model_validate(body["pagination"])
            except ValidationError as e:
                raise create_upstream_error(
                    FetchErrorKind.PARSE_ERROR,
                    "Unexpected Jikan response: malformed 'pagination' member",
                    endpoint,
                    original_error=e,
                ) from e

        return JikanPage(data=body["data"], pagination=pagination, media_type=media_type)

    async def _data(self, path: str, shape: _Shape = "object") -> Any:
        body = await self._request(build_endpoint(path), shape)
        return body["data"]

    # Anime

    async def search_anime(
        self,
        *,
        q: str | None = None,
        type: str | None = None,
        score: float | None = None,
        min_score: float | None = None,
        max_score: float | None = None,
        status: str | None = None,
        rating: str | None = None,
        sfw: bool | None = None,
        genres: str | None = None,
        order_by: str | None = None,
        sort: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> JikanPage:
        """Search anime.

        Args:
            q: Title search text
            type: tv, movie, ova, special, ona or music
            status: airing, complete or upcoming
            rating: g, pg, pg13, r17, r or rx
            genres: Comma separated MyAnimeList genre ids
            order_by: Field to order by (e.g. score, popularity)
            sort: asc or desc
            page: 1-based page number
            limit: Page size

        Raises:
            DomainError: An enumerated parameter has an unknown value
            UpstreamError: The request failed
        """
        operation = "search_anime"
        _check_choice("type", type, QueryValues.ANIME_TYPES, operation)
        _check_choice("status", status, QueryValues.ANIME_STATUS, operation)
        _check_choice("rating", rating, QueryValues.ANIME_RATINGS, operation)
        _check_choice("order_by", order_by, QueryValues.ANIME_ORDER_BY, operation)
        _check_choice("sort", sort, QueryValues.SORT, operation)
        _check_positive("page", page, operation)
        _check_positive("limit", limit, operation)

        params = {
            "q": q,
            "type": type,
            "score": score,
            "min_score": min_score,
            "max_score": max_score,
            "status": status,
            "rating": rating,
            "sfw": sfw,
            "genres": genres,
            "order_by": order_by,
            "sort": sort,
            "page": page,
            "limit": limit,
        }
        return await self._page(JikanEndpoints.ANIME, params, MediaType.ANIME)

    async def get_anime_by_id(self, anime_id: int) -> dict[str, Any]:
        """Return the raw anime record with MyAnimeList id ``anime_id``."""
        return await self._data(JikanEndpoints.anime(anime_id))

    async def get_top_anime(
        self,
        *,
        type: str | None = None,
        filter: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> JikanPage:
        operation = "get_top_anime"
        _check_choice("type", type, QueryValues.ANIME_TYPES, operation)
        _check_choice("filter", filter, QueryValues.TOP_ANIME_FILTERS, operation)
        _check_positive("page", page, operation)
        _check_positive("limit", limit, operation)

        params = {"type": type, "filter": filter, "page": page, "limit": limit}
        return await self._page(JikanEndpoints.TOP_ANIME, params, MediaType.ANIME)

    async def get_seasonal_anime(
        self,
        year: int,
        season: str,
        *,
        page: int | None = None,
        limit: int | None = None,
    ) -> JikanPage:
        """Return anime of ``season`` (winter, spring, summer or fall) in ``year``."""
        operation = "get_seasonal_anime"
        _check_choice("season", season, QueryValues.SEASONS, operation)
        _check_positive("year", year, operation)
        _check_positive("page", page, operation)
        _check_positive("limit", limit, operation)

        params = {"page": page, "limit": limit}
        return await self._page(JikanEndpoints.season(year, season), params, MediaType.ANIME)

    async def get_current_season(
        self,
        *,
        page: int | None = None,
        limit: int | None = None,
    ) -> JikanPage:
        operation = "get_current_season"
        _check_positive("page", page, operation)
        _check_positive("limit", limit, operation)

        params = {"page": page, "limit": limit}
        return await self._page(JikanEndpoints.SEASONS_NOW, params, MediaType.ANIME)

    async def get_random_anime(self) -> dict[str, Any]:
        return await self._data(JikanEndpoints.RANDOM_ANIME)

    async def get_anime_characters(self, anime_id: int) -> list[dict[str, Any]]:
        """Return the character entries (with voice actors) of an anime."""
        return await self._data(JikanEndpoints.anime_characters(anime_id), "list")

    async def get_anime_videos(self, anime_id: int) -> dict[str, Any]:
        """Return promo, episode and music video listings of an anime."""
        return await self._data(JikanEndpoints.anime_videos(anime_id))

    # Manga

    async def search_manga(
        self,
        *,
        q: str | None = None,
        type: str | None = None,
        score: float | None = None,
        min_score: float | None = None,
        max_score: float | None = None,
        status: str | None = None,
        sfw: bool | None = None,
        genres: str | None = None,
        order_by: str | None = None,
        sort: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> JikanPage:
        """Search manga.

        Args:
            q: Title search text
            type: manga, novel, lightnovel, oneshot, doujin, manhwa or manhua
            status: publishing, complete, hiatus, discontinued or upcoming
            genres: Comma separated MyAnimeList genre ids
            order_by: Field to order by (e.g. chapters, score)
            sort: asc or desc
            page: 1-based page number
            limit: Page size

        Raises:
            DomainError: An enumerated parameter has an unknown value
            UpstreamError: The request failed
        """
        operation = "search_manga"
        _check_choice("type", type, QueryValues.MANGA_TYPES, operation)
        _check_choice("status", status, QueryValues.MANGA_STATUS, operation)
        _check_choice("order_by", order_by, QueryValues.MANGA_ORDER_BY, operation)
        _check_choice("sort", sort, QueryValues.SORT, operation)
        _check_positive("page", page, operation)
        _check_positive("limit", limit, operation)

        params = {
            "q": q,
            "type": type,
            "score": score,
            "min_score": min_score,
            "max_score": max_score,
            "status": status,
            "sfw": sfw,
            "genres": genres,
            "order_by": order_by,
            "sort": sort,
            "page": page,
            "limit": limit,
        }
        return await self._page(JikanEndpoints.MANGA, params, MediaType.MANGA)

    async def get_manga_by_id(self, manga_id: int) -> dict[str, Any]:
        """Return the raw manga record with MyAnimeList id ``manga_id``."""
        return await self._data(JikanEndpoints.manga(manga_id))

    async def get_top_manga(
        self,
        *,
        type: str | None = None,
        filter: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> JikanPage:
        operation = "get_top_manga"
        _check_choice("type", type, QueryValues.MANGA_TYPES, operation)
        _check_choice("filter", filter, QueryValues.TOP_MANGA_FILTERS, operation)
        _check_positive("page", page, operation)
        _check_positive("limit", limit, operation)

        params = {"type": type, "filter": filter, "page": page, "limit": limit}
        return await self._page(JikanEndpoints.TOP_MANGA, params, MediaType.MANGA)

    async def get_random_manga(self) -> dict[str, Any]:
        return await self._data(JikanEndpoints.RANDOM_MANGA)

    # Mixed

    async def search_mixed(
        self,
        type: MediaType | str | None = None,
        **params: Any,
    ) -> JikanPage:
        """Search anime or manga depending on ``type`` (anime when omitted).

        The returned page carries ``media_type`` so adapters need not guess
        the record shape.
        """
        try:
            media_type = MediaType(type) if type is not None else MediaType.ANIME
        except ValueError as e:
            raise create_validation_error(
                f"Invalid type '{type}'. Expected one of: anime, manga",
                field="type",
                operation="search_mixed",
                original_error=e,
            ) from e
        if media_type is MediaType.MANGA:
            return await self.search_manga(**params)
        return await self.search_anime(**params)
