"""Catalog feeds.

Feeds own pagination state for one browsing surface, call the Jikan client,
normalize the results and decide per failure whether to substitute the
bundled fallback catalog or to surface a user-facing error message.

Primary browsing surfaces (top lists, the current season, the default
catalog) fall back silently on their first load. Detail lookups and
"load more" requests always surface the error.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable

from anikam.services import media_adapter
from anikam.services.error_classifier import get_user_message, should_use_fallback
from anikam.services.fallback_data import get_fallback_media
from anikam.services.jikan_client import JikanClient
from anikam.services.network_monitor import NetworkMonitor
from anikam.shared.constants import JikanAPIConfig
from anikam.shared.errors import AniKamError, ErrorCode
from anikam.shared.models import JikanPage, MediaType, UnifiedMedia

logger = logging.getLogger(__name__)


class ContentType(str, Enum):
    """Which catalog a search feed queries."""

    ALL = "all"
    ANIME = "anime"
    MANGA = "manga"


@dataclass
class FeedState:
    """Pagination state owned by one feed.

    Attributes:
        items: Accumulated normalized records
        current_page: Last page successfully loaded (or substituted)
        has_next_page: Whether "load more" may fetch another page
        loading: Whether a load is in progress
        error: User-facing message of the last failure, if surfaced
        using_fallback: Whether ``items`` is the bundled fallback catalog
    """

    items: list[UnifiedMedia] = field(default_factory=list)
    current_page: int = 1
    has_next_page: bool = False
    loading: bool = False
    error: str | None = None
    using_fallback: bool = False


def _merge_unique(existing: list[UnifiedMedia], new: list[UnifiedMedia]) -> list[UnifiedMedia]:
    seen = {(item.type, item.id) for item in existing}
    merged = list(existing)
    for item in new:
        key = (item.type, item.id)
        if key not in seen:
            seen.add(key)
            merged.append(item)
    return merged


class PagedFeed:
    """Base class for paginated feeds.

    Subclasses implement :meth:`_fetch_page` and may override
    :meth:`_allows_fallback` and :meth:`_fallback_items`.

    Args:
        client: Jikan API client
        limit: Page size requested from the upstream
        network_monitor: Optional monitor used to word network errors
    """

    operation = "feed"

    def __init__(
        self,
        client: JikanClient,
        limit: int = JikanAPIConfig.DEFAULT_PAGE_LIMIT,
        network_monitor: NetworkMonitor | None = None,
    ) -> None:
        self.client = client
        self.limit = limit
        self.network_monitor = network_monitor
        self.state = FeedState()

    async def _fetch_page(self, page: int) -> tuple[list[UnifiedMedia], bool]:
        raise NotImplementedError

    def _allows_fallback(self, error: AniKamError) -> bool:
        # Primary surfaces substitute on any first-load failure
        return True

    def _fallback_items(self) -> list[UnifiedMedia]:
        return get_fallback_media()

    def _user_message(self, error: AniKamError) -> str:
        status = self.network_monitor.get_status() if self.network_monitor else None
        return get_user_message(error, status)

    async def load(self, page: int = 1, append: bool = False) -> FeedState:
        """Load ``page``; with ``append`` the records extend the current list.

        Raises:
            DomainError: A query parameter has an unknown value
        """
        self.state.loading = True
        self.state.error = None

        try:
            items, has_next = await self._fetch_page(page)
        except AniKamError as error:
            # Bad parameters are a caller bug, not an outage
            if error.code is ErrorCode.VALIDATION_ERROR:
                raise
            self._handle_failure(error, page, append)
        else:
            if append:
                self.state.items = _merge_unique(self.state.items, items)
            else:
                self.state.items = items
            self.state.has_next_page = has_next
            self.state.current_page = page
            self.state.using_fallback = False
        finally:
            self.state.loading = False

        return self.state

    def _handle_failure(self, error: AniKamError, page: int, append: bool) -> None:
        first_load = not append and not self.state.items
        if first_load and self._allows_fallback(error):
            fallback = self._fallback_items()
            logger.info(
                "%s failed (%s), showing %d fallback records",
                self.operation,
                error.code.value,
                len(fallback),
            )
            self.state.items = fallback
            self.state.has_next_page = False
            self.state.current_page = page
            self.state.using_fallback = True
            return

        self.state.error = self._user_message(error)
        logger.warning("%s failed: %s", self.operation, error)

    async def refresh(self) -> FeedState:
        """Reload the first page, replacing accumulated items on success."""
        return await self.load(1, append=False)

    async def load_more(self) -> FeedState:
        """Append the next page when one exists and no load is running."""
        if self.state.has_next_page and not self.state.loading:
            return await self.load(self.state.current_page + 1, append=True)
        return self.state


class MediaSearchFeed(PagedFeed):
    """Search feed for the catalog page.

    With ``content_type`` ALL and a query, anime and manga are searched
    together, each with half the page size. Fallback follows
    :func:`should_use_fallback`, and an empty query always falls back on
    the first load since it is the catalog's default view.
    """

    operation = "media_search"

    def __init__(
        self,
        client: JikanClient,
        query: str | None = None,
        content_type: ContentType | str = ContentType.ALL,
        type: str | None = None,
        status: str | None = None,
        genres: str | None = None,
        order_by: str | None = None,
        sort: str | None = None,
        limit: int = JikanAPIConfig.DEFAULT_PAGE_LIMIT,
        network_monitor: NetworkMonitor | None = None,
    ) -> None:
        super().__init__(client, limit, network_monitor)
        self.query = query
        self.content_type = ContentType(content_type)
        self.filters = {
            "type": type,
            "status": status,
            "genres": genres,
            "order_by": order_by,
            "sort": sort,
        }

    async def _search(self, media_type: MediaType, page: int, limit: int) -> JikanPage:
        search = (
            self.client.search_manga
            if media_type is MediaType.MANGA
            else self.client.search_anime
        )
        return await search(q=self.query, page=page, limit=limit, **self.filters)

    async def _fetch_page(self, page: int) -> tuple[list[UnifiedMedia], bool]:
        if self.content_type is ContentType.ALL and self.query:
            return await self._fetch_both(page)

        media_type = (
            MediaType.MANGA if self.content_type is ContentType.MANGA else MediaType.ANIME
        )
        result = await self._search(media_type, page, self.limit)
        return media_adapter.adapt_mixed(result.data, result.media_type), result.has_next_page

    async def _fetch_both(self, page: int) -> tuple[list[UnifiedMedia], bool]:
        half = max(self.limit // 2, 1)
        results = await asyncio.gather(
            self._search(MediaType.ANIME, page, half),
            self._search(MediaType.MANGA, page, half),
            return_exceptions=True,
        )

        items: list[UnifiedMedia] = []
        has_next = False
        errors: list[AniKamError] = []
        for result in results:
            if isinstance(result, AniKamError):
                if result.code is ErrorCode.VALIDATION_ERROR:
                    raise result
                errors.append(result)
                continue
            if isinstance(result, BaseException):
                raise result
            items.extend(media_adapter.adapt_mixed(result.data, result.media_type))
            has_next = has_next or result.has_next_page

        if len(errors) == len(results):
            raise errors[0]
        for error in errors:
            logger.warning("Partial search failure, continuing with the other catalog: %s", error)
        return items, has_next

    def _allows_fallback(self, error: AniKamError) -> bool:
        return should_use_fallback(error, bool(self.state.items), self.query) or not self.query

    def _fallback_items(self) -> list[UnifiedMedia]:
        if self.content_type is ContentType.ALL:
            return get_fallback_media()
        return get_fallback_media(self.content_type.value)


class TopMediaFeed(PagedFeed):
    """Top ranked anime or manga for the home page."""

    operation = "top_media"

    def __init__(
        self,
        client: JikanClient,
        media_type: MediaType | str = MediaType.ANIME,
        type: str | None = None,
        filter: str | None = None,
        limit: int = JikanAPIConfig.DEFAULT_PAGE_LIMIT,
        network_monitor: NetworkMonitor | None = None,
    ) -> None:
        super().__init__(client, limit, network_monitor)
        self.media_type = MediaType(media_type)
        self.type = type
        self.filter = filter

    async def _fetch_page(self, page: int) -> tuple[list[UnifiedMedia], bool]:
        fetch = (
            self.client.get_top_manga
            if self.media_type is MediaType.MANGA
            else self.client.get_top_anime
        )
        result = await fetch(type=self.type, filter=self.filter, page=page, limit=self.limit)
        return media_adapter.adapt_mixed(result.data, result.media_type), result.has_next_page


class SeasonFeed(PagedFeed):
    """Anime of one season; the current season when no year/season is given."""

    operation = "season"

    def __init__(
        self,
        client: JikanClient,
        year: int | None = None,
        season: str | None = None,
        limit: int = JikanAPIConfig.DEFAULT_PAGE_LIMIT,
        network_monitor: NetworkMonitor | None = None,
    ) -> None:
        super().__init__(client, limit, network_monitor)
        self.year = year
        self.season = season

    async def _fetch_page(self, page: int) -> tuple[list[UnifiedMedia], bool]:
        if self.year is not None and self.season is not None:
            result = await self.client.get_seasonal_anime(
                self.year, self.season, page=page, limit=self.limit
            )
        else:
            result = await self.client.get_current_season(page=page, limit=self.limit)
        return media_adapter.adapt_anime_list(result.data), result.has_next_page

    def _fallback_items(self) -> list[UnifiedMedia]:
        return get_fallback_media(MediaType.ANIME)


@dataclass
class DetailsState:
    media: UnifiedMedia | None = None
    loading: bool = False
    error: str | None = None


class MediaDetailsLoader:
    """Loads a single record for a detail page.

    Failures are always surfaced; a plausible fallback record for an
    arbitrary id cannot exist.
    """

    def __init__(
        self,
        client: JikanClient,
        network_monitor: NetworkMonitor | None = None,
    ) -> None:
        self.client = client
        self.network_monitor = network_monitor
        self.state = DetailsState()

    async def load(
        self,
        media_id: int,
        media_type: MediaType | str = MediaType.ANIME,
    ) -> DetailsState:
        """Load the anime or manga with MyAnimeList id ``media_id``."""
        media_type = MediaType(media_type)
        if media_type is MediaType.MANGA:
            return await self._run(self.client.get_manga_by_id(media_id), media_type)
        return await self._run(self.client.get_anime_by_id(media_id), media_type)

    async def load_random(self, media_type: MediaType | str = MediaType.ANIME) -> DetailsState:
        media_type = MediaType(media_type)
        if media_type is MediaType.MANGA:
            return await self._run(self.client.get_random_manga(), media_type)
        return await self._run(self.client.get_random_anime(), media_type)

    async def _run(
        self,
        request: Awaitable[dict[str, Any]],
        media_type: MediaType,
    ) -> DetailsState:
        self.state = DetailsState(loading=True)
        try:
            record = await request
            self.state.media = (
                media_adapter.adapt_manga(record)
                if media_type is MediaType.MANGA
                else media_adapter.adapt_anime(record)
            )
        except AniKamError as error:
            status = self.network_monitor.get_status() if self.network_monitor else None
            self.state.error = get_user_message(error, status)
            logger.warning("Failed to load %s details: %s", media_type.value, error)
        finally:
            self.state.loading = False
        return self.state
