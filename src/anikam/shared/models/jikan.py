"""Jikan response envelope models.

The client passes upstream pagination through verbatim; these models only
give it a typed shape. Extra fields sent by the upstream are ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from anikam.shared.models.media import MediaType


class PaginationItems(BaseModel):
    """Item counts of one result page."""

    model_config = ConfigDict(extra="ignore")

    count: int = Field(0, description="Items on this page")
    total: int = Field(0, description="Items across all pages")
    per_page: int = Field(0, description="Page size")


class Pagination(BaseModel):
    """Upstream pagination block."""

    model_config = ConfigDict(extra="ignore")

    last_visible_page: int = 1
    has_next_page: bool = False
    current_page: int = 1
    items: PaginationItems = Field(default_factory=PaginationItems)


class JikanPage(BaseModel):
    """One page of raw records from a paginated endpoint.

    Attributes:
        data: Raw upstream records, unmodified
        pagination: Pagination block, ``None`` when the upstream omits it
        media_type: Which catalog the endpoint serves
    """

    data: list[dict[str, Any]] = Field(default_factory=list)
    pagination: Pagination | None = None
    media_type: MediaType = MediaType.ANIME

    @property
    def has_next_page(self) -> bool:
        return self.pagination.has_next_page if self.pagination else False
