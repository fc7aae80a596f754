"""Shared model exports."""

from .jikan import JikanPage, Pagination, PaginationItems
from .media import Genre, MediaStatus, MediaType, UnifiedMedia

__all__ = [
    "Genre",
    "JikanPage",
    "MediaStatus",
    "MediaType",
    "Pagination",
    "PaginationItems",
    "UnifiedMedia",
]
