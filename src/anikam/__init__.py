"""
AniKam - Anime and Manga Catalog Client

An asynchronous client for the Jikan anime/manga metadata API with request
pacing, retry with backoff, response caching and an offline fallback
catalog.
"""

__version__ = "0.1.0"
__author__ = "AniKam Team"

__all__ = ["__version__"]
