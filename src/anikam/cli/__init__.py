"""Command-line interface for AniKam."""
