"""Rendering helpers shared by CLI commands."""
