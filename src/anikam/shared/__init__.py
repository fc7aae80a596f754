"""Shared building blocks: constants, errors, logging and models."""
