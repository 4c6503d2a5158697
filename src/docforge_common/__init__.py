"""Shared infrastructure for docforge: logging, errors and settings."""

from __future__ import annotations

__all__ = [
    "errors",
    "logging",
    "settings",
]
