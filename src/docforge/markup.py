"""Markdown to HTML conversion for guides, pages and the README."""

from __future__ import annotations

from typing import Final

import markdown

__all__ = ["MARKDOWN_EXTENSIONS", "to_html"]

MARKDOWN_EXTENSIONS: Final[tuple[str, ...]] = ("fenced_code", "tables", "toc")


def to_html(text: str | None) -> str | None:
    """Convert markdown ``text`` to HTML; empty input yields ``None``."""
    if not text:
        return None
    return markdown.markdown(text, extensions=list(MARKDOWN_EXTENSIONS))
