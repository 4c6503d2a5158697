"""Template engine adapter used by the page renderer."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

if TYPE_CHECKING:
    from collections.abc import Mapping

    from jinja2 import Template

__all__ = ["THEMES_DIR", "JinjaTemplateEngine", "TemplateEngine", "theme_paths"]

THEMES_DIR = Path(__file__).parent / "themes"
TEMPLATE_SUFFIX = ".html"


def theme_paths(theme: str) -> tuple[Path, Path]:
    """Return ``(templates_dir, resources_dir)`` of a bundled theme."""
    root = THEMES_DIR / theme
    return root / "templates", root / "resources"


class TemplateEngine(Protocol):
    """Render a named template with a context mapping."""

    async def render(
        self, template_id: str, context: Mapping[str, Any], *, cache: bool = True
    ) -> str: ...


class JinjaTemplateEngine:
    """Jinja2-backed :class:`TemplateEngine` reading ``<template_id>.html`` files.

    Parameters
    ----------
    templates_dir : Path
        Directory holding the theme templates.
    """

    def __init__(self, templates_dir: Path) -> None:
        self.templates_dir = templates_dir
        self._environment = Environment(
            loader=FileSystemLoader(templates_dir),
            undefined=StrictUndefined,
            autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=True),
            enable_async=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def _template(self, template_id: str, *, cache: bool) -> Template:
        name = f"{template_id}{TEMPLATE_SUFFIX}"
        if cache:
            return self._environment.get_template(name)
        loader = self._environment.loader
        if loader is None:  # pragma: no cover - always configured above
            return self._environment.get_template(name)
        return loader.load(self._environment, name)

    async def render(
        self, template_id: str, context: Mapping[str, Any], *, cache: bool = True
    ) -> str:
        """Render ``template_id`` with ``context``.

        Raises
        ------
        jinja2.TemplateError
            If the template is missing, malformed, or references an
            undefined variable.
        """
        template = self._template(template_id, cache=cache)
        return await template.render_async(**context)
