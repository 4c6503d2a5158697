"""Render one page: bind resolvers into the template context and write the HTML."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from docforge_common.errors import DocForgeError, OutputWriteError, TemplateRenderError
from docforge_common.logging import get_logger, with_fields

if TYPE_CHECKING:
    from pathlib import Path

    from docforge.models import DocumentationModel
    from docforge.resolver import CrossReferenceResolver
    from docforge.staging import StagedOutput
    from docforge.templates import TemplateEngine
    from docforge_common.settings import RenderSettings

__all__ = ["PageRenderer", "PageResult"]

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PageResult:
    """Outcome of a single page render."""

    output: str
    path: Path
    error: DocForgeError | None = None

    @property
    def written(self) -> bool:
        """Whether the page reached the disk."""
        return self.error is None


def _write_page(path: Path, content: str) -> None:
    path.write_bytes(content.encode("utf-8"))


class PageRenderer:
    """Render templates into the staged output directory.

    Failures are contained to the page: a template error leaves no file
    behind, a write error is logged, and neither reaches the caller.
    """

    def __init__(
        self,
        model: DocumentationModel,
        settings: RenderSettings,
        engine: TemplateEngine,
        resolver: CrossReferenceResolver,
        output: StagedOutput,
    ) -> None:
        self.model = model
        self.settings = settings
        self.engine = engine
        self.resolver = resolver
        self.output = output

    def build_context(self, options: dict[str, Any]) -> dict[str, Any]:
        """Return ``options`` completed with the model, settings and resolvers.

        A caller-supplied ``type_link`` is kept so category passes can bind
        their own diagnostic context.
        """
        context = dict(options)
        context.setdefault("rel_path", "./")
        context["model"] = self.model
        context["settings"] = self.settings
        context.setdefault("type_link", self.resolver.type_link)
        context["see_link"] = self.resolver.see_link
        context["convert_link"] = self.resolver.convert_link
        context["cache"] = True
        return context

    async def render(self, options: dict[str, Any], template_id: str, output: str) -> PageResult:
        """Render ``template_id`` and write it to ``<output>.html``.

        Parameters
        ----------
        options : dict[str, Any]
            Page data; not modified.
        template_id : str
            Template name inside the theme.
        output : str
            Page path relative to the site root, without extension.

        Returns
        -------
        PageResult
            Written path, or the error that abandoned the page.
        """
        path = self.output.page_path(output)
        page_logger = with_fields(
            logger, operation="render_page", template=template_id, output=str(path)
        )
        context = self.build_context(options)
        try:
            html = await self.engine.render(template_id, context, cache=context["cache"])
        except Exception as exc:  # noqa: BLE001
            error = TemplateRenderError(
                f"Template '{template_id}' failed for {output}: {exc}",
                cause=exc,
                context={"template": template_id, "output": output},
            )
            page_logger.exception(str(error))
            return PageResult(output, path, error)

        try:
            await asyncio.to_thread(_write_page, path, html)
        except (OSError, UnicodeError) as exc:
            error = OutputWriteError(
                f"failed to create {path}", cause=exc, context={"path": str(path)}
            )
            page_logger.error(error.message, extra={"error": str(exc)})
            return PageResult(output, path, error)

        if not self.settings.quiet:
            page_logger.info(f"{path} is created")
        return PageResult(output, path)
