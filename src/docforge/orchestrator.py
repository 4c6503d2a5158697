"""Sequence output staging and the per-category render passes of a site.

Staging is the only ordering constraint: every page is scheduled after the
output directory has been prepared. The category passes, and the pages
within each pass, then run as independent tasks with no completion order.
Templates render on the event loop thread, so resolver calls (and the
registry writes they may perform) never run in parallel.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from docforge.external_types import load_external_types
from docforge.markup import to_html
from docforge.models import sorted_properties
from docforge.registry import TypeRegistry
from docforge.renderer import PageRenderer, PageResult
from docforge.resolver import CrossReferenceResolver
from docforge.staging import stage_output_directory
from docforge.templates import JinjaTemplateEngine, theme_paths
from docforge_common.logging import CorrelationContext, get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Coroutine, Sequence
    from pathlib import Path

    from docforge.models import DocumentationModel
    from docforge.staging import StagedOutput
    from docforge.templates import TemplateEngine
    from docforge_common.settings import RenderSettings

__all__ = ["SiteOrchestrator", "SiteReport", "render_site"]

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SiteReport:
    """Pages produced (and abandoned) by one run."""

    output_dir: Path
    results: tuple[PageResult, ...] = field(default_factory=tuple)

    @property
    def written(self) -> tuple[Path, ...]:
        """Paths of the pages written to disk."""
        return tuple(result.path for result in self.results if result.written)

    @property
    def failed(self) -> tuple[PageResult, ...]:
        """Pages abandoned after a template or write failure."""
        return tuple(result for result in self.results if not result.written)


class SiteOrchestrator:
    """Render a documentation model into a static HTML site.

    Parameters
    ----------
    model : DocumentationModel
        Parsed documentation.
    settings : RenderSettings
        Run options.
    engine : TemplateEngine | None, optional
        Template engine; defaults to Jinja2 over the configured theme.
    registry : TypeRegistry | None, optional
        Type registry for this run; defaults to a fresh one. External types
        from ``settings`` are merged into it on construction.
    """

    def __init__(
        self,
        model: DocumentationModel,
        settings: RenderSettings,
        *,
        engine: TemplateEngine | None = None,
        registry: TypeRegistry | None = None,
    ) -> None:
        self.model = model
        self.settings = settings
        self.templates_dir, self.resources_dir = theme_paths(settings.theme)
        self.engine = engine or JinjaTemplateEngine(self.templates_dir)
        self.registry = registry if registry is not None else TypeRegistry()
        load_external_types(self.registry, settings.external_types)
        self.resolver = CrossReferenceResolver(model, self.registry)

    async def run(self) -> SiteReport:
        """Stage the output directory, then render every page.

        Returns
        -------
        SiteReport
            Outcome of every dispatched page.

        Raises
        ------
        StagingError
            If the output directory cannot be prepared.
        """
        output_dir = self.settings.output_dir
        with CorrelationContext(uuid4().hex):
            staged = await stage_output_directory(self.resources_dir, output_dir)
            renderer = PageRenderer(
                self.model, self.settings, self.engine, self.resolver, staged
            )
            passes = (
                self.render_readme(renderer),
                self.render_guides(renderer, staged),
                self.render_pages(renderer),
                self.render_restapis(renderer),
                self.render_classes(renderer, staged),
                self.render_modules(renderer, staged),
                self.render_features(renderer, staged),
                self.render_files(renderer, staged),
            )
            batches = await asyncio.gather(*passes)
            report = SiteReport(output_dir, tuple(r for batch in batches for r in batch))
            logger.info(
                "Site rendered",
                extra={
                    "operation": "render_site",
                    "output_dir": str(output_dir),
                    "written": len(report.written),
                    "failed": len(report.failed),
                },
            )
        return report

    @staticmethod
    async def _gather(pages: Sequence[Awaitable[PageResult]]) -> list[PageResult]:
        return list(await asyncio.gather(*pages))

    @staticmethod
    def _category_dir(staged: StagedOutput, name: str) -> None:
        try:
            staged.subdirectory(name)
        except OSError as exc:
            logger.error(
                f"Cannot create {name}/ directory",
                extra={"operation": "render_site", "category": name, "error": str(exc)},
            )

    async def render_readme(self, renderer: PageRenderer) -> list[PageResult]:
        """Render ``README.md`` (when present) as the site homepage."""
        try:
            text = await asyncio.to_thread(
                self.settings.readme_path.read_text, encoding="utf-8", errors="replace"
            )
        except OSError:
            text = None
        options: dict[str, Any] = {
            "rel_path": "./",
            "name": "README",
            "content": to_html(text),
            "type": "home",
        }
        return [await renderer.render(options, "extra", "index")]

    async def render_guides(self, renderer: PageRenderer, staged: StagedOutput) -> list[PageResult]:
        """Render one page per guide under ``guides/``."""
        if not self.model.guides:
            return []
        self._category_dir(staged, "guides")
        pages: list[Coroutine[Any, Any, PageResult]] = []
        for guide in self.model.guides:
            options = {
                "rel_path": "../",
                "name": guide.name,
                "content": to_html(guide.content),
                "type": "guides",
            }
            pages.append(renderer.render(options, "extra", f"guides/{guide.filename}"))
        return await self._gather(pages)

    async def render_pages(self, renderer: PageRenderer) -> list[PageResult]:
        """Render the aggregate pages page."""
        if not self.model.pages:
            return []
        options: dict[str, Any] = {
            "rel_path": "./",
            "name": "Pages",
            "type": "pages",
            "pages": [(page, to_html(page.content)) for page in self.model.pages],
        }
        return [await renderer.render(options, "pages", "pages")]

    async def render_restapis(self, renderer: PageRenderer) -> list[PageResult]:
        """Render the aggregate REST APIs page."""
        if not self.model.restapis:
            return []
        options: dict[str, Any] = {
            "rel_path": "./",
            "name": "REST APIs",
            "type": "restapis",
            "restapis": self.model.restapis,
        }
        return [await renderer.render(options, "restapis", "restapis")]

    async def render_classes(
        self, renderer: PageRenderer, staged: StagedOutput
    ) -> list[PageResult]:
        """Render one page per class under ``classes/`` with sorted properties."""
        if not self.model.classes:
            return []
        self._category_dir(staged, "classes")
        pages: list[Coroutine[Any, Any, PageResult]] = []
        for klass in self.model.classes:
            options = {
                "rel_path": "../",
                "name": klass.name,
                "klass": klass,
                "properties": sorted_properties(klass.properties),
                "type": "classes",
                "type_link": self.resolver.type_link_in(f"(in {klass.defined_in or klass.name})"),
            }
            pages.append(renderer.render(options, "class", f"classes/{klass.filename}"))
        return await self._gather(pages)

    async def render_modules(
        self, renderer: PageRenderer, staged: StagedOutput
    ) -> list[PageResult]:
        """Render one page per module under ``modules/`` with sorted properties."""
        if not self.model.modules:
            return []
        self._category_dir(staged, "modules")
        pages: list[Coroutine[Any, Any, PageResult]] = []
        for module in self.model.modules:
            options = {
                "rel_path": "../",
                "name": module.name,
                "module_data": module,
                "properties": sorted_properties(module.properties),
                "type": "modules",
            }
            pages.append(renderer.render(options, "module", f"modules/{module.filename}"))
        return await self._gather(pages)

    async def render_features(
        self, renderer: PageRenderer, staged: StagedOutput
    ) -> list[PageResult]:
        """Render one page per feature under ``features/``."""
        if not self.model.features:
            return []
        self._category_dir(staged, "features")
        pages = [
            renderer.render(
                {"rel_path": "../", "name": feature.name, "feature": feature, "type": "features"},
                "feature",
                f"features/{feature.filename}",
            )
            for feature in self.model.features
        ]
        return await self._gather(pages)

    async def render_files(self, renderer: PageRenderer, staged: StagedOutput) -> list[PageResult]:
        """Render one page per source file under ``files/``."""
        if not self.model.files:
            return []
        self._category_dir(staged, "files")
        pages = [
            renderer.render(
                {"rel_path": "../", "name": file.name, "file": file, "type": "files"},
                "file",
                f"files/{file.filename}",
            )
            for file in self.model.files
        ]
        return await self._gather(pages)


def render_site(
    model: DocumentationModel,
    settings: RenderSettings,
    *,
    engine: TemplateEngine | None = None,
    registry: TypeRegistry | None = None,
) -> SiteReport:
    """Render ``model`` synchronously; see :meth:`SiteOrchestrator.run`."""
    orchestrator = SiteOrchestrator(model, settings, engine=engine, registry=registry)
    return asyncio.run(orchestrator.run())
