"""Tests for the site orchestrator: staging, category passes and the report."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from docforge.orchestrator import SiteOrchestrator, render_site
from docforge.registry import TypeRegistry
from docforge_common.errors import StagingError
from docforge_common.settings import RenderSettings

if TYPE_CHECKING:
    from pathlib import Path

    from _pytest.logging import LogCaptureFixture

    from docforge.models import DocumentationModel
    from tests.conftest import RecordingEngine


@pytest.mark.asyncio
async def test_every_category_is_written(
    sample_model: DocumentationModel, settings: RenderSettings, engine: RecordingEngine
) -> None:
    report = await SiteOrchestrator(sample_model, settings, engine=engine).run()

    out = settings.output_dir
    expected = {
        out / "index.html",
        out / "guides" / "getting-started.html",
        out / "pages.html",
        out / "restapis.html",
        out / "classes" / "widget.html",
        out / "classes" / "panel.html",
        out / "modules" / "util.html",
        out / "features" / "theming.html",
        out / "files" / "lib_widget.js.html",
    }
    assert set(report.written) == expected
    assert report.failed == ()
    assert all(path.is_file() for path in expected)
    assert (out / "css" / "style.css").is_file()


@pytest.mark.asyncio
async def test_empty_model_renders_only_homepage(
    empty_model: DocumentationModel, settings: RenderSettings, engine: RecordingEngine
) -> None:
    report = await SiteOrchestrator(empty_model, settings, engine=engine).run()

    out = settings.output_dir
    assert report.written == (out / "index.html",)
    for category in ("guides", "classes", "modules", "features", "files"):
        assert not (out / category).exists()
    assert not (out / "pages.html").exists()


@pytest.mark.asyncio
async def test_previous_output_is_wiped(
    empty_model: DocumentationModel, settings: RenderSettings, engine: RecordingEngine
) -> None:
    stale = settings.output_dir / "classes" / "old.html"
    stale.parent.mkdir(parents=True)
    stale.write_text("old", encoding="utf-8")

    await SiteOrchestrator(empty_model, settings, engine=engine).run()

    assert not stale.exists()


@pytest.mark.asyncio
async def test_class_and_module_properties_are_sorted(
    sample_model: DocumentationModel, settings: RenderSettings, engine: RecordingEngine
) -> None:
    await SiteOrchestrator(sample_model, settings, engine=engine).run()

    widget = next(c for c in engine.contexts("class") if c["name"] == "Widget")
    assert [p.name for p in widget["properties"]] == ["Label", "children", "resize"]
    module = engine.contexts("module")[0]
    assert [p.name for p in module["properties"]] == ["Apply", "map", "zip"]
    assert module["module_data"] is sample_model.modules[0]
    feature = engine.contexts("feature")[0]
    assert [p.name for p in feature["feature"].properties] == ["z", "a"]
    assert [p.name for p in sample_model.classes[0].properties] == ["resize", "Label", "children"]


@pytest.mark.asyncio
async def test_class_pages_report_defining_file(
    sample_model: DocumentationModel,
    settings: RenderSettings,
    engine: RecordingEngine,
    caplog: LogCaptureFixture,
) -> None:
    await SiteOrchestrator(sample_model, settings, engine=engine).run()
    widget = next(c for c in engine.contexts("class") if c["name"] == "Widget")
    caplog.clear()

    with caplog.at_level(logging.WARNING, logger="docforge.resolver"):
        widget["type_link"](widget["rel_path"], "Ghost")

    assert [r.getMessage() for r in caplog.records] == [
        "'Ghost' link does not exist (in lib/widget.js)"
    ]


@pytest.mark.asyncio
async def test_relative_paths_follow_page_depth(
    sample_model: DocumentationModel, settings: RenderSettings, engine: RecordingEngine
) -> None:
    await SiteOrchestrator(sample_model, settings, engine=engine).run()

    depths = {template: ctx["rel_path"] for template, ctx in engine.calls}
    assert depths["pages"] == "./"
    assert depths["restapis"] == "./"
    assert depths["class"] == "../"
    assert depths["file"] == "../"
    homepage = next(ctx for ctx in engine.contexts("extra") if ctx["type"] == "home")
    assert homepage["rel_path"] == "./"


@pytest.mark.asyncio
async def test_readme_becomes_homepage(
    empty_model: DocumentationModel, settings: RenderSettings, engine: RecordingEngine
) -> None:
    (settings.project_dir / "README.md").write_text("# Project\n", encoding="utf-8")

    await SiteOrchestrator(empty_model, settings, engine=engine).run()

    homepage = engine.contexts("extra")[0]
    assert homepage["name"] == "README"
    assert '<h1 id="project">Project</h1>' in homepage["content"]


@pytest.mark.asyncio
async def test_undecodable_readme_does_not_abort_the_run(
    sample_model: DocumentationModel, settings: RenderSettings, engine: RecordingEngine
) -> None:
    (settings.project_dir / "README.md").write_bytes(b"# Caf\xe9\n")

    report = await SiteOrchestrator(sample_model, settings, engine=engine).run()

    assert report.failed == ()
    assert len(report.written) == 9
    homepage = next(ctx for ctx in engine.contexts("extra") if ctx["type"] == "home")
    assert "Caf\ufffd" in homepage["content"]


@pytest.mark.asyncio
async def test_missing_readme_renders_empty_homepage(
    empty_model: DocumentationModel, settings: RenderSettings, engine: RecordingEngine
) -> None:
    report = await SiteOrchestrator(empty_model, settings, engine=engine).run()

    assert engine.contexts("extra")[0]["content"] is None
    assert report.written == (settings.output_dir / "index.html",)


@pytest.mark.asyncio
async def test_page_failure_does_not_stop_the_run(
    sample_model: DocumentationModel,
    settings: RenderSettings,
    make_engine: type[RecordingEngine],
) -> None:
    report = await SiteOrchestrator(
        sample_model, settings, engine=make_engine(fail_on={"class"})
    ).run()

    assert {result.output for result in report.failed} == {"classes/widget", "classes/panel"}
    assert len(report.written) == 7
    assert not (settings.output_dir / "classes" / "widget.html").exists()
    assert (settings.output_dir / "modules" / "util.html").exists()


@pytest.mark.asyncio
async def test_staging_failure_aborts_before_rendering(
    sample_model: DocumentationModel, project_dir: Path, engine: RecordingEngine
) -> None:
    (project_dir / "blocker").write_text("file", encoding="utf-8")
    settings = RenderSettings(project_dir=project_dir, output="blocker/doc")

    with pytest.raises(StagingError):
        await SiteOrchestrator(sample_model, settings, engine=engine).run()

    assert engine.calls == []


def test_external_types_are_merged_into_registry(
    sample_model: DocumentationModel, project_dir: Path, engine: RecordingEngine
) -> None:
    settings = RenderSettings(
        project_dir=project_dir, external_types={"Buffer": "http://nodejs.org/buffer"}
    )
    registry = TypeRegistry()

    orchestrator = SiteOrchestrator(sample_model, settings, engine=engine, registry=registry)

    assert orchestrator.registry is registry
    assert registry.lookup("Buffer") == "http://nodejs.org/buffer"
    assert orchestrator.resolver.type_link("./", "Buffer") == (
        "<a href='http://nodejs.org/buffer'>Buffer</a>"
    )


def test_render_site_runs_synchronously(
    sample_model: DocumentationModel, settings: RenderSettings, engine: RecordingEngine
) -> None:
    report = render_site(sample_model, settings, engine=engine)

    assert report.output_dir == settings.output_dir
    assert len(report.written) == 9
