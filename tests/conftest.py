"""Shared pytest fixtures for the docforge test-suite.

This module provides reusable fixtures for:
- A small documentation model covering every entity category
- Settings rooted in a temporary project directory
- Resolver and registry instances bound to the sample model
- A recording template engine standing in for Jinja2
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import pytest

from docforge.models import (
    AMBIGUOUS,
    ClassDoc,
    DocumentationModel,
    Feature,
    Guide,
    Location,
    ModuleDoc,
    Page,
    Param,
    Property,
    RestApi,
    SourceFile,
)
from docforge.registry import TypeRegistry
from docforge.resolver import CrossReferenceResolver
from docforge_common.settings import RenderSettings

if TYPE_CHECKING:
    from pathlib import Path


class RecordingEngine:
    """Template engine double returning a fixed body and recording every call."""

    def __init__(self, *, fail_on: set[str] | None = None) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.fail_on = fail_on or set()

    async def render(
        self, template_id: str, context: Mapping[str, Any], *, cache: bool = True
    ) -> str:
        self.calls.append((template_id, dict(context)))
        if template_id in self.fail_on:
            message = f"boom in {template_id}"
            raise RuntimeError(message)
        return f"<html>{template_id}:{context['name']}</html>"

    def contexts(self, template_id: str) -> list[dict[str, Any]]:
        return [context for called, context in self.calls if called == template_id]


@pytest.fixture
def sample_model() -> DocumentationModel:
    """Return a model with one or two entities in every category."""
    widget_props = (
        Property(name="resize", kind="method", returns="Widget"),
        Property(name="Label", type="String"),
        Property(name="children", type="Array<Widget>", see_also=("Panel",)),
    )
    return DocumentationModel(
        symbol_index={
            "Widget": Location(filename="classes/widget", anchor_id="class-widget"),
            "Panel": Location(filename="classes/panel", anchor_id="class-panel"),
            "util": Location(filename="modules/util", anchor_id="module-util"),
            "Shared": AMBIGUOUS,
        },
        guides=(
            Guide(name="Getting started", filename="getting-started", content="# Hello\n"),
        ),
        pages=(Page(name="Changelog", filename="changelog", content="* first"),),
        restapis=(
            RestApi(
                name="List widgets",
                filename="list-widgets",
                path="/widgets",
                params=(Param(name="limit", type="Number"),),
            ),
        ),
        classes=(
            ClassDoc(
                name="Widget",
                filename="widget",
                defined_in="lib/widget.js",
                description="See [[#Panel]].",
                properties=widget_props,
            ),
            ClassDoc(name="Panel", filename="panel", defined_in="lib/panel.js", extends=("Widget",)),
        ),
        modules=(
            ModuleDoc(
                name="util",
                filename="util",
                properties=(Property(name="zip"), Property(name="Apply"), Property(name="map")),
            ),
        ),
        features=(
            Feature(
                name="Theming",
                filename="theming",
                properties=(Property(name="z"), Property(name="a")),
            ),
        ),
        files=(SourceFile(name="lib/widget.js", filename="lib_widget.js", content="var x;"),),
    )


@pytest.fixture
def empty_model() -> DocumentationModel:
    return DocumentationModel()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def settings(project_dir: Path) -> RenderSettings:
    return RenderSettings(project_dir=project_dir, output="doc")


@pytest.fixture
def registry() -> TypeRegistry:
    return TypeRegistry()


@pytest.fixture
def resolver(sample_model: DocumentationModel, registry: TypeRegistry) -> CrossReferenceResolver:
    return CrossReferenceResolver(sample_model, registry)


@pytest.fixture
def engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture
def make_engine() -> type[RecordingEngine]:
    """Return the engine class so tests can configure failing templates."""
    return RecordingEngine
