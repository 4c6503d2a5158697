"""Render a parsed documentation model into a static, cross-linked HTML site."""

from __future__ import annotations

from docforge.loader import load_model
from docforge.models import AMBIGUOUS, DocumentationModel, Location
from docforge.orchestrator import SiteOrchestrator, SiteReport, render_site
from docforge.registry import TypeRegistry
from docforge.resolver import CrossReferenceResolver

__all__ = [
    "AMBIGUOUS",
    "CrossReferenceResolver",
    "DocumentationModel",
    "Location",
    "SiteOrchestrator",
    "SiteReport",
    "TypeRegistry",
    "load_model",
    "render_site",
]
