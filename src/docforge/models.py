"""Typed documentation model consumed by the rendering stage.

The model is produced upstream by the comment parser; this module only
describes its shape. All structs are frozen: rendering derives new
collections (for example sorted properties) and never mutates the model.
"""

from __future__ import annotations

from typing import Final, Literal

import msgspec

__all__ = [
    "AMBIGUOUS",
    "ClassDoc",
    "DocumentationModel",
    "Feature",
    "Guide",
    "IndexEntry",
    "Location",
    "ModuleDoc",
    "Page",
    "Param",
    "Property",
    "RestApi",
    "SourceFile",
    "sorted_properties",
]

AMBIGUOUS: Final = "DUPLICATED ENTRY"


class Location(msgspec.Struct, frozen=True):
    """Page and anchor a symbol resolves to."""

    filename: str
    anchor_id: str


IndexEntry = Location | Literal["DUPLICATED ENTRY"]


class Param(msgspec.Struct, frozen=True, omit_defaults=True):
    """Parameter of a method, constructor or REST endpoint."""

    name: str
    type: str | None = None
    description: str | None = None
    optional: bool = False


class Property(msgspec.Struct, frozen=True, omit_defaults=True):
    """Member documented on a class, module or feature."""

    name: str
    kind: str = "property"
    type: str | None = None
    description: str | None = None
    anchor_id: str | None = None
    params: tuple[Param, ...] = ()
    returns: str | None = None
    see_also: tuple[str, ...] = ()
    static: bool = False


class Guide(msgspec.Struct, frozen=True, omit_defaults=True):
    """Free-form markdown guide."""

    name: str
    filename: str
    content: str | None = None


class Page(msgspec.Struct, frozen=True, omit_defaults=True):
    """Stand-alone documentation page, listed on the aggregate pages page."""

    name: str
    filename: str
    content: str | None = None
    anchor_id: str | None = None


class RestApi(msgspec.Struct, frozen=True, omit_defaults=True):
    """REST endpoint, listed on the aggregate REST APIs page."""

    name: str
    filename: str
    method: str = "GET"
    path: str = "/"
    description: str | None = None
    anchor_id: str | None = None
    params: tuple[Param, ...] = ()
    returns: str | None = None


class ClassDoc(msgspec.Struct, frozen=True, omit_defaults=True):
    """Documented class."""

    name: str
    filename: str
    defined_in: str | None = None
    description: str | None = None
    extends: tuple[str, ...] = ()
    properties: tuple[Property, ...] = ()


class ModuleDoc(msgspec.Struct, frozen=True, omit_defaults=True):
    """Documented module."""

    name: str
    filename: str
    defined_in: str | None = None
    description: str | None = None
    properties: tuple[Property, ...] = ()


class Feature(msgspec.Struct, frozen=True, omit_defaults=True):
    """Documented feature: a named group of properties spanning classes."""

    name: str
    filename: str
    description: str | None = None
    properties: tuple[Property, ...] = ()


class SourceFile(msgspec.Struct, frozen=True, omit_defaults=True):
    """Source file rendered verbatim."""

    name: str
    filename: str
    content: str | None = None


class DocumentationModel(msgspec.Struct, frozen=True):
    """Symbol index plus the ordered entity collections of one codebase.

    Attributes
    ----------
    symbol_index : dict[str, IndexEntry]
        Case-sensitive symbol name to location, or ``AMBIGUOUS`` when the
        name collides across documented entities.
    """

    symbol_index: dict[str, IndexEntry] = msgspec.field(default_factory=dict)
    guides: tuple[Guide, ...] = ()
    pages: tuple[Page, ...] = ()
    restapis: tuple[RestApi, ...] = ()
    classes: tuple[ClassDoc, ...] = ()
    modules: tuple[ModuleDoc, ...] = ()
    features: tuple[Feature, ...] = ()
    files: tuple[SourceFile, ...] = ()

    def entry(self, name: str) -> IndexEntry | None:
        """Return the symbol index entry for ``name``, or ``None`` when absent."""
        return self.symbol_index.get(name)

    def location(self, name: str) -> Location | None:
        """Return the unique location of ``name``; ``None`` when absent or ambiguous."""
        entry = self.symbol_index.get(name)
        if isinstance(entry, Location):
            return entry
        return None


def sorted_properties(properties: tuple[Property, ...]) -> tuple[Property, ...]:
    """Return ``properties`` ordered by name (case-sensitive, code point order)."""
    return tuple(sorted(properties, key=lambda prop: prop.name))
