"""Turn symbol names, type expressions and inline markers into HTML links.

Three resolution entry points share one symbol index and one type registry:

``type_link``
    Resolves a type expression. ``[Name](url)`` declares and links an
    external type, ``Outer<Inner>`` resolves both halves recursively, and a
    bare name is looked up in the registry, then in the symbol index.
``see_link``
    Links ``text`` when it names a unique symbol; otherwise returns it as is.
``convert_link``
    Replaces every ``[[#Name]]`` marker in a block of text.

Unresolvable names never raise. They render as a ``missing-link`` span and
log one diagnostic telling an ambiguous name from an unknown one.

Examples
--------
>>> from docforge.models import DocumentationModel, Location
>>> from docforge.registry import TypeRegistry
>>> model = DocumentationModel(symbol_index={"Widget": Location("widget", "class-widget")})
>>> resolver = CrossReferenceResolver(model, TypeRegistry())
>>> resolver.type_link("../", "Widget")
"<a href='../widget.html#class-widget'>Widget</a>"
"""

from __future__ import annotations

import html
import re
from functools import partial
from typing import TYPE_CHECKING, Final, Protocol

from docforge.models import AMBIGUOUS, Location
from docforge_common.errors import ErrorCode
from docforge_common.logging import get_logger

if TYPE_CHECKING:
    from docforge.models import DocumentationModel
    from docforge.registry import TypeRegistry

__all__ = [
    "CrossReferenceResolver",
    "LinkExpander",
    "SeeLinkResolver",
    "TypeLinkResolver",
]

logger = get_logger(__name__)

_OVERRIDE_PATTERN: Final = re.compile(r"\[(.*)\]\((.*)\)")
_GENERIC_PATTERN: Final = re.compile(r"(.*?)<(.*)>")
_INLINE_PATTERN: Final = re.compile(r"\[\[#([^\[\]]+)\]\]")


class TypeLinkResolver(Protocol):
    """Callable resolving a type expression relative to a page."""

    def __call__(self, rel_path: str, expression: str | None, /) -> str | None: ...


class SeeLinkResolver(Protocol):
    """Callable linking a see-also reference relative to a page."""

    def __call__(self, rel_path: str, text: str, /) -> str: ...


class LinkExpander(Protocol):
    """Callable expanding inline ``[[#Name]]`` markers relative to a page."""

    def __call__(self, rel_path: str, text: str | None, /) -> str: ...


def _anchor(href: str, text: str) -> str:
    return f"<a href='{html.escape(href)}'>{html.escape(text, quote=False)}</a>"


def _location_href(rel_path: str, location: Location) -> str:
    return f"{rel_path}{location.filename}.html#{location.anchor_id}"


class CrossReferenceResolver:
    """Resolve references against a documentation model and a type registry.

    Parameters
    ----------
    model : DocumentationModel
        Source of the symbol index. Only read.
    registry : TypeRegistry
        Type URLs. Extended when a ``[Name](url)`` expression is resolved.
    """

    def __init__(self, model: DocumentationModel, registry: TypeRegistry) -> None:
        self.model = model
        self.registry = registry

    def type_link(
        self, rel_path: str, expression: str | None, context: str | None = None
    ) -> str | None:
        """Resolve ``expression`` into an HTML fragment.

        Parameters
        ----------
        rel_path : str
            Prefix from the rendering page to the site root (``"./"``, ``"../"``).
        expression : str | None
            Type name, ``Outer<Inner>`` generic, or ``[Name](url)`` declaration.
        context : str | None, optional
            Appended to missing-link diagnostics, e.g. ``"(in lib/foo.js)"``.

        Returns
        -------
        str | None
            Anchor or ``missing-link`` span; empty input is returned unchanged.

        Notes
        -----
        The generic inner part is resolved as a single name, so
        ``Map<K, V>`` looks up ``"K, V"``.
        """
        if not expression:
            return expression

        declared = _OVERRIDE_PATTERN.search(expression)
        if declared:
            name, url = declared.group(1), declared.group(2)
            self.registry.register(name, url)
            return _anchor(url, name)

        generic = _GENERIC_PATTERN.search(expression)
        if generic:
            outer = self.type_link(rel_path, generic.group(1), context) or ""
            inner = self.type_link(rel_path, generic.group(2), context) or ""
            return f"{outer}&lt;{inner}&gt;"

        url = self.registry.lookup(expression)
        if url is not None:
            return _anchor(url, expression)
        location = self.model.location(expression)
        if location is None:
            return self.missing_link(expression, context)
        return _anchor(_location_href(rel_path, location), expression)

    def see_link(self, rel_path: str, text: str) -> str:
        """Link ``text`` to its symbol when it names a unique symbol.

        Unknown and ambiguous names are returned unchanged without a
        diagnostic.
        """
        location = self.model.location(text)
        if location is None:
            return text
        return _anchor(_location_href(rel_path, location), text)

    def convert_link(self, rel_path: str, text: str | None) -> str:
        """Replace every ``[[#Name]]`` marker of ``text`` with a link.

        Returns
        -------
        str
            Expanded text; ``""`` for empty input.
        """
        if not text:
            return ""

        def _replace(match: re.Match[str]) -> str:
            name = match.group(1)
            location = self.model.location(name)
            if location is None:
                return self.missing_link(name)
            return _anchor(_location_href(rel_path, location), name)

        return _INLINE_PATTERN.sub(_replace, text)

    def missing_link(self, name: str, context: str | None = None) -> str:
        """Log why ``name`` cannot be linked and return a flagged span."""
        if self.model.entry(name) == AMBIGUOUS:
            message = f"'{name}' link is ambiguous"
            code = ErrorCode.AMBIGUOUS_REFERENCE
            reason = "ambiguous"
        else:
            message = f"'{name}' link does not exist"
            code = ErrorCode.MISSING_REFERENCE
            reason = "missing"
        logger.warning(
            f"{message} {context}" if context else message,
            extra={
                "operation": "resolve_link",
                "code": code.value,
                "symbol": name,
                "reason": reason,
                "context": context,
            },
        )
        return f"<span class='missing-link'>{html.escape(name, quote=False)}</span>"

    def type_link_in(self, context: str) -> TypeLinkResolver:
        """Return a ``type_link`` variant whose diagnostics mention ``context``."""
        return partial(self.type_link, context=context)
