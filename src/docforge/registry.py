"""Run-scoped mapping of type names to documentation URLs."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

__all__ = ["BUILTIN_TYPES", "MDN_BASE_URL", "TypeRegistry"]

MDN_BASE_URL: Final[str] = "https://developer.mozilla.org/en/JavaScript/Reference/Global_Objects"

BUILTIN_TYPES: Final[Mapping[str, str]] = {
    name: f"{MDN_BASE_URL}/{name}"
    for name in (
        "Object",
        "Boolean",
        "String",
        "Array",
        "Number",
        "Date",
        "Function",
        "RegExp",
        "Error",
        "undefined",
    )
}


class TypeRegistry:
    """Type name to URL mapping shared by every page of one run.

    Seeded with the built-in types on construction, then extended by the
    external type configuration and by inline ``[Name](url)`` declarations
    met while rendering. Registration overwrites silently; the last write
    wins. Updates are serialised by a lock so concurrent renders never
    observe a torn mapping.
    """

    def __init__(self, types: Mapping[str, str] | None = None) -> None:
        self._lock = threading.Lock()
        self._types: dict[str, str] = {}
        self.seed_builtins()
        if types:
            self.update(types)

    def seed_builtins(self) -> None:
        """Register the built-in primitive types."""
        self.update(BUILTIN_TYPES)

    def lookup(self, name: str) -> str | None:
        """Return the URL registered for ``name``, if any."""
        return self._types.get(name)

    def register(self, name: str, url: str) -> None:
        """Map ``name`` to ``url``, replacing any previous registration."""
        with self._lock:
            self._types[name] = url

    def update(self, types: Mapping[str, str]) -> None:
        """Register every pair of ``types``."""
        with self._lock:
            self._types.update(types)

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the current registrations."""
        with self._lock:
            return dict(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._types)
