"""Merge caller-supplied type URL overrides into the type registry.

The ``external_types`` option is either a mapping of type name to URL or
the path of a JSON file holding such a mapping. A missing or malformed
file never aborts the run: the failure is logged once and rendering
proceeds with the built-in types only.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

import msgspec

from docforge_common.errors import ExternalConfigError
from docforge_common.logging import get_logger

if TYPE_CHECKING:
    from docforge.registry import TypeRegistry

__all__ = ["load_external_types", "read_external_types"]

logger = get_logger(__name__)

_DECODER = msgspec.json.Decoder(dict[str, str])


def read_external_types(path: str | Path) -> dict[str, str]:
    """Read a JSON mapping of type name to URL from ``path``.

    Raises
    ------
    ExternalConfigError
        If the file cannot be read, or does not hold a name-to-URL mapping.
    """
    try:
        content = Path(path).read_text(encoding="utf-8").strip()
    except OSError as exc:
        msg = f"external-types: Cannot open {path}"
        raise ExternalConfigError(msg, cause=exc, context={"path": str(path)}) from exc
    try:
        return _DECODER.decode(content)
    except (msgspec.DecodeError, msgspec.ValidationError) as exc:
        msg = "external-types: Invalid JSON file"
        raise ExternalConfigError(msg, cause=exc, context={"path": str(path)}) from exc


def load_external_types(
    registry: TypeRegistry, config: Mapping[str, str] | str | Path | None
) -> int:
    """Register the external types described by ``config`` into ``registry``.

    Parameters
    ----------
    registry : TypeRegistry
        Registry to extend; entries override built-ins of the same name.
    config : Mapping[str, str] | str | Path | None
        Inline mapping, or path to a JSON file. ``None`` is a no-op.

    Returns
    -------
    int
        Number of types registered.
    """
    if not config:
        return 0
    if isinstance(config, Mapping):
        types = {str(name): str(url) for name, url in config.items()}
    else:
        try:
            types = read_external_types(config)
        except ExternalConfigError as exc:
            logger.warning(
                exc.message,
                extra={
                    "operation": "load_external_types",
                    "code": exc.code.value,
                    "path": str(config),
                },
            )
            return 0
    registry.update(types)
    logger.debug(
        "External types registered",
        extra={"operation": "load_external_types", "count": len(types)},
    )
    return len(types)
