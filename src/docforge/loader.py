"""Load the serialized documentation model produced by the comment parser."""

from __future__ import annotations

from typing import TYPE_CHECKING

import msgspec

from docforge.models import DocumentationModel
from docforge_common.errors import ModelLoadError
from docforge_common.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

__all__ = ["decode_model", "load_model"]

logger = get_logger(__name__)

_DECODER = msgspec.json.Decoder(DocumentationModel)


def decode_model(payload: bytes | str) -> DocumentationModel:
    """Decode a JSON payload into a :class:`DocumentationModel`.

    Raises
    ------
    ModelLoadError
        If the payload is not valid JSON or does not match the model schema.
    """
    try:
        return _DECODER.decode(payload)
    except (msgspec.ValidationError, msgspec.DecodeError) as exc:
        msg = f"Invalid documentation model: {exc}"
        raise ModelLoadError(msg, cause=exc) from exc


def load_model(path: Path) -> DocumentationModel:
    """Read and decode the documentation model stored at ``path``.

    Parameters
    ----------
    path : Path
        JSON file written by the model builder.

    Returns
    -------
    DocumentationModel
        Decoded model.

    Raises
    ------
    ModelLoadError
        If the file cannot be read or decoded.
    """
    try:
        payload = path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read documentation model {path}"
        raise ModelLoadError(msg, cause=exc, context={"path": str(path)}) from exc
    try:
        model = decode_model(payload)
    except ModelLoadError as exc:
        exc.context.setdefault("path", str(path))
        raise
    logger.debug(
        "Documentation model loaded",
        extra={
            "operation": "load_model",
            "path": str(path),
            "symbols": len(model.symbol_index),
        },
    )
    return model
