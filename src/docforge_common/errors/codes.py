"""Error code registry and type URIs for Problem Details.

Codes and URIs are stable identifiers surfaced in diagnostics and in the
Problem Details payloads printed by the CLI.

Examples
--------
>>> from docforge_common.errors.codes import ErrorCode, get_type_uri
>>> get_type_uri(ErrorCode.STAGING_FAILED)
'https://docforge.dev/problems/staging-failed'
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final

__all__ = [
    "BASE_TYPE_URI",
    "ErrorCode",
    "get_type_uri",
]

BASE_TYPE_URI: Final[str] = "https://docforge.dev/problems"


class ErrorCode(StrEnum):
    """Stable error codes for docforge exceptions and diagnostics.

    Attributes
    ----------
    MISSING_REFERENCE
        A referenced symbol has no registry or symbol index entry.
    AMBIGUOUS_REFERENCE
        A referenced symbol collides across documented entities.
    EXTERNAL_CONFIG_ERROR
        External type configuration could not be read or parsed.
    TEMPLATE_RENDER_ERROR
        The template engine failed for a page.
    OUTPUT_WRITE_ERROR
        A rendered page could not be written.
    STAGING_FAILED
        The output directory could not be prepared.
    MODEL_LOAD_ERROR
        The documentation model could not be loaded.
    CONFIGURATION_ERROR
        Runtime settings failed validation.
    RUNTIME_ERROR
        Unclassified failure.
    """

    MISSING_REFERENCE = "missing-reference"
    AMBIGUOUS_REFERENCE = "ambiguous-reference"
    EXTERNAL_CONFIG_ERROR = "external-config-error"
    TEMPLATE_RENDER_ERROR = "template-render-error"
    OUTPUT_WRITE_ERROR = "output-write-error"
    STAGING_FAILED = "staging-failed"
    MODEL_LOAD_ERROR = "model-load-error"
    CONFIGURATION_ERROR = "configuration-error"
    RUNTIME_ERROR = "runtime-error"


def get_type_uri(code: ErrorCode) -> str:
    """Return the Problem Details type URI for ``code``."""
    return f"{BASE_TYPE_URI}/{code.value}"
