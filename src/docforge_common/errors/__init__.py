"""Exception hierarchy and Problem Details support.

Examples
--------
>>> from docforge_common.errors import DocForgeError, ErrorCode
>>> try:
...     raise DocForgeError("Operation failed", code=ErrorCode.RUNTIME_ERROR)
... except DocForgeError as e:
...     details = e.to_problem_details(instance="urn:docforge:render")
...     assert details["type"] == "https://docforge.dev/problems/runtime-error"
"""

from __future__ import annotations

from docforge_common.errors.codes import BASE_TYPE_URI, ErrorCode, get_type_uri
from docforge_common.errors.exceptions import (
    DocForgeError,
    ExternalConfigError,
    ModelLoadError,
    OutputWriteError,
    SettingsError,
    StagingError,
    TemplateRenderError,
)

__all__ = [
    "BASE_TYPE_URI",
    "DocForgeError",
    "ErrorCode",
    "ExternalConfigError",
    "ModelLoadError",
    "OutputWriteError",
    "SettingsError",
    "StagingError",
    "TemplateRenderError",
    "get_type_uri",
]
