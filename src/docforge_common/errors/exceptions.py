"""Typed exception hierarchy with Problem Details support.

All docforge exceptions inherit from DocForgeError, which provides
structured fields and RFC 9457 Problem Details mapping.

Examples
--------
>>> from docforge_common.errors import StagingError, ErrorCode
>>> try:
...     raise StagingError("Cannot prepare doc/", cause=PermissionError("denied"))
... except StagingError as e:
...     assert e.code == ErrorCode.STAGING_FAILED
...     details = e.to_problem_details(instance="urn:docforge:render")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from docforge_common.errors.codes import ErrorCode, get_type_uri

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = [
    "DocForgeError",
    "ExternalConfigError",
    "ModelLoadError",
    "OutputWriteError",
    "SettingsError",
    "StagingError",
    "TemplateRenderError",
]


class DocForgeError(Exception):
    """Base exception for all docforge errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    code : ErrorCode, optional
        Stable error code. Defaults to ``ErrorCode.RUNTIME_ERROR``.
    status : int, optional
        Problem Details status. Defaults to 500.
    log_level : int, optional
        Level used when the error is logged. Defaults to ``logging.ERROR``.
    cause : Exception | None, optional
        Underlying exception, chained as ``__cause__``.
    context : Mapping[str, object] | None, optional
        Additional structured context.

    Attributes
    ----------
    message : str
        Human-readable error message.
    code : ErrorCode
        Error code enum value.
    status : int
        Problem Details status.
    log_level : int
        Logging level for error logging.
    context : dict[str, object]
        Additional context dictionary for error details.
    """

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode = ErrorCode.RUNTIME_ERROR,
        status: int = 500,
        log_level: int = logging.ERROR,
        cause: Exception | None = None,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.log_level = log_level
        self.context: dict[str, object] = dict(context) if context else {}
        if cause is not None:
            self.__cause__ = cause

    def to_problem_details(
        self,
        instance: str | None = None,
        title: str | None = None,
    ) -> dict[str, Any]:
        """Convert to an RFC 9457 Problem Details mapping.

        Parameters
        ----------
        instance : str | None, optional
            URI identifying the specific occurrence.
        title : str | None, optional
            Short summary. Defaults to the exception class name.

        Returns
        -------
        dict[str, Any]
            Problem Details payload with type, title, status, detail,
            instance, code and, when present, extensions.
        """
        problem: dict[str, Any] = {
            "type": get_type_uri(self.code),
            "title": title or self.__class__.__name__,
            "status": self.status,
            "detail": self.message,
            "instance": instance or "urn:docforge:error",
            "code": self.code.value,
        }
        if self.context:
            problem["extensions"] = {key: str(value) for key, value in self.context.items()}
        return problem

    def __str__(self) -> str:
        """Return ``ClassName[code]: message`` plus the cause type when chained."""
        base = f"{self.__class__.__name__}[{self.code.value}]: {self.message}"
        if self.__cause__:
            base += f" (caused by: {type(self.__cause__).__name__})"
        return base


class ExternalConfigError(DocForgeError):
    """External type configuration is unreadable or malformed.

    Raised by the external type loader and absorbed at load time; the run
    falls back to the built-in types.
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.EXTERNAL_CONFIG_ERROR,
            status=422,
            log_level=logging.WARNING,
            cause=cause,
            context=context,
        )


class TemplateRenderError(DocForgeError):
    """The template engine failed to produce a page."""

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.TEMPLATE_RENDER_ERROR,
            cause=cause,
            context=context,
        )


class OutputWriteError(DocForgeError):
    """A rendered page could not be written to the output directory."""

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.OUTPUT_WRITE_ERROR,
            status=507,
            cause=cause,
            context=context,
        )


class StagingError(DocForgeError):
    """The output directory could not be wiped, recreated or populated.

    Every page render depends on staging, so this error aborts the run.
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.STAGING_FAILED,
            log_level=logging.CRITICAL,
            cause=cause,
            context=context,
        )


class ModelLoadError(DocForgeError):
    """The serialized documentation model could not be read or decoded."""

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.MODEL_LOAD_ERROR,
            status=422,
            cause=cause,
            context=context,
        )


class SettingsError(DocForgeError):
    """Runtime settings failed validation."""

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.CONFIGURATION_ERROR,
            cause=cause,
            context=context,
        )
