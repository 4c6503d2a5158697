"""Runtime settings with typed configuration and fail-fast validation.

This module provides RenderSettings (pydantic_settings.BaseSettings) with
environment variable support (``DOCFORGE_*``) and fail-fast SettingsError
on validation errors.

Examples
--------
>>> from docforge_common.settings import load_settings
>>> settings = load_settings(project_dir="/tmp/project", output="site")
>>> settings.output_dir.name
'site'
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docforge_common.errors import SettingsError
from docforge_common.logging import get_logger

__all__ = [
    "RenderSettings",
    "load_settings",
]

logger = get_logger(__name__)

# Option names of the original command line, accepted as keyword overrides only.
_LEGACY_KEYS: Final[dict[str, str]] = {"external-types": "external_types", "quite": "quiet"}


class RenderSettings(BaseSettings):
    """Options recognised by the rendering stage (``DOCFORGE_*`` namespace)."""

    model_config = SettingsConfigDict(
        env_prefix="DOCFORGE_",
        extra="forbid",
        case_sensitive=False,
    )

    project_dir: Path = Field(
        default_factory=Path.cwd, description="Root of the documented project"
    )
    output: str = Field(
        default="doc", description="Output directory, relative to project_dir"
    )
    readme: Path | None = Field(
        default=None, description="Directory holding README.md (defaults to project_dir)"
    )
    external_types: dict[str, str] | str | None = Field(
        default=None,
        description="Mapping of type name to URL, or path to a JSON file holding one",
    )
    quiet: bool = Field(
        default=False,
        description="Suppress per-file success logging",
    )
    theme: str = Field(default="default", description="Name of the bundled theme")
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    def __init__(self, **overrides: object) -> None:
        """Initialise settings with fail-fast validation."""
        try:
            super().__init__(**overrides)  # type: ignore[arg-type]
        except Exception as exc:
            msg = f"Configuration validation failed: {exc}"
            logger.exception(
                "Settings validation failed",
                extra={"error": str(exc), "error_type": type(exc).__name__},
            )
            raise SettingsError(
                msg,
                cause=exc,
                context={"validation_error": str(exc)},
            ) from exc

    @model_validator(mode="before")
    @classmethod
    def _rename_legacy_keys(cls, value: object) -> object:
        """Map ``external-types`` and ``quite`` onto their field names."""
        if not isinstance(value, Mapping):
            return value
        data = dict(value)
        for legacy, field_name in _LEGACY_KEYS.items():
            if legacy in data:
                data.setdefault(field_name, data.pop(legacy))
        return data

    @property
    def output_dir(self) -> Path:
        """Absolute output directory (``project_dir / output``)."""
        return (self.project_dir / self.output).resolve()

    @property
    def readme_path(self) -> Path:
        """Location of the README rendered as the site homepage."""
        return (self.readme or self.project_dir) / "README.md"


def load_settings(**overrides: object) -> RenderSettings:
    """Load :class:`RenderSettings`, dropping overrides explicitly set to ``None``.

    Parameters
    ----------
    **overrides : object
        Field values (or their aliases) taking precedence over the environment.

    Returns
    -------
    RenderSettings
        Validated settings.

    Raises
    ------
    SettingsError
        If validation fails.
    """
    cleaned = {key: value for key, value in overrides.items() if value is not None}
    return RenderSettings(**cleaned)
