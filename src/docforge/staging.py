"""Prepare the output directory before any page is rendered.

Staging wipes the output directory, recreates it and copies the theme
resource bundle into it. The returned :class:`StagedOutput` handle is the
only way to obtain a destination for pages, so nothing can be written
before staging has succeeded.
"""

from __future__ import annotations

import asyncio
import shutil
from dataclasses import dataclass
from pathlib import Path

from docforge_common.errors import StagingError
from docforge_common.logging import get_logger

__all__ = ["StagedOutput", "stage_output_directory"]

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class StagedOutput:
    """Output directory that has been wiped and populated with resources."""

    root: Path

    def subdirectory(self, name: str) -> Path:
        """Create (if needed) and return the category directory ``name``."""
        path = self.root / name
        path.mkdir(exist_ok=True)
        return path

    def page_path(self, output: str) -> Path:
        """Return the file a page named ``output`` is written to."""
        return self.root / f"{output}.html"


def _clear_directory(directory: Path) -> None:
    if not directory.exists():
        return
    for child in directory.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


def _stage(resources_dir: Path, output_dir: Path) -> StagedOutput:
    _clear_directory(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    if resources_dir.is_dir():
        shutil.copytree(resources_dir, output_dir, dirs_exist_ok=True)
    return StagedOutput(output_dir)


async def stage_output_directory(resources_dir: Path, output_dir: Path) -> StagedOutput:
    """Wipe ``output_dir``, recreate it and copy ``resources_dir`` into it.

    Parameters
    ----------
    resources_dir : Path
        Static resource bundle of the theme (stylesheets, scripts, images).
    output_dir : Path
        Site root.

    Returns
    -------
    StagedOutput
        Handle on the prepared directory.

    Raises
    ------
    StagingError
        If any filesystem operation fails. The run cannot continue.
    """
    try:
        staged = await asyncio.to_thread(_stage, resources_dir, output_dir)
    except OSError as exc:
        msg = f"Cannot stage output directory {output_dir}"
        raise StagingError(
            msg,
            cause=exc,
            context={"output_dir": str(output_dir), "resources_dir": str(resources_dir)},
        ) from exc
    logger.debug(
        "Output directory staged",
        extra={"operation": "stage_output", "output_dir": str(output_dir)},
    )
    return staged
