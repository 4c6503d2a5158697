"""Tests for output directory staging."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from docforge.staging import StagedOutput, stage_output_directory
from docforge_common.errors import ErrorCode, StagingError

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def resources(tmp_path: Path) -> Path:
    bundle = tmp_path / "resources"
    (bundle / "css").mkdir(parents=True)
    (bundle / "css" / "style.css").write_text("body {}", encoding="utf-8")
    (bundle / "logo.png").write_bytes(b"\x89PNG")
    return bundle


@pytest.mark.asyncio
async def test_stage_creates_directory_and_copies_resources(
    resources: Path, tmp_path: Path
) -> None:
    output = tmp_path / "project" / "doc"

    staged = await stage_output_directory(resources, output)

    assert staged == StagedOutput(output)
    assert (output / "css" / "style.css").read_text(encoding="utf-8") == "body {}"
    assert (output / "logo.png").exists()


@pytest.mark.asyncio
async def test_stage_wipes_previous_output(resources: Path, tmp_path: Path) -> None:
    output = tmp_path / "doc"
    (output / "classes").mkdir(parents=True)
    (output / "classes" / "stale.html").write_text("old", encoding="utf-8")
    (output / "index.html").write_text("old", encoding="utf-8")

    await stage_output_directory(resources, output)

    assert not (output / "classes").exists()
    assert not (output / "index.html").exists()
    assert (output / "css" / "style.css").exists()


@pytest.mark.asyncio
async def test_stage_failure_is_fatal(resources: Path, tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(StagingError) as excinfo:
        await stage_output_directory(resources, blocker / "doc")

    assert excinfo.value.code is ErrorCode.STAGING_FAILED
    assert isinstance(excinfo.value.__cause__, OSError)


def test_subdirectory_is_idempotent(tmp_path: Path) -> None:
    staged = StagedOutput(tmp_path)

    first = staged.subdirectory("guides")
    second = staged.subdirectory("guides")

    assert first == second == tmp_path / "guides"
    assert first.is_dir()


def test_page_path_appends_extension(tmp_path: Path) -> None:
    assert StagedOutput(tmp_path).page_path("classes/widget") == tmp_path / "classes" / "widget.html"
