"""Command line entry point rendering a documentation model into a site."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from docforge.loader import load_model
from docforge.orchestrator import render_site
from docforge_common.errors import DocForgeError
from docforge_common.logging import get_logger, setup_logging
from docforge_common.settings import load_settings

__all__ = ["app", "render"]

LOGGER = get_logger(__name__)

app = typer.Typer(
    help="Render a parsed documentation model into a static HTML site.",
    no_args_is_help=True,
    add_completion=False,
)


def _fail(error: DocForgeError) -> typer.Exit:
    LOGGER.log(
        error.log_level,
        str(error),
        extra={"operation": "render_site", "code": error.code.value},
    )
    problem = error.to_problem_details(instance="urn:docforge:cli:render")
    typer.echo(json.dumps(problem, indent=2), err=True)
    return typer.Exit(code=1)


@app.callback()
def main() -> None:
    """Docforge site renderer."""


@app.command()
def render(
    model_path: Annotated[
        Path,
        typer.Argument(help="JSON documentation model written by the parser.", metavar="MODEL"),
    ],
    project_dir: Annotated[
        Path | None,
        typer.Option("--project-dir", "-p", help="Root of the documented project."),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output directory, relative to the project."),
    ] = None,
    readme: Annotated[
        Path | None,
        typer.Option("--readme", help="Directory holding the README.md used as homepage."),
    ] = None,
    external_types: Annotated[
        str | None,
        typer.Option(
            "--external-types",
            help="JSON file mapping type names to documentation URLs.",
            metavar="FILE",
        ),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Do not log every file created."),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)."),
    ] = None,
) -> None:
    """Render MODEL into the project's output directory.

    Raises
    ------
    typer.Exit
        With code 1 when settings, the model or the output directory are unusable.
    """
    try:
        settings = load_settings(
            project_dir=project_dir,
            output=output,
            readme=readme,
            external_types=external_types,
            quiet=quiet or None,
            log_level=log_level,
        )
    except DocForgeError as exc:
        raise _fail(exc) from exc
    setup_logging(settings.log_level)

    try:
        model = load_model(model_path)
        report = render_site(model, settings)
    except DocForgeError as exc:
        raise _fail(exc) from exc

    typer.echo(
        f"{len(report.written)} pages written to {report.output_dir}"
        + (f", {len(report.failed)} failed" if report.failed else "")
    )
