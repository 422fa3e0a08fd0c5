#!/usr/bin/env python3
"""
CV Export CLI

Renders CV documents (YAML/JSON) with a theme and layout and exports them.

Commands:
    export   - Export a CV as PDF, HTML archive, or Word instructions
    preview  - Write the rendered HTML page without printing it
    themes   - List the theme catalog
    layouts  - List the layout catalog
    check-theme - Validate a custom theme file

Examples:\n

    export_cv.py export data/cv.yaml                               # PDF with the CV's own theme

    export_cv.py export data/cv.yaml --format html                 # Offline HTML archive

    export_cv.py export data/cv.yaml -t elegant-purple -l academic-timeline

    export_cv.py preview data/cv.yaml --output preview.html        # Inspect markup in a browser

    export_cv.py themes                                            # List themes
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from scholarcv.contexts.composing import load_cv_document
from scholarcv.contexts.exporting import SUPPORTED_FORMATS, ExportError, export_cv
from scholarcv.contexts.exporting.logger import setup_exporting_logger
from scholarcv.contexts.rendering import TemplateRenderError, render_cv
from scholarcv.contexts.theming import (
    InvalidTheme,
    get_layout_registry,
    get_theme_registry,
    validate_custom_theme,
)
from scholarcv.utils.timestamp import now

load_dotenv()
PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", "."))
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
EXPORTS_PATH = Path(os.getenv("EXPORTS_PATH", "outs/exports"))


def display_path(path: Path) -> str:
    """Return path relative to PROJECT_ROOT for cleaner display."""
    try:
        return str(path.resolve().relative_to(PROJECT_ROOT.resolve()))
    except ValueError:
        return str(path)


def load_cv_or_exit(cv_file: Path):
    try:
        return load_cv_document(cv_file)
    except (OSError, ValueError) as e:
        typer.secho(f"Error: could not load {cv_file}: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


app = typer.Typer(
    help="Render CVs with themes and layouts and export them as PDF, HTML, or Word instructions",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("export")
def export_command(
    cv_file: Annotated[
        Path,
        typer.Argument(help="CV document (YAML or JSON)", exists=True, dir_okay=False),
    ],
    export_format: Annotated[
        str,
        typer.Option("--format", "-f", help=f"Export format: {', '.join(SUPPORTED_FORMATS)}"),
    ] = "pdf",
    theme_id: Annotated[
        Optional[str],
        typer.Option("--theme", "-t", help="Theme id (default: the CV's theme)"),
    ] = None,
    layout_id: Annotated[
        Optional[str],
        typer.Option("--layout", "-l", help="Layout id (default: the CV's layout)"),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output directory (default: EXPORTS_PATH)", file_okay=False),
    ] = None,
):
    """
    Export a CV document.

    The artifact is written to the output directory under the filename derived
    from the CV title. A session log is written under LOGS_PATH.

    Examples:\n

        $ export_cv.py export data/cv.yaml                      # PDF

        $ export_cv.py export data/cv.yaml --format html        # Zip archive

        $ export_cv.py export data/cv.yaml --format docx        # Word instructions
    """
    typer.secho(f"\nExporting: {cv_file}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Format: {export_format}")
    typer.echo("")

    cv = load_cv_or_exit(cv_file)
    log_file = setup_exporting_logger(LOGS_PATH / f"export_{now()}", export_format)

    try:
        artifact = export_cv(cv, export_format, theme_id=theme_id, layout_id=layout_id)
    except (ExportError, TemplateRenderError) as e:
        typer.secho(f"\n✗ Export failed: {e}\n", fg=typer.colors.RED, err=True)
        typer.echo(f"  Log: {display_path(log_file)}")
        raise typer.Exit(code=1)

    output_dir = output_dir or EXPORTS_PATH
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / artifact.filename
    output_path.write_bytes(artifact.content)

    typer.secho("\n✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  File: {display_path(output_path)} ({artifact.content_type}, {len(artifact.content)} bytes)")
    typer.echo(f"  Log: {display_path(log_file)}")
    typer.echo("")


@app.command("preview")
def preview_command(
    cv_file: Annotated[
        Path,
        typer.Argument(help="CV document (YAML or JSON)", exists=True, dir_okay=False),
    ],
    theme_id: Annotated[Optional[str], typer.Option("--theme", "-t", help="Theme id")] = None,
    layout_id: Annotated[Optional[str], typer.Option("--layout", "-l", help="Layout id")] = None,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="HTML file to write", dir_okay=False),
    ] = Path("preview.html"),
):
    """
    Render a CV to a single self-contained HTML file.

    Examples:\n

        $ export_cv.py preview data/cv.yaml -t minimal-gray -o out.html
    """
    cv = load_cv_or_exit(cv_file)
    try:
        rendered = render_cv(cv, theme_id=theme_id, layout_id=layout_id)
    except TemplateRenderError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered.markup, encoding="utf-8")
    typer.secho(f"\n✓ Wrote {display_path(output)}\n", fg=typer.colors.GREEN, bold=True)


@app.command("themes")
def themes_command():
    """List available themes (the first one is the default)."""
    registry = get_theme_registry()
    typer.secho(f"\nThemes ({len(registry)}):", fg=typer.colors.BLUE, bold=True)
    for theme in registry.themes():
        typer.echo(f"  {theme.id:<22} {theme.name}: {theme.description}")
    typer.echo("")


@app.command("layouts")
def layouts_command():
    """List available layouts (the first one is the default)."""
    registry = get_layout_registry()
    typer.secho(f"\nLayouts ({len(registry)}):", fg=typer.colors.BLUE, bold=True)
    for layout in registry.layouts():
        typer.echo(f"  {layout.id:<26} {layout.columns} col  {layout.name}: {layout.description}")
    typer.echo("")


@app.command("check-theme")
def check_theme_command(
    theme_file: Annotated[
        Path,
        typer.Argument(help="Custom theme (YAML or JSON)", exists=True, dir_okay=False),
    ],
):
    """
    Validate a custom theme file.

    Examples:\n

        $ export_cv.py check-theme my_theme.json
    """
    try:
        data = OmegaConf.to_container(OmegaConf.load(theme_file), resolve=True)
    except (OSError, ValueError) as e:
        typer.secho(f"Error: could not load {theme_file}: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    result = validate_custom_theme(data)
    if isinstance(result, InvalidTheme):
        typer.secho(f"\n✗ Invalid theme: {result.reason}\n", fg=typer.colors.RED, bold=True)
        raise typer.Exit(code=1)

    typer.secho(f"\n✓ Valid theme: {result.theme.id} ({result.theme.name})\n", fg=typer.colors.GREEN, bold=True)


if __name__ == "__main__":
    app()
