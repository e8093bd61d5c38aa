#!/usr/bin/env python3
"""
Static Site Build CLI

Renders the content tree to HTML after verifying its front-matter.

Commands:
    build - Render the site to the output directory
    list  - List every document with its layout and URL

Examples:\n

    build_site.py build                          # content/ -> outs/site/

    build_site.py build --output /tmp/site       # Custom output directory

    build_site.py list                           # Show what would be built
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.checking import check_site, generate_feedback_report
from folio.contexts.content import DuplicateURLError, InvalidSiteConfigError, SiteContent
from folio.contexts.rendering import build_site
from folio.contexts.rendering.logger import setup_rendering_logger
from folio.utils.logger import session_log_dir
from folio.utils.text_processing import truncate_display

load_dotenv()
PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", Path(__file__).resolve().parent.parent))
CONTENT_PATH = Path(os.getenv("CONTENT_PATH", PROJECT_ROOT / "content"))
SITE_OUTPUT_PATH = Path(os.getenv("SITE_OUTPUT_PATH", PROJECT_ROOT / "outs" / "site"))
LOGS_PATH = Path(os.getenv("LOGS_PATH", PROJECT_ROOT / "outs" / "logs"))


def display_path(path: Path) -> str:
    """Return path relative to PROJECT_ROOT for cleaner display."""
    try:
        return str(path.resolve().relative_to(PROJECT_ROOT))
    except ValueError:
        return str(path)


app = typer.Typer(
    help="Render the site content to static HTML",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("build")
def build_command(
    content_root: Annotated[
        Optional[Path], typer.Argument(help="Content root (defaults to CONTENT_PATH)", show_default=False)
    ] = None,
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output directory (defaults to SITE_OUTPUT_PATH)"
    ),
    clean: bool = typer.Option(True, "--clean/--no-clean", help="Empty the output directory first"),
):
    """
    Render the site. Refuses to build when front-matter checks fail.
    """
    content_root = content_root or CONTENT_PATH
    output = output or SITE_OUTPUT_PATH

    if not content_root.is_dir():
        typer.secho(f"Content root not found: {content_root}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    log_file = setup_rendering_logger(session_log_dir(LOGS_PATH, "build"), content_root, output)

    try:
        site = SiteContent.load(content_root)
    except InvalidSiteConfigError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    report = check_site(site)
    if not report.is_valid:
        typer.echo(generate_feedback_report(report, include_warnings=False))
        typer.secho("\n✗ Content checks failed, not building", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        result = build_site(site, output, clean=clean)
    except (DuplicateURLError, ValueError) as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(f"\nLog: {log_file}")
    if not result.success:
        for error in result.errors:
            typer.secho(f"  {error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(
        f"\n✓ Wrote {len(result.written)} files to {display_path(result.output_dir)}",
        fg=typer.colors.GREEN,
    )


@app.command("list")
def list_command(
    content_root: Annotated[
        Optional[Path], typer.Argument(help="Content root (defaults to CONTENT_PATH)", show_default=False)
    ] = None,
):
    """
    List every document with identifier, layout, URL and title.
    """
    content_root = content_root or CONTENT_PATH
    if not content_root.is_dir():
        typer.secho(f"Content root not found: {content_root}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        site = SiteContent.load(content_root)
    except InvalidSiteConfigError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\n{len(site)} document(s) in {display_path(content_root)}", fg=typer.colors.BLUE, bold=True)
    for document in site:
        typer.echo(
            f"  {document.identifier:<50} {document.layout.value:<5} "
            f"{document.url:<60} {truncate_display(document.title, 50)}"
        )

    if site.load_errors:
        typer.secho(f"\n{len(site.load_errors)} file(s) failed to load:", fg=typer.colors.YELLOW, err=True)
        for path, error in site.load_errors:
            typer.echo(f"  {display_path(path)}: {error.message}", err=True)


if __name__ == "__main__":
    app()
