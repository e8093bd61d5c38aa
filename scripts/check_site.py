#!/usr/bin/env python3
"""
Content Integrity CLI

Checks the site content: front-matter schema, titles, permalink uniqueness,
self-contained documents, and hyperlinks.

Commands:
    frontmatter - Schema, title, permalink and cross-reference checks
    links       - Internal link resolution and external reachability
    all         - Both of the above

Examples:\n

    check_site.py frontmatter                    # Check the default content root

    check_site.py links --offline                # Internal links and anchors only

    check_site.py all path/to/content            # Everything, explicit content root
"""

import os
import time
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.checking import check_links, check_site, generate_feedback_report
from folio.contexts.checking.logger import log_report_result, setup_checking_logger
from folio.contexts.checking.results import SiteCheckReport
from folio.contexts.content import InvalidSiteConfigError, SiteContent
from folio.utils.logger import session_log_dir

load_dotenv()
PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", Path(__file__).resolve().parent.parent))
CONTENT_PATH = Path(os.getenv("CONTENT_PATH", PROJECT_ROOT / "content"))
LOGS_PATH = Path(os.getenv("LOGS_PATH", PROJECT_ROOT / "outs" / "logs"))

app = typer.Typer(
    help="Check site content integrity (front-matter, permalinks, links)",
    add_completion=False,
    invoke_without_command=True,
)

ContentRootArg = Annotated[
    Optional[Path],
    typer.Argument(help="Content root (defaults to CONTENT_PATH)", show_default=False),
]


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _run(content_root: Optional[Path], structure: bool, links: bool, offline: bool, session: str) -> None:
    content_root = content_root or CONTENT_PATH
    if not content_root.is_dir():
        typer.secho(f"Content root not found: {content_root}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    log_dir = session_log_dir(LOGS_PATH, session)
    log_file = setup_checking_logger(log_dir, content_root, offline=offline)
    start_time = time.time()

    try:
        site = SiteContent.load(content_root)
    except InvalidSiteConfigError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    report = check_site(site) if structure else SiteCheckReport()
    if links:
        report.results.append(check_links(site, offline=offline))

    log_report_result(report, time.time() - start_time)

    if report.issues:
        typer.echo(generate_feedback_report(report))

    typer.echo(f"\nLog: {log_file}")
    if not report.is_valid:
        typer.secho(f"\n✗ {len(report.errors)} error(s)", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\n✓ {len(site)} documents checked", fg=typer.colors.GREEN)


@app.command("frontmatter")
def frontmatter_command(content_root: ContentRootArg = None):
    """
    Check front-matter schema, titles, permalink uniqueness and cross-references.
    """
    _run(content_root, structure=True, links=False, offline=True, session="check_frontmatter")


@app.command("links")
def links_command(
    content_root: ContentRootArg = None,
    offline: bool = typer.Option(False, "--offline", help="Skip external URLs"),
):
    """
    Check that internal links resolve and external links are reachable.
    """
    _run(content_root, structure=False, links=True, offline=offline, session="check_links")


@app.command("all")
def all_command(
    content_root: ContentRootArg = None,
    offline: bool = typer.Option(False, "--offline", help="Skip external URLs"),
):
    """
    Run every check.
    """
    _run(content_root, structure=True, links=True, offline=offline, session="check_all")


if __name__ == "__main__":
    app()
