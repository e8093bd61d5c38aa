#!/usr/bin/env python3
"""
Scaffold a new post with valid front-matter.

Usage:
    python scripts/new_post.py "Announcing the reactor" --category rust --category async
    python scripts/new_post.py "Debugging diary" --date 2020-11-05 --no-comments
"""

import os
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv

from folio.contexts.content.authoring import create_post
from folio.utils.timestamp import today

load_dotenv()
PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", Path(__file__).resolve().parent.parent))
CONTENT_PATH = Path(os.getenv("CONTENT_PATH", PROJECT_ROOT / "content"))

app = typer.Typer(help="Create a new post.", add_completion=False)


@app.command()
def main(
    title: str = typer.Argument(..., help="Post title"),
    category: Optional[List[str]] = typer.Option(
        None, "--category", "-c", help="Category tag (repeatable, kept in order)"
    ),
    excerpt: Optional[str] = typer.Option(None, "--excerpt", "-e", help="Short summary"),
    comments: bool = typer.Option(True, "--comments/--no-comments", help="Enable comments"),
    date: Optional[datetime] = typer.Option(
        None, "--date", formats=["%Y-%m-%d"], help="Publication date (defaults to today)"
    ),
    content_root: Path = typer.Option(CONTENT_PATH, "--content-root", help="Content root"),
):
    """Create _posts/YYYY-MM-DD-slug.md with front-matter filled in."""
    published = date.date() if date else today()

    try:
        path = create_post(
            content_root,
            title=title,
            published=published,
            categories=category,
            excerpt=excerpt,
            comments=comments,
        )
    except (FileExistsError, ValueError) as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    typer.secho(f"✓ Created {path}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
