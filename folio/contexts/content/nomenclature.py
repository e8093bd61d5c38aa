"""
Document identifier nomenclature for the content context.

Identifiers are derived from filenames and never written into front-matter.

Post filename format:
    YYYY-MM-DD-slug.md

Page filename format:
    slug.md

Examples:
    >>> parse_post_filename("2020-11-05-announcing-the-reactor.md")
    (datetime.date(2020, 11, 5), "announcing-the-reactor")
    >>> build_post_filename("Announcing the Reactor", date(2020, 11, 5))
    "2020-11-05-announcing-the-reactor.md"
"""

import re
from datetime import date
from pathlib import Path
from typing import Tuple

from folio.contexts.content.exceptions import InvalidDocumentNameError
from folio.utils.text_processing import slugify
from folio.utils.timestamp import parse_date

DOCUMENT_SUFFIXES = {".md", ".markdown"}

POST_FILENAME_PATTERN = re.compile(r"^(?P<date>\d{4}-\d{2}-\d{2})-(?P<slug>.+)$")


def identifier_from_filename(filename: str) -> str:
    """
    Extract a document identifier from a filename.

    Args:
        filename: Filename with or without extension (e.g., "2020-11-05-reactor.md")

    Returns:
        Document identifier (filename stem)
    """
    return Path(filename).stem


def parse_post_filename(filename: str) -> Tuple[date, str]:
    """
    Split a post filename into its publication date and slug.

    Args:
        filename: Post filename (e.g., "2020-11-05-announcing-the-reactor.md")

    Returns:
        (date, slug)

    Raises:
        InvalidDocumentNameError: If the name lacks a valid date prefix or a slug
    """
    stem = identifier_from_filename(filename)
    match = POST_FILENAME_PATTERN.match(stem)
    if not match:
        raise InvalidDocumentNameError(
            f"Post filename {filename!r} does not follow YYYY-MM-DD-slug.md"
        )

    try:
        published = parse_date(match.group("date"))
    except ValueError as e:
        raise InvalidDocumentNameError(
            f"Post filename {filename!r} has an invalid date {match.group('date')!r}"
        ) from e

    return published, match.group("slug")


def build_post_filename(title: str, published: date) -> str:
    """
    Build the filename for a new post.

    Raises:
        ValueError: If the title has no characters usable in a slug
    """
    slug = slugify(title)
    if not slug:
        raise ValueError(f"Title {title!r} produces an empty slug")
    return f"{published.isoformat()}-{slug}.md"


def is_document_file(path: Path) -> bool:
    """True for markdown files that are not hidden or editor scratch files."""
    return (
        path.is_file()
        and path.suffix in DOCUMENT_SUFFIXES
        and not path.name.startswith((".", "_", "#"))
    )
