"""
Text processing utilities.

Slugs for URLs and filenames, and plaintext helpers for excerpts.
"""

import re
import unicodedata


def slugify(text: str) -> str:
    """
    Convert free text to a URL-safe slug.

    Folds to ASCII, lowercases, and collapses every run of non-alphanumeric
    characters to a single hyphen.

    Example:
        >>> slugify("Async I/O, Reactors & You!")
        "async-i-o-reactors-you"
        >>> slugify("Über winit")
        "uber-winit"
    """
    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", "-", folded.lower()).strip("-")


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Args:
        text: Text to truncate
        max_len: Maximum length including ellipsis

    Returns:
        Original text if within max_len, otherwise truncated with "..."

    Example:
        >>> truncate_display("short", 10)
        "short"
        >>> truncate_display("this is a very long string", 10)
        "this is..."
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


def first_paragraph(body: str) -> str:
    """
    Return the first prose paragraph of a markdown body.

    Skips headings, fenced code blocks and blank lines, then joins the lines of
    the first remaining block into one line.
    """
    in_fence = False
    paragraph = []
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("```") or stripped.startswith("~~~"):
            in_fence = not in_fence
            if paragraph:
                break
            continue
        if in_fence:
            continue
        if not stripped:
            if paragraph:
                break
            continue
        if stripped.startswith("#") and not paragraph:
            continue
        paragraph.append(stripped)
    return " ".join(paragraph)


def markdown_to_plaintext(text: str) -> str:
    """
    Strip common inline markdown so text can be shown as a plain summary.

    Links keep their text, emphasis and code markers are dropped.
    """
    if not text:
        return ""
    text = re.sub(r"!\[([^\]]*)\]\([^)]*\)", r"\1", text)
    text = re.sub(r"\[([^\]]+)\]\([^)]*\)", r"\1", text)
    text = re.sub(r"\[([^\]]+)\]\[[^\]]*\]", r"\1", text)
    text = re.sub(r"(\*\*|__)(.+?)\1", r"\2", text)
    text = re.sub(r"(?<!\w)(\*|_)(?!\s)(.+?)(?<!\s)\1(?!\w)", r"\2", text)
    text = text.replace("`", "")
    text = re.sub(r"\s+", " ", text)
    return text.strip()
