"""Custom exceptions for the content context with source references."""

from pathlib import Path
from typing import List, Optional


class ContentError(Exception):
    """
    Base exception for content loading problems.

    Attributes:
        message: Error description
        source: Path of the document that failed, if known
    """

    def __init__(self, message: str, source: Optional[Path] = None):
        self.message = message
        self.source = source
        if source is not None:
            super().__init__(f"{source}: {message}")
        else:
            super().__init__(message)


class FrontMatterNotFoundError(ContentError):
    """Raised when a document has no front-matter block, or the block is never closed."""

    pass


class InvalidFrontMatterError(ContentError, ValueError):
    """
    Raised when a front-matter block does not conform to the document schema.

    Attributes:
        problems: Every schema violation found (validation does not stop at the first)
    """

    def __init__(
        self,
        message: str,
        problems: Optional[List[str]] = None,
        source: Optional[Path] = None,
    ):
        self.problems = list(problems or [])

        parts = [message]
        for problem in self.problems:
            parts.append(f"  - {problem}")

        super().__init__("\n".join(parts), source=source)
        self.message = message


class InvalidDocumentNameError(ContentError, ValueError):
    """Raised when a post filename does not follow YYYY-MM-DD-slug.md."""

    pass


class DuplicateURLError(ContentError):
    """
    Raised when two documents would be written to the same output URL.

    Attributes:
        url: The contested URL
        identifiers: Identifiers of the documents that claim it
    """

    def __init__(self, url: str, identifiers: List[str]):
        self.url = url
        self.identifiers = list(identifiers)
        super().__init__(f"URL {url} claimed by multiple documents: {', '.join(identifiers)}")


class InvalidSiteConfigError(ContentError, ValueError):
    """Raised when _config.yml is not valid YAML or a value has the wrong type or range."""

    pass
