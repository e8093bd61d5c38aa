"""
Document data structure for the content context.

Provides the Document record that represents one page or post: its validated
front-matter, the identifier derived from its filename, and its body.
"""

from dataclasses import dataclass, field
import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from folio.contexts.content.exceptions import InvalidDocumentNameError
from folio.contexts.content.frontmatter import FENCE, FrontMatter, Layout, parse_front_matter
from folio.contexts.content.nomenclature import identifier_from_filename, parse_post_filename
from folio.utils.text_processing import first_paragraph, markdown_to_plaintext, slugify


@dataclass(frozen=True)
class Document:
    """
    One page or post with validated front-matter.

    Factory methods:
        from_text(text, identifier) - Parse a full document (front-matter + body)
        from_file(path) - Load from a markdown file (derives identifier from filename)
    """

    identifier: str
    layout: Layout
    title: str
    body: str
    categories: List[str] = field(default_factory=list)
    excerpt: Optional[str] = None
    comments: bool = False
    permalink: Optional[str] = None
    date: Optional[datetime.date] = None
    slug: Optional[str] = None
    source_path: Optional[Path] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def from_text(
        cls,
        text: str,
        identifier: str,
        source_path: Optional[Path] = None,
    ) -> "Document":
        """
        Parse document text and create a Document.

        Posts take their date and slug from the identifier (YYYY-MM-DD-slug);
        pages use the identifier as slug.

        Args:
            text: Full document text (front-matter block + body)
            identifier: Document identifier (filename stem)
            source_path: Optional path the text came from

        Returns:
            Document instance

        Raises:
            FrontMatterNotFoundError: If the text has no front-matter block
            InvalidFrontMatterError: If the front-matter violates the schema
            InvalidDocumentNameError: If a post identifier lacks a date prefix
        """
        data, body = parse_front_matter(text, source=source_path)
        front_matter = FrontMatter.from_dict(data, source=source_path)

        published = None
        slug = identifier
        if front_matter.layout is Layout.POST:
            try:
                published, slug = parse_post_filename(identifier)
            except InvalidDocumentNameError as e:
                raise InvalidDocumentNameError(e.message, source=source_path) from e

        return cls.from_front_matter(
            front_matter,
            body=body,
            identifier=identifier,
            date=published,
            slug=slug,
            source_path=source_path,
        )

    @classmethod
    def from_file(cls, file_path: Path) -> "Document":
        """
        Load a document from a markdown file.

        The identifier is derived from the filename stem.
        """
        file_path = Path(file_path)
        text = file_path.read_text(encoding="utf-8")
        return cls.from_text(
            text, identifier=identifier_from_filename(file_path.name), source_path=file_path
        )

    @classmethod
    def from_front_matter(
        cls,
        front_matter: FrontMatter,
        body: str,
        identifier: str,
        date: Optional[datetime.date] = None,
        slug: Optional[str] = None,
        source_path: Optional[Path] = None,
    ) -> "Document":
        """Assemble a Document from already-validated front-matter."""
        return cls(
            identifier=identifier,
            layout=front_matter.layout,
            title=front_matter.title,
            body=body,
            categories=list(front_matter.categories),
            excerpt=front_matter.excerpt,
            comments=front_matter.comments,
            permalink=front_matter.permalink,
            date=date,
            slug=slug or identifier,
            source_path=source_path,
            extra=dict(front_matter.extra),
        )

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    @property
    def is_post(self) -> bool:
        return self.layout is Layout.POST

    @property
    def is_page(self) -> bool:
        return self.layout is Layout.PAGE

    @property
    def front_matter(self) -> FrontMatter:
        """The document's metadata as a FrontMatter record."""
        return FrontMatter(
            layout=self.layout,
            title=self.title,
            permalink=self.permalink,
            categories=list(self.categories),
            excerpt=self.excerpt,
            comments=self.comments,
            extra=dict(self.extra),
        )

    @property
    def url(self) -> str:
        """
        Site-relative output URL.

        Priority:
        1. permalink from front-matter
        2. Posts: /{categories}/{YYYY}/{MM}/{DD}/{slug}.html
        3. Pages: /{slug}.html
        """
        if self.permalink:
            return self.permalink

        if self.is_post and self.date is not None:
            parts = [slugify(category) for category in self.categories]
            parts = [part for part in parts if part]
            parts += [f"{self.date:%Y}", f"{self.date:%m}", f"{self.date:%d}"]
            return "/" + "/".join(parts) + f"/{self.slug}.html"

        return f"/{self.slug}.html"

    @property
    def summary(self) -> str:
        """Excerpt from front-matter, or the first body paragraph as plain text."""
        if self.excerpt:
            return self.excerpt
        return markdown_to_plaintext(first_paragraph(self.body))

    def to_text(self) -> str:
        """Serialize back to a front-matter block followed by the body."""
        return f"{FENCE}\n{self.front_matter.to_yaml()}{FENCE}\n\n{self.body}"
