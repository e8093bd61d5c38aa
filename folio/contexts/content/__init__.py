"""
Content Context

Responsibilities:
- Represents pages and posts as Document records
- Parses and validates front-matter against the document schema
- Derives identifiers, dates and URLs from filenames and metadata
- Loads the content tree and site configuration

Owns: Document model, front-matter schema, content tree loading
Never: Renders HTML or contacts the network
"""

from folio.contexts.content.document import Document
from folio.contexts.content.exceptions import (
    ContentError,
    DuplicateURLError,
    FrontMatterNotFoundError,
    InvalidDocumentNameError,
    InvalidFrontMatterError,
    InvalidSiteConfigError,
)
from folio.contexts.content.frontmatter import (
    FrontMatter,
    Layout,
    parse_front_matter,
    split_front_matter,
)
from folio.contexts.content.site import SiteContent
from folio.contexts.content.site_config import SiteConfig, load_site_config

__all__ = [
    # Data structures
    "Document",
    "FrontMatter",
    "Layout",
    "SiteContent",
    "SiteConfig",
    # Parsing and loading
    "parse_front_matter",
    "split_front_matter",
    "load_site_config",
    # Exceptions
    "ContentError",
    "DuplicateURLError",
    "FrontMatterNotFoundError",
    "InvalidDocumentNameError",
    "InvalidFrontMatterError",
    "InvalidSiteConfigError",
]
