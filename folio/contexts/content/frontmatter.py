"""
Front-matter parsing and schema validation.

A document starts with a YAML block fenced by `---` lines:

    ---
    layout: post
    title: "Announcing the first release"
    categories: [rust, gui]
    excerpt: "A short summary."
    comments: true
    ---

    Body text...

Schema (keys consumed by the layouts):
    layout (str, required): "page" or "post"
    title (str, required): non-empty
    permalink (str, optional): fixed output URL, must start with "/"
    categories (list[str] | str, optional): a space-separated string is split
    excerpt (str, optional)
    comments (bool, optional)

Unknown keys are preserved in FrontMatter.extra so that a round trip loses nothing.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from folio.contexts.content.exceptions import (
    FrontMatterNotFoundError,
    InvalidFrontMatterError,
)
from folio.utils.text_processing import slugify

FENCE = "---"
CLOSING_FENCES = {"---", "..."}

# Canonical key ordering when writing front-matter back out
CANONICAL_KEYS = ["layout", "title", "permalink", "categories", "excerpt", "comments"]


class Layout(Enum):
    """Rendering template a document selects."""

    PAGE = "page"
    POST = "post"


def split_front_matter(text: str, source: Optional[Path] = None) -> Tuple[str, str]:
    """
    Split a document into its raw front-matter block and body.

    Args:
        text: Full document text
        source: Document path, used in error messages

    Returns:
        (yaml_block, body) - body has its leading newline removed

    Raises:
        FrontMatterNotFoundError: If the first line is not `---` or the block is never closed
    """
    # Tolerate a UTF-8 byte order mark written by some editors
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)

    if not lines or lines[0].rstrip() != FENCE:
        raise FrontMatterNotFoundError("Document does not start with a '---' front-matter fence", source)

    for index in range(1, len(lines)):
        if lines[index].rstrip() in CLOSING_FENCES:
            block = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            return block, body.lstrip("\n")

    raise FrontMatterNotFoundError("Front-matter block is never closed", source)


def load_front_matter_block(block: str, source: Optional[Path] = None) -> Dict[str, Any]:
    """
    Parse a raw YAML front-matter block into a plain dict.

    Interpolations (`${...}`) are left untouched and dates stay strings.

    Raises:
        InvalidFrontMatterError: If the block is not valid YAML or not a mapping
    """
    if not block.strip():
        return {}

    # OmegaConf turns a bare scalar into {scalar: None}; a mapping always has a colon
    if ":" not in block:
        raise InvalidFrontMatterError("Front-matter must be a key-value mapping", source=source)

    try:
        loaded = OmegaConf.create(block)
    except (yaml.YAMLError, OmegaConfBaseException) as e:
        first_line = (str(e).splitlines() or [type(e).__name__])[0]
        raise InvalidFrontMatterError(
            "Front-matter is not valid YAML", problems=[first_line], source=source
        ) from e

    if not isinstance(loaded, DictConfig):
        raise InvalidFrontMatterError("Front-matter must be a key-value mapping", source=source)

    return OmegaConf.to_container(loaded, resolve=False)


def parse_front_matter(text: str, source: Optional[Path] = None) -> Tuple[Dict[str, Any], str]:
    """
    Parse a document into its front-matter dict and body.

    Args:
        text: Full document text
        source: Document path, used in error messages

    Returns:
        (front_matter, body)

    Raises:
        FrontMatterNotFoundError: If there is no front-matter block
        InvalidFrontMatterError: If the block is not a YAML mapping
    """
    block, body = split_front_matter(text, source)
    return load_front_matter_block(block, source), body


def _normalize_categories(value: Any, problems: List[str]) -> List[str]:
    """
    Accept a list of scalars or a space-separated string.

    Each category must keep at least one letter or digit once slugified,
    since it names a URL segment and a listing page.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split()
    elif isinstance(value, list):
        items = value
    else:
        problems.append(f"categories: expected a list or a string, got {type(value).__name__}")
        return []

    categories = []
    for item in items:
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            problems.append(f"categories: entries must be strings, got {item!r}")
            continue
        item = str(item).strip()
        if not item:
            problems.append("categories: entries must be non-empty")
            continue
        if not slugify(item):
            problems.append(f"categories: '{item}' has no ASCII letters or digits to use in a URL")
            continue
        categories.append(item)
    return categories


@dataclass(frozen=True)
class FrontMatter:
    """Validated front-matter of one document."""

    layout: Layout
    title: str
    permalink: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    excerpt: Optional[str] = None
    comments: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: Optional[Path] = None) -> "FrontMatter":
        """
        Validate a parsed front-matter dict against the schema.

        Every violation is collected before raising, so one run reports them all.

        Raises:
            InvalidFrontMatterError: If any key violates the schema
        """
        problems: List[str] = []

        layout = None
        raw_layout = data.get("layout")
        if raw_layout is None:
            problems.append("layout: missing")
        else:
            try:
                layout = Layout(raw_layout)
            except ValueError:
                allowed = ", ".join(repr(item.value) for item in Layout)
                problems.append(f"layout: {raw_layout!r} is not one of {allowed}")

        title = data.get("title")
        if title is None:
            problems.append("title: missing")
        elif not isinstance(title, str):
            problems.append(f"title: expected a string, got {type(title).__name__}")
        elif not title.strip():
            problems.append("title: must not be empty")

        permalink = data.get("permalink")
        if permalink is not None:
            if not isinstance(permalink, str):
                problems.append(f"permalink: expected a string, got {type(permalink).__name__}")
            elif not permalink.startswith("/"):
                problems.append(f"permalink: {permalink!r} must start with '/'")

        categories = _normalize_categories(data.get("categories"), problems)

        excerpt = data.get("excerpt")
        if excerpt is not None and not isinstance(excerpt, str):
            problems.append(f"excerpt: expected a string, got {type(excerpt).__name__}")

        comments = data.get("comments", False)
        if comments is None:
            comments = False
        elif not isinstance(comments, bool):
            problems.append(f"comments: expected true or false, got {comments!r}")

        if problems:
            raise InvalidFrontMatterError(
                "Front-matter does not match the document schema", problems=problems, source=source
            )

        extra = {key: value for key, value in data.items() if key not in CANONICAL_KEYS}

        return cls(
            layout=layout,
            title=title.strip(),
            permalink=permalink,
            categories=categories,
            excerpt=excerpt,
            comments=comments,
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Front-matter as a dict in canonical key order, unset optionals omitted."""
        data: Dict[str, Any] = {"layout": self.layout.value, "title": self.title}
        if self.permalink is not None:
            data["permalink"] = self.permalink
        if self.categories:
            data["categories"] = list(self.categories)
        if self.excerpt is not None:
            data["excerpt"] = self.excerpt
        if self.comments:
            data["comments"] = True
        data.update(self.extra)
        return data

    def to_yaml(self) -> str:
        """Serialize to a YAML block (without fences)."""
        return OmegaConf.to_yaml(OmegaConf.create(self.to_dict()), sort_keys=False)
