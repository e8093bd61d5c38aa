"""
Post scaffolding.

Creates a new post file with a valid front-matter block, so every post starts
out passing the schema checks.
"""

import datetime
from pathlib import Path
from typing import List, Optional

from folio.contexts.content.document import Document
from folio.contexts.content.frontmatter import FrontMatter, Layout
from folio.contexts.content.logger import _log_success
from folio.contexts.content.nomenclature import build_post_filename, identifier_from_filename
from folio.contexts.content.site_config import load_site_config

DEFAULT_BODY = "Write the post here.\n"


def create_post(
    content_root: Path,
    title: str,
    published: datetime.date,
    categories: Optional[List[str]] = None,
    excerpt: Optional[str] = None,
    comments: bool = True,
    body: str = DEFAULT_BODY,
) -> Path:
    """
    Write a new post under the posts directory.

    Args:
        content_root: Content root (its _config.yml names the posts directory)
        title: Post title, also used for the filename slug
        published: Publication date, used for the filename prefix
        categories: Category tags in display order
        excerpt: Optional summary
        comments: Whether comments are enabled
        body: Initial body text

    Returns:
        Path of the created file

    Raises:
        FileExistsError: If a post with the same date and slug exists
        InvalidFrontMatterError: If title or categories fail validation
        ValueError: If the title yields an empty slug
    """
    content_root = Path(content_root)
    config = load_site_config(content_root)

    front_matter = FrontMatter.from_dict(
        {
            "layout": Layout.POST.value,
            "title": title,
            "categories": list(categories or []),
            "excerpt": excerpt,
            "comments": comments,
        }
    )

    filename = build_post_filename(title, published)
    path = content_root / config.posts_dir / filename
    if path.exists():
        raise FileExistsError(f"Post already exists: {path}")

    document = Document.from_front_matter(
        front_matter,
        body=body,
        identifier=identifier_from_filename(filename),
        date=published,
        source_path=path,
    )

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document.to_text(), encoding="utf-8")
    _log_success(f"Created {path}")
    return path
