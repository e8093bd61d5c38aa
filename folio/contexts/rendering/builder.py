"""
Static Site Builder

Renders a loaded content tree to HTML:
- one file per document at Document.url
- index.html listing posts newest first
- categories/{slug}.html per category
- feed.xml (Atom) when enabled in _config.yml
- static files under the content root copied verbatim
"""

import shutil
import time
from collections import defaultdict
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any, Dict, List, Optional

from markupsafe import Markup

from folio.contexts.content.document import Document
from folio.contexts.content.exceptions import DuplicateURLError
from folio.contexts.content.site import (
    FEED_URL,
    INDEX_URL,
    SiteContent,
    category_url,
    output_path_for,
    output_path_key,
)
from folio.contexts.rendering.exceptions import LayoutRenderError
from folio.contexts.rendering.layout_registry import LayoutRegistry
from folio.contexts.rendering.logger import (
    _log_debug,
    _log_error,
    log_build_result,
    log_build_start,
)
from folio.utils.markdown import render_markdown
from folio.utils.timestamp import format_rfc3339, today


@dataclass
class BuildResult:
    """
    Result of a site build.

    Attributes:
        success: Whether every output file was written
        output_dir: Root of the generated site
        written: Files written, in build order
        errors: Render failures (one line per failed document or listing)
    """

    success: bool
    output_dir: Path
    written: List[Path] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def find_duplicate_urls(site: SiteContent) -> Dict[str, List[str]]:
    """URLs claimed by more than one document or generated page."""
    claims: Dict[str, List[str]] = defaultdict(list)
    for document in site:
        claims[output_path_key(document.url)].append(document.identifier)
    for url in site.generated_urls():
        if url != "/":
            claims[output_path_key(url)].append(f"<generated {url}>")
    return {url: owners for url, owners in claims.items() if len(owners) > 1}


def _static_files(site: SiteContent) -> List[Path]:
    """Files under the content root that are neither documents nor underscore-prefixed."""
    document_paths = {document.source_path.resolve() for document in site if document.source_path}
    page_paths = {(site.root / name).resolve() for name in site.config.pages}

    static = []
    for path in sorted(site.root.rglob("*")):
        if not path.is_file():
            continue
        relative = path.relative_to(site.root)
        if any(part.startswith(("_", ".")) for part in relative.parts):
            continue
        resolved = path.resolve()
        if resolved in document_paths or resolved in page_paths:
            continue
        static.append(path)
    return static


class SiteBuilder:
    """Renders documents and listing pages through the layout registry."""

    def __init__(self, site: SiteContent, output_dir: Path, registry: LayoutRegistry = None):
        self.site = site
        self.output_dir = Path(output_dir)
        self.registry = registry or LayoutRegistry()
        self._rendered: Dict[str, str] = {}

    def _base_context(self, description: Optional[str] = None) -> Dict[str, Any]:
        config = self.site.config
        return {
            "site": config,
            "nav_pages": [page for page in self.site.pages if page.title],
            "description": description or config.description,
            "relative_url": config.relative_url,
            "absolute_url": config.absolute_url,
            "category_url": category_url,
        }

    def _write(self, url: str, text: str, result: BuildResult) -> None:
        path = output_path_for(url, self.output_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        result.written.append(path)
        _log_debug(f"Wrote {url} -> {path}")

    def rendered_body(self, document: Document) -> str:
        """Markdown body as HTML, converted once per build."""
        if document.identifier not in self._rendered:
            self._rendered[document.identifier] = render_markdown(document.body)
        return self._rendered[document.identifier]

    def render_document(self, document: Document) -> str:
        """Render a document with the layout its front-matter selects."""
        context = self._base_context(description=document.summary)
        context["document"] = document
        context["content"] = Markup(self.rendered_body(document))
        return self.registry.render(f"{document.layout.value}.html", context)

    def render_listing(self, posts: List[Document], heading: Optional[str] = None) -> str:
        context = self._base_context()
        context["posts"] = posts
        context["heading"] = heading
        return self.registry.render("index.html", context)

    def render_feed(self) -> str:
        posts = self.site.posts
        updated = posts[0].date if posts else today()
        context = self._base_context()
        context["posts"] = posts
        context["updated"] = format_rfc3339(updated)
        context["rendered"] = {post.identifier: self.rendered_body(post) for post in posts}
        return self.registry.render("feed.xml", context)

    def build(self, clean: bool = True) -> BuildResult:
        """
        Write the whole site.

        Args:
            clean: Remove the output directory before writing

        Returns:
            BuildResult; render failures are collected, not raised

        Raises:
            DuplicateURLError: If two documents (or a document and a listing) share a URL
            ValueError: If the output directory is the content root or contains it
        """
        duplicates = find_duplicate_urls(self.site)
        if duplicates:
            url, owners = next(iter(duplicates.items()))
            raise DuplicateURLError(url, owners)

        output_dir = self.output_dir.resolve()
        content_root = self.site.root.resolve()
        if output_dir == content_root or output_dir in content_root.parents:
            raise ValueError(f"Refusing to build into {output_dir}: it contains the content root")

        if clean and self.output_dir.exists():
            shutil.rmtree(self.output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        result = BuildResult(success=True, output_dir=self.output_dir)

        for document in self.site:
            try:
                self._write(document.url, self.render_document(document), result)
            except LayoutRenderError as e:
                result.errors.append(f"{document.identifier}: {e.message} ({e.original_error})")
                _log_error(f"Failed to render {document.identifier}: {e.original_error}")

        listings = [(INDEX_URL, partial(self.render_listing, self.site.posts))]
        for category, posts in self.site.categories().items():
            listings.append((category_url(category), partial(self.render_listing, posts, category)))
        if self.site.config.feed:
            listings.append((FEED_URL, self.render_feed))

        for url, render in listings:
            try:
                self._write(url, render(), result)
            except LayoutRenderError as e:
                result.errors.append(f"{url}: {e.message} ({e.original_error})")
                _log_error(f"Failed to render {url}: {e.original_error}")

        for path in _static_files(self.site):
            target = self.output_dir / path.relative_to(self.site.root)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(path, target)
            result.written.append(target)

        result.success = not result.errors
        return result


def build_site(
    site: SiteContent,
    output_dir: Path,
    clean: bool = True,
    registry: LayoutRegistry = None,
) -> BuildResult:
    """
    Render a loaded content tree to a static site.

    Args:
        site: Loaded content tree
        output_dir: Directory to write the site into
        clean: Remove output_dir first (default: True)
        registry: Optional layout registry (defaults to the bundled layouts)

    Returns:
        BuildResult with the files written and any render errors

    Example:
        >>> site = SiteContent.load(Path("content"))
        >>> result = build_site(site, Path("outs/site"))
        >>> result.success
        True
    """
    start_time = time.time()
    log_build_start(site.root, output_dir, len(site))

    result = SiteBuilder(site, output_dir, registry=registry).build(clean=clean)

    log_build_result(result, time.time() - start_time)
    return result
