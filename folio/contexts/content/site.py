"""
Site content tree for the content context.

Loads every page and post under a content root into Document records:

    content/
        _config.yml
        about.md
        _posts/
            2020-11-05-announcing-the-reactor.md
            ...

Loading never stops at one bad file. Failures are collected in
SiteContent.load_errors so that checks can report all of them at once.
"""

import time
from collections import OrderedDict
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Dict, Iterator, List, Optional, Tuple

from folio.contexts.content.document import Document
from folio.contexts.content.exceptions import ContentError
from folio.contexts.content.frontmatter import Layout
from folio.contexts.content.logger import _log_debug, log_load_result, log_load_start
from folio.contexts.content.nomenclature import is_document_file
from folio.contexts.content.site_config import SiteConfig, load_site_config
from folio.utils.text_processing import slugify

INDEX_URL = "/index.html"
FEED_URL = "/feed.xml"
CATEGORY_URL_TEMPLATE = "/categories/{slug}.html"


def category_url(category: str) -> str:
    """Site-relative URL of a category listing page."""
    return CATEGORY_URL_TEMPLATE.format(slug=slugify(category))


def output_path_for(url: str, output_dir: Path) -> Path:
    """
    Map a site-relative URL to a file under the output directory.

    "/about/" -> about/index.html, "/2020/x.html" -> 2020/x.html, "/notes" -> notes/index.html
    """
    relative = url.lstrip("/")
    if not relative or url.endswith("/"):
        relative += "index.html"
    elif not PurePosixPath(relative).suffix:
        relative += "/index.html"
    return output_dir.joinpath(*PurePosixPath(relative).parts)


def output_path_key(url: str) -> str:
    """Normalize URLs that land on the same file ("/about" and "/about/", "/" and "/index.html")."""
    return output_path_for(url, Path("/")).as_posix()


@dataclass
class SiteContent:
    """
    Every document of one site, plus its configuration.

    Attributes:
        root: Content root directory
        config: Resolved site configuration
        pages: Standalone pages, in config order
        posts: Posts, newest first
        load_errors: (path, error) for each file that could not be loaded
    """

    root: Path
    config: SiteConfig
    pages: List[Document] = field(default_factory=list)
    posts: List[Document] = field(default_factory=list)
    load_errors: List[Tuple[Path, ContentError]] = field(default_factory=list)

    @classmethod
    def load(cls, content_root: Path, config: Optional[SiteConfig] = None) -> "SiteContent":
        """
        Load a content tree.

        Args:
            content_root: Directory holding _config.yml, pages and the posts directory
            config: Optional pre-loaded config (defaults to content_root/_config.yml)

        Returns:
            SiteContent with every loadable document and the errors for the rest
        """
        content_root = Path(content_root)
        start_time = time.time()
        log_load_start(content_root)

        if config is None:
            config = load_site_config(content_root)

        site = cls(root=content_root, config=config)

        for page_name in config.pages:
            page_path = content_root / page_name
            if not page_path.exists():
                site.load_errors.append(
                    (page_path, ContentError("Page listed in config does not exist", page_path))
                )
                continue
            if not page_path.is_file():
                site.load_errors.append(
                    (page_path, ContentError("Page listed in config is not a file", page_path))
                )
                continue
            document = site._load_document(page_path)
            if document is not None:
                site.pages.append(document)

        posts_dir = content_root / config.posts_dir
        if posts_dir.is_dir():
            for post_path in sorted(posts_dir.iterdir()):
                if not is_document_file(post_path):
                    continue
                document = site._load_document(post_path)
                if document is None:
                    continue
                if not document.is_post:
                    # Posts need a date; a page layout would silently drop it
                    site.load_errors.append(
                        (
                            post_path,
                            ContentError(
                                f"Document in {config.posts_dir}/ must use layout "
                                f"'{Layout.POST.value}', not '{document.layout.value}'",
                                post_path,
                            ),
                        )
                    )
                    continue
                site.posts.append(document)
        else:
            _log_debug(f"No posts directory at {posts_dir}")

        site.posts.sort(key=lambda post: (post.date, post.identifier), reverse=True)

        log_load_result(site, time.time() - start_time)
        return site

    def _load_document(self, path: Path) -> Optional[Document]:
        """Load one document, recording the failure instead of raising."""
        try:
            document = Document.from_file(path)
        except ContentError as e:
            if e.source is None:
                e.source = path
            self.load_errors.append((path, e))
            return None
        except UnicodeDecodeError as e:
            self.load_errors.append(
                (path, ContentError(f"File is not UTF-8 text: {e.reason}", path))
            )
            return None

        _log_debug(f"Loaded {document.identifier} ({document.layout.value}) -> {document.url}")
        return document

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    @property
    def documents(self) -> List[Document]:
        """Pages followed by posts."""
        return [*self.pages, *self.posts]

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.pages) + len(self.posts)

    def get(self, identifier: str) -> Optional[Document]:
        """Find a document by identifier."""
        for document in self.documents:
            if document.identifier == identifier:
                return document
        return None

    def by_url(self, url: str) -> Optional[Document]:
        """Find the document rendered at a site-relative URL."""
        for document in self.documents:
            if document.url == url:
                return document
        return None

    def categories(self) -> Dict[str, List[Document]]:
        """
        Map each category to its posts.

        Categories appear in order of first use (newest post first); posts
        within a category keep newest-first order. Spellings that share a
        listing page ("Rust" and "rust") are grouped under the first one seen.
        """
        names: Dict[str, str] = {}
        index: Dict[str, List[Document]] = OrderedDict()
        for post in self.posts:
            for category in post.categories:
                name = names.setdefault(slugify(category), category)
                posts = index.setdefault(name, [])
                if post not in posts:
                    posts.append(post)
        return index

    @property
    def is_clean(self) -> bool:
        """True when every file loaded without error."""
        return not self.load_errors

    def generated_urls(self) -> List[str]:
        """URLs of listing pages produced by the build rather than by a document."""
        urls = ["/", INDEX_URL]
        if self.config.feed:
            urls.append(FEED_URL)
        urls.extend(category_url(category) for category in self.categories())
        return urls

    def category_spellings(self) -> Dict[str, List[str]]:
        """Category slugs written more than one way, with every spelling in use."""
        spellings: Dict[str, List[str]] = OrderedDict()
        for post in self.posts:
            for category in post.categories:
                seen = spellings.setdefault(slugify(category), [])
                if category not in seen:
                    seen.append(category)
        return {slug: names for slug, names in spellings.items() if len(names) > 1}

    def url_set(self) -> set:
        """Every site-relative URL the build writes."""
        return {document.url for document in self.documents} | set(self.generated_urls())
