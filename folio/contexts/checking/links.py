"""
Hyperlink extraction and reachability checking.

Links are read from the rendered HTML of each document body, so reference-style
markdown links and raw HTML anchors are both covered.

Link kinds:
    external  - http(s) URL, checked over the network
    internal  - site path, checked against the URLs the build writes
    anchor    - "#fragment" within the same document, checked against heading ids
    malformed - href that cannot be parsed as a URL, always reported
"""

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Set
from urllib.parse import urljoin, urlsplit

import requests
from bs4 import BeautifulSoup
from dotenv import load_dotenv

from folio.contexts.checking.logger import _log_debug, _log_info, log_check_result
from folio.contexts.checking.results import CheckResult, Issue
from folio.contexts.content.document import Document
from folio.contexts.content.site import SiteContent
from folio.utils.markdown import render_markdown

load_dotenv()
USER_AGENT = os.getenv("LINK_CHECK_USER_AGENT", "folio-link-check/0.1")

LINK_CHECK = "links"

SKIPPED_SCHEMES = {"mailto", "tel", "javascript", "data"}
EXTERNAL_SCHEMES = {"http", "https"}


class LinkKind(Enum):
    EXTERNAL = "external"
    INTERNAL = "internal"
    ANCHOR = "anchor"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class Link:
    """A hyperlink found in a document body."""

    url: str
    document_identifier: str
    kind: LinkKind


@dataclass(frozen=True)
class LinkStatus:
    """
    Outcome of requesting an external URL.

    Attributes:
        url: Requested URL
        status: HTTP status code, or None if no response arrived
        error: Network error description, or None
    """

    url: str
    status: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.status is not None and self.status < 400


def classify_link(href: str) -> Optional[LinkKind]:
    """Classify an href, or return None for links that are never checked."""
    href = href.strip()
    if not href:
        return None
    if href.startswith("#"):
        return LinkKind.ANCHOR

    try:
        scheme = urlsplit(href).scheme.lower()
    except ValueError:
        # e.g. an unclosed "[" in the host
        return LinkKind.MALFORMED

    if href.startswith("//"):
        return LinkKind.EXTERNAL
    if scheme in EXTERNAL_SCHEMES:
        return LinkKind.EXTERNAL
    if scheme:
        # mailto:, tel: and other non-web schemes
        return None
    return LinkKind.INTERNAL


def _parse_body(document: Document) -> BeautifulSoup:
    return BeautifulSoup(render_markdown(document.body), "html.parser")


def extract_links(document: Document) -> List[Link]:
    """
    Extract every checkable hyperlink from a document body.

    Collects `href` and `src` attributes from the rendered HTML, deduplicated
    in document order. Protocol-relative URLs are treated as https.

    Args:
        document: Loaded document

    Returns:
        Links in order of first appearance
    """
    soup = _parse_body(document)
    seen: Set[str] = set()
    links: List[Link] = []

    for tag in soup.find_all(["a", "img", "script", "iframe", "source"]):
        for attribute in ("href", "src"):
            href = tag.get(attribute)
            if not href:
                continue
            href = href.strip()
            kind = classify_link(href)
            if kind is None:
                continue
            if href.startswith("//"):
                href = "https:" + href
            if href in seen:
                continue
            seen.add(href)
            links.append(Link(url=href, document_identifier=document.identifier, kind=kind))

    return links


def heading_ids(document: Document) -> Set[str]:
    """Every element id in the rendered body (headings get ids from the toc extension)."""
    soup = _parse_body(document)
    return {tag["id"] for tag in soup.find_all(id=True)}


def check_link(url: str, timeout: float = 10, session: Optional[requests.Session] = None) -> LinkStatus:
    """
    Request an external URL and report its status.

    Tries HEAD first for speed and falls back to GET for servers that reject HEAD.
    Network errors are captured in LinkStatus.error, not raised.
    """
    http = session or requests
    headers = {"User-Agent": USER_AGENT}
    try:
        response = http.head(url, headers=headers, timeout=timeout, allow_redirects=True)
        if response.status_code >= 400:
            response = http.get(url, headers=headers, timeout=timeout, allow_redirects=True)
        return LinkStatus(url=url, status=response.status_code)
    except requests.RequestException as e:
        return LinkStatus(url=url, error=f"{type(e).__name__}: {e}")


def resolve_internal(href: str, document: Document, baseurl: str = "") -> str:
    """
    Resolve an internal href to a site-relative path.

    Relative hrefs resolve against the document's URL; baseurl, query and
    fragment are stripped.
    """
    path = urlsplit(urljoin(document.url, href)).path
    base = "/" + baseurl.strip("/") if baseurl.strip("/") else ""
    if base and (path == base or path.startswith(base + "/")):
        path = path[len(base) :] or "/"
    return path


def _internal_target_exists(path: str, url_set: Set[str], content_root: Path) -> bool:
    if path in url_set:
        return True
    if path.endswith("/") and path + "index.html" in url_set:
        return True
    if not path.endswith("/") and path + ".html" in url_set:
        return True
    # Static assets copied verbatim from the content root
    return (content_root / path.lstrip("/")).is_file()


def _is_ignored(url: str, ignore: List[str]) -> bool:
    return any(url.startswith(prefix) for prefix in ignore)


def check_links(
    site: SiteContent,
    offline: bool = False,
    session: Optional[requests.Session] = None,
) -> CheckResult:
    """
    Check that every hyperlink in every document resolves.

    Internal links must match a URL the build writes (or a static file under
    the content root). Anchors must match an id in the same document. External
    links are requested concurrently unless offline is set.

    Args:
        site: Loaded content tree
        offline: Skip external links
        session: Optional requests session (connection reuse, testing)

    Returns:
        CheckResult named "links"
    """
    config = site.config.link_check
    result = CheckResult(name=LINK_CHECK)
    url_set = site.url_set()

    # External URL -> documents that link to it
    external: Dict[str, List[Document]] = {}

    for document in site:
        links = extract_links(document)
        result.checked += len(links)
        ids = None

        for link in links:
            if _is_ignored(link.url, config.ignore):
                _log_debug(f"Ignoring {link.url} in {document.identifier}")
                continue

            if link.kind is LinkKind.ANCHOR:
                if ids is None:
                    ids = heading_ids(document)
                if link.url[1:] not in ids:
                    result.issues.append(
                        Issue(
                            code="broken_anchor",
                            message=f"Anchor {link.url} matches no heading",
                            identifier=document.identifier,
                            source=document.source_path,
                            action="Fix the fragment or add the heading",
                        )
                    )
            elif link.kind is LinkKind.MALFORMED:
                result.issues.append(
                    Issue(
                        code="malformed_link",
                        message=f"Link {link.url} is not a valid URL",
                        identifier=document.identifier,
                        source=document.source_path,
                        action="Fix the typo in the link target",
                    )
                )
            elif link.kind is LinkKind.INTERNAL:
                path = resolve_internal(link.url, document, site.config.baseurl)
                if not _internal_target_exists(path, url_set, site.root):
                    result.issues.append(
                        Issue(
                            code="broken_internal_link",
                            message=f"Link {link.url} points to {path}, which the site does not contain",
                            identifier=document.identifier,
                            source=document.source_path,
                            action="Fix the link or restore the target document",
                        )
                    )
            else:
                external.setdefault(link.url, []).append(document)

    if offline:
        if external:
            _log_info(f"Offline: skipped {len(external)} external URLs")
    elif external:
        _log_info(
            f"Checking {len(external)} external URLs with {config.max_workers} workers"
        )
        with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
            statuses = list(
                executor.map(
                    lambda url: check_link(url, timeout=config.timeout, session=session),
                    external,
                )
            )

        for status in statuses:
            if status.ok:
                continue
            detail = status.error or f"HTTP {status.status}"
            for document in external[status.url]:
                result.issues.append(
                    Issue(
                        code="unreachable_link",
                        message=f"{status.url} is unreachable ({detail})",
                        identifier=document.identifier,
                        source=document.source_path,
                        action="Update the URL, link an archived copy, or add it to link_check.ignore",
                    )
                )

    log_check_result(result)
    return result
