"""
Checking Context

Responsibilities:
- Verifies front-matter validity and non-empty titles for every document
- Verifies output URLs (permalinks) are unique
- Verifies documents stay self-contained
- Resolves internal links and requests external ones

Owns: Content-integrity checks, link reachability
Never: Modifies content
"""

from folio.contexts.checking.checks import (
    check_front_matter,
    check_no_cross_references,
    check_permalink_unique,
    check_site,
    check_titles,
    generate_feedback_report,
)
from folio.contexts.checking.links import (
    Link,
    LinkKind,
    LinkStatus,
    check_link,
    check_links,
    extract_links,
)
from folio.contexts.checking.results import CheckResult, Issue, Severity, SiteCheckReport

__all__ = [
    "check_front_matter",
    "check_titles",
    "check_permalink_unique",
    "check_no_cross_references",
    "check_site",
    "generate_feedback_report",
    "check_links",
    "check_link",
    "extract_links",
    "Link",
    "LinkKind",
    "LinkStatus",
    "CheckResult",
    "Issue",
    "Severity",
    "SiteCheckReport",
]
