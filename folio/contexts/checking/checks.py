"""
Content-integrity checks with actionable feedback.

Each check takes a loaded SiteContent and returns a CheckResult:

- check_front_matter: every document's front-matter parses under the schema
- check_titles: every document declares a non-empty title
- check_permalink_unique: no two documents (or a document and a listing page) share a URL
- check_no_cross_references: no front-matter value names another document by identifier

check_site runs them all; generate_feedback_report turns the result into the
numbered issue/action listing printed by the CLI.
"""

from collections import defaultdict
from typing import Any, Dict, Iterator, List

from folio.contexts.checking.logger import log_check_result
from folio.contexts.checking.results import CheckResult, Issue, Severity, SiteCheckReport
from folio.contexts.content.document import Document
from folio.contexts.content.exceptions import (
    FrontMatterNotFoundError,
    InvalidDocumentNameError,
    InvalidFrontMatterError,
)
from folio.contexts.content.site import SiteContent, category_url, output_path_key

FRONT_MATTER_CHECK = "front_matter"
TITLE_CHECK = "titles"
PERMALINK_CHECK = "permalinks"
CROSS_REFERENCE_CHECK = "cross_references"


def check_front_matter(site: SiteContent) -> CheckResult:
    """
    Report every document that failed to load, and unknown front-matter keys.

    Unknown keys are warnings: they are preserved but no layout reads them.
    """
    result = CheckResult(name=FRONT_MATTER_CHECK, checked=len(site) + len(site.load_errors))

    for path, error in site.load_errors:
        if isinstance(error, FrontMatterNotFoundError):
            code = "front_matter_missing"
            action = "Start the file with a '---' fenced YAML block"
        elif isinstance(error, InvalidFrontMatterError):
            code = "front_matter_invalid"
            action = "Fix: " + "; ".join(error.problems) if error.problems else "Fix the YAML syntax"
        elif isinstance(error, InvalidDocumentNameError):
            code = "bad_filename"
            action = "Rename the post to YYYY-MM-DD-slug.md"
        else:
            code = "load_error"
            action = "Check that the file exists and is a UTF-8 post or page"

        result.issues.append(Issue(code=code, message=error.message, source=path, action=action))

    for document in site:
        for key in document.extra:
            result.issues.append(
                Issue(
                    code="unknown_key",
                    message=f"Front-matter key '{key}' is not used by any layout",
                    identifier=document.identifier,
                    source=document.source_path,
                    action=f"Remove '{key}' or check it for a typo",
                    severity=Severity.WARNING,
                )
            )

    return result


def check_titles(site: SiteContent) -> CheckResult:
    """
    Every document declares a non-empty title.

    Loaded documents already passed schema validation; documents that failed
    because of their title are reported here too, so the title check stands
    on its own.
    """
    result = CheckResult(name=TITLE_CHECK, checked=len(site) + len(site.load_errors))

    for document in site:
        if not document.title.strip():
            result.issues.append(
                Issue(
                    code="empty_title",
                    message="Document title is empty",
                    identifier=document.identifier,
                    source=document.source_path,
                    action="Add a title to the front-matter",
                )
            )

    for path, error in site.load_errors:
        if not isinstance(error, InvalidFrontMatterError):
            continue
        for problem in error.problems:
            if problem.startswith("title:"):
                result.issues.append(
                    Issue(
                        code="empty_title",
                        message=problem,
                        source=path,
                        action="Add a non-empty string title to the front-matter",
                    )
                )

    return result


def check_permalink_unique(site: SiteContent) -> CheckResult:
    """
    Every output file belongs to exactly one document.

    URLs are compared by the file they are written to, so "/about" and
    "/about/" collide. Catches a permalink (such as the About page's)
    colliding with another document or with a generated listing page.
    Category spellings that share a listing page are reported as warnings.
    """
    result = CheckResult(name=PERMALINK_CHECK, checked=len(site))

    claims: Dict[str, List[Document]] = defaultdict(list)
    for document in site:
        claims[output_path_key(document.url)].append(document)

    for path_key, documents in claims.items():
        if len(documents) > 1:
            for document in documents:
                others = [other for other in documents if other is not document]
                result.issues.append(
                    Issue(
                        code="duplicate_url",
                        message=f"URL {document.url} is written to {path_key}, shared with: "
                        + ", ".join(f"{other.identifier} ({other.url})" for other in others),
                        identifier=document.identifier,
                        source=document.source_path,
                        action="Give each document a distinct permalink or filename",
                    )
                )

    reserved = {output_path_key(url): url for url in site.generated_urls()}
    for document in site:
        generated = reserved.get(output_path_key(document.url))
        if generated is not None:
            result.issues.append(
                Issue(
                    code="reserved_url",
                    message=f"URL {document.url} is reserved for the generated page {generated}",
                    identifier=document.identifier,
                    source=document.source_path,
                    action="Choose a different permalink",
                )
            )

    for spellings in site.category_spellings().values():
        result.issues.append(
            Issue(
                code="category_spelling",
                message=f"Categories {', '.join(repr(name) for name in spellings)} "
                f"share the listing page {category_url(spellings[0])}",
                action=f"Use one spelling, '{spellings[0]}', in every post",
                severity=Severity.WARNING,
            )
        )

    return result


def _string_values(value: Any) -> Iterator[str]:
    """Yield every string nested in a front-matter value."""
    if isinstance(value, str):
        yield value
    elif isinstance(value, dict):
        for item in value.values():
            yield from _string_values(item)
    elif isinstance(value, list):
        for item in value:
            yield from _string_values(item)


def check_no_cross_references(site: SiteContent) -> CheckResult:
    """
    No front-matter value references another document by identifier.

    Documents are self-contained; links between them belong in the body as
    ordinary hyperlinks.
    """
    result = CheckResult(name=CROSS_REFERENCE_CHECK, checked=len(site))
    identifiers = {document.identifier for document in site}

    for document in site:
        values = list(_string_values(document.extra))
        if document.excerpt:
            values.append(document.excerpt)
        for value in values:
            referenced = value.strip()
            if referenced in identifiers and referenced != document.identifier:
                result.issues.append(
                    Issue(
                        code="cross_reference",
                        message=f"Front-matter references document '{referenced}' by identifier",
                        identifier=document.identifier,
                        source=document.source_path,
                        action="Link to the other document from the body instead",
                    )
                )

    return result


def check_site(site: SiteContent) -> SiteCheckReport:
    """
    Run every content-integrity check.

    Args:
        site: Loaded content tree

    Returns:
        SiteCheckReport with one CheckResult per check

    Example:
        >>> report = check_site(SiteContent.load(Path("content")))
        >>> if not report.is_valid:
        ...     print(generate_feedback_report(report))
    """
    report = SiteCheckReport()
    for check in (check_front_matter, check_titles, check_permalink_unique, check_no_cross_references):
        result = check(site)
        log_check_result(result)
        report.results.append(result)
    return report


def generate_feedback_report(report: SiteCheckReport, include_warnings: bool = True) -> str:
    """
    Generate actionable feedback for the author.

    Format (one block per issue):
        #1
        issue:duplicate_url::document:about::check:permalinks
        detail: URL /about/ is shared with: 2020-01-01-about
        action: Give each document a distinct permalink or filename
    """
    lines = []
    counter = 0

    for result in report.results:
        for issue in result.issues:
            if issue.severity is Severity.WARNING and not include_warnings:
                continue
            counter += 1
            lines.append(f"\n#{counter}")
            lines.append(
                f"issue:{issue.code}::document:{issue.location}::check:{result.name}"
                f"::severity:{issue.severity.value}"
            )
            lines.append(f"detail: {issue.message}")
            if issue.action:
                lines.append(f"action: {issue.action}")

    return "\n".join(lines)
