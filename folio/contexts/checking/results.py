"""
Result types shared by content-integrity checks.

Checks never raise for content problems; they return a CheckResult holding
Issue records, and callers decide what a failure means.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class Severity(Enum):
    """How an issue affects validity."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Issue:
    """
    One problem found by a check.

    Attributes:
        code: Machine-readable issue type (e.g., "duplicate_url")
        message: Human-readable description
        identifier: Document identifier, if the document loaded
        source: Document path, if known
        action: Suggested fix
        severity: ERROR issues invalidate the site; WARNING issues do not
    """

    code: str
    message: str
    identifier: Optional[str] = None
    source: Optional[Path] = None
    action: Optional[str] = None
    severity: Severity = Severity.ERROR

    @property
    def location(self) -> str:
        """Best available name for where the issue is."""
        if self.identifier:
            return self.identifier
        if self.source is not None:
            return str(self.source)
        return "site"

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


@dataclass
class CheckResult:
    """Outcome of one named check."""

    name: str
    issues: List[Issue] = field(default_factory=list)
    checked: int = 0

    @property
    def errors(self) -> List[Issue]:
        return [issue for issue in self.issues if issue.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[Issue]:
        return [issue for issue in self.issues if issue.severity is Severity.WARNING]

    @property
    def passed(self) -> bool:
        return not self.errors


@dataclass
class SiteCheckReport:
    """
    Results of every check run against one site.

    Attributes:
        results: One CheckResult per check, in run order
    """

    results: List[CheckResult] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Whether the site passes all checks (warnings allowed)."""
        return all(result.passed for result in self.results)

    @property
    def issues(self) -> List[Issue]:
        """All issues across checks."""
        return [issue for result in self.results for issue in result.issues]

    @property
    def errors(self) -> List[Issue]:
        return [issue for result in self.results for issue in result.errors]

    def get(self, name: str) -> Optional[CheckResult]:
        """Look up a check result by name."""
        for result in self.results:
            if result.name == name:
                return result
        return None
