"""
Shared utilities for folio.

Common functionality used across contexts:
- Logging setup with provenance
- Timestamps
- Text processing (slugs, excerpts)
"""

from folio.utils.text_processing import slugify, truncate_display
from folio.utils.timestamp import now, today

__all__ = ["slugify", "truncate_display", "now", "today"]
