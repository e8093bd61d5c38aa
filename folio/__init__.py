"""
folio - personal website content and static-site tooling

An About page and a collection of long-form posts, each a markdown document with
YAML front-matter, plus the tooling that validates and renders them.

Architecture:
- Content Context: Document model, front-matter schema, loading the content tree
- Checking Context: Content-integrity checks and hyperlink reachability
- Rendering Context: Layout templates and static HTML output
"""

__version__ = "0.1.0"
