"""
Rendering Context

Responsibilities:
- Selects and renders the layout each document's front-matter names
- Converts markdown bodies to HTML
- Writes documents, listing pages and the Atom feed to the output tree
- Copies static files verbatim

Owns: Layout templates, HTML output, output directory structure
Never: Validates front-matter (delegates to the content context)
"""

from folio.contexts.rendering.builder import BuildResult, SiteBuilder, build_site, output_path_for
from folio.contexts.rendering.exceptions import LayoutRenderError
from folio.contexts.rendering.layout_registry import LayoutRegistry

__all__ = [
    "build_site",
    "output_path_for",
    "BuildResult",
    "SiteBuilder",
    "LayoutRegistry",
    "LayoutRenderError",
]
