"""
Markdown Utilities

Converts document bodies to HTML. Rendering and link extraction share this
conversion so that the links checked are exactly the links published.
"""

import markdown

MARKDOWN_EXTENSIONS = ["extra", "sane_lists", "toc"]

MARKDOWN_EXTENSION_CONFIGS = {
    "toc": {"permalink": False},
}


def render_markdown(text: str) -> str:
    """
    Convert a markdown body to an HTML fragment.

    Args:
        text: Markdown source

    Returns:
        HTML fragment (no <html>/<body> wrapper)
    """
    if not text:
        return ""
    return markdown.markdown(
        text,
        extensions=MARKDOWN_EXTENSIONS,
        extension_configs=MARKDOWN_EXTENSION_CONFIGS,
        output_format="html",
    )
