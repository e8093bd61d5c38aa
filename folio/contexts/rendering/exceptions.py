"""Custom exceptions for rendering context with layout references."""

from pathlib import Path
from typing import Optional


class LayoutRenderError(Exception):
    """
    Exception raised when a layout template fails to render.

    Attributes:
        message: Error description
        layout_name: Name of the layout being rendered (e.g., 'post')
        template_path: Path to the layout template file
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        layout_name: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.layout_name = layout_name
        self.template_path = template_path
        self.original_error = original_error

        parts = [message]

        if layout_name and template_path:
            parts.append(f"\nTemplate: {template_path}")
            parts.append(f"Layout: {layout_name}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
