import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)

from folio.contexts.rendering.exceptions import LayoutRenderError
from folio.utils.timestamp import format_long_date, format_rfc3339

load_dotenv()
LAYOUTS_PATH = Path(os.getenv("LAYOUTS_PATH", Path(__file__).parent / "layouts"))

TEMPLATE_SUFFIX = ".jinja"


class LayoutRegistry:
    """
    Registry for loading and caching Jinja2 layout templates.

    Layouts are stored as {layouts_path}/{name}.{ext}.jinja, e.g. post.html.jinja
    or feed.xml.jinja. Every document layout extends base.html.jinja.
    """

    def __init__(self, layouts_path: Path = None):
        """
        Initialize the layout registry.

        Args:
            layouts_path: Directory holding the layout templates. Defaults to
                          folio/contexts/rendering/layouts/
        """
        if layouts_path is None:
            layouts_path = LAYOUTS_PATH

        self.layouts_path = Path(layouts_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.layouts_path)),
            autoescape=select_autoescape(
                enabled_extensions=("html", "xml", "html.jinja", "xml.jinja"),
                default_for_string=True,
            ),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["long_date"] = format_long_date
        self.env.filters["rfc3339"] = format_rfc3339

    def get_template(self, name: str) -> Template:
        """
        Get a layout by name (e.g., 'post.html'), loading and caching it if necessary.

        Raises:
            TemplateNotFound: If the layout file doesn't exist
            TemplateSyntaxError: If the layout has Jinja2 syntax errors
        """
        if name in self._cache:
            return self._cache[name]

        template_name = f"{name}{TEMPLATE_SUFFIX}"
        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Layout '{name}' not found at {self.layouts_path / template_name}"
            ) from e

        self._cache[name] = template
        return template

    def get_template_path(self, name: str) -> Path:
        """Get the file path for a layout."""
        return self.layouts_path / f"{name}{TEMPLATE_SUFFIX}"

    def render(self, name: str, context: Dict[str, Any]) -> str:
        """
        Render a layout with the given context.

        Raises:
            LayoutRenderError: If the layout is missing or fails to render
        """
        try:
            return self.get_template(name).render(**context)
        except TemplateError as e:
            raise LayoutRenderError(
                f"Failed to render layout '{name}'",
                layout_name=name,
                template_path=self.get_template_path(name),
                original_error=e,
            ) from e

    def clear_cache(self):
        """Clear the layout cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        """Check if a layout is in the cache."""
        return name in self._cache
