"""Unit tests for LayoutRegistry class."""

from pathlib import Path

import pytest
from jinja2 import TemplateNotFound

from folio.contexts.rendering.exceptions import LayoutRenderError
from folio.contexts.rendering.layout_registry import LayoutRegistry


@pytest.mark.unit
def test_layout_registry_init():
    """Test LayoutRegistry initialization with the bundled layouts."""
    registry = LayoutRegistry()
    assert registry.layouts_path.exists()
    assert registry._cache == {}


@pytest.mark.unit
@pytest.mark.parametrize("name", ["page.html", "post.html", "index.html", "feed.xml"])
def test_bundled_layouts_load(name):
    registry = LayoutRegistry()
    assert registry.get_template(name) is not None
    assert registry.is_cached(name)


@pytest.mark.unit
def test_template_caching():
    """Test that layouts are cached after first load."""
    registry = LayoutRegistry()

    template1 = registry.get_template("post.html")
    template2 = registry.get_template("post.html")

    assert template1 is template2


@pytest.mark.unit
def test_get_template_not_found():
    registry = LayoutRegistry()

    with pytest.raises(TemplateNotFound):
        registry.get_template("nonexistent.html")


@pytest.mark.unit
def test_get_template_path():
    registry = LayoutRegistry()
    path = registry.get_template_path("post.html")

    assert isinstance(path, Path)
    assert path.name == "post.html.jinja"


@pytest.mark.unit
def test_clear_cache():
    registry = LayoutRegistry()
    registry.get_template("page.html")
    assert len(registry._cache) == 1

    registry.clear_cache()
    assert len(registry._cache) == 0


@pytest.mark.unit
def test_render_escapes_html(tmp_path):
    """Test autoescaping of values in HTML layouts."""
    (tmp_path / "simple.html.jinja").write_text("<h1>{{ title }}</h1>")
    registry = LayoutRegistry(tmp_path)

    assert registry.render("simple.html", {"title": "<script>"}) == "<h1>&lt;script&gt;</h1>"


@pytest.mark.unit
def test_render_undefined_variable_raises(tmp_path):
    """Test a missing context variable fails loudly with the layout named."""
    (tmp_path / "simple.html.jinja").write_text("<h1>{{ title }}</h1>")
    registry = LayoutRegistry(tmp_path)

    with pytest.raises(LayoutRenderError) as exc_info:
        registry.render("simple.html", {})

    assert exc_info.value.layout_name == "simple.html"
    assert exc_info.value.template_path == tmp_path / "simple.html.jinja"


@pytest.mark.unit
def test_render_missing_layout_raises(tmp_path):
    registry = LayoutRegistry(tmp_path)

    with pytest.raises(LayoutRenderError):
        registry.render("essay.html", {})
