"""
Integration tests for loading a content tree.
Tests: files on disk -> SiteContent with documents, config and load errors.
"""

from datetime import date

import pytest

from folio.contexts.content.exceptions import (
    FrontMatterNotFoundError,
    InvalidDocumentNameError,
    InvalidFrontMatterError,
    InvalidSiteConfigError,
)
from folio.contexts.content.site import SiteContent
from folio.contexts.content.site_config import load_site_config



@pytest.mark.integration
def test_load_site(content_root, write_post):
    write_post("2021-05-01-older.md", title="Older", categories="[rust]")
    write_post("2023-02-03-newer.md", title="Newer", categories="[rust, gui]")

    site = SiteContent.load(content_root)

    assert site.is_clean
    assert [page.identifier for page in site.pages] == ["about"]
    assert [post.identifier for post in site.posts] == ["2023-02-03-newer", "2021-05-01-older"]
    assert site.posts[0].date == date(2023, 2, 3)
    assert len(site) == 3
    assert site.config.title == "Test Site"


@pytest.mark.integration
def test_lookup_by_identifier_and_url(content_root, write_post):
    write_post("2021-05-01-older.md", title="Older")
    site = SiteContent.load(content_root)

    assert site.get("about").title == "About"
    assert site.by_url("/about/").identifier == "about"
    assert site.by_url("/2021/05/01/older.html").identifier == "2021-05-01-older"
    assert site.get("missing") is None


@pytest.mark.integration
def test_categories_index(content_root, write_post):
    write_post("2021-05-01-a.md", title="A", categories="[rust, async]")
    write_post("2022-05-01-b.md", title="B", categories="[gui, rust]")

    categories = SiteContent.load(content_root).categories()

    assert list(categories) == ["gui", "rust", "async"]
    assert [post.identifier for post in categories["rust"]] == ["2022-05-01-b", "2021-05-01-a"]


@pytest.mark.integration
def test_category_spellings_grouped(content_root, write_post):
    write_post("2021-05-01-a.md", title="A", categories="[Rust, async]")
    write_post("2022-05-01-b.md", title="B", categories="[rust]")
    write_post("2023-05-01-c.md", title="C", categories="[C, C++]")

    site = SiteContent.load(content_root)
    categories = site.categories()

    assert list(categories) == ["C", "rust", "async"]
    assert [post.identifier for post in categories["C"]] == ["2023-05-01-c"]
    assert [post.identifier for post in categories["rust"]] == ["2022-05-01-b", "2021-05-01-a"]
    assert site.generated_urls().count("/categories/c.html") == 1
    assert site.category_spellings() == {"c": ["C", "C++"], "rust": ["rust", "Rust"]}


@pytest.mark.integration
def test_bad_files_are_collected_not_raised(content_root, write_post, make_document):
    """Test loading continues past broken files and records each failure."""
    write_post("2021-05-01-good.md", title="Good")
    write_post("2021-05-02-no-front-matter.md", text="# Just markdown\n")
    write_post("2021-05-03-bad-schema.md", text=make_document(layout="essay", title=""))
    write_post("undated.md", title="Undated")

    site = SiteContent.load(content_root)

    assert [post.identifier for post in site.posts] == ["2021-05-01-good"]
    errors = {path.name: error for path, error in site.load_errors}
    assert isinstance(errors["2021-05-02-no-front-matter.md"], FrontMatterNotFoundError)
    assert isinstance(errors["2021-05-03-bad-schema.md"], InvalidFrontMatterError)
    assert isinstance(errors["undated.md"], InvalidDocumentNameError)
    assert all(error.source == path for path, error in site.load_errors)


@pytest.mark.integration
def test_page_layout_in_posts_dir_is_an_error(content_root, write_post):
    write_post("2021-05-01-not-a-post.md", layout="page", title="Stray page")

    site = SiteContent.load(content_root)

    assert site.posts == []
    assert "must use layout 'post'" in site.load_errors[0][1].message


@pytest.mark.integration
def test_missing_configured_page(content_root):
    (content_root / "about.md").unlink()

    site = SiteContent.load(content_root)

    assert site.pages == []
    assert "does not exist" in site.load_errors[0][1].message


@pytest.mark.integration
def test_hidden_and_draft_files_skipped(content_root, write_post):
    write_post("_2021-05-01-draft.md", title="Draft")
    write_post(".2021-05-01-swap.md", title="Swap")
    (content_root / "_posts" / "notes.txt").write_text("not a post")

    site = SiteContent.load(content_root)

    assert site.posts == []
    assert site.is_clean


@pytest.mark.integration
def test_config_defaults_when_missing(tmp_path):
    config = load_site_config(tmp_path)

    assert config.posts_dir == "_posts"
    assert config.pages == ["about.md"]
    assert config.feed is True
    assert config.link_check.timeout == 10
    assert config.link_check.ignore == []


@pytest.mark.integration
def test_config_partial_override(tmp_path):
    (tmp_path / "_config.yml").write_text(
        "title: Mine\nfeed: false\nlink_check:\n  max_workers: 4\n  ignore: [https://x.test]\n"
    )

    config = load_site_config(tmp_path)

    assert config.title == "Mine"
    assert config.feed is False
    assert config.link_check.max_workers == 4
    assert config.link_check.timeout == 10
    assert config.link_check.ignore == ["https://x.test"]


@pytest.mark.integration
def test_config_must_be_mapping(tmp_path):
    (tmp_path / "_config.yml").write_text("- just\n- a list\n")

    with pytest.raises(ValueError, match="key-value mapping"):
        load_site_config(tmp_path)


@pytest.mark.integration
@pytest.mark.parametrize(
    "config_text, expected",
    [
        ("title: [unclosed\n", "Not valid YAML"),
        ("pages: about.md\n", "pages"),
        ("feed: [1, 2]\n", "feed"),
        ("link_check:\n  max_workers: 0\n", "max_workers must be at least 1"),
        ("link_check:\n  timeout: -1\n", "timeout must be positive"),
    ],
)
def test_config_values_are_validated(tmp_path, config_text, expected):
    (tmp_path / "_config.yml").write_text(config_text)

    with pytest.raises(InvalidSiteConfigError, match=expected):
        load_site_config(tmp_path)


@pytest.mark.integration
def test_config_unknown_keys_ignored(tmp_path):
    (tmp_path / "_config.yml").write_text("markdown: kramdown\nlink_check:\n  retries: 3\ntitle: Mine\n")

    config = load_site_config(tmp_path)

    assert config.title == "Mine"
    assert config.link_check.max_workers == 16


@pytest.mark.integration
def test_configured_page_that_is_a_directory(content_root):
    (content_root / "_config.yml").write_text("pages: [about.md, drafts]\n")
    (content_root / "drafts").mkdir()

    site = SiteContent.load(content_root)

    assert [page.identifier for page in site.pages] == ["about"]
    assert [error.message for _, error in site.load_errors] == ["Page listed in config is not a file"]


@pytest.mark.integration
def test_config_urls(tmp_path):
    (tmp_path / "_config.yml").write_text("url: https://example.org/\nbaseurl: blog\n")
    config = load_site_config(tmp_path)

    assert config.relative_url("/about/") == "/blog/about/"
    assert config.absolute_url("/about/") == "https://example.org/blog/about/"
