"""
Integration tests for rendering a content tree to a static site.
Tests: content tree -> build_site -> HTML/XML files on disk.
"""

import xml.etree.ElementTree as ET

import pytest

from folio.contexts.content.exceptions import DuplicateURLError
from folio.contexts.content.site import SiteContent, output_path_for
from folio.contexts.rendering.builder import build_site

ATOM = "{http://www.w3.org/2005/Atom}"


@pytest.fixture
def populated_site(content_root, write_post):
    write_post(
        "2022-03-14-a-reactor.md",
        title="A reactor <in> one thread",
        categories="[rust, async]",
        comments="true",
        body="## Polling\n\nThe **reactor** waits on `epoll`.\n",
    )
    write_post(
        "2024-01-20-handles.md",
        title="Window handles",
        categories="[rust, gui]",
        excerpt="'Borrowed handles, announced.'",
        comments="false",
    )
    (content_root / "assets").mkdir()
    (content_root / "assets" / "style.css").write_text("body {}")
    return SiteContent.load(content_root)


@pytest.mark.integration
@pytest.mark.parametrize(
    "url, expected",
    [
        ("/about/", "about/index.html"),
        ("/", "index.html"),
        ("/index.html", "index.html"),
        ("/rust/2022/03/14/a-reactor.html", "rust/2022/03/14/a-reactor.html"),
        ("/notes", "notes/index.html"),
        ("/feed.xml", "feed.xml"),
    ],
)
def test_output_path_for(tmp_path, url, expected):
    assert output_path_for(url, tmp_path) == tmp_path / expected


@pytest.mark.integration
def test_build_writes_every_document(populated_site, tmp_path):
    output = tmp_path / "site"

    result = build_site(populated_site, output)

    assert result.success, result.errors
    for relative in [
        "about/index.html",
        "rust/async/2022/03/14/a-reactor.html",
        "rust/gui/2024/01/20/handles.html",
        "index.html",
        "categories/rust.html",
        "categories/async.html",
        "categories/gui.html",
        "feed.xml",
        "assets/style.css",
    ]:
        assert (output / relative).is_file(), relative
        assert output / relative in result.written


@pytest.mark.integration
def test_config_and_posts_dir_not_copied(populated_site, tmp_path):
    output = tmp_path / "site"
    build_site(populated_site, output)

    assert not (output / "_config.yml").exists()
    assert not (output / "_posts").exists()
    assert not (output / "about.md").exists()


@pytest.mark.integration
def test_post_html(populated_site, tmp_path):
    output = tmp_path / "site"
    build_site(populated_site, output)

    html = (output / "rust/async/2022/03/14/a-reactor.html").read_text()

    assert "A reactor &lt;in&gt; one thread" in html
    assert "<strong>reactor</strong>" in html
    assert "<code>epoll</code>" in html
    assert '<time datetime="2022-03-14">Mar 14, 2022</time>' in html
    assert 'href="/categories/async.html"' in html
    assert 'id="comments"' in html


@pytest.mark.integration
def test_comments_section_only_when_enabled(populated_site, tmp_path):
    output = tmp_path / "site"
    build_site(populated_site, output)

    html = (output / "rust/gui/2024/01/20/handles.html").read_text()
    assert 'id="comments"' not in html


@pytest.mark.integration
def test_page_uses_page_layout(populated_site, tmp_path):
    output = tmp_path / "site"
    build_site(populated_site, output)

    html = (output / "about/index.html").read_text()

    assert '<article class="page">' in html
    assert "Who I am." in html
    assert "<title>About | Test Site</title>" in html


@pytest.mark.integration
def test_index_lists_posts_newest_first(populated_site, tmp_path):
    output = tmp_path / "site"
    build_site(populated_site, output)

    html = (output / "index.html").read_text()

    assert html.index("Window handles") < html.index("A reactor &lt;in&gt; one thread")
    assert "Borrowed handles, announced." in html
    assert "The reactor waits on epoll." in html


@pytest.mark.integration
def test_category_page_lists_only_its_posts(populated_site, tmp_path):
    output = tmp_path / "site"
    build_site(populated_site, output)

    html = (output / "categories/gui.html").read_text()

    assert "Window handles" in html
    assert "A reactor" not in html


@pytest.mark.integration
def test_feed_is_valid_atom(populated_site, tmp_path):
    output = tmp_path / "site"
    build_site(populated_site, output)

    root = ET.parse(output / "feed.xml").getroot()
    entries = root.findall(f"{ATOM}entry")

    assert root.tag == f"{ATOM}feed"
    assert root.find(f"{ATOM}title").text == "Test Site"
    assert root.find(f"{ATOM}updated").text == "2024-01-20T00:00:00+00:00"
    assert [entry.find(f"{ATOM}title").text for entry in entries] == [
        "Window handles",
        "A reactor <in> one thread",
    ]
    assert entries[0].find(f"{ATOM}id").text == "https://example.test/rust/gui/2024/01/20/handles.html"
    assert "<strong>reactor</strong>" in entries[1].find(f"{ATOM}content").text


@pytest.mark.integration
def test_feed_disabled(content_root, tmp_path):
    (content_root / "_config.yml").write_text("title: No Feed\nfeed: false\n")
    output = tmp_path / "site"

    build_site(SiteContent.load(content_root), output)

    assert not (output / "feed.xml").exists()


@pytest.mark.integration
def test_clean_removes_stale_files(populated_site, tmp_path):
    output = tmp_path / "site"
    output.mkdir()
    (output / "stale.html").write_text("old")

    build_site(populated_site, output, clean=True)
    assert not (output / "stale.html").exists()


@pytest.mark.integration
def test_no_clean_keeps_existing_files(populated_site, tmp_path):
    output = tmp_path / "site"
    output.mkdir()
    (output / "stale.html").write_text("old")

    build_site(populated_site, output, clean=False)
    assert (output / "stale.html").exists()


@pytest.mark.integration
def test_duplicate_url_refuses_to_build(content_root, write_post, tmp_path):
    write_post("2021-05-01-also-about.md", title="Imposter", permalink="/about/")

    with pytest.raises(DuplicateURLError) as exc_info:
        build_site(SiteContent.load(content_root), tmp_path / "site")

    assert exc_info.value.url.endswith("about/index.html")
    assert set(exc_info.value.identifiers) == {"about", "2021-05-01-also-about"}


@pytest.mark.integration
def test_category_spellings_build_one_listing(content_root, write_post, tmp_path):
    write_post("2021-05-01-a.md", title="A", categories="[Rust]")
    write_post("2022-05-01-b.md", title="B", categories="[rust]")
    output = tmp_path / "site"

    result = build_site(SiteContent.load(content_root), output)

    assert result.success, result.errors
    listing = (output / "categories" / "rust.html").read_text()
    assert "/rust/2021/05/01/a.html" in listing
    assert "/rust/2022/05/01/b.html" in listing


@pytest.mark.integration
def test_trailing_slash_permalinks_refuse_to_build(content_root, write_post, tmp_path):
    write_post("2021-05-01-bio.md", title="Bio", permalink="/about")

    with pytest.raises(DuplicateURLError) as exc_info:
        build_site(SiteContent.load(content_root), tmp_path / "site")

    assert set(exc_info.value.identifiers) == {"about", "2021-05-01-bio"}


@pytest.mark.integration
def test_refuses_to_build_over_content_root(content_root):
    site = SiteContent.load(content_root)

    with pytest.raises(ValueError, match="contains the content root"):
        build_site(site, content_root)
    with pytest.raises(ValueError, match="contains the content root"):
        build_site(site, content_root.parent)

    assert (content_root / "about.md").exists()
