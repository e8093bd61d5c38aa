"""Shared fixtures: temporary content trees and logger cleanup."""

import textwrap
from pathlib import Path

import pytest
from loguru import logger

ABOUT_PAGE = """\
---
layout: page
title: About
permalink: /about/
---

Who I am.
"""

CONFIG = """\
title: Test Site
author: Tester
url: https://example.test
"""


def _make_document(
    layout: str = "post",
    title: str = "A post",
    body: str = "Body text.\n",
    **fields,
) -> str:
    """Build document text with a front-matter block."""
    lines = ["---", f"layout: {layout}", f"title: {title!r}" if title is not None else ""]
    for key, value in fields.items():
        lines.append(f"{key}: {value}")
    lines.append("---")
    header = "\n".join(line for line in lines if line)
    return f"{header}\n\n{textwrap.dedent(body)}"


@pytest.fixture
def make_document():
    """Factory for document text with a front-matter block."""
    return _make_document


@pytest.fixture(autouse=True)
def _reset_loguru():
    """Drop handlers added by setup_logger so log files and streams are released."""
    yield
    logger.remove()


@pytest.fixture
def content_root(tmp_path):
    """
    A minimal valid content tree: config, About page, no posts yet.

    Tests add posts with the write_post fixture.
    """
    root = tmp_path / "content"
    (root / "_posts").mkdir(parents=True)
    (root / "_config.yml").write_text(CONFIG)
    (root / "about.md").write_text(ABOUT_PAGE)
    return root


@pytest.fixture
def write_post(content_root):
    """Write a post file into the content tree and return its path."""

    def _write(filename: str, text: str = None, **kwargs) -> Path:
        path = content_root / "_posts" / filename
        path.write_text(text if text is not None else _make_document(**kwargs), encoding="utf-8")
        return path

    return _write
