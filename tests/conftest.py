"""Test configuration and fixtures for MarkVault tests."""

import pytest
import tempfile
import shutil
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from markvault_pkg.settings import SiteConfig

BASE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8"/>
<title>MarkVault</title>
</head>
<body>
<div id="root"></div>
</body>
</html>
"""

HELLO_POST = """---
title: Hello
description: A first post
date: 2024-01-02
---
# Hi

Some *content* here.
"""

ABOUT_PAGE = """---
title: About Us
subtitle: Who we are
---
We preserve digital content.
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so each test starts clean."""
    yield
    logger = logging.getLogger('markvault_pkg')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def base_html():
    return BASE_HTML


@pytest.fixture
def mock_site_dir(temp_dir):
    """Create a site tree with one post, an about page, an image and a base document."""
    site_dir = Path(temp_dir) / 'site'
    posts_dir = site_dir / 'content' / 'posts'
    pages_dir = site_dir / 'content' / 'pages'
    images_dir = site_dir / 'assets' / 'images'

    posts_dir.mkdir(parents=True)
    pages_dir.mkdir(parents=True)
    images_dir.mkdir(parents=True)

    (site_dir / 'index.html').write_text(BASE_HTML, encoding='utf-8')
    (posts_dir / 'hello.md').write_text(HELLO_POST, encoding='utf-8')
    (pages_dir / 'about.md').write_text(ABOUT_PAGE, encoding='utf-8')
    (images_dir / 'book.jpg').write_bytes(b'\xff\xd8\xff\xe0fake-jpeg')

    return str(site_dir)


@pytest.fixture
def site_config(temp_dir, mock_site_dir):
    """SiteConfig pointing at the mock site, writing into <temp>/docs."""
    site_dir = Path(mock_site_dir)
    return SiteConfig(
        content_dir=str(site_dir / 'content'),
        base_html=str(site_dir / 'index.html'),
        output_dir=str(Path(temp_dir) / 'docs'),
        images_dir=str(site_dir / 'assets' / 'images'),
    )
