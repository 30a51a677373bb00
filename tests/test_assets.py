"""Tests for output directory housekeeping."""

import os
import shutil
import logging
import pytest
from pathlib import Path

from markvault_pkg import assets
from markvault_pkg.errors import OutputDirectoryError


def fail(*args, **kwargs):
    raise OSError("disk full")


@pytest.fixture
def progress(caplog):
    caplog.set_level(logging.INFO, logger='markvault_pkg')
    return caplog


class TestProgressMessages:
    """Progress is logged before each step starts, so a failing step is visible."""

    def test_clean_logged_before_failure(self, temp_dir, progress, monkeypatch):
        output = os.path.join(temp_dir, 'docs')
        os.makedirs(output)
        monkeypatch.setattr(shutil, 'rmtree', fail)

        with pytest.raises(OutputDirectoryError, match="Failed to recreate"):
            assets.clean_output_dir(output)

        assert "Cleaning output directory" in progress.text

    def test_copy_content_logged_before_failure(self, mock_site_dir, temp_dir, progress, monkeypatch):
        monkeypatch.setattr(shutil, 'copytree', fail)

        with pytest.raises(OutputDirectoryError, match="Failed to copy content"):
            assets.copy_content(os.path.join(mock_site_dir, 'content'), os.path.join(temp_dir, 'docs'))

        assert "Copying content" in progress.text

    def test_copy_images_logged_before_failure(self, mock_site_dir, temp_dir, progress, monkeypatch):
        monkeypatch.setattr(shutil, 'copytree', fail)

        with pytest.raises(OutputDirectoryError, match="Failed to copy images"):
            assets.copy_images(os.path.join(mock_site_dir, 'assets', 'images'), os.path.join(temp_dir, 'docs'))

        assert "Copying images" in progress.text

    def test_sitemap_logged_before_failure(self, temp_dir, progress, monkeypatch):
        monkeypatch.setattr(assets, 'write_file', fail)

        with pytest.raises(OSError):
            assets.generate_sitemap([], 'https://example.org', temp_dir)

        assert "Generating XML sitemap" in progress.text


class TestCleanOutputDir:
    """Test cases for clean_output_dir."""

    def test_recreates_directory(self, temp_dir):
        output = Path(temp_dir, 'docs')
        output.mkdir()
        (output / 'stale.html').write_text('old', encoding='utf-8')

        assets.clean_output_dir(str(output))

        assert output.is_dir()
        assert list(output.iterdir()) == []

    def test_refuses_protected_directory(self, temp_dir):
        """Test that a protected directory inside the output is left alone."""
        images = Path(temp_dir, 'docs', 'img')
        images.mkdir(parents=True)
        (images / 'book.jpg').write_bytes(b'jpeg')

        with pytest.raises(OutputDirectoryError, match="Refusing to clean"):
            assets.clean_output_dir(os.path.join(temp_dir, 'docs'), protected=(None, str(images)))

        assert (images / 'book.jpg').exists()
