"""Output directory housekeeping and the files written after the pages."""

import os
import shutil
import logging
from xml.sax.saxutils import escape

from .errors import OutputDirectoryError
from .routes import page_url

logger = logging.getLogger(__name__)

SITEMAP_CHANGEFREQ = 'weekly'


def clean_output_dir(output_dir, protected=()):
    """
    Remove and recreate the output directory.

    Args:
        output_dir: Directory to recreate
        protected: Source directories that must never be removed

    Raises:
        OutputDirectoryError: output_dir is, or contains, a protected directory
    """
    output_resolved = os.path.realpath(output_dir)
    for path in protected:
        if path is None:
            continue
        resolved = os.path.realpath(path)
        if resolved == output_resolved or resolved.startswith(output_resolved + os.sep):
            raise OutputDirectoryError(f"Refusing to clean {output_dir}: it contains {path}")

    logger.info("Cleaning output directory")
    try:
        if os.path.exists(output_dir):
            shutil.rmtree(output_dir)
        os.makedirs(output_dir, exist_ok=True)
    except OSError as e:
        raise OutputDirectoryError(f"Failed to recreate output directory {output_dir}: {e}") from e


def write_file(path, text):
    """Write text to path, creating parent directories."""
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
    except OSError as e:
        raise OutputDirectoryError(f"Failed to write {path}: {e}") from e


def copy_content(content_dir, output_dir):
    """Mirror the content directory into <output>/content."""
    dest = os.path.join(output_dir, 'content')
    logger.info("Copying content")
    try:
        shutil.copytree(content_dir, dest, dirs_exist_ok=True)
    except (shutil.Error, OSError) as e:
        raise OutputDirectoryError(f"Failed to copy content from {content_dir}: {e}") from e
    return dest


def copy_images(images_dir, output_dir):
    """Mirror the images directory into <output>/assets/images when it exists."""
    if not images_dir or not os.path.isdir(images_dir):
        logger.warning(f"No images directory found at: {images_dir}")
        return None
    dest = os.path.join(output_dir, 'assets', 'images')
    logger.info("Copying images")
    try:
        shutil.copytree(images_dir, dest, dirs_exist_ok=True)
    except (shutil.Error, OSError) as e:
        raise OutputDirectoryError(f"Failed to copy images from {images_dir}: {e}") from e
    return dest


def format_xml_sitemap_entry(url):
    """Format a single sitemap entry."""
    return f'''<url>
<loc>{escape(url)}</loc>
<changefreq>{SITEMAP_CHANGEFREQ}</changefreq>
</url>
'''


def generate_sitemap(routes, site_url, output_dir):
    """Write sitemap.xml listing the absolute URL of every route."""
    sitemap_content = '''<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
'''
    for route in routes:
        sitemap_content += format_xml_sitemap_entry(page_url(site_url, route.path))
    sitemap_content += '</urlset>\n'

    sitemap_file = os.path.join(output_dir, 'sitemap.xml')
    logger.info("Generating XML sitemap")
    write_file(sitemap_file, sitemap_content)
    return sitemap_file


def generate_robots_txt(site_url, output_dir):
    """Write a robots.txt allowing all crawlers and pointing at the sitemap."""
    robots_content = """User-agent: *
Allow: /
Sitemap: {}/sitemap.xml
""".format(site_url)

    robots_file = os.path.join(output_dir, 'robots.txt')
    logger.info("Generating robots.txt")
    write_file(robots_file, robots_content)
    return robots_file


def write_nojekyll(output_dir):
    """Write the empty marker that turns off GitHub Pages' Jekyll processing."""
    marker = os.path.join(output_dir, '.nojekyll')
    write_file(marker, '')
    return marker
