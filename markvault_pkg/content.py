"""Reading Markdown content directories into ContentItem values."""

import os
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

import mistune

from .errors import ContentNotFoundError, ContentReadError
from .frontmatter import parse_front_matter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentItem:
    """A parsed Markdown file: slug, front matter and rendered HTML body."""
    slug: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    content_html: str = ''

    @property
    def title(self):
        return self.metadata.get('title')

    @property
    def description(self):
        return self.metadata.get('description')


def create_markdown_parser():
    """Create a Mistune markdown parser with a custom renderer."""
    class CustomRenderer(mistune.HTMLRenderer):
        def __init__(self):
            super().__init__(escape=False)
        def block_code(self, code, info=None):
            escaped_code = mistune.escape(code)
            return '<pre style="white-space: pre-wrap;"><code>{}</code></pre>\n'.format(escaped_code)
    return mistune.create_markdown(
        renderer=CustomRenderer(),
        plugins=['table', 'task_lists', 'strikethrough']
    )


def get_markdown_files(directory):
    """Get all markdown files from a directory, sorted by filename."""
    if not os.path.isdir(directory):
        raise ContentNotFoundError(f"Content directory not found: {directory}")
    try:
        entries = os.listdir(directory)
    except OSError as e:
        raise ContentReadError(f"Failed to list content directory {directory}: {e}") from e
    markdown_files = []
    for name in sorted(entries):
        path = os.path.join(directory, name)
        if not name.endswith('.md') or not os.path.isfile(path):
            continue
        # An empty slug would collide with the directory's own index page.
        if name == '.md':
            logger.warning(f"Skipping markdown file without a name: {path}")
            continue
        markdown_files.append(path)
    return markdown_files


def read_content_file(filepath, markdown_parser):
    """Read one markdown file and return its ContentItem."""
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            text = f.read()
    except (IOError, OSError, UnicodeDecodeError) as e:
        raise ContentReadError(f"Failed to read markdown file {filepath}: {e}") from e

    metadata, markdown_body = parse_front_matter(text, source=filepath)
    slug = os.path.basename(filepath)[:-len('.md')]
    return ContentItem(slug=slug, metadata=metadata, content_html=markdown_parser(markdown_body))


def read_content(directory, markdown_parser=None) -> List[ContentItem]:
    """
    Read every ``.md`` file in a directory.

    Args:
        directory: Directory holding markdown files (not searched recursively)
        markdown_parser: Callable converting markdown text to HTML

    Returns:
        List of ContentItem ordered by filename

    Raises:
        ContentNotFoundError: The directory does not exist
        ContentReadError: A file could not be read
        FrontMatterError: A file has malformed front matter
    """
    if markdown_parser is None:
        markdown_parser = create_markdown_parser()

    items = [read_content_file(path, markdown_parser) for path in get_markdown_files(directory)]
    logger.debug(f"Read {len(items)} content files from {directory}")
    return items


def find_by_slug(items, slug):
    """Return the first item with the given slug, or None."""
    for item in items:
        if item.slug == slug:
            return item
    return None
