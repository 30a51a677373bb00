"""Assembling final HTML documents from the base page shell."""

import json
import logging
from datetime import datetime, timezone

from bs4 import BeautifulSoup

from .errors import BaseDocumentError, MountNodeNotFoundError
from .routes import page_url

logger = logging.getLogger(__name__)

BUILD_SCRIPT = """
    window.BUILD_VERSION = {version};
    window.BASE_URL = {dev_hosts}.includes(window.location.hostname) ? "" : {base_path};
    console.log("Build version:", window.BUILD_VERSION);
    console.log("BASE_URL:", window.BASE_URL);
  """


def build_version_now():
    """ISO-8601 UTC timestamp identifying a build."""
    return datetime.now(timezone.utc).isoformat()


class PageAssembler:
    def __init__(self, base_html, config):
        self.base_html = base_html
        self.config = config

    @classmethod
    def from_file(cls, path, config):
        """Create an assembler from a base HTML document on disk."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                base_html = f.read()
        except (IOError, OSError, UnicodeDecodeError) as e:
            raise BaseDocumentError(f"Failed to read base HTML document {path}: {e}") from e
        return cls(base_html, config)

    def meta_tags(self, title, path, data=None):
        """Return the ordered meta tag values for a page."""
        description = data.description if data is not None else None
        return {
            'description': description or self.config.description,
            'og:title': title,
            'og:description': description or self.config.og_description,
            'og:url': page_url(self.config.site_url, path),
            'og:type': 'website',
            'twitter:card': 'summary_large_image',
        }

    def build_script(self, build_version):
        return BUILD_SCRIPT.format(
            version=json.dumps(build_version),
            dev_hosts=json.dumps(list(self.config.dev_hosts)),
            base_path=json.dumps(self.config.base_path),
        )

    def assemble(self, title, path, fragment, data=None, build_version=None):
        """
        Produce the final document for one route.

        Args:
            title: Document title
            path: Route URL path, used for og:url
            fragment: Rendered template HTML to mount
            data: Optional ContentItem supplying the description
            build_version: Build timestamp; defaults to now

        Returns:
            Serialized HTML document

        Raises:
            MountNodeNotFoundError: The base document has no <head> or mount element
        """
        soup = BeautifulSoup(self.base_html, 'html.parser')
        head = soup.head
        if head is None:
            raise MountNodeNotFoundError("Base HTML document has no <head> element")
        mount = soup.find(id=self.config.mount_id)
        if mount is None:
            raise MountNodeNotFoundError(
                f"Base HTML document has no element with id '{self.config.mount_id}'"
            )

        if soup.title is None:
            head.append(soup.new_tag('title'))
        soup.title.string = title

        for name, content in self.meta_tags(title, path, data).items():
            attr = 'property' if name.startswith('og:') else 'name'
            tag = head.find('meta', attrs={attr: name})
            if tag is None:
                tag = soup.new_tag('meta')
                tag[attr] = name
                head.append(tag)
            tag['content'] = content

        script = soup.new_tag('script')
        script.string = self.build_script(build_version or build_version_now())
        head.append(script)

        mount.clear()
        for node in list(BeautifulSoup(fragment, 'html.parser').contents):
            mount.append(node)

        logger.debug(f"Assembled page {path}")
        return str(soup)
