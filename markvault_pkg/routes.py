"""Route derivation from posts and pages."""

import enum
from urllib.parse import quote
from dataclasses import dataclass
from typing import List, Optional

from .content import ContentItem, find_by_slug


class Template(enum.Enum):
    """The closed set of page templates."""
    HOME = 'home'
    POSTS = 'posts'
    ABOUT = 'about'
    POST = 'post'


# Templates that never receive page data.
DATALESS_TEMPLATES = frozenset({Template.HOME, Template.POSTS})

ABOUT_SLUG = 'about'


@dataclass(frozen=True)
class Route:
    path: str
    template: Template
    title: str
    data: Optional[ContentItem] = None

    def __post_init__(self):
        if not self.path.startswith('/'):
            raise ValueError(f"Route path must start with '/': {self.path!r}")
        if self.template in DATALESS_TEMPLATES and self.data is not None:
            raise ValueError(f"Template '{self.template.value}' does not take page data")

    @property
    def output_file(self):
        """Output file path relative to the output directory."""
        if self.path == '/':
            return 'index.html'
        return f"{self.path.strip('/')}/index.html"


def page_url(site_url, path):
    """Absolute URL for a route path, percent-encoding the path."""
    return f"{site_url}{quote(path)}"


def post_title(post, site_name):
    title = post.metadata.get('title') or 'Untitled'
    return f"{title} - {site_name}"


def build_routes(posts, pages, site_name) -> List[Route]:
    """
    Build the static routes followed by one route per post.

    Posts keep the order they were read in. The about route carries the page
    whose slug is ``about`` when one exists.
    """
    routes = [
        Route('/', Template.HOME, f"{site_name} - Home"),
        Route('/posts', Template.POSTS, f"All Posts - {site_name}"),
        Route('/about', Template.ABOUT, f"About - {site_name}", data=find_by_slug(pages, ABOUT_SLUG)),
    ]
    routes.extend(
        Route(f"/posts/{post.slug}", Template.POST, post_title(post, site_name), data=post)
        for post in posts
    )
    return routes
