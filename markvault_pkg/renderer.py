"""
Fragment rendering for the fixed set of page templates.

Each member of :class:`Template` has a bundled Jinja2 fragment. Problems
confined to one page (unknown template, missing page data, a failing
fragment) are returned as a :class:`RenderResult` carrying the error and a
visible error fragment, so the rest of the site still builds.
"""

import html
import logging
from dataclasses import dataclass
from datetime import datetime, date
from typing import Optional

from jinja2 import Environment, PackageLoader, TemplateError, select_autoescape

from .errors import (
    MissingPageDataError,
    RecoverablePageError,
    TemplateRenderError,
    UnknownTemplateError,
)
from .routes import Template

logger = logging.getLogger(__name__)

FRAGMENTS = {
    Template.HOME: 'home.html',
    Template.POSTS: 'posts.html',
    Template.ABOUT: 'about.html',
    Template.POST: 'post.html',
}

# Templates that cannot render without a ContentItem.
REQUIRES_DATA = frozenset({Template.ABOUT, Template.POST})

ERROR_FRAGMENT = """
<div class="container mx-auto px-4 py-8">
  <h1 class="text-3xl font-bold text-red-600">Error</h1>
  <p>{message}</p>
</div>
"""

NOT_FOUND_FRAGMENTS = {
    Template.POST: '<div>Post not found</div>',
    Template.ABOUT: '<div>About page not found</div>',
}


@dataclass(frozen=True)
class RenderResult:
    """A rendered fragment, plus the page error it stands in for, if any."""
    html: str
    error: Optional[RecoverablePageError] = None

    @property
    def ok(self):
        return self.error is None


def parse_date(date_str):
    """Parse a date string."""
    if isinstance(date_str, datetime):
        return date_str
    elif isinstance(date_str, date):
        return datetime(date_str.year, date_str.month, date_str.day)
    elif isinstance(date_str, str):
        for fmt in ['%Y-%m-%dT%H:%M:%S', '%Y-%m-%d', '%b %d, %Y']:
            try:
                return datetime.strptime(date_str, fmt)
            except ValueError:
                continue
    return None


def format_date(value):
    """Format a front matter date for display, passing unparseable values through."""
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return parsed.strftime('%B %d, %Y')


def error_fragment(message):
    return ERROR_FRAGMENT.format(message=html.escape(message))


class TemplateRenderer:
    def __init__(self, site_name='MarkVault', tagline='A modern platform for digital preservation'):
        self.site_name = site_name
        self.tagline = tagline
        self.env = Environment(
            loader=PackageLoader('markvault_pkg', 'templates'),
            autoescape=select_autoescape(['html']),
        )
        self.env.filters['format_date'] = format_date

    def render(self, template, data=None) -> RenderResult:
        """
        Render the fragment for a template.

        Args:
            template: A Template member or its name
            data: ContentItem for templates that need page data

        Returns:
            RenderResult; ``error`` is set when an error fragment was substituted
        """
        try:
            template = Template(template)
        except ValueError:
            error = UnknownTemplateError(template)
            logger.error(str(error))
            return RenderResult(error_fragment(str(error)), error)

        if template in REQUIRES_DATA and data is None:
            error = MissingPageDataError(f"No page data for template '{template.value}'")
            logger.warning(str(error))
            return RenderResult(NOT_FOUND_FRAGMENTS[template], error)

        try:
            fragment = self.env.get_template(FRAGMENTS[template]).render(
                page=data,
                site_name=self.site_name,
                tagline=self.tagline,
            )
        except TemplateError as e:
            logger.error(f"Error rendering template '{template.value}': {e}")
            return RenderResult(error_fragment('Failed to render template'), TemplateRenderError(str(e)))

        return RenderResult(fragment)
