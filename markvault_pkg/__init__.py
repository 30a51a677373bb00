"""
MarkVault - a small static site generator.

MarkVault reads Markdown posts and pages with YAML front matter, renders
them into a fixed set of page fragments, mounts each fragment into a base
HTML document with SEO metadata, and writes a deployable site together with
a sitemap, robots.txt and copied assets.
"""

__version__ = "1.0.0"

from .core import MarkVault
from .settings import MarkVaultSettings, SiteConfig

__all__ = ['MarkVault', 'MarkVaultSettings', 'SiteConfig']
