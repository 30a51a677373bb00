#!/usr/bin/env python3
"""
Command-line interface for MarkVault - static site generator.
"""

import os
import sys
import argparse
import time
from datetime import date
from typing import List, Optional

from . import __version__
from .core import MarkVault, setup_logging
from .errors import FatalBuildError
from .frontmatter import dump_front_matter
from .settings import MarkVaultSettings, SiteConfig

BASE_HTML = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>MarkVault</title>
  </head>
  <body>
    <div id="root"></div>
  </body>
</html>
"""

PATH_ARGUMENTS = ('content', 'base_html', 'images', 'output')

SAMPLE_POST_BODY = """
# Welcome to MarkVault

This is your first post. Edit `site/content/posts/welcome.md` or add new
Markdown files next to it, then run `markvault` to rebuild the site.
"""

SAMPLE_ABOUT_BODY = """
MarkVault is a modern platform designed for preserving digital content.
"""


def write_if_missing(path: str, text: str, label: str) -> None:
    if os.path.exists(path):
        print(f"{label} already exists: {os.path.relpath(path)}")
        return
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)
    print(f"Created {label.lower()}: {os.path.relpath(path)}")


def create_starter_structure(root: str, settings: dict) -> None:
    """Create a starter site: base document, a sample post and an about page."""
    config = SiteConfig.from_settings(settings, root)

    for directory in (config.posts_dir, config.pages_dir, config.images_dir):
        if directory is None:
            continue
        if os.path.exists(directory):
            print(f"Directory already exists: {os.path.relpath(directory)}")
        else:
            os.makedirs(directory, exist_ok=True)
            print(f"Created directory: {os.path.relpath(directory)}")

    write_if_missing(config.base_html, BASE_HTML, "Base document")

    sample_post = dump_front_matter({
        'title': 'Welcome to MarkVault',
        'description': 'The first post on this site.',
        'date': date.today(),
    }, SAMPLE_POST_BODY)
    write_if_missing(os.path.join(config.posts_dir, 'welcome.md'), sample_post, "Sample post")

    about_page = dump_front_matter({
        'title': f"About {config.site_name}",
        'subtitle': 'Preserving digital content for generations',
    }, SAMPLE_ABOUT_BODY)
    write_if_missing(os.path.join(config.pages_dir, 'about.md'), about_page, "About page")

    print("\nStarter structure created successfully!")
    print("\nNext steps:")
    print("1. Edit the configuration file (markvault.yml)")
    print("2. Add your content to the posts and pages directories")
    print("3. Run 'markvault' to build your site")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='MarkVault - Static Site Generator')
    parser.add_argument('--content', type=str,
                        help='Content directory containing posts/ and pages/')
    parser.add_argument('--base-html', type=str, dest='base_html',
                        help='Base HTML document with the content mount element')
    parser.add_argument('--images', type=str,
                        help='Images directory to copy to output')
    parser.add_argument('--output', type=str,
                        help='Output directory for generated site')
    parser.add_argument('--site-name', type=str, dest='site_name',
                        help='Site name used in page titles')
    parser.add_argument('--site-url', type=str, dest='site_url',
                        help='Absolute site URL for og:url, sitemap and robots.txt')
    parser.add_argument('--base-path', type=str, dest='base_path',
                        help='Deployment sub-path used as BASE_URL outside dev hosts')
    parser.add_argument('--dev-hosts', type=str, dest='dev_hosts',
                        help='Comma-separated host names served without the base path')
    parser.add_argument('--config-dir', type=str, dest='config_dir',
                        help='Directory holding markvault.yml (defaults to the current directory)')
    parser.add_argument('--init', type=str, choices=['yml', 'yaml', 'json'],
                        help='Create a sample configuration file and starter site')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    config_dir = os.path.abspath(args.config_dir or os.getcwd())
    settings_loader = MarkVaultSettings(config_dir)

    # Handle init command
    if args.init:
        config_path = settings_loader.create_sample_config(args.init)
        print(f"Created sample configuration file: {config_path}")
        print("\nCreating starter project structure...")
        create_starter_structure(config_dir, settings_loader.load_settings())
        return

    try:
        settings_loader.load_settings()
    except (ValueError, IOError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # Command line arguments take precedence over the config file
    args_dict = {k: v for k, v in vars(args).items() if v is not None and k not in ('init', 'config_dir')}
    # Paths given on the command line are relative to where the command runs
    for key in PATH_ARGUMENTS:
        if key in args_dict:
            args_dict[key] = os.path.abspath(os.path.expanduser(args_dict[key]))
    final_settings = settings_loader.merge_with_args(args_dict)
    config = SiteConfig.from_settings(final_settings, config_dir)

    logger = setup_logging(config.log_dir)
    if settings_loader.config_file_path:
        logger.debug(f"Loaded configuration from: {settings_loader.config_file_path}")

    start_time = time.time()
    try:
        MarkVault(config).build()
    except FatalBuildError as e:
        logger.debug(f"Build failed: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logger.debug(f"Total CLI time: {time.time() - start_time:.6f} seconds")


if __name__ == '__main__':
    main()
