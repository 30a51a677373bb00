import os
import time
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from . import assets
from .assembler import PageAssembler, build_version_now
from .content import create_markdown_parser, read_content
from .errors import OutputDirectoryError
from .renderer import TemplateRenderer
from .routes import Route, build_routes


class ProgressFilter(logging.Filter):
    """Filter to allow only build progress messages to be shown in the console."""
    def filter(self, record):
        if record.levelno >= logging.WARNING:
            return True
        allowed_messages = [
            "Starting build",
            "Cleaning output directory",
            "Reading content",
            "Generating static HTML for",
            "Copying content",
            "Copying images",
            "Generating XML sitemap",
            "Generating robots.txt",
            "Build completed in",
            "Total pages generated:",
            "Total page errors:",
            "Output directory:",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


def setup_logging(log_dir=None):
    """
    Configure the package logger.

    Console output shows build progress only; when ``log_dir`` is given every
    record is also written to a timestamped log file there.
    """
    logger = logging.getLogger('markvault_pkg')
    logger.setLevel(logging.DEBUG)

    if not logger.handlers:
        # Console handler with filter
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.addFilter(ProgressFilter())
        console_handler.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(console_handler)

        # File handler for all logs
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            log_filename = datetime.now().strftime('markvault_%Y-%m-%d_%H-%M-%S.log')
            file_handler = logging.FileHandler(os.path.join(log_dir, log_filename))
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
            logger.addHandler(file_handler)

    return logger


@dataclass
class BuildResult:
    routes: List[Route] = field(default_factory=list)
    written: List[str] = field(default_factory=list)
    page_errors: list = field(default_factory=list)
    build_version: str = ''


class MarkVault:
    """Build orchestrator: reads content, renders every route and finalizes the output."""

    def __init__(self, config, renderer=None, markdown_parser=None):
        self.config = config
        self.logger = logging.getLogger('markvault_pkg.core')
        self.markdown_parser = markdown_parser or create_markdown_parser()
        self.renderer = renderer or TemplateRenderer(site_name=config.site_name)

    def check_output_dir(self):
        """Refuse output directories that would clobber or recurse into the sources."""
        output = os.path.realpath(self.config.output_dir)
        for label, source in (('content', self.config.content_dir), ('images', self.config.images_dir)):
            if source is None:
                continue
            source = os.path.realpath(source)
            if output == source or output.startswith(source + os.sep):
                raise OutputDirectoryError(
                    f"Output directory {self.config.output_dir} is inside the {label} directory"
                )

    def read_site_content(self):
        self.logger.info("Reading content...")
        posts = read_content(self.config.posts_dir, self.markdown_parser)
        pages = read_content(self.config.pages_dir, self.markdown_parser)
        self.logger.debug(f"Found {len(posts)} posts and {len(pages)} pages")
        return posts, pages

    def write_route(self, route, assembler, build_version, result):
        """Render, assemble and write one route."""
        rendered = self.renderer.render(route.template, route.data)
        if not rendered.ok:
            result.page_errors.append((route.path, rendered.error))

        html = assembler.assemble(route.title, route.path, rendered.html, route.data, build_version)
        output_file = os.path.join(self.config.output_dir, route.output_file)
        assets.write_file(output_file, html)
        result.written.append(output_file)
        self.logger.debug(f"Generated HTML: {output_file}")

    def finalize(self, routes):
        """Copy assets and write sitemap, robots.txt and the .nojekyll marker."""
        assets.copy_content(self.config.content_dir, self.config.output_dir)
        assets.copy_images(self.config.images_dir, self.config.output_dir)
        assets.generate_sitemap(routes, self.config.site_url, self.config.output_dir)
        assets.generate_robots_txt(self.config.site_url, self.config.output_dir)
        assets.write_nojekyll(self.config.output_dir)

    def build(self) -> BuildResult:
        """
        Run a full build.

        Raises:
            FatalBuildError: On the first fatal error; the output directory may
                be left partially written.
        """
        start_time = time.time()
        self.logger.info("Starting build...")

        self.check_output_dir()
        # Sources are loaded before the output directory is touched.
        assembler = PageAssembler.from_file(self.config.base_html, self.config)
        posts, pages = self.read_site_content()

        assets.clean_output_dir(
            self.config.output_dir,
            protected=(
                self.config.content_dir,
                self.config.images_dir,
                os.path.dirname(self.config.base_html),
            ),
        )
        routes = build_routes(posts, pages, self.config.site_name)
        self.logger.info(f"Generating static HTML for routes: {', '.join(r.path for r in routes)}")

        result = BuildResult(routes=routes, build_version=build_version_now())
        for route in routes:
            self.write_route(route, assembler, result.build_version, result)

        self.finalize(routes)

        total_time = time.time() - start_time
        self.logger.info(f"Build completed in {total_time:.6f} seconds.")
        self.logger.info(f"Total pages generated: {len(result.written)}")
        self.logger.info(f"Total page errors: {len(result.page_errors)}")
        self.logger.info(f"Output directory: {self.config.output_dir}")
        return result
