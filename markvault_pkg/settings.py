#!/usr/bin/env python3
"""
Settings loader for MarkVault static site generator.
Supports configuration from markvault.yml, markvault.yaml, or markvault.json files.
"""

import os
import json
import yaml
from dataclasses import dataclass
from typing import Dict, Any, Optional, Tuple


class MarkVaultSettings:
    """Load and manage MarkVault configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'content': 'site/content',
        'base_html': 'site/index.html',
        'images': 'site/assets/images',
        'output': 'docs',
        'site_name': 'MarkVault',
        'site_url': 'https://univault-org.github.io/MarkVault',
        'base_path': '/MarkVault',
        'dev_hosts': ['localhost'],
        'description': 'MarkVault - Preserving digital content for generations',
        'og_description': 'MarkVault - A modern markdown-powered platform',
        'mount_id': 'root',
        'logs': 'logs'
    }

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['markvault.yml', 'markvault.yaml', 'markvault.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = self.DEFAULT_SETTINGS.copy()
        self.config_file_path = None

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from configuration file if it exists.

        Returns:
            Dictionary of configuration settings

        Raises:
            ValueError: The configuration file is malformed
        """
        config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            loaded_settings = self._load_config_file(config_file)
            if not isinstance(loaded_settings, dict):
                raise ValueError(f"Configuration file {config_file} must contain a mapping")
            # Merge with defaults, giving preference to loaded settings
            self.settings.update(loaded_settings)

        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        """
        Find the first available configuration file.

        Returns:
            Path to config file or None if not found
        """
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    return yaml.safe_load(f) or {}
                elif file_ext == '.json':
                    return json.load(f) or {}
                else:
                    raise ValueError(f"Unsupported config file format: {file_ext}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file {config_path}: {e}")
        except (IOError, OSError) as e:
            raise IOError(f"Error reading configuration file {config_path}: {e}")

    def create_sample_config(self, file_format: str = 'yml') -> str:
        """
        Create a sample configuration file.

        Args:
            file_format: Format for config file ('yml', 'yaml', or 'json')

        Returns:
            Path to created sample config file
        """
        filename = f'markvault.{file_format}'
        config_path = os.path.join(self.config_dir, filename)

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                if file_format in ['yml', 'yaml']:
                    f.write("# MarkVault Configuration File\n\n")
                    f.write("# Site information\n")
                    f.write("site_name: MarkVault\n")
                    f.write("site_url: https://univault-org.github.io/MarkVault\n")
                    f.write("description: MarkVault - Preserving digital content for generations\n")
                    f.write("og_description: MarkVault - A modern markdown-powered platform\n\n")
                    f.write("# Deployment\n")
                    f.write("base_path: /MarkVault  # empty when served from a dev host\n")
                    f.write("dev_hosts:\n")
                    f.write("  - localhost\n\n")
                    f.write("# Build settings\n")
                    f.write("content: site/content\n")
                    f.write("base_html: site/index.html\n")
                    f.write("images: site/assets/images\n")
                    f.write("output: docs\n")
                    f.write("mount_id: root\n")
                    f.write("logs: logs\n")
                elif file_format == 'json':
                    json.dump(self.DEFAULT_SETTINGS, f, indent=2)
                else:
                    raise ValueError(f"Unsupported config file format: {file_format}")
        except PermissionError:
            raise PermissionError(f"Permission denied creating configuration file: {config_path}")
        except (IOError, OSError) as e:
            raise IOError(f"Error writing configuration file {config_path}: {e}")

        return config_path

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with command-line arguments.
        Command-line arguments take precedence over config file settings.

        Args:
            args_dict: Dictionary of command-line arguments

        Returns:
            Merged configuration dictionary
        """
        merged = self.settings.copy()

        # Override with non-None command line arguments
        for key, value in args_dict.items():
            if value is not None:
                if key == 'dev_hosts' and isinstance(value, str):
                    # Convert comma-separated string to list
                    merged[key] = [host.strip() for host in value.split(',') if host.strip()]
                else:
                    merged[key] = value

        return merged


@dataclass(frozen=True)
class SiteConfig:
    """Everything a build needs, resolved to concrete paths."""
    content_dir: str
    base_html: str
    output_dir: str
    images_dir: Optional[str] = None
    site_name: str = 'MarkVault'
    site_url: str = 'https://univault-org.github.io/MarkVault'
    base_path: str = '/MarkVault'
    dev_hosts: Tuple[str, ...] = ('localhost',)
    description: str = MarkVaultSettings.DEFAULT_SETTINGS['description']
    og_description: str = MarkVaultSettings.DEFAULT_SETTINGS['og_description']
    mount_id: str = 'root'
    log_dir: Optional[str] = None

    @property
    def posts_dir(self):
        return os.path.join(self.content_dir, 'posts')

    @property
    def pages_dir(self):
        return os.path.join(self.content_dir, 'pages')

    @classmethod
    def from_settings(cls, settings: Dict[str, Any], root: str = None) -> 'SiteConfig':
        """
        Build a SiteConfig from a settings dictionary.

        Relative paths are resolved against ``root``.
        """
        root = root or os.getcwd()

        def resolve(value):
            if value is None:
                return None
            value = os.path.expanduser(value)
            return value if os.path.isabs(value) else os.path.join(root, value)

        dev_hosts = settings.get('dev_hosts') or []
        if isinstance(dev_hosts, str):
            dev_hosts = [dev_hosts]

        return cls(
            content_dir=resolve(settings['content']),
            base_html=resolve(settings['base_html']),
            output_dir=resolve(settings['output']),
            images_dir=resolve(settings.get('images')),
            site_name=settings['site_name'],
            site_url=(settings.get('site_url') or '').rstrip('/'),
            base_path=(settings.get('base_path') or '').rstrip('/'),
            dev_hosts=tuple(dev_hosts),
            description=settings['description'],
            og_description=settings['og_description'],
            mount_id=settings['mount_id'],
            log_dir=resolve(settings.get('logs')),
        )
