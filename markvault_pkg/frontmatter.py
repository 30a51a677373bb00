"""YAML front matter parsing for Markdown content files."""

import yaml

from .errors import FrontMatterError

DELIMITER = '---\n'


def parse_front_matter(text, source=None):
    """
    Split raw file text into a metadata mapping and a Markdown body.

    Text without two delimiter lines is returned whole as the body with empty
    metadata. Everything after the second delimiter is the body.

    Args:
        text: Raw file contents
        source: Optional file path used in error messages

    Returns:
        Tuple of (metadata dict, markdown body)

    Raises:
        FrontMatterError: The metadata block is not a valid YAML mapping
    """
    parts = text.split(DELIMITER)
    if len(parts) < 3:
        return {}, text

    where = f" in {source}" if source else ""
    try:
        metadata = yaml.safe_load(parts[1])
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid YAML front matter{where}: {e}") from e

    if metadata is None:
        metadata = {}
    elif not isinstance(metadata, dict):
        raise FrontMatterError(
            f"Front matter{where} must be a mapping, got {type(metadata).__name__}"
        )

    body = DELIMITER.join(parts[2:])
    return metadata, body


def dump_front_matter(metadata, body=''):
    """Serialize metadata and a Markdown body back into front matter form."""
    block = yaml.safe_dump(metadata, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return f"{DELIMITER}{block}{DELIMITER}{body}"
