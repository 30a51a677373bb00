"""Tests for front matter parsing."""

import pytest
from datetime import date

from markvault_pkg.errors import FatalBuildError, FrontMatterError
from markvault_pkg.frontmatter import dump_front_matter, parse_front_matter


class TestParseFrontMatter:
    """Test cases for parse_front_matter."""

    @pytest.mark.parametrize('text', [
        '',
        '# Just a heading\n\nSome text.\n',
        '---\ntitle: Only one delimiter\n',
        'title: no delimiters at all\n',
    ])
    def test_without_delimiter_pair_returns_whole_text(self, text):
        """Test that text without two delimiters is returned whole as the body."""
        metadata, body = parse_front_matter(text)

        assert metadata == {}
        assert body == text

    def test_parses_metadata_and_body(self):
        """Test parsing a well-formed front matter block."""
        text = "---\ntitle: Hello\ndescription: First post\ndate: 2024-01-02\n---\n# Hi\n"

        metadata, body = parse_front_matter(text)

        assert metadata == {
            'title': 'Hello',
            'description': 'First post',
            'date': date(2024, 1, 2),
        }
        assert body == '# Hi\n'

    def test_body_keeps_later_delimiters(self):
        """Test that horizontal rules in the body survive."""
        text = "---\ntitle: Rules\n---\nabove\n---\nbelow\n"

        metadata, body = parse_front_matter(text)

        assert metadata == {'title': 'Rules'}
        assert body == 'above\n---\nbelow\n'

    def test_empty_block_is_empty_mapping(self):
        """Test that an empty front matter block yields empty metadata."""
        metadata, body = parse_front_matter("---\n---\nbody\n")

        assert metadata == {}
        assert body == 'body\n'

    def test_invalid_yaml_raises(self):
        """Test that malformed YAML is a fatal error naming the source."""
        with pytest.raises(FrontMatterError, match="broken.md"):
            parse_front_matter("---\ntitle: [unclosed\n---\nbody\n", source='broken.md')

    def test_non_mapping_raises(self):
        """Test that a YAML list is rejected."""
        with pytest.raises(FrontMatterError, match="must be a mapping"):
            parse_front_matter("---\n- one\n- two\n---\nbody\n")

    def test_front_matter_error_is_fatal(self):
        """Test that front matter errors belong to the fatal taxonomy."""
        assert issubclass(FrontMatterError, FatalBuildError)


class TestDumpFrontMatter:
    """Test cases for dump_front_matter."""

    def test_reparse_yields_same_mapping(self):
        """Test that dumped metadata parses back to the same mapping."""
        metadata = {
            'title': 'Hello: a "quoted" title',
            'subtitle': 'Line with --- dashes',
            'description': 'Unicode café',
            'date': date(2023, 12, 31),
        }

        parsed, body = parse_front_matter(dump_front_matter(metadata, '# Body\n'))

        assert parsed == metadata
        assert body == '# Body\n'

    def test_output_starts_with_delimiter(self):
        """Test the serialized layout."""
        text = dump_front_matter({'title': 'Hello'}, 'body')

        assert text == "---\ntitle: Hello\n---\nbody"
