"""
Tests for configuration loading and validation.
"""

from argparse import Namespace
from unittest import TestCase

import pytest

from prisma_casemap.config_validation import (
    ToolConfigSchema,
    load_config,
    read_config_file,
    validate_and_parse_config,
)
from prisma_casemap.constants import DefaultConfig
from prisma_casemap.exceptions import ConfigurationError


class TestToolConfigSchema(TestCase):
    """Test cases for the pydantic configuration schema"""

    def test_defaults(self):
        config = validate_and_parse_config({})
        assert config.schema_path is None
        assert config.search_paths == DefaultConfig.SEARCH_PATHS
        assert config.dry is False
        assert config.indent == 2
        assert config.map_unchanged_names is True
        assert config.keep_existing_maps is True

    def test_single_search_path_string(self):
        config = validate_and_parse_config({"search_paths": " db/schema.prisma "})
        assert config.search_paths == ["db/schema.prisma"]

    def test_empty_search_path_rejected(self):
        with self.assertRaises(ConfigurationError) as cm:
            validate_and_parse_config({"search_paths": ["schema.prisma", ""]})
        assert "search_paths" in cm.exception.context["errors"]

    def test_indent_bounds(self):
        with self.assertRaises(ConfigurationError):
            validate_and_parse_config({"indent": 0})
        with self.assertRaises(ConfigurationError):
            validate_and_parse_config({"indent": 9})

    def test_unknown_keys_ignored(self):
        config = validate_and_parse_config({"color": "always"})
        assert not hasattr(config, "color")

    def test_dictionary_access(self):
        config = ToolConfigSchema(indent=4)
        assert config["indent"] == 4
        assert config.get("missing", "fallback") == "fallback"

    def test_transform_options(self):
        options = ToolConfigSchema(map_unchanged_names=False).transform_options()
        assert options.map_unchanged_names is False
        assert options.keep_existing_maps is True

    def test_dry_with_output_path_warns(self):
        with self.assertLogs("prisma_casemap.config_validation", level="WARNING"):
            ToolConfigSchema(dry=True, output_path="out.prisma")


def test_read_config_file(tmp_path):
    config_file = tmp_path / "casemap.yaml"
    config_file.write_text("dry: true\nsearch_paths:\n  - db/schema.prisma\n")
    assert read_config_file(str(config_file)) == {"dry": True, "search_paths": ["db/schema.prisma"]}


def test_read_empty_config_file(tmp_path):
    config_file = tmp_path / "casemap.yaml"
    config_file.write_text("")
    assert read_config_file(str(config_file)) == {}


def test_read_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError) as exc_info:
        read_config_file(str(tmp_path / "missing.yaml"))
    assert exc_info.value.context["config_file"].endswith("missing.yaml")


def test_read_invalid_yaml(tmp_path):
    config_file = tmp_path / "casemap.yaml"
    config_file.write_text("dry: [unterminated\n")
    with pytest.raises(ConfigurationError):
        read_config_file(str(config_file))


def test_read_non_mapping(tmp_path):
    config_file = tmp_path / "casemap.yaml"
    config_file.write_text("- one\n- two\n")
    with pytest.raises(ConfigurationError):
        read_config_file(str(config_file))


def test_cli_arguments_override_file(tmp_path):
    config_file = tmp_path / "casemap.yaml"
    config_file.write_text("indent: 4\ndry: true\n")
    cli_args = Namespace(indent=8, dry=None, output_path=None, verbose=True, config=str(config_file))

    config = load_config(str(config_file), cli_args)

    assert config.indent == 8
    assert config.dry is True


def test_load_config_without_file():
    config = load_config(None, Namespace(schema_path="schema.prisma", dry=None))
    assert config.schema_path == "schema.prisma"
    assert config.dry is False
