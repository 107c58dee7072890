"""
Tests for grph.config module.
"""

import os

import pytest

from grph.config import (
    DEFAULT_CONFIG,
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    get_config,
    load_config,
    merge_configs,
    parse_toml,
    parse_toml_document,
)
from grph.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Drop GRPH_* variables from the environment."""
    for name in list(os.environ):
        if name.startswith("GRPH_"):
            monkeypatch.delenv(name)


class TestParseToml:
    def test_parse(self):
        config = parse_toml('[grph]\nsource = "binding-graph"\n\n[gexf]\npretty_print = false\n')
        assert config == {"grph": {"source": "binding-graph"}, "gexf": {"pretty_print": False}}
        assert isinstance(config["grph"], dict)

    def test_document_round_trip(self):
        content = '# output settings\n[grph]\noutput_dir = "out"  # relative to cwd\n'
        assert parse_toml_document(content).as_string() == content

    def test_invalid_toml(self):
        with pytest.raises(ConfigError, match="Invalid TOML"):
            parse_toml("[grph\nsource =")


class TestConfigLoader:
    def test_find_config_file(self, tmp_path):
        (tmp_path / ".grph.toml").write_text("[grph]\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == (tmp_path / ".grph.toml").resolve()

    def test_find_config_file_not_found(self, tmp_path):
        assert find_config_file(tmp_path) is None

    def test_load_config_with_defaults(self, tmp_path):
        config_file = tmp_path / ".grph.toml"
        config_file.write_text('[grph]\noutput_dir = "reports/graphs"\n')

        config = load_config(config_file)
        assert config["grph"]["output_dir"] == "reports/graphs"
        assert config["grph"]["source"] == "metro"
        assert config["gexf"] == DEFAULT_CONFIG["gexf"]

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "nope.toml")

    def test_get_config_defaults(self, tmp_path):
        assert get_config(start_dir=tmp_path) == DEFAULT_CONFIG

    def test_get_config_does_not_mutate_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GRPH_GRPH_SOURCE", "binding-graph")
        assert get_config(start_dir=tmp_path)["grph"]["source"] == "binding-graph"
        assert DEFAULT_CONFIG["grph"]["source"] == "metro"

    def test_invalid_type(self, tmp_path):
        config_file = tmp_path / ".grph.toml"
        config_file.write_text('[grph]\nenabled = "yes"\n')
        with pytest.raises(ConfigError, match="grph.enabled must be bool"):
            get_config(config_file)

    def test_invalid_source(self, tmp_path):
        config_file = tmp_path / ".grph.toml"
        config_file.write_text('[grph]\nsource = "guice"\n')
        with pytest.raises(ConfigError, match="grph.source"):
            get_config(config_file)


class TestMergeConfigs:
    def test_deep_merge(self):
        base = {"grph": {"enabled": True, "source": "metro"}, "gexf": {"pretty_print": True}}
        merged = merge_configs(base, {"grph": {"source": "binding-graph"}, "extra": {"a": 1}})
        assert merged == {
            "grph": {"enabled": True, "source": "binding-graph"},
            "gexf": {"pretty_print": True},
            "extra": {"a": 1},
        }
        assert base["grph"]["source"] == "metro"


class TestEnvOverrides:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("true", True),
            ("FALSE", False),
            ('["a", "b"]', ["a", "b"]),
            ('{"key": "value"}', {"key": "value"}),
            ("[not valid json", "[not valid json"),
            ("build/out", "build/out"),
        ],
    )
    def test_try_parse_env_value(self, raw, expected):
        assert _try_parse_env_value(raw) == expected

    def test_override_nested_key(self, monkeypatch):
        monkeypatch.setenv("GRPH_GEXF_PRETTY_PRINT", "false")
        monkeypatch.setenv("GRPH_GRPH_OUTPUT_DIR", "out")
        config = _apply_env_overrides({"gexf": {"pretty_print": True}})
        assert config["gexf"]["pretty_print"] is False
        assert config["grph"]["output_dir"] == "out"

    def test_malformed_names_ignored(self, monkeypatch):
        monkeypatch.setenv("GRPH_", "x")
        monkeypatch.setenv("GRPH_ONLYSECTION", "x")
        assert _apply_env_overrides({}) == {}

    def test_env_type_checked(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GRPH_GRPH_ENABLED", "maybe")
        with pytest.raises(ConfigError):
            get_config(start_dir=tmp_path)
