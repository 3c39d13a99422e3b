"""
Tests for configuration loading (YAML + environment).
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tools.config import (
    ComparisonConfig, ConfigError, load_config, parse_bool, parse_marks,
    ENV_SECTION_AND_LAYOUT, ENV_ADJUSTMENT_POLICY, ENV_IGNORE_MARKS
)
from tools.reconciler import AdjustmentPolicy


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run with no config file in the default search locations."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return tmp_path


def write_yaml(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadConfig:
    """Tests for load_config precedence and validation."""

    def test_defaults_without_file(self, isolated):
        config = load_config(environ={})
        assert config == ComparisonConfig()
        assert config.adjustment_policy is AdjustmentPolicy.HALVE_TALLY
        assert config.source is None

    def test_explicit_yaml(self, tmp_path):
        path = write_yaml(tmp_path / "bar_check.yaml", (
            "section_and_layout: true\n"
            "adjustment_policy: double_required\n"
            "ignore_marks: [CL1, A2]\n"
            "section_view_marks: B1\n"
        ))
        config = load_config(str(path), environ={})
        assert config.section_and_layout is True
        assert config.adjustment_policy is AdjustmentPolicy.DOUBLE_REQUIRED
        assert config.ignore_marks == ["CL1", "A2"]
        assert config.section_view_marks == ["B1"]
        assert config.source == str(path)

    def test_default_location_searched(self, isolated):
        write_yaml(isolated / "config" / "bar_check.yaml", "section_and_layout: yes\n")
        config = load_config(environ={})
        assert config.section_and_layout is True
        assert config.source.endswith("bar_check.yaml")

    def test_environment_overrides_yaml(self, tmp_path):
        path = write_yaml(tmp_path / "c.yaml", "section_and_layout: true\nignore_marks: [A1]\n")
        config = load_config(str(path), environ={
            ENV_SECTION_AND_LAYOUT: "0",
            ENV_ADJUSTMENT_POLICY: "DOUBLE_REQUIRED",
            ENV_IGNORE_MARKS: "CL1, LS2",
        })
        assert config.section_and_layout is False
        assert config.adjustment_policy is AdjustmentPolicy.DOUBLE_REQUIRED
        assert config.ignore_marks == ["CL1", "LS2"]

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = write_yaml(tmp_path / "empty.yaml", "")
        config = load_config(str(path), environ={})
        assert config.section_and_layout is False
        assert config.ignore_marks == []

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(str(tmp_path / "nope.yaml"), environ={})

    def test_malformed_yaml(self, tmp_path):
        path = write_yaml(tmp_path / "bad.yaml", "section_and_layout: [\n")
        with pytest.raises(ConfigError, match="Malformed"):
            load_config(str(path), environ={})

    def test_directory_path(self, tmp_path):
        config_dir = tmp_path / "conf.yaml"
        config_dir.mkdir()
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(str(config_dir), environ={})

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "latin.yaml"
        path.write_bytes(b"ignore_marks: [CL1]\n# \xff\xfe\n")
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(str(path), environ={})

    def test_non_mapping_yaml(self, tmp_path):
        path = write_yaml(tmp_path / "list.yaml", "- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(str(path), environ={})

    def test_unknown_policy(self, tmp_path):
        path = write_yaml(tmp_path / "p.yaml", "adjustment_policy: quarter\n")
        with pytest.raises(ConfigError, match="Unknown adjustment policy"):
            load_config(str(path), environ={})

    def test_bad_boolean_in_environment(self, isolated):
        with pytest.raises(ConfigError):
            load_config(environ={ENV_SECTION_AND_LAYOUT: "maybe"})


class TestParsers:

    def test_parse_bool(self):
        assert parse_bool(True, "x") is True
        assert parse_bool("Yes", "x") is True
        assert parse_bool("off", "x") is False

    def test_parse_marks(self):
        assert parse_marks(None) == []
        assert parse_marks("A1 B2,C3") == ["A1", "B2", "C3"]
        assert parse_marks(["A1", " ", "B2"]) == ["A1", "B2"]
