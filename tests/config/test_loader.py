"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- load_config() precedence: kwargs > env > yaml > defaults
"""

from __future__ import annotations

from pathlib import Path

import pytest

from scopeline.config.loader import DEFAULT_CONFIG_NAME, _load_yaml, load_config
from scopeline.config.models import ResolutionConfig, ScopelineConfig
from scopeline.core.errors import ConfigError, ErrorCode


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test from an empty directory with no SCOPELINE env vars."""
    monkeypatch.chdir(tmp_path)
    for key in ("SCOPELINE__LOGGING__LEVEL", "SCOPELINE__RESOLUTION__DEBOUNCE_SEC"):
        monkeypatch.delenv(key, raising=False)


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        """Returns empty dict when file doesn't exist."""
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        """Loads valid YAML content."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("logging:\n  level: DEBUG\n")

        assert _load_yaml(yaml_file) == {"logging": {"level": "DEBUG"}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        """Returns empty dict for empty file."""
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid YAML syntax."""
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("logging:\n  level:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        """A YAML list at top level is not a config."""
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            _load_yaml(yaml_file)


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults_without_any_source(self) -> None:
        config = load_config()

        assert isinstance(config, ScopelineConfig)
        assert config.resolution == ResolutionConfig()
        assert config.logging.level == "WARNING"

    def test_reads_default_file_from_cwd(self, tmp_path: Path) -> None:
        (tmp_path / DEFAULT_CONFIG_NAME).write_text("resolution:\n  debounce_sec: 0.25\n")

        config = load_config()

        assert config.resolution.debounce_sec == 0.25

    def test_reads_explicit_file(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("resolution:\n  retry_delay_sec: 3\n")

        config = load_config(path)

        assert config.resolution.retry_delay_sec == 3.0

    def test_missing_explicit_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "absent.yaml")
        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / DEFAULT_CONFIG_NAME).write_text("logging:\n  level: INFO\n")
        monkeypatch.setenv("SCOPELINE__LOGGING__LEVEL", "DEBUG")

        config = load_config()

        assert config.logging.level == "DEBUG"

    def test_kwargs_override_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCOPELINE__RESOLUTION__DEBOUNCE_SEC", "0.5")

        config = load_config(resolution=ResolutionConfig(debounce_sec=0.01))

        assert config.resolution.debounce_sec == 0.01

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        (tmp_path / DEFAULT_CONFIG_NAME).write_text("resolution:\n  retry_delay_sec: 0\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config()

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "retry_delay_sec" in exc_info.value.details["field"]
