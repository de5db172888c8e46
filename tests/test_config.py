"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from testtoolkit.config import ToolkitConfig, get_config, load_config, reset_config, set_config
from testtoolkit.errors import ConfigValidationError, ErrorCode


class TestToolkitConfig:
    """Tests for ToolkitConfig defaults and validation."""

    def test_defaults(self) -> None:
        config = ToolkitConfig()
        assert config.log_level == "WARNING"
        assert config.product_warning_threshold == 100_000
        assert config.singleton_owner == "testtoolkit.singleton.Singleton"
        assert config.singleton_attribute == "_instances"

    def test_log_level_is_normalized(self) -> None:
        assert ToolkitConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            ToolkitConfig(log_level="loud")
        assert exc_info.value.field == "log_level"
        assert exc_info.value.error_code == ErrorCode.INVALID_CONFIG

    def test_negative_threshold(self) -> None:
        with pytest.raises(ConfigValidationError, match="zero or positive"):
            ToolkitConfig(product_warning_threshold=-1)

    def test_owner_must_be_dotted(self) -> None:
        with pytest.raises(ConfigValidationError):
            ToolkitConfig(singleton_owner="Singleton")

    def test_owner_colon_form_accepted(self) -> None:
        assert ToolkitConfig(singleton_owner="pkg.mod:Holder").singleton_owner == "pkg.mod:Holder"

    def test_attribute_must_be_identifier(self) -> None:
        with pytest.raises(ConfigValidationError):
            ToolkitConfig(singleton_attribute="not valid")

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TESTTOOLKIT_PRODUCT_WARNING_THRESHOLD", "50")
        assert ToolkitConfig().product_warning_threshold == 50


class TestLoadConfig:
    """Tests for load_config()."""

    def test_no_file(self) -> None:
        assert load_config().log_level == "WARNING"

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        assert load_config(tmp_path / "absent.yaml").log_level == "WARNING"

    def test_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "testtoolkit.yaml"
        path.write_text("log_level: info\nproduct_warning_threshold: 10\n")
        config = load_config(path)
        assert config.log_level == "INFO"
        assert config.product_warning_threshold == 10

    def test_empty_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "testtoolkit.yaml"
        path.write_text("")
        assert load_config(path).product_warning_threshold == 100_000

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "testtoolkit.yaml"
        path.write_text("something_else: 1\n")
        assert load_config(path).log_level == "WARNING"

    def test_environment_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "testtoolkit.yaml"
        path.write_text("log_level: info\n")
        monkeypatch.setenv("TESTTOOLKIT_LOG_LEVEL", "ERROR")
        assert load_config(path).log_level == "ERROR"

    def test_non_mapping_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "testtoolkit.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigValidationError, match="YAML mapping"):
            load_config(path)

    def test_malformed_yaml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "testtoolkit.yaml"
        path.write_text("log_level: [unclosed\n")
        with pytest.raises(ConfigValidationError, match="Failed to parse YAML"):
            load_config(path)

    def test_wrong_type_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TESTTOOLKIT_PRODUCT_WARNING_THRESHOLD", "many")
        with pytest.raises(ConfigValidationError) as exc_info:
            load_config()
        assert exc_info.value.field == "product_warning_threshold"
        assert exc_info.value.cause is not None


class TestGlobalConfig:
    """Tests for get_config/set_config/reset_config."""

    def test_get_config_is_cached(self) -> None:
        assert get_config() is get_config()

    def test_set_config(self) -> None:
        custom = ToolkitConfig(log_level="DEBUG")
        set_config(custom)
        assert get_config() is custom

    def test_reset_config_reloads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        first = get_config()
        monkeypatch.setenv("TESTTOOLKIT_LOG_LEVEL", "ERROR")
        reset_config()
        second = get_config()
        assert second is not first
        assert second.log_level == "ERROR"
