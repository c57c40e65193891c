"""Tests for bridge configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from toolbridge.config import BridgeConfig, ConfigError, ConfigLoader


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "toolbridge.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestConfigLoader:
    def test_full_config(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "name: my-tools\n"
            "modules: [sample_commands]\n"
            "scripts: [scripts/Get-Greeting.py, /abs/Set-Counter.py]\n"
            "help_tools: true\n"
            "log_level: INFO\n"
            "telemetry:\n"
            "  enabled: true\n"
            "  otlp_endpoint: http://localhost:4317\n",
        )
        config = ConfigLoader(path).load()
        assert config.name == "my-tools"
        assert config.modules == ["sample_commands"]
        assert config.scripts == [
            str(tmp_path / "scripts" / "Get-Greeting.py"),
            str(Path("/abs/Set-Counter.py")),
        ]
        assert config.help_tools
        assert config.log_level == "INFO"
        assert config.telemetry.enabled
        assert config.telemetry.otlp_endpoint == "http://localhost:4317"

    def test_empty_file(self, tmp_path: Path) -> None:
        assert ConfigLoader(_write(tmp_path, "")).load() == BridgeConfig()

    def test_env_expansion(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TOOLBRIDGE_TEST_MODULE", "sample_commands")
        path = _write(tmp_path, "modules: [${TOOLBRIDGE_TEST_MODULE}]\n")
        assert ConfigLoader(path).load().modules == ["sample_commands"]

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="mapping"):
            ConfigLoader(_write(tmp_path, "- a\n- b\n")).load()

    def test_bad_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="YAML parse error"):
            ConfigLoader(_write(tmp_path, "modules: [unclosed\n")).load()

    def test_validation_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="log_level"):
            ConfigLoader(_write(tmp_path, "log_level: LOUD\n")).load()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            ConfigLoader(tmp_path / "absent.yaml").load()
