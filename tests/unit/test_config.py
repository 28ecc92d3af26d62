"""Unit tests for codex_session_bridge.config."""
from __future__ import annotations

from pathlib import Path

import pytest

from codex_session_bridge.config import ENV_PREFIX, BridgeConfig
from codex_session_bridge.errors import ConfigError


class TestDefaults:
    def test_defaults(self) -> None:
        config = BridgeConfig()
        assert config.command == "codex"
        assert config.default_model == "gpt-5-codex"
        assert config.timeout_seconds is None
        assert config.working_directory is None
        assert config.storage == "sqlite"
        assert config.db_path is None

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ConfigError):
            BridgeConfig.from_mapping({"colour": "blue"})

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(ConfigError):
            BridgeConfig.from_mapping({"timeout_seconds": 0})

    def test_storage_case_normalised(self) -> None:
        assert BridgeConfig.from_mapping({"storage": "SQLite"}).storage == "sqlite"

    def test_unknown_storage_rejected(self) -> None:
        with pytest.raises(ConfigError):
            BridgeConfig.from_mapping({"storage": "redis"})


class TestYAML:
    def test_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bridge.yaml"
        path.write_text(
            "default_model: o3\ntimeout_seconds: 30\nstorage: memory\n", encoding="utf-8"
        )
        config = BridgeConfig.from_yaml(path)
        assert config.default_model == "o3"
        assert config.timeout_seconds == 30.0
        assert config.storage == "memory"
        assert config.command == "codex"

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert BridgeConfig.from_yaml(path) == BridgeConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            BridgeConfig.from_yaml(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("storage: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            BridgeConfig.from_yaml(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            BridgeConfig.from_yaml(path)


class TestEnvironment:
    def test_overrides(self) -> None:
        environ = {
            f"{ENV_PREFIX}COMMAND": "/opt/bin/codex",
            f"{ENV_PREFIX}TIMEOUT_SECONDS": "12.5",
            f"{ENV_PREFIX}DB_PATH": "/tmp/bridge.db",
            "UNRELATED": "x",
        }
        config = BridgeConfig.from_env(environ)
        assert config.command == "/opt/bin/codex"
        assert config.timeout_seconds == 12.5
        assert config.db_path == Path("/tmp/bridge.db")

    def test_empty_value_clears_optional(self) -> None:
        base = BridgeConfig(timeout_seconds=5)
        config = BridgeConfig.from_env({f"{ENV_PREFIX}TIMEOUT_SECONDS": ""}, base=base)
        assert config.timeout_seconds is None

    def test_storage_is_case_insensitive(self) -> None:
        config = BridgeConfig.from_env({f"{ENV_PREFIX}STORAGE": "MEMORY"})
        assert config.storage == "memory"

    def test_invalid_value(self) -> None:
        with pytest.raises(ConfigError):
            BridgeConfig.from_env({f"{ENV_PREFIX}STORAGE": "s3"})

    def test_load_precedence(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "bridge.yaml"
        path.write_text("default_model: o3\nstorage: memory\n", encoding="utf-8")
        monkeypatch.setenv(f"{ENV_PREFIX}DEFAULT_MODEL", "gpt-5")
        config = BridgeConfig.load(path)
        assert config.default_model == "gpt-5"
        assert config.storage == "memory"

    def test_load_without_file(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in BridgeConfig.model_fields:
            monkeypatch.delenv(ENV_PREFIX + name.upper(), raising=False)
        assert BridgeConfig.load() == BridgeConfig()
