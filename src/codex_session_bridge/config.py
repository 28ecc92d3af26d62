"""Bridge configuration.

``BridgeConfig`` collects the few knobs the bridge has.  Values come from,
in increasing precedence: built-in defaults, a YAML file, and
``CODEX_BRIDGE_*`` environment variables.  The CLI applies its own options
on top.

Environment variables
---------------------
- CODEX_BRIDGE_COMMAND            — executable name (default ``codex``)
- CODEX_BRIDGE_DEFAULT_MODEL      — model used when a request names none
- CODEX_BRIDGE_TIMEOUT_SECONDS    — subprocess timeout, empty for none
- CODEX_BRIDGE_WORKING_DIRECTORY  — working directory for codex
- CODEX_BRIDGE_STORAGE            — ``memory`` or ``sqlite``
- CODEX_BRIDGE_DB_PATH            — SQLite file for the sqlite backend
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal, Mapping

import pydantic
import yaml
from pydantic import BaseModel, Field, field_validator

from codex_session_bridge.dispatch.arguments import CODEX_COMMAND, DEFAULT_MODEL
from codex_session_bridge.errors import ConfigError

ENV_PREFIX = "CODEX_BRIDGE_"


class BridgeConfig(BaseModel):
    """Runtime configuration for the dispatcher, runner and storage.

    Parameters
    ----------
    command:
        Executable invoked for every dispatch.
    default_model:
        Model passed with ``--model`` when a request names none.
    timeout_seconds:
        Subprocess timeout; ``None`` waits indefinitely.
    working_directory:
        Directory codex runs in; ``None`` inherits the current one.
    storage:
        Session backend: ``"memory"`` or ``"sqlite"``.
    db_path:
        SQLite database file (sqlite backend only).
    """

    command: str = Field(default=CODEX_COMMAND, min_length=1)
    default_model: str = Field(default=DEFAULT_MODEL, min_length=1)
    timeout_seconds: float | None = Field(default=None, gt=0)
    working_directory: Path | None = None
    storage: Literal["memory", "sqlite"] = "sqlite"
    db_path: Path | None = None

    model_config = {"frozen": False, "extra": "forbid"}

    @field_validator("storage", mode="before")
    @classmethod
    def _normalise_storage(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BridgeConfig":
        try:
            return cls.model_validate(dict(data))
        except pydantic.ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc

    @classmethod
    def from_yaml(cls, path: str | Path) -> "BridgeConfig":
        """Load configuration from a YAML mapping file.

        Raises
        ------
        ConfigError
            If the file is missing, is not a YAML mapping, or holds
            invalid values.
        """
        config_path = Path(path)
        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot read configuration {config_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration {config_path} must be a YAML mapping.")
        return cls.from_mapping(data)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        base: "BridgeConfig | None" = None,
    ) -> "BridgeConfig":
        """Overlay ``CODEX_BRIDGE_*`` variables on ``base`` (or the defaults)."""
        environ = os.environ if environ is None else environ
        data = (base or cls()).model_dump()
        for name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is None:
                continue
            data[name] = raw if raw != "" else None
        return cls.from_mapping(data)

    @classmethod
    def load(cls, path: str | Path | None = None) -> "BridgeConfig":
        """Defaults, then the YAML file at ``path`` if given, then the environment."""
        base = cls.from_yaml(path) if path is not None else cls()
        return cls.from_env(base=base)


__all__ = ["BridgeConfig", "ENV_PREFIX"]
