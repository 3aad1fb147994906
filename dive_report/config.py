"""Configuration loading utilities."""
from __future__ import annotations

import json
import pathlib
import tomllib
from dataclasses import dataclass
from typing import Any, Mapping

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigError(RuntimeError):
    """Raised when configuration loading fails."""


def load_config(path: str | pathlib.Path) -> dict[str, Any]:
    """Load a configuration file (TOML or JSON)."""
    path_obj = pathlib.Path(path)
    if not path_obj.exists():
        raise ConfigError(f"Config path does not exist: {path_obj}")

    suffix = path_obj.suffix.lower()
    try:
        if suffix == ".toml":
            with path_obj.open("rb") as handle:
                return tomllib.load(handle)
        if suffix == ".json":
            with path_obj.open("r", encoding="utf-8") as handle:
                return json.load(handle)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid config file {path_obj}: {exc}") from exc

    raise ConfigError(f"Unsupported config format: {path_obj.suffix}")


@dataclass(frozen=True)
class ReportConfig:
    enable_crc_check: bool = True
    log_level: str = "INFO"
    json_logs: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ReportConfig:
        decoder = _table(data, "decoder")
        logging_table = _table(data, "logging")

        enable_crc_check = decoder.get("enable_crc_check", True)
        if not isinstance(enable_crc_check, bool):
            raise ConfigError("decoder.enable_crc_check must be a boolean")

        level = logging_table.get("level", "INFO")
        if not isinstance(level, str) or level.upper() not in _LOG_LEVELS:
            raise ConfigError(f"logging.level must be one of {sorted(_LOG_LEVELS)}")

        json_logs = logging_table.get("json", False)
        if not isinstance(json_logs, bool):
            raise ConfigError("logging.json must be a boolean")

        return cls(enable_crc_check=enable_crc_check, log_level=level.upper(), json_logs=json_logs)

    @classmethod
    def load(cls, path: str | pathlib.Path) -> ReportConfig:
        return cls.from_mapping(load_config(path))


def _table(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, Mapping):
        raise ConfigError(f"[{name}] must be a table")
    return value
