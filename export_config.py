# -*- coding: utf-8 -*-
"""
Export settings: dataclass defaults, optionally overridden by a JSON config file,
then by command-line flags (see export_morph_data.py).

Example config (all keys optional):
  {"output_dir": "D:/morphs", "indent": 4, "single_precision": true,
   "log_file": "export.log", "log_level": "DEBUG", "pause": false}
"""
import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

from morph_export_errors import ConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class ExportConfig:
    output_dir: Optional[Path] = None
    indent: int = 2
    single_precision: bool = False
    log_file: Optional[Path] = None
    log_level: str = "INFO"
    pause: bool = False

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)

    def resolve_output_dir(self, duf_path) -> Path:
        """Configured directory, else the directory of the .duf file."""
        if self.output_dir is not None:
            return Path(self.output_dir)
        return Path(duf_path).resolve().parent

    def merged(self, **overrides) -> "ExportConfig":
        """Copy with the non-None overrides applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _check(name, value):
    if name in ("output_dir", "log_file"):
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"'{name}' must be a path string")
        return Path(value) if value is not None else None
    if name == "indent":
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError("'indent' must be a non-negative integer")
        return value
    if name in ("single_precision", "pause"):
        if not isinstance(value, bool):
            raise ConfigError(f"'{name}' must be true or false")
        return value
    if name == "log_level":
        if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
            raise ConfigError(f"'log_level' must be one of {', '.join(LOG_LEVELS)}")
        return value.upper()
    raise ConfigError(f"Unknown config key '{name}'")


def load_config(config_path) -> ExportConfig:
    """Read a JSON config file into an ExportConfig."""
    config_path = Path(config_path)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config {config_path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config {config_path} must be a JSON object")

    known = {f.name for f in fields(ExportConfig)}
    values = {}
    for name, value in raw.items():
        if name not in known:
            raise ConfigError(f"Unknown config key '{name}' in {config_path}")
        values[name] = _check(name, value)
    return ExportConfig(**values)
