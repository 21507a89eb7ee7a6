from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from prime_stream.config.models import StreamConfig


# ConfigError is raised for structurally invalid configuration (fail fast).
class ConfigError(ValueError):
    pass


_ALLOWED_TOP_LEVEL = {"version", "stream", "buffer", "reveal", "generator", "logging"}


def load_yaml_config(path: Path) -> dict[str, Any]:
    # Raw YAML loader; returns a mapping for validation.
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    return raw


def load_config(path: Path) -> StreamConfig:
    raw = load_yaml_config(path)
    _validate_top_level(raw)
    return StreamConfig.model_validate(raw)


def _validate_top_level(raw: dict[str, Any]) -> None:
    # Unknown sections are rejected up front with a readable message; pydantic covers the rest.
    unknown = set(raw.keys()) - _ALLOWED_TOP_LEVEL
    if unknown:
        raise ConfigError(f"Unknown top-level keys: {sorted(unknown)}")
    version = raw.get("version", 1)
    if version != 1:
        raise ConfigError(f"Unsupported config version: {version!r}")
