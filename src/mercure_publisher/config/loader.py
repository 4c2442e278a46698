"""Hub config loading: built-in defaults, YAML files and ${VAR} references."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from mercure_publisher.config.models import HubConfig

DEFAULTS_PATH = Path(__file__).parent / "defaults" / "hub.yaml"

# ${VAR} or ${VAR:-default}; "\}" escapes a brace inside the default.
_ENV_REF = re.compile(r"\$\{([^}:]+)(?::-((?:[^}\\]|\\.)*))?}")


def _expand(value: str) -> str:
    def _lookup(match: re.Match[str]) -> str:
        name, fallback = match.group(1), match.group(2)
        if name in os.environ:
            return os.environ[name]
        if fallback is None:
            msg = f"Environment variable '{name}' is not set and no default provided"
            raise ValueError(msg)
        return fallback.replace("\\}", "}")

    return _ENV_REF.sub(_lookup, value)


def resolve_env_vars(data: Any) -> Any:
    """Expand ${VAR} references in every string of a parsed YAML tree."""
    if isinstance(data, str):
        return _expand(data)
    if isinstance(data, dict):
        return {key: resolve_env_vars(value) for key, value in data.items()}
    if isinstance(data, list):
        return [resolve_env_vars(item) for item in data]
    return data


def merge_configs(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Return *base* with *overrides* applied; nested mappings merge key by key."""
    merged = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = merge_configs(current, value)
        merged[key] = value
    return merged


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Parse a hub YAML file into a mapping with env references expanded.

    Raises FileNotFoundError for a missing file and ValueError for anything
    that is not a YAML mapping.
    """
    p = Path(path)
    if not p.is_file():
        msg = f"Config file not found: {p}"
        raise FileNotFoundError(msg)
    try:
        data = yaml.safe_load(p.read_text())
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        where = f" at line {mark.line + 1}, column {mark.column + 1}" if mark else ""
        msg = f"Failed to parse YAML in {p}{where}: {exc}"
        raise ValueError(msg) from exc
    if not isinstance(data, dict):
        msg = f"Expected a YAML mapping at top level in {p}, got {type(data).__name__}"
        raise ValueError(msg)
    return resolve_env_vars(data)  # type: ignore[no-any-return]


def load_hub_config(
    path: str | Path | None = None,
    *,
    overrides: dict[str, Any] | None = None,
) -> HubConfig:
    """Load hub config; later sources win: defaults < *path* < *overrides*."""
    merged = load_yaml(DEFAULTS_PATH)
    if path is not None:
        merged = merge_configs(merged, load_yaml(path))
    if overrides:
        merged = merge_configs(merged, overrides)
    try:
        return HubConfig.model_validate(merged)
    except ValidationError as exc:
        msg = f"Invalid hub config ({path or 'built-in defaults'}):\n{exc}"
        raise ValueError(msg) from exc
