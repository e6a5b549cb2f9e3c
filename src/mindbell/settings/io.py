"""Settings file loading/saving (YAML, JSON, TOML)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover
    tomllib = None

import yaml

from mindbell.core.errors import MindbellValueError

from .models import Settings


def read_settings_data(path: str | Path) -> dict[str, Any]:
    """Return the raw mapping stored in a settings file."""
    path = Path(path)
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
    elif suffix == ".json":
        data = json.loads(text)
    elif suffix == ".toml":
        if tomllib is None:  # pragma: no cover - Python < 3.11
            raise MindbellValueError("TOML support requires Python 3.11+")
        data = tomllib.loads(text)
    else:
        raise MindbellValueError("Unsupported settings format. Use YAML, TOML, or JSON.")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MindbellValueError(f"Settings file {path} must contain a mapping at the top level")
    return data


def load_settings(path: str | Path) -> Settings:
    """Load and validate settings; missing keys fall back to the defaults."""
    return Settings.model_validate(read_settings_data(path))


def dump_settings(settings: Settings, path: str | Path) -> Path:
    """Write ``settings`` as YAML and return the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = settings.model_dump(mode="json")
    path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
    return path


__all__ = ["read_settings_data", "load_settings", "dump_settings"]
