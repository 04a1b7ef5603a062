"""Configuration loading for gosort (.gosort.yml)."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError
from .formatter import DEFAULT_COMMAND

CONFIG_FILENAME = ".gosort.yml"


@dataclass
class FormatterConfig:
    """External formatter settings; an empty command keeps only the re-parse check."""

    command: List[str] = field(default_factory=lambda: list(DEFAULT_COMMAND))

    @property
    def enabled(self) -> bool:
        return bool(self.command)


@dataclass
class SortConfig:
    """Effective settings for one gosort invocation."""

    path: Path
    recursive: bool = True
    include_tests: bool = False
    write: bool = True
    continue_on_error: bool = False
    exclude_paths: List[str] = field(default_factory=list)
    formatter: FormatterConfig = field(default_factory=FormatterConfig)


def load_config(path: Path) -> SortConfig:
    """Load settings for `path` from the nearest .gosort.yml, or return defaults."""
    target = path.expanduser()
    config_file = _resolve_config_path(target)

    if not config_file.exists():
        return SortConfig(path=target)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = SortConfig(path=target)
    for key in ("recursive", "include_tests", "write", "continue_on_error"):
        value = _as_bool(data.get(key))
        if value is not None:
            setattr(config, key, value)

    config.exclude_paths = _as_str_list(data.get("exclude_paths"))

    if "formatter" in data:
        formatter_data = data.get("formatter")
        if formatter_data is None or formatter_data is False:
            config.formatter = FormatterConfig(command=[])
        elif isinstance(formatter_data, dict):
            if "command" in formatter_data:
                config.formatter = FormatterConfig(command=_as_command(formatter_data.get("command")))
        else:
            raise ConfigError("formatter must be a mapping with a 'command' entry")

    return config


def _resolve_config_path(target: Path) -> Path:
    if target.is_dir():
        return (target / CONFIG_FILENAME).resolve()
    return (target.parent / CONFIG_FILENAME).resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_command(value: Any) -> List[str]:
    if value is None or value is False:
        return []
    if isinstance(value, str):
        return shlex.split(value)
    return _as_str_list(value)


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "FormatterConfig", "SortConfig", "load_config"]
