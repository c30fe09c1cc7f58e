"""Configuration loading and validation."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]


class ConfigError(RuntimeError):
    """Raised when config file parsing fails."""


OUTPUT_FORMATS = {"pretty", "plain", "json"}
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_data_dir() -> Path:
    """Resolve XDG-style data directory with env override."""
    raw = os.getenv("TICKK_DATA_DIR", "~/.local/share/tickk")
    return expand_path(raw)


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("TICKK_CONFIG_FILE", "~/.config/tickk/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    data_dir = default_data_dir()
    return {
        "defaults": {
            "output_format": "pretty",
        },
        "evaluation": {
            "corpus": "",
            "baseline": str(data_dir / "baseline.json"),
            "min_accuracy": 1.0,
        },
        "export": {
            "default_directory": str(data_dir / "items"),
        },
        "logging": {
            "level": "WARNING",
        },
    }


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def _validate(cfg: Dict[str, Any]) -> None:
    for section in ("defaults", "evaluation", "export", "logging"):
        if not isinstance(cfg.get(section), dict):
            raise ConfigError(f"Config section [{section}] must be a table")

    output_format = cfg["defaults"].get("output_format")
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"defaults.output_format must be one of {', '.join(sorted(OUTPUT_FORMATS))}"
        )

    try:
        min_accuracy = float(cfg["evaluation"].get("min_accuracy"))
    except (TypeError, ValueError) as exc:
        raise ConfigError("evaluation.min_accuracy must be a number") from exc
    if not 0.0 <= min_accuracy <= 1.0:
        raise ConfigError("evaluation.min_accuracy must be between 0 and 1")

    level = str(cfg["logging"].get("level", "")).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {', '.join(sorted(LOG_LEVELS))}")


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()

    if cfg_path.exists():
        loaded = _read_config(cfg_path)
        cfg = _deep_merge(cfg, loaded)

    _validate(cfg)
    return cfg


def resolve_corpus_path(config: Dict[str, Any], explicit: Optional[Path] = None) -> Optional[Path]:
    """Custom corpus path, CLI flag first; None means the built-in corpus."""
    if explicit is not None:
        return explicit.expanduser().resolve()
    raw = config.get("evaluation", {}).get("corpus")
    return expand_path(raw) if raw else None


def resolve_output_dir(config: Dict[str, Any], explicit: Optional[Path] = None) -> Path:
    """Resolve output directory with CLI override first."""
    if explicit is not None:
        return explicit.expanduser().resolve()
    raw = os.getenv("TICKK_OUTPUT_DIR") or config.get("export", {}).get(
        "default_directory",
        str(default_data_dir() / "items"),
    )
    return expand_path(raw)
