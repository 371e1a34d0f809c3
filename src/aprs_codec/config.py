"""Codec configuration loading and persistence helpers."""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any

import tomli_w  # type: ignore[import]

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

CONFIG_VERSION = 1
CONFIG_ENV_VAR = "APRS_CODEC_CONFIG_PATH"
CONFIG_ENV_PREFIX = "APRS_CODEC_"
CONFIG_DIR_NAME = "aprs-codec"
CONFIG_FILENAME = "config.toml"


def _xdg_path(env_var: str, default: Path) -> Path:
    value = os.environ.get(env_var)
    if value:
        return Path(value).expanduser()
    return default


def get_config_dir() -> Path:
    """Return the directory containing configuration files."""
    default = Path.home() / ".config"
    return _xdg_path("XDG_CONFIG_HOME", default) / CONFIG_DIR_NAME


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Resolve the configuration file path, honouring overrides."""
    if path is not None:
        return Path(path).expanduser()
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir() / CONFIG_FILENAME


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """Tunables for timestamp resolution and envelope decoding."""

    clock_drift_minutes: float = 5.0
    mdhm_year_attempts: int = 4
    max_path_entries: int = 8
    text_encoding: str = "latin-1"

    def __post_init__(self) -> None:
        if self.clock_drift_minutes < 0:
            raise ValueError("clock_drift_minutes must be >= 0")
        if self.mdhm_year_attempts < 1:
            raise ValueError("mdhm_year_attempts must be >= 1")
        if not 0 <= self.max_path_entries <= 8:
            raise ValueError("max_path_entries must be in range [0, 8]")
        try:
            codecs.lookup(self.text_encoding)
        except LookupError as exc:
            raise ValueError(f"Unknown text encoding: {self.text_encoding}") from exc

    @property
    def clock_drift(self) -> timedelta:
        return timedelta(minutes=self.clock_drift_minutes)

    def to_dict(self) -> dict[str, Any]:
        """Convert the configuration to a TOML-serialisable dictionary."""
        return {
            "version": CONFIG_VERSION,
            "timestamp": {
                "clock_drift_minutes": self.clock_drift_minutes,
                "mdhm_year_attempts": self.mdhm_year_attempts,
            },
            "envelope": {
                "max_path_entries": self.max_path_entries,
                "text_encoding": self.text_encoding,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CodecConfig:
        """Construct from a dictionary (typically parsed from TOML)."""
        version = data.get("version", CONFIG_VERSION)
        if version != CONFIG_VERSION:
            raise ValueError(f"Unsupported config version: {version}")

        timestamp = data.get("timestamp", {})
        envelope = data.get("envelope", {})
        defaults = cls()

        return cls(
            clock_drift_minutes=float(
                timestamp.get("clock_drift_minutes", defaults.clock_drift_minutes)
            ),
            mdhm_year_attempts=int(
                timestamp.get("mdhm_year_attempts", defaults.mdhm_year_attempts)
            ),
            max_path_entries=int(
                envelope.get("max_path_entries", defaults.max_path_entries)
            ),
            text_encoding=str(envelope.get("text_encoding", defaults.text_encoding)),
        )


DEFAULT_CONFIG = CodecConfig()


def load_config(path: str | Path | None = None) -> CodecConfig:
    """Load persisted configuration, overlaid with environment overrides.

    A missing file is not an error: the defaults are used instead.
    """
    config_path = resolve_config_path(path)
    data: dict[str, Any] = {}
    if config_path.exists():
        with config_path.open("rb") as handle:
            data = tomllib.load(handle)
    env_overrides = _extract_env_overrides()
    if env_overrides:
        data = _deep_merge(data, env_overrides)
    return CodecConfig.from_dict(data)


def save_config(config: CodecConfig, path: str | Path | None = None) -> Path:
    """Persist configuration to disk and return the file path."""
    config_path = resolve_config_path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(tomli_w.dumps(config.to_dict()), encoding="utf-8")
    return config_path


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base, preferring override values."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _extract_env_overrides() -> dict[str, Any]:
    """Extract APRS_CODEC_SECTION__KEY variables into a nested config dict.

    Example:
        APRS_CODEC_TIMESTAMP__CLOCK_DRIFT_MINUTES=10
            → {"timestamp": {"clock_drift_minutes": 10}}
    """
    overrides: dict[str, Any] = {}
    for env_key, env_value in os.environ.items():
        if not env_key.startswith(CONFIG_ENV_PREFIX) or env_key == CONFIG_ENV_VAR:
            continue
        parts = env_key[len(CONFIG_ENV_PREFIX) :].lower().split("__")
        if len(parts) != 2 or not all(parts):
            continue
        section, key = parts
        overrides.setdefault(section, {})[key] = _parse_env_value(env_value)
    return overrides


def _parse_env_value(raw: str) -> Any:
    """Parse environment variable string into int, float or str."""
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        pass
    return raw
