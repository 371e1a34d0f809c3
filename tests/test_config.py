"""Tests for codec configuration helpers."""

from __future__ import annotations

import logging
from datetime import timedelta

import pytest

import aprs_codec
from aprs_codec import config as config_module
from aprs_codec.config import CodecConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    monkeypatch.delenv(config_module.CONFIG_ENV_VAR, raising=False)
    for key in list(config_module.os.environ):
        if key.startswith(config_module.CONFIG_ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)


def test_save_and_load_roundtrip(tmp_path) -> None:
    cfg = CodecConfig(
        clock_drift_minutes=2.5,
        mdhm_year_attempts=2,
        max_path_entries=4,
        text_encoding="utf-8",
    )

    path = config_module.save_config(cfg, path=tmp_path / "nested" / "config.toml")
    loaded = config_module.load_config(path)

    assert path.exists()
    assert loaded == cfg


def test_saved_file_layout(tmp_path) -> None:
    path = config_module.save_config(CodecConfig(), path=tmp_path / "config.toml")

    text = path.read_text(encoding="utf-8")

    assert "version = 1" in text
    assert "[timestamp]" in text
    assert "[envelope]" in text
    assert 'text_encoding = "latin-1"' in text


def test_load_missing_file_returns_defaults(tmp_path) -> None:
    assert config_module.load_config(tmp_path / "missing.toml") == CodecConfig()


def test_load_applies_env_overrides(monkeypatch, tmp_path) -> None:
    path = config_module.save_config(CodecConfig(), path=tmp_path / "config.toml")
    monkeypatch.setenv("APRS_CODEC_TIMESTAMP__CLOCK_DRIFT_MINUTES", "10")
    monkeypatch.setenv("APRS_CODEC_ENVELOPE__TEXT_ENCODING", "utf-8")
    monkeypatch.setenv("APRS_CODEC_IGNORED", "1")

    loaded = config_module.load_config(path)

    assert loaded.clock_drift_minutes == 10.0
    assert loaded.clock_drift == timedelta(minutes=10)
    assert loaded.text_encoding == "utf-8"
    assert loaded.mdhm_year_attempts == 4


def test_resolve_config_path_env_override(monkeypatch, tmp_path) -> None:
    path = tmp_path / "custom.toml"
    monkeypatch.setenv(config_module.CONFIG_ENV_VAR, str(path))

    assert config_module.resolve_config_path() == path


def test_resolve_config_path_uses_xdg(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    resolved = config_module.resolve_config_path()

    assert resolved == tmp_path / config_module.CONFIG_DIR_NAME / config_module.CONFIG_FILENAME


def test_from_dict_rejects_unknown_version() -> None:
    with pytest.raises(ValueError):
        CodecConfig.from_dict({"version": 2})


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(clock_drift_minutes=-1),
        dict(mdhm_year_attempts=0),
        dict(max_path_entries=9),
        dict(text_encoding="no-such-codec"),
    ],
)
def test_config_validation(kwargs) -> None:
    with pytest.raises(ValueError):
        CodecConfig(**kwargs)


def test_package_logger_has_null_handler() -> None:
    handlers = logging.getLogger(aprs_codec.__name__).handlers

    assert any(isinstance(handler, logging.NullHandler) for handler in handlers)
