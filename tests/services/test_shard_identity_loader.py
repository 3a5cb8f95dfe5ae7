"""Shard Identity Loader: settings -> validated ShardIdentity at startup.

Tests cover:
    - default settings load the legacy identity
    - environment variables select a sharded identity
    - rejected configs are logged with their error code and re-raised
    - out-of-range settings are logged as INVALID_SHARD_SETTINGS and re-raised
    - start_shard applies log_level and log_format before loading
"""

import logging

import pytest
from pydantic import ValidationError

from shardid.config import Settings
from shardid.core.errors import InvalidShardConfig, ShardConfigError
from shardid.core.shard_identity import ShardIdentity
from shardid.infrastructure.observability import JSONFormatter
from shardid.services.shard_identity_loader import (
    INVALID_SHARD_SETTINGS,
    load_shard_identity,
    start_shard,
)


def test_defaults_load_unsharded_identity():
    assert load_shard_identity(Settings()) == ShardIdentity.unsharded()


def test_reads_environment_when_no_settings_given(monkeypatch):
    monkeypatch.setenv("SHARD_NUMBER", "3")
    monkeypatch.setenv("SHARD_COUNT", "8")
    monkeypatch.setenv("SHARD_STRIPE_SIZE", "2048")
    assert load_shard_identity() == ShardIdentity.new(3, 8, 2048)


def test_logs_loaded_identity(caplog):
    with caplog.at_level(logging.INFO, logger="shardid.services.shard_identity_loader"):
        load_shard_identity(Settings(shard_number=1, shard_count=2))
    record = caplog.records[-1]
    assert record.levelno == logging.INFO
    assert record.shard_number == 1
    assert record.shard_count == 2
    assert "0102" in record.getMessage()


def test_rejected_config_is_logged_and_raised(caplog):
    settings = Settings(shard_number=2, shard_count=2)
    with caplog.at_level(logging.ERROR, logger="shardid.services.shard_identity_loader"):
        with pytest.raises(InvalidShardConfig) as exc_info:
            load_shard_identity(settings)
    assert exc_info.value.reason is ShardConfigError.INVALID_NUMBER
    assert caplog.records[-1].error_code == "INVALID_NUMBER"


def test_zero_stripe_size_rejected():
    with pytest.raises(InvalidShardConfig) as exc_info:
        load_shard_identity(Settings(shard_number=0, shard_count=1, shard_stripe_size=0))
    assert exc_info.value.reason is ShardConfigError.INVALID_STRIPE_SIZE


def test_out_of_range_settings_are_logged_and_raised(caplog):
    settings = Settings(shard_number=0, shard_count=300)
    with caplog.at_level(logging.ERROR, logger="shardid.services.shard_identity_loader"):
        with pytest.raises(ValidationError):
            load_shard_identity(settings)
    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert record.error_code == INVALID_SHARD_SETTINGS
    assert record.shard_count == 300
    assert "count" in record.getMessage()


# ─── start_shard ─────────────────────────────────────────────────

def _installed_handlers(before: list[logging.Handler]) -> list[logging.Handler]:
    return [h for h in logging.root.handlers if h not in before]


def test_start_shard_applies_log_settings():
    before = list(logging.root.handlers)
    previous_level = logging.root.level
    try:
        identity = start_shard(Settings(
            shard_number=1, shard_count=2, log_level="warning", log_format="json",
        ))
        installed = _installed_handlers(before)
        assert identity == ShardIdentity.new(1, 2)
        assert len(installed) == 1
        assert isinstance(installed[0].formatter, JSONFormatter)
        assert logging.root.level == logging.WARNING
    finally:
        for handler in _installed_handlers(before):
            logging.root.removeHandler(handler)
        logging.root.setLevel(previous_level)


def test_start_shard_text_format_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FORMAT", "text")
    before = list(logging.root.handlers)
    previous_level = logging.root.level
    try:
        assert start_shard() == ShardIdentity.unsharded()
        installed = _installed_handlers(before)
        assert len(installed) == 1
        assert not isinstance(installed[0].formatter, JSONFormatter)
        assert logging.root.level == logging.DEBUG
    finally:
        for handler in _installed_handlers(before):
            logging.root.removeHandler(handler)
        logging.root.setLevel(previous_level)
