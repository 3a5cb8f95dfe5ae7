"""Structured Logging: JSON formatter fields and setup."""

import json
import logging

from shardid.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "shardid.test", logging.WARNING, __file__, 1, "shard %s", ("0102",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "shardid.test"
    assert log["message"] == "shard 0102"
    assert "timestamp" in log


def test_json_formatter_surfaces_shard_fields():
    log = json.loads(JSONFormatter().format(_record(
        tenant_shard_id="1f359dd625e519a1a4e8d7509690f6fc-0102",
        shard_number=1, shard_count=2, error_code="INVALID_NUMBER",
    )))
    assert log["tenant_shard_id"] == "1f359dd625e519a1a4e8d7509690f6fc-0102"
    assert log["shard_number"] == 1
    assert log["shard_count"] == 2
    assert log["error_code"] == "INVALID_NUMBER"


def test_json_formatter_omits_absent_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert "tenant_shard_id" not in log
    assert "error_code" not in log


def test_setup_logging_installs_handler():
    previous_level = logging.root.level
    handler = setup_logging("debug", "text")
    try:
        assert handler in logging.root.handlers
        assert not isinstance(handler.formatter, JSONFormatter)
        assert logging.root.level == logging.DEBUG
    finally:
        logging.root.removeHandler(handler)
        logging.root.setLevel(previous_level)


def test_setup_logging_json_by_default():
    previous_level = logging.root.level
    handler = setup_logging()
    try:
        assert isinstance(handler.formatter, JSONFormatter)
    finally:
        logging.root.removeHandler(handler)
        logging.root.setLevel(previous_level)
