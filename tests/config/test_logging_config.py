"""Tests for loguru sink configuration.

Tests cover:
- Console lines tagged with the bound agent and platform
- Default component for records logged without one
- Optional serialized log file next to the primary sink
"""

import json

import pytest

from shadowban_system.config.logging import configure_logging, console_format, get_logger, logger
from shadowban_system.config.settings import Settings


@pytest.fixture(autouse=True)
def restore_sinks():
    yield
    configure_logging()


# ── Console Format Tests ──────────────────────────────────────────────────


class TestConsoleFormat:
    def test_scope_from_bound_extras(self) -> None:
        record = {"extra": {"component": "agent.detection", "agent_id": "detection", "platform": "twitter"}}
        template = console_format(record)
        assert "{extra[scope]}" in template
        assert record["extra"]["scope"] == " [detection twitter]"

    def test_no_scope_without_extras(self) -> None:
        record = {"extra": {}}
        console_format(record)
        assert record["extra"]["scope"] == ""
        assert record["extra"]["component"] == "shadowban"

    def test_console_sink_renders_scope(self, capsys) -> None:
        configure_logging(Settings(log_format="console", log_level="INFO"))
        get_logger("RiskCoordinator").bind(platform="reddit").info("Check started")
        err = capsys.readouterr().err
        assert "RiskCoordinator [reddit] | Check started" in err


# ── File Sink Tests ───────────────────────────────────────────────────────


class TestFileSink:
    def test_log_file_gets_serialized_records(self, tmp_path) -> None:
        path = tmp_path / "shadowban.log"
        configure_logging(Settings(log_format="console", log_level="INFO", log_file=str(path)))
        get_logger("HistoryStore").bind(agent_id="historical").warning("Mirror write failed")
        logger.remove()

        entry = json.loads(path.read_text(encoding="utf-8").splitlines()[0])
        assert entry["record"]["message"] == "Mirror write failed"
        assert entry["record"]["extra"]["agent_id"] == "historical"
        assert entry["record"]["level"]["name"] == "WARNING"

