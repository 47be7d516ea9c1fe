"""Tests for ipldsel logging configuration."""

import pytest

from ipldsel.kernel import logging as ipldsel_logging
from ipldsel.kernel.logging import (
    clear_correlation_id,
    configure_logging,
    get_correlation_id,
    get_logger,
    set_correlation_id,
)


@pytest.fixture
def restore_logging():
    saved = ipldsel_logging._CURRENT_CONFIG
    yield
    if saved is not None:
        configure_logging(**saved, force_reconfigure=True)


class TestCorrelationId:
    def test_default(self) -> None:
        clear_correlation_id()
        assert get_correlation_id() == "-"

    def test_set_and_clear(self) -> None:
        set_correlation_id("bafyroot")
        assert get_correlation_id() == "bafyroot"

        clear_correlation_id()
        assert get_correlation_id() == "-"


class TestConfigureLogging:
    def test_idempotent(self, restore_logging) -> None:
        configure_logging(level="ERROR", format="console", force_reconfigure=True)
        handlers = list(ipldsel_logging._HANDLER_IDS)

        configure_logging(level="ERROR", format="console")

        assert ipldsel_logging._HANDLER_IDS == handlers

    def test_reconfigure_replaces_handlers(self, restore_logging) -> None:
        configure_logging(level="ERROR", format="console", force_reconfigure=True)
        before = list(ipldsel_logging._HANDLER_IDS)

        configure_logging(level="INFO", format="json")

        assert len(ipldsel_logging._HANDLER_IDS) == 1
        assert ipldsel_logging._HANDLER_IDS != before
        assert ipldsel_logging._CURRENT_CONFIG["format"] == "json"

    def test_file_output_adds_a_handler(self, restore_logging, tmp_path) -> None:
        configure_logging(
            level="INFO",
            format="console",
            output_file=tmp_path / "logs" / "ipldsel.log",
            force_reconfigure=True,
        )

        assert len(ipldsel_logging._HANDLER_IDS) == 2
        assert (tmp_path / "logs").is_dir()


class TestGetLogger:
    def test_cached_per_name(self) -> None:
        assert get_logger("ipldsel.tests") is get_logger("ipldsel.tests")

    def test_messages_carry_the_correlation_id(self, restore_logging) -> None:
        records = []
        configure_logging(level="DEBUG", format="console", force_reconfigure=True)
        handler_id = ipldsel_logging.logger.add(records.append, level="DEBUG", format="{message}")
        try:
            set_correlation_id("bafyroot")
            get_logger("ipldsel.tests").info("hello {name}", name="world")
        finally:
            clear_correlation_id()
            ipldsel_logging.logger.remove(handler_id)

        [message] = records
        assert message.record["message"] == "hello world"
        assert message.record["extra"]["correlation_id"] == "bafyroot"
        assert message.record["extra"]["module"] == "ipldsel.tests"

    def test_cid_keyword_does_not_replace_the_correlation_id(self, restore_logging) -> None:
        records = []
        configure_logging(level="DEBUG", format="console", force_reconfigure=True)
        handler_id = ipldsel_logging.logger.add(records.append, level="DEBUG", format="{message}")
        try:
            set_correlation_id("bafyroot")
            get_logger("ipldsel.tests").debug("Loading block {cid}", cid="bafyleaf")
        finally:
            clear_correlation_id()
            ipldsel_logging.logger.remove(handler_id)

        [message] = records
        assert message.record["extra"]["correlation_id"] == "bafyroot"
        assert message.record["extra"]["cid"] == "bafyleaf"
