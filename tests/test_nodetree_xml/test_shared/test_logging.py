"""Tests for correlation-aware logging helpers."""

import io
import logging

import pytest

from nodetree_xml.shared.logging import (
    HANDLER_NAME,
    PACKAGE_LOGGER,
    ComponentFilter,
    configure_logging,
    get_logger,
)


@pytest.fixture
def package_logger():
    """Restore the package logger's handlers and level after each test."""
    target = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(target.handlers)
    level = target.level
    yield target
    target.handlers = handlers
    target.setLevel(level)


class TestCorrelationLogger:
    """Test the structured logger wrapper."""

    def test_extra_fields(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that component and correlation ID are attached."""
        caplog.set_level(logging.INFO, logger=PACKAGE_LOGGER)
        logger = get_logger("nodetree_xml.test", "run-7", "tester")

        logger.info("hello", extra={"lines_read": 3})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "tester"
        assert record.correlation_id == "run-7"
        assert record.lines_read == 3

    def test_default_component(self) -> None:
        """Test that the component defaults to the last name segment."""
        assert get_logger("nodetree_xml.tree.builder").component == "builder"

    def test_is_enabled_for(self, package_logger: logging.Logger) -> None:
        """Test level checks."""
        package_logger.setLevel(logging.WARNING)
        logger = get_logger("nodetree_xml.test")

        assert logger.is_enabled_for(logging.ERROR)
        assert not logger.is_enabled_for(logging.DEBUG)


class TestConfigureLogging:
    """Test the package stream handler."""

    def test_formats_records(self, package_logger: logging.Logger) -> None:
        """Test output from both correlation and plain loggers."""
        stream = io.StringIO()
        configure_logging("INFO", stream)

        get_logger("nodetree_xml.api.parser", component="xml_parser").info("parsed")
        logging.getLogger("nodetree_xml.cli.main").warning("plain")

        assert stream.getvalue().splitlines() == [
            "INFO [xml_parser] parsed",
            "WARNING [main] plain",
        ]

    def test_level(self, package_logger: logging.Logger) -> None:
        """Test that records below the level are dropped."""
        stream = io.StringIO()
        configure_logging("ERROR", stream)

        get_logger("nodetree_xml.test").warning("hidden")

        assert stream.getvalue() == ""

    def test_replaces_previous_handler(self, package_logger: logging.Logger) -> None:
        """Test that repeated calls do not duplicate output."""
        configure_logging("INFO", io.StringIO())
        handler = configure_logging("INFO", io.StringIO())

        installed = [h for h in package_logger.handlers if h.get_name() == HANDLER_NAME]
        assert installed == [handler]

    def test_component_filter_keeps_existing_fields(self) -> None:
        """Test that fields already present are left alone."""
        record = logging.LogRecord("x.y", logging.INFO, __file__, 1, "m", None, None)
        record.component = "custom"

        assert ComponentFilter().filter(record) is True
        assert record.component == "custom"
        assert record.correlation_id is None
