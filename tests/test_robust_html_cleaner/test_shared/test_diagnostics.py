"""Tests for diagnostics, metrics and correlation logging."""

import logging

import pytest

from robust_html_cleaner.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    RepairMetrics,
    get_logger,
)


class TestDiagnosticEntry:
    """Test DiagnosticEntry validation and conversion."""

    def test_empty_message_raises(self) -> None:
        """Test a diagnostic needs a message."""
        with pytest.raises(ValueError, match="Diagnostic message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "repair")

    def test_empty_component_raises(self) -> None:
        """Test a diagnostic needs a component."""
        with pytest.raises(ValueError, match="Diagnostic component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "msg", "")

    def test_to_dict(self) -> None:
        """Test diagnostic conversion to a plain dictionary."""
        entry = DiagnosticEntry(
            DiagnosticSeverity.WARNING, "msg", "repair", node_name="table",
            correlation_id="doc-1",
        )

        assert entry.to_dict() == {
            "severity": "WARNING",
            "message": "msg",
            "component": "repair",
            "node_name": "table",
            "details": {},
            "correlation_id": "doc-1",
        }


class TestRepairMetrics:
    """Test RepairMetrics derived values."""

    def test_zero_division_guards(self) -> None:
        """Test rates are zero before anything was measured."""
        metrics = RepairMetrics()

        assert metrics.removal_rate == 0.0
        assert metrics.nodes_per_second == 0.0

    def test_rates(self) -> None:
        """Test removal rate and throughput calculation."""
        metrics = RepairMetrics(processing_time_ms=500.0, nodes_visited=10, nodes_removed=2)

        assert metrics.removal_rate == pytest.approx(0.2)
        assert metrics.nodes_per_second == pytest.approx(20.0)


class TestCorrelationLogger:
    """Test correlation-aware logging."""

    def test_component_defaults_to_last_name_part(self) -> None:
        """Test component name falls back to the last logger name segment."""
        logger = get_logger("robust_html_cleaner.tree.repair")

        assert logger.component == "repair"
        assert logger.correlation_id is None
        assert logger.level is None

    def test_records_carry_extras(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test emitted records carry component, correlation ID and extras."""
        logger = get_logger("robust_html_cleaner.test", "doc-9", "tester")

        with caplog.at_level(logging.INFO, logger="robust_html_cleaner.test"):
            logger.info("hello", extra={"count": 3})

        record = caplog.records[-1]
        assert record.component == "tester"
        assert record.correlation_id == "doc-9"
        assert record.count == 3

    def test_error_without_traceback(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test error records can be emitted outside an exception handler."""
        logger = get_logger("robust_html_cleaner.test", "doc-4", "tester")

        with caplog.at_level(logging.ERROR, logger="robust_html_cleaner.test"):
            logger.error("broken link", extra={"node": "table"}, exc_info=False)

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert not record.exc_info
        assert record.node == "table"

    def test_level_threshold_drops_lower_records(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a configured level drops records the logger would otherwise emit."""
        logger = get_logger("robust_html_cleaner.test", "doc-5", "tester", level="WARNING")

        with caplog.at_level(logging.DEBUG, logger="robust_html_cleaner.test"):
            logger.debug("hidden")
            logger.info("hidden")
            logger.warning("shown")

        assert [r.getMessage() for r in caplog.records] == ["shown"]
        assert logger.level == logging.WARNING
        assert not logger.is_enabled_for(logging.INFO)

    def test_bind_changes_correlation_only(self) -> None:
        """Test bind keeps the component, level and underlying logger."""
        logger = get_logger("robust_html_cleaner.test", "doc-1", "tester", level="ERROR")
        bound = logger.bind("doc-2")

        assert bound.correlation_id == "doc-2"
        assert bound.component == "tester"
        assert bound.level == logging.ERROR
        assert bound.logger is logger.logger
        assert bound.is_enabled_for(logging.CRITICAL)
