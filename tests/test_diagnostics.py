"""Unit tests for best-effort failure recording (dotaloader.diagnostics)."""

import logging
from unittest.mock import MagicMock, patch

import pytest

from dotaloader.diagnostics import (
    build_quarantine_record,
    record_failure,
    recorded_failure,
)


class TestBuildQuarantineRecord:
    def test_fields(self):
        row = build_quarantine_record('{"a": 1}', ValueError("bad"))
        assert row["source_line"] == '{"a": 1}'
        assert row["error_type"] == "ValueError"
        assert row["error_details"] == "bad"
        assert row["resolved"] == 0
        assert row["quarantined_at"].endswith("+00:00")


class TestRecordedFailure:
    def test_no_exception_records_nothing(self, caplog):
        sink = MagicMock()
        with caplog.at_level(logging.ERROR):
            with recorded_failure("line", sink):
                pass
        sink.assert_not_called()
        assert caplog.text == ""

    def test_original_exception_reraised(self):
        original = KeyError("match_id")
        with pytest.raises(KeyError) as exc:
            with recorded_failure("line"):
                raise original
        assert exc.value is original

    def test_line_and_message_logged(self, caplog):
        with caplog.at_level(logging.ERROR, logger="dotaloader.diagnostics"):
            with pytest.raises(ValueError):
                with recorded_failure('{"match_id": 9}'):
                    raise ValueError("Bad game mode int: 99")
        assert '{"match_id": 9}' in caplog.text
        assert "Bad game mode int: 99" in caplog.text

    def test_sink_failure_downgraded_to_debug(self, caplog):
        sink = MagicMock(side_effect=RuntimeError("quarantine table locked"))
        with caplog.at_level(logging.DEBUG, logger="dotaloader.diagnostics"):
            with pytest.raises(ValueError, match="primary"):
                with recorded_failure("line", sink):
                    raise ValueError("primary")
        debug = [r for r in caplog.records if r.levelno == logging.DEBUG]
        assert any("quarantine table locked" in r.getMessage() for r in debug)

    def test_logging_failure_swallowed(self):
        with patch("dotaloader.diagnostics.logger") as log:
            log.error.side_effect = RuntimeError("handler broken")
            record_failure("line", ValueError("primary"))
        log.debug.assert_called_once()
