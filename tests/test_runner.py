"""Tests for the sequential execution engine (dotaloader.runner)."""

import gzip
import json
from unittest.mock import MagicMock

import pytest

from conftest import make_match_data
from dotaloader.config import LoaderConfig
from dotaloader.context import MemoryWriteContext
from dotaloader.exceptions import MalformedLineError, RangeViolation
from dotaloader.importer import MatchBulkImporter
from dotaloader.runner import ImportStats, iter_lines, run_import


def write_lines(path, lines):
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


class TestIterLines:
    def test_offsets_include_blank_lines(self, tmp_path):
        path = write_lines(tmp_path / "in.jsonl", ["abc", "", "de"])
        assert list(iter_lines(path)) == [(0, b"abc"), (4, b""), (5, b"de")]

    def test_crlf_stripped(self, tmp_path):
        path = tmp_path / "in.jsonl"
        path.write_bytes(b"one\r\ntwo\r\n")
        assert list(iter_lines(path)) == [(0, b"one"), (5, b"two")]

    def test_gzip_input(self, tmp_path):
        path = tmp_path / "in.jsonl.gz"
        path.write_bytes(gzip.compress(b"one\ntwo\n"))
        assert [line for _, line in iter_lines(path)] == [b"one", b"two"]

    def test_bytes_not_decoded(self, tmp_path):
        path = tmp_path / "in.jsonl"
        path.write_bytes(b"\xff\xfe\nok\n")
        assert list(iter_lines(path)) == [(0, b"\xff\xfe"), (3, b"ok")]


class TestRunImport:
    def test_imports_every_line(self, tmp_path):
        path = write_lines(
            tmp_path / "in.jsonl",
            [json.dumps(make_match_data(match_id=i)) for i in (1, 2, 3)],
        )
        context = MemoryWriteContext()
        stats = run_import([path], MatchBulkImporter(), context, LoaderConfig())
        assert stats.summary()["imported"] == 3
        assert stats.failed == 0
        assert context.entity_count() == 3

    def test_fail_policy_aborts(self, tmp_path):
        path = write_lines(
            tmp_path / "in.jsonl",
            [
                json.dumps(make_match_data(match_id=1)),
                json.dumps(make_match_data(match_id=2, lobby_type=7)),
                json.dumps(make_match_data(match_id=3)),
            ],
        )
        context = MemoryWriteContext()
        with pytest.raises(RangeViolation):
            run_import([path], MatchBulkImporter(), context, LoaderConfig())
        assert context.entity_count() == 1

    def test_skip_policy_continues(self, tmp_path):
        path = write_lines(
            tmp_path / "in.jsonl",
            [
                json.dumps(make_match_data(match_id=1)),
                "not json at all",
                json.dumps(make_match_data(match_id=3)),
            ],
        )
        context = MemoryWriteContext()
        stats = run_import(
            [path], MatchBulkImporter(), context, LoaderConfig(on_error="skip")
        )
        assert stats.processed == 3
        assert stats.imported == 2
        assert stats.failed == 1
        assert context.entity_count() == 2

    def test_skip_policy_survives_invalid_utf8(self, tmp_path):
        path = tmp_path / "in.jsonl"
        path.write_bytes(
            json.dumps(make_match_data(match_id=1)).encode("utf-8")
            + b"\n\xff\xfe garbage\n"
            + json.dumps(make_match_data(match_id=3)).encode("utf-8")
            + b"\n"
        )
        context = MemoryWriteContext()
        sink = MagicMock()
        stats = run_import(
            [path],
            MatchBulkImporter(quarantine=sink),
            context,
            LoaderConfig(on_error="skip"),
        )
        assert stats.processed == 3
        assert stats.imported == 2
        assert stats.failed == 1
        assert context.entity_count() == 2
        record = sink.call_args[0][0]
        assert record["error_type"] == "MalformedLineError"
        assert "garbage" in record["source_line"]

    def test_fail_policy_aborts_on_invalid_utf8(self, tmp_path):
        path = tmp_path / "in.jsonl"
        path.write_bytes(b"\xff\xfe garbage\n")
        with pytest.raises(MalformedLineError, match="UTF-8"):
            run_import(
                [path], MatchBulkImporter(), MemoryWriteContext(), LoaderConfig()
            )

    def test_blank_lines_counted_not_processed(self, tmp_path):
        path = write_lines(
            tmp_path / "in.jsonl",
            ["", json.dumps(make_match_data(match_id=1)), "   ", ""],
        )
        importer = MagicMock()
        stats = run_import([path], importer, MemoryWriteContext(), LoaderConfig())
        assert stats.skipped_blank == 3
        assert stats.processed == 1
        assert importer.produce.call_count == 1
        assert stats.summary()["skipped_blank"] == 3

    def test_multiple_files(self, tmp_path):
        first = write_lines(tmp_path / "a.jsonl", [json.dumps(make_match_data(match_id=1))])
        second = write_lines(tmp_path / "b.jsonl", [json.dumps(make_match_data(match_id=2))])
        context = MemoryWriteContext()
        stats = run_import([first, second], MatchBulkImporter(), context, LoaderConfig())
        assert stats.imported == 2


class TestImportStats:
    def test_format_summary(self):
        stats = ImportStats()
        stats.processed = 5
        stats.imported = 4
        stats.failed = 1
        stats.skipped_blank = 2
        text = stats.format_summary()
        assert "Processed : 5" in text
        assert "Failed    : 1" in text
        assert "Blank     : 2" in text
