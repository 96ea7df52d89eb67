"""Tests for CSV rendering and the log export gate."""

import csv
import io
from unittest.mock import MagicMock

import pytest

from suggest_expander.errors import UnauthorizedError
from suggest_expander.export import (
    check_secret,
    export_logs,
    logs_filename,
    logs_to_csv,
    read_logs,
    results_filename,
    results_to_csv,
)
from suggest_expander.log_sink import MemoryLogSink
from suggest_expander.models import Category, LogRecord, ResultItem

BOM = b"\xef\xbb\xbf"


def _rows(data: bytes):
    return list(csv.reader(io.StringIO(data.decode("utf-8-sig"))))


class TestResultsToCsv:
    def test_bom_and_header(self):
        data = results_to_csv([ResultItem(Category.BASE, "pizza hut")])
        assert data.startswith(BOM)
        assert _rows(data) == [["category", "suggestion"], ["Base", "pizza hut"]]

    def test_commas_and_quotes_escaped(self):
        data = results_to_csv([ResultItem(Category.QUESTION, 'qué pizza "buena", barata')])
        text = data.decode("utf-8-sig")
        assert 'Questions (Q + K),"qué pizza ""buena"", barata"' in text
        assert _rows(data)[1] == ["Questions (Q + K)", 'qué pizza "buena", barata']

    def test_empty(self):
        assert _rows(results_to_csv([])) == [["category", "suggestion"]]


class TestLogsToCsv:
    def test_fixed_columns(self):
        data = logs_to_csv([LogRecord("pizza", "pr", "es", 12, "2026-10-17T12:00:00+00:00")])
        assert data.startswith(BOM)
        assert _rows(data) == [
            ["keyword", "country", "language", "date"],
            ["pizza", "pr", "es", "2026-10-17T12:00:00+00:00"],
        ]


class TestFilenames:
    def test_results_filename(self):
        assert results_filename("pizza napolitana!", now=1700000000.5) == "suggestions_pizza_napolitana_1700000000.csv"

    def test_logs_filename(self):
        assert logs_filename(now=1700000000.5) == "search_logs_export_1700000000500.csv"


class TestCheckSecret:
    @pytest.mark.parametrize(
        "password,secret",
        [(None, "s3cret"), ("", "s3cret"), ("wrong", "s3cret"), ("s3cret", None), (None, None), ("x", "")],
    )
    def test_rejected(self, password, secret):
        with pytest.raises(UnauthorizedError):
            check_secret(password, secret)

    def test_accepted(self):
        check_secret("s3cret", "s3cret")


class TestExportLogs:
    def test_unauthorized_does_not_read(self):
        sink = MagicMock()
        with pytest.raises(UnauthorizedError):
            export_logs(sink, "nope", "s3cret")
        sink.list_keys.assert_not_called()
        sink.get_many.assert_not_called()

    def test_empty_log(self):
        assert export_logs(MemoryLogSink(), "s3cret", "s3cret") is None

    def test_filters_missing_records(self):
        sink = MagicMock()
        sink.list_keys.return_value = ["search_log:1", "search_log:2"]
        sink.get_many.return_value = [None, LogRecord("pizza", "ar", "es-419", 4, "2026-10-17T00:00:00+00:00")]

        data = export_logs(sink, "s3cret", "s3cret")

        assert _rows(data)[1:] == [["pizza", "ar", "es-419", "2026-10-17T00:00:00+00:00"]]
        sink.list_keys.assert_called_once_with("search_log:")

    def test_read_logs_skips_get_when_no_keys(self):
        sink = MagicMock()
        sink.list_keys.return_value = []
        assert read_logs(sink) == []
        sink.get_many.assert_not_called()
