"""Tests for common.cli_helpers module."""

import json
from datetime import datetime, timezone

from common.cli_helpers import parse_csv_arg, save_jsonl_local


class TestParseCsvArg:
    def test_splits_and_strips(self) -> None:
        assert parse_csv_arg(" a, b ,,c ") == ["a", "b", "c"]

    def test_none_returns_empty(self) -> None:
        assert parse_csv_arg(None) == []


class TestSaveJsonlLocal:
    def test_writes_one_record_per_line(self, tmp_path) -> None:
        timestamp = datetime(2024, 3, 5, 7, 9, tzinfo=timezone.utc)
        path = save_jsonl_local([{"a": 1}, {"a": 2}], "breaking_clusters", timestamp, output_dir=str(tmp_path))

        assert path.name == "breaking_clusters_2024_03_05_07_09.jsonl"
        lines = path.read_text().splitlines()
        assert [json.loads(line) for line in lines] == [{"a": 1}, {"a": 2}]
