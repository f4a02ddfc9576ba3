"""
tests/io/test_records.py - JSON / JSON Lines 레코드 입력 테스트
"""

import io
import json

import pytest

from gridexport.exceptions import RecordSourceError
from gridexport.export.sheet import RecordStream
from gridexport.io.records import read_records


class TestJsonArray:
    def test_read(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text(json.dumps([{"id": 1}, {"id": 2}, {"id": 3}]), encoding="utf-8")

        stream = read_records(path)
        assert isinstance(stream, RecordStream)
        assert stream.estimated_size == 3
        assert list(stream) == [{"id": 1}, {"id": 2}, {"id": 3}]

    def test_not_an_array(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text('{"id": 1}', encoding="utf-8")
        with pytest.raises(RecordSourceError):
            read_records(path)

    def test_non_object_item(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text('[{"id": 1}, 2]', encoding="utf-8")
        with pytest.raises(RecordSourceError, match="1번째"):
            read_records(path)

    def test_invalid_json_reports_line(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text('[\n{"id": 1},\n{"id": }\n]', encoding="utf-8")
        with pytest.raises(RecordSourceError) as exc_info:
            read_records(path)
        assert exc_info.value.line == 3

    def test_forced_format(self, tmp_path):
        path = tmp_path / "records.txt"
        path.write_text('[{"id": 1}]', encoding="utf-8")
        assert list(read_records(path, "json")) == [{"id": 1}]


class TestJsonLines:
    def test_read_lazily(self, records_jsonl):
        stream = read_records(records_jsonl)
        assert stream.estimated_size is None

        records = list(stream)
        assert [r["id"] for r in records] == ["d-1", "d-2"]

    def test_invalid_line(self, tmp_path):
        path = tmp_path / "records.jsonl"
        path.write_text('{"id": 1}\n{broken\n', encoding="utf-8")

        stream = read_records(path)
        iterator = iter(stream)
        assert next(iterator) == {"id": 1}
        with pytest.raises(RecordSourceError) as exc_info:
            next(iterator)
        assert exc_info.value.line == 2

    def test_non_object_line(self, tmp_path):
        path = tmp_path / "records.ndjson"
        path.write_text("[1, 2]\n", encoding="utf-8")
        with pytest.raises(RecordSourceError):
            list(read_records(path))


class TestSource:
    def test_missing_file(self, tmp_path):
        with pytest.raises(RecordSourceError):
            read_records(tmp_path / "missing.jsonl")

    def test_unknown_format(self, tmp_path):
        with pytest.raises(ValueError):
            read_records(tmp_path / "x.json", "csv")

    def test_stdin_array(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO('  \n[{"id": 1}, {"id": 2}]'))
        stream = read_records("-")
        assert stream.estimated_size == 2
        assert list(stream) == [{"id": 1}, {"id": 2}]

    def test_stdin_lines(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO('{"id": 1}\n{"id": 2}\n'))
        stream = read_records("-")
        assert stream.estimated_size is None
        assert list(stream) == [{"id": 1}, {"id": 2}]

    def test_stdin_forced_jsonl(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO('{"id": 1}\n'))
        assert list(read_records("-", "jsonl")) == [{"id": 1}]
