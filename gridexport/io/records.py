"""
gridexport/io/records.py - 레코드 입력 (JSON / JSON Lines)

CLI 에서 사용하는 레코드 소스. 레코드는 dict 1개입니다.

- JSON 배열 (.json): 전체를 읽으므로 예상 건수 = 배열 길이
- JSON Lines (.jsonl, .ndjson): 한 줄씩 지연 읽기, 예상 건수 없음
- "-": 표준 입력 (첫 글자가 '[' 이면 JSON 배열, 아니면 JSON Lines)
"""

from __future__ import annotations

import io
import json
import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import Any, TextIO

from gridexport.exceptions import RecordSourceError
from gridexport.export.sheet import RecordStream

logger = logging.getLogger(__name__)

STDIN = "-"
JSON_LINES_SUFFIXES = {".jsonl", ".ndjson"}


def read_records(source: str | Path, fmt: str = "auto") -> RecordStream[dict[str, Any]]:
    """레코드 소스 열기

    Args:
        source: 파일 경로 또는 "-" (표준 입력)
        fmt: "auto", "json", "jsonl"

    Returns:
        RecordStream (JSON Lines 는 순회할 때 파일을 읽음)
    """
    if fmt not in ("auto", "json", "jsonl"):
        raise ValueError(f"지원하지 않는 입력 형식: {fmt}")

    if str(source) == STDIN:
        return _read_stream(sys.stdin, "<stdin>", fmt)

    path = Path(source)
    if not path.is_file():
        raise RecordSourceError(str(path), "파일을 찾을 수 없습니다")

    if fmt == "auto":
        fmt = "jsonl" if path.suffix.lower() in JSON_LINES_SUFFIXES else "json"

    if fmt == "json":
        with open(path, encoding="utf-8") as f:
            return _load_array(f, str(path))
    return RecordStream(_iter_file_lines(path))


def _read_stream(stream: TextIO, name: str, fmt: str) -> RecordStream[dict[str, Any]]:
    if fmt == "auto":
        head = stream.read(1)
        while head and head.isspace():
            head = stream.read(1)
        stream = _Prepended(head, stream)
        fmt = "json" if head == "[" else "jsonl"
    if fmt == "json":
        return _load_array(stream, name)
    return RecordStream(_iter_lines(stream, name))


def _load_array(stream: TextIO, name: str) -> RecordStream[dict[str, Any]]:
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        raise RecordSourceError(name, e.msg, line=e.lineno, cause=e) from e
    if not isinstance(data, list):
        raise RecordSourceError(name, "JSON 배열이 아닙니다")
    for idx, item in enumerate(data):
        if not isinstance(item, dict):
            raise RecordSourceError(name, f"{idx}번째 항목이 객체가 아닙니다")
    logger.debug("JSON 배열 로드: %s (%d건)", name, len(data))
    return RecordStream(data, estimated_size=len(data))


def _iter_file_lines(path: Path) -> Iterator[dict[str, Any]]:
    with open(path, encoding="utf-8") as f:
        yield from _iter_lines(f, str(path))


def _iter_lines(stream: TextIO, name: str) -> Iterator[dict[str, Any]]:
    for lineno, line in enumerate(stream, start=1):
        if not line.strip():
            continue
        try:
            item = json.loads(line)
        except json.JSONDecodeError as e:
            raise RecordSourceError(name, e.msg, line=lineno, cause=e) from e
        if not isinstance(item, dict):
            raise RecordSourceError(name, "객체가 아닙니다", line=lineno)
        yield item


class _Prepended(io.TextIOBase):
    """이미 읽은 앞부분을 되돌려 놓은 텍스트 스트림"""

    def __init__(self, head: str, stream: TextIO):
        self._head = head
        self._stream = stream

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> str:
        head, self._head = self._head, ""
        if size is None or size < 0:
            return head + self._stream.read()
        if len(head) >= size:
            self._head = head[size:]
            return head[:size]
        return head + self._stream.read(size - len(head))

    def readline(self, size: int = -1) -> str:
        head, self._head = self._head, ""
        if "\n" in head:
            line, _, rest = head.partition("\n")
            self._head = rest
            return line + "\n"
        return head + self._stream.readline()
