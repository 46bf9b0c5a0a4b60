# tests/conftest.py
from __future__ import annotations

from datetime import datetime
from typing import List, Sequence

import pytest

from gs1scan.domain.ports import DecodeError, ScanField


def _eod_ms(year: int, month: int, day: int) -> int:
    return int(datetime(year, month, day, 23, 59, 59).timestamp()) * 1000 + 999


@pytest.fixture
def eod_ms():
    """本地时间 23:59:59.999 的毫秒时间戳（与时区无关的期望值写法）。"""
    return _eod_ms


class FakeInterpreter:
    """替身解释器：返回预置字段或抛预置异常，并记录收到的原始内容。"""

    def __init__(self, fields: Sequence[ScanField] = (), error: Exception | None = None) -> None:
        self.fields = list(fields)
        self.error = error
        self.calls: List[object] = []

    def interpret(self, raw):
        self.calls.append(raw)
        if self.error is not None:
            raise self.error
        return self.fields


@pytest.fixture
def fake_interpreter() -> FakeInterpreter:
    return FakeInterpreter(
        fields=[
            ScanField("GTIN", "09501101530003"),
            ScanField("USE BY OR EXPIRY", "2025-06-00"),
            ScanField("BATCH/LOT", "AB123"),
            ScanField("SERIAL", "SN-0001"),
        ]
    )


@pytest.fixture
def failing_interpreter() -> FakeInterpreter:
    return FakeInterpreter(error=DecodeError("unsupported AI (99)", raw="99ABC"))


@pytest.fixture
def interpreter_factory():
    return FakeInterpreter
