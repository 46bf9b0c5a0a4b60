# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, Union

RawScanPayload = Union[str, bytes]


@dataclass(frozen=True)
class ScanField:
    """解释器输出的一条带标签字段，例如 ("GTIN", "00012345678905")。"""

    label: str
    value: str


class DecodeError(ValueError):
    """扫码内容无法解释为 GS1 字段（由解释器抛出，编排层原样上抛）。"""

    def __init__(self, message: str, raw: RawScanPayload | None = None) -> None:
        super().__init__(message)
        self.raw = raw


class ScanInterpreter(Protocol):
    def interpret(self, raw: RawScanPayload) -> Sequence[ScanField]:
        ...
