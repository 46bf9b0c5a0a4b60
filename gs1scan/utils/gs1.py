from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from gs1scan.domain.ports import DecodeError, RawScanPayload, ScanField

# 支持两种常见 GS1 表示：带括号 (01)(17)(10) 或紧凑 AI 序列（FNC1 分隔）
FNC1 = "\x1d"

# 扫码枪前缀的 AIM 码制标识，例如 ]C1 / ]d2 / ]Q3 / ]e0
_AIM_PREFIX = re.compile(r"^\][A-Za-z][0-9]")
_AIMED_RE = re.compile(r"\((\d{2,4})\)([^()]*)")


@dataclass(frozen=True)
class AISpec:
    label: str
    length: Optional[int] = None  # None = 可变长
    max_length: int = 20
    numeric: bool = False
    is_date: bool = False


AI_TABLE: Dict[str, AISpec] = {
    "00": AISpec("SSCC", length=18, numeric=True),
    "01": AISpec("GTIN", length=14, numeric=True),
    "02": AISpec("CONTENT", length=14, numeric=True),
    "10": AISpec("BATCH/LOT", max_length=20),
    "11": AISpec("PROD DATE", length=6, numeric=True, is_date=True),
    "13": AISpec("PACK DATE", length=6, numeric=True, is_date=True),
    "15": AISpec("BEST BEFORE or BEST BY", length=6, numeric=True, is_date=True),
    "16": AISpec("SELL BY", length=6, numeric=True, is_date=True),
    "17": AISpec("USE BY OR EXPIRY", length=6, numeric=True, is_date=True),
    "21": AISpec("SERIAL", max_length=20),
    "30": AISpec("VAR. COUNT", max_length=8, numeric=True),
    "37": AISpec("COUNT", max_length=8, numeric=True),
}


def yymmdd_to_iso(v: str) -> str:
    """YYMMDD → YYYY-MM-DD；日 "00"（只到月）原样保留。"""
    return f"{2000 + int(v[0:2])}-{v[2:4]}-{v[4:6]}"


def _normalize(raw: RawScanPayload) -> str:
    if isinstance(raw, bytes):
        raw = raw.decode("latin-1")
    if not isinstance(raw, str):
        raise DecodeError(f"unsupported payload type: {type(raw).__name__}", raw)
    s = raw.strip()
    return _AIM_PREFIX.sub("", s, count=1)


class Gs1ElementStringInterpreter:
    """
    GS1 元素串解释器（ScanInterpreter 的默认实现）：
    - (01)09501101530003(17)250600(10)AB123
    - 01095011015300031725060010AB123<GS>21XYZ（FNC1 分隔的紧凑串）
    输出带标签的字段列表，顺序与条码中的出现顺序一致。
    日期类 AI 输出 ISO 串（YYYY-MM-DD）。
    任何无法确定的内容都抛 DecodeError，不做“尽力而为”。
    """

    def __init__(self, ai_table: Optional[Dict[str, AISpec]] = None) -> None:
        self._ais = ai_table or AI_TABLE

    def interpret(self, raw: RawScanPayload) -> List[ScanField]:
        s = _normalize(raw)
        if not s:
            raise DecodeError("empty scan payload", raw)
        if s.startswith("("):
            return self._parse_aimed(s, raw)
        return self._parse_compact(s, raw)

    # ------------------------------ Helpers ------------------------------

    def _field(self, ai: str, value: str, raw: RawScanPayload) -> ScanField:
        spec = self._ais[ai]
        if spec.length is not None and len(value) != spec.length:
            raise DecodeError(f"AI ({ai}) expects {spec.length} chars, got {len(value)}", raw)
        if spec.length is None and not 0 < len(value) <= spec.max_length:
            raise DecodeError(f"AI ({ai}) value length out of range: {len(value)}", raw)
        if spec.numeric and not (value.isascii() and value.isdigit()):
            raise DecodeError(f"AI ({ai}) must be numeric", raw)
        if spec.is_date:
            value = yymmdd_to_iso(value)
        return ScanField(label=spec.label, value=value)

    def _lookup(self, ai: str, raw: RawScanPayload) -> AISpec:
        spec = self._ais.get(ai)
        if spec is None:
            raise DecodeError(f"unsupported AI ({ai})", raw)
        return spec

    def _parse_aimed(self, s: str, raw: RawScanPayload) -> List[ScanField]:
        """解析形如 (01)123456...(17)251231(10)BATCH 的 GS1"""
        out: List[ScanField] = []
        pos = 0
        for m in _AIMED_RE.finditer(s):
            if m.start() != pos:
                raise DecodeError(f"unexpected text at {pos}", raw)
            ai, val = m.group(1), m.group(2).replace(FNC1, "")
            self._lookup(ai, raw)
            out.append(self._field(ai, val, raw))
            pos = m.end()
        if pos != len(s):
            raise DecodeError(f"unexpected text at {pos}", raw)
        return out

    def _parse_compact(self, s: str, raw: RawScanPayload) -> List[ScanField]:
        """解析无括号紧凑串：定长 AI 按长度截取，变长 AI 读到 FNC1 或串尾"""
        out: List[ScanField] = []
        i, n = 0, len(s)
        while i < n:
            if s[i] == FNC1:
                i += 1
                continue
            ai = s[i : i + 2]
            i += 2
            spec = self._lookup(ai, raw)
            if spec.length is not None:
                if i + spec.length > n:
                    raise DecodeError(f"AI ({ai}) truncated", raw)
                val = s[i : i + spec.length]
                i += spec.length
            else:
                j = s.find(FNC1, i)
                j = n if j == -1 else j
                val = s[i:j]
                i = j
            out.append(self._field(ai, val, raw))
        return out
