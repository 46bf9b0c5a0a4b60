# gs1scan/services/gtin.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from gs1scan.domain.enums import GtinErrorCode

# 目前只支持 14 位 GTIN；8/12/13 位需显式放开（见 GTIN_ALLOWED_LENGTHS）
DEFAULT_GTIN_LENGTHS = (14,)

_DIGITS_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class GtinValidationResult:
    is_valid: bool
    message: str
    error_code: Optional[GtinErrorCode] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "message": self.message,
            "errorCode": self.error_code.value if self.error_code else None,
        }


def compute_check_digit(body: str) -> int:
    """
    GS1 mod-10 校验位：
    从紧邻校验位的那一位开始向左，权重依次 3,1,3,1...，
    校验位 = 向上取整到 10 的倍数 - 加权和（结果 10 记为 0）。
    """
    if not _DIGITS_RE.fullmatch(body or ""):
        raise ValueError("check digit body must be ASCII digits")
    total = 0
    weight = 3
    for ch in reversed(body):
        total += int(ch) * weight
        weight = 1 if weight == 3 else 3
    return (10 - (total % 10)) % 10


def _length_message(allowed: Sequence[int]) -> str:
    if len(allowed) == 1:
        return f"GTIN length should be {allowed[0]}"
    head = ", ".join(str(n) for n in allowed[:-1])
    return f"GTIN length should be {head} or {allowed[-1]}"


def validate_gtin(
    value: Any,
    allowed_lengths: Optional[Sequence[int]] = None,
) -> GtinValidationResult:
    """
    校验 GTIN，失败不抛异常，只返回带错误码的结果：
      1) 空值 / 非数字字符     → gtin_wrong_chars
      2) 长度不在允许范围内    → gtin_wrong_length
      3) 校验位不匹配          → gtin_wrong_digit（message 给出正确的校验位）
    """
    lengths = tuple(sorted(allowed_lengths)) if allowed_lengths else DEFAULT_GTIN_LENGTHS

    if not isinstance(value, str) or not _DIGITS_RE.fullmatch(value):
        return GtinValidationResult(
            is_valid=False,
            message="GTIN should be a numeric value",
            error_code=GtinErrorCode.WRONG_CHARS,
        )

    if len(value) not in lengths:
        return GtinValidationResult(
            is_valid=False,
            message=_length_message(lengths),
            error_code=GtinErrorCode.WRONG_LENGTH,
        )

    expected = compute_check_digit(value[:-1])
    if int(value[-1]) != expected:
        return GtinValidationResult(
            is_valid=False,
            message=f"Invalid GTIN. Last digit should be {expected}",
            error_code=GtinErrorCode.WRONG_DIGIT,
        )

    return GtinValidationResult(is_valid=True, message="GTIN is valid")
