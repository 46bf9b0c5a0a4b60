# gs1scan/domain/enums.py
from __future__ import annotations

from enum import StrEnum


class GtinErrorCode(StrEnum):
    """
    GTIN 校验错误码（前端据此做本地化提示，值不可随意改动）：

    - WRONG_CHARS   为空或含非数字字符
    - WRONG_LENGTH  长度不在允许范围内
    - WRONG_DIGIT   校验位不匹配
    """

    WRONG_CHARS = "gtin_wrong_chars"
    WRONG_LENGTH = "gtin_wrong_length"
    WRONG_DIGIT = "gtin_wrong_digit"


class ExpiryStatus(StrEnum):
    """
    效期判定结果：

    - VALID    可判定，未过期
    - EXPIRED  可判定，已过期（含到期当刻）
    - UNKNOWN  无法归一（格式错误等），由调用方决定 fail-open / fail-closed
    """

    VALID = "VALID"
    EXPIRED = "EXPIRED"
    UNKNOWN = "UNKNOWN"
