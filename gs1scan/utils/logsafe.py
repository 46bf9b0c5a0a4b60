# gs1scan/utils/logsafe.py
from __future__ import annotations

import json
import re
from typing import Any

# 控制字符（含 CR/LF、FNC1=\x1d）一律改成可见的 <GS>/<0x..> 形式或去掉
_NEWLINES_RE = re.compile(r"[\r\n]+")
_CTRL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def _visible(m: "re.Match[str]") -> str:
    ch = m.group(0)
    if ch == "\x1d":
        return "<GS>"
    return f"<0x{ord(ch):02x}>"


def _json_default(o: Any) -> str:
    if isinstance(o, BaseException):
        return json.dumps({"type": type(o).__name__, "args": [str(a) for a in o.args]})
    return str(o)


def sanitize_log_message(message: Any) -> str:
    """
    写日志前清洗：
    - 非字符串先转 JSON（异常转成 {type, args}）
    - 去掉换行，避免扫码内容伪造日志行
    - 其他控制字符转成可见形式
    """
    if isinstance(message, bytes):
        message = message.decode("latin-1")
    if isinstance(message, BaseException):
        message = _json_default(message)
    elif not isinstance(message, str):
        try:
            message = json.dumps(message, ensure_ascii=False, default=_json_default)
        except (TypeError, ValueError):
            message = repr(message)
    message = _NEWLINES_RE.sub(" ", message)
    return _CTRL_RE.sub(_visible, message)
