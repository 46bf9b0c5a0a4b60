# gs1scan/services/scan_parser.py
from __future__ import annotations

import logging
from typing import Optional

from gs1scan.domain.ports import RawScanPayload, ScanInterpreter
from gs1scan.services.expiry import MonthNameTable
from gs1scan.services.gs1_fields import ProductRecord, parse_gs1_fields
from gs1scan.utils.gs1 import Gs1ElementStringInterpreter
from gs1scan.utils.logsafe import sanitize_log_message

logger = logging.getLogger("gs1scan.scan")


class ScanParser:
    """
    扫码编排：
      1) 交给解释器拿到带标签的字段列表（解释失败的异常原样上抛，这里不兜底）
      2) 字段映射为 ProductRecord
    解释器可注入，便于测试或替换为其他码制实现。
    """

    def __init__(
        self,
        interpreter: Optional[ScanInterpreter] = None,
        month_names: Optional[MonthNameTable] = None,
        use_full_month_name: bool = False,
        separator: str = "-",
    ) -> None:
        self._interpreter = interpreter or Gs1ElementStringInterpreter()
        self._month_names = month_names
        self._use_full_month_name = use_full_month_name
        self._separator = separator

    def parse(self, raw: RawScanPayload) -> ProductRecord:
        fields = self._interpreter.interpret(raw)
        logger.debug("scan interpreted: %s -> %d fields", sanitize_log_message(raw), len(fields))
        return parse_gs1_fields(
            fields,
            month_names=self._month_names,
            use_full_month_name=self._use_full_month_name,
            separator=self._separator,
        )


_DEFAULT_PARSER = ScanParser()


def parse_gs1_code(
    raw: RawScanPayload,
    interpreter: Optional[ScanInterpreter] = None,
) -> ProductRecord:
    parser = ScanParser(interpreter) if interpreter is not None else _DEFAULT_PARSER
    return parser.parse(raw)
