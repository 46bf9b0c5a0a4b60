# gs1scan/services/gs1_fields.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from gs1scan.domain.ports import ScanField
from gs1scan.services.expiry import MonthNameTable, convert_from_iso_to_yyyy_hm

logger = logging.getLogger("gs1scan.fields")

# 解释器标签 → ProductRecord 字段；其他标签一律忽略
FIELD_LABELS: Dict[str, str] = {
    "GTIN": "gtin",
    "BATCH/LOT": "batch_number",
    "SERIAL": "serial_number",
    "USE BY OR EXPIRY": "expiry",
}

FieldLike = Union[ScanField, Mapping[str, Any], Tuple[str, str]]


@dataclass(frozen=True)
class ProductRecord:
    """
    扫码结果（每次解析新建，返回后不再修改）。
    - gtin:          GTIN 原值（不在此处校验）
    - batch_number:  批次 / LOT
    - serial_number: 序列号
    - expiry:        展示串 "DD - Mon - YYYY"；无法转换时为 None
    """

    gtin: Optional[str] = None
    batch_number: Optional[str] = None
    serial_number: Optional[str] = None
    expiry: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "gtin": self.gtin,
            "batchNumber": self.batch_number,
            "serialNumber": self.serial_number,
            "expiry": self.expiry,
        }


def _label_value(f: FieldLike) -> Tuple[Any, Any]:
    if isinstance(f, ScanField):
        return f.label, f.value
    if isinstance(f, Mapping):
        return f.get("label"), f.get("value")
    # 普通 (label, value) 二元组；其他形状视为无法识别
    if isinstance(f, Sequence) and not isinstance(f, (str, bytes)) and len(f) == 2:
        return f[0], f[1]
    return None, None


def parse_gs1_fields(
    fields: Iterable[FieldLike],
    month_names: Optional[MonthNameTable] = None,
    use_full_month_name: bool = False,
    separator: str = "-",
) -> ProductRecord:
    """
    按顺序遍历解释器输出，命中已知标签就写入对应字段（后出现的覆盖先出现的）。
    效期转成展示串；转换失败则 expiry=None（与效期判定的 fail-open 口径一致）。
    """
    out: Dict[str, Any] = {}
    for f in fields:
        label, value = _label_value(f)
        key = FIELD_LABELS.get(label) if isinstance(label, str) else None
        if key:
            out[key] = value

    raw_expiry = out.get("expiry")
    if raw_expiry:
        try:
            out["expiry"] = convert_from_iso_to_yyyy_hm(
                raw_expiry,
                use_full_month_name=use_full_month_name,
                separator=separator,
                month_names=month_names,
            )
        except ValueError as e:
            logger.warning("expiry not convertible, dropped: %r (%s)", raw_expiry, e)
            out["expiry"] = None

    return ProductRecord(**out)
