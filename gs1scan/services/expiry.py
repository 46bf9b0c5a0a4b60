# gs1scan/services/expiry.py
from __future__ import annotations

import calendar
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional, Tuple

from gs1scan.domain.enums import ExpiryStatus

logger = logging.getLogger("gs1scan.expiry")

# 日 = "00" 表示“只知道年月”，按当月最后一天处理
UNKNOWN_DAY = "00"

_END_OF_DAY = time(23, 59, 59, 999000)

_WS_RE = re.compile(r"\s+")
_YYMMDD_RE = re.compile(r"^(\d{2})(\d{2})(\d{2})$")
_ISO_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_DISPLAY_RE = re.compile(r"^(\d{2})(.+?)(\d{4})$")
_EDGE_SEP_RE = re.compile(r"^[\W_]+|[\W_]+$")
_DISPLAY_DAY_RE = re.compile(r"^00\s*[^\w\s]*\s*")


class ExpiryFormatError(ValueError):
    pass


@dataclass(frozen=True)
class MonthNameTable:
    """
    月份名查表（1..12）。
    - full: 12 个完整月份名
    - abbreviated: 缩写；缺省取完整名的前 3 个字符
    """

    full: Tuple[str, ...]
    abbreviated: Tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        if len(self.full) != 12:
            raise ValueError("month table needs exactly 12 names")
        if not self.abbreviated:
            object.__setattr__(self, "abbreviated", tuple(n[:3] for n in self.full))
        elif len(self.abbreviated) != 12:
            raise ValueError("abbreviated month table needs exactly 12 names")

    def name(self, month: int, full: bool = False) -> str:
        if not 1 <= month <= 12:
            raise ExpiryFormatError(f"month out of range: {month}")
        names = self.full if full else self.abbreviated
        return names[month - 1]

    def lookup(self, token: str) -> Optional[int]:
        t = token.strip().casefold()
        for names in (self.full, self.abbreviated):
            for i, n in enumerate(names):
                if n.casefold() == t:
                    return i + 1
        return None


DEFAULT_MONTH_NAMES = MonthNameTable(
    full=(
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    )
)


@dataclass(frozen=True)
class ExpiryCheck:
    status: ExpiryStatus
    expires_at: Optional[datetime] = None
    expiry_time: Optional[int] = None

    @property
    def is_known(self) -> bool:
        return self.status is not ExpiryStatus.UNKNOWN


# ---------------------------------------------------------------------------
# 解析
# ---------------------------------------------------------------------------


def _split(expiry: str, month_names: MonthNameTable) -> Tuple[int, int, str]:
    """
    拆出 (year, month, day)；day 保持原字符串（"00" 需要单独识别）。
    支持：YYMMDD / YYYY-MM-DD / "DD - Mon - YYYY"
    """
    if not isinstance(expiry, str):
        raise ExpiryFormatError(f"expiry must be str, got {type(expiry).__name__}")
    s = _WS_RE.sub("", expiry)
    if not s:
        raise ExpiryFormatError("empty expiry")

    m = _YYMMDD_RE.match(s)
    if m:
        return 2000 + int(m.group(1)), int(m.group(2)), m.group(3)

    m = _ISO_RE.match(s)
    if m:
        return int(m.group(1)), int(m.group(2)), m.group(3)

    m = _DISPLAY_RE.match(s)
    if m:
        token = _EDGE_SEP_RE.sub("", m.group(2))
        month = month_names.lookup(token) if token else None
        if month is None:
            raise ExpiryFormatError(f"unknown month name: {m.group(2)!r}")
        return int(m.group(3)), month, m.group(1)

    raise ExpiryFormatError(f"unrecognized expiry format: {expiry!r}")


def _last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def _resolve_day(year: int, month: int, day: str) -> date:
    if day == UNKNOWN_DAY:
        return _last_day_of_month(year, month)
    return date(year, month, int(day))


def _to_epoch_ms(dt: datetime) -> int:
    # naive datetime 按本地时区解释
    return int(dt.replace(microsecond=0).timestamp()) * 1000 + dt.microsecond // 1000


def convert_to_last_month_day(
    expiry: str,
    month_names: Optional[MonthNameTable] = None,
) -> int:
    """日未知的效期 → 当月最后一天 23:59:59.999 的毫秒时间戳；非法输入直接抛错。"""
    year, month, _day = _split(expiry, month_names or DEFAULT_MONTH_NAMES)
    return _to_epoch_ms(datetime.combine(_last_day_of_month(year, month), _END_OF_DAY))


def normalize_expiry(
    expiry: str,
    month_names: Optional[MonthNameTable] = None,
) -> Optional[datetime]:
    """
    效期归一为“当日最后一刻”（本地时间 23:59:59.999）。
    无法归一时返回 None，不抛异常。
    """
    try:
        year, month, day = _split(expiry, month_names or DEFAULT_MONTH_NAMES)
        return datetime.combine(_resolve_day(year, month, day), _END_OF_DAY)
    except ValueError as e:
        logger.debug("expiry not normalizable: %r (%s)", expiry, e)
        return None


def _epoch_ms_or_none(dt: Optional[datetime], expiry: str) -> Optional[int]:
    if dt is None:
        return None
    try:
        ms = _to_epoch_ms(dt)
    except (OverflowError, OSError, ValueError) as e:
        logger.debug("expiry out of range: %r (%s)", expiry, e)
        return None
    return ms if ms > 0 else None


def get_expiry_time(
    expiry: str,
    month_names: Optional[MonthNameTable] = None,
) -> Optional[int]:
    """效期 → 毫秒时间戳（当日 23:59:59.999 本地时间）；无法归一返回 None。"""
    return _epoch_ms_or_none(normalize_expiry(expiry, month_names), expiry)


def get_date_for_display(expiry: str) -> str:
    """
    日 = "00" 时只展示年月：
      "00 - Jun - 2025" → "Jun - 2025"
      "250600"          → "06/2025"
      "2025-06-00"      → "2025-06"
    其他情况原样返回。
    """
    s = _WS_RE.sub("", expiry)
    m = _YYMMDD_RE.match(s)
    if m:
        if m.group(3) == UNKNOWN_DAY:
            return f"{m.group(2)}/{2000 + int(m.group(1))}"
        return expiry
    m = _ISO_RE.match(s)
    if m:
        if m.group(3) == UNKNOWN_DAY:
            return f"{m.group(1)}-{m.group(2)}"
        return expiry
    m = _DISPLAY_RE.match(s)
    if m and m.group(1) == UNKNOWN_DAY:
        return _DISPLAY_DAY_RE.sub("", expiry.strip(), count=1)
    return expiry


# ---------------------------------------------------------------------------
# 过期判定
# ---------------------------------------------------------------------------


def check_expiry(
    expiry: str,
    now: Optional[datetime] = None,
    month_names: Optional[MonthNameTable] = None,
) -> ExpiryCheck:
    """
    三态判定：VALID / EXPIRED / UNKNOWN。
    到期当刻（expires_at == now）算已过期。
    """
    expires_at = normalize_expiry(expiry, month_names)
    expiry_time = _epoch_ms_or_none(expires_at, expiry)
    if expires_at is None or expiry_time is None:
        return ExpiryCheck(status=ExpiryStatus.UNKNOWN)

    ref = now or datetime.now()
    cmp_at = expires_at.astimezone() if ref.tzinfo is not None else expires_at
    status = ExpiryStatus.EXPIRED if cmp_at <= ref else ExpiryStatus.VALID
    return ExpiryCheck(status=status, expires_at=expires_at, expiry_time=expiry_time)


def is_expired(
    expiry: str,
    now: Optional[datetime] = None,
    fail_closed: bool = False,
    month_names: Optional[MonthNameTable] = None,
) -> bool:
    """
    无法判定效期时返回 fail_closed（默认 False：按未过期处理）。
    """
    check = check_expiry(expiry, now=now, month_names=month_names)
    if check.status is ExpiryStatus.UNKNOWN:
        return fail_closed
    return check.status is ExpiryStatus.EXPIRED


# ---------------------------------------------------------------------------
# 展示
# ---------------------------------------------------------------------------


def convert_from_iso_to_yyyy_hm(
    date_string: str,
    use_full_month_name: bool = False,
    separator: str = "-",
    month_names: Optional[MonthNameTable] = None,
) -> str:
    """
    ISO 日期 → 展示串 "DD <sep> Mon <sep> YYYY"：
      ("2025-06-15", False, "/") → "15 / Jun / 2025"
      ("2025-06-15", True,  "/") → "15 / June / 2025"
    日部分原样保留（"00" 也保留，供后续按“当月最后一天”处理）。
    """
    if not isinstance(date_string, str):
        raise ExpiryFormatError(f"date must be str, got {type(date_string).__name__}")
    parts = date_string.strip().split("-")
    if len(parts) != 3 or not all(p.isascii() and p.isdigit() for p in parts):
        raise ExpiryFormatError(f"not an ISO date: {date_string!r}")
    year, month, day = parts
    table = month_names or DEFAULT_MONTH_NAMES
    name = table.name(int(month), full=use_full_month_name)
    return f"{day} {separator} {name} {separator} {year}"
