# gs1scan/api/routers/scan.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from gs1scan.api.problem import raise_422
from gs1scan.api.routers.scan_schemas import (
    ExpiryCheckOut,
    ExpiryCheckRequest,
    Gs1ParseRequest,
    GtinValidateOut,
    GtinValidateRequest,
    ProductRecordOut,
)
from gs1scan.core.config import AppSettings, get_settings
from gs1scan.domain.enums import ExpiryStatus
from gs1scan.domain.ports import DecodeError
from gs1scan.services.expiry import check_expiry, get_date_for_display
from gs1scan.services.gtin import validate_gtin
from gs1scan.services.scan_parser import ScanParser
from gs1scan.utils.logsafe import sanitize_log_message

logger = logging.getLogger("gs1scan.api")

router = APIRouter(tags=["gs1"])


def get_scan_parser(settings: AppSettings = Depends(get_settings)) -> ScanParser:
    return ScanParser(
        use_full_month_name=settings.DISPLAY_FULL_MONTH_NAME,
        separator=settings.DISPLAY_DATE_SEPARATOR,
    )


@router.post("/gs1/parse", response_model=ProductRecordOut, response_model_by_alias=True)
async def parse_gs1(
    body: Gs1ParseRequest,
    parser: ScanParser = Depends(get_scan_parser),
    settings: AppSettings = Depends(get_settings),
):
    try:
        record = parser.parse(body.barcode)
    except DecodeError as e:
        logger.info("gs1 decode failed: %s (%s)", sanitize_log_message(body.barcode), e)
        raise_422(
            "gs1_decode_error",
            "条码无法解析为 GS1 字段",
            details=[{"type": "decode", "path": "body.barcode", "reason": str(e)}],
        )

    gtin_valid = None
    if record.gtin is not None:
        gtin_valid = validate_gtin(record.gtin, settings.GTIN_ALLOWED_LENGTHS).is_valid

    return ProductRecordOut(
        gtin=record.gtin,
        batch_number=record.batch_number,
        serial_number=record.serial_number,
        expiry=record.expiry,
        gtin_valid=gtin_valid,
    )


@router.post("/gtin/validate", response_model=GtinValidateOut, response_model_by_alias=True)
async def gtin_validate(
    body: GtinValidateRequest,
    settings: AppSettings = Depends(get_settings),
):
    # 校验失败也是 200：结果里带 errorCode，由前端做本地化提示
    r = validate_gtin(body.gtin, settings.GTIN_ALLOWED_LENGTHS)
    return GtinValidateOut(is_valid=r.is_valid, message=r.message, error_code=r.error_code)


@router.post("/expiry/check", response_model=ExpiryCheckOut, response_model_by_alias=True)
async def expiry_check(
    body: ExpiryCheckRequest,
    settings: AppSettings = Depends(get_settings),
):
    check = check_expiry(body.expiry)
    if check.is_known:
        expired = check.status is ExpiryStatus.EXPIRED
    else:
        expired = settings.EXPIRY_FAIL_CLOSED
    return ExpiryCheckOut(
        status=check.status,
        expires_at=check.expires_at.isoformat(timespec="milliseconds") if check.expires_at else None,
        expiry_time=check.expiry_time,
        is_expired=expired,
        display=get_date_for_display(body.expiry),
    )
