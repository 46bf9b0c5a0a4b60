# gs1scan/api/routers/scan_schemas.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from gs1scan.domain.enums import ExpiryStatus, GtinErrorCode


# ==========================
# Request / Response models
# ==========================


class _Out(BaseModel):
    """
    出参统一 camelCase（与前端 ProductRecord / validateGTIN 结果对齐）
    """

    model_config = ConfigDict(populate_by_name=True)


class Gs1ParseRequest(BaseModel):
    # 原始扫码内容不能 strip：FNC1 / 前后缀由解释器自己处理
    barcode: str = Field(..., min_length=1, description="原始扫码内容（GS1 元素串）")


class ProductRecordOut(_Out):
    gtin: Optional[str] = None
    batch_number: Optional[str] = Field(None, alias="batchNumber")
    serial_number: Optional[str] = Field(None, alias="serialNumber")
    expiry: Optional[str] = Field(None, description="展示串 DD - Mon - YYYY；无法转换为 null")
    gtin_valid: Optional[bool] = Field(None, alias="gtinValid", description="GTIN 校验结果（无 GTIN 时为 null）")


class GtinValidateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    gtin: str = Field(..., description="待校验的 GTIN")


class GtinValidateOut(_Out):
    is_valid: bool = Field(..., alias="isValid")
    message: str
    error_code: Optional[GtinErrorCode] = Field(None, alias="errorCode")


class ExpiryCheckRequest(BaseModel):
    expiry: str = Field(..., description="YYMMDD / YYYY-MM-DD / DD - Mon - YYYY；日为 00 表示当月最后一天")


class ExpiryCheckOut(_Out):
    status: ExpiryStatus
    expires_at: Optional[str] = Field(None, alias="expiresAt", description="本地时间 ISO 串，23:59:59.999")
    expiry_time: Optional[int] = Field(None, alias="expiryTime", description="毫秒时间戳")
    is_expired: bool = Field(..., alias="isExpired")
    display: str
