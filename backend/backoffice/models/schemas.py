"""
Pydantic 模式定义
用于 API 请求/响应验证
金额内部为 Decimal，JSON 输出为数值
"""
from datetime import datetime, UTC
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Annotated, Optional, List
from pydantic import BaseModel, Field, field_validator, ConfigDict, PlainSerializer
from backoffice.models.entities import HotelStatus


def as_utc_naive(value: datetime) -> datetime:
    """带时区的时间转换为 naive UTC，并截断到秒"""
    if value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
    return value.replace(microsecond=0)


def _format_timestamp(value: datetime) -> str:
    return value.replace(tzinfo=None).isoformat() + "Z"


CENT = Decimal("0.01")


def to_money(value):
    """请求中的金额：只接受数值，按分四舍五入（与 DECIMAL(10,2) 存储一致）"""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValueError("must be a number")
    try:
        return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError("must be a finite amount")


Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
Timestamp = Annotated[datetime, PlainSerializer(_format_timestamp, return_type=str, when_used="json")]


class MessageResponse(BaseModel):
    message: str


# ============== 认证 Schemas ==============

class LoginRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)


class UserInfo(BaseModel):
    id: int
    username: str
    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    token: str
    user: UserInfo


# ============== 酒店 Schemas ==============

class HotelCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    status: Optional[HotelStatus] = None


class HotelUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    status: Optional[HotelStatus] = None


class HotelResponse(BaseModel):
    id: int
    name: str
    location: str
    status: HotelStatus
    created_at: Timestamp
    model_config = ConfigDict(from_attributes=True)


class HotelListResponse(BaseModel):
    hotels: List[HotelResponse]


# ============== 调价 Schemas ==============

class AdjustmentCreate(BaseModel):
    effective_date: datetime
    adjustment_amount: Decimal = Field(..., max_digits=10, decimal_places=2)
    reason: str = Field(..., min_length=1)

    @field_validator("effective_date")
    @classmethod
    def normalize_effective_date(cls, v: datetime) -> datetime:
        return as_utc_naive(v)

    @field_validator("adjustment_amount", mode="before")
    @classmethod
    def validate_amount(cls, v):
        return to_money(v)


class AdjustmentSummary(BaseModel):
    """房型读取时附带的最近生效调价"""
    id: int
    effective_date: Timestamp
    adjustment_amount: Money
    reason: str
    model_config = ConfigDict(from_attributes=True)


class AdjustmentResponse(AdjustmentSummary):
    room_type_id: int
    created_at: Timestamp


class AdjustmentListResponse(BaseModel):
    adjustments: List[AdjustmentResponse]


# ============== 房型 Schemas ==============

class RoomTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    base_rate: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)

    @field_validator("base_rate", mode="before")
    @classmethod
    def validate_base_rate(cls, v):
        return to_money(v)


class RoomTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    base_rate: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)

    @field_validator("base_rate", mode="before")
    @classmethod
    def validate_base_rate(cls, v):
        return to_money(v)


class RoomTypeResponse(BaseModel):
    id: int
    hotel_id: int
    name: str
    base_rate: Money
    created_at: Timestamp
    effective_rate: Money
    last_adjustment: Optional[AdjustmentSummary] = None


class RoomTypeListResponse(BaseModel):
    room_types: List[RoomTypeResponse]


class HotelDetailResponse(BaseModel):
    hotel: HotelResponse
    room_types: List[RoomTypeResponse]


class EffectiveRateResponse(BaseModel):
    room_type_id: int
    as_of: Timestamp
    base_rate: Money
    effective_rate: Money
    last_adjustment: Optional[AdjustmentSummary] = None
