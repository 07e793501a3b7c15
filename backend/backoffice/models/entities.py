"""
业务实体定义
酒店 → 房型 → 调价记录，外键级联删除
"""
from datetime import datetime, UTC
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Text, Numeric, Index
)
from backoffice.database import Base


def utcnow() -> datetime:
    """当前 UTC 时间（naive，秒级精度，与存储一致）"""
    return datetime.now(UTC).replace(tzinfo=None, microsecond=0)


# ============== 枚举定义 ==============

class HotelStatus(str, Enum):
    """酒店状态"""
    ACTIVE = "active"
    INACTIVE = "inactive"


# ============== 实体定义 ==============

class User(Base):
    """
    后台用户 - 仅用于签发/校验凭证
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class Hotel(Base):
    """
    酒店对象
    删除酒店级联删除其房型
    """
    __tablename__ = "hotels"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default=HotelStatus.ACTIVE.value)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class RoomType(Base):
    """
    房型对象 - 隶属于唯一酒店
    base_rate 为非负十进制金额
    """
    __tablename__ = "room_types"

    id = Column(Integer, primary_key=True, index=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    base_rate = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class RateAdjustment(Base):
    """
    调价记录 - 在 effective_date 起生效的带符号金额
    """
    __tablename__ = "rate_adjustments"
    __table_args__ = (
        Index("idx_adjustments_room_type", "room_type_id", "effective_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    room_type_id = Column(Integer, ForeignKey("room_types.id", ondelete="CASCADE"), nullable=False)
    effective_date = Column(DateTime, nullable=False)
    adjustment_amount = Column(Numeric(10, 2), nullable=False)  # 可为负
    reason = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
