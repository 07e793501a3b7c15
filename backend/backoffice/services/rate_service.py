"""
房价服务 - 生效房价计算与调价记录

生效房价 = 基础价 + 截至 as_of 最近一条调价的金额
  - 候选：effective_date <= as_of
  - 排序：effective_date DESC, id DESC（同一时刻以后插入的为准）
  - 无候选时即为基础价；结果不做下限截断，可以为负
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session
from backoffice.models.entities import RoomType, RateAdjustment, utcnow
from backoffice.models.schemas import AdjustmentCreate, as_utc_naive

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EffectiveRate:
    """生效房价及所采用的调价记录"""
    rate: Decimal
    applied_adjustment: Optional[RateAdjustment] = None


class RateService:
    """房价服务"""

    def __init__(self, db: Session):
        self.db = db

    # ============== 生效房价 ==============

    def latest_adjustment(self, room_type_id: int,
                          as_of: Optional[datetime] = None) -> Optional[RateAdjustment]:
        """截至 as_of 最近生效的调价记录"""
        as_of = utcnow() if as_of is None else as_utc_naive(as_of)
        return self.db.query(RateAdjustment).filter(
            RateAdjustment.room_type_id == room_type_id,
            RateAdjustment.effective_date <= as_of
        ).order_by(
            RateAdjustment.effective_date.desc(),
            RateAdjustment.id.desc()
        ).first()

    def effective_rate(self, room_type: RoomType,
                       as_of: Optional[datetime] = None) -> EffectiveRate:
        """计算房型在 as_of 时刻的生效房价"""
        if room_type is None or room_type.id is None:
            raise ValueError("room_type: must be a persisted room type")
        if room_type.base_rate is None or Decimal(room_type.base_rate) < 0:
            raise ValueError("base_rate: must be a number >= 0")

        latest = self.latest_adjustment(room_type.id, as_of)
        base_rate = Decimal(room_type.base_rate)
        if latest is None:
            return EffectiveRate(rate=base_rate)
        return EffectiveRate(
            rate=base_rate + Decimal(latest.adjustment_amount),
            applied_adjustment=latest,
        )

    def describe(self, room_type: RoomType, as_of: Optional[datetime] = None) -> dict:
        """房型读取结构：基础字段 + effective_rate + last_adjustment"""
        result = self.effective_rate(room_type, as_of)
        return {
            'id': room_type.id,
            'hotel_id': room_type.hotel_id,
            'name': room_type.name,
            'base_rate': room_type.base_rate,
            'created_at': room_type.created_at,
            'effective_rate': result.rate,
            'last_adjustment': result.applied_adjustment,
        }

    # ============== 调价记录 ==============

    def get_adjustments(self, room_type_id: int, limit: Optional[int] = None) -> List[RateAdjustment]:
        """房型的调价记录（effective_date 倒序，同时刻按 id 倒序）"""
        query = self.db.query(RateAdjustment).filter(
            RateAdjustment.room_type_id == room_type_id
        ).order_by(
            RateAdjustment.effective_date.desc(),
            RateAdjustment.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def create_adjustment(self, room_type_id: int, data: AdjustmentCreate) -> RateAdjustment:
        """新增调价记录"""
        room_type = self.db.query(RoomType).filter(RoomType.id == room_type_id).first()
        if not room_type:
            raise ValueError("Room type not found")

        adjustment = RateAdjustment(
            room_type_id=room_type_id,
            effective_date=as_utc_naive(data.effective_date),
            adjustment_amount=data.adjustment_amount,
            reason=data.reason,
        )
        self.db.add(adjustment)
        self.db.commit()
        self.db.refresh(adjustment)
        logger.info(
            f"Created rate adjustment {adjustment.id} for room type {room_type_id} "
            f"({adjustment.adjustment_amount} from {adjustment.effective_date})"
        )
        return adjustment
