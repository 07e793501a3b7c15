"""
酒店服务 - 业务操作层
管理 Hotel 对象；删除由外键级联清理房型与调价
"""
import logging
from typing import List, Optional
from sqlalchemy import delete
from sqlalchemy.orm import Session
from backoffice.models.entities import Hotel, HotelStatus
from backoffice.models.schemas import HotelCreate, HotelUpdate
from backoffice.services.update_builder import apply_update

logger = logging.getLogger(__name__)


class HotelService:
    """酒店服务"""

    def __init__(self, db: Session):
        self.db = db

    def get_hotels(self, status: Optional[HotelStatus] = None) -> List[Hotel]:
        """获取酒店列表（按 id 倒序，最新在前）"""
        query = self.db.query(Hotel)
        if status is not None:
            query = query.filter(Hotel.status == status.value)
        return query.order_by(Hotel.id.desc()).all()

    def get_hotel(self, hotel_id: int) -> Optional[Hotel]:
        """获取单个酒店"""
        return self.db.query(Hotel).filter(Hotel.id == hotel_id).first()

    def create_hotel(self, data: HotelCreate) -> Hotel:
        """创建酒店，状态默认 active"""
        status = data.status or HotelStatus.ACTIVE
        hotel = Hotel(name=data.name, location=data.location, status=status.value)
        self.db.add(hotel)
        self.db.commit()
        self.db.refresh(hotel)
        logger.info(f"Created hotel {hotel.id}")
        return hotel

    def update_hotel(self, hotel_id: int, data: HotelUpdate) -> Optional[Hotel]:
        """部分更新；无字段变更时返回 None，记录不存在时抛出 LookupError"""
        updated = apply_update(self.db, Hotel, hotel_id, data.model_dump(exclude_unset=True))
        if updated is None:
            return None
        if updated == 0:
            raise LookupError("Hotel not found")
        logger.info(f"Updated hotel {hotel_id}")
        return self.get_hotel(hotel_id)

    def delete_hotel(self, hotel_id: int) -> bool:
        """硬删除酒店，返回是否删除了记录"""
        result = self.db.execute(delete(Hotel).where(Hotel.id == hotel_id))
        self.db.commit()
        if not result.rowcount:
            return False
        logger.info(f"Deleted hotel {hotel_id}")
        return True
