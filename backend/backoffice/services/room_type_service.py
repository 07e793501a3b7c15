"""
房型服务 - 业务操作层
管理 RoomType 对象
"""
import logging
from typing import List, Optional
from sqlalchemy import delete
from sqlalchemy.orm import Session
from backoffice.models.entities import Hotel, RoomType
from backoffice.models.schemas import RoomTypeCreate, RoomTypeUpdate
from backoffice.services.update_builder import apply_update

logger = logging.getLogger(__name__)


class RoomTypeService:
    """房型服务"""

    def __init__(self, db: Session):
        self.db = db

    def get_room_types(self, hotel_id: int) -> List[RoomType]:
        """获取酒店下的房型（按 id 升序）"""
        return self.db.query(RoomType).filter(
            RoomType.hotel_id == hotel_id
        ).order_by(RoomType.id).all()

    def get_room_type(self, room_type_id: int) -> Optional[RoomType]:
        """获取单个房型"""
        return self.db.query(RoomType).filter(RoomType.id == room_type_id).first()

    def create_room_type(self, hotel_id: int, data: RoomTypeCreate) -> RoomType:
        """在酒店下创建房型"""
        hotel = self.db.query(Hotel).filter(Hotel.id == hotel_id).first()
        if not hotel:
            raise ValueError("Hotel not found")

        room_type = RoomType(hotel_id=hotel_id, name=data.name, base_rate=data.base_rate)
        self.db.add(room_type)
        self.db.commit()
        self.db.refresh(room_type)
        logger.info(f"Created room type {room_type.id} for hotel {hotel_id}")
        return room_type

    def update_room_type(self, room_type_id: int, data: RoomTypeUpdate) -> Optional[RoomType]:
        """部分更新；无字段变更时返回 None，记录不存在时抛出 LookupError"""
        updated = apply_update(self.db, RoomType, room_type_id, data.model_dump(exclude_unset=True))
        if updated is None:
            return None
        if updated == 0:
            raise LookupError("Room type not found")
        logger.info(f"Updated room type {room_type_id}")
        return self.get_room_type(room_type_id)

    def delete_room_type(self, room_type_id: int) -> bool:
        """硬删除房型，调价记录随外键级联删除"""
        result = self.db.execute(delete(RoomType).where(RoomType.id == room_type_id))
        self.db.commit()
        if not result.rowcount:
            return False
        logger.info(f"Deleted room type {room_type_id}")
        return True
