"""
初始化演示数据（幂等）
表为空时才写入：

  admin / password123
  Demo Hotel (NYC)
  ├── Deluxe    180.00   +20 Peak season
  └── Standard  120.00   -10 Promo

用法: python -m backoffice.seed  或  backoffice-seed
"""
import logging
from decimal import Decimal
from typing import Dict
from sqlalchemy.orm import Session
from backoffice.config import configure_logging, settings
from backoffice.database import Database
from backoffice.models.entities import User, Hotel, HotelStatus, RoomType, RateAdjustment, utcnow
from backoffice.security.auth import get_password_hash

logger = logging.getLogger(__name__)

DEMO_USERNAME = "admin"
DEMO_PASSWORD = "password123"


def seed_users(db: Session) -> int:
    """初始化后台用户"""
    if db.query(User).count() > 0:
        return 0
    db.add(User(username=DEMO_USERNAME, password_hash=get_password_hash(DEMO_PASSWORD)))
    db.commit()
    return 1


def seed_hotels(db: Session) -> int:
    """初始化演示酒店、房型与调价"""
    if db.query(Hotel).count() > 0:
        return 0

    now = utcnow()
    hotel = Hotel(name="Demo Hotel", location="NYC", status=HotelStatus.ACTIVE.value)
    db.add(hotel)
    db.flush()

    deluxe = RoomType(hotel_id=hotel.id, name="Deluxe", base_rate=Decimal("180.00"))
    standard = RoomType(hotel_id=hotel.id, name="Standard", base_rate=Decimal("120.00"))
    db.add_all([deluxe, standard])
    db.flush()

    db.add_all([
        RateAdjustment(room_type_id=deluxe.id, effective_date=now,
                       adjustment_amount=Decimal("20.00"), reason="Peak season"),
        RateAdjustment(room_type_id=standard.id, effective_date=now,
                       adjustment_amount=Decimal("-10.00"), reason="Promo"),
    ])
    db.commit()
    return 1


def seed_all(db: Session) -> Dict[str, int]:
    return {
        'users': seed_users(db),
        'hotels': seed_hotels(db),
    }


def main() -> None:
    configure_logging(settings.LOG_LEVEL)

    database = Database.from_settings(settings)
    database.create_all()
    db = database.session()
    try:
        stats = seed_all(db)
        logger.info(f"Seed stats: {stats}")
    finally:
        db.close()
        database.dispose()
    print("Seed data applied (idempotent).")


if __name__ == "__main__":
    main()
