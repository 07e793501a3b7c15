"""
Pytest 配置和共享 fixtures
"""
import pytest
from datetime import datetime
from decimal import Decimal
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from backoffice.config import Settings
from backoffice.database import Base, Database, get_db
from backoffice.main import create_app
from backoffice.models.entities import User, Hotel, RoomType, RateAdjustment, utcnow
from backoffice.security.auth import get_password_hash, create_access_token

TEST_SECRET = "test-secret-key"


@pytest.fixture(scope="function")
def test_settings():
    """测试设置（内存库、独立密钥）"""
    return Settings(DATABASE_URL="sqlite:///:memory:", SECRET_KEY=TEST_SECRET)


@pytest.fixture(scope="function")
def database():
    """创建内存数据库（开启外键）"""
    db = Database("sqlite:///:memory:", poolclass=StaticPool)
    db.create_all()
    yield db
    Base.metadata.drop_all(bind=db.engine)
    db.dispose()


@pytest.fixture(scope="function")
def db_session(database):
    """创建数据库会话"""
    session = database.session()
    yield session
    session.close()


@pytest.fixture(scope="function")
def app(test_settings, database):
    return create_app(test_settings, database)


@pytest.fixture(scope="function")
def client(app, db_session):
    """创建测试客户端"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== 认证相关 Fixtures ==============

@pytest.fixture
def sample_user(db_session):
    """创建后台用户"""
    user = User(username="admin", password_hash=get_password_hash("password123"))
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_token(sample_user):
    return create_access_token(sample_user.id, sample_user.username, secret_key=TEST_SECRET)


@pytest.fixture
def auth_headers(auth_token):
    """返回带认证的请求头"""
    return {"Authorization": f"Bearer {auth_token}"}


# ============== 实体相关 Fixtures ==============

@pytest.fixture
def now():
    return utcnow()


@pytest.fixture
def sample_hotel(db_session):
    """创建测试酒店"""
    hotel = Hotel(name="Demo Hotel", location="NYC", status="active")
    db_session.add(hotel)
    db_session.commit()
    db_session.refresh(hotel)
    return hotel


@pytest.fixture
def sample_room_type(db_session, sample_hotel):
    """创建标准间（基础价 120.00）"""
    room_type = RoomType(hotel_id=sample_hotel.id, name="Standard", base_rate=Decimal("120.00"))
    db_session.add(room_type)
    db_session.commit()
    db_session.refresh(room_type)
    return room_type


@pytest.fixture
def sample_room_type_deluxe(db_session, sample_hotel):
    """创建豪华间（基础价 180.00）"""
    room_type = RoomType(hotel_id=sample_hotel.id, name="Deluxe", base_rate=Decimal("180.00"))
    db_session.add(room_type)
    db_session.commit()
    db_session.refresh(room_type)
    return room_type


@pytest.fixture
def make_adjustment(db_session):
    """调价记录工厂"""
    def _make(room_type, effective_date: datetime, amount, reason="Test"):
        adjustment = RateAdjustment(
            room_type_id=room_type.id,
            effective_date=effective_date,
            adjustment_amount=Decimal(str(amount)),
            reason=reason,
        )
        db_session.add(adjustment)
        db_session.commit()
        db_session.refresh(adjustment)
        return adjustment
    return _make
