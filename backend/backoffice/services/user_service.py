"""
用户服务 - 认证
"""
import logging
from typing import Optional
from sqlalchemy.orm import Session
from backoffice.models.entities import User
from backoffice.security.auth import get_password_hash, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """用户服务"""

    def __init__(self, db: Session):
        self.db = db

    def get_user_by_username(self, username: str) -> Optional[User]:
        """根据用户名获取用户"""
        return self.db.query(User).filter(User.username == username).first()

    def create_user(self, username: str, password: str) -> User:
        """创建用户"""
        if self.get_user_by_username(username):
            raise ValueError(f"username: '{username}' already exists")

        user = User(username=username, password_hash=get_password_hash(password))
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Created user {user.id} ({username})")
        return user

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """校验用户名密码，失败返回 None"""
        user = self.get_user_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login attempt for '{username}'")
            return None
        return user
