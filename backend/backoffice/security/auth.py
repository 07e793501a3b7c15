"""
认证模块
bcrypt 密码哈希 + HS256 JWT（12 小时有效）

凭证缺失、格式错误、签名错误、过期一律返回同一个 401。
令牌校验是 (token, secret, 当前时间) 的纯函数，不需要会话存储。
"""
import bcrypt
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from typing import Optional
from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from backoffice.config import settings as default_settings

logger = logging.getLogger(__name__)

# auto_error=False：缺少凭证时由本模块统一返回 401
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """已校验的请求身份"""
    id: int
    username: str


def unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_password_hash(password: str) -> str:
    """密码哈希"""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """验证密码"""
    try:
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))
    except ValueError:
        # 存储的哈希格式非法
        return False


def create_access_token(user_id: int, username: str,
                        secret_key: Optional[str] = None,
                        algorithm: Optional[str] = None,
                        expires_delta: Optional[timedelta] = None,
                        now: Optional[datetime] = None) -> str:
    """创建 JWT token，载荷包含用户 id 与用户名"""
    secret_key = secret_key or default_settings.SECRET_KEY
    algorithm = algorithm or default_settings.ALGORITHM
    if expires_delta is None:
        expires_delta = timedelta(hours=default_settings.ACCESS_TOKEN_EXPIRE_HOURS)
    issued_at = now or datetime.now(UTC)

    to_encode = {
        "sub": str(user_id),
        "username": username,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + expires_delta).timestamp()),
    }
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_token(token: str,
                 secret_key: Optional[str] = None,
                 algorithm: Optional[str] = None,
                 now: Optional[datetime] = None) -> CurrentUser:
    """校验 JWT token 并返回身份；任何失败都抛出统一的 401"""
    secret_key = secret_key or default_settings.SECRET_KEY
    algorithm = algorithm or default_settings.ALGORITHM
    try:
        # 过期时间按传入的 now 校验
        payload = jwt.decode(token, secret_key, algorithms=[algorithm],
                             options={"verify_exp": False})
    except JWTError as e:
        logger.debug(f"Token rejected: {e}")
        raise unauthorized()

    exp = payload.get("exp")
    current = (now or datetime.now(UTC)).timestamp()
    if not isinstance(exp, (int, float)) or current >= exp:
        logger.debug("Token expired")
        raise unauthorized()

    try:
        return CurrentUser(id=int(payload["sub"]), username=str(payload["username"]))
    except (KeyError, TypeError, ValueError):
        raise unauthorized()


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """获取当前登录用户（仅凭令牌，不回查用户表）"""
    if credentials is None or not credentials.credentials:
        raise unauthorized()

    app_settings = getattr(request.app.state, "settings", default_settings)
    return decode_token(
        credentials.credentials,
        secret_key=app_settings.SECRET_KEY,
        algorithm=app_settings.ALGORITHM,
    )
