"""
应用配置
从环境变量 / .env 读取配置
"""
import logging
from typing import List
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用设置"""

    # 应用基础配置
    APP_NAME: str = "Hotel Back Office"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # 数据库配置
    DATABASE_URL: str = "sqlite:///./backoffice.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 0

    # JWT 配置
    SECRET_KEY: str = "change_me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 12

    # CORS（逗号分隔）
    CORS_ORIGINS: str = "http://localhost:3000"

    model_config = ConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# 全局设置实例
settings = Settings()


def configure_logging(level: str = "INFO") -> None:
    """控制台日志"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
