"""
数据库配置 - 关系型持久化层
由应用显式构造 Database 句柄（有界连接池），随进程生命周期持有
"""
from typing import Iterator, Optional
from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite 默认不执行外键约束，级联删除依赖它
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str, pool_size: int = 10, max_overflow: int = 0,
                     poolclass=None) -> Engine:
    """创建引擎；SQLite 连接自动开启外键"""
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    if poolclass is not None:
        kwargs["poolclass"] = poolclass
    elif ":memory:" in url or url == "sqlite://":
        # 内存库只存在于单个连接上，所有会话共用它
        kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_size"] = pool_size
        kwargs["max_overflow"] = max_overflow

    engine = create_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class Database:
    """存储句柄：引擎 + 会话工厂"""

    def __init__(self, url: str, pool_size: int = 10, max_overflow: int = 0,
                 poolclass=None):
        self.url = url
        self.engine = create_db_engine(url, pool_size, max_overflow, poolclass)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )

    def create_all(self) -> None:
        """初始化数据库表（幂等）"""
        from backoffice.models import entities  # noqa
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """依赖注入：从应用持有的 Database 获取会话"""
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database is not initialised on the application")
    db = database.session()
    try:
        yield db
    finally:
        db.close()
