"""
酒店后台主应用入口
create_app(settings) 构造应用并持有 Database 句柄
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from backoffice import __version__
from backoffice.config import Settings, configure_logging, settings as default_settings
from backoffice.database import Database
from backoffice.errors import register_exception_handlers
from backoffice.routers import auth, hotels, room_types

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None,
               database: Optional[Database] = None) -> FastAPI:
    """构造应用；测试可传入独立的设置与数据库"""
    app_settings = app_settings or default_settings
    owns_database = database is None
    if owns_database:
        database = Database.from_settings(app_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """应用生命周期：启动时建表，关闭时释放自建的连接池"""
        database.create_all()
        logger.info(f"{app_settings.APP_NAME} started ({database.engine.dialect.name})")
        yield
        if owns_database:
            database.dispose()

    app = FastAPI(
        title=app_settings.APP_NAME,
        description="酒店、房型与调价管理后台 API",
        version=__version__,
        debug=app_settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.database = database
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # 注册路由
    app.include_router(auth.router, prefix="/api")
    app.include_router(hotels.router, prefix="/api")
    app.include_router(room_types.router, prefix="/api")

    @app.get("/health")
    def health_check():
        """健康检查"""
        return {"ok": True, "uptime": round(time.monotonic() - app.state.started_at, 3)}

    return app


configure_logging(default_settings.LOG_LEVEL)
app = create_app()
