"""
统一错误响应
所有错误响应体均为 {"error": "<message>"}
  - HTTPException       → 原状态码
  - 请求校验失败          → 400，"字段: 信息; 字段: 信息"
  - 未预期异常            → 500，记录日志
"""
import logging
from typing import Any, Dict, Iterable
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = ("body", "query", "path", "header", "cookie")


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> str:
    """把校验错误拼接为 "name: message; base_rate: message" """
    parts = []
    for error in errors:
        loc = list(error.get("loc", ()))
        if len(loc) > 1 and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = ".".join(str(p) for p in loc)
        message = error.get("msg", "Invalid value")
        parts.append(f"{field}: {message}" if field else message)
    return "; ".join(parts)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": format_validation_errors(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Unexpected error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
