"""요청/응답 로깅 미들웨어"""

import logging
from typing import Callable, cast

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging import get_logger
from app.core.middlewares.context import set_request_id
from app.core.utils.time import measure_time

logger = get_logger(__name__)

# 로깅 제외 경로
EXCLUDE_PATHS = {"/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico"}


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class LoggingMiddleware(BaseHTTPMiddleware):
    """요청 ID 부여, 처리 시간 측정, 요청/응답 로깅

    응답에 ``X-Request-ID``와 ``X-Process-Time`` 헤더를 붙입니다.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        if request.url.path in EXCLUDE_PATHS:
            return cast(Response, await call_next(request))

        request_id = set_request_id(request.headers.get("X-Request-ID"))
        requester = request.headers.get("X-User-Id") or "anonymous"
        target = f"{request.method} {request.url.path}"
        if request.url.query:
            target = f"{target}?{request.url.query}"

        logger.info(f"[{request_id}] → {target} | User: {requester}")

        with measure_time() as timer:
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    f"[{request_id}] ✗ {target} | Error: {type(e).__name__}: {e} "
                    f"| Time: {timer.elapsed_ms:.2f}ms"
                )
                raise

        elapsed = f"{timer.elapsed_ms:.2f}ms"
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = elapsed

        mark = "✓" if response.status_code < 400 else "✗"
        logger.log(
            _level_for(response.status_code),
            f"[{request_id}] {mark} {target} | Status: {response.status_code} "
            f"| Time: {elapsed}",
        )
        return cast(Response, response)
