"""미들웨어 모듈"""

from app.core.middlewares.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
