"""전역 로깅 설정

개발 환경은 컬러 한 줄 로그, 그 외 환경은 로그 수집기용 JSON 한 줄 로그를 씁니다.
``extra``로 넘긴 컨텍스트 필드(요청 ID, 이슈/마일스톤 ID 등)는 두 포맷 모두에 붙습니다.
"""

import json
import logging
import sys
from typing import Any

from app.core.config import settings

CONTEXT_KEYS = (
    "request_id",
    "user_id",
    "organization_id",
    "project_id",
    "milestone_id",
    "issue_id",
)


def _context(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: getattr(record, key)
        for key in CONTEXT_KEYS
        if getattr(record, key, None) is not None
    }


class ColoredFormatter(logging.Formatter):
    """컬러 로그 포맷터 (개발 환경용)"""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        color = self.COLORS.get(levelname, self.RESET)
        record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            message = super().format(record)
        finally:
            record.levelname = levelname

        context = _context(record)
        if context:
            pairs = " ".join(f"{key}={value}" for key, value in context.items())
            message = f"{message} | {pairs}"
        return message


class JsonFormatter(logging.Formatter):
    """JSON 한 줄 포맷터 (운영 환경용)"""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging() -> None:
    """루트 로거에 환경별 포맷터를 붙이고 외부 라이브러리 레벨을 조정"""
    log_level = logging.DEBUG if settings.debug else logging.INFO

    formatter: logging.Formatter
    if settings.is_development:
        formatter = ColoredFormatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = JsonFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    noisy = {
        "uvicorn": logging.INFO,
        "uvicorn.access": logging.WARNING,
        "sqlalchemy.engine": logging.INFO if settings.database_echo else logging.WARNING,
        "alembic": logging.INFO,
        "aiosqlite": logging.WARNING,
    }
    for name, level in noisy.items():
        logging.getLogger(name).setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """로거 인스턴스 반환

    Example::

        logger = get_logger(__name__)
        logger.info("Milestone created", extra={"milestone_id": 1})
    """
    return logging.getLogger(name)
