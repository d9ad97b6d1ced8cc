"""Issue Board API 진입점

``uvicorn app.main:app``으로 실행합니다.
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import api_router as api_v1_router
from app.core.config import settings
from app.core.database import close_db
from app.core.exceptions import register_exception_handlers
from app.core.logging import get_logger, setup_logging
from app.core.middlewares import LoggingMiddleware
from app.core.migration import run_migrations_on_startup
from app.core.schemas import APIResponse

setup_logging()
logger = get_logger(__name__)

health_router = APIRouter(tags=["Health"])


@health_router.get("/health", response_model=APIResponse[dict[str, Any]])
async def health_check():
    """헬스 체크 (인증 불필요, 로깅 제외)"""
    return APIResponse(
        message="OK",
        data={
            "status": "healthy",
            "app_name": settings.app_name,
            "environment": settings.app_env,
        },
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """시작 시 마이그레이션 확인, 종료 시 커넥션 풀 정리"""
    logger.info(f"Starting {settings.app_name} ({settings.app_env})")
    run_migrations_on_startup(auto_migrate=settings.auto_migrate)

    yield

    logger.info(f"Shutting down {settings.app_name}")
    await close_db()


def create_app() -> FastAPI:
    """FastAPI 애플리케이션 팩토리"""
    docs_enabled = settings.is_development
    app = FastAPI(
        title=settings.app_name,
        description="프로젝트 이슈, 마일스톤, 이슈 검색 API",
        version="0.1.0",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )

    # 나중에 등록한 미들웨어가 바깥쪽에서 먼저 실행됨
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(api_v1_router, prefix="/api/v1")
    return app


app = create_app()
