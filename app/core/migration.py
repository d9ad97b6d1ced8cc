"""Alembic 마이그레이션 자동 실행

서버 시작 시 DB 리비전을 확인하고, ``auto_migrate`` 설정에 따라
``head``까지 업그레이드합니다.
"""

from pathlib import Path
from typing import Optional, TypedDict

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]

# async 드라이버 → alembic이 쓰는 sync 드라이버
SYNC_DRIVERS = {
    "postgresql+asyncpg": "postgresql+psycopg2",
    "sqlite+aiosqlite": "sqlite",
}


class MigrationStatus(TypedDict):
    current: Optional[str]
    head: Optional[str]
    is_up_to_date: bool


def sync_database_url(database_url: str) -> str:
    """async DB URL을 sync URL로 변환"""
    for async_driver, sync_driver in SYNC_DRIVERS.items():
        if database_url.startswith(f"{async_driver}://"):
            return sync_driver + database_url[len(async_driver):]
    return database_url


def get_alembic_config() -> Config:
    """프로젝트 루트의 alembic.ini 기반 설정"""
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    config.set_main_option("sqlalchemy.url", sync_database_url(settings.database_url))
    return config


def get_current_revision() -> Optional[str]:
    """DB에 기록된 리비전 (조회 실패 시 None)"""
    engine = create_engine(sync_database_url(settings.database_url))
    try:
        with engine.connect() as conn:
            revision = MigrationContext.configure(conn).get_current_revision()
            return str(revision) if revision else None
    except SQLAlchemyError as e:
        logger.warning(f"Failed to read current migration revision: {e}")
        return None
    finally:
        engine.dispose()


def get_head_revision() -> Optional[str]:
    """스크립트 디렉터리의 최신 리비전"""
    script = ScriptDirectory.from_config(get_alembic_config())
    head = script.get_current_head()
    return str(head) if head else None


def check_migration_status() -> MigrationStatus:
    current = get_current_revision()
    head = get_head_revision()
    return MigrationStatus(current=current, head=head, is_up_to_date=current == head)


def run_migrations() -> bool:
    """head까지 업그레이드

    Returns:
        성공 여부
    """
    status = check_migration_status()
    if status["is_up_to_date"]:
        logger.info(f"Migrations up to date (revision: {status['current']})")
        return True

    logger.info(f"Upgrading database: {status['current']} -> {status['head']}")
    try:
        command.upgrade(get_alembic_config(), "head")
    except SQLAlchemyError:
        logger.exception("Migration failed")
        return False

    logger.info(f"Migration complete (revision: {status['head']})")
    return True


def run_migrations_on_startup(auto_migrate: bool = True) -> None:
    """서버 시작 시 리비전 확인 (auto_migrate면 업그레이드까지)

    운영 환경에서 확인 자체가 실패하면 서버를 띄우지 않습니다.
    """
    try:
        status = check_migration_status()
    except Exception as e:
        logger.error(f"Failed to check migration status: {e}")
        if settings.is_production:
            raise RuntimeError("프로덕션 환경에서 마이그레이션 확인에 실패했습니다.") from e
        logger.warning("Continuing startup without migration check")
        return

    if status["is_up_to_date"]:
        logger.info(f"Migrations up to date (revision: {status['current']})")
        return

    logger.warning(
        f"Database is behind (current: {status['current']}, head: {status['head']})"
    )
    if auto_migrate:
        run_migrations()
