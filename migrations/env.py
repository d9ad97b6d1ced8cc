"""Alembic 환경

DB URL은 alembic.ini가 아니라 앱 설정(``DATABASE_URL``)에서 가져오며,
async 드라이버는 sync 드라이버로 바꿔서 사용합니다.
alembic.ini의 ``prepend_sys_path = .`` 덕분에 ``app`` 패키지를 import할 수 있습니다.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

import app.domains.issues.models  # noqa: F401
import app.domains.milestones.models  # noqa: F401
import app.domains.projects.models  # noqa: F401
import app.domains.users.models  # noqa: F401
from app.core.config import settings
from app.core.database import Base
from app.core.migration import sync_database_url

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

url = sync_database_url(settings.database_url)
config.set_main_option("sqlalchemy.url", url)


def run_offline() -> None:
    """DB 연결 없이 SQL만 출력"""
    context.configure(
        url=url,
        target_metadata=Base.metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    engine = create_engine(url, poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=Base.metadata,
                # SQLite ALTER 제약
                render_as_batch=connection.dialect.name == "sqlite",
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
