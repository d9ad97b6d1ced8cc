"""테스트 설정

앱 import 전에 DB URL을 인메모리 SQLite로 고정하고, 테스트마다
스키마를 새로 만든 엔진/세션을 사용합니다.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("AUTO_MIGRATE", "false")

from datetime import date, datetime, timedelta  # noqa: E402
from typing import Iterable, Optional  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.config import settings  # noqa: E402
from app.core.database import Base, get_db  # noqa: E402
from app.core.utils.datetime import UTC  # noqa: E402
from app.domains.issues.models import (  # noqa: E402
    Assignee,
    Issue,
    IssueComment,
    IssueLabel,
    Mention,
    ResourceType,
    State,
)
from app.domains.milestones.models import Milestone  # noqa: E402
from app.domains.projects.models import (  # noqa: E402
    Organization,
    OrganizationRole,
    OrganizationUser,
    Project,
    ProjectScope,
    ProjectUser,
)
from app.domains.users.models import User  # noqa: E402
from app.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def db_engine():
    """테스트마다 새로 만드는 인메모리 DB 엔진"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """테스트 데이터베이스 세션"""
    async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


# NOTE:
# pytest-asyncio는 테스트마다 독립적인 event loop를 만들기 때문에
# async fixture는 모두 function 스코프로 유지합니다.
@pytest_asyncio.fixture
async def client(db_session):
    """비동기 테스트 클라이언트 (테스트 세션 공유)"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def anyio_backend():
    """anyio 백엔드 설정"""
    return "asyncio"


@pytest.fixture
def api_key_header():
    """Internal API Key 헤더"""
    return {"X-Internal-Api-Key": settings.internal_api_key}


class DataFactory:
    """테스트 데이터 생성기

    서비스 계층을 거치지 않고 세션에 직접 저장합니다.
    (카운터 등 서비스 동작을 검증할 때는 서비스를 사용)
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self._sequence = 0

    def _next(self) -> int:
        self._sequence += 1
        return self._sequence

    async def _save(self, entity):
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def user(self, login_id: Optional[str] = None) -> User:
        login_id = login_id or f"user{self._next()}"
        return await self._save(User(login_id=login_id, name=login_id.title()))

    async def organization(self, name: Optional[str] = None) -> Organization:
        return await self._save(Organization(name=name or f"org{self._next()}"))

    async def project(
        self,
        name: Optional[str] = None,
        organization: Optional[Organization] = None,
        scope: ProjectScope = ProjectScope.PUBLIC,
    ) -> Project:
        return await self._save(
            Project(
                name=name or f"project{self._next()}",
                organization_id=organization.id if organization else None,
                project_scope=scope.value,
            )
        )

    async def org_member(
        self,
        organization: Organization,
        user: User,
        role: OrganizationRole = OrganizationRole.MEMBER,
    ) -> OrganizationUser:
        return await self._save(
            OrganizationUser(
                organization_id=organization.id, user_id=user.id, role=role.value
            )
        )

    async def project_member(self, project: Project, user: User) -> ProjectUser:
        return await self._save(ProjectUser(project_id=project.id, user_id=user.id))

    async def milestone(
        self,
        project: Project,
        title: Optional[str] = None,
        due_date: Optional[date] = None,
        **counters: int,
    ) -> Milestone:
        return await self._save(
            Milestone(
                project_id=project.id,
                title=title or f"milestone{self._next()}",
                contents="",
                due_date=due_date or date(2026, 12, 31),
                **counters,
            )
        )

    async def assignee(self, user: User, project: Project) -> Assignee:
        return await self._save(Assignee(user_id=user.id, project_id=project.id))

    async def label(self, project: Project, name: Optional[str] = None) -> IssueLabel:
        return await self._save(
            IssueLabel(project_id=project.id, name=name or f"label{self._next()}")
        )

    async def issue(
        self,
        project: Project,
        title: Optional[str] = None,
        body: str = "",
        state: State = State.OPEN,
        author: Optional[User] = None,
        assignee: Optional[Assignee] = None,
        milestone: Optional[Milestone] = None,
        labels: Iterable[IssueLabel] = (),
        due_date: Optional[datetime] = None,
        num_of_comments: int = 0,
        created_offset_days: int = 0,
    ) -> Issue:
        """이슈 생성 (created_offset_days로 생성 시각을 하루 단위로 조정)"""
        issue = Issue(
            project_id=project.id,
            title=title or f"issue{self._next()}",
            body=body,
            state=state.value,
            author_id=author.id if author else None,
            assignee_id=assignee.id if assignee else None,
            milestone_id=milestone.id if milestone else None,
            due_date=due_date,
            num_of_comments=num_of_comments,
            created_date=datetime(2026, 1, 1, tzinfo=UTC)
            + timedelta(days=created_offset_days),
        )
        issue.labels = list(labels)
        return await self._save(issue)

    async def comment(
        self, issue: Issue, author: Optional[User] = None, contents: str = "comment"
    ) -> IssueComment:
        return await self._save(
            IssueComment(
                issue_id=issue.id,
                author_id=author.id if author else None,
                contents=contents,
            )
        )

    async def mention(
        self, user: User, resource_type: ResourceType, resource_id
    ) -> Mention:
        return await self._save(
            Mention(
                resource_type=resource_type.value,
                resource_id=str(resource_id),
                user_id=user.id,
            )
        )


@pytest.fixture
def factory(db_session) -> DataFactory:
    """테스트 데이터 생성기"""
    return DataFactory(db_session)
