"""Projects 도메인 서비스"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.core.middlewares.context import get_request_id
from app.domains.projects.exceptions import (
    AlreadyMemberException,
    OrganizationNameAlreadyExistsException,
    OrganizationNotFoundException,
    ProjectNotFoundException,
)
from app.domains.projects.models import (
    Organization,
    OrganizationUser,
    Project,
    ProjectUser,
)
from app.domains.projects.repository import ProjectRepository
from app.domains.projects.schemas import (
    OrganizationCreate,
    OrganizationMemberAdd,
    ProjectCreate,
    ProjectMemberAdd,
)
from app.domains.users.exceptions import UserNotFoundException
from app.domains.users.repository import UserRepository

logger = get_logger(__name__)


class ProjectService:
    """조직/프로젝트 서비스"""

    def __init__(self, session: AsyncSession):
        self.repository = ProjectRepository(session)
        self.user_repository = UserRepository(session)

    async def get_project(self, project_id: int) -> Project:
        """프로젝트 조회

        Raises:
            ProjectNotFoundException: 프로젝트가 없는 경우
        """
        project = await self.repository.get_project(project_id)
        if not project:
            raise ProjectNotFoundException(project_id=project_id)
        return project

    async def get_organization(self, organization_id: int) -> Organization:
        """조직 조회

        Raises:
            OrganizationNotFoundException: 조직이 없는 경우
        """
        organization = await self.repository.get_organization(organization_id)
        if not organization:
            raise OrganizationNotFoundException(organization_id=organization_id)
        return organization

    async def create_organization(self, data: OrganizationCreate) -> Organization:
        """조직 생성"""
        if await self.repository.get_organization_by_name(data.name):
            raise OrganizationNameAlreadyExistsException(name=data.name)

        organization = await self.repository.create_organization(
            Organization(name=data.name)
        )
        logger.info(
            "Organization created",
            extra={
                "request_id": get_request_id(),
                "organization_id": organization.id,
            },
        )
        return organization

    async def create_project(
        self, data: ProjectCreate, organization_id: Optional[int] = None
    ) -> Project:
        """프로젝트 생성 (조직 소속 또는 개인)"""
        if organization_id is not None:
            await self.get_organization(organization_id)

        project = await self.repository.create_project(
            Project(
                name=data.name,
                organization_id=organization_id,
                project_scope=data.project_scope.value,
            )
        )
        logger.info(
            "Project created",
            extra={
                "request_id": get_request_id(),
                "project_id": project.id,
                "organization_id": organization_id,
            },
        )
        return project

    async def add_organization_member(
        self, organization_id: int, data: OrganizationMemberAdd
    ) -> OrganizationUser:
        """조직 멤버 추가"""
        await self.get_organization(organization_id)
        if not await self.user_repository.get_by_id(data.user_id):
            raise UserNotFoundException(user_id=data.user_id)
        if await self.repository.get_organization_role(
            organization_id, data.user_id
        ):
            raise AlreadyMemberException(user_id=data.user_id)

        return await self.repository.add_organization_member(
            OrganizationUser(
                organization_id=organization_id,
                user_id=data.user_id,
                role=data.role.value,
            )
        )

    async def add_project_member(
        self, project_id: int, data: ProjectMemberAdd
    ) -> ProjectUser:
        """프로젝트 멤버 추가"""
        await self.get_project(project_id)
        if not await self.user_repository.get_by_id(data.user_id):
            raise UserNotFoundException(user_id=data.user_id)
        if await self.repository.is_project_member(project_id, data.user_id):
            raise AlreadyMemberException(user_id=data.user_id)

        return await self.repository.add_project_member(
            ProjectUser(project_id=project_id, user_id=data.user_id)
        )
