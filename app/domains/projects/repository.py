"""Projects 도메인 리포지토리

조직/프로젝트 조회와 사용자별 프로젝트 가시성 계산을 담당합니다.
"""

from typing import Optional, Sequence, cast

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.projects.models import (
    Organization,
    OrganizationRole,
    OrganizationUser,
    Project,
    ProjectScope,
    ProjectUser,
)
from app.domains.users.models import User


class ProjectRepository:
    """프로젝트/조직 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_project(self, project_id: int) -> Optional[Project]:
        """ID로 프로젝트 조회"""
        result = await self.session.execute(
            select(Project).where(Project.id == project_id)
        )
        return cast(Optional[Project], result.scalar_one_or_none())

    async def get_organization(
        self, organization_id: int
    ) -> Optional[Organization]:
        """ID로 조직 조회"""
        result = await self.session.execute(
            select(Organization).where(Organization.id == organization_id)
        )
        return cast(Optional[Organization], result.scalar_one_or_none())

    async def get_organization_by_name(self, name: str) -> Optional[Organization]:
        """이름으로 조직 조회"""
        result = await self.session.execute(
            select(Organization).where(Organization.name == name)
        )
        return cast(Optional[Organization], result.scalar_one_or_none())

    async def get_organization_role(
        self, organization_id: int, user_id: int
    ) -> Optional[OrganizationRole]:
        """조직 내 사용자 역할 (멤버가 아니면 None)"""
        result = await self.session.execute(
            select(OrganizationUser.role).where(
                and_(
                    OrganizationUser.organization_id == organization_id,
                    OrganizationUser.user_id == user_id,
                )
            )
        )
        role = result.scalar_one_or_none()
        return OrganizationRole(role) if role else None

    async def is_project_member(self, project_id: int, user_id: int) -> bool:
        """프로젝트 멤버 여부"""
        result = await self.session.execute(
            select(ProjectUser.id).where(
                and_(
                    ProjectUser.project_id == project_id,
                    ProjectUser.user_id == user_id,
                )
            )
        )
        return result.first() is not None

    async def get_visible_projects(
        self, organization: Organization, user: User
    ) -> Sequence[Project]:
        """사용자가 볼 수 있는 조직 프로젝트 목록

        - 조직 관리자: 전체
        - 조직 멤버: 비공개가 아닌 프로젝트 + 소속된 비공개 프로젝트
        - 그 외(익명 포함): 공개 프로젝트 + 소속된 프로젝트

        Args:
            organization: 조직
            user: 현재 사용자 (익명 가능)

        Returns:
            프로젝트 목록 (ID 오름차순)
        """
        query = select(Project).where(
            Project.organization_id == organization.id
        )

        if user.is_anonymous:
            query = query.where(
                Project.project_scope == ProjectScope.PUBLIC.value
            )
        else:
            role = await self.get_organization_role(organization.id, user.id)
            member_of = select(ProjectUser.project_id).where(
                ProjectUser.user_id == user.id
            )
            if role == OrganizationRole.MEMBER:
                query = query.where(
                    or_(
                        Project.project_scope != ProjectScope.PRIVATE.value,
                        Project.id.in_(member_of),
                    )
                )
            elif role != OrganizationRole.ADMIN:
                query = query.where(
                    or_(
                        Project.project_scope == ProjectScope.PUBLIC.value,
                        Project.id.in_(member_of),
                    )
                )

        result = await self.session.execute(query.order_by(Project.id))
        return cast(Sequence[Project], result.scalars().all())

    async def create_organization(self, organization: Organization) -> Organization:
        """조직 생성"""
        self.session.add(organization)
        await self.session.flush()
        await self.session.refresh(organization)
        return organization

    async def create_project(self, project: Project) -> Project:
        """프로젝트 생성"""
        self.session.add(project)
        await self.session.flush()
        await self.session.refresh(project)
        return project

    async def add_organization_member(
        self, membership: OrganizationUser
    ) -> OrganizationUser:
        """조직 멤버 추가"""
        self.session.add(membership)
        await self.session.flush()
        return membership

    async def add_project_member(self, membership: ProjectUser) -> ProjectUser:
        """프로젝트 멤버 추가"""
        self.session.add(membership)
        await self.session.flush()
        return membership
