"""Projects 도메인 스키마 정의"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.domains.projects.models import OrganizationRole, ProjectScope


class OrganizationCreate(BaseModel):
    """조직 생성 요청"""

    name: str = Field(..., min_length=1, max_length=100, description="조직 이름")


class ProjectCreate(BaseModel):
    """프로젝트 생성 요청"""

    name: str = Field(..., min_length=1, max_length=100, description="프로젝트 이름")
    project_scope: ProjectScope = Field(
        ProjectScope.PUBLIC, description="공개 범위"
    )


class OrganizationMemberAdd(BaseModel):
    """조직 멤버 추가 요청"""

    user_id: int = Field(..., gt=0, description="사용자 ID")
    role: OrganizationRole = Field(OrganizationRole.MEMBER, description="역할")


class ProjectMemberAdd(BaseModel):
    """프로젝트 멤버 추가 요청"""

    user_id: int = Field(..., gt=0, description="사용자 ID")


class OrganizationResponse(BaseModel):
    """조직 응답"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime


class ProjectResponse(BaseModel):
    """프로젝트 응답"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    organization_id: Optional[int] = None
    project_scope: ProjectScope
    created_at: datetime
