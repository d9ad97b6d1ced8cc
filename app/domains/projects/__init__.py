"""Projects 도메인 모듈

조직, 프로젝트, 멤버십과 프로젝트 가시성 계산을 담당합니다.
"""

from app.domains.projects.exceptions import (
    AlreadyMemberException,
    OrganizationNotFoundException,
    ProjectErrorCode,
    ProjectNotFoundException,
)
from app.domains.projects.models import (
    Organization,
    OrganizationRole,
    OrganizationUser,
    Project,
    ProjectScope,
    ProjectUser,
)

__all__ = [
    "Organization",
    "OrganizationRole",
    "OrganizationUser",
    "Project",
    "ProjectScope",
    "ProjectUser",
    "ProjectErrorCode",
    "ProjectNotFoundException",
    "OrganizationNotFoundException",
    "AlreadyMemberException",
]
