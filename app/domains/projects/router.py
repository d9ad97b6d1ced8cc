"""Projects 도메인 라우터

조직/프로젝트 생성과 멤버 등록 엔드포인트입니다.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import verify_internal_api_key
from app.core.schemas import APIResponse, create_response
from app.domains.projects.schemas import (
    OrganizationCreate,
    OrganizationMemberAdd,
    OrganizationResponse,
    ProjectCreate,
    ProjectMemberAdd,
    ProjectResponse,
)
from app.domains.projects.service import ProjectService

router = APIRouter(dependencies=[Depends(verify_internal_api_key)])
organization_router = APIRouter(dependencies=[Depends(verify_internal_api_key)])


def get_project_service(session: AsyncSession = Depends(get_db)) -> ProjectService:
    """ProjectService 의존성"""
    return ProjectService(session)


@organization_router.post(
    "",
    response_model=APIResponse[OrganizationResponse],
    status_code=201,
)
async def create_organization(
    data: OrganizationCreate,
    service: ProjectService = Depends(get_project_service),
):
    """조직 생성"""
    organization = await service.create_organization(data)
    return create_response(
        data=OrganizationResponse.model_validate(organization),
        message="조직이 생성되었습니다.",
    )


@organization_router.post(
    "/{organization_id}/members",
    response_model=APIResponse[dict],
    status_code=201,
)
async def add_organization_member(
    organization_id: int,
    data: OrganizationMemberAdd,
    service: ProjectService = Depends(get_project_service),
):
    """조직 멤버 추가"""
    membership = await service.add_organization_member(organization_id, data)
    return create_response(
        data={
            "organization_id": membership.organization_id,
            "user_id": membership.user_id,
            "role": membership.role,
        },
        message="조직 멤버가 추가되었습니다.",
    )


@organization_router.post(
    "/{organization_id}/projects",
    response_model=APIResponse[ProjectResponse],
    status_code=201,
)
async def create_organization_project(
    organization_id: int,
    data: ProjectCreate,
    service: ProjectService = Depends(get_project_service),
):
    """조직 프로젝트 생성"""
    project = await service.create_project(data, organization_id=organization_id)
    return create_response(
        data=ProjectResponse.model_validate(project),
        message="프로젝트가 생성되었습니다.",
    )


@router.post(
    "",
    response_model=APIResponse[ProjectResponse],
    status_code=201,
)
async def create_project(
    data: ProjectCreate,
    service: ProjectService = Depends(get_project_service),
):
    """개인 프로젝트 생성"""
    project = await service.create_project(data)
    return create_response(
        data=ProjectResponse.model_validate(project),
        message="프로젝트가 생성되었습니다.",
    )


@router.post(
    "/{project_id}/members",
    response_model=APIResponse[dict],
    status_code=201,
)
async def add_project_member(
    project_id: int,
    data: ProjectMemberAdd,
    service: ProjectService = Depends(get_project_service),
):
    """프로젝트 멤버 추가"""
    membership = await service.add_project_member(project_id, data)
    return create_response(
        data={"project_id": membership.project_id, "user_id": membership.user_id},
        message="프로젝트 멤버가 추가되었습니다.",
    )


@organization_router.get(
    "/{organization_id}", response_model=APIResponse[OrganizationResponse]
)
async def get_organization(
    organization_id: int,
    service: ProjectService = Depends(get_project_service),
):
    """조직 조회"""
    organization = await service.get_organization(organization_id)
    return create_response(data=OrganizationResponse.model_validate(organization))


@router.get("/{project_id}", response_model=APIResponse[ProjectResponse])
async def get_project(
    project_id: int,
    service: ProjectService = Depends(get_project_service),
):
    """프로젝트 조회"""
    project = await service.get_project(project_id)
    return create_response(data=ProjectResponse.model_validate(project))
