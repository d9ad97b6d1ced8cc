"""Milestones 도메인 라우터

``/projects/{project_id}/milestones`` 하위에 등록됩니다.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import verify_internal_api_key
from app.core.schemas import APIResponse, create_response
from app.domains.milestones.schemas import (
    MilestoneCreate,
    MilestoneListParams,
    MilestoneResponse,
    MilestoneUpdate,
)
from app.domains.milestones.service import MilestoneService

router = APIRouter(dependencies=[Depends(verify_internal_api_key)])


def get_milestone_service(
    session: AsyncSession = Depends(get_db),
) -> MilestoneService:
    """MilestoneService 의존성"""
    return MilestoneService(session)


@router.get("", response_model=APIResponse[list[MilestoneResponse]])
async def list_milestones(
    project_id: int,
    params: MilestoneListParams = Depends(),
    service: MilestoneService = Depends(get_milestone_service),
):
    """마일스톤 목록 (state/sort/direction)"""
    milestones = await service.find_milestones(
        project_id, params.state, params.sort, params.direction
    )
    return create_response(
        data=[MilestoneResponse.model_validate(m) for m in milestones],
        message=f"{len(milestones)}개의 마일스톤을 조회했습니다.",
    )


@router.post("", response_model=APIResponse[MilestoneResponse], status_code=201)
async def create_milestone(
    project_id: int,
    data: MilestoneCreate,
    service: MilestoneService = Depends(get_milestone_service),
):
    """마일스톤 생성"""
    milestone = await service.create(project_id, data)
    return create_response(
        data=MilestoneResponse.model_validate(milestone),
        message="마일스톤이 생성되었습니다.",
    )


@router.get("/options", response_model=APIResponse[dict[str, str]])
async def milestone_options(
    project_id: int,
    service: MilestoneService = Depends(get_milestone_service),
):
    """선택 목록용 마일스톤 ID → 제목"""
    options = await service.options(project_id)
    return create_response(data=options)


@router.get("/{milestone_id}", response_model=APIResponse[MilestoneResponse])
async def get_milestone(
    project_id: int,
    milestone_id: int,
    service: MilestoneService = Depends(get_milestone_service),
):
    """마일스톤 상세 조회"""
    milestone = await service.get_milestone(milestone_id, project_id)
    return create_response(
        data=MilestoneResponse.model_validate(milestone),
        message="마일스톤을 조회했습니다.",
    )


@router.put("/{milestone_id}", response_model=APIResponse[MilestoneResponse])
async def update_milestone(
    project_id: int,
    milestone_id: int,
    data: MilestoneUpdate,
    service: MilestoneService = Depends(get_milestone_service),
):
    """마일스톤 수정"""
    milestone = await service.update(milestone_id, data, project_id)
    return create_response(
        data=MilestoneResponse.model_validate(milestone),
        message="마일스톤이 수정되었습니다.",
    )


@router.delete("/{milestone_id}", response_model=APIResponse[None], status_code=200)
async def delete_milestone(
    project_id: int,
    milestone_id: int,
    service: MilestoneService = Depends(get_milestone_service),
):
    """마일스톤 삭제 (연결된 이슈는 마일스톤 없음으로 변경)"""
    await service.delete(milestone_id, project_id)
    return create_response(message="마일스톤이 삭제되었습니다.")
