"""Issues 도메인 라우터

- ``/projects/{project_id}/issues``, ``/projects/{project_id}/labels``
- ``/issues``
- ``/organizations/{organization_id}/issues``
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import verify_internal_api_key
from app.core.schemas import (
    APIResponse,
    ListAPIResponse,
    create_list_response,
    create_response,
)
from app.core.utils.pagination import PageParams
from app.domains.issues.schemas import (
    CommentCreate,
    CommentResponse,
    IssueCreate,
    IssueResponse,
    IssueSearchParams,
    IssueStateChange,
    IssueUpdate,
    LabelCreate,
    LabelResponse,
)
from app.domains.issues.service import IssueLabelService, IssueService
from app.domains.users.models import User
from app.domains.users.router import get_current_user

router = APIRouter(dependencies=[Depends(verify_internal_api_key)])
project_router = APIRouter(dependencies=[Depends(verify_internal_api_key)])
organization_router = APIRouter(dependencies=[Depends(verify_internal_api_key)])


def get_issue_service(session: AsyncSession = Depends(get_db)) -> IssueService:
    """IssueService 의존성"""
    return IssueService(session)


def get_label_service(session: AsyncSession = Depends(get_db)) -> IssueLabelService:
    """IssueLabelService 의존성"""
    return IssueLabelService(session)


# 프로젝트 이슈


@project_router.get(
    "/{project_id}/issues", response_model=ListAPIResponse[IssueResponse]
)
async def search_project_issues(
    project_id: int,
    search: IssueSearchParams = Depends(),
    page_params: PageParams = Depends(),
    service: IssueService = Depends(get_issue_service),
):
    """프로젝트 이슈 검색"""
    issues, total = await service.search_project_issues(
        project_id, search.to_condition(page_params.page), size=page_params.size
    )
    return create_list_response(
        data=[IssueResponse.model_validate(issue) for issue in issues],
        total=total,
        page=page_params.page,
        size=page_params.size,
    )


@project_router.post(
    "/{project_id}/issues",
    response_model=APIResponse[IssueResponse],
    status_code=201,
)
async def create_issue(
    project_id: int,
    data: IssueCreate,
    current_user: User = Depends(get_current_user),
    service: IssueService = Depends(get_issue_service),
):
    """이슈 생성"""
    issue = await service.create_issue(project_id, data, current_user)
    return create_response(
        data=IssueResponse.model_validate(issue),
        message="이슈가 생성되었습니다.",
    )


@project_router.get(
    "/{project_id}/labels", response_model=APIResponse[list[LabelResponse]]
)
async def list_labels(
    project_id: int,
    service: IssueLabelService = Depends(get_label_service),
):
    """프로젝트 라벨 목록"""
    labels = await service.list_labels(project_id)
    return create_response(
        data=[LabelResponse.model_validate(label) for label in labels]
    )


@project_router.post(
    "/{project_id}/labels",
    response_model=APIResponse[LabelResponse],
    status_code=201,
)
async def create_label(
    project_id: int,
    data: LabelCreate,
    service: IssueLabelService = Depends(get_label_service),
):
    """라벨 생성"""
    label = await service.create_label(project_id, data)
    return create_response(
        data=LabelResponse.model_validate(label),
        message="라벨이 생성되었습니다.",
    )


# 조직 이슈


@organization_router.get(
    "/{organization_id}/issues", response_model=ListAPIResponse[IssueResponse]
)
async def search_organization_issues(
    organization_id: int,
    search: IssueSearchParams = Depends(),
    page_params: PageParams = Depends(),
    current_user: User = Depends(get_current_user),
    service: IssueService = Depends(get_issue_service),
):
    """조직 이슈 검색 (요청자가 볼 수 있는 프로젝트만)"""
    issues, total = await service.search_organization_issues(
        organization_id,
        search.to_condition(page_params.page),
        current_user,
        size=page_params.size,
    )
    return create_list_response(
        data=[IssueResponse.model_validate(issue) for issue in issues],
        total=total,
        page=page_params.page,
        size=page_params.size,
    )


# 이슈


@router.get("", response_model=ListAPIResponse[IssueResponse])
async def search_issues(
    search: IssueSearchParams = Depends(),
    page_params: PageParams = Depends(),
    service: IssueService = Depends(get_issue_service),
):
    """전체 이슈 검색"""
    issues, total = await service.search_issues(
        search.to_condition(page_params.page), size=page_params.size
    )
    return create_list_response(
        data=[IssueResponse.model_validate(issue) for issue in issues],
        total=total,
        page=page_params.page,
        size=page_params.size,
    )


@router.get("/{issue_id}", response_model=APIResponse[IssueResponse])
async def get_issue(
    issue_id: int,
    service: IssueService = Depends(get_issue_service),
):
    """이슈 상세 조회"""
    issue = await service.get_issue(issue_id)
    return create_response(
        data=IssueResponse.model_validate(issue),
        message="이슈를 조회했습니다.",
    )


@router.patch("/{issue_id}", response_model=APIResponse[IssueResponse])
async def update_issue(
    issue_id: int,
    data: IssueUpdate,
    service: IssueService = Depends(get_issue_service),
):
    """이슈 수정"""
    issue = await service.update_issue(issue_id, data)
    return create_response(
        data=IssueResponse.model_validate(issue),
        message="이슈가 수정되었습니다.",
    )


@router.delete("/{issue_id}", response_model=APIResponse[None])
async def delete_issue(
    issue_id: int,
    service: IssueService = Depends(get_issue_service),
):
    """이슈 삭제"""
    await service.delete_issue(issue_id)
    return create_response(message="이슈가 삭제되었습니다.")


@router.post("/{issue_id}/state", response_model=APIResponse[IssueResponse])
async def change_issue_state(
    issue_id: int,
    data: IssueStateChange,
    service: IssueService = Depends(get_issue_service),
):
    """이슈 열기/닫기"""
    issue = await service.change_state(issue_id, data.state)
    return create_response(
        data=IssueResponse.model_validate(issue),
        message="이슈 상태가 변경되었습니다.",
    )


@router.post(
    "/{issue_id}/comments",
    response_model=APIResponse[CommentResponse],
    status_code=201,
)
async def add_comment(
    issue_id: int,
    data: CommentCreate,
    current_user: User = Depends(get_current_user),
    service: IssueService = Depends(get_issue_service),
):
    """댓글 작성"""
    comment = await service.add_comment(issue_id, data, current_user)
    return create_response(
        data=CommentResponse.model_validate(comment),
        message="댓글이 작성되었습니다.",
    )
