"""Users 도메인 라우터"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import get_requester_id, verify_internal_api_key
from app.core.schemas import APIResponse, create_response
from app.domains.users.models import User
from app.domains.users.schemas import UserCreate, UserResponse
from app.domains.users.service import UserService

router = APIRouter()


def get_user_service(session: AsyncSession = Depends(get_db)) -> UserService:
    """UserService 의존성"""
    return UserService(session)


async def get_current_user(
    requester_id: Optional[int] = Depends(get_requester_id),
    service: UserService = Depends(get_user_service),
) -> User:
    """현재 요청 사용자 (없으면 익명)"""
    return await service.resolve_current_user(requester_id)


@router.post(
    "",
    response_model=APIResponse[UserResponse],
    status_code=201,
    dependencies=[Depends(verify_internal_api_key)],
)
async def create_user(
    data: UserCreate,
    service: UserService = Depends(get_user_service),
):
    """사용자 생성"""
    user = await service.create_user(data)
    return create_response(
        data=UserResponse.model_validate(user),
        message="사용자가 생성되었습니다.",
    )


@router.get(
    "/{user_id}",
    response_model=APIResponse[UserResponse],
    dependencies=[Depends(verify_internal_api_key)],
)
async def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
):
    """사용자 상세 조회"""
    user = await service.get_user(user_id)
    return create_response(
        data=UserResponse.model_validate(user),
        message="사용자 정보를 조회했습니다.",
    )
