"""공통 의존성 함수 정의"""

from typing import Optional

from fastapi import Header

from app.core.config import settings
from app.core.exceptions import BadRequestException, ErrorCode, UnauthorizedException


async def verify_internal_api_key(
    x_internal_api_key: str = Header(..., alias="X-Internal-Api-Key")
) -> None:
    """내부 API Key 검증 (게이트웨이 서버 통신용)

    Raises:
        UnauthorizedException: API Key가 유효하지 않은 경우
    """
    if x_internal_api_key != settings.internal_api_key:
        raise UnauthorizedException(
            message="유효하지 않은 API 키입니다.",
            error_code=ErrorCode.INVALID_API_KEY,
        )


async def get_requester_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id")
) -> Optional[int]:
    """요청자 ID 헤더 파싱

    헤더가 없으면 None(익명)을 반환합니다. 숫자가 아니면 400입니다.
    """
    if x_user_id is None or not x_user_id.strip():
        return None
    try:
        return int(x_user_id)
    except ValueError as e:
        raise BadRequestException(
            message="X-User-Id 헤더는 정수여야 합니다.",
            error_code=ErrorCode.VALIDATION_ERROR,
            detail={"x_user_id": x_user_id},
        ) from e
