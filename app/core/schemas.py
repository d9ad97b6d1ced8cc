"""공통 API 응답 스키마

단건 응답은 ``APIResponse``, 목록 응답은 ``ListAPIResponse`` 봉투를 씁니다.
에러 응답 봉투는 ``ErrorResponse`` 모양을 따릅니다 (``app.core.exceptions``).

Usage::

    return create_response(data=milestone, message="마일스톤을 조회했습니다.")
    return create_list_response(data=issues, total=120, page=2, size=15)

Note:
    Generic 모델의 classmethod 팩토리는 타입 추론이 제한되므로
    모듈 수준 팩토리 함수를 사용합니다.
"""

import math
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")

DEFAULT_MESSAGE = "요청이 성공적으로 처리되었습니다."


class APIResponse(BaseModel, Generic[DataT]):
    """단건 응답"""

    success: bool = True
    message: str = DEFAULT_MESSAGE
    data: Optional[DataT] = None


class PageMeta(BaseModel):
    """목록 페이지 정보"""

    total: int = Field(..., description="전체 건수")
    page: int = Field(..., description="현재 페이지 (1부터)")
    size: int = Field(..., description="페이지 크기")
    total_pages: int = Field(..., description="전체 페이지 수")
    has_next: bool
    has_prev: bool

    @classmethod
    def of(cls, total: int, page: int, size: int) -> "PageMeta":
        total_pages = math.ceil(total / size) if size > 0 else 0
        return cls(
            total=total,
            page=page,
            size=size,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


class ListAPIResponse(BaseModel, Generic[DataT]):
    """목록 응답 (페이지 정보 포함)"""

    success: bool = True
    message: str = DEFAULT_MESSAGE
    data: list[DataT] = Field(default_factory=list)
    meta: PageMeta


def create_response(
    data: Optional[DataT] = None,
    message: str = DEFAULT_MESSAGE,
) -> APIResponse[DataT]:
    return APIResponse(message=message, data=data)


def create_list_response(
    data: list[DataT],
    total: int,
    page: int,
    size: int,
    message: str = DEFAULT_MESSAGE,
) -> ListAPIResponse[DataT]:
    """목록 응답 생성

    Args:
        data: 현재 페이지 데이터
        total: 조건에 맞는 전체 건수
        page: 현재 페이지
        size: 페이지 크기
    """
    return ListAPIResponse(
        message=message, data=data, meta=PageMeta.of(total, page, size)
    )


class ErrorDetail(BaseModel):
    code: str = Field(..., description="에러 코드")
    message: str = Field(..., description="에러 메시지")
    detail: Optional[Any] = Field(default=None, description="추가 정보")


class ErrorResponse(BaseModel):
    """에러 응답

    Example::

        {
            "success": false,
            "message": "지원하지 않는 정렬 기준입니다.",
            "error": {
                "code": "INVALID_SORT_KEY",
                "message": "지원하지 않는 정렬 기준입니다.",
                "detail": {"sort": "priority"}
            }
        }
    """

    success: bool = False
    message: str
    error: ErrorDetail
