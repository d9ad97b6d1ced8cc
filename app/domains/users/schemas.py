"""Users 도메인 스키마 정의"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """사용자 생성 요청 스키마"""

    login_id: str = Field(
        ...,
        min_length=2,
        max_length=100,
        pattern=r"^[A-Za-z0-9_.\-]+$",
        description="로그인 ID (영문/숫자/._-)",
    )
    name: str = Field("", max_length=200, description="표시 이름")


class UserResponse(BaseModel):
    """사용자 응답 스키마"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    login_id: str
    name: str
    created_at: datetime
