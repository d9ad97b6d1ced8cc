"""Milestones 도메인 스키마 정의"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.domains.issues.models import State
from app.domains.milestones.models import DEFAULT_SORTER
from app.domains.milestones.repository import Direction


class MilestoneCreate(BaseModel):
    """마일스톤 생성 요청"""

    title: str = Field(..., min_length=1, max_length=255, description="제목")
    due_date: date = Field(..., description="마감일 (yyyy-MM-dd)")
    contents: str = Field("", description="설명")


class MilestoneUpdate(BaseModel):
    """마일스톤 수정 요청 (제목, 설명, 마감일만 편집 가능)"""

    title: str = Field(..., min_length=1, max_length=255, description="제목")
    due_date: date = Field(..., description="마감일 (yyyy-MM-dd)")
    contents: str = Field("", description="설명")


class MilestoneListParams(BaseModel):
    """마일스톤 목록 조회 조건"""

    state: State = Field(State.ALL, description="상태 (open/closed/all)")
    sort: str = Field(DEFAULT_SORTER, description="정렬 기준")
    direction: Direction = Field(Direction.ASC, description="정렬 방향")


class MilestoneResponse(BaseModel):
    """마일스톤 응답"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    title: str
    contents: str
    due_date: date
    due_date_string: Optional[str] = None
    num_open_issues: int
    num_closed_issues: int
    num_total_issues: int
    completion_rate: int
