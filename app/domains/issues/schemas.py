"""Issues 도메인 스키마 정의"""

from datetime import date, datetime
from typing import Optional

from fastapi import Query
from pydantic import BaseModel, ConfigDict, Field

from app.domains.issues.models import State
from app.domains.issues.search import (
    DEFAULT_ORDER_BY,
    DEFAULT_ORDER_DIR,
    SearchCondition,
)


class IssueCreate(BaseModel):
    """이슈 생성 요청"""

    title: str = Field(..., min_length=1, max_length=255, description="제목")
    body: str = Field("", description="본문 (@login_id로 멘션)")
    assignee_id: Optional[int] = Field(None, gt=0, description="담당 사용자 ID")
    milestone_id: Optional[int] = Field(None, gt=0, description="마일스톤 ID")
    label_ids: list[int] = Field(default_factory=list, description="라벨 ID 목록")
    due_date: Optional[date] = Field(None, description="마감일 (yyyy-MM-dd)")


class IssueUpdate(BaseModel):
    """이슈 수정 요청

    보낸 필드만 반영합니다. ``assignee_id`` / ``milestone_id`` / ``due_date``에
    null을 보내면 해제합니다.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    body: Optional[str] = None
    assignee_id: Optional[int] = Field(None, gt=0)
    milestone_id: Optional[int] = Field(None, gt=0)
    label_ids: Optional[list[int]] = None
    due_date: Optional[date] = None


class IssueStateChange(BaseModel):
    """이슈 상태 변경 요청"""

    state: State = Field(..., description="open 또는 closed")


class CommentCreate(BaseModel):
    """댓글 작성 요청"""

    contents: str = Field(..., min_length=1, description="댓글 내용")


class LabelCreate(BaseModel):
    """라벨 생성 요청"""

    category: str = Field("", max_length=100, description="분류")
    name: str = Field(..., min_length=1, max_length=100, description="이름")
    color: str = Field("#999999", max_length=20, description="색상")


class LabelResponse(BaseModel):
    """라벨 응답"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    category: str
    name: str
    color: str


class IssueResponse(BaseModel):
    """이슈 응답"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    title: str
    body: str
    state: State
    author_id: Optional[int] = None
    assignee_user_id: Optional[int] = None
    milestone_id: Optional[int] = None
    due_date: Optional[datetime] = None
    due_date_string: Optional[str] = None
    num_of_comments: int
    created_date: datetime
    updated_date: Optional[datetime] = None
    labels: list[LabelResponse] = Field(default_factory=list)


class CommentResponse(BaseModel):
    """댓글 응답"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    issue_id: int
    author_id: Optional[int] = None
    contents: str
    created_date: datetime


class IssueSearchParams:
    """이슈 검색 쿼리 파라미터 의존성

    페이지 번호/크기는 ``PageParams``가 따로 받습니다.
    """

    def __init__(
        self,
        order_by: Optional[str] = Query(DEFAULT_ORDER_BY, description="정렬 기준"),
        order_dir: str = Query(DEFAULT_ORDER_DIR, description="정렬 방향"),
        filter: Optional[str] = Query(None, description="검색어"),
        state: Optional[str] = Query(State.OPEN.value, description="상태"),
        commented_check: bool = Query(False, description="댓글 있는 이슈만"),
        milestone_id: Optional[int] = Query(
            None, description="마일스톤 ID (-1: 마일스톤 없음)"
        ),
        label_ids: list[int] = Query([], description="라벨 ID (반복 가능)"),
        author_id: Optional[int] = Query(None, description="작성자 ID"),
        assignee_id: Optional[int] = Query(
            None, description="담당자 ID (-1: 미할당)"
        ),
        commenter_id: Optional[int] = Query(None, description="댓글 작성자 ID"),
        mention_id: Optional[int] = Query(None, description="멘션된 사용자 ID"),
        due_date: Optional[date] = Query(None, description="마감일 (yyyy-MM-dd)"),
        project_names: list[str] = Query(
            [], description="프로젝트 이름 (조직 검색, 반복 가능)"
        ),
    ):
        self.order_by = order_by
        self.order_dir = order_dir
        self.filter = filter
        self.state = state
        self.commented_check = commented_check
        self.milestone_id = milestone_id
        self.label_ids = label_ids
        self.author_id = author_id
        self.assignee_id = assignee_id
        self.commenter_id = commenter_id
        self.mention_id = mention_id
        self.due_date = due_date
        self.project_names = project_names

    def to_condition(self, page: int = 1) -> SearchCondition:
        return SearchCondition(
            order_by=self.order_by,
            order_dir=self.order_dir,
            filter=self.filter,
            page_num=page,
            state=self.state,
            commented_check=self.commented_check,
            milestone_id=self.milestone_id,
            label_ids=frozenset(self.label_ids),
            author_id=self.author_id,
            assignee_id=self.assignee_id,
            commenter_id=self.commenter_id,
            mention_id=self.mention_id,
            due_date=self.due_date,
            project_names=tuple(self.project_names) or None,
        )
