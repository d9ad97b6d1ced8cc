"""이슈 검색 조건과 쿼리 빌더

``SearchCondition``은 이슈 목록 화면의 필터/정렬 상태를 담는 불변 값 객체이고,
``IssueSearchBuilder``는 조건을 세 가지 범위(조직/전체/프로젝트) 중 하나로
``Select[Issue]`` 쿼리로 만들어 줍니다. 페이지 적용과 건수 계산은
``IssueRepository.search`` / ``count``가 담당합니다.

범위별로 적용되는 조건이 다릅니다.

- 조직: 가시 프로젝트(또는 이름 허용 목록), 담당자, 작성자, 댓글 작성자, 멘션,
  검색어, 댓글 있음, 상태, 마감일, 정렬
- 전체: 담당자, 작성자, 댓글 작성자, 멘션, 검색어, 댓글 있음, 상태, 마감일, 정렬
- 프로젝트: 프로젝트, 검색어, 작성자(익명 ID → 작성자 없음), 담당자(같은 프로젝트),
  댓글 작성자(프로젝트 한정), 마일스톤, 댓글 있음, 상태, 라벨, 마감일, 정렬
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Iterable, Optional

from sqlalchemy import Select, case, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidSortKeyException
from app.core.logging import get_logger
from app.core.utils.datetime import format_date, start_of_next_day
from app.domains.issues.models import (
    NUMBER_OF_ONE_MORE_COMMENTS,
    Assignee,
    Issue,
    IssueComment,
    IssueLabel,
    Mention,
    ResourceType,
    State,
    issue_issue_labels,
)
from app.domains.milestones.models import NULL_MILESTONE_ID
from app.domains.projects.models import Organization, Project
from app.domains.projects.repository import ProjectRepository
from app.domains.users.models import ANONYMOUS_USER_ID, User
from app.domains.users.repository import UserRepository

logger = get_logger(__name__)

DEFAULT_ORDER_BY = "createdDate"
DEFAULT_ORDER_DIR = "desc"

# 결과가 없어야 할 때 거는 id 조건 (실제 이슈 ID와 겹치지 않음)
NO_MATCH_ID = -1

SORT_COLUMNS: dict[str, Any] = {
    "createdDate": Issue.created_date,
    "updatedDate": Issue.updated_date,
    "numOfComments": Issue.num_of_comments,
    "title": Issue.title,
}
DUE_DATE_SORT = "dueDate"
SORT_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True)
class SearchCondition:
    """이슈 검색 조건

    ``author_id`` / ``assignee_id``에 ``ANONYMOUS_USER_ID``를,
    ``milestone_id``에 ``NULL_MILESTONE_ID``를 주면 "값 없음"을 찾습니다.
    """

    order_by: Optional[str] = DEFAULT_ORDER_BY
    order_dir: str = DEFAULT_ORDER_DIR
    filter: Optional[str] = None
    page_num: int = 1
    state: Optional[str] = State.OPEN.value
    commented_check: bool = False
    milestone_id: Optional[int] = None
    label_ids: frozenset[int] = frozenset()
    author_id: Optional[int] = None
    assignee_id: Optional[int] = None
    commenter_id: Optional[int] = None
    mention_id: Optional[int] = None
    due_date: Optional[date] = None
    project_names: Optional[tuple[str, ...]] = None

    def copy(self) -> "SearchCondition":
        """같은 조건의 복사본 (페이지는 1로 초기화)"""
        return replace(self, page_num=1)

    @property
    def due_date_string(self) -> Optional[str]:
        """마감일 문자열 (yyyy-MM-dd)"""
        return format_date(self.due_date)

    @property
    def is_filtered_by_project(self) -> bool:
        return bool(self.project_names)

    @property
    def has_filter_text(self) -> bool:
        return bool(self.filter and self.filter.strip())


class IssueSearchBuilder:
    """검색 조건 → 이슈 조회 쿼리

    댓글 작성자, 멘션, 라벨, 검색어(댓글 본문)는 이슈 ID 목록을 먼저 조회한 뒤
    ``Issue.id IN (...)`` 조건으로 붙입니다.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.project_repository = ProjectRepository(session)
        self.user_repository = UserRepository(session)

    async def for_organization(
        self,
        condition: SearchCondition,
        organization: Organization,
        current_user: User,
    ) -> Select:
        """조직 범위 검색 쿼리 (현재 사용자가 볼 수 있는 프로젝트만)"""
        visible = await self.project_repository.get_visible_projects(
            organization, current_user
        )
        if condition.is_filtered_by_project:
            project_ids = self._filter_projects_by_name(
                visible, condition.project_names or ()
            )
        else:
            project_ids = [project.id for project in visible]

        query = select(Issue).where(Issue.project_id.in_(project_ids))
        query = self._apply_assignee(query, condition)
        query = self._apply_author(query, condition)
        query = await self._apply_commenter(query, condition)
        query = await self._apply_mention(query, condition)
        query = await self._apply_filter_text(query, condition)
        query = self._apply_commented(query, condition)
        query = self._apply_state(query, condition)
        query = self._apply_due_date(query, condition)
        return self._apply_order(query, condition)

    async def for_all(self, condition: SearchCondition) -> Select:
        """범위 제한 없는 검색 쿼리"""
        query = select(Issue)
        query = self._apply_assignee(query, condition)
        query = self._apply_author(query, condition)
        query = await self._apply_commenter(query, condition)
        query = await self._apply_mention(query, condition)
        query = await self._apply_filter_text(query, condition)
        query = self._apply_commented(query, condition)
        query = self._apply_state(query, condition)
        query = self._apply_due_date(query, condition)
        return self._apply_order(query, condition)

    async def for_project(
        self, condition: SearchCondition, project: Project
    ) -> Select:
        """프로젝트 범위 검색 쿼리"""
        query = select(Issue).where(Issue.project_id == project.id)
        query = await self._apply_filter_text(query, condition, project)
        query = self._apply_author(query, condition, anonymous_means_none=True)
        query = self._apply_assignee(query, condition, project)
        query = await self._apply_commenter(query, condition, project)
        query = self._apply_milestone(query, condition)
        query = self._apply_commented(query, condition)
        query = self._apply_state(query, condition)
        query = await self._apply_labels(query, condition)
        query = self._apply_due_date(query, condition)
        return self._apply_order(query, condition)

    @staticmethod
    def _filter_projects_by_name(
        visible: Iterable[Project], names: Iterable[str]
    ) -> list[int]:
        """이름 허용 목록과 가시 프로젝트의 교집합 (대소문자 무시)"""
        by_name: dict[str, int] = {}
        for project in visible:
            by_name.setdefault(project.name.lower(), project.id)

        project_ids: list[int] = []
        for name in names:
            project_id = by_name.get(name.lower())
            if project_id is not None and project_id not in project_ids:
                project_ids.append(project_id)
        return project_ids

    @staticmethod
    def _restrict_to_ids(query: Select, issue_ids: Iterable[int]) -> Select:
        ids = set(issue_ids)
        if not ids:
            return query.where(Issue.id == NO_MATCH_ID)
        return query.where(Issue.id.in_(ids))

    @staticmethod
    def _apply_assignee(
        query: Select,
        condition: SearchCondition,
        project: Optional[Project] = None,
    ) -> Select:
        if condition.assignee_id is None:
            return query
        if condition.assignee_id == ANONYMOUS_USER_ID:
            return query.where(Issue.assignee_id.is_(None))

        assignees = select(Assignee.id).where(
            Assignee.user_id == condition.assignee_id
        )
        if project is not None:
            assignees = assignees.where(Assignee.project_id == project.id)
        return query.where(Issue.assignee_id.in_(assignees))

    @staticmethod
    def _apply_author(
        query: Select,
        condition: SearchCondition,
        anonymous_means_none: bool = False,
    ) -> Select:
        if condition.author_id is None:
            return query
        if anonymous_means_none and condition.author_id == ANONYMOUS_USER_ID:
            return query.where(Issue.author_id.is_(None))
        return query.where(Issue.author_id == condition.author_id)

    async def _apply_commenter(
        self,
        query: Select,
        condition: SearchCondition,
        project: Optional[Project] = None,
    ) -> Select:
        if condition.commenter_id is None:
            return query

        commenter = await self.user_repository.get_by_id(condition.commenter_id)
        if commenter is None or commenter.is_anonymous:
            return query

        comments = select(IssueComment.issue_id).where(
            IssueComment.author_id == commenter.id
        )
        if project is not None:
            comments = comments.join(Issue, Issue.id == IssueComment.issue_id).where(
                Issue.project_id == project.id
            )
        result = await self.session.execute(comments.distinct())
        return self._restrict_to_ids(query, result.scalars().all())

    async def _apply_mention(
        self, query: Select, condition: SearchCondition
    ) -> Select:
        if condition.mention_id is None:
            return query

        user = await self.user_repository.get_by_id(condition.mention_id)
        if user is None or user.is_anonymous:
            return query

        issue_ids = await self._mentioned_issue_ids(user)
        return self._restrict_to_ids(query, issue_ids)

    async def _mentioned_issue_ids(self, user: User) -> set[int]:
        """사용자가 멘션된 이슈 ID (본문 멘션 + 댓글 멘션의 상위 이슈)"""
        result = await self.session.execute(
            select(Mention).where(
                Mention.user_id == user.id,
                Mention.resource_type.in_(
                    [ResourceType.ISSUE_POST.value, ResourceType.ISSUE_COMMENT.value]
                ),
            )
        )

        issue_ids: set[int] = set()
        comment_ids: set[int] = set()
        for mention in result.scalars().all():
            try:
                resource_id = int(mention.resource_id)
            except ValueError:
                logger.warning(
                    f"Skipping mention with malformed resource id "
                    f"'{mention.resource_id}'",
                    extra={"user_id": user.id},
                )
                continue

            if mention.resource_type == ResourceType.ISSUE_POST:
                issue_ids.add(resource_id)
            elif mention.resource_type == ResourceType.ISSUE_COMMENT:
                comment_ids.add(resource_id)
            else:
                logger.warning(f"'{mention.resource_type}' is not supported.")

        if comment_ids:
            comments = await self.session.execute(
                select(IssueComment.issue_id).where(IssueComment.id.in_(comment_ids))
            )
            issue_ids.update(comments.scalars().all())
        return issue_ids

    async def _apply_filter_text(
        self,
        query: Select,
        condition: SearchCondition,
        project: Optional[Project] = None,
    ) -> Select:
        """제목/본문/댓글 본문 부분 일치 (대소문자 무시)"""
        if not condition.has_filter_text:
            return query

        text = condition.filter
        comments = (
            select(IssueComment.issue_id)
            .where(IssueComment.contents.icontains(text, autoescape=True))
            .distinct()
        )
        if project is not None:
            comments = comments.join(Issue, Issue.id == IssueComment.issue_id).where(
                Issue.project_id == project.id
            )
        commented_ids = (await self.session.execute(comments)).scalars().all()

        clauses = [
            Issue.title.icontains(text, autoescape=True),
            Issue.body.icontains(text, autoescape=True),
        ]
        if commented_ids:
            clauses.append(Issue.id.in_(commented_ids))
        return query.where(or_(*clauses))

    @staticmethod
    def _apply_milestone(query: Select, condition: SearchCondition) -> Select:
        if condition.milestone_id is None:
            return query
        if condition.milestone_id == NULL_MILESTONE_ID:
            return query.where(Issue.milestone_id.is_(None))
        return query.where(Issue.milestone_id == condition.milestone_id)

    async def _apply_labels(
        self, query: Select, condition: SearchCondition
    ) -> Select:
        """지정한 라벨 중 하나라도 붙은 이슈"""
        if not condition.label_ids:
            return query

        labels = await self.session.execute(
            select(IssueLabel.id).where(IssueLabel.id.in_(condition.label_ids))
        )
        label_ids = labels.scalars().all()
        if not label_ids:
            return query.where(Issue.id == NO_MATCH_ID)

        linked = await self.session.execute(
            select(issue_issue_labels.c.issue_id)
            .where(issue_issue_labels.c.issue_label_id.in_(label_ids))
            .distinct()
        )
        return self._restrict_to_ids(query, linked.scalars().all())

    @staticmethod
    def _apply_commented(query: Select, condition: SearchCondition) -> Select:
        if not condition.commented_check:
            return query
        return query.where(Issue.num_of_comments >= NUMBER_OF_ONE_MORE_COMMENTS)

    @staticmethod
    def _apply_state(query: Select, condition: SearchCondition) -> Select:
        state = State.from_token(condition.state)
        if state in (State.OPEN, State.CLOSED):
            return query.where(Issue.state == state.value)
        return query

    @staticmethod
    def _apply_due_date(query: Select, condition: SearchCondition) -> Select:
        """마감일이 지정일 이내(당일 포함)인 이슈"""
        if condition.due_date is None:
            return query
        return query.where(Issue.due_date < start_of_next_day(condition.due_date))

    @staticmethod
    def _apply_order(query: Select, condition: SearchCondition) -> Select:
        """정렬 적용

        Raises:
            InvalidSortKeyException: 지원하지 않는 정렬 기준/방향
        """
        if not condition.order_by or not condition.order_by.strip():
            return query.order_by(Issue.id.desc())

        direction = (condition.order_dir or "").strip().lower()
        if direction not in SORT_DIRECTIONS:
            raise InvalidSortKeyException(
                sort=condition.order_by, direction=condition.order_dir
            )
        ascending = direction == "asc"

        if condition.order_by == DUE_DATE_SORT:
            # 마감일 없는 이슈는 방향과 무관하게 항상 뒤로
            nulls_last = case((Issue.due_date.is_(None), 1), else_=0)
            due_date = Issue.due_date.asc() if ascending else Issue.due_date.desc()
            keys = [nulls_last.asc(), due_date]
        else:
            column = SORT_COLUMNS.get(condition.order_by)
            if column is None:
                raise InvalidSortKeyException(
                    sort=condition.order_by, direction=condition.order_dir
                )
            keys = [column.asc() if ascending else column.desc()]

        keys.append(Issue.id.asc() if ascending else Issue.id.desc())
        return query.order_by(*keys)
