"""Issues 도메인 서비스

이슈 생성/수정/삭제/상태 변경과 댓글, 라벨, 검색을 담당합니다.
이슈가 마일스톤에 붙거나 떨어지거나 상태가 바뀌면
``MilestoneService``를 통해 마일스톤 카운터를 맞춥니다.
"""

from typing import Iterable, Optional, Sequence

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logging import get_logger
from app.core.middlewares.context import get_request_id
from app.core.utils.datetime import start_of_day
from app.core.utils.time import measure_time
from app.domains.issues.exceptions import (
    InvalidIssueStateException,
    IssueNotFoundException,
    LabelAlreadyExistsException,
    LabelNotFoundException,
    MilestoneNotInProjectException,
)
from app.domains.issues.mentions import extract_login_ids
from app.domains.issues.models import (
    Assignee,
    Issue,
    IssueComment,
    IssueLabel,
    ResourceType,
    State,
)
from app.domains.issues.repository import IssueLabelRepository, IssueRepository
from app.domains.issues.schemas import (
    CommentCreate,
    IssueCreate,
    IssueUpdate,
    LabelCreate,
)
from app.domains.issues.search import IssueSearchBuilder, SearchCondition
from app.domains.milestones.models import Milestone
from app.domains.milestones.service import MilestoneService
from app.domains.projects.exceptions import (
    OrganizationNotFoundException,
    ProjectNotFoundException,
)
from app.domains.projects.models import Project
from app.domains.projects.repository import ProjectRepository
from app.domains.users.exceptions import UserNotFoundException
from app.domains.users.models import User
from app.domains.users.repository import UserRepository

logger = get_logger(__name__)


class IssueService:
    """이슈 서비스"""

    def __init__(self, session: AsyncSession):
        self.repository = IssueRepository(session)
        self.label_repository = IssueLabelRepository(session)
        self.project_repository = ProjectRepository(session)
        self.user_repository = UserRepository(session)
        self.milestone_service = MilestoneService(session)
        self.search_builder = IssueSearchBuilder(session)

    async def get_issue(self, issue_id: int) -> Issue:
        """이슈 조회

        Raises:
            IssueNotFoundException: 이슈가 없는 경우
        """
        issue = await self.repository.get_by_id(issue_id)
        if not issue:
            raise IssueNotFoundException(issue_id=issue_id)
        return issue

    async def create_issue(
        self, project_id: int, data: IssueCreate, author: User
    ) -> Issue:
        """이슈 생성

        담당자, 라벨, 마일스톤을 연결하고 본문의 멘션을 저장합니다.
        익명 사용자가 작성하면 작성자는 비어 있습니다.
        """
        project = await self._get_project(project_id)

        milestone = None
        if data.milestone_id is not None:
            milestone = await self._get_project_milestone(data.milestone_id, project)

        issue = Issue(
            project_id=project.id,
            title=data.title,
            body=data.body,
            state=State.OPEN.value,
            author_id=None if author.is_anonymous else author.id,
            milestone_id=milestone.id if milestone else None,
            due_date=start_of_day(data.due_date) if data.due_date else None,
            num_of_comments=0,
        )
        if data.assignee_id is not None:
            issue.assignee = await self._get_assignee(data.assignee_id, project)
        issue.labels = list(await self._get_project_labels(data.label_ids, project))

        issue = await self.repository.create(issue)
        await self._save_mentions(ResourceType.ISSUE_POST, issue.id, issue.body)

        if milestone is not None:
            await self.milestone_service.add_issue(milestone, issue)

        logger.info(
            "Issue created",
            extra={
                "request_id": get_request_id(),
                "project_id": project.id,
                "issue_id": issue.id,
                "milestone_id": issue.milestone_id,
            },
        )
        return issue

    async def update_issue(self, issue_id: int, data: IssueUpdate) -> Issue:
        """이슈 수정 (요청에 포함된 필드만)

        마일스톤이 바뀌면 이전 마일스톤에서 빼고 새 마일스톤에 더합니다.
        """
        issue = await self.get_issue(issue_id)
        project = await self._get_project(issue.project_id)
        fields = data.model_fields_set

        if "title" in fields and data.title is not None:
            issue.title = data.title
        if "due_date" in fields:
            issue.due_date = start_of_day(data.due_date) if data.due_date else None
        if "assignee_id" in fields:
            issue.assignee = (
                await self._get_assignee(data.assignee_id, project)
                if data.assignee_id is not None
                else None
            )
        if "label_ids" in fields:
            issue.labels = list(
                await self._get_project_labels(data.label_ids or [], project)
            )

        body_changed = "body" in fields and data.body is not None
        if body_changed:
            issue.body = data.body

        previous_milestone_id = issue.milestone_id
        new_milestone: Optional[Milestone] = None
        milestone_changed = (
            "milestone_id" in fields and data.milestone_id != previous_milestone_id
        )
        if milestone_changed:
            if data.milestone_id is not None:
                new_milestone = await self._get_project_milestone(
                    data.milestone_id, project
                )
            if previous_milestone_id is not None:
                previous = await self.milestone_service.get_milestone(
                    previous_milestone_id
                )
                await self.milestone_service.remove_issue(previous, issue)
            issue.milestone_id = new_milestone.id if new_milestone else None

        issue = await self.repository.update(issue)

        if body_changed:
            await self.repository.delete_mentions(ResourceType.ISSUE_POST, issue.id)
            await self._save_mentions(ResourceType.ISSUE_POST, issue.id, issue.body)
        if new_milestone is not None:
            await self.milestone_service.add_issue(new_milestone, issue)

        logger.info(
            "Issue updated",
            extra={
                "request_id": get_request_id(),
                "issue_id": issue.id,
                "milestone_id": issue.milestone_id,
            },
        )
        return issue

    async def change_state(self, issue_id: int, state: State) -> Issue:
        """이슈 열기/닫기 후 마일스톤 카운터 재계산

        Raises:
            InvalidIssueStateException: open/closed가 아닌 경우
        """
        if state not in (State.OPEN, State.CLOSED):
            raise InvalidIssueStateException(state=state.value)

        issue = await self.get_issue(issue_id)
        if issue.state == state:
            return issue

        issue.state = state.value
        issue = await self.repository.update(issue)

        if issue.milestone_id is not None:
            milestone = await self.milestone_service.get_milestone(issue.milestone_id)
            await self.milestone_service.update_issue_info(milestone)

        logger.info(
            f"Issue state changed to {state.value}",
            extra={"request_id": get_request_id(), "issue_id": issue.id},
        )
        return issue

    async def delete_issue(self, issue_id: int) -> None:
        """이슈 삭제 (마일스톤 카운터 감소 후 댓글, 멘션과 함께 삭제)"""
        issue = await self.get_issue(issue_id)

        if issue.milestone_id is not None:
            milestone = await self.milestone_service.get_milestone(issue.milestone_id)
            await self.milestone_service.remove_issue(milestone, issue)

        await self.repository.delete(issue)
        logger.info(
            "Issue deleted",
            extra={"request_id": get_request_id(), "issue_id": issue_id},
        )

    async def add_comment(
        self, issue_id: int, data: CommentCreate, author: User
    ) -> IssueComment:
        """댓글 작성 (댓글 수 증가, 댓글 멘션 저장)"""
        issue = await self.get_issue(issue_id)

        comment = await self.repository.create_comment(
            IssueComment(
                issue_id=issue.id,
                author_id=None if author.is_anonymous else author.id,
                contents=data.contents,
            )
        )
        issue.num_of_comments += 1
        await self.repository.update(issue)
        await self._save_mentions(
            ResourceType.ISSUE_COMMENT, comment.id, comment.contents
        )

        logger.info(
            "Comment added",
            extra={"request_id": get_request_id(), "issue_id": issue.id},
        )
        return comment

    async def search_project_issues(
        self,
        project_id: int,
        condition: SearchCondition,
        size: int = settings.default_page_size,
    ) -> tuple[Sequence[Issue], int]:
        """프로젝트 이슈 검색

        Returns:
            (현재 페이지 이슈 목록, 전체 건수)
        """
        project = await self._get_project(project_id)
        query = await self.search_builder.for_project(condition, project)
        return await self._paginate(query, condition, size)

    async def search_organization_issues(
        self,
        organization_id: int,
        condition: SearchCondition,
        current_user: User,
        size: int = settings.default_page_size,
    ) -> tuple[Sequence[Issue], int]:
        """조직 이슈 검색 (현재 사용자가 볼 수 있는 프로젝트만)"""
        organization = await self.project_repository.get_organization(
            organization_id
        )
        if not organization:
            raise OrganizationNotFoundException(organization_id=organization_id)
        query = await self.search_builder.for_organization(
            condition, organization, current_user
        )
        return await self._paginate(query, condition, size)

    async def search_issues(
        self,
        condition: SearchCondition,
        size: int = settings.default_page_size,
    ) -> tuple[Sequence[Issue], int]:
        """전체 이슈 검색"""
        query = await self.search_builder.for_all(condition)
        return await self._paginate(query, condition, size)

    async def _paginate(
        self, query: Select, condition: SearchCondition, size: int
    ) -> tuple[Sequence[Issue], int]:
        skip = (max(condition.page_num, 1) - 1) * size
        with measure_time() as timer:
            total = await self.repository.count(query)
            issues = await self.repository.search(query, skip=skip, limit=size)

        logger.debug(
            f"Issue search returned {len(issues)}/{total} in {timer.elapsed_ms:.2f}ms",
            extra={"request_id": get_request_id()},
        )
        return issues, total

    async def _get_project(self, project_id: int) -> Project:
        project = await self.project_repository.get_project(project_id)
        if not project:
            raise ProjectNotFoundException(project_id=project_id)
        return project

    async def _get_project_milestone(
        self, milestone_id: int, project: Project
    ) -> Milestone:
        milestone = await self.milestone_service.get_milestone(milestone_id)
        if milestone.project_id != project.id:
            raise MilestoneNotInProjectException(milestone_id, project.id)
        return milestone

    async def _get_assignee(self, user_id: int, project: Project) -> Assignee:
        if not await self.user_repository.get_by_id(user_id):
            raise UserNotFoundException(user_id=user_id)
        return await self.repository.get_or_create_assignee(user_id, project.id)

    async def _get_project_labels(
        self, label_ids: Iterable[int], project: Project
    ) -> Sequence[IssueLabel]:
        """라벨 조회 (모두 해당 프로젝트 소속이어야 함)"""
        requested = set(label_ids)
        labels = [
            label
            for label in await self.label_repository.get_by_ids(requested)
            if label.project_id == project.id
        ]
        missing = requested - {label.id for label in labels}
        if missing:
            raise LabelNotFoundException(label_ids=missing)
        return labels

    async def _save_mentions(
        self, resource_type: ResourceType, resource_id: int, text: str
    ) -> None:
        """본문에서 @login_id를 찾아 멘션 저장 (없는 사용자는 무시)"""
        login_ids = extract_login_ids(text)
        if not login_ids:
            return
        users = await self.user_repository.get_by_login_ids(login_ids)
        if users:
            await self.repository.add_mentions(
                resource_type, resource_id, [user.id for user in users]
            )


class IssueLabelService:
    """이슈 라벨 서비스"""

    def __init__(self, session: AsyncSession):
        self.repository = IssueLabelRepository(session)
        self.project_repository = ProjectRepository(session)

    async def list_labels(self, project_id: int) -> Sequence[IssueLabel]:
        """프로젝트 라벨 목록"""
        if not await self.project_repository.get_project(project_id):
            raise ProjectNotFoundException(project_id=project_id)
        return await self.repository.find_by_project_id(project_id)

    async def create_label(self, project_id: int, data: LabelCreate) -> IssueLabel:
        """라벨 생성

        Raises:
            ProjectNotFoundException: 프로젝트가 없는 경우
            LabelAlreadyExistsException: 같은 분류/이름의 라벨이 있는 경우
        """
        if not await self.project_repository.get_project(project_id):
            raise ProjectNotFoundException(project_id=project_id)
        if await self.repository.get_by_name(project_id, data.category, data.name):
            raise LabelAlreadyExistsException(data.category, data.name)

        label = await self.repository.create(
            IssueLabel(
                project_id=project_id,
                category=data.category,
                name=data.name,
                color=data.color,
            )
        )
        logger.info(
            "Issue label created",
            extra={"request_id": get_request_id(), "project_id": project_id},
        )
        return label
