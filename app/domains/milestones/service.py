"""Milestones 도메인 서비스

마일스톤 CRUD와 이슈 카운터(open/closed/total, 완료율) 관리를 담당합니다.
카운터 변경은 이슈 생성/삭제/상태 변경/마일스톤 변경 시
``IssueService``가 호출합니다.
"""

from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.core.middlewares.context import get_request_id
from app.domains.issues.models import Issue, State
from app.domains.issues.repository import IssueRepository
from app.domains.milestones.exceptions import MilestoneNotFoundException
from app.domains.milestones.models import DEFAULT_SORTER, Milestone
from app.domains.milestones.repository import Direction, MilestoneRepository
from app.domains.milestones.schemas import MilestoneCreate, MilestoneUpdate
from app.domains.projects.exceptions import ProjectNotFoundException
from app.domains.projects.repository import ProjectRepository

logger = get_logger(__name__)


class MilestoneService:
    """마일스톤 서비스"""

    def __init__(self, session: AsyncSession):
        self.repository = MilestoneRepository(session)
        self.issue_repository = IssueRepository(session)
        self.project_repository = ProjectRepository(session)

    async def get_milestone(
        self, milestone_id: int, project_id: Optional[int] = None
    ) -> Milestone:
        """마일스톤 조회

        Args:
            milestone_id: 마일스톤 ID
            project_id: 지정하면 해당 프로젝트 소속인지도 확인

        Raises:
            MilestoneNotFoundException: 마일스톤이 없거나 다른 프로젝트 소속인 경우
        """
        milestone = await self.repository.get_by_id(milestone_id)
        if not milestone:
            raise MilestoneNotFoundException(milestone_id=milestone_id)
        if project_id is not None and milestone.project_id != project_id:
            raise MilestoneNotFoundException(milestone_id=milestone_id)
        return milestone

    async def find_milestones(
        self,
        project_id: int,
        state: Optional[State] = State.ALL,
        sort: str = DEFAULT_SORTER,
        direction: Direction = Direction.ASC,
    ) -> Sequence[Milestone]:
        """프로젝트 마일스톤 목록 (상태 None은 ALL로 취급)"""
        return await self.repository.find(
            project_id, state or State.ALL, sort, direction
        )

    async def find_by_project_id(self, project_id: int) -> Sequence[Milestone]:
        """전체 마일스톤 (마감일 오름차순)"""
        return await self.find_milestones(project_id, State.ALL)

    async def find_open_milestones(self, project_id: int) -> Sequence[Milestone]:
        """열린 이슈가 남아 있는 마일스톤"""
        return await self.find_milestones(project_id, State.OPEN)

    async def find_closed_milestones(self, project_id: int) -> Sequence[Milestone]:
        """열린 이슈가 없는 마일스톤"""
        return await self.find_milestones(project_id, State.CLOSED)

    async def options(self, project_id: int) -> dict[str, str]:
        """선택 목록용 ID → 제목 (제목 오름차순)"""
        milestones = await self.find_milestones(
            project_id, State.ALL, "title", Direction.ASC
        )
        return {str(milestone.id): milestone.title for milestone in milestones}

    async def create(self, project_id: int, data: MilestoneCreate) -> Milestone:
        """마일스톤 생성

        Raises:
            ProjectNotFoundException: 프로젝트가 없는 경우
        """
        if not await self.project_repository.get_project(project_id):
            raise ProjectNotFoundException(project_id=project_id)

        milestone = await self.repository.create(
            Milestone(
                project_id=project_id,
                title=data.title,
                contents=data.contents,
                due_date=data.due_date,
                num_open_issues=0,
                num_closed_issues=0,
                num_total_issues=0,
                completion_rate=0,
            )
        )
        logger.info(
            "Milestone created",
            extra={
                "request_id": get_request_id(),
                "project_id": project_id,
                "milestone_id": milestone.id,
            },
        )
        return milestone

    async def update(
        self,
        milestone_id: int,
        data: MilestoneUpdate,
        project_id: Optional[int] = None,
    ) -> Milestone:
        """마일스톤 수정 (제목, 설명, 마감일) 후 완료율 재계산"""
        milestone = await self.get_milestone(milestone_id, project_id)
        milestone.update_with(
            title=data.title, contents=data.contents, due_date=data.due_date
        )
        milestone.refresh_completion_rate()
        milestone = await self.repository.update(milestone)

        logger.info(
            "Milestone updated",
            extra={"request_id": get_request_id(), "milestone_id": milestone_id},
        )
        return milestone

    async def delete(
        self, milestone_id: int, project_id: Optional[int] = None
    ) -> None:
        """마일스톤 삭제

        연결된 이슈의 마일스톤 참조를 모두 해제한 뒤 삭제합니다.
        요청 트랜잭션 안에서 처리되며, 실패하면 전체가 롤백됩니다.
        """
        milestone = await self.get_milestone(milestone_id, project_id)

        try:
            issues = await self.issue_repository.find_by_milestone_id(milestone.id)
            detached = await self.issue_repository.detach_milestone(issues)
            await self.repository.delete(milestone)
        except SQLAlchemyError:
            logger.exception(
                "Failed to delete milestone",
                extra={"request_id": get_request_id(), "milestone_id": milestone_id},
            )
            raise

        logger.info(
            f"Milestone deleted, {detached} issue(s) detached",
            extra={"request_id": get_request_id(), "milestone_id": milestone_id},
        )

    async def add_issue(self, milestone: Milestone, issue: Issue) -> Milestone:
        """이슈 추가 반영

        전체 수는 DB 기준으로 다시 세고, open/closed는 이슈 상태에 따라 1 증가합니다.
        이슈의 milestone_id가 이미 flush된 상태에서 호출해야 합니다.
        """
        await self._update_total_count(milestone)
        self._count_issue_state(milestone, issue, 1)
        return await self._save(milestone)

    async def remove_issue(self, milestone: Milestone, issue: Issue) -> Milestone:
        """이슈 제거 반영 (전체 수와 상태별 수를 1 감소)"""
        milestone.num_total_issues -= 1
        self._count_issue_state(milestone, issue, -1)
        return await self._save(milestone)

    async def update_issue_info(self, milestone: Milestone) -> Milestone:
        """연결된 이슈를 다시 읽어 카운터 전체 재계산"""
        issues = await self._update_total_count(milestone)

        milestone.num_open_issues = 0
        milestone.num_closed_issues = 0
        for issue in issues:
            self._count_issue_state(milestone, issue, 1)

        return await self._save(milestone)

    async def _update_total_count(self, milestone: Milestone) -> Sequence[Issue]:
        issues = await self.issue_repository.find_by_milestone_id(milestone.id)
        milestone.num_total_issues = len(issues)
        return issues

    @staticmethod
    def _count_issue_state(milestone: Milestone, issue: Issue, count: int) -> None:
        if issue.is_open:
            milestone.num_open_issues += count
        else:
            milestone.num_closed_issues += count

    async def _save(self, milestone: Milestone) -> Milestone:
        milestone.refresh_completion_rate()
        return await self.repository.update(milestone)
