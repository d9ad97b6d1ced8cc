"""Milestones 도메인 리포지토리"""

from enum import Enum
from typing import Optional, Sequence, cast

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidSortKeyException
from app.domains.issues.models import State
from app.domains.milestones.models import Milestone


class Direction(str, Enum):
    """정렬 방향"""

    ASC = "asc"
    DESC = "desc"


# 외부 정렬 키 → 컬럼
SORT_COLUMNS = {
    "dueDate": Milestone.due_date,
    "title": Milestone.title,
    "completionRate": Milestone.completion_rate,
    "numOpenIssues": Milestone.num_open_issues,
    "numClosedIssues": Milestone.num_closed_issues,
    "numTotalIssues": Milestone.num_total_issues,
}


class MilestoneRepository:
    """마일스톤 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, milestone_id: int) -> Optional[Milestone]:
        """ID로 마일스톤 조회"""
        result = await self.session.execute(
            select(Milestone).where(Milestone.id == milestone_id)
        )
        return cast(Optional[Milestone], result.scalar_one_or_none())

    async def find(
        self,
        project_id: int,
        state: Optional[State],
        sort: str,
        direction: Direction,
    ) -> Sequence[Milestone]:
        """프로젝트 마일스톤 목록

        열린 이슈가 하나라도 있으면 OPEN, 없으면 CLOSED로 봅니다.
        (이슈가 없는 마일스톤도 CLOSED에 포함)

        Raises:
            InvalidSortKeyException: 지원하지 않는 정렬 기준
        """
        column = SORT_COLUMNS.get(sort)
        if column is None:
            raise InvalidSortKeyException(sort=sort)

        query = select(Milestone).where(Milestone.project_id == project_id)
        if state == State.OPEN:
            query = query.where(Milestone.num_open_issues > 0)
        elif state == State.CLOSED:
            query = query.where(Milestone.num_open_issues == 0)

        ordering = column.desc() if direction == Direction.DESC else column.asc()
        result = await self.session.execute(
            query.order_by(ordering, Milestone.id.asc())
        )
        return cast(Sequence[Milestone], result.scalars().all())

    async def create(self, milestone: Milestone) -> Milestone:
        """마일스톤 생성"""
        self.session.add(milestone)
        await self.session.flush()
        await self.session.refresh(milestone)
        return milestone

    async def update(self, milestone: Milestone) -> Milestone:
        """마일스톤 수정 (변경 내용 flush)"""
        await self.session.flush()
        await self.session.refresh(milestone)
        return milestone

    async def delete(self, milestone: Milestone) -> None:
        """마일스톤 삭제"""
        await self.session.delete(milestone)
        await self.session.flush()
