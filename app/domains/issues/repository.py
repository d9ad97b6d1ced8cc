"""Issues 도메인 리포지토리"""

from typing import Iterable, Optional, Sequence, cast

from sqlalchemy import Select, and_, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.issues.models import (
    Assignee,
    Issue,
    IssueComment,
    IssueLabel,
    Mention,
    ResourceType,
)


class IssueRepository:
    """이슈 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, issue_id: int) -> Optional[Issue]:
        """ID로 이슈 조회"""
        result = await self.session.execute(
            select(Issue).where(Issue.id == issue_id)
        )
        return cast(Optional[Issue], result.scalar_one_or_none())

    async def find_by_milestone_id(self, milestone_id: int) -> Sequence[Issue]:
        """마일스톤에 연결된 이슈 목록"""
        result = await self.session.execute(
            select(Issue)
            .where(Issue.milestone_id == milestone_id)
            .order_by(Issue.id)
        )
        return cast(Sequence[Issue], result.scalars().all())

    async def search(
        self, query: Select, skip: int = 0, limit: int = 15
    ) -> Sequence[Issue]:
        """검색 쿼리 실행 (페이지 단위)"""
        result = await self.session.execute(query.offset(skip).limit(limit))
        return cast(Sequence[Issue], result.scalars().all())

    async def count(self, query: Select) -> int:
        """검색 쿼리 전체 건수"""
        count_query = select(func.count()).select_from(
            query.order_by(None).subquery()
        )
        result = await self.session.execute(count_query)
        return result.scalar_one()

    async def create(self, issue: Issue) -> Issue:
        """이슈 생성"""
        self.session.add(issue)
        await self.session.flush()
        await self.session.refresh(issue)
        return issue

    async def update(self, issue: Issue) -> Issue:
        """이슈 수정 (변경 내용 flush)"""
        await self.session.flush()
        await self.session.refresh(issue)
        return issue

    async def detach_milestone(self, issues: Iterable[Issue]) -> int:
        """이슈들의 마일스톤 참조 해제

        Returns:
            해제된 이슈 수
        """
        count = 0
        for issue in issues:
            issue.milestone_id = None
            count += 1
        await self.session.flush()
        return count

    async def delete(self, issue: Issue) -> None:
        """이슈 삭제 (댓글, 멘션, 라벨 연결 포함)"""
        result = await self.session.execute(
            select(IssueComment.id).where(IssueComment.issue_id == issue.id)
        )
        for comment_id in result.scalars().all():
            await self.delete_mentions(ResourceType.ISSUE_COMMENT, comment_id)
        await self.delete_mentions(ResourceType.ISSUE_POST, issue.id)
        await self.session.execute(
            delete(IssueComment).where(IssueComment.issue_id == issue.id)
        )
        await self.session.delete(issue)
        await self.session.flush()

    # 담당자

    async def get_or_create_assignee(self, user_id: int, project_id: int) -> Assignee:
        """사용자+프로젝트 담당자 조회, 없으면 생성"""
        result = await self.session.execute(
            select(Assignee).where(
                and_(Assignee.user_id == user_id, Assignee.project_id == project_id)
            )
        )
        assignee = result.scalar_one_or_none()
        if assignee is None:
            assignee = Assignee(user_id=user_id, project_id=project_id)
            self.session.add(assignee)
            await self.session.flush()
        return cast(Assignee, assignee)

    # 댓글

    async def create_comment(self, comment: IssueComment) -> IssueComment:
        """댓글 생성"""
        self.session.add(comment)
        await self.session.flush()
        await self.session.refresh(comment)
        return comment

    # 멘션

    async def add_mentions(
        self, resource_type: ResourceType, resource_id: int, user_ids: Iterable[int]
    ) -> list[Mention]:
        """멘션 저장"""
        mentions = [
            Mention(
                resource_type=resource_type.value,
                resource_id=str(resource_id),
                user_id=user_id,
            )
            for user_id in user_ids
        ]
        self.session.add_all(mentions)
        await self.session.flush()
        return mentions

    async def delete_mentions(
        self, resource_type: ResourceType, resource_id: int
    ) -> None:
        """리소스에 걸린 멘션 삭제"""
        await self.session.execute(
            delete(Mention).where(
                and_(
                    Mention.resource_type == resource_type.value,
                    Mention.resource_id == str(resource_id),
                )
            )
        )


class IssueLabelRepository:
    """이슈 라벨 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_ids(self, label_ids: Iterable[int]) -> Sequence[IssueLabel]:
        """ID 목록으로 라벨 조회 (없는 ID는 무시)"""
        ids = set(label_ids)
        if not ids:
            return []
        result = await self.session.execute(
            select(IssueLabel).where(IssueLabel.id.in_(ids)).order_by(IssueLabel.id)
        )
        return cast(Sequence[IssueLabel], result.scalars().all())

    async def find_by_project_id(self, project_id: int) -> Sequence[IssueLabel]:
        """프로젝트 라벨 목록 (분류, 이름순)"""
        result = await self.session.execute(
            select(IssueLabel)
            .where(IssueLabel.project_id == project_id)
            .order_by(IssueLabel.category, IssueLabel.name, IssueLabel.id)
        )
        return cast(Sequence[IssueLabel], result.scalars().all())

    async def get_by_name(
        self, project_id: int, category: str, name: str
    ) -> Optional[IssueLabel]:
        result = await self.session.execute(
            select(IssueLabel).where(
                and_(
                    IssueLabel.project_id == project_id,
                    IssueLabel.category == category,
                    IssueLabel.name == name,
                )
            )
        )
        return cast(Optional[IssueLabel], result.scalar_one_or_none())

    async def create(self, label: IssueLabel) -> IssueLabel:
        """라벨 생성"""
        self.session.add(label)
        await self.session.flush()
        await self.session.refresh(label)
        return label
