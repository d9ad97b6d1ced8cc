"""Users 도메인 리포지토리"""

from typing import Iterable, Optional, Sequence, cast

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.users.models import ANONYMOUS_USER_ID, User


class UserRepository:
    """사용자 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """ID로 사용자 조회 (익명 ID는 항상 None)"""
        if user_id == ANONYMOUS_USER_ID:
            return None
        result = await self.session.execute(
            select(User).where(User.id == user_id)
        )
        return cast(Optional[User], result.scalar_one_or_none())

    async def get_by_login_id(self, login_id: str) -> Optional[User]:
        """로그인 ID로 사용자 조회"""
        result = await self.session.execute(
            select(User).where(User.login_id == login_id)
        )
        return cast(Optional[User], result.scalar_one_or_none())

    async def get_by_login_ids(self, login_ids: Iterable[str]) -> Sequence[User]:
        """여러 로그인 ID로 사용자 조회 (대소문자 무시)

        Args:
            login_ids: 로그인 ID 목록

        Returns:
            존재하는 사용자 목록 (없는 ID는 무시)
        """
        lowered = {login_id.lower() for login_id in login_ids}
        if not lowered:
            return []
        result = await self.session.execute(
            select(User).where(func.lower(User.login_id).in_(lowered))
        )
        return cast(Sequence[User], result.scalars().all())

    async def create(self, user: User) -> User:
        """사용자 생성"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
