"""Users 도메인 서비스"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.core.middlewares.context import get_request_id
from app.domains.users.exceptions import (
    LoginIdAlreadyExistsException,
    UserNotFoundException,
)
from app.domains.users.models import User, anonymous_user
from app.domains.users.repository import UserRepository
from app.domains.users.schemas import UserCreate

logger = get_logger(__name__)


class UserService:
    """사용자 서비스"""

    def __init__(self, session: AsyncSession):
        self.repository = UserRepository(session)

    async def get_user(self, user_id: int) -> User:
        """사용자 조회

        Raises:
            UserNotFoundException: 사용자를 찾을 수 없는 경우
        """
        user = await self.repository.get_by_id(user_id)
        if not user:
            raise UserNotFoundException(user_id=user_id)
        return user

    async def resolve_current_user(self, user_id: Optional[int]) -> User:
        """요청자 ID를 사용자로 변환

        ID가 없거나 존재하지 않는 사용자면 익명 사용자를 반환합니다.
        """
        if user_id is None:
            return anonymous_user()
        user = await self.repository.get_by_id(user_id)
        return user or anonymous_user()

    async def create_user(self, data: UserCreate) -> User:
        """사용자 생성

        Raises:
            LoginIdAlreadyExistsException: 로그인 ID가 중복된 경우
        """
        if await self.repository.get_by_login_id(data.login_id):
            raise LoginIdAlreadyExistsException(login_id=data.login_id)

        user = await self.repository.create(
            User(login_id=data.login_id, name=data.name)
        )

        logger.info(
            "User created",
            extra={
                "request_id": get_request_id(),
                "user_id": user.id,
                "login_id": user.login_id,
            },
        )
        return user
