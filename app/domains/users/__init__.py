"""Users 도메인 모듈

구조:
    - models.py: SQLAlchemy 모델 (User, 익명 사용자 센티널)
    - schemas.py: Pydantic 스키마
    - repository.py: 데이터 접근 계층
    - service.py: 사용자 생성/조회, 현재 사용자 해석
    - router.py: API 엔드포인트
    - exceptions.py: 도메인 예외
"""

from app.domains.users.exceptions import (
    LoginIdAlreadyExistsException,
    UserErrorCode,
    UserNotFoundException,
)
from app.domains.users.models import ANONYMOUS_USER_ID, User, anonymous_user

__all__ = [
    "ANONYMOUS_USER_ID",
    "User",
    "anonymous_user",
    "UserErrorCode",
    "UserNotFoundException",
    "LoginIdAlreadyExistsException",
]
