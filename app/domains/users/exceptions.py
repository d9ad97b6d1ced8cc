"""Users 도메인 예외 정의"""

from enum import Enum

from app.core.exceptions import ConflictException, NotFoundException


class UserErrorCode(str, Enum):
    """사용자 도메인 에러 코드"""

    USER_NOT_FOUND = "USER_NOT_FOUND"
    LOGIN_ID_ALREADY_EXISTS = "LOGIN_ID_ALREADY_EXISTS"


class UserNotFoundException(NotFoundException):
    """사용자를 찾을 수 없는 경우"""

    def __init__(self, user_id: int | None = None):
        detail = {"user_id": user_id} if user_id else {}
        super().__init__(
            message="사용자를 찾을 수 없습니다.",
            error_code=UserErrorCode.USER_NOT_FOUND,
            detail=detail,
        )


class LoginIdAlreadyExistsException(ConflictException):
    """이미 사용 중인 로그인 ID인 경우"""

    def __init__(self, login_id: str | None = None):
        detail = {"login_id": login_id} if login_id else {}
        super().__init__(
            message="이미 사용 중인 로그인 ID입니다.",
            error_code=UserErrorCode.LOGIN_ID_ALREADY_EXISTS,
            detail=detail,
        )
