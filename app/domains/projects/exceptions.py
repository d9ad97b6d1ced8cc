"""Projects 도메인 예외 정의"""

from enum import Enum

from app.core.exceptions import ConflictException, NotFoundException


class ProjectErrorCode(str, Enum):
    """프로젝트/조직 도메인 에러 코드"""

    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    ORGANIZATION_NOT_FOUND = "ORGANIZATION_NOT_FOUND"
    ORGANIZATION_NAME_ALREADY_EXISTS = "ORGANIZATION_NAME_ALREADY_EXISTS"
    ALREADY_MEMBER = "ALREADY_MEMBER"


class ProjectNotFoundException(NotFoundException):
    """프로젝트를 찾을 수 없는 경우"""

    def __init__(self, project_id: int | None = None):
        detail = {"project_id": project_id} if project_id else {}
        super().__init__(
            message="프로젝트를 찾을 수 없습니다.",
            error_code=ProjectErrorCode.PROJECT_NOT_FOUND,
            detail=detail,
        )


class OrganizationNotFoundException(NotFoundException):
    """조직을 찾을 수 없는 경우"""

    def __init__(self, organization_id: int | None = None):
        detail = {"organization_id": organization_id} if organization_id else {}
        super().__init__(
            message="조직을 찾을 수 없습니다.",
            error_code=ProjectErrorCode.ORGANIZATION_NOT_FOUND,
            detail=detail,
        )


class OrganizationNameAlreadyExistsException(ConflictException):
    """조직 이름이 중복된 경우"""

    def __init__(self, name: str | None = None):
        detail = {"name": name} if name else {}
        super().__init__(
            message="이미 존재하는 조직 이름입니다.",
            error_code=ProjectErrorCode.ORGANIZATION_NAME_ALREADY_EXISTS,
            detail=detail,
        )


class AlreadyMemberException(ConflictException):
    """이미 멤버인 사용자를 다시 추가하는 경우"""

    def __init__(self, user_id: int | None = None):
        detail = {"user_id": user_id} if user_id else {}
        super().__init__(
            message="이미 멤버로 등록된 사용자입니다.",
            error_code=ProjectErrorCode.ALREADY_MEMBER,
            detail=detail,
        )
