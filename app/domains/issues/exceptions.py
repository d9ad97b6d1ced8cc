"""Issues 도메인 예외 정의"""

from enum import Enum
from typing import Iterable

from app.core.exceptions import (
    BadRequestException,
    ConflictException,
    NotFoundException,
)


class IssueErrorCode(str, Enum):
    """이슈 도메인 에러 코드"""

    ISSUE_NOT_FOUND = "ISSUE_NOT_FOUND"
    LABEL_NOT_FOUND = "LABEL_NOT_FOUND"
    LABEL_ALREADY_EXISTS = "LABEL_ALREADY_EXISTS"
    INVALID_ISSUE_STATE = "INVALID_ISSUE_STATE"
    MILESTONE_NOT_IN_PROJECT = "MILESTONE_NOT_IN_PROJECT"


class IssueNotFoundException(NotFoundException):
    """이슈를 찾을 수 없는 경우"""

    def __init__(self, issue_id: int | None = None):
        detail = {"issue_id": issue_id} if issue_id else {}
        super().__init__(
            message="이슈를 찾을 수 없습니다.",
            error_code=IssueErrorCode.ISSUE_NOT_FOUND,
            detail=detail,
        )


class LabelNotFoundException(NotFoundException):
    """프로젝트에 없는 라벨을 지정한 경우"""

    def __init__(self, label_ids: Iterable[int] = ()):
        missing = sorted(label_ids)
        super().__init__(
            message="라벨을 찾을 수 없습니다.",
            error_code=IssueErrorCode.LABEL_NOT_FOUND,
            detail={"label_ids": missing} if missing else {},
        )


class LabelAlreadyExistsException(ConflictException):
    """같은 분류/이름의 라벨이 이미 있는 경우"""

    def __init__(self, category: str, name: str):
        super().__init__(
            message="이미 존재하는 라벨입니다.",
            error_code=IssueErrorCode.LABEL_ALREADY_EXISTS,
            detail={"category": category, "name": name},
        )


class InvalidIssueStateException(BadRequestException):
    """이슈에 저장할 수 없는 상태 (open/closed 외)"""

    def __init__(self, state: str | None = None):
        super().__init__(
            message="이슈 상태는 open 또는 closed만 가능합니다.",
            error_code=IssueErrorCode.INVALID_ISSUE_STATE,
            detail={"state": state} if state else {},
        )


class MilestoneNotInProjectException(BadRequestException):
    """다른 프로젝트의 마일스톤을 지정한 경우"""

    def __init__(self, milestone_id: int, project_id: int):
        super().__init__(
            message="해당 프로젝트의 마일스톤이 아닙니다.",
            error_code=IssueErrorCode.MILESTONE_NOT_IN_PROJECT,
            detail={"milestone_id": milestone_id, "project_id": project_id},
        )
