"""Milestones 도메인 예외 정의"""

from enum import Enum

from app.core.exceptions import NotFoundException


class MilestoneErrorCode(str, Enum):
    """마일스톤 도메인 에러 코드"""

    MILESTONE_NOT_FOUND = "MILESTONE_NOT_FOUND"


class MilestoneNotFoundException(NotFoundException):
    """마일스톤을 찾을 수 없는 경우"""

    def __init__(self, milestone_id: int | None = None):
        detail = {"milestone_id": milestone_id} if milestone_id else {}
        super().__init__(
            message="마일스톤을 찾을 수 없습니다.",
            error_code=MilestoneErrorCode.MILESTONE_NOT_FOUND,
            detail=detail,
        )
