"""Milestones 도메인 모듈

마일스톤 CRUD와 이슈 카운터(open/closed/total, 완료율)를 담당합니다.
카운터는 ``MilestoneService.add_issue`` / ``remove_issue`` /
``update_issue_info``로만 갱신됩니다.
"""

from app.domains.milestones.exceptions import (
    MilestoneErrorCode,
    MilestoneNotFoundException,
)
from app.domains.milestones.models import (
    DEFAULT_SORTER,
    NULL_MILESTONE_ID,
    Milestone,
    calculate_completion_rate,
)

__all__ = [
    "DEFAULT_SORTER",
    "NULL_MILESTONE_ID",
    "Milestone",
    "calculate_completion_rate",
    "MilestoneErrorCode",
    "MilestoneNotFoundException",
]
