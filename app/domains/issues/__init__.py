"""Issues 도메인 모듈

구조:
    - models.py: 이슈, 담당자, 댓글, 라벨, 멘션
    - search.py: 검색 조건(SearchCondition)과 쿼리 빌더(IssueSearchBuilder)
    - mentions.py: 본문 멘션 추출
    - repository.py / service.py / router.py / exceptions.py
"""

from app.domains.issues.exceptions import (
    InvalidIssueStateException,
    IssueErrorCode,
    IssueNotFoundException,
    LabelAlreadyExistsException,
    LabelNotFoundException,
)
from app.domains.issues.models import (
    Assignee,
    Issue,
    IssueComment,
    IssueLabel,
    Mention,
    ResourceType,
    State,
)

__all__ = [
    "Assignee",
    "Issue",
    "IssueComment",
    "IssueLabel",
    "Mention",
    "ResourceType",
    "State",
    "IssueErrorCode",
    "IssueNotFoundException",
    "InvalidIssueStateException",
    "LabelAlreadyExistsException",
    "LabelNotFoundException",
]
