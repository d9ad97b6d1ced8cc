"""Issues 도메인 모델 정의

이슈, 담당자, 댓글, 라벨, 멘션을 정의합니다.
마일스톤 카운터와 이슈 검색이 읽는 컬럼을 중심으로 구성되어 있습니다.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.core.utils.datetime import format_date

# "댓글 있음" 필터의 최소 댓글 수
NUMBER_OF_ONE_MORE_COMMENTS = 1


class State(str, Enum):
    """이슈/마일스톤 상태

    이슈에는 OPEN/CLOSED만 저장되며, ALL은 조회 조건으로만 쓰입니다.
    """

    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"

    @classmethod
    def from_token(cls, token: Optional[str]) -> Optional["State"]:
        """문자열 토큰을 상태로 변환 (대소문자 무시, 모르는 값은 None)"""
        if token is None:
            return None
        normalized = token.strip().lower()
        for state in cls:
            if state.value == normalized:
                return state
        return None


class ResourceType(str, Enum):
    """멘션이 걸린 리소스 종류"""

    ISSUE_POST = "issue_post"
    ISSUE_COMMENT = "issue_comment"
    BOARD_POST = "board_post"
    NONISSUE_COMMENT = "nonissue_comment"
    COMMIT_COMMENT = "commit_comment"


issue_issue_labels = Table(
    "issue_issue_labels",
    Base.metadata,
    Column(
        "issue_id",
        ForeignKey("issues.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "issue_label_id",
        ForeignKey("issue_labels.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Assignee(Base):
    """담당자 (프로젝트별 사용자)"""

    __tablename__ = "assignees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, comment="사용자 ID"
    )
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id"), nullable=False, comment="프로젝트 ID"
    )

    __table_args__ = (
        UniqueConstraint("user_id", "project_id", name="uq_assignees_user_project"),
    )

    def __repr__(self) -> str:
        return (
            f"<Assignee(id={self.id}, user_id={self.user_id}, "
            f"project_id={self.project_id})>"
        )


class IssueLabel(Base):
    """이슈 라벨"""

    __tablename__ = "issue_labels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id"), nullable=False, index=True
    )
    category: Mapped[str] = mapped_column(
        String(100), nullable=False, default="", comment="라벨 분류"
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, comment="라벨 이름")
    color: Mapped[str] = mapped_column(
        String(20), nullable=False, default="#999999", comment="표시 색상"
    )

    def __repr__(self) -> str:
        return f"<IssueLabel(id={self.id}, name={self.name})>"


class Issue(Base):
    """이슈 모델"""

    __tablename__ = "issues"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True, comment="이슈 ID"
    )
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id"), nullable=False, comment="프로젝트 ID"
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, comment="제목")
    body: Mapped[str] = mapped_column(Text, nullable=False, default="", comment="본문")
    state: Mapped[State] = mapped_column(
        String(10),
        nullable=False,
        default=State.OPEN.value,
        server_default="open",
        comment="상태 (open/closed)",
    )
    author_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id"), nullable=True, comment="작성자 ID (익명은 NULL)"
    )
    assignee_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("assignees.id"), nullable=True, comment="담당자 ID"
    )
    # 마일스톤 삭제 시 DB cascade 대신 서비스에서 NULL로 분리합니다.
    milestone_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("milestones.id"), nullable=True, comment="마일스톤 ID"
    )
    due_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="마감 일시"
    )
    num_of_comments: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0", comment="댓글 수"
    )
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="생성 일시",
    )
    updated_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        onupdate=func.now(),
        nullable=True,
        comment="수정 일시",
    )

    assignee: Mapped[Optional[Assignee]] = relationship(lazy="selectin")
    labels: Mapped[list[IssueLabel]] = relationship(
        secondary=issue_issue_labels,
        lazy="selectin",
        order_by=IssueLabel.id,
    )

    __table_args__ = (
        Index("ix_issues_project_id_state", "project_id", "state"),
        Index("ix_issues_milestone_id", "milestone_id"),
        Index("ix_issues_author_id", "author_id"),
        Index("ix_issues_created_date", "created_date"),
    )

    @property
    def is_open(self) -> bool:
        return self.state == State.OPEN

    @property
    def assignee_user_id(self) -> Optional[int]:
        """담당 사용자 ID (미할당이면 None)"""
        return self.assignee.user_id if self.assignee else None

    @property
    def due_date_string(self) -> Optional[str]:
        return format_date(self.due_date)

    def __repr__(self) -> str:
        return (
            f"<Issue(id={self.id}, project_id={self.project_id}, "
            f"state={self.state}, milestone_id={self.milestone_id})>"
        )


class IssueComment(Base):
    """이슈 댓글"""

    __tablename__ = "issue_comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    issue_id: Mapped[int] = mapped_column(
        ForeignKey("issues.id", ondelete="CASCADE"), nullable=False, index=True
    )
    author_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id"), nullable=True, index=True
    )
    contents: Mapped[str] = mapped_column(Text, nullable=False, comment="댓글 내용")
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<IssueComment(id={self.id}, issue_id={self.issue_id})>"


class Mention(Base):
    """멘션 (리소스 본문에서 @로 언급된 사용자)"""

    __tablename__ = "mentions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    resource_type: Mapped[ResourceType] = mapped_column(
        String(30), nullable=False, comment="리소스 종류"
    )
    resource_id: Mapped[str] = mapped_column(
        String(64), nullable=False, comment="리소스 ID (문자열)"
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        Index("ix_mentions_user_id_resource_type", "user_id", "resource_type"),
        Index("ix_mentions_resource", "resource_type", "resource_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Mention(type={self.resource_type}, "
            f"resource_id={self.resource_id}, user_id={self.user_id})>"
        )
