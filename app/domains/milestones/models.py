"""Milestones 도메인 모델 정의"""

from datetime import date
from typing import Optional

from sqlalchemy import Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base
from app.core.utils.datetime import format_date

# 이슈 검색에서 "마일스톤 없음"을 뜻하는 예약 ID
NULL_MILESTONE_ID = -1

DEFAULT_SORTER = "dueDate"


def calculate_completion_rate(num_total_issues: int, num_closed_issues: int) -> int:
    """완료율(0~100, 정수 버림) 계산. 이슈가 없으면 0"""
    if num_total_issues <= 0:
        return 0
    return num_closed_issues * 100 // num_total_issues


class Milestone(Base):
    """마일스톤 모델

    이슈 카운터(open/closed/total)와 완료율을 비정규화해서 보관합니다.
    카운터 갱신은 ``MilestoneService``를 통해서만 이루어집니다.
    """

    __tablename__ = "milestones"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True, comment="마일스톤 ID"
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, comment="제목")
    due_date: Mapped[date] = mapped_column(Date, nullable=False, comment="마감일")
    contents: Mapped[str] = mapped_column(
        Text, nullable=False, default="", comment="설명"
    )
    num_open_issues: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    num_closed_issues: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    num_total_issues: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    completion_rate: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0", comment="완료율(%)"
    )
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id"), nullable=False, index=True, comment="프로젝트 ID"
    )

    @property
    def due_date_string(self) -> Optional[str]:
        """마감일 문자열 (yyyy-MM-dd)"""
        return format_date(self.due_date)

    def update_with(self, title: str, contents: str, due_date: date) -> None:
        """편집 가능한 필드(제목, 설명, 마감일)만 복사"""
        self.title = title
        self.contents = contents
        self.due_date = due_date

    def refresh_completion_rate(self) -> None:
        self.completion_rate = calculate_completion_rate(
            self.num_total_issues, self.num_closed_issues
        )

    def __repr__(self) -> str:
        return (
            f"<Milestone(id={self.id}, project_id={self.project_id}, "
            f"open={self.num_open_issues}, closed={self.num_closed_issues}, "
            f"total={self.num_total_issues})>"
        )
