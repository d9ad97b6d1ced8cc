"""Projects 도메인 모델 정의

조직, 프로젝트와 각각의 멤버십을 관리합니다.
이슈 검색의 프로젝트 가시성 판단에 필요한 최소한의 정보만 가집니다.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class ProjectScope(str, Enum):
    """프로젝트 공개 범위"""

    PUBLIC = "public"  # 누구나
    PROTECTED = "protected"  # 조직 멤버
    PRIVATE = "private"  # 프로젝트 멤버만


class OrganizationRole(str, Enum):
    """조직 내 역할"""

    ADMIN = "admin"
    MEMBER = "member"


class Organization(Base):
    """조직 모델"""

    __tablename__ = "organizations"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True, comment="조직 ID"
    )
    name: Mapped[str] = mapped_column(
        String(100), unique=True, nullable=False, comment="조직 이름"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="생성 일시",
    )

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, name={self.name})>"


class OrganizationUser(Base):
    """조직 멤버십"""

    __tablename__ = "organization_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    role: Mapped[OrganizationRole] = mapped_column(
        String(20),
        nullable=False,
        default=OrganizationRole.MEMBER.value,
        comment="조직 내 역할 (admin/member)",
    )

    __table_args__ = (
        UniqueConstraint(
            "organization_id", "user_id", name="uq_organization_users"
        ),
    )


class Project(Base):
    """프로젝트 모델"""

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True, comment="프로젝트 ID"
    )
    name: Mapped[str] = mapped_column(
        String(100), nullable=False, comment="프로젝트 이름"
    )
    organization_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("organizations.id"),
        nullable=True,
        index=True,
        comment="소속 조직 ID (개인 프로젝트는 NULL)",
    )
    project_scope: Mapped[ProjectScope] = mapped_column(
        String(20),
        nullable=False,
        default=ProjectScope.PUBLIC.value,
        comment="공개 범위 (public/protected/private)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="생성 일시",
    )

    def __repr__(self) -> str:
        return (
            f"<Project(id={self.id}, name={self.name}, "
            f"organization_id={self.organization_id}, "
            f"scope={self.project_scope})>"
        )


class ProjectUser(Base):
    """프로젝트 멤버십"""

    __tablename__ = "project_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_project_users"),
    )
