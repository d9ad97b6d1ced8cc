"""create_issue_board_tables

Revision ID: 5c1d2e7a9b40
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1d2e7a9b40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at(name: str = "created_at") -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
        comment="생성 일시",
    )


def upgrade() -> None:
    """users, organizations, projects, milestones, issues 관련 테이블 생성"""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False, comment="사용자 ID"),
        sa.Column("login_id", sa.String(100), nullable=False, comment="로그인 ID (멘션 대상 식별자)"),
        sa.Column("name", sa.String(200), nullable=False, comment="표시 이름"),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("login_id"),
    )

    op.create_table(
        "organizations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False, comment="조직 ID"),
        sa.Column("name", sa.String(100), nullable=False, comment="조직 이름"),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "organization_users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("organization_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, comment="조직 내 역할 (admin/member)"),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("organization_id", "user_id", name="uq_organization_users"),
    )

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False, comment="프로젝트 ID"),
        sa.Column("name", sa.String(100), nullable=False, comment="프로젝트 이름"),
        sa.Column("organization_id", sa.Integer(), nullable=True, comment="소속 조직 ID (개인 프로젝트는 NULL)"),
        sa.Column("project_scope", sa.String(20), nullable=False, comment="공개 범위 (public/protected/private)"),
        _created_at(),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_organization_id", "projects", ["organization_id"])

    op.create_table(
        "project_users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("project_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("project_id", "user_id", name="uq_project_users"),
    )

    op.create_table(
        "milestones",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False, comment="마일스톤 ID"),
        sa.Column("title", sa.String(255), nullable=False, comment="제목"),
        sa.Column("due_date", sa.Date(), nullable=False, comment="마감일"),
        sa.Column("contents", sa.Text(), nullable=False, comment="설명"),
        sa.Column("num_open_issues", sa.Integer(), server_default="0", nullable=False),
        sa.Column("num_closed_issues", sa.Integer(), server_default="0", nullable=False),
        sa.Column("num_total_issues", sa.Integer(), server_default="0", nullable=False),
        sa.Column("completion_rate", sa.Integer(), server_default="0", nullable=False, comment="완료율(%)"),
        sa.Column("project_id", sa.Integer(), nullable=False, comment="프로젝트 ID"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_milestones_project_id", "milestones", ["project_id"])

    op.create_table(
        "assignees",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False, comment="사용자 ID"),
        sa.Column("project_id", sa.Integer(), nullable=False, comment="프로젝트 ID"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "project_id", name="uq_assignees_user_project"),
    )

    op.create_table(
        "issue_labels",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("project_id", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(100), nullable=False, comment="라벨 분류"),
        sa.Column("name", sa.String(100), nullable=False, comment="라벨 이름"),
        sa.Column("color", sa.String(20), nullable=False, comment="표시 색상"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_issue_labels_project_id", "issue_labels", ["project_id"])

    op.create_table(
        "issues",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False, comment="이슈 ID"),
        sa.Column("project_id", sa.Integer(), nullable=False, comment="프로젝트 ID"),
        sa.Column("title", sa.String(255), nullable=False, comment="제목"),
        sa.Column("body", sa.Text(), nullable=False, comment="본문"),
        sa.Column("state", sa.String(10), server_default="open", nullable=False, comment="상태 (open/closed)"),
        sa.Column("author_id", sa.Integer(), nullable=True, comment="작성자 ID (익명은 NULL)"),
        sa.Column("assignee_id", sa.Integer(), nullable=True, comment="담당자 ID"),
        sa.Column("milestone_id", sa.Integer(), nullable=True, comment="마일스톤 ID"),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True, comment="마감 일시"),
        sa.Column("num_of_comments", sa.Integer(), server_default="0", nullable=False, comment="댓글 수"),
        _created_at("created_date"),
        sa.Column("updated_date", sa.DateTime(timezone=True), nullable=True, comment="수정 일시"),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"]),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["assignee_id"], ["assignees.id"]),
        sa.ForeignKeyConstraint(["milestone_id"], ["milestones.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_issues_project_id_state", "issues", ["project_id", "state"])
    op.create_index("ix_issues_milestone_id", "issues", ["milestone_id"])
    op.create_index("ix_issues_author_id", "issues", ["author_id"])
    op.create_index("ix_issues_created_date", "issues", ["created_date"])

    op.create_table(
        "issue_issue_labels",
        sa.Column("issue_id", sa.Integer(), nullable=False),
        sa.Column("issue_label_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["issue_id"], ["issues.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["issue_label_id"], ["issue_labels.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("issue_id", "issue_label_id"),
    )

    op.create_table(
        "issue_comments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("issue_id", sa.Integer(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=True),
        sa.Column("contents", sa.Text(), nullable=False, comment="댓글 내용"),
        _created_at("created_date"),
        sa.ForeignKeyConstraint(["issue_id"], ["issues.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_issue_comments_issue_id", "issue_comments", ["issue_id"])
    op.create_index("ix_issue_comments_author_id", "issue_comments", ["author_id"])

    op.create_table(
        "mentions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("resource_type", sa.String(30), nullable=False, comment="리소스 종류"),
        sa.Column("resource_id", sa.String(64), nullable=False, comment="리소스 ID (문자열)"),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_mentions_user_id_resource_type", "mentions", ["user_id", "resource_type"]
    )
    op.create_index("ix_mentions_resource", "mentions", ["resource_type", "resource_id"])


def downgrade() -> None:
    """전체 테이블 삭제 (생성 역순)"""
    op.drop_index("ix_mentions_resource", table_name="mentions")
    op.drop_index("ix_mentions_user_id_resource_type", table_name="mentions")
    op.drop_table("mentions")
    op.drop_index("ix_issue_comments_author_id", table_name="issue_comments")
    op.drop_index("ix_issue_comments_issue_id", table_name="issue_comments")
    op.drop_table("issue_comments")
    op.drop_table("issue_issue_labels")
    op.drop_index("ix_issues_created_date", table_name="issues")
    op.drop_index("ix_issues_author_id", table_name="issues")
    op.drop_index("ix_issues_milestone_id", table_name="issues")
    op.drop_index("ix_issues_project_id_state", table_name="issues")
    op.drop_table("issues")
    op.drop_index("ix_issue_labels_project_id", table_name="issue_labels")
    op.drop_table("issue_labels")
    op.drop_table("assignees")
    op.drop_index("ix_milestones_project_id", table_name="milestones")
    op.drop_table("milestones")
    op.drop_table("project_users")
    op.drop_index("ix_projects_organization_id", table_name="projects")
    op.drop_table("projects")
    op.drop_table("organization_users")
    op.drop_table("organizations")
    op.drop_table("users")
