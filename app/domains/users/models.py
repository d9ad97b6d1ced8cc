"""Users 도메인 모델 정의

익명 사용자는 DB에 저장하지 않고, ``ANONYMOUS_USER_ID``를 가진
일시 객체(``anonymous_user()``)로 표현합니다.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base

# 검색 조건에서 "명시적으로 비어 있음"(미할당, 작성자 없음)을 뜻하는 예약 ID
ANONYMOUS_USER_ID = -1


class User(Base):
    """사용자 모델"""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="사용자 ID",
    )
    login_id: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        comment="로그인 ID (멘션 대상 식별자)",
    )
    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        default="",
        comment="표시 이름",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="생성 일시",
    )

    @property
    def is_anonymous(self) -> bool:
        return self.id == ANONYMOUS_USER_ID

    def __repr__(self) -> str:
        return f"<User(id={self.id}, login_id={self.login_id})>"


def anonymous_user() -> User:
    """저장되지 않는 익명 사용자 객체"""
    return User(id=ANONYMOUS_USER_ID, login_id="anonymous", name="Anonymous")
