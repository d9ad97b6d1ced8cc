"""요청 컨텍스트 관리

요청 ID를 로그 컨텍스트로 보관합니다. 검색 가시성 판단에 쓰이는
현재 사용자는 컨텍스트가 아니라 라우터 의존성에서 명시적으로 전달됩니다.
"""

import contextvars
import uuid
from typing import Optional

request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)


def get_request_id() -> Optional[str]:
    """현재 요청 ID 반환"""
    return request_id_ctx.get()


def set_request_id(request_id: Optional[str] = None) -> str:
    """요청 ID 설정 (없으면 새로 생성)"""
    if not request_id:
        request_id = generate_request_id()
    request_id_ctx.set(request_id)
    return request_id


def generate_request_id() -> str:
    """새 요청 ID 생성"""
    return str(uuid.uuid4())
