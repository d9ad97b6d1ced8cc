"""페이지네이션 유틸리티"""

from fastapi import Query

from app.core.config import settings


class PageParams:
    """페이지 번호/크기 쿼리 파라미터 의존성

    크기 기본값과 상한은 ``DEFAULT_PAGE_SIZE`` / ``MAX_PAGE_SIZE`` 설정을 따릅니다.
    오프셋 계산은 검색 서비스가 ``SearchCondition.page_num``으로 합니다.
    """

    def __init__(
        self,
        page: int = Query(1, ge=1, description="페이지 번호 (1부터)"),
        size: int = Query(
            settings.default_page_size,
            ge=1,
            le=settings.max_page_size,
            description="페이지 크기",
        ),
    ):
        self.page = page
        self.size = size
