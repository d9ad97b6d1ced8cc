"""날짜/시간 유틸리티"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

UTC = timezone.utc
DATE_FORMAT = "%Y-%m-%d"


def format_date(value: Optional[date]) -> Optional[str]:
    """날짜를 yyyy-MM-dd 문자열로 변환 (None은 그대로)"""
    if value is None:
        return None
    return value.strftime(DATE_FORMAT)


def parse_date(date_str: str) -> Optional[date]:
    """yyyy-MM-dd 문자열 파싱 (형식이 다르면 None)"""
    try:
        return datetime.strptime(date_str, DATE_FORMAT).date()
    except ValueError:
        return None


def start_of_day(value: date) -> datetime:
    """해당 날짜 00:00:00 (UTC)"""
    return datetime.combine(value, time.min, tzinfo=UTC)


def start_of_next_day(value: date) -> datetime:
    """다음 날 00:00:00 (UTC)

    날짜 단위 상한을 포함 조건으로 걸 때 ``column < start_of_next_day(d)``
    형태로 사용합니다.
    """
    return start_of_day(value + timedelta(days=1))
