"""유틸리티 모듈"""

from app.core.utils.datetime import (
    DATE_FORMAT,
    UTC,
    format_date,
    parse_date,
    start_of_day,
    start_of_next_day,
)
from app.core.utils.pagination import PageParams
from app.core.utils.time import Stopwatch, measure_time

__all__ = [
    "UTC",
    "DATE_FORMAT",
    "format_date",
    "parse_date",
    "start_of_day",
    "start_of_next_day",
    "PageParams",
    "Stopwatch",
    "measure_time",
]
