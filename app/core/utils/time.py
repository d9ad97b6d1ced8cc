"""처리 시간 측정"""

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional


@dataclass
class Stopwatch:
    """경과 시간(ms) 측정기

    블록이 끝나기 전에 ``elapsed_ms``를 읽으면 그 시점까지의 시간을 돌려줍니다.
    """

    started_at: float = field(default_factory=time.perf_counter)
    stopped_at: Optional[float] = None

    def stop(self) -> float:
        if self.stopped_at is None:
            self.stopped_at = time.perf_counter()
        return self.elapsed_ms

    @property
    def elapsed_ms(self) -> float:
        end = self.stopped_at if self.stopped_at is not None else time.perf_counter()
        return (end - self.started_at) * 1000


@contextmanager
def measure_time() -> Iterator[Stopwatch]:
    """블록 실행 시간을 측정 (예외가 나도 멈춤)

    Usage::

        with measure_time() as timer:
            issues = await repository.search(query)
        logger.debug(f"search took {timer.elapsed_ms:.2f}ms")
    """
    timer = Stopwatch()
    try:
        yield timer
    finally:
        timer.stop()
