"""
Rate limiting for the /api/ routes.

인메모리 슬라이딩 윈도우 방식. 단일 워커 배포 기준으로 정확하다.
"""
import logging
import time
from typing import Dict, List

logger = logging.getLogger(__name__)


class SlidingWindowLimiter:
    """
    클라이언트 키별 최근 요청 시각을 보관하고 window(초) 안의 개수로 판정한다.
    오래된 키는 cleanup_interval마다 정리한다.
    """

    def __init__(self, cleanup_interval: float = 3600) -> None:
        self._requests: Dict[str, List[float]] = {}
        self._last_cleanup = time.time()
        self._cleanup_interval = cleanup_interval

    def _periodic_cleanup(self, now: float, window: int) -> None:
        if now - self._last_cleanup < self._cleanup_interval:
            return
        self._last_cleanup = now
        stale = [k for k, ts in self._requests.items() if not ts or now - ts[-1] > window * 2]
        for k in stale:
            del self._requests[k]
        if stale:
            logger.debug("rate limiter dropped %d idle clients", len(stale))

    async def is_rate_limited(self, key: str, limit: int, window: int) -> bool:
        """limit 초과 시 True (요청 차단). 허용된 요청만 기록한다."""
        now = time.time()
        self._periodic_cleanup(now, window)

        recent = [ts for ts in self._requests.get(key, []) if now - ts < window]
        if len(recent) >= limit:
            self._requests[key] = recent
            return True

        recent.append(now)
        self._requests[key] = recent
        return False

    def reset(self) -> None:
        self._requests.clear()
