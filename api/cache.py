# -*- coding: utf-8 -*-
"""
캐시 관리 모듈
- /recommend 엔드포인트용 LRU 캐시 (TTL 5분, 최대 256개)
- 추천은 입력의 순수 함수이므로 TTL은 메모리 상한 역할만 한다
- Thread-safe: RLock으로 동시 접근 보호
"""
import threading
import time
from collections import OrderedDict
from typing import Any, Dict, Iterable, Optional, Tuple

CacheKey = Tuple[int, Tuple[int, ...], bool]


def make_key(station_count: int, occupied: Iterable[int], has_dividers: bool) -> CacheKey:
    """점유 순서와 무관한 캐시 키 (정렬된 튜플)"""
    return station_count, tuple(sorted(occupied)), bool(has_dividers)


class RecommendCache:
    """
    /recommend 엔드포인트용 LRU 캐시 (thread-safe)
    - 캐시 키: (station_count, occupied 정렬 튜플, has_dividers)
    - 만료: ttl_seconds 경과 시 조회 전에 정리
    """

    def __init__(self, max_size: int = 256, ttl_seconds: int = 300):
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self.cache: "OrderedDict[CacheKey, Dict[str, Any]]" = OrderedDict()
        self._lock = threading.RLock()

    def _cleanup_expired(self, now: float):
        """만료된 항목 제거 (caller must hold lock)"""
        expired = [k for k, entry in self.cache.items() if now - entry["timestamp"] > self.ttl_seconds]
        for k in expired:
            del self.cache[k]

    def get(self, key: CacheKey) -> Optional[Any]:
        with self._lock:
            self._cleanup_expired(time.time())
            entry = self.cache.get(key)
            if entry is None:
                return None
            self.cache.move_to_end(key)
            return entry["value"]

    def set(self, key: CacheKey, value: Any):
        with self._lock:
            now = time.time()
            self._cleanup_expired(now)
            if key in self.cache:
                self.cache.move_to_end(key)
            elif len(self.cache) >= self.max_size:
                self.cache.popitem(last=False)
            self.cache[key] = {"value": value, "timestamp": now}

    def configure(self, max_size: int, ttl_seconds: int):
        """설정 변경 시 크기/TTL을 갱신하고 비운다."""
        with self._lock:
            self.max_size = max_size
            self.ttl_seconds = ttl_seconds
            self.cache.clear()

    def invalidate(self):
        with self._lock:
            self.cache.clear()

    def __len__(self):
        with self._lock:
            return len(self.cache)


# 전역 캐시 인스턴스
recommend_cache = RecommendCache()
