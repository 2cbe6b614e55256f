"""
서비스 설정 싱글턴 관리.
앱 시작 시 환경 변수에서 한 번 읽고, 모든 요청에서 재사용한다.
"""
import os
import sys
from dataclasses import dataclass
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.analysis import MAX_SWEEP_STATIONS


@dataclass(frozen=True)
class ServiceSettings:
    min_stations: int = 2
    max_stations: int = 10
    default_stations: int = 5
    max_sweep_stations: int = 10
    rate_limit_per_minute: int = 60
    cache_size: int = 256
    cache_ttl_seconds: int = 300

    @classmethod
    def from_env(cls) -> "ServiceSettings":
        max_stations = int(os.getenv("URINAL_MAX_STATIONS", "10"))
        if max_stations < cls.min_stations:
            raise ValueError(
                f"URINAL_MAX_STATIONS must be at least {cls.min_stations}, got {max_stations}"
            )
        return cls(
            max_stations=max_stations,
            default_stations=min(cls.default_stations, max_stations),
            max_sweep_stations=min(max_stations, MAX_SWEEP_STATIONS),
            rate_limit_per_minute=int(os.getenv("RATE_LIMIT_PER_MINUTE", "60")),
            cache_size=int(os.getenv("RECOMMEND_CACHE_SIZE", "256")),
            cache_ttl_seconds=int(os.getenv("RECOMMEND_CACHE_TTL", "300")),
        )


class SettingsRegistry:
    def __init__(self):
        self.settings: ServiceSettings | None = None

    def load(self):
        self.settings = ServiceSettings.from_env()

    def get_settings(self) -> ServiceSettings:
        if self.settings is None:
            raise RuntimeError("Settings not loaded")
        return self.settings


registry = SettingsRegistry()
