"""
pytest 설정 파일
"""
import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# 프로젝트 루트를 sys.path에 추가
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# 앱 import 전에 고정: 테스트 세션 중 rate limit에 걸리지 않도록
os.environ["RATE_LIMIT_PER_MINUTE"] = "100000"
os.environ["URINAL_MAX_STATIONS"] = "10"


@pytest.fixture(scope="session")
def test_client():
    """FastAPI 테스트 클라이언트 픽스처"""
    from api.app import app
    with TestClient(app) as client:
        yield client


@pytest.fixture
def both_ends_taken():
    """양 끝이 사용 중인 7개 배치 (가운데 4번은 비사회적 선택)"""
    return {"station_count": 7, "occupied": [1, 7], "has_dividers": False}


@pytest.fixture
def middlemist_config():
    """Middlemist et al. (1976) 실험 배치"""
    return {"station_count": 3, "occupied": [2], "has_dividers": False}
