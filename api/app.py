# -*- coding: utf-8 -*-
"""
Urinal Algorithm FastAPI Application
"""
import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from api.rate_limit import SlidingWindowLimiter
from api.cache import recommend_cache
from api.dependencies import registry
from api.routers import recommend, sweep

VERSION = "1.0.0"

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """IP별 분당 요청 제한 미들웨어 (/api/ 경로만)"""
    def __init__(self, app, requests_per_minute: int = 60):
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.limiter = SlidingWindowLimiter()

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith("/api/"):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"

        if await self.limiter.is_rate_limited(client_ip, self.requests_per_minute, window=60):
            logger.warning("rate limit exceeded for %s", client_ip)
            return JSONResponse(
                status_code=429,
                content={"detail": "요청 한도를 초과했습니다. 잠시 후 다시 시도해주세요."},
            )

        return await call_next(request)


@asynccontextmanager
async def lifespan(app: FastAPI):
    registry.load()
    settings = registry.get_settings()
    recommend_cache.configure(settings.cache_size, settings.cache_ttl_seconds)
    logger.info(
        "Urinal Algorithm %s ready: stations %d..%d, cache %d/%ds",
        VERSION, settings.min_stations, settings.max_stations,
        settings.cache_size, settings.cache_ttl_seconds,
    )
    yield


app = FastAPI(title="Urinal Algorithm", version=VERSION, lifespan=lifespan)


allowed_origins = os.getenv("ALLOWED_ORIGINS", "http://localhost:8000,http://127.0.0.1:8000").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=500)

app.add_middleware(
    RateLimitMiddleware,
    requests_per_minute=int(os.getenv("RATE_LIMIT_PER_MINUTE", "60")),
)

app.include_router(recommend.router, prefix="/api", tags=["recommend"])
app.include_router(sweep.router, prefix="/api", tags=["analysis"])


@app.get(
    "/health",
    summary="서비스 상태 확인",
    description="설정 로드 여부, 버전, 추천 캐시 크기 등 서비스 상태를 반환합니다.",
    response_description="status(healthy/unavailable), version, cache_entries",
)
async def health():
    try:
        settings = registry.get_settings()
    except RuntimeError:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "detail": "Settings not loaded"},
        )
    return {
        "status": "healthy",
        "version": VERSION,
        "max_stations": settings.max_stations,
        "cache_entries": len(recommend_cache),
    }
