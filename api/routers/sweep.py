"""
Configuration Sweep Router
==========================
Runs every occupancy pattern of a row through the engine and reports how
often each status comes up. Useful for checking how the policy behaves
across the whole configuration space rather than one layout at a time.
"""
import asyncio

import pandas as pd
from fastapi import APIRouter, HTTPException, Query
from api.schemas import SweepResponse, SweepRow, StatusShare
from api.dependencies import registry
from src.analysis import status_summary, sweep

router = APIRouter()


def _optional_int(value):
    return None if pd.isna(value) else int(value)


@router.get(
    "/sweep",
    response_model=SweepResponse,
    summary="전체 점유 패턴 분석",
    description="주어진 소변기 수의 모든 점유 조합(2^n)에 대해 추천을 실행하고 "
    "상태별 빈도와 조합별 결과를 반환합니다.",
    response_description="상태 분포 요약과 조합별 추천 결과",
)
async def run_sweep(
    station_count: int = Query(5, description="소변기 수"),
    has_dividers: bool = Query(False, description="칸막이 유무"),
):
    settings = registry.get_settings()
    if not settings.min_stations <= station_count <= settings.max_sweep_stations:
        raise HTTPException(
            status_code=400,
            detail=f"분석 가능한 소변기 수는 {settings.min_stations}~{settings.max_sweep_stations} 입니다",
        )

    frame = await asyncio.to_thread(sweep, station_count, has_dividers)
    summary = status_summary(frame)

    return SweepResponse(
        station_count=station_count,
        has_dividers=has_dividers,
        n_configurations=len(frame),
        summary=[
            StatusShare(status=row["status"], count=int(row["count"]), share=float(row["share"]))
            for _, row in summary.iterrows()
        ],
        configurations=[
            SweepRow(
                occupied=list(row["occupied"]),
                status=row["status"],
                recommendation=_optional_int(row["recommendation"]),
                best_composite=_optional_int(row["best_composite"]),
                n_excluded=int(row["n_excluded"]),
            )
            for _, row in frame.iterrows()
        ],
    )
