import asyncio
import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query
from api.schemas import (
    RecommendRequest, RecommendResponse, StationScoreModel, BreakdownModel,
    CollectiveWelfareModel, NextUserViabilityModel, TwoUserLookaheadModel,
    SymmetryModel, NoticeModel, AdvisoryModel, ScoreTableRow, DefaultsResponse,
)
from api.dependencies import registry
from api.cache import recommend_cache, make_key
from src.analysis import score_table
from src.notices import advisory_for, detect_notices
from src.stallscore import recommend as run_recommend, score_label, score_tier
from src.utils import InvalidConfigurationError

router = APIRouter()


def _check_station_bounds(station_count: int):
    settings = registry.get_settings()
    if not settings.min_stations <= station_count <= settings.max_stations:
        raise HTTPException(
            status_code=400,
            detail=f"소변기 수는 {settings.min_stations}~{settings.max_stations} 범위여야 합니다",
        )


def _station_model(score) -> StationScoreModel:
    detail = score.breakdown.collective_welfare_details
    return StationScoreModel(
        position=score.position,
        composite=score.composite,
        tier=score_tier(score.composite),
        label=score_label(score.composite),
        breakdown=BreakdownModel(
            proximity=score.breakdown.proximity,
            edge=score.breakdown.edge,
            collective_welfare=score.breakdown.collective_welfare,
            collective_welfare_details=CollectiveWelfareModel(
                next_user_viability=NextUserViabilityModel(
                    score=detail.next_user_viability.score,
                    acceptable=detail.next_user_viability.acceptable,
                    total=detail.next_user_viability.total,
                ),
                two_user_lookahead=TwoUserLookaheadModel(
                    score=detail.two_user_lookahead.score,
                    max_second_user_options=detail.two_user_lookahead.max_second_user_options,
                ),
                symmetry_preservation=SymmetryModel(
                    score=detail.symmetry_preservation.score,
                    gaps=list(detail.symmetry_preservation.gaps),
                ),
            ),
            buffer=score.breakdown.buffer,
        ),
        excluded=score.excluded,
        exclusion_reason=score.exclusion_reason,
    )


def _compute(station_count: int, occupied: List[int], has_dividers: bool):
    try:
        return run_recommend(station_count, occupied, has_dividers)
    except InvalidConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logging.error(f"Recommend failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="추천 계산 중 오류가 발생했습니다")


@router.post(
    "/recommend",
    response_model=RecommendResponse,
    summary="최적 소변기 위치 추천",
    description="소변기 수, 사용 중인 위치, 칸막이 유무를 기반으로 빈 자리마다 "
    "근접도·끝자리·공동체 후생·완충 구역 점수를 계산하고 최적 위치를 추천합니다.",
    response_description="추천 위치, 상태, 후보 점수, 제외된 비사회적 선택지 등 상세 결과",
)
async def recommend(req: RecommendRequest):
    _check_station_bounds(req.station_count)

    # 캐시 조회 (잘못된 입력은 저장되지 않으므로 항상 미스)
    key = make_key(req.station_count, req.occupied, req.has_dividers)
    cached_result = recommend_cache.get(key)
    if cached_result is not None:
        return cached_result

    result = _compute(req.station_count, req.occupied, req.has_dividers)

    advisory = advisory_for(result)
    response = RecommendResponse(
        station_count=req.station_count,
        occupied=sorted(req.occupied),
        has_dividers=req.has_dividers,
        recommendation=result.recommendation,
        status=result.status.value,
        message=result.message,
        scores=[_station_model(s) for s in result.scores],
        all_scores=[_station_model(s) for s in result.all_scores],
        excluded_options=[_station_model(s) for s in result.excluded_options],
        best_score=_station_model(result.best_score) if result.best_score else None,
        notices=[
            NoticeModel(kind=n.kind, title=n.title, body=n.body, items=list(n.items))
            for n in detect_notices(req.station_count, req.occupied)
        ],
        advisory=AdvisoryModel(
            title=advisory.title,
            body=advisory.body,
            options=list(advisory.options),
            extra=advisory.extra,
        ) if advisory else None,
    )

    recommend_cache.set(key, response)
    return response


@router.get(
    "/recommend/table",
    response_model=List[ScoreTableRow],
    summary="자리별 점수표",
    description="빈 자리마다 종합 점수와 세부 점수, 등급, 후보/제외 여부를 한 행씩 반환합니다.",
    response_description="위치 순 점수표",
)
async def recommend_table(
    station_count: int = Query(..., description="소변기 수 (예: 5)"),
    occupied: List[int] = Query([], description="사용 중인 위치 (반복 지정)"),
    has_dividers: bool = Query(False, description="칸막이 유무"),
):
    _check_station_bounds(station_count)
    result = await asyncio.to_thread(_compute, station_count, occupied, has_dividers)
    frame = score_table(result)
    return [ScoreTableRow(**row) for row in frame.to_dict(orient="records")]


@router.get(
    "/defaults",
    response_model=DefaultsResponse,
    summary="기본 설정 조회",
    description="초기화 시 사용하는 기본 구성(5개, 빈 화장실, 칸막이 없음)과 허용 범위를 반환합니다.",
)
async def defaults():
    settings = registry.get_settings()
    return DefaultsResponse(
        station_count=settings.default_stations,
        occupied=[],
        has_dividers=False,
        min_stations=settings.min_stations,
        max_stations=settings.max_stations,
    )
