from pydantic import BaseModel, Field
from typing import List, Literal, Optional


VALID_STATUS = Literal["optimal", "normal", "sociallyAware", "desperate", "full"]
VALID_TIER = Literal["recommended", "acceptable", "avoid"]


class RecommendRequest(BaseModel):
    station_count: int = Field(ge=2, le=100)  # 서비스 상한은 설정값으로 재검증
    occupied: List[int] = Field(default_factory=list, max_length=100)
    has_dividers: bool = False


class NextUserViabilityModel(BaseModel):
    score: float
    acceptable: int
    total: int


class TwoUserLookaheadModel(BaseModel):
    score: float
    max_second_user_options: int


class SymmetryModel(BaseModel):
    score: float
    gaps: List[int]


class CollectiveWelfareModel(BaseModel):
    next_user_viability: NextUserViabilityModel
    two_user_lookahead: TwoUserLookaheadModel
    symmetry_preservation: SymmetryModel


class BreakdownModel(BaseModel):
    proximity: int
    edge: int
    collective_welfare: int
    collective_welfare_details: CollectiveWelfareModel
    buffer: int


class StationScoreModel(BaseModel):
    position: int
    composite: int
    tier: VALID_TIER
    label: str  # OPTIMAL / ACCEPTABLE / SUBOPTIMAL / INADVISABLE / CRITICAL
    breakdown: BreakdownModel
    excluded: bool = False
    exclusion_reason: Optional[str] = None


class NoticeModel(BaseModel):
    kind: str
    title: str
    body: str
    items: List[str] = []


class AdvisoryModel(BaseModel):
    title: str
    body: str
    options: List[str] = []
    extra: Optional[str] = None


class RecommendResponse(BaseModel):
    station_count: int
    occupied: List[int]
    has_dividers: bool
    recommendation: Optional[int] = None
    status: VALID_STATUS
    message: str
    scores: List[StationScoreModel]  # 후보만, 점수 내림차순
    all_scores: List[StationScoreModel]  # 빈 자리 전체, 위치 순
    excluded_options: List[StationScoreModel]
    best_score: Optional[StationScoreModel] = None
    notices: List[NoticeModel] = []
    advisory: Optional[AdvisoryModel] = None


class ScoreTableRow(BaseModel):
    position: int
    composite: int
    proximity: int
    edge: int
    collective_welfare: int
    buffer: int
    next_user: float
    next_user_acceptable: int
    next_user_total: int
    two_user: float
    max_second_user_options: int
    symmetry: float
    tier: VALID_TIER
    label: str
    excluded: bool
    candidate: bool
    recommended: bool


class StatusShare(BaseModel):
    status: VALID_STATUS
    count: int
    share: float


class SweepRow(BaseModel):
    occupied: List[int]
    status: VALID_STATUS
    recommendation: Optional[int] = None
    best_composite: Optional[int] = None
    n_excluded: int


class SweepResponse(BaseModel):
    station_count: int
    has_dividers: bool
    n_configurations: int
    summary: List[StatusShare]
    configurations: List[SweepRow]


class DefaultsResponse(BaseModel):
    station_count: int
    occupied: List[int]
    has_dividers: bool
    min_stations: int
    max_stations: int
