# -*- coding: utf-8 -*-
"""
Value types for the stall selection engine.

All records are frozen dataclasses. A record is never mutated after it is
built; the selection step attaches exclusion flags through
``StationScore.with_exclusion`` which returns an augmented copy.
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Status(str, Enum):
    OPTIMAL = "optimal"
    NORMAL = "normal"
    SOCIALLY_AWARE = "sociallyAware"
    DESPERATE = "desperate"
    FULL = "full"


# ---------------------------------------------------------------------------
# Weight tables
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScoreWeights:
    """Top-level composite weights. Must sum to exactly 1.0."""
    proximity: float = 0.30
    edge: float = 0.20
    collective_welfare: float = 0.35
    buffer: float = 0.15

    def __post_init__(self):
        total = self.proximity + self.edge + self.collective_welfare + self.buffer
        if not math.isclose(total, 1.0, abs_tol=1e-12):
            raise ValueError(f"composite weights must sum to 1.0, got {total}")


@dataclass(frozen=True)
class WelfareWeights:
    """Weights inside the collective welfare sub-score. Must sum to exactly 1.0."""
    next_user: float = 0.50
    two_user: float = 0.30
    symmetry: float = 0.20

    def __post_init__(self):
        total = self.next_user + self.two_user + self.symmetry
        if not math.isclose(total, 1.0, abs_tol=1e-12):
            raise ValueError(f"welfare weights must sum to 1.0, got {total}")


# Built at import time so a broken table fails the import, not a request.
SCORE_WEIGHTS = ScoreWeights()
WELFARE_WEIGHTS = WelfareWeights()


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Configuration:
    station_count: int
    occupied: frozenset = field(default_factory=frozenset)
    has_dividers: bool = False

    @property
    def all_positions(self) -> List[int]:
        return list(range(1, self.station_count + 1))

    @property
    def free_positions(self) -> List[int]:
        return [p for p in self.all_positions if p not in self.occupied]


# ---------------------------------------------------------------------------
# Collective welfare details
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NextUserViability:
    score: float
    acceptable: int
    total: int

    def to_dict(self) -> Dict:
        return {"score": self.score, "acceptable": self.acceptable, "total": self.total}


@dataclass(frozen=True)
class TwoUserLookahead:
    score: float
    max_second_user_options: int

    def to_dict(self) -> Dict:
        return {"score": self.score, "maxSecondUserOptions": self.max_second_user_options}


@dataclass(frozen=True)
class SymmetryPreservation:
    score: float
    gaps: Tuple[int, ...]

    def to_dict(self) -> Dict:
        return {"score": self.score, "gaps": list(self.gaps)}


@dataclass(frozen=True)
class CollectiveWelfareDetail:
    next_user_viability: NextUserViability
    two_user_lookahead: TwoUserLookahead
    symmetry_preservation: SymmetryPreservation

    def to_dict(self) -> Dict:
        return {
            "nextUserViability": self.next_user_viability.to_dict(),
            "twoUserLookahead": self.two_user_lookahead.to_dict(),
            "symmetryPreservation": self.symmetry_preservation.to_dict(),
        }


# ---------------------------------------------------------------------------
# Scores
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScoreBreakdown:
    proximity: int
    edge: int
    collective_welfare: int
    collective_welfare_details: CollectiveWelfareDetail
    buffer: int

    def to_dict(self) -> Dict:
        return {
            "proximity": self.proximity,
            "edge": self.edge,
            "collectiveWelfare": self.collective_welfare,
            "collectiveWelfareDetails": self.collective_welfare_details.to_dict(),
            "buffer": self.buffer,
        }


@dataclass(frozen=True)
class StationScore:
    position: int
    composite: int
    breakdown: ScoreBreakdown
    excluded: bool = False
    exclusion_reason: Optional[str] = None

    @property
    def next_user(self) -> NextUserViability:
        return self.breakdown.collective_welfare_details.next_user_viability

    @property
    def is_antisocial(self) -> bool:
        """Taking this station strands the next arrival."""
        viability = self.next_user
        return viability.acceptable == 0 and viability.total > 0

    def with_exclusion(self, reason: str) -> "StationScore":
        return replace(self, excluded=True, exclusion_reason=reason)

    def to_dict(self) -> Dict:
        data = {
            "position": self.position,
            "composite": self.composite,
            "breakdown": self.breakdown.to_dict(),
        }
        if self.excluded:
            data["excluded"] = True
            data["exclusionReason"] = self.exclusion_reason
        return data


@dataclass(frozen=True)
class Recommendation:
    recommendation: Optional[int]
    status: Status
    message: str
    scores: Tuple[StationScore, ...] = ()
    all_scores: Tuple[StationScore, ...] = ()
    excluded_options: Tuple[StationScore, ...] = ()
    best_score: Optional[StationScore] = None

    def to_dict(self) -> Dict:
        return {
            "recommendation": self.recommendation,
            "status": self.status.value,
            "message": self.message,
            "scores": [s.to_dict() for s in self.scores],
            "allScores": [s.to_dict() for s in self.all_scores],
            "excludedOptions": [s.to_dict() for s in self.excluded_options],
            "bestScore": self.best_score.to_dict() if self.best_score else None,
        }
