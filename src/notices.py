"""
Configuration notices and status advisories.

Neither affects scoring. Notices flag well-known row layouts; advisories
give the structured guidance shown alongside full/desperate/optimal results.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

try:
    from src.models import Recommendation, Status
except ImportError:
    from models import Recommendation, Status


ADVERSARIAL_MIN_OCCUPANCY = 0.4


@dataclass(frozen=True)
class Notice:
    kind: str
    title: str
    body: str
    items: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Advisory:
    title: str
    body: str
    options: Tuple[str, ...] = field(default_factory=tuple)
    extra: Optional[str] = None


MIDDLEMIST_NOTICE = Notice(
    kind="middlemist",
    title="HISTORICAL CONFIGURATION DETECTED",
    body=(
        "You have recreated the experimental setup from Middlemist, Knowles & Matter "
        "(1976), the foundational study of lavatory proxemics. Expected effect: 75% "
        "increase in micturition onset delay. Recommendation: Position 1 or 3 "
        "(maintain maximum buffer)."
    ),
)

ADVERSARIAL_NOTICE = Notice(
    kind="adversarial",
    title="ADVERSARIAL CONFIGURATION DETECTED",
    body=(
        "This arrangement appears designed to maximise discomfort. If you encounter "
        "this in the wild, consider:"
    ),
    items=(
        "The possibility of deliberate psychological warfare",
        "Waiting for improved conditions",
        "Lifestyle changes that reduce bathroom frequency",
    ),
)


def is_middlemist(station_count, occupied):
    return station_count == 3 and sorted(occupied) == [2]


def is_adversarial(station_count, occupied):
    """Occupants standing exactly every other station across a large share of the row."""
    ordered = sorted(occupied)
    if len(ordered) < 2 or station_count < 4:
        return False
    alternating = all(b - a == 2 for a, b in zip(ordered, ordered[1:]))
    return alternating and len(ordered) / station_count >= ADVERSARIAL_MIN_OCCUPANCY


def detect_notices(station_count, occupied) -> List[Notice]:
    notices = []
    if is_middlemist(station_count, occupied):
        notices.append(MIDDLEMIST_NOTICE)
    if is_adversarial(station_count, occupied):
        notices.append(ADVERSARIAL_NOTICE)
    return notices


def advisory_for(result: Recommendation) -> Optional[Advisory]:
    if result.status is Status.OPTIMAL:
        return Advisory(
            title="OPTIMAL CONDITIONS DETECTED",
            body=(
                "Congratulations. You have encountered the theoretical ideal state. "
                "Select either end position to establish territorial dominance and "
                "maximise buffer zone for subsequent arrivals."
            ),
            extra=f"Recommended: Position {result.recommendation}",
        )
    if result.status is Status.FULL:
        return Advisory(
            title="FACILITY AT MAXIMUM CAPACITY",
            body="All positions currently occupied. Available options:",
            options=(
                "WAIT — Implement patience-based queuing protocol",
                "RETREAT — Seek alternative facilities",
                "STALL — Consider enclosed cubicle option",
            ),
            extra="Estimated wait time: Indeterminate",
        )
    if result.status is Status.DESPERATE:
        composite = result.best_score.composite if result.best_score else None
        return Advisory(
            title="PROTOCOL ADVISORY",
            body=(
                "All available positions violate ICUP minimum spacing requirements. "
                "Proceeding will result in mutual discomfort for you and adjacent occupants."
            ),
            options=(
                "Strategic phone focus (appear deeply engrossed)",
                "The thousand-yard stare (eyes fixed on wall)",
                "Performative urgency (suggest medical necessity)",
            ),
            extra=f"Least bad option: Position {result.recommendation} (Score: {composite})",
        )
    return None
