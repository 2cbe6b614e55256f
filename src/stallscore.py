# -*- coding: utf-8 -*-
"""
StallScore Decision Model
=========================
Deterministic recommendation of one station in a linear row of stations,
given which stations are occupied and whether privacy dividers are fitted.

Formula:
    S(p) = 0.30·P(p) + 0.20·E(p) + 0.35·W(p) + 0.15·B(p)

    Where:
        P(p) : proximity score      (minDist - 1) × 50, ×0.67 when flanked,
                                    halfway to 100 with dividers
        E(p) : edge score           100 at an end, 50 next to an end, else 0
        W(p) : collective welfare   0.50·N + 0.30·T + 0.20·Y
               N : next-user viability   share of stations left at distance ≥ 2
               T : two-user lookahead    best third-arrival options over all
                                         acceptable next arrivals
               Y : symmetry preservation (1 - CV(gaps)) × 100
        B(p) : buffer score         ICUP minimum-gap compliance

Selection:
    1. prefer stations with a free buffer on both sides (or dividers)
    2. among those, prefer stations that leave the next arrival a choice;
       stations that strand the next arrival are excluded when a better
       alternative exists
    3. if no station respects the buffer, fall back to every free station
    4. highest composite wins, lowest position on ties

Complexity is O(n³) in the station count (the two-user lookahead scans
next × third × occupied). Fine for rows of a few dozen stations.
"""

import logging

import numpy as np

try:
    from src.models import (
        SCORE_WEIGHTS, WELFARE_WEIGHTS, CollectiveWelfareDetail, Configuration,
        NextUserViability, Recommendation, ScoreBreakdown, StationScore, Status,
        SymmetryPreservation, TwoUserLookahead,
    )
    from src.utils import (
        half_up_round, has_both_neighbours, min_distance, validate_configuration,
    )
except ImportError:
    from models import (
        SCORE_WEIGHTS, WELFARE_WEIGHTS, CollectiveWelfareDetail, Configuration,
        NextUserViability, Recommendation, ScoreBreakdown, StationScore, Status,
        SymmetryPreservation, TwoUserLookahead,
    )
    from utils import (
        half_up_round, has_both_neighbours, min_distance, validate_configuration,
    )

logger = logging.getLogger(__name__)


FLANKED_MULTIPLIER = 0.67
DIVIDER_RELIEF = 0.5
MIN_ACCEPTABLE_DISTANCE = 2

FULL_MESSAGE = (
    "Facilities at maximum capacity. Recommend strategic retreat to alternative "
    "facilities or adoption of patience-based waiting protocol."
)
OPTIMAL_MESSAGE = "Congratulations — You have achieved the theoretical maximum comfort state."
DESPERATE_MESSAGE = (
    "⚠️ PROTOCOL VIOLATION: All options are adjacent to occupied urinals. However, "
    "if you are desperate or if there are people waiting behind you (and you wish to "
    "avoid appearing as though you are merely loitering), Position #{position} "
    "represents the least suboptimal choice."
)
EXCLUSION_REASON = (
    "This position would leave zero acceptable options for the next user. "
    "Don't be that guy."
)


# ---------------------------------------------------------------------------
# Sub-scores
# ---------------------------------------------------------------------------

def calculate_proximity_score(position, occupied, has_dividers):
    """
    P(p): penalise closeness to occupied stations.

    Middlemist et al. (1976): an adjacent occupant delays onset by ~75%.
    Returned unrounded; rounding happens when the breakdown is built.
    """
    nearest = min_distance(position, occupied)
    if nearest is None:
        return 100

    score = max(0, min(100, (nearest - 1) * 50))

    if has_both_neighbours(position, occupied):
        score *= FLANKED_MULTIPLIER

    # dividers halve the remaining stress, never remove it
    if has_dividers and score < 100:
        score = score + (100 - score) * DIVIDER_RELIEF

    return score


def calculate_edge_score(position, station_count):
    """E(p): end stations offer the longest expected privacy (Kranakis & Krizanc, 2010)."""
    if position == 1 or position == station_count:
        return 100
    if position == 2 or position == station_count - 1:
        return 50
    return 0


def calculate_buffer_score(position, occupied, has_dividers):
    """B(p): ICUP compliance, at least one empty station between users."""
    nearest = min_distance(position, occupied)
    if nearest is None:
        return 100
    if nearest == 1:
        return 50 if has_dividers else 0
    if nearest == 2:
        return 70
    return 100


def _acceptable_positions(remaining, occupied):
    return [
        p for p in remaining
        if min_distance(p, occupied) >= MIN_ACCEPTABLE_DISTANCE
    ]


def _after_choice(position, occupied, station_count):
    new_occupied = set(occupied) | {position}
    remaining = [p for p in range(1, station_count + 1) if p not in new_occupied]
    return new_occupied, remaining


def calculate_next_user_viability(position, occupied, station_count):
    """N(p): does the next arrival still get a station at distance ≥ 2?"""
    new_occupied, remaining = _after_choice(position, occupied, station_count)

    if not remaining:
        # taking the last station carries no downstream responsibility
        return NextUserViability(score=100, acceptable=0, total=0)

    acceptable = _acceptable_positions(remaining, new_occupied)
    if not acceptable:
        return NextUserViability(score=0, acceptable=0, total=len(remaining))

    proportion = len(acceptable) / len(remaining)
    return NextUserViability(
        score=30 + proportion * 70,
        acceptable=len(acceptable),
        total=len(remaining),
    )


def calculate_two_user_lookahead(position, occupied, station_count):
    """T(p): can two more people still be accommodated comfortably?"""
    new_occupied, remaining = _after_choice(position, occupied, station_count)
    acceptable_next = _acceptable_positions(remaining, new_occupied)

    if not acceptable_next:
        return TwoUserLookahead(score=0, max_second_user_options=0)

    best = 0
    for next_pos in acceptable_next:
        after_next = new_occupied | {next_pos}
        remaining_after = [p for p in remaining if p != next_pos]
        third_options = _acceptable_positions(remaining_after, after_next)
        best = max(best, len(third_options))

    if best == 0 and len(remaining) > 1:
        return TwoUserLookahead(score=50, max_second_user_options=0)

    return TwoUserLookahead(score=50 + min(best, 2) * 25, max_second_user_options=best)


def calculate_symmetry_score(position, occupied, station_count):
    """Y(p): evenly spread gaps keep the row flexible for later arrivals."""
    ordered = sorted(set(occupied) | {position})

    gaps = [ordered[0] - 1]
    gaps += [b - a - 1 for a, b in zip(ordered, ordered[1:])]
    gaps.append(station_count - ordered[-1])

    arr = np.asarray(gaps, dtype=float)
    mean = float(arr.mean())
    if mean == 0:
        return SymmetryPreservation(score=100, gaps=tuple(gaps))

    cv = float(arr.std()) / mean
    score = max(0.0, min(100.0, (1 - cv) * 100))
    return SymmetryPreservation(score=score, gaps=tuple(gaps))


def calculate_collective_welfare(position, occupied, station_count):
    """W(p): returns (rounded composite, detail)."""
    next_user = calculate_next_user_viability(position, occupied, station_count)
    two_user = calculate_two_user_lookahead(position, occupied, station_count)
    symmetry = calculate_symmetry_score(position, occupied, station_count)

    w = WELFARE_WEIGHTS
    composite = (
        next_user.score * w.next_user
        + two_user.score * w.two_user
        + symmetry.score * w.symmetry
    )
    detail = CollectiveWelfareDetail(
        next_user_viability=next_user,
        two_user_lookahead=two_user,
        symmetry_preservation=symmetry,
    )
    return half_up_round(composite), detail


def calculate_comfort_score(position, occupied, station_count, has_dividers):
    """S(p): composite comfort score with its full breakdown."""
    proximity = calculate_proximity_score(position, occupied, has_dividers)
    edge = calculate_edge_score(position, station_count)
    welfare, welfare_detail = calculate_collective_welfare(position, occupied, station_count)
    buffer = calculate_buffer_score(position, occupied, has_dividers)

    w = SCORE_WEIGHTS
    composite = (
        proximity * w.proximity
        + edge * w.edge
        + welfare * w.collective_welfare
        + buffer * w.buffer
    )

    return StationScore(
        position=position,
        composite=half_up_round(composite),
        breakdown=ScoreBreakdown(
            proximity=half_up_round(proximity),
            edge=edge,
            collective_welfare=welfare,
            collective_welfare_details=welfare_detail,
            buffer=buffer,
        ),
    )


# ---------------------------------------------------------------------------
# Descriptions
# ---------------------------------------------------------------------------

def describe_score(score):
    if score >= 90:
        return "Optimal Selection — Maximum Privacy Protocol"
    if score >= 70:
        return "Acceptable — Within Standard Comfort Parameters"
    if score >= 40:
        return "Suboptimal — Elevated Social Stress Anticipated"
    return "Critical — Protocol Violation Imminent"


def score_tier(score):
    """Coarse tier used for styling: recommended / acceptable / avoid."""
    if score >= 70:
        return "recommended"
    if score >= 40:
        return "acceptable"
    return "avoid"


def score_label(score):
    if score >= 90:
        return "OPTIMAL"
    if score >= 70:
        return "ACCEPTABLE"
    if score >= 40:
        return "SUBOPTIMAL"
    if score >= 20:
        return "INADVISABLE"
    return "CRITICAL"


# ---------------------------------------------------------------------------
# Selection policy
# ---------------------------------------------------------------------------

def _respects_buffer(score, occupied, has_dividers):
    nearest = min_distance(score.position, occupied)
    return nearest is None or nearest >= MIN_ACCEPTABLE_DISTANCE or has_dividers


def _all_violate_protocol(scores, occupied, has_dividers):
    if not occupied or has_dividers:
        return False
    return all(min_distance(s.position, occupied) == 1 for s in scores)


def score_configuration(config):
    """Score every free station of a validated configuration, ascending position order."""
    return [
        calculate_comfort_score(p, config.occupied, config.station_count, config.has_dividers)
        for p in config.free_positions
    ]


def recommend(station_count, occupied=(), has_dividers=False):
    """
    Recommend a station for the next arrival.

    Raises InvalidConfigurationError for an out-of-range station count,
    out-of-range occupied positions or duplicates. A full row and a row
    where every option is adjacent to someone are statuses, not errors.
    """
    occupied_set = validate_configuration(station_count, occupied)
    config = Configuration(
        station_count=station_count,
        occupied=occupied_set,
        has_dividers=bool(has_dividers),
    )

    if not config.free_positions:
        logger.debug("row of %d is full", station_count)
        return Recommendation(recommendation=None, status=Status.FULL, message=FULL_MESSAGE)

    all_scores = score_configuration(config)

    buffer_compliant = [
        s for s in all_scores
        if _respects_buffer(s, occupied_set, config.has_dividers)
    ]
    antisocial = [s for s in all_scores if s.is_antisocial]
    compliant_and_social = [s for s in buffer_compliant if not s.is_antisocial]

    # Exclude antisocial options only when a compliant, responsible one exists.
    excluded_options = []
    if compliant_and_social and antisocial:
        excluded_positions = {s.position for s in antisocial}
        all_scores = [
            s.with_exclusion(EXCLUSION_REASON) if s.position in excluded_positions else s
            for s in all_scores
        ]
        excluded_options = [s for s in all_scores if s.excluded]

    if buffer_compliant:
        candidates = compliant_and_social or buffer_compliant
    else:
        candidates = all_scores

    candidates = sorted(candidates, key=lambda s: (-s.composite, s.position))
    best = candidates[0]

    if _all_violate_protocol(all_scores, occupied_set, config.has_dividers):
        status = Status.DESPERATE
        message = DESPERATE_MESSAGE.format(position=best.position)
    elif not occupied_set:
        status = Status.OPTIMAL
        message = OPTIMAL_MESSAGE
    elif excluded_options:
        status = Status.SOCIALLY_AWARE
        message = describe_score(best.composite)
    else:
        status = Status.NORMAL
        message = describe_score(best.composite)

    logger.debug(
        "recommend n=%d occupied=%s dividers=%s -> #%d (%d, %s)",
        station_count, sorted(occupied_set), config.has_dividers,
        best.position, best.composite, status.value,
    )

    return Recommendation(
        recommendation=best.position,
        status=status,
        message=message,
        scores=tuple(candidates),
        all_scores=tuple(all_scores),
        excluded_options=tuple(excluded_options),
        best_score=best,
    )


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    scenarios = [
        {"name": "Empty room", "n": 5, "occupied": [], "dividers": False},
        {"name": "Both ends taken", "n": 7, "occupied": [1, 7], "dividers": False},
        {"name": "Middlemist (1976)", "n": 3, "occupied": [2], "dividers": False},
        {"name": "Crowded, dividers", "n": 6, "occupied": [1, 3, 5], "dividers": True},
    ]

    for sc in scenarios:
        r = recommend(sc["n"], sc["occupied"], sc["dividers"])
        print(f"\n{'='*60}")
        print(f"{sc['name']}  (n={sc['n']}, occupied={sc['occupied']}, dividers={sc['dividers']})")
        print(f"{'='*60}")
        for s in r.all_scores:
            bar = "#" * int(s.composite / 5)
            flag = " excluded" if s.excluded else ""
            mark = " <-" if s.position == r.recommendation else ""
            print(f"  #{s.position:>2} | {s.composite:3d} | {score_tier(s.composite):<11} | {bar}{flag}{mark}")
        print(f"  Status: {r.status.value}  Recommendation: {r.recommendation}")
        print(f"  {r.message}")
