# -*- coding: utf-8 -*-
"""
Tabular views over recommendations.

score_table  : one row per free station of a single recommendation
sweep        : every occupancy pattern of a row, one row per pattern
status_summary: count/share of each status in a sweep
"""
import itertools
import logging

import pandas as pd

try:
    from src.models import Status
    from src.stallscore import recommend, score_label, score_tier
except ImportError:
    from models import Status
    from stallscore import recommend, score_label, score_tier

logger = logging.getLogger(__name__)

# 2^n patterns; 14 stations is 16k recommendations.
MAX_SWEEP_STATIONS = 14

SCORE_COLUMNS = [
    "position", "composite", "proximity", "edge", "collective_welfare", "buffer",
    "next_user", "next_user_acceptable", "next_user_total",
    "two_user", "max_second_user_options", "symmetry",
    "tier", "label", "excluded", "candidate", "recommended",
]


def score_table(result):
    """Flatten a Recommendation into a DataFrame (original position order)."""
    candidates = {s.position for s in result.scores}
    rows = []
    for s in result.all_scores:
        detail = s.breakdown.collective_welfare_details
        rows.append({
            "position": s.position,
            "composite": s.composite,
            "proximity": s.breakdown.proximity,
            "edge": s.breakdown.edge,
            "collective_welfare": s.breakdown.collective_welfare,
            "buffer": s.breakdown.buffer,
            "next_user": round(detail.next_user_viability.score, 2),
            "next_user_acceptable": detail.next_user_viability.acceptable,
            "next_user_total": detail.next_user_viability.total,
            "two_user": round(detail.two_user_lookahead.score, 2),
            "max_second_user_options": detail.two_user_lookahead.max_second_user_options,
            "symmetry": round(detail.symmetry_preservation.score, 2),
            "tier": score_tier(s.composite),
            "label": score_label(s.composite),
            "excluded": s.excluded,
            "candidate": s.position in candidates,
            "recommended": s.position == result.recommendation,
        })
    return pd.DataFrame(rows, columns=SCORE_COLUMNS)


def sweep(station_count, has_dividers=False):
    """Run every occupancy pattern of the row through recommend()."""
    if not 1 <= station_count <= MAX_SWEEP_STATIONS:
        raise ValueError(f"sweep supports 1..{MAX_SWEEP_STATIONS} stations, got {station_count}")

    positions = range(1, station_count + 1)
    rows = []
    for k in range(station_count + 1):
        for occupied in itertools.combinations(positions, k):
            result = recommend(station_count, occupied, has_dividers)
            rows.append({
                "occupied": occupied,
                "n_occupied": k,
                "status": result.status.value,
                "recommendation": result.recommendation,
                "best_composite": result.best_score.composite if result.best_score else None,
                "n_excluded": len(result.excluded_options),
            })

    frame = pd.DataFrame(rows)
    # full rows have no recommendation; keep integer columns nullable
    frame["recommendation"] = frame["recommendation"].astype("Int64")
    frame["best_composite"] = frame["best_composite"].astype("Int64")
    logger.info("sweep n=%d dividers=%s: %d patterns", station_count, has_dividers, len(frame))
    return frame


def status_summary(frame):
    """Count and share of each status, in Status declaration order."""
    order = [s.value for s in Status]
    counts = frame["status"].value_counts().reindex(order, fill_value=0)
    total = int(counts.sum())
    summary = pd.DataFrame({
        "status": counts.index,
        "count": counts.values.astype(int),
    })
    summary["share"] = (summary["count"] / total).round(4) if total else 0.0
    return summary.reset_index(drop=True)
