# -*- coding: utf-8 -*-
"""
Sweep report: run every occupancy pattern for a range of row sizes and
write one CSV per size plus a status summary table.
"""
import argparse
import sys
from pathlib import Path

import pandas as pd

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.analysis import status_summary, sweep


def build_report(min_stations, max_stations, has_dividers, out_dir):
    out_dir.mkdir(parents=True, exist_ok=True)
    summaries = []
    for n in range(min_stations, max_stations + 1):
        frame = sweep(n, has_dividers)
        frame.assign(occupied=frame["occupied"].apply(lambda t: " ".join(map(str, t)))).to_csv(
            out_dir / f"sweep_{n}{'_dividers' if has_dividers else ''}.csv",
            index=False, encoding="utf-8-sig",
        )
        summary = status_summary(frame)
        summary.insert(0, "station_count", n)
        summaries.append(summary)
    return pd.concat(summaries, ignore_index=True)


def main():
    parser = argparse.ArgumentParser(description="Status distribution across all occupancy patterns")
    parser.add_argument("--min", type=int, default=2, dest="min_stations")
    parser.add_argument("--max", type=int, default=10, dest="max_stations")
    parser.add_argument("--dividers", action="store_true")
    parser.add_argument("--out", type=Path, default=PROJECT_ROOT / "reports")
    args = parser.parse_args()

    report = build_report(args.min_stations, args.max_stations, args.dividers, args.out)
    pivot = report.pivot(index="station_count", columns="status", values="share")
    print(pivot.to_string())
    report.to_csv(args.out / "summary.csv", index=False, encoding="utf-8-sig")
    print(f"\n[*] 저장 완료: {args.out}")


if __name__ == "__main__":
    main()
