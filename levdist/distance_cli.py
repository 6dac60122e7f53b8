from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd
from tqdm import tqdm

from .levenshtein import compute_distance, compute_distance_result, normalize_threshold


def score_pairs(
    df: pd.DataFrame,
    col_a: str = "a",
    col_b: str = "b",
    max_dist: Optional[int] = None,
) -> pd.DataFrame:
    """
    Add `distance` and `exceeded` columns to a frame of string pairs.
    Missing cells count as empty strings.
    """
    for col in (col_a, col_b):
        if col not in df.columns:
            raise ValueError(f"Column '{col}' not found in pairs CSV (have: {list(df.columns)})")

    left = df[col_a].fillna("").astype(str).tolist()
    right = df[col_b].fillna("").astype(str).tolist()

    distances = []
    exceeded = []
    for a, b in tqdm(zip(left, right), total=len(left), desc="Levenshtein"):
        res = compute_distance_result(a, b, max_dist=max_dist)
        distances.append(res.distance)
        exceeded.append(res.exceeded)

    out = df.copy()
    out["distance"] = pd.array(distances, dtype="Int64")
    out["exceeded"] = exceeded
    return out


def summarize(scored: pd.DataFrame, max_dist: Optional[int]) -> dict:
    exact = scored.loc[~scored["exceeded"], "distance"].astype(int).to_numpy()
    return {
        "rows": int(len(scored)),
        "max_dist": normalize_threshold(max_dist),
        "exceeded": int(scored["exceeded"].sum()),
        "mean_distance": float(np.mean(exact)) if len(exact) else None,
        "median_distance": float(np.median(exact)) if len(exact) else None,
    }


def run_pairs(
    pairs_csv: str,
    out: str = "outputs/levdist/distances.csv",
    out_summary: str = "outputs/levdist/distance_summary.json",
    col_a: str = "a",
    col_b: str = "b",
    max_dist: Optional[int] = None,
) -> pd.DataFrame:
    # keep_default_na=False so a literal "NA" token stays a string
    df = pd.read_csv(pairs_csv, dtype=str, keep_default_na=False)
    scored = score_pairs(df, col_a=col_a, col_b=col_b, max_dist=max_dist)

    out_path = Path(out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    scored.to_csv(out_path, index=False, encoding="utf-8")

    summary = summarize(scored, max_dist)
    summary["pairs_csv"] = pairs_csv
    out_sum_path = Path(out_summary)
    out_sum_path.parent.mkdir(parents=True, exist_ok=True)
    out_sum_path.write_text(json.dumps(summary, ensure_ascii=False, indent=2), encoding="utf-8")

    print(f"Scored {summary['rows']} pairs ({summary['exceeded']} over max_dist)")
    print(f"Saved: {out_path}")
    print(f"Saved: {out_sum_path}")
    return scored


def main(argv=None):
    ap = argparse.ArgumentParser(description="Levenshtein distance between strings, with optional early-exit threshold.")
    ap.add_argument("--max_dist", type=int, default=None, help="Stop once distance exceeds this (negative = no limit).")

    target = ap.add_mutually_exclusive_group(required=True)
    target.add_argument("--a", type=str, help="First string (use together with --b).")
    target.add_argument("--pairs_csv", type=str, help="CSV with one string pair per row.")
    ap.add_argument("--b", type=str, help="Second string.")
    ap.add_argument("--col_a", type=str, default="a", help="Column holding the first string.")
    ap.add_argument("--col_b", type=str, default="b", help="Column holding the second string.")
    ap.add_argument("--out", type=str, default="outputs/levdist/distances.csv")
    ap.add_argument("--out_summary", type=str, default="outputs/levdist/distance_summary.json")
    args = ap.parse_args(argv)

    if args.b is not None and args.a is None:
        ap.error("--b is only used together with --a")

    if args.a is not None:
        if args.b is None:
            ap.error("--a requires --b")
        print(compute_distance(args.a, args.b, max_dist=args.max_dist))
        return

    run_pairs(
        pairs_csv=args.pairs_csv,
        out=args.out,
        out_summary=args.out_summary,
        col_a=args.col_a,
        col_b=args.col_b,
        max_dist=args.max_dist,
    )


if __name__ == "__main__":
    main()
