from __future__ import annotations

import argparse
import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from .levenshtein import compute_distance


@dataclass
class BenchCase:
    name: str
    a: str
    b: str
    long: bool = False


_LONG_EN = (
    "I am so deeply fulfilled in my understanding that it feels as though I have lived for hundreds of "
    "trillions of billions of years on trillions upon trillions of planets just like this Earth. "
)
_LONG_RU = (
    "Я в своем познании настолько преисполнился, что я как будто бы уже сто триллионов миллиардов лет "
    "проживаю на триллионах и триллионах таких же планет, как эта Земля"
)

BENCH_CASES: List[BenchCase] = [
    BenchCase("ASCII", "levenshtein", "frankenstein"),
    BenchCase("French", "resumé and café", "resumés and cafés"),
    BenchCase("Nordic", "Hafþór Júlíus Björnsson", "Hafþor Julius Bjornsson"),
    BenchCase("Russian", "разными ощущениями и разными стремлениями", "разные ощущения и разные стремления"),
    BenchCase("Tibetan", "།་གམ་འས་པ་་མ།", "།་གམའས་པ་་མ"),
    BenchCase(
        "Long lead",
        "a very long string that is meant to exceed",
        "another very long string that is meant to exceed",
    ),
    BenchCase(
        "Long middle",
        "a very long string with a word in the middle that is different",
        "a very long string with some text in the middle that is different",
    ),
    BenchCase(
        "Long trail",
        "a very long string with some text at the end that is not the same",
        "a very long string with some text at the end that is very different",
    ),
    BenchCase(
        "Long diff",
        "+a very long string with different leading and trailing characters+",
        "-a very long string with different leading and trailing characters-",
    ),
    BenchCase(
        "ASCII long",
        (_LONG_EN + "This world is completely clear to me, and here I seek only one thing: peace. ") * 2,
        (_LONG_EN + "And here I seek only one thing: peace, infinitely eternal. ") * 2,
        long=True,
    ),
    BenchCase(
        "Russian long",
        (_LONG_RU + ", мне этот мир абсолютно понятен, и я здесь ищу только одного - покоя. ") * 2,
        (_LONG_RU + " и я здесь ищу только одного - покоя, бесконечно вечного. ") * 2,
        long=True,
    ),
]


def time_case(fn: Callable[[], int], repeat: int = 5, number: int = 200) -> float:
    """
    Median microseconds per call over `repeat` runs of `number` calls each.
    """
    runs = []
    for _ in range(repeat):
        start = time.perf_counter()
        for _ in range(number):
            fn()
        runs.append((time.perf_counter() - start) / number)
    return float(np.median(runs) * 1e6)


def threshold_for(case: BenchCase, short_threshold: int = 2, long_threshold: int = 10) -> int:
    return long_threshold if case.long else short_threshold


def get_competitors() -> Dict[str, Callable[[str, str], int]]:
    from rapidfuzz.distance import Levenshtein as RFLevenshtein

    return {"rapidfuzz": RFLevenshtein.distance}


def run_benchmark(
    cases: Optional[List[BenchCase]] = None,
    repeat: int = 5,
    number: int = 200,
    short_threshold: int = 2,
    long_threshold: int = 10,
    competitors: bool = False,
) -> pd.DataFrame:
    cases = BENCH_CASES if cases is None else cases
    others = get_competitors() if competitors else {}

    rows = []
    for case in cases:
        t = threshold_for(case, short_threshold, long_threshold)
        exact = compute_distance(case.a, case.b)

        variants = {
            "levdist": (lambda c=case: compute_distance(c.a, c.b), exact, None),
            "levdist+threshold": (
                lambda c=case, t=t: compute_distance(c.a, c.b, t),
                compute_distance(case.a, case.b, t),
                t,
            ),
        }
        for name, fn in others.items():
            theirs = fn(case.a, case.b)
            if theirs != exact:
                raise RuntimeError(f"{name} disagrees on '{case.name}': {theirs} != {exact}")
            variants[name] = (lambda c=case, f=fn: f(c.a, c.b), theirs, None)

        for impl, (fn, dist, thr) in variants.items():
            rows.append(
                {
                    "case": case.name,
                    "impl": impl,
                    "threshold": thr,
                    "distance": int(dist),
                    "len_a": len(case.a),
                    "len_b": len(case.b),
                    "us_per_call": time_case(fn, repeat=repeat, number=number),
                }
            )

    return pd.DataFrame(rows)


def plot_benchmark(df: pd.DataFrame, out_path: Path) -> None:
    table = df.pivot(index="case", columns="impl", values="us_per_call")
    table = table.reindex([c for c in df["case"].unique()])

    ax = table.plot(kind="barh", figsize=(8, max(3, 0.5 * len(table))))
    ax.set_xscale("log")
    ax.set_xlabel("µs per call (log)")
    ax.set_ylabel("")
    ax.set_title("Levenshtein distance timings")
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close()


def save_benchmark(
    df: pd.DataFrame,
    out_csv: str = "outputs/levdist/benchmark.csv",
    out_summary: str = "outputs/levdist/benchmark.json",
    out_plot: Optional[str] = "outputs/levdist/benchmark.png",
) -> None:
    out_csv_path = Path(out_csv)
    out_csv_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_csv_path, index=False, encoding="utf-8")
    print(f"Saved: {out_csv_path}")

    summary = {
        impl: {
            "cases": int(len(g)),
            "median_us": float(np.median(g["us_per_call"])),
            "total_us": float(g["us_per_call"].sum()),
        }
        for impl, g in df.groupby("impl", sort=False)
    }
    out_sum_path = Path(out_summary)
    out_sum_path.parent.mkdir(parents=True, exist_ok=True)
    out_sum_path.write_text(json.dumps(summary, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Saved: {out_sum_path}")

    if out_plot:
        out_plot_path = Path(out_plot)
        out_plot_path.parent.mkdir(parents=True, exist_ok=True)
        plot_benchmark(df, out_plot_path)
        print(f"Saved: {out_plot_path}")


def main(argv=None):
    ap = argparse.ArgumentParser(description="Time Levenshtein distance on short, long and non-ASCII inputs.")
    ap.add_argument("--repeat", type=int, default=5, help="Timing runs per case (median is reported).")
    ap.add_argument("--number", type=int, default=200, help="Calls per timing run.")
    ap.add_argument("--short_threshold", type=int, default=2)
    ap.add_argument("--long_threshold", type=int, default=10)
    ap.add_argument("--competitors", action="store_true", help="Also time rapidfuzz (pip install levdist[bench]).")
    ap.add_argument("--out_csv", type=str, default="outputs/levdist/benchmark.csv")
    ap.add_argument("--out_summary", type=str, default="outputs/levdist/benchmark.json")
    ap.add_argument("--out_plot", type=str, default="outputs/levdist/benchmark.png")
    ap.add_argument("--no_plot", action="store_true")
    args = ap.parse_args(argv)

    df = run_benchmark(
        repeat=args.repeat,
        number=args.number,
        short_threshold=args.short_threshold,
        long_threshold=args.long_threshold,
        competitors=args.competitors,
    )
    print(df.to_string(index=False))
    save_benchmark(
        df,
        out_csv=args.out_csv,
        out_summary=args.out_summary,
        out_plot=None if args.no_plot else args.out_plot,
    )


if __name__ == "__main__":
    main()
