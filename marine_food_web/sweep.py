#!/usr/bin/env python3
"""
Replicate sweep for the marine food web.

- Runs the same parameter set under seeds seed, seed+1, ...
- Records how long each run stayed viable and the final species counts
- Writes one CSV row per replicate and prints a summary
"""

from __future__ import annotations

import argparse
import contextlib
import io
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import replace
from typing import Dict, List

import pandas as pd

from marine_food_web.config import DEFAULT_DEPTH, DEFAULT_STEPS, DEFAULT_WIDTH, SPECIES_ORDER, Params
from marine_food_web.simulator import Simulator, add_species_arguments, apply_species_arguments


def run_replicate(params: Params, seed: int) -> Dict[str, object]:
    p = replace(params, seed=seed, report_every=0, delay=0.0)
    with contextlib.redirect_stdout(io.StringIO()):
        sim = Simulator(p)
        steps_run = sim.run(p.steps)
        viable = sim.monitor.is_viable(sim.snapshot())
    row: Dict[str, object] = {"seed": seed, "steps_run": steps_run, "viable": bool(viable)}
    row.update(sim.counts())
    return row


def run_sweep(params: Params, replicates: int, seed: int, workers: int = 1) -> pd.DataFrame:
    seeds = [seed + i for i in range(replicates)]
    rows: List[Dict[str, object]] = []
    if workers == 1:
        for s in seeds:
            rows.append(run_replicate(params, s))
    else:
        with ProcessPoolExecutor(max_workers=workers) as ex:
            futs = [ex.submit(run_replicate, params, s) for s in seeds]
            for fut in as_completed(futs):
                rows.append(fut.result())

    columns = ["seed", "steps_run", "viable"] + [sp.name for sp in SPECIES_ORDER]
    df = pd.DataFrame(rows, columns=columns)
    return df.sort_values("seed").reset_index(drop=True)


def summarize(df: pd.DataFrame) -> Dict[str, float]:
    if df.empty:
        return {"replicates": 0, "viable_fraction": float("nan"), "mean_steps_run": float("nan")}
    out: Dict[str, float] = {
        "replicates": int(len(df)),
        "viable_fraction": float(df["viable"].mean()),
        "mean_steps_run": float(df["steps_run"].mean()),
    }
    for sp in SPECIES_ORDER:
        out[f"mean_{sp.name}"] = float(df[sp.name].mean())
    return out


def make_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Replicate sweep over seeds")
    ap.add_argument("--depth", type=int, default=DEFAULT_DEPTH)
    ap.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    ap.add_argument("--steps", type=int, default=DEFAULT_STEPS)
    ap.add_argument("--replicates", type=int, default=20)
    ap.add_argument("--seed", type=int, default=1000)
    ap.add_argument("--workers", type=int, default=max(1, (os.cpu_count() or 2) - 1))
    ap.add_argument("--outfile", type=str, default="sweep_results.csv")
    add_species_arguments(ap)
    return ap


def build_params(args: argparse.Namespace) -> Params:
    params = Params(depth=args.depth, width=args.width, steps=args.steps)
    apply_species_arguments(params, args)
    return params


def main(argv: List[str] | None = None) -> None:
    args = make_parser().parse_args(argv)
    params = build_params(args)
    print(
        "\n=== Sweep ===\n"
        f"grid:       {args.depth}x{args.width}\n"
        f"steps:      {args.steps}\n"
        f"replicates: {args.replicates} (seeds {args.seed}..{args.seed + args.replicates - 1})\n"
    )

    df = run_sweep(params, args.replicates, args.seed, args.workers)
    for row in df.itertuples(index=False):
        print(f"seed={row.seed} steps_run={row.steps_run} viable={row.viable}")

    summary = summarize(df)
    print(f"Viable after {args.steps} steps: {summary['viable_fraction']:.2f} of {summary['replicates']} runs")

    if args.outfile:
        df.to_csv(args.outfile, index=False)
        print(f"Saved results to {args.outfile}")


if __name__ == "__main__":
    main()
