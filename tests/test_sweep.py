import math

import pandas as pd

from marine_food_web.config import SPECIES_ORDER, Params
from marine_food_web.sweep import build_params, make_parser, run_replicate, run_sweep, summarize


def small_params():
    return Params(depth=12, width=12, steps=6)


def test_replicate_is_reproducible_and_quiet(capsys):
    a = run_replicate(small_params(), seed=5)
    b = run_replicate(small_params(), seed=5)
    assert a == b
    assert a["seed"] == 5
    assert 0 <= a["steps_run"] <= 6
    assert capsys.readouterr().out == ""


def test_sweep_rows_sorted_by_seed():
    df = run_sweep(small_params(), replicates=3, seed=40, workers=1)
    assert list(df["seed"]) == [40, 41, 42]
    assert list(df.columns) == ["seed", "steps_run", "viable"] + [sp.name for sp in SPECIES_ORDER]


def test_summarize():
    df = pd.DataFrame(
        [
            {"seed": 1, "steps_run": 10, "viable": True, **{sp.name: 2 for sp in SPECIES_ORDER}},
            {"seed": 2, "steps_run": 4, "viable": False, **{sp.name: 0 for sp in SPECIES_ORDER}},
        ]
    )
    summary = summarize(df)
    assert summary["replicates"] == 2
    assert summary["viable_fraction"] == 0.5
    assert summary["mean_steps_run"] == 7.0
    assert summary["mean_kelp"] == 1.0


def test_summarize_empty():
    summary = summarize(pd.DataFrame())
    assert summary["replicates"] == 0
    assert math.isnan(summary["viable_fraction"])


def test_cli_species_probability_flags():
    args = make_parser().parse_args(["--steps", "8", "--kelp-probability", "0.3", "--killer-whale-probability", "0"])
    params = build_params(args)
    assert params.steps == 8
    assert params.creation_probability("kelp") == 0.3
    assert params.creation_probability("killer_whale") == 0.0
    assert params.creation_probability("sardine") == 0.09


def test_sweep_uses_creation_probabilities():
    args = make_parser().parse_args(
        ["--depth", "6", "--width", "6", "--steps", "0"]
        + [f"--{sp.name.replace('_', '-')}-probability=0" for sp in SPECIES_ORDER if sp.name != "kelp"]
        + ["--kelp-probability", "1.0"]
    )
    df = run_sweep(build_params(args), replicates=1, seed=3, workers=1)
    assert df.loc[0, "kelp"] == 36
    assert df.loc[0, "sardine"] == 0
