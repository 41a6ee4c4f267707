import numpy as np
import pandas as pd

from conftest import empty_sim

from marine_food_web.field import Coordinate
from marine_food_web.monitor import FieldSnapshot, PopulationMonitor, SPECIES_NAMES, build_snapshot


def snapshot_of(step, cells):
    grid = np.zeros((3, 4), dtype=np.int8)
    for (row, col), code in cells.items():
        grid[row, col] = code
    return FieldSnapshot(step=step, grid=grid)


def test_snapshot_counts_every_species():
    snap = snapshot_of(0, {(0, 0): 1, (1, 1): 1, (2, 3): 7})
    counts = snap.counts()
    assert list(counts) == list(SPECIES_NAMES)
    assert counts["killer_whale"] == 2
    assert counts["plankton"] == 1
    assert counts["sardine"] == 0
    assert snap.occupied() == 3
    assert (snap.depth, snap.width) == (3, 4)
    assert snap.species_at(2, 3) == "plankton"
    assert snap.species_at(0, 1) is None


def test_build_snapshot_is_read_only_and_skips_dead():
    sim = empty_sim(3, 3)
    lion = sim.add_organism("sea_lion", Coordinate(0, 0))
    kelp = sim.add_organism("kelp", Coordinate(2, 2))
    kelp.alive = False
    snap = build_snapshot(5, 3, 3, [lion, kelp])
    assert snap.step == 5
    assert snap.species_at(0, 0) == "sea_lion"
    assert snap.species_at(2, 2) is None
    assert not snap.grid.flags.writeable


def test_viability_needs_two_species():
    monitor = PopulationMonitor()
    assert not monitor.is_viable(snapshot_of(0, {}))
    assert not monitor.is_viable(snapshot_of(0, {(0, 0): 5, (0, 1): 5}))
    assert monitor.is_viable(snapshot_of(0, {(0, 0): 5, (0, 1): 6}))


def test_history_frame_indexed_by_step():
    monitor = PopulationMonitor()
    monitor.report(0, snapshot_of(0, {(0, 0): 6}))
    monitor.report(1, snapshot_of(1, {(0, 0): 6, (0, 1): 6}))
    df = monitor.history_frame()
    assert isinstance(df, pd.DataFrame)
    assert list(df.index) == [0, 1]
    assert df.loc[1, "kelp"] == 2
    assert list(df.columns) == list(SPECIES_NAMES)


def test_history_restarts_on_step_zero():
    monitor = PopulationMonitor()
    monitor.report(0, snapshot_of(0, {}))
    monitor.report(1, snapshot_of(1, {}))
    monitor.report(0, snapshot_of(0, {}))
    assert len(monitor.history) == 1


def test_empty_history_frame():
    df = PopulationMonitor().history_frame()
    assert df.empty
    assert list(df.columns) == list(SPECIES_NAMES)


def test_report_prints_every_n_steps(capsys):
    monitor = PopulationMonitor(report_every=2)
    for step in range(5):
        monitor.report(step, snapshot_of(step, {(0, 0): 3}))
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("t=    2")
    assert "dolphin=    1" in lines[0]


def test_to_csv(tmp_path):
    monitor = PopulationMonitor()
    monitor.report(0, snapshot_of(0, {(1, 1): 4}))
    path = tmp_path / "history.csv"
    monitor.to_csv(str(path))
    df = pd.read_csv(path, index_col="step")
    assert df.loc[0, "sea_otter"] == 1


def test_simulator_feeds_history():
    monitor = PopulationMonitor()
    sim = empty_sim(3, 3, monitor=monitor)
    sim.add_organism("kelp", Coordinate(1, 1))
    sim.step()
    assert [row["step"] for row in monitor.history] == [0, 1]
    assert monitor.history[-1]["kelp"] >= 1
