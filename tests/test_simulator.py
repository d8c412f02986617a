import json
import logging

from cache import AccessKind
from geometry import validate
from simulator import Simulation, run_sweep, save_results
from tracefile import TraceEvent

R = AccessKind.READ
W = AccessKind.WRITE


def test_run_collects_outcomes_and_summary():
    sim = Simulation(validate(4, 1, 16))
    events = [TraceEvent(R, 4, a) for a in (0x0, 0x4, 0x8, 0xc, 0x0, 0x4)]
    summary, outcomes = sim.run(events)
    assert len(outcomes) == 6
    assert summary["hits"] == 5
    assert summary["misses"] == 1
    assert summary["skipped_accesses"] == 0
    assert summary["geometry"]["num_sets"] == 4


def test_malformed_accesses_are_skipped(caplog):
    sim = Simulation(validate(4, 1, 16))
    events = [
        TraceEvent(R, 4, 0x0),
        TraceEvent(R, 3, 0x0),
        TraceEvent(W, 4, 0x2),
        TraceEvent(W, 4, 0x4),
    ]
    with caplog.at_level(logging.WARNING):
        summary, outcomes = sim.run(events)
    assert len(outcomes) == 2
    assert summary["total_accesses"] == 2
    assert summary["skipped_accesses"] == 2
    assert summary["mem_writes"] == 1
    assert "Invalid access size 3, skipping" in caplog.text
    assert "Misaligned access at 0x2, skipping" in caplog.text


def test_feed_calls_outcome_callback():
    seen = []
    sim = Simulation(validate(4, 1, 16), on_outcome=seen.append)
    assert sim.feed(R, 4, 0x10) is seen[0]
    assert sim.feed(R, 5, 0x10) is None
    assert len(seen) == 1


def test_simulations_are_independent():
    a = Simulation(validate(4, 1, 16))
    b = Simulation(validate(4, 1, 16))
    a.feed(R, 4, 0x0)
    assert b.feed(R, 4, 0x0).hit is False
    assert a.feed(R, 4, 0x0).hit is True


def test_sweep_over_associativity():
    # three lines competing for one set: only 4 ways hold them all
    events = [TraceEvent(R, 4, a) for a in (0x00, 0x40, 0x80) * 4]
    summaries = run_sweep([validate(4, 1, 16), validate(4, 2, 16), validate(4, 4, 16)], iter(events))
    assert [s["hits"] for s in summaries] == [0, 0, 9]
    assert all(s["total_accesses"] == 12 for s in summaries)


def test_save_results(tmp_path):
    summary, _ = Simulation(validate(4, 1, 16)).run([TraceEvent(W, 4, 0)])
    path = save_results(summary, str(tmp_path / "out"))
    with open(path) as f:
        data = json.load(f)
    assert data["mem_writes"] == 1
    assert data["geometry"]["line_size"] == 16
