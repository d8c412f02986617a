# simulator.py
import json
import logging
import os

from cache import AccessEngine, CacheStore, InvalidAccess, LruTracker
from stats import StatsAccumulator

logger = logging.getLogger(__name__)


class Simulation:
    """
    One simulation run: a fresh cache store and stats accumulator for a
    geometry, fed one access at a time.
    """

    def __init__(self, geometry, on_outcome=None):
        self.geometry = geometry
        self.store = CacheStore(geometry)
        self.stats = StatsAccumulator()
        self.engine = AccessEngine(geometry, self.store, self.stats,
                                   LruTracker(geometry.associativity))
        self.on_outcome = on_outcome
        self.skipped = 0

    def feed(self, kind, size, address):
        """
        Process one access. A malformed access is logged and skipped; it
        reaches no counter and returns None.
        """
        try:
            outcome = self.engine.access(kind, size, address)
        except InvalidAccess as exc:
            self.skipped += 1
            logger.warning("%s, skipping", exc)
            return None
        if self.on_outcome is not None:
            self.on_outcome(outcome)
        return outcome

    def run(self, events):
        """Feed every (kind, size, address) event; return (summary, outcomes)."""
        outcomes = []
        for kind, size, address in events:
            outcome = self.feed(kind, size, address)
            if outcome is not None:
                outcomes.append(outcome)
        return self.summary(), outcomes

    def summary(self):
        summary = self.stats.snapshot()
        summary["skipped_accesses"] = self.skipped
        summary["geometry"] = self.geometry.as_dict()
        return summary


def run_sweep(geometries, events):
    """Run an independent simulation per geometry over the same events."""
    events = list(events)
    summaries = []
    for geom in geometries:
        summary, _ = Simulation(geom).run(events)
        logger.debug("sweep %s: hit rate %.4f", tuple(geom), summary["hit_rate"])
        summaries.append(summary)
    return summaries


def save_results(summary, results_dir="results", filename="summary.json"):
    os.makedirs(results_dir, exist_ok=True)
    path = os.path.join(results_dir, filename)
    with open(path, "w") as f:
        json.dump(summary, f, indent=2)
    return path
