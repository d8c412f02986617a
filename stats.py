# stats.py
from cache import AccessKind


class StatsAccumulator:
    """Running hit/miss and memory-traffic counts for one simulation run."""

    def __init__(self):
        self.hits = 0
        self.misses = 0
        self.mem_reads = 0
        self.mem_writes = 0

    def record(self, outcome):
        if outcome.hit:
            self.hits += 1
        else:
            self.misses += 1
        if outcome.kind is AccessKind.WRITE:
            self.mem_writes += outcome.mem_refs
        else:
            self.mem_reads += outcome.mem_refs

    @property
    def accesses(self):
        return self.hits + self.misses

    @property
    def mem_refs(self):
        return self.mem_reads + self.mem_writes

    @property
    def hit_rate(self):
        total = self.accesses
        return self.hits / total if total else 0.0

    @property
    def miss_rate(self):
        return 1.0 - self.hit_rate if self.accesses else 0.0

    def snapshot(self):
        return {
            "total_accesses": self.accesses,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hit_rate,
            "miss_rate": self.miss_rate,
            "mem_reads": self.mem_reads,
            "mem_writes": self.mem_writes,
            "mem_refs": self.mem_refs,
        }
