# workload.py
import numpy as np

from cache import AccessKind, VALID_ACCESS_SIZES
from tracefile import TraceEvent

PATTERNS = ("sequential", "random", "mixed")


class WorkloadGenerator:
    """
    Synthetic access stream over a working set of `working_set_bytes`,
    split into aligned slots of `access_size` bytes.
    """

    def __init__(self, pattern="mixed", read_ratio=0.8, working_set_bytes=64 * 1024,
                 access_size=4, seed=None):
        if pattern not in PATTERNS:
            raise ValueError(f"unknown access pattern {pattern!r}, expected one of {PATTERNS}")
        if access_size not in VALID_ACCESS_SIZES:
            raise ValueError(f"access size must be one of {VALID_ACCESS_SIZES}")
        if not 0.0 <= read_ratio <= 1.0:
            raise ValueError("read_ratio must be within [0, 1]")
        self.pattern = pattern
        self.read_ratio = read_ratio
        self.access_size = access_size
        self.num_slots = max(1, working_set_bytes // access_size)
        self.rng = np.random.default_rng(seed)
        self._seq_ptr = 0

    def _next_sequential(self):
        slot = self._seq_ptr
        self._seq_ptr = (slot + 1) % self.num_slots
        return slot

    def _next_slot(self):
        if self.pattern == "sequential":
            return self._next_sequential()
        elif self.pattern == "random":
            return int(self.rng.integers(0, self.num_slots))
        else:  # mixed: mostly sequential with some random
            if self.rng.random() < 0.8:
                return self._next_sequential()
            return int(self.rng.integers(0, self.num_slots))

    def next_event(self):
        kind = AccessKind.READ if self.rng.random() < self.read_ratio else AccessKind.WRITE
        return TraceEvent(kind, self.access_size, self._next_slot() * self.access_size)

    def generate(self, num_accesses):
        for _ in range(num_accesses):
            yield self.next_event()


def generate_trace(num_accesses, pattern="mixed", read_ratio=0.8, working_set_bytes=64 * 1024,
                   access_size=4, seed=None):
    gen = WorkloadGenerator(pattern, read_ratio, working_set_bytes, access_size, seed)
    return list(gen.generate(num_accesses))
