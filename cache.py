# cache.py
import collections
import enum

import numpy as np

VALID_ACCESS_SIZES = (1, 2, 4, 8)


class AccessKind(enum.Enum):
    READ = "R"
    WRITE = "W"

    @classmethod
    def from_char(cls, char):
        return cls(char.upper())


class InvalidAccess(ValueError):
    """A malformed access reached the engine."""

    def __init__(self, size, address, message):
        super().__init__(message)
        self.size = size
        self.address = address


class BadSizeError(InvalidAccess):
    pass


class MisalignedError(InvalidAccess):
    pass


def check_access(size, address):
    if size not in VALID_ACCESS_SIZES:
        raise BadSizeError(size, address, f"Invalid access size {size}")
    if address < 0:
        raise InvalidAccess(size, address, f"Negative address {address}")
    if address % size != 0:
        raise MisalignedError(size, address, f"Misaligned access at 0x{address:x}")


class CacheLine:
    __slots__ = ("valid", "tag", "recency")

    def __init__(self):
        self.valid = False
        self.tag = 0
        self.recency = 0

    def __repr__(self):
        if not self.valid:
            return "CacheLine(invalid)"
        return f"CacheLine(tag=0x{self.tag:x}, recency={self.recency})"


class CacheStore:
    """
    All sets of the cache. Each set is a fixed-size list of CacheLine,
    indexed by way; nothing is allocated after construction.
    """

    def __init__(self, geometry):
        self.geometry = geometry
        self.sets = [[CacheLine() for _ in range(geometry.associativity)]
                     for _ in range(geometry.num_sets)]

    def __len__(self):
        return len(self.sets)

    def __getitem__(self, index):
        return self.sets[index]

    def lookup(self, index, tag):
        """Return the way holding a valid line with `tag` in set `index`, else None."""
        for way, line in enumerate(self.sets[index]):
            if line.valid and line.tag == tag:
                return way
        return None

    def install(self, index, way, tag):
        line = self.sets[index][way]
        line.valid = True
        line.tag = tag

    def occupancy(self):
        """Valid lines per set, as a numpy array of length num_sets."""
        return np.fromiter((sum(1 for line in s if line.valid) for s in self.sets),
                           dtype=np.int64, count=len(self.sets))

    def resident_tags(self, index):
        return [line.tag for line in self.sets[index] if line.valid]


class LruTracker:
    """
    Counter-based LRU over one set. Valid lines keep a dense band of
    recency values; the highest value is the most recently used way.
    """

    def __init__(self, associativity):
        self.associativity = associativity

    def promote(self, lines, way):
        current = lines[way].recency
        for line in lines:
            if line.valid and line.recency > current:
                line.recency -= 1
        lines[way].recency = self.associativity - 1

    def select_victim(self, lines):
        # cold miss: first invalid way wins regardless of recency
        for way, line in enumerate(lines):
            if not line.valid:
                return way
        victim = 0
        for way in range(1, len(lines)):
            if lines[way].recency < lines[victim].recency:
                victim = way
        return victim


AccessOutcome = collections.namedtuple(
    "AccessOutcome", ["kind", "address", "tag", "index", "offset", "hit", "mem_refs"])


class AccessEngine:
    """
    Write-through, no-write-allocate access policy over a CacheStore.

    The store and stats accumulator are owned by the caller (one pair per
    simulation run); the engine is the only writer of the store.
    """

    def __init__(self, geometry, store=None, stats=None, lru=None):
        self.geometry = geometry
        self.store = store if store is not None else CacheStore(geometry)
        self.stats = stats
        self.lru = lru if lru is not None else LruTracker(geometry.associativity)

    def decompose(self, address):
        """Split an address into (tag, index, offset) using bit widths, not raw sizes."""
        offset_bits = self.geometry.offset_bits
        index_bits = self.geometry.index_bits
        offset = address & ((1 << offset_bits) - 1)
        index = (address >> offset_bits) & ((1 << index_bits) - 1)
        tag = address >> (offset_bits + index_bits)
        return tag, index, offset

    def lookup(self, index, tag):
        """Return (hit, way); way is None on a miss."""
        way = self.store.lookup(index, tag)
        return way is not None, way

    def access(self, kind, size, address):
        """
        Simulate one access and return its AccessOutcome.
        Raises InvalidAccess (before touching any state) for a bad size, a negative
        address or a misaligned one.
        """
        check_access(size, address)
        tag, index, offset = self.decompose(address)
        hit, way = self.lookup(index, tag)
        lines = self.store[index]

        if kind is AccessKind.READ:
            if hit:
                self.lru.promote(lines, way)
                mem_refs = 0
            else:
                victim = self.lru.select_victim(lines)
                self.store.install(index, victim, tag)
                self.lru.promote(lines, victim)
                mem_refs = 1
        elif kind is AccessKind.WRITE:
            # write-through: memory is always written; a miss never allocates
            if hit:
                self.lru.promote(lines, way)
            mem_refs = 1
        else:
            raise TypeError(f"unknown access kind {kind!r}")

        outcome = AccessOutcome(kind, address, tag, index, offset, hit, mem_refs)
        if self.stats is not None:
            self.stats.record(outcome)
        return outcome
