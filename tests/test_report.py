from cache import AccessKind, AccessOutcome
from geometry import validate
import report


def test_format_outcome_miss():
    o = AccessOutcome(AccessKind.READ, 0xc, 0, 0, 0xc, False, 1)
    assert report.format_outcome(o) == "R 0000000c 0 0 c miss 1"


def test_format_outcome_hit():
    o = AccessOutcome(AccessKind.WRITE, 0x1238, 0x12, 3, 8, True, 1)
    assert report.format_outcome(o) == "W 00001238 12 3 8 hit  1"


def test_banner_includes_total_size():
    text = report.format_banner(validate(16, 2, 16))
    assert "Total cache size:  512 bytes" in text


def test_summary_percentages():
    summary = {"total_accesses": 6, "hits": 2, "misses": 4, "hit_rate": 2 / 6,
               "miss_rate": 4 / 6, "mem_reads": 4, "mem_writes": 0, "mem_refs": 4}
    text = report.format_summary(summary)
    assert "Hit rate:          33.33%" in text
    assert "Miss rate:         66.67%" in text
    assert "Total memory refs: 4" in text
