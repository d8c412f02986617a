# report.py

def format_banner(geometry):
    return "\n".join([
        "Cache Simulator Configuration",
        "==============================",
        f"Number of sets:    {geometry.num_sets}",
        f"Set associativity: {geometry.associativity}",
        f"Line size:         {geometry.line_size} bytes",
        f"Total cache size:  {geometry.size_bytes} bytes",
        "",
    ])


def format_header():
    return ("Type Address  Tag      Index Offset Result MemRefs\n"
            "---- -------- -------- ----- ------ ------ -------")


def format_outcome(outcome):
    result = "hit " if outcome.hit else "miss"
    return (f"{outcome.kind.value} {outcome.address:08x} {outcome.tag:x} "
            f"{outcome.index:x} {outcome.offset:x} {result} {outcome.mem_refs}")


def format_summary(summary):
    return "\n".join([
        "",
        "Simulation Summary Statistics",
        "==============================",
        f"Total accesses:    {summary['total_accesses']}",
        f"Hits:              {summary['hits']}",
        f"Misses:            {summary['misses']}",
        f"Hit rate:          {100.0 * summary['hit_rate']:.2f}%",
        f"Miss rate:         {100.0 * summary['miss_rate']:.2f}%",
        f"Memory reads:      {summary['mem_reads']}",
        f"Memory writes:     {summary['mem_writes']}",
        f"Total memory refs: {summary['mem_refs']}",
    ])


def format_sweep(summaries):
    lines = ["Sets  Assoc  Line  Size(B)  Hit rate  Mem refs",
             "----  -----  ----  -------  --------  --------"]
    for s in summaries:
        g = s["geometry"]
        lines.append(f"{g['num_sets']:>4}  {g['associativity']:>5}  {g['line_size']:>4}  "
                     f"{g['size_bytes']:>7}  {100.0 * s['hit_rate']:>7.2f}%  {s['mem_refs']:>8}")
    return "\n".join(lines)
