# tracefile.py
import collections
import logging

from cache import AccessKind

logger = logging.getLogger(__name__)

TraceEvent = collections.namedtuple("TraceEvent", ["kind", "size", "address"])


class TraceFormatError(ValueError):
    pass


def parse_trace_line(line):
    """
    Parse one `KIND:SIZE:HEXADDR` line (e.g. "W:4:0000fffc") into a TraceEvent.
    Size and alignment are left for the engine to check.
    """
    fields = line.strip().split(":")
    if len(fields) != 3:
        raise TraceFormatError(f"expected KIND:SIZE:ADDRESS, got {line.strip()!r}")
    kind_field, size_field, addr_field = (f.strip() for f in fields)
    try:
        kind = AccessKind.from_char(kind_field)
    except ValueError:
        raise TraceFormatError(f"unknown access kind {kind_field!r}") from None
    try:
        size = int(size_field, 10)
        address = int(addr_field, 16)
    except ValueError:
        raise TraceFormatError(f"bad number in {line.strip()!r}") from None
    if address < 0:
        raise TraceFormatError(f"negative address in {line.strip()!r}")
    return TraceEvent(kind, size, address)


def read_trace(stream):
    """Yield TraceEvents from an iterable of lines, dropping lines that do not parse."""
    for lineno, line in enumerate(stream, 1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        try:
            yield parse_trace_line(text)
        except TraceFormatError as exc:
            logger.debug("line %d skipped: %s", lineno, exc)


def write_trace(events, stream):
    for event in events:
        stream.write(f"{event.kind.value}:{event.size}:{event.address:08x}\n")
