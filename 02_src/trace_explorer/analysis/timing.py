"""Time aggregation between index entries and duration formatting."""

from ..models import TraceNode

UNITS = ("ns", "µs", "ms", "s")


def aggregate_time(index: list[TraceNode], a: int, b: int) -> int:
    """Nanoseconds spent between two index positions.

    For a single position this is the entry's own time. Otherwise it is the
    sum over the leaf entries after the lower position up to and including
    the higher one; composite stages are skipped since their leaves already
    account for their time.
    """
    for position in (a, b):
        if not 0 <= position < len(index):
            raise IndexError(f"Index position {position} out of range")

    if a == b:
        return index[a].time

    lo, hi = sorted((a, b))
    return sum(node.time for node in index[lo + 1 : hi + 1] if node.is_leaf)


def decompose_duration(nanos: int) -> tuple[int, int, int, int]:
    """Split nanoseconds into (ns, µs, ms, s) by repeated division by 1000."""
    if nanos < 0:
        raise ValueError(f"Duration must be non-negative, got {nanos}")

    parts = []
    rest = nanos
    for _ in range(3):
        rest, part = divmod(rest, 1000)
        parts.append(part)
    parts.append(rest)
    return tuple(parts)


def format_duration(nanos: int) -> str:
    """Format a duration in its largest nonzero unit.

    The smaller units follow as a zero-padded fraction when nonzero:
    ``1_500_000`` gives ``1.500000ms`` and ``2_000_000`` gives ``2ms``.
    """
    parts = decompose_duration(nanos)
    unit = max((i for i, part in enumerate(parts) if part), default=0)

    fraction = nanos % (1000**unit)
    if not fraction:
        return f"{parts[unit]}{UNITS[unit]}"
    return f"{parts[unit]}.{fraction:0{3 * unit}d}{UNITS[unit]}"
