from __future__ import annotations
from ..chart import TimePosition

US_PER_MINUTE = 60_000_000

def tick_to_time(tick: int, tpb: int) -> TimePosition:
    """Absolute tick -> (bar, beat_tick, tpb). tpb > 0 is guaranteed by the Song."""
    return TimePosition(tick // tpb, tick % tpb, tpb)

# 4/4 assumed everywhere: time signature events are never consulted
def tempo_to_bpm(microseconds_per_beat: int) -> float:
    if not microseconds_per_beat:
        # set_tempo 0 is legal in a file; the marker is kept as an infinite bpm
        return float("inf")
    return US_PER_MINUTE / float(microseconds_per_beat)
