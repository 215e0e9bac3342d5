from __future__ import annotations
from typing import Iterable, Iterator, List, Optional, Tuple
from .timeline import Track, TrackEvent, NoteOn, Tempo, TrackName, Other, is_meta
from .chart import Note, TempoMarker
from .util.time import tick_to_time, tempo_to_bpm
from .util.pitch import key_to_x, STAGE_WIDTH

def is_control_track(track: Iterable[TrackEvent]) -> bool:
    """
    Control track = nothing but meta events (tempo, track name, markers, ...).
    An empty track counts as a control track.
    """
    return all(is_meta(ev.kind) for ev in track)

def track_name(track: Iterable[TrackEvent]) -> Optional[str]:
    for ev in track:
        if isinstance(ev.kind, TrackName):
            return ev.kind.text
    return None

def with_absolute_ticks(events: Iterable[TrackEvent]) -> Iterator[Tuple[int, TrackEvent]]:
    """Yields (absolute_tick, event); the delta is added before the event is stamped."""
    tick = 0
    for ev in events:
        tick += ev.delta
        yield tick, ev

def extract_tempos(events: Iterable[TrackEvent], tpb: int) -> List[TempoMarker]:
    out: List[TempoMarker] = []
    for tick, ev in with_absolute_ticks(events):
        kind = ev.kind
        if isinstance(kind, Tempo):
            out.append(TempoMarker(bpm=tempo_to_bpm(kind.microseconds_per_beat),
                                   start_time=tick_to_time(tick, tpb)))
        elif isinstance(kind, (NoteOn, TrackName, Other)):
            continue
        else:
            raise TypeError(f"unknown event kind: {kind!r}")
    return out

def extract_notes(events: Iterable[TrackEvent], tpb: int,
                  stage_width: float = STAGE_WIDTH) -> List[Note]:
    # note_off is dropped: every note is a point in time (start == end)
    out: List[Note] = []
    for tick, ev in with_absolute_ticks(events):
        kind = ev.kind
        if isinstance(kind, NoteOn):
            t = tick_to_time(tick, tpb)
            out.append(Note(start_time=t, end_time=t, position_x=key_to_x(kind.key, stage_width)))
        elif isinstance(kind, (Tempo, TrackName, Other)):
            continue
        else:
            raise TypeError(f"unknown event kind: {kind!r}")
    return out

def track_events(tracks: Iterable[Track]) -> Iterator[TrackEvent]:
    """All events of all tracks, chained in track order (no time merge)."""
    for tr in tracks:
        yield from tr.events
