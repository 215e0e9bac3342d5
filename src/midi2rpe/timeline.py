from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple, Union

SMPTE_FLAG = 0x8000

# --- Input: a parsed MIDI song, reduced to what the converter looks at ---

@dataclass(frozen=True)
class NoteOn:
    key: int               # 0..127

@dataclass(frozen=True)
class Tempo:
    microseconds_per_beat: int

@dataclass(frozen=True)
class TrackName:
    text: str

@dataclass(frozen=True)
class Other:
    kind: str              # mido message type, e.g. "note_off", "end_of_track"
    meta: bool = False

EventKind = Union[NoteOn, Tempo, TrackName, Other]

# meta variants: allowed inside a control track
def is_meta(kind: EventKind) -> bool:
    if isinstance(kind, (Tempo, TrackName)):
        return True
    if isinstance(kind, Other):
        return kind.meta
    return False

@dataclass(frozen=True)
class TrackEvent:
    delta: int             # ticks since the previous event, >= 0
    kind: EventKind

@dataclass(frozen=True)
class Track:
    events: Tuple[TrackEvent, ...] = ()

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self):
        return iter(self.events)

@dataclass(frozen=True)
class Song:
    ticks_per_beat: int
    tracks: Tuple[Track, ...] = field(default_factory=tuple)
