from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

FALLBACK_TITLE = "Generated"
MISSING_FILE = "missingno"

# --- Output: the chart as the converter builds it ---

@dataclass(frozen=True)
class TimePosition:
    """bar + beat_tick / ticks_per_beat beats from the start."""
    bar: int = 0
    beat_tick: int = 0
    ticks_per_beat: int = 1

    def as_list(self) -> List[int]:
        return [self.bar, self.beat_tick, self.ticks_per_beat]

    @property
    def beats(self) -> float:
        return self.bar + self.beat_tick / self.ticks_per_beat

@dataclass
class TempoMarker:
    bpm: float
    start_time: TimePosition = field(default_factory=TimePosition)

@dataclass
class Note:
    start_time: TimePosition
    end_time: TimePosition
    position_x: float

@dataclass
class JudgeLine:
    name: str = ""
    notes: List[Note] = field(default_factory=list)
    # eventLayers as the output schema spells them (dicts, camelCase keys)
    event_layers: List[Optional[Dict[str, Any]]] = field(default_factory=list)

    @property
    def num_of_notes(self) -> int:
        return len(self.notes)

@dataclass
class Metadata:
    name: str = FALLBACK_TITLE
    song: str = MISSING_FILE
    background: str = MISSING_FILE

@dataclass
class Chart:
    meta: Metadata = field(default_factory=Metadata)
    bpm_list: List[TempoMarker] = field(default_factory=list)
    judge_lines: List[JudgeLine] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.meta.name
