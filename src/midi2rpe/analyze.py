# src/midi2rpe/analyze.py
from __future__ import annotations
from typing import Any, Dict, Optional
import mido
from .timeline import Song, Track, TrackEvent, NoteOn, Tempo, TrackName, Other, EventKind, SMPTE_FLAG

class UnsupportedTimingError(ValueError):
    """The MIDI header does not use ticks per beat (e.g. SMPTE frame timing)."""

def check_timing(ticks_per_beat: int) -> int:
    tpb = int(ticks_per_beat)
    if tpb <= 0 or tpb & SMPTE_FLAG:
        raise UnsupportedTimingError(
            f"only ticks-per-beat timing is supported (division=0x{tpb & 0xFFFF:04x})")
    return tpb

def _utf8_text(text: str) -> str:
    # mido hands meta text back as latin-1; the bytes are usually UTF-8
    try:
        raw = text.encode("latin-1")
    except UnicodeEncodeError:
        return text
    return raw.decode("utf-8", errors="replace")

def classify_message(msg: mido.Message | mido.MetaMessage, zero_velocity_is_off: bool = False) -> EventKind:
    if msg.type == "note_on":
        if zero_velocity_is_off and msg.velocity == 0:
            return Other("note_off")
        return NoteOn(int(msg.note))
    if msg.type == "set_tempo":
        return Tempo(int(msg.tempo))
    if msg.type == "track_name":
        return TrackName(_utf8_text(msg.name or ""))
    return Other(msg.type, meta=bool(msg.is_meta))

def song_from_midifile(mid: mido.MidiFile, cfg: Optional[Dict[str, Any]] = None) -> Song:
    """Reduces a loaded mido.MidiFile to a Song. Raises UnsupportedTimingError first."""
    cfg = cfg or {}
    tpb = check_timing(mid.ticks_per_beat)
    zero_off = bool((cfg.get("midi") or {}).get("zero_velocity_note_on_is_off", False))

    tracks = []
    for mt in mid.tracks:
        events = tuple(TrackEvent(int(msg.time), classify_message(msg, zero_off)) for msg in mt)
        tracks.append(Track(events))
    return Song(ticks_per_beat=tpb, tracks=tuple(tracks))

def read_song(path: str, cfg: Optional[Dict[str, Any]] = None) -> Song:
    # I/O and parse errors from mido are passed through untouched
    mid = mido.MidiFile(path)
    return song_from_midifile(mid, cfg)
