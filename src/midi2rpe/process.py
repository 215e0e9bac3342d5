from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from pathlib import PurePath
from typing import Any, Dict, List, Optional
import copy

from .timeline import Song, Track
from .chart import Chart, Metadata, JudgeLine, TempoMarker, FALLBACK_TITLE, MISSING_FILE
from .analyze import check_timing
from .config import get_tempo_merge, get_workers
from .walk import is_control_track, track_name, extract_tempos, extract_notes, track_events
from .util.pitch import STAGE_WIDTH

def _file_ref(path: Optional[str]) -> str:
    """Only the file name ends up in the chart; existence is not checked."""
    if not path:
        return MISSING_FILE
    return PurePath(str(path)).name or MISSING_FILE

def default_event_layers(cfg: Dict[str, Any]) -> List[Optional[Dict[str, Any]]]:
    layer = (cfg.get("judge_line") or {}).get("event_layer")
    if not isinstance(layer, dict):
        return []
    return [copy.deepcopy(layer)]

def build_metadata(song: Song, song_file: Optional[str], background_file: Optional[str],
                   cfg: Optional[Dict[str, Any]] = None) -> Metadata:
    cfg = cfg or {}
    title = None
    for tr in song.tracks:
        if not is_control_track(tr):
            continue
        title = track_name(tr)
        if title is not None:
            break
    if title is None:
        title = str(cfg.get("fallback_title", FALLBACK_TITLE))
    return Metadata(name=title, song=_file_ref(song_file), background=_file_ref(background_file))

def build_bpm_list(song: Song, cfg: Optional[Dict[str, Any]] = None) -> List[TempoMarker]:
    """
    'concatenate': one walk over all tracks chained in track order, the tick counter
    carries over from one track into the next (tempo map expected in a single track).
    'chronological': every track walked from tick 0, markers sorted by time (stable).
    """
    tpb = song.ticks_per_beat
    if get_tempo_merge(cfg or {}) == "chronological":
        markers: List[TempoMarker] = []
        for tr in song.tracks:
            markers.extend(extract_tempos(tr, tpb))
        markers.sort(key=lambda m: (m.start_time.bar, m.start_time.beat_tick))
        return markers
    return extract_tempos(track_events(song.tracks), tpb)

def track_to_judge_line(track: Track, tpb: int, cfg: Optional[Dict[str, Any]] = None) -> JudgeLine:
    cfg = cfg or {}
    stage_width = float(cfg.get("stage_width", STAGE_WIDTH))
    return JudgeLine(
        name=track_name(track) or "",
        notes=extract_notes(track, tpb, stage_width),
        event_layers=default_event_layers(cfg),
    )

def build_judge_lines(song: Song, cfg: Optional[Dict[str, Any]] = None) -> List[JudgeLine]:
    cfg = cfg or {}
    tpb = song.ticks_per_beat
    perf = [tr for tr in song.tracks if not is_control_track(tr)]
    workers = get_workers(cfg)
    if workers > 1 and len(perf) > 1:
        # map() hands results back in submission order -> track order stays intact
        with ThreadPoolExecutor(max_workers=workers) as ex:
            return list(ex.map(lambda tr: track_to_judge_line(tr, tpb, cfg), perf))
    return [track_to_judge_line(tr, tpb, cfg) for tr in perf]

def build_chart(song: Song, song_file: Optional[str] = None, background_file: Optional[str] = None,
                cfg: Optional[Dict[str, Any]] = None) -> Chart:
    cfg = cfg or {}
    # fails before anything is extracted
    check_timing(song.ticks_per_beat)

    return Chart(
        meta=build_metadata(song, song_file, background_file, cfg),
        bpm_list=build_bpm_list(song, cfg),
        judge_lines=build_judge_lines(song, cfg),
    )
