from __future__ import annotations
import json
import math
import os
from typing import Any, Dict, Optional
from .chart import Chart, JudgeLine, Note, TempoMarker

# ---------- internal helpers ----------

def _bpm_item(m: TempoMarker) -> Dict[str, Any]:
    bpm = float(m.bpm)
    # JSON has no inf/nan
    return {"bpm": bpm if math.isfinite(bpm) else None, "startTime": m.start_time.as_list()}

def _note(n: Note, ncfg: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": int(ncfg.get("type", 1)),
        "above": int(ncfg.get("above", 1)),
        "startTime": n.start_time.as_list(),
        "endTime": n.end_time.as_list(),
        "positionX": float(n.position_x),
        "yOffset": float(ncfg.get("y_offset", 0.0)),
        "alpha": int(ncfg.get("alpha", 255)),
        "size": float(ncfg.get("size", 1.0)),
        "speed": float(ncfg.get("speed", 1.0)),
        "isFake": int(ncfg.get("is_fake", 0)),
        "visibleTime": float(ncfg.get("visible_time", 999999.0)),
    }

def _judge_line(line: JudgeLine, cfg: Dict[str, Any]) -> Dict[str, Any]:
    jcfg = cfg.get("judge_line") or {}
    ncfg = cfg.get("note") or {}
    return {
        "Group": int(jcfg.get("group", 0)),
        "Name": line.name,
        "Texture": str(jcfg.get("texture", "line.png")),
        "father": jcfg.get("father"),
        "eventLayers": line.event_layers,
        "extended": None,
        "notes": [_note(n, ncfg) for n in line.notes],
        "numOfNotes": line.num_of_notes,
        "isCover": int(jcfg.get("is_cover", 1)),
        "zOrder": int(jcfg.get("z_order", 0)),
    }

# ---------- public API ----------

def chart_to_dict(chart: Chart, cfg: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Chart -> RPE document. Fields the converter does not compute (offset, charter,
    note type, alpha, ...) come from the chart/judge_line/note config sections.
    """
    cfg = cfg or {}
    ccfg = cfg.get("chart") or {}
    return {
        "META": {
            "offset": int(ccfg.get("offset", 0)),
            "RPEVersion": int(ccfg.get("rpe_version", 140)),
            "charter": str(ccfg.get("charter", "")),
            "composer": str(ccfg.get("composer", "")),
            "name": chart.meta.name,
            "song": chart.meta.song,
            "background": chart.meta.background,
        },
        "BPMList": [_bpm_item(m) for m in chart.bpm_list],
        "judgeLineList": [_judge_line(ln, cfg) for ln in chart.judge_lines],
    }

def write_chart(chart: Chart, out_path: str, cfg: Optional[Dict[str, Any]] = None, indent: Optional[int] = None):
    out_dir = os.path.dirname(os.path.abspath(out_path))
    os.makedirs(out_dir, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as fh:
        json.dump(chart_to_dict(chart, cfg), fh, ensure_ascii=False, indent=indent)
