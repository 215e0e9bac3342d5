from __future__ import annotations
from typing import Any, Dict, Optional
from .chart import Chart

def apply_separation(chart: Chart, rate: float) -> None:
    """Scales every note's positionX by `rate` (in place). 0 collapses, <0 mirrors."""
    rate = float(rate)
    for line in chart.judge_lines:
        for note in line.notes:
            note.position_x *= rate

def apply_speed_override(chart: Chart, speed: float) -> None:
    """
    Pins eventLayers[0].speedEvents[0] of every line to `speed`.
    Lines without a populated speed layer are left alone.
    """
    speed = float(speed)
    for line in chart.judge_lines:
        if not line.event_layers or not line.event_layers[0]:
            continue
        events = line.event_layers[0].get("speedEvents")
        if not events:
            continue
        events[0]["start"] = speed
        events[0]["end"] = speed

def postprocess(chart: Chart, separation: Optional[float] = None, speed: Optional[float] = None,
                cfg: Optional[Dict[str, Any]] = None) -> Chart:
    # explicit arguments win over postprocess.* from the config
    pp = (cfg or {}).get("postprocess") or {}
    if separation is None:
        separation = pp.get("separation")
    if speed is None:
        speed = pp.get("speed")

    if separation is not None:
        apply_separation(chart, separation)
    if speed is not None:
        apply_speed_override(chart, speed)
    return chart
