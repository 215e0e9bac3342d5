from __future__ import annotations

MIDDLE_C = 60
PIANO_KEY_COUNT = 88
STAGE_WIDTH = 1350.0

def key_to_x(key: int, stage_width: float = STAGE_WIDTH) -> float:
    # middle C sits on the center line, no clamping outside the 88 keys
    return (int(key) - MIDDLE_C) / PIANO_KEY_COUNT * float(stage_width)
