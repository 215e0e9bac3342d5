# src/midi2rpe/config.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional
import copy
import yaml

from .chart import FALLBACK_TITLE
from .util.pitch import STAGE_WIDTH

# package root: .../src/midi2rpe
PKG_ROOT = Path(__file__).resolve().parent
DEFAULT_CFG_PATH = PKG_ROOT / "config.default.yaml"
USER_CFG_PATH = Path.home() / ".config" / "midi2rpe" / "config.yaml"

TEMPO_MERGE_MODES = ("concatenate", "chronological")

class ConfigError(ValueError):
    """A config value the converter cannot work with."""

def _safe_load(path: Path) -> Dict[str, Any]:
    try:
        if path.exists():
            return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError):
        # a broken user file must not stop a conversion
        pass
    return {}

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out

def load_config(
    user_path: Optional[Path] = None,
    default_path: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Loads the packaged defaults, merges user overrides on top and returns a plain dict.
    Missing sections are filled in so the converter can rely on them.
    """
    dpath = Path(default_path) if default_path else DEFAULT_CFG_PATH
    upath = Path(user_path) if user_path else USER_CFG_PATH

    defaults = _safe_load(dpath)
    user = _safe_load(upath)
    cfg = _deep_merge(defaults, user)

    cfg.setdefault("fallback_title", FALLBACK_TITLE)
    cfg.setdefault("stage_width", STAGE_WIDTH)
    cfg.setdefault("workers", 1)
    for section in ("midi", "tempo", "postprocess", "chart", "judge_line", "note"):
        if not isinstance(cfg.get(section), dict):
            cfg[section] = {}
    cfg["tempo"].setdefault("merge", "concatenate")
    cfg["tempo"]["merge"] = get_tempo_merge(cfg)

    return cfg

def get_tempo_merge(cfg: Dict[str, Any]) -> str:
    mode = str((cfg.get("tempo") or {}).get("merge", "concatenate")).strip().lower()
    if mode not in TEMPO_MERGE_MODES:
        raise ConfigError(f"tempo.merge must be one of {TEMPO_MERGE_MODES}, got {mode!r}")
    return mode

def get_workers(cfg: Dict[str, Any]) -> int:
    try:
        return max(1, int(cfg.get("workers", 1)))
    except (TypeError, ValueError):
        return 1
