from __future__ import annotations
import argparse, pathlib, sys, traceback
from . import analyze, process, postprocess, write
from .config import ConfigError, load_config

def _hint(exc: BaseException) -> str:
    if isinstance(exc, ConfigError):
        return "..bad value in the config"
    if isinstance(exc, analyze.UnsupportedTimingError):
        return "..unsupported timing (only ticks per beat)"
    if isinstance(exc, OSError):
        return "..when tried to open the file"
    return "..when tried to read the midi file"

def main(argv=None):
    p = argparse.ArgumentParser(description="MIDI -> RPE chart (JSON)")
    p.add_argument("--in", dest="infile", required=True, help="Input MIDI file (.mid)")
    p.add_argument("--id", dest="target_id", type=int, required=True, help="Id of the target chart")
    p.add_argument("--out", "-o", dest="outfile", default=None, help="Output chart (default: <id>.json)")
    p.add_argument("--song-file", dest="song_file", default=None, help="Song file referred in the chart (default: <id>.mp3)")
    p.add_argument("--background-file", dest="background_file", default=None, help="Background image referred in the chart (default: <id>.png)")
    p.add_argument("--separation", type=float, default=None, help="Scale factor for every note's horizontal position")
    p.add_argument("--speed", type=float, default=None, help="Fixed speed for every judge line")
    p.add_argument("--config", dest="config", default=None, help="YAML config (defaults applied if omitted)")
    p.add_argument("--indent", type=int, default=None, help="Pretty-print the JSON output")

    args = p.parse_args(argv)

    in_path = pathlib.Path(args.infile).expanduser().resolve()
    if not in_path.exists():
        print(f"[cli] ERROR: Input not found: {in_path}", file=sys.stderr)
        sys.exit(1)

    tid = args.target_id
    song_file = args.song_file or f"{tid}.mp3"
    background_file = args.background_file or f"{tid}.png"
    out_path = pathlib.Path(args.outfile or f"{tid}.json").expanduser().resolve()

    print(f"[cli] infile = {in_path}")

    try:
        cfg = load_config(args.config)
        song = analyze.read_song(str(in_path), cfg)
        chart = process.build_chart(song, song_file, background_file, cfg)
        postprocess.postprocess(chart, args.separation, args.speed, cfg)
        write.write_chart(chart, str(out_path), cfg, indent=args.indent)
    except Exception as exc:
        print("Something is wrong...", file=sys.stderr)
        traceback.print_exc()
        print(_hint(exc), file=sys.stderr)
        sys.exit(2)

    print(f"[cli] chart -> {out_path}")
    total_notes = sum(ln.num_of_notes for ln in chart.judge_lines)
    print(f"[cli] Done. lines={len(chart.judge_lines)} notes={total_notes} "
          f"bpm={len(chart.bpm_list)} tpb={song.ticks_per_beat}")

if __name__ == "__main__":
    main()
