from conftest import ev, eot
from midi2rpe.chart import TimePosition
from midi2rpe.timeline import Track, NoteOn, Tempo, TrackName, Other
from midi2rpe.walk import (
    is_control_track, track_name, with_absolute_ticks, extract_tempos, extract_notes, track_events,
)

def test_empty_track_is_control():
    assert is_control_track(Track())

def test_single_note_on_is_performance():
    assert not is_control_track(Track((ev(0, NoteOn(60)),)))

def test_meta_only_track_is_control():
    tr = Track((ev(0, TrackName("x")), ev(0, Tempo(500000)), ev(10, Other("marker", meta=True)), eot()))
    assert is_control_track(tr)

def test_non_meta_other_makes_performance_track():
    # a controller change or sysex is not meta
    tr = Track((ev(0, Tempo(500000)), ev(0, Other("control_change"))))
    assert not is_control_track(tr)

def test_track_name_first_wins():
    tr = Track((ev(0, NoteOn(60)), ev(0, TrackName("a")), ev(0, TrackName("b"))))
    assert track_name(tr) == "a"
    assert track_name(Track()) is None

def test_absolute_ticks_accumulate_before_stamp():
    evs = [ev(5, Other("x")), ev(0, Other("y")), ev(10, Other("z"))]
    assert [t for t, _ in with_absolute_ticks(evs)] == [5, 5, 15]

def test_extract_tempos_skips_other_events():
    evs = [ev(0, Tempo(500000)), ev(240, NoteOn(60)), ev(240, Other("note_off")), ev(480, Tempo(1_000_000))]
    markers = extract_tempos(evs, 480)
    assert [m.bpm for m in markers] == [120.0, 60.0]
    assert markers[0].start_time == TimePosition(0, 0, 480)
    assert markers[1].start_time == TimePosition(2, 0, 480)

def test_note_count_ignores_interleaved_events():
    evs = [
        ev(0, NoteOn(60)), ev(100, Other("note_off")), ev(0, Other("control_change")),
        ev(20, NoteOn(64)), ev(0, NoteOn(67)), ev(360, Other("note_off")), eot(),
    ]
    notes = extract_notes(evs, 480)
    assert len(notes) == 3
    assert [n.start_time for n in notes] == [
        TimePosition(0, 0, 480), TimePosition(0, 120, 480), TimePosition(0, 120, 480),
    ]

def test_notes_are_instantaneous():
    notes = extract_notes([ev(700, NoteOn(61))], 480)
    assert notes[0].start_time == notes[0].end_time == TimePosition(1, 220, 480)

def test_note_start_times_non_decreasing():
    evs = [ev(d, NoteOn(60 + i)) for i, d in enumerate([0, 3, 0, 480, 1, 0, 960])]
    notes = extract_notes(evs, 96)
    beats = [n.start_time.beats for n in notes]
    assert beats == sorted(beats)

def test_track_events_chains_in_track_order():
    a = Track((ev(1, Other("a")),))
    b = Track((ev(2, Other("b")),))
    assert [e.kind.kind for e in track_events([a, b])] == ["a", "b"]
