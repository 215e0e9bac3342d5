from __future__ import annotations
import pytest
from midi2rpe.config import load_config
from midi2rpe.timeline import Song, Track, TrackEvent, NoteOn, Tempo, TrackName, Other

def ev(delta, kind):
    return TrackEvent(delta, kind)

def eot(delta=0):
    return ev(delta, Other("end_of_track", meta=True))

@pytest.fixture
def cfg(tmp_path):
    # packaged defaults only, no user file from $HOME
    return load_config(user_path=tmp_path / "no-user-config.yaml")

@pytest.fixture
def two_track_song():
    conductor = Track((ev(0, TrackName("Pi")), ev(0, Tempo(500000)), eot()))
    piano = Track((
        ev(0, TrackName("Piano")),
        ev(0, NoteOn(60)),
        ev(480, NoteOn(72)),
        eot(),
    ))
    return Song(ticks_per_beat=480, tracks=(conductor, piano))
