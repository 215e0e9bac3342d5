import pytest
from midi2rpe.config import ConfigError, load_config, get_tempo_merge, get_workers

def test_packaged_defaults(cfg):
    assert cfg["fallback_title"] == "Generated"
    assert cfg["stage_width"] == 1350.0
    assert get_tempo_merge(cfg) == "concatenate"
    assert cfg["note"]["alpha"] == 255
    assert "speedEvents" in cfg["judge_line"]["event_layer"]

def test_user_overrides_merge_deep(tmp_path):
    user = tmp_path / "user.yaml"
    user.write_text("tempo:\n  merge: chronological\nnote:\n  type: 2\n", encoding="utf-8")
    cfg = load_config(user_path=user)
    assert get_tempo_merge(cfg) == "chronological"
    assert cfg["note"]["type"] == 2
    assert cfg["note"]["alpha"] == 255

def test_broken_files_fall_back_to_minimal_defaults(tmp_path):
    broken = tmp_path / "broken.yaml"
    broken.write_text("tempo: [unclosed\n", encoding="utf-8")
    cfg = load_config(user_path=broken, default_path=tmp_path / "missing.yaml")
    assert cfg["fallback_title"] == "Generated"
    assert cfg["tempo"]["merge"] == "concatenate"
    assert cfg["judge_line"] == {}

def test_bad_tempo_merge():
    with pytest.raises(ValueError):
        get_tempo_merge({"tempo": {"merge": "whatever"}})

@pytest.mark.parametrize("value,expected", [(1, 1), (4, 4), (0, 1), ("x", 1), (None, 1)])
def test_get_workers(value, expected):
    assert get_workers({"workers": value}) == expected

def test_bad_tempo_merge_rejected_at_load(tmp_path):
    user = tmp_path / "user.yaml"
    user.write_text("tempo:\n  merge: Sorted\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(user_path=user)

def test_tempo_merge_normalized_at_load(tmp_path):
    user = tmp_path / "user.yaml"
    user.write_text("tempo:\n  merge: ' Chronological '\n", encoding="utf-8")
    assert load_config(user_path=user)["tempo"]["merge"] == "chronological"
