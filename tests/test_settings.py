from __future__ import annotations

from pathlib import Path

import pytest

from snowbored.domain.tuning import Tuning
from snowbored.infra.exceptions import SettingsError
from snowbored.infra.settings import HEART_URL, Settings, load_settings


def _write(tmp_path, text):
    path = tmp_path / "snowbored.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_no_path_means_defaults():
    s = load_settings(None)
    assert s.fps == 60
    assert s.seed is None
    assert s.tuning == Tuning()
    assert s.assets["heart"][0] == HEART_URL
    assert len(s.assets["trees"]) == 3


def test_overrides_from_yaml(tmp_path):
    path = _write(
        tmp_path,
        """
title: Test Slope
fps: 30
seed: 9
scores_path: data/scores.json
tuning:
  lives: 5
  movement_speed: 6
assets:
  player: sprites/gorilla.png
  snowmen:
    - sprites/snowman.png
    - ["https://example.com/s2.png", sprites/s2.png]
""",
    )
    s = load_settings(path)
    assert s.title == "Test Slope"
    assert s.fps == 30
    assert s.seed == 9
    assert s.tuning.lives == 5
    assert s.tuning.movement_speed == 6
    assert s.tuning.gravity == Tuning().gravity
    assert s.assets["player"] == ["sprites/gorilla.png"]
    assert s.assets["snowmen"] == [["sprites/snowman.png"], ["https://example.com/s2.png", "sprites/s2.png"]]
    # Untouched assets keep their defaults.
    assert s.assets["heart"][0] == HEART_URL
    assert s.base_dir == tmp_path.resolve()
    assert s.scores_file == tmp_path.resolve() / "data" / "scores.json"


def test_empty_file_is_defaults(tmp_path):
    s = load_settings(_write(tmp_path, ""))
    assert s.fps == 60
    assert s.base_dir == tmp_path.resolve()


def test_missing_file(tmp_path):
    with pytest.raises(SettingsError, match="not found"):
        load_settings(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path):
    with pytest.raises(SettingsError):
        load_settings(_write(tmp_path, "fps: [unclosed"))


@pytest.mark.parametrize(
    "text",
    [
        "volume: 11",
        "fps: 0",
        "fps: fast",
        "seed: abc",
        "asset_timeout: -1",
        "tuning: 3",
        "tuning:\n  jetpack: true",
        "tuning:\n  lives: 0",
        "assets:\n  music: a.ogg",
        "assets:\n  trees: a.png",
        "assets:\n  player: [1, 2]",
        "- just\n- a list",
    ],
)
def test_rejected_settings(tmp_path, text):
    with pytest.raises(SettingsError):
        load_settings(_write(tmp_path, text))


def test_resolve_keeps_absolute_paths(tmp_path):
    s = Settings(base_dir=tmp_path)
    assert s.resolve("a/b.png") == tmp_path / "a" / "b.png"
    absolute = Path(tmp_path / "x.png").resolve()
    assert s.resolve(absolute) == absolute


def test_tuning_validation():
    with pytest.raises(ValueError):
        Tuning(spawn_interval=10, min_spawn_interval=30)
    with pytest.raises(ValueError):
        Tuning(band_top=200.0, band_bottom=250.0)
    with pytest.raises(ValueError):
        Tuning(score_step=0)
