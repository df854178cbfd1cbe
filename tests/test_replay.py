from __future__ import annotations

import pytest

from snowbored.app.replay import InputPattern, run_headless, seeded_session
from snowbored.app.session import SessionPhase


def test_pattern_cycles():
    p = InputPattern(hold=2, release=3)
    assert [p.ascending_at(f) for f in range(6)] == [True, True, False, False, False, True]


def test_default_pattern_never_ascends():
    p = InputPattern()
    assert not any(p.ascending_at(f) for f in range(10))


def test_pattern_rejects_empty_cycle():
    with pytest.raises(ValueError):
        InputPattern(hold=0, release=0)


def test_run_stops_at_frame_budget():
    session = seeded_session(5)
    state = run_headless(session, max_frames=120)
    assert session.phase is SessionPhase.RUNNING
    assert state.frame_count + (3 - state.lives) == 120


def test_run_until_game_over():
    session = seeded_session(5)
    state = run_headless(session, max_frames=20000, pattern=InputPattern(hold=10, release=20))
    assert state.game_over
    assert session.phase is SessionPhase.GAME_OVER
    assert session.result.game_time >= 1


def test_replays_are_reproducible():
    a = run_headless(seeded_session(11), max_frames=1500, pattern=InputPattern(hold=5, release=9))
    b = run_headless(seeded_session(11), max_frames=1500, pattern=InputPattern(hold=5, release=9))
    assert a == b
