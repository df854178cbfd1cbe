from __future__ import annotations

from dataclasses import replace

import pytest

from conftest import FRAME, FixedRandom
from snowbored.domain.game_state import Obstacle, Player, TrailPoint
from snowbored.domain.input_state import InputState
from snowbored.domain.spawner import SNOWMAN, TREE


IDLE = InputState(ascending=False)
UP = InputState(ascending=True)


def test_gravity_pulls_player_down(world, state, rng):
    nxt = world.step(state, IDLE, FRAME, rng)
    assert nxt.player.vy == pytest.approx(0.2)
    assert nxt.player.y == pytest.approx(200.2)
    assert nxt.player.x == state.player.x


def test_ascending_accelerates_up(world, state, rng):
    nxt = world.step(state, UP, FRAME, rng)
    assert nxt.player.vy == pytest.approx(-0.2)
    assert nxt.player.y == pytest.approx(199.8)
    assert nxt.player.ascending is True


def test_vertical_velocity_is_clamped(world, state, rng):
    falling = replace(state, player=Player(x=100.0, y=200.0, vy=4.9, ascending=False))
    assert world.step(falling, IDLE, FRAME, rng).player.vy == pytest.approx(5.0)

    rising = replace(state, player=Player(x=100.0, y=200.0, vy=-4.9, ascending=True))
    assert world.step(rising, UP, FRAME, rng).player.vy == pytest.approx(-5.0)


def test_player_stays_in_band(world, state, rng, tuning):
    low = replace(state, player=Player(x=100.0, y=329.0, vy=5.0, ascending=False))
    assert world.step(low, IDLE, FRAME, rng).player.y == tuning.height - 70

    high = replace(state, player=Player(x=100.0, y=51.0, vy=-5.0, ascending=True))
    assert world.step(high, UP, FRAME, rng).player.y == 50


def test_trail_point_pushed_at_head_and_scrolled(world, state, rng):
    nxt = world.step(state, IDLE, FRAME, rng)
    assert len(nxt.trail) == 1
    head = nxt.trail[0]
    assert head.x == pytest.approx(95.0)
    assert head.y == pytest.approx(nxt.player.y + 10)


def test_trail_is_capped(world, state, rng):
    old = tuple(TrailPoint(x=700.0 - i, y=200.0) for i in range(50))
    nxt = world.step(replace(state, trail=old), IDLE, FRAME, rng)
    assert len(nxt.trail) == 50
    # Newest first; the oldest sample fell off the end.
    assert nxt.trail[0].x == pytest.approx(95.0)
    assert nxt.trail[-1].x == pytest.approx(old[48].x - 5.0)


def test_trail_points_dropped_left_of_canvas(world, state, rng):
    old = (TrailPoint(x=4.0, y=200.0), TrailPoint(x=6.0, y=200.0))
    nxt = world.step(replace(state, trail=old), IDLE, FRAME, rng)
    assert [q.x for q in nxt.trail] == pytest.approx([95.0, 1.0])


def test_obstacles_scroll_and_despawn(world, state, rng):
    kept = Obstacle(x=-44.0, y=60.0, kind=TREE, variant=0)
    gone = Obstacle(x=-45.0, y=60.0, kind=TREE, variant=1)
    far = Obstacle(x=600.0, y=60.0, kind=SNOWMAN, variant=0)
    nxt = world.step(replace(state, obstacles=(kept, gone, far)), IDLE, FRAME, rng)
    assert [o.x for o in nxt.obstacles] == pytest.approx([-49.0, 595.0])
    assert all(o.x >= -50 for o in nxt.obstacles)


def test_scroll_uses_speed_multiplier(world, state, rng):
    o = Obstacle(x=600.0, y=60.0, kind=TREE, variant=0)
    nxt = world.step(replace(state, obstacles=(o,), speed_multiplier=2.0), IDLE, FRAME, rng)
    assert nxt.obstacles[0].x == pytest.approx(590.0)


def test_spawn_on_interval_at_right_edge(world, state, tuning):
    nxt = world.step(replace(state, frame_count=0), IDLE, FRAME, FixedRandom(0.0))
    assert len(nxt.obstacles) == 1
    o = nxt.obstacles[0]
    assert o.x == tuning.width + 50
    assert o.y == 50
    assert o.kind == SNOWMAN and o.variant == 0

    nxt = world.step(replace(state, frame_count=200), IDLE, FRAME, FixedRandom(0.99))
    o = nxt.obstacles[0]
    assert o.kind == TREE
    assert o.variant == tuning.tree_variants - 1
    assert o.y == pytest.approx(50 + 0.99 * (tuning.height - 100))


def test_no_spawn_between_intervals(world, state, rng):
    nxt = world.step(replace(state, frame_count=99), IDLE, FRAME, rng)
    assert nxt.obstacles == ()


def test_speed_ramp_every_2500ms(world, state, rng):
    s = replace(state, frame_count=0)
    for _ in range(4):
        s = world.step(s, IDLE, 0.5, rng)
    assert s.speed_multiplier == 1.0
    assert s.spawn_interval == 100

    s = world.step(s, IDLE, 0.5, rng)
    assert s.elapsed_ms == 2500.0
    assert s.speed_multiplier == pytest.approx(1.05)
    assert s.spawn_interval == 95
    assert s.last_speed_increase_ms == 2500.0


def test_speed_ramp_keeps_the_period_at_60fps(world, state, rng):
    s = replace(state, frame_count=0, obstacles=())
    bumps = []
    for tick in range(1, 601):
        before = s.speed_multiplier
        s = world.step(replace(s, obstacles=()), IDLE, FRAME, rng)
        if s.speed_multiplier > before:
            bumps.append(tick)
    assert bumps == [150, 300, 450, 600]
    assert s.last_speed_increase_ms == 10_000.0
    assert s.speed_multiplier == pytest.approx(1.2)


def test_spawn_interval_floor(world, state, rng):
    s = replace(state, spawn_interval=32, elapsed_ms=2499.0)
    assert world.step(s, IDLE, FRAME, rng).spawn_interval == 30

    s = replace(state, spawn_interval=30, elapsed_ms=2499.0)
    assert world.step(s, IDLE, FRAME, rng).spawn_interval == 30


def test_score_every_60_frames(world, state, rng):
    s = world.step(replace(state, frame_count=0), IDLE, FRAME, rng)
    assert s.score == 10
    assert s.frame_count == 1

    for _ in range(59):
        s = world.step(s, IDLE, FRAME, rng)
    assert s.score == 10
    assert s.frame_count == 60

    s = world.step(s, IDLE, FRAME, rng)
    assert s.score == 20


def test_game_over_state_is_frozen(world, state, rng):
    over = replace(state, game_over=True, lives=0, game_time=12)
    assert world.step(over, UP, FRAME, rng) is over
