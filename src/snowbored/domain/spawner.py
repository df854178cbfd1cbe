from __future__ import annotations

from snowbored.domain.game_state import Avalanche, GameState, Obstacle, Player
from snowbored.domain.rng import RandomSource, pick_index
from snowbored.domain.tuning import Tuning


TREE = "tree"
SNOWMAN = "snowman"

_OPENING_WAVE = 3
_OPENING_OFFSET = 100.0
_OPENING_SPACING = 150.0
_SPAWN_MARGIN = 50.0  # obstacles keep this far from the top/bottom canvas edge


def spawn_obstacle(rng: RandomSource, tuning: Tuning, *, x: float) -> Obstacle:
    # 70/30 split between the two categories, uniform within a category.
    kind = TREE if rng.random() > 1.0 - tuning.tree_share else SNOWMAN
    n = tuning.tree_variants if kind == TREE else tuning.snowman_variants
    variant = pick_index(rng, n) if n > 0 else 0
    y = _SPAWN_MARGIN + rng.random() * (tuning.height - 2 * _SPAWN_MARGIN)
    return Obstacle(x=x, y=y, kind=kind, variant=variant)


def opening_wave(rng: RandomSource, tuning: Tuning) -> tuple[Obstacle, ...]:
    # A few obstacles already queued off-screen so the first seconds aren't empty.
    return tuple(
        spawn_obstacle(rng, tuning, x=tuning.width + _OPENING_OFFSET + i * _OPENING_SPACING)
        for i in range(_OPENING_WAVE)
    )


def new_game_state(tuning: Tuning, rng: RandomSource | None = None) -> GameState:
    """
    Fresh state for one session. With an rng the opening wave is seeded;
    without one the slope starts empty.
    """
    obstacles = opening_wave(rng, tuning) if rng is not None else ()
    return GameState(
        player=Player(x=tuning.player_x, y=tuning.height / 2.0, vy=0.0, ascending=False),
        obstacles=obstacles,
        trail=(),
        avalanche=Avalanche(
            started=False,
            intensity=0.0,
            distance=tuning.avalanche_distance,
            timer=tuning.avalanche_countdown,
            particles=(),
        ),
        frame_count=0,
        elapsed_ms=0.0,
        speed_multiplier=1.0,
        spawn_interval=tuning.spawn_interval,
        last_speed_increase_ms=0.0,
        score=0,
        lives=tuning.lives,
        invulnerable=False,
        invulnerability_timer=0,
        game_over=False,
        game_time=0,
        tuning=tuning,
    )
