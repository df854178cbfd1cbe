from __future__ import annotations

from dataclasses import replace

import pytest

from snowbored.domain.game_state import Obstacle
from snowbored.domain.spawner import SNOWMAN, new_game_state
from snowbored.domain.tuning import Tuning
from snowbored.domain.world import World


FRAME = 1.0 / 60.0


class FixedRandom:
    """RandomSource that always returns the same value."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture()
def tuning():
    return Tuning()


@pytest.fixture()
def world():
    return World()


@pytest.fixture()
def rng():
    # 0.0 puts every spawned obstacle on the top edge, far from a player left to fall.
    return FixedRandom(0.0)


@pytest.fixture()
def state(tuning):
    # No opening wave; frame 1 so the first step neither spawns nor scores.
    return replace(new_game_state(tuning), frame_count=1)


def overlapping(state):
    """An obstacle that will sit on the player after this tick's scroll."""
    p = state.player
    return Obstacle(x=p.x + state.tuning.movement_speed * state.speed_multiplier, y=p.y, kind=SNOWMAN, variant=0)
