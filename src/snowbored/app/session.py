from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from snowbored.domain.game_state import GameResult, GameState
from snowbored.domain.input_state import InputState
from snowbored.domain.rng import RandomSource
from snowbored.domain.scoring import result_of
from snowbored.domain.spawner import new_game_state
from snowbored.domain.tuning import Tuning
from snowbored.domain.world import World

if TYPE_CHECKING:
    from snowbored.ui.sprites import SpriteSet


logger = logging.getLogger("snowbored.session")


class SessionPhase(enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    GAME_OVER = "game_over"


class Session:
    """
    Owns one run at a time: the current GameState, the held ascend flag and
    the phase. Input arrives as edge signals; the frame loop calls advance().
    """

    def __init__(
        self,
        *,
        world: World,
        rng: RandomSource,
        tuning: Tuning | None = None,
        sprites: SpriteSet | None = None,
    ) -> None:
        self._world = world
        self._rng = rng
        self.tuning = tuning or Tuning()
        self.sprites = sprites  # survives reset(); the view reads it

        self.phase = SessionPhase.NOT_STARTED
        self.state: GameState = new_game_state(self.tuning, self._rng)
        self._ascending = False
        self._listeners: list[Callable[[GameResult], None]] = []

    # ---------- Host callbacks ----------

    def on_game_over(self, fn: Callable[[GameResult], None]) -> None:
        self._listeners.append(fn)

    @property
    def result(self) -> GameResult | None:
        return result_of(self.state)

    @property
    def ascending(self) -> bool:
        return self._ascending

    # ---------- Commands ----------

    def start(self) -> None:
        if self.phase is not SessionPhase.NOT_STARTED:
            return
        self.phase = SessionPhase.RUNNING
        logger.info("Session started")

    def reset(self) -> None:
        self.state = new_game_state(self.tuning, self._rng)
        self._ascending = False
        self.phase = SessionPhase.NOT_STARTED
        logger.info("Session reset")

    def ascend_begin(self) -> None:
        if self.phase is SessionPhase.NOT_STARTED:
            # The first press only leaves the start screen.
            self.start()
            return
        if self.phase is SessionPhase.RUNNING:
            self._ascending = True

    def ascend_end(self) -> None:
        if self.phase is SessionPhase.RUNNING:
            self._ascending = False

    # ---------- Frame ----------

    def advance(self, dt: float) -> GameState:
        if self.phase is not SessionPhase.RUNNING:
            return self.state

        self.state = self._world.step(self.state, InputState(ascending=self._ascending), dt, self._rng)

        if self.state.game_over:
            self.phase = SessionPhase.GAME_OVER
            self._ascending = False
            result = GameResult(score=self.state.score, game_time=self.state.game_time)
            logger.info("Game over: score=%d time=%ds", result.score, result.game_time)
            for fn in list(self._listeners):
                fn(result)

        return self.state
