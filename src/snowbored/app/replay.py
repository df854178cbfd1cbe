from __future__ import annotations

import random
from dataclasses import dataclass

from snowbored.app.session import Session, SessionPhase
from snowbored.domain.game_state import GameState
from snowbored.domain.tuning import Tuning
from snowbored.domain.world import World


FRAME_DT = 1.0 / 60.0


@dataclass(frozen=True)
class InputPattern:
    """Hold ascend for `hold` frames, release for `release` frames, repeat."""
    hold: int = 0
    release: int = 1

    def __post_init__(self) -> None:
        if self.hold < 0 or self.release < 0 or self.hold + self.release == 0:
            raise ValueError("hold/release must be >= 0 and not both 0")

    def ascending_at(self, frame: int) -> bool:
        if self.hold == 0:
            return False
        return frame % (self.hold + self.release) < self.hold


def run_headless(
    session: Session, *, max_frames: int, pattern: InputPattern | None = None
) -> GameState:
    """
    Plays the session without a window until game over or `max_frames`
    ticks, feeding the same edge signals a keyboard would.
    """
    pattern = pattern or InputPattern()
    if session.phase is SessionPhase.NOT_STARTED:
        session.start()

    for frame in range(max_frames):
        if session.phase is not SessionPhase.RUNNING:
            break
        want = pattern.ascending_at(frame)
        if want and not session.ascending:
            session.ascend_begin()
        elif not want and session.ascending:
            session.ascend_end()
        session.advance(FRAME_DT)

    return session.state


def seeded_session(seed: int | None, tuning: Tuning | None = None) -> Session:
    return Session(world=World(), rng=random.Random(seed), tuning=tuning)
