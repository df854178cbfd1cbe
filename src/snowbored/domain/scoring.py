from __future__ import annotations

from snowbored.domain.exceptions import InvalidScore
from snowbored.domain.game_state import GameResult, GameState
from snowbored.domain.tuning import Tuning


# Allowed multiple of the rate a 60 fps session actually earns (100 points/s by default).
_HEADROOM = 10


def result_of(state: GameState) -> GameResult | None:
    if not state.game_over:
        return None
    return GameResult(score=state.score, game_time=state.game_time)


def max_points_per_second(tuning: Tuning) -> float:
    """Highest plausible scoring rate for a tuning, with the same headroom as the default."""
    return _HEADROOM * tuning.score_step * 60.0 / tuning.score_every


def validate_result(result: GameResult, *, tuning: Tuning | None = None) -> None:
    tuning = tuning or Tuning()
    if result.score < 0:
        raise InvalidScore("Invalid score")
    if result.game_time < 1:
        raise InvalidScore("Game too short")
    if result.score % tuning.score_step != 0:
        raise InvalidScore("Invalid score format")
    if result.score > result.game_time * max_points_per_second(tuning):
        raise InvalidScore("Score validation failed")


def format_clock(seconds: int) -> str:
    # mm:ss, minutes keep growing past 59 instead of wrapping into hours.
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"
