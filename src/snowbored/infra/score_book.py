from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from snowbored.domain.game_state import GameResult
from snowbored.domain.scoring import validate_result
from snowbored.domain.tuning import Tuning
from snowbored.infra.exceptions import ScoreLoadError, ScoreSaveError


logger = logging.getLogger("snowbored.scores")

_FORMAT = "snowbored.scores"
_VERSION = 1


@dataclass(frozen=True)
class ScoreEntry:
    player: str
    score: int
    game_time: int
    submissions: int


@dataclass(frozen=True)
class SubmitOutcome:
    accepted: bool
    best: ScoreEntry
    previous: ScoreEntry | None


class ScoreBook:
    """
    Best score per player, kept in a JSON file next to the settings.
    A new result replaces the stored one only when it is strictly higher.
    Results are checked against the tuning the sessions were played with.
    """

    def __init__(self, path: Path, *, tuning: Tuning | None = None) -> None:
        self._path = path
        self._tuning = tuning or Tuning()

    @property
    def path(self) -> Path:
        return self._path

    def entries(self) -> dict[str, ScoreEntry]:
        if not self._path.exists():
            return {}
        try:
            obj = json.loads(self._path.read_text(encoding="utf-8"))
            return _decode(obj)
        except ScoreLoadError:
            raise
        except Exception as e:
            raise ScoreLoadError(f"Failed to load scores from {self._path}: {e}") from e

    def best(self, player: str) -> ScoreEntry | None:
        return self.entries().get(player)

    def top(self, n: int = 10) -> list[ScoreEntry]:
        ranked = sorted(self.entries().values(), key=lambda e: (-e.score, e.game_time, e.player))
        return ranked[: max(0, n)]

    def submit(self, player: str, result: GameResult) -> SubmitOutcome:
        if not player:
            raise ValueError("player name must be non-empty")
        validate_result(result, tuning=self._tuning)

        entries = self.entries()
        previous = entries.get(player)
        submissions = (previous.submissions if previous else 0) + 1

        if previous is not None and result.score <= previous.score:
            kept = ScoreEntry(
                player=player,
                score=previous.score,
                game_time=previous.game_time,
                submissions=submissions,
            )
            entries[player] = kept
            self._save(entries)
            return SubmitOutcome(accepted=False, best=kept, previous=previous)

        best = ScoreEntry(
            player=player, score=result.score, game_time=result.game_time, submissions=submissions
        )
        entries[player] = best
        self._save(entries)
        logger.info("New best for %s: %d", player, best.score)
        return SubmitOutcome(accepted=True, best=best, previous=previous)

    def _save(self, entries: dict[str, ScoreEntry]) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            text = json.dumps(_encode(entries), indent=2, sort_keys=True)
            # Atomic-ish write: write temp then replace.
            tmp.write_text(text, encoding="utf-8")
            os.replace(tmp, self._path)
        except Exception as e:
            try:
                if tmp.exists():
                    tmp.unlink()
            except OSError:
                logger.warning("Could not remove %s", tmp)
            raise ScoreSaveError(f"Failed to save scores to {self._path}: {e}") from e


def _encode(entries: dict[str, ScoreEntry]) -> dict:
    return {
        "format": _FORMAT,
        "version": _VERSION,
        "scores": [
            {
                "player": e.player,
                "score": int(e.score),
                "game_time": int(e.game_time),
                "submissions": int(e.submissions),
            }
            for e in entries.values()
        ],
    }


def _decode(obj: Any) -> dict[str, ScoreEntry]:
    if not isinstance(obj, dict) or obj.get("format") != _FORMAT:
        raise ScoreLoadError("Invalid score file format marker.")
    if obj.get("version") != _VERSION:
        raise ScoreLoadError("Unsupported score file version.")

    raw = obj.get("scores", [])
    if not isinstance(raw, list):
        raise ScoreLoadError("scores must be a list.")

    out: dict[str, ScoreEntry] = {}
    for i, ro in enumerate(raw):
        if not isinstance(ro, dict):
            raise ScoreLoadError(f"scores[{i}] must be an object.")
        player = ro.get("player")
        if not isinstance(player, str) or not player:
            raise ScoreLoadError(f"scores[{i}].player must be a non-empty string.")
        values = (ro.get("score"), ro.get("game_time"), ro.get("submissions", 1))
        if not all(isinstance(v, int) for v in values):
            raise ScoreLoadError(f"scores[{i}] score/game_time/submissions must be integers.")
        score, game_time, submissions = values
        out[player] = ScoreEntry(
            player=player, score=score, game_time=game_time, submissions=submissions
        )
    return out
