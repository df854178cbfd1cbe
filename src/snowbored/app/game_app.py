from __future__ import annotations

import logging
import random
import tkinter as tk
from dataclasses import replace

from snowbored.app.game_loop import GameLoop
from snowbored.app.session import Session, SessionPhase
from snowbored.domain.exceptions import InvalidScore
from snowbored.domain.game_state import GameResult
from snowbored.domain.world import World
from snowbored.infra.assets import fetch_sprite_bytes
from snowbored.infra.exceptions import ScoreLoadError, ScoreSaveError
from snowbored.infra.score_book import ScoreBook
from snowbored.infra.settings import Settings
from snowbored.ui.input_mapper import TkInputMapper
from snowbored.ui.sprites import build_sprite_set
from snowbored.ui.tk_canvas_view import TkCanvasView


logger = logging.getLogger("snowbored.app")


class GameApp:
    def __init__(self, settings: Settings, *, score_book: ScoreBook | None = None) -> None:
        self.settings = settings
        self.root = tk.Tk()
        self.root.title(settings.title)

        # Obstacle variants follow the configured sprite chains.
        tuning = replace(
            settings.tuning,
            tree_variants=len(settings.assets["trees"]),
            snowman_variants=len(settings.assets["snowmen"]),
        )
        width, height = int(tuning.width), int(tuning.height)

        # Top bar
        bar = tk.Frame(self.root)
        bar.pack(side="top", fill="x")
        tk.Button(bar, text="Play again", command=self._play_again).pack(side="left", padx=4, pady=4)
        tk.Button(bar, text="Title", command=self._to_title).pack(side="left", padx=4, pady=4)
        self._status = tk.Label(bar, text="", anchor="w")
        self._status.pack(side="left", fill="x", expand=True, padx=12)

        self.view = TkCanvasView(self.root, width=width, height=height)

        # Sprites are acquired once, before the loop is armed, and survive resets.
        raw = fetch_sprite_bytes(settings)
        for failed in raw.failed:
            logger.warning("Sprite %s unavailable: %s", failed.name, "; ".join(failed.errors))
        sprites = build_sprite_set(self.root, raw, tuning)

        self.session = Session(
            world=World(), rng=random.Random(settings.seed), tuning=tuning, sprites=sprites
        )
        self.session.on_game_over(self._record_result)
        self.score_book = score_book or ScoreBook(settings.scores_file, tuning=tuning)

        self.input = TkInputMapper(
            self.root,
            self.view.canvas,
            on_ascend_begin=self.session.ascend_begin,
            on_ascend_end=self.session.ascend_end,
        )
        self.root.bind("<KeyPress-r>", lambda _e: self._play_again())

        self.loop = GameLoop(
            root=self.root,
            step_fn=self._step,
            render_fn=self._render,
            fps=settings.fps,
        )
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

    def run(self) -> None:
        self.loop.start()
        self.root.mainloop()

    # ---------- Session control ----------

    def _restart_loop(self, *, start: bool) -> None:
        # Cancel the pending frame before swapping state, then re-arm.
        self.loop.stop()
        self.input.release_all()
        self.session.reset()
        if start:
            self.session.start()
        self._status.config(text="")
        self.loop.start()

    def _play_again(self) -> None:
        self._restart_loop(start=True)

    def _to_title(self) -> None:
        self._restart_loop(start=False)

    def _record_result(self, result: GameResult) -> None:
        try:
            outcome = self.score_book.submit(self.settings.player_name, result)
        except InvalidScore as e:
            logger.warning("Result not recorded: %s", e)
            self._status.config(text=f"Score not recorded: {e}")
            return
        except (ScoreLoadError, ScoreSaveError) as e:
            logger.error("Score book unavailable: %s", e)
            self._status.config(text="Score book unavailable")
            return

        if outcome.accepted:
            self._status.config(text=f"New best: {outcome.best.score}")
        else:
            self._status.config(text=f"Your best score is {outcome.best.score}")

    # ---------- Game loop ----------

    def _step(self, dt: float) -> bool:
        if self.session.phase is not SessionPhase.RUNNING:
            return False
        self.session.advance(dt)
        return self.session.phase is SessionPhase.RUNNING

    def _render(self) -> None:
        self.view.render_game(self.session.state, sprites=self.session.sprites, phase=self.session.phase)

    def _on_close(self) -> None:
        self.loop.stop()
        self.root.destroy()
