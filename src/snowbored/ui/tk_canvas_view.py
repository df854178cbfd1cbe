from __future__ import annotations

import random
import tkinter as tk

from snowbored.app.session import SessionPhase
from snowbored.domain.game_state import GameState
from snowbored.domain.scoring import format_clock
from snowbored.domain.spawner import TREE
from snowbored.ui.sprites import HEART_SIZE, SpriteSet


SKY = "#a7d3f2"
SKI_TRAIL = "#9fb8cc"
SNOW = "#ffffff"
TREE_FALLBACK = "#2e7d32"
SNOWMAN_FALLBACK = "#eceff1"
HUD_TEXT = "#000000"
LIFE_ON = "#ff0000"
LIFE_OFF = "#666666"
FONT = ("Courier", 14, "bold")

HEART_SPACING = 28
HEART_X = 20
HEART_Y = 50

_FRAME = "frame"  # tag for everything redrawn each frame


def _stipple(opacity: float) -> str:
    # Tk has no alpha for canvas items; approximate with stipple density.
    if opacity >= 0.85:
        return ""
    if opacity >= 0.6:
        return "gray75"
    if opacity >= 0.35:
        return "gray50"
    if opacity >= 0.15:
        return "gray25"
    return "gray12"


class TkCanvasView:
    def __init__(self, root: tk.Misc, *, width: int, height: int) -> None:
        self._w = width
        self._h = height
        # Cosmetic sparkle only; keeps the simulation rng untouched.
        self._sparkle = random.Random()

        self.canvas = tk.Canvas(root, width=width, height=height, highlightthickness=0, bg=SKY)
        self.canvas.pack(fill="both", expand=True)

    def render_game(
        self, state: GameState, *, sprites: SpriteSet | None, phase: SessionPhase
    ) -> None:
        c = self.canvas
        c.delete(_FRAME)

        self._draw_background(sprites)
        self._draw_avalanche(state)
        self._draw_trail(state)
        self._draw_obstacles(state, sprites)
        self._draw_player(state, sprites)
        self._draw_hud(state, sprites)

        if phase is SessionPhase.NOT_STARTED:
            self._draw_overlay(
                "RUN GORILLA, RUN!",
                "SPACE / CLICK to move up\nRelease to move down\nAvoid obstacles\n"
                "You have 3 lives\nOutrun the avalanche!\n\nPRESS TO START",
            )
        elif phase is SessionPhase.GAME_OVER:
            self._draw_overlay(
                "GAME OVER",
                f"Final Score: {state.score}\nTime: {format_clock(state.game_time)}\n\nPress R to play again",
            )

    # ---------- Layers ----------

    def _draw_background(self, sprites: SpriteSet | None) -> None:
        if sprites is not None and sprites.background is not None:
            self.canvas.create_image(0, 0, image=sprites.background, anchor="nw", tags=(_FRAME,))
            self.canvas.create_rectangle(
                0, 0, self._w, self._h, outline="", fill=SNOW, stipple="gray12", tags=(_FRAME,)
            )
        else:
            self.canvas.create_rectangle(0, 0, self._w, self._h, outline="", fill=SKY, tags=(_FRAME,))

    def _draw_avalanche(self, state: GameState) -> None:
        av = state.avalanche
        if not av.started:
            return
        c = self.canvas

        # Glow: a white wall fading out towards the player.
        front = state.player.x - av.distance
        c.create_rectangle(front - 50, 0, front, self._h, outline="", fill=SNOW, tags=(_FRAME,))
        for i, opacity in enumerate((0.9, 0.6, 0.35, 0.15)):
            x1 = front + i * 37.5
            c.create_rectangle(
                x1, 0, x1 + 37.5, self._h,
                outline="", fill=SNOW, stipple=_stipple(opacity), tags=(_FRAME,),
            )

        for p in av.particles:
            # Snap to a 2 px grid for the pixel-art look.
            px = (p.x // 2) * 2
            py = (p.y // 2) * 2
            size = (p.size // 2) * 2
            c.create_rectangle(
                px, py, px + size, py + size,
                outline="", fill=SNOW, stipple=_stipple(p.opacity), tags=(_FRAME,),
            )
            if self._sparkle.random() > 0.7:
                c.create_rectangle(
                    px + 2, py + 2, px + 4, py + 4,
                    outline="", fill="#f0f0f0", stipple=_stipple(p.opacity * 0.6), tags=(_FRAME,),
                )
            if self._sparkle.random() > 0.8:
                c.create_rectangle(
                    px - 2, py - 2, px, py,
                    outline="", fill="#dcdcdc", stipple=_stipple(p.opacity * 0.4), tags=(_FRAME,),
                )

    def _draw_trail(self, state: GameState) -> None:
        if len(state.trail) < 2:
            return
        coords: list[float] = []
        for q in state.trail:
            coords.extend((q.x, q.y))
        self.canvas.create_line(*coords, fill=SKI_TRAIL, width=2, tags=(_FRAME,))

    def _draw_obstacles(self, state: GameState, sprites: SpriteSet | None) -> None:
        t = state.tuning
        for o in state.obstacles:
            img = sprites.obstacle(o.kind, o.variant) if sprites is not None else None
            if img is not None:
                self.canvas.create_image(o.x, o.y, image=img, anchor="center", tags=(_FRAME,))
                continue
            x1, y1 = o.x - t.obstacle_w / 2.0, o.y - t.obstacle_h / 2.0
            x2, y2 = o.x + t.obstacle_w / 2.0, o.y + t.obstacle_h / 2.0
            if o.kind == TREE:
                self.canvas.create_polygon(
                    x1, y2, x2, y2, o.x, y1, outline="", fill=TREE_FALLBACK, tags=(_FRAME,)
                )
            else:
                self.canvas.create_oval(
                    x1, y1, x2, y2, outline="#90a4ae", fill=SNOWMAN_FALLBACK, tags=(_FRAME,)
                )

    def _draw_player(self, state: GameState, sprites: SpriteSet | None) -> None:
        if sprites is None or sprites.player is None:
            return
        if state.invulnerable and (state.frame_count // 10) % 2 == 0:
            return  # blink
        img = sprites.player_fallen if state.game_over else sprites.player
        p = state.player
        self.canvas.create_image(p.x, p.y, image=img, anchor="center", tags=(_FRAME,))

    def _draw_hud(self, state: GameState, sprites: SpriteSet | None) -> None:
        c = self.canvas
        seconds = state.game_time if state.game_over else int(state.elapsed_ms // 1000)
        c.create_text(20, 30, text=format_clock(seconds), anchor="w", fill=HUD_TEXT, font=FONT, tags=(_FRAME,))
        c.create_text(
            self._w - 20, 30, text=f"Score: {state.score}", anchor="e", fill=HUD_TEXT, font=FONT, tags=(_FRAME,)
        )

        for i in range(state.tuning.lives):
            x = HEART_X + i * HEART_SPACING
            alive = i < state.lives
            if sprites is not None and sprites.heart is not None:
                img = sprites.heart if alive else sprites.heart_lost
                c.create_image(x, HEART_Y, image=img, anchor="nw", tags=(_FRAME,))
                if not alive:
                    # Washed out to read as translucent.
                    c.create_rectangle(
                        x, HEART_Y, x + HEART_SIZE, HEART_Y + HEART_SIZE,
                        outline="", fill=SKY, stipple="gray50", tags=(_FRAME,),
                    )
            else:
                c.create_rectangle(
                    x, HEART_Y, x + HEART_SIZE, HEART_Y + HEART_SIZE,
                    outline="", fill=LIFE_ON if alive else LIFE_OFF, tags=(_FRAME,),
                )

    def _draw_overlay(self, title: str, body: str) -> None:
        c = self.canvas
        c.create_rectangle(0, 0, self._w, self._h, outline="", fill="#000000", stipple="gray50", tags=(_FRAME,))
        c.create_text(
            self._w / 2, self._h / 2 - 70, text=title, fill="#fb923c", font=("Courier", 22, "bold"), tags=(_FRAME,)
        )
        c.create_text(
            self._w / 2, self._h / 2 + 20, text=body, fill="#ffffff", font=FONT, justify="center", tags=(_FRAME,)
        )
