from __future__ import annotations

import base64
import logging
import math
import tkinter as tk
from dataclasses import dataclass

from snowbored.domain.spawner import TREE
from snowbored.domain.tuning import Tuning
from snowbored.infra.assets import AssetResult, SpriteBytes


logger = logging.getLogger("snowbored.sprites")

HEART_SIZE = 20


@dataclass(frozen=True)
class SpriteSet:
    player: tk.PhotoImage | None
    player_fallen: tk.PhotoImage | None
    heart: tk.PhotoImage | None
    heart_lost: tk.PhotoImage | None
    background: tk.PhotoImage | None
    trees: tuple[tk.PhotoImage | None, ...]
    snowmen: tuple[tk.PhotoImage | None, ...]

    def obstacle(self, kind: str, variant: int) -> tk.PhotoImage | None:
        pool = self.trees if kind == TREE else self.snowmen
        if 0 <= variant < len(pool):
            return pool[variant]
        return None


def decode(master: tk.Misc, asset: AssetResult) -> tk.PhotoImage | None:
    if asset.data is None:
        return None
    try:
        # Tk reads base64-encoded PNG/GIF data directly.
        return tk.PhotoImage(master=master, data=base64.b64encode(asset.data))
    except tk.TclError as e:
        logger.warning("Asset %s from %s is not a readable image: %s", asset.name, asset.source, e)
        return None


def fit(img: tk.PhotoImage, w: float, h: float) -> tk.PhotoImage:
    # PhotoImage only scales by integer factors; get as close to the box as that allows.
    iw, ih = img.width(), img.height()
    if iw <= 0 or ih <= 0:
        return img
    if iw > w or ih > h:
        factor = max(math.ceil(iw / w), math.ceil(ih / h))
        return img.subsample(factor)
    factor = int(min(w / iw, h / ih))
    if factor >= 2:
        return img.zoom(factor)
    return img


def rotated_ccw(master: tk.Misc, img: tk.PhotoImage) -> tk.PhotoImage:
    w, h = img.width(), img.height()
    out = tk.PhotoImage(master=master, width=h, height=w)
    for x in range(w):
        for y in range(h):
            if img.transparency_get(x, y):
                continue
            r, g, b = img.get(x, y)
            out.put(f"#{r:02x}{g:02x}{b:02x}", to=(y, w - 1 - x))
    return out


def greyscale(master: tk.Misc, img: tk.PhotoImage) -> tk.PhotoImage:
    w, h = img.width(), img.height()
    out = tk.PhotoImage(master=master, width=w, height=h)
    for x in range(w):
        for y in range(h):
            if img.transparency_get(x, y):
                continue
            r, g, b = img.get(x, y)
            lum = int(0.299 * r + 0.587 * g + 0.114 * b)
            out.put(f"#{lum:02x}{lum:02x}{lum:02x}", to=(x, y))
    return out


def build_sprite_set(master: tk.Misc, raw: SpriteBytes, tuning: Tuning) -> SpriteSet:
    def scaled(asset: AssetResult, w: float, h: float) -> tk.PhotoImage | None:
        img = decode(master, asset)
        return fit(img, w, h) if img is not None else None

    player = scaled(raw.player, tuning.player_w, tuning.player_h)
    heart = scaled(raw.heart, HEART_SIZE, HEART_SIZE)
    background = scaled(raw.background, tuning.width, tuning.height)

    sprites = SpriteSet(
        player=player,
        player_fallen=rotated_ccw(master, player) if player is not None else None,
        heart=heart,
        heart_lost=greyscale(master, heart) if heart is not None else None,
        background=background,
        trees=tuple(scaled(a, tuning.obstacle_w, tuning.obstacle_h) for a in raw.trees),
        snowmen=tuple(scaled(a, tuning.obstacle_w, tuning.obstacle_h) for a in raw.snowmen),
    )
    if player is None:
        logger.warning("No player sprite; the player will not be drawn")
    return sprites
