from __future__ import annotations
import tkinter as tk
from collections.abc import Callable


class TkInputMapper:
    """
    Folds keyboard (Space / Up) and left mouse button into two edge signals.
    Nothing downstream sees Tk events.
    """

    def __init__(
        self,
        root: tk.Tk,
        canvas: tk.Canvas,
        *,
        on_ascend_begin: Callable[[], None],
        on_ascend_end: Callable[[], None],
    ) -> None:
        self._on_begin = on_ascend_begin
        self._on_end = on_ascend_end
        self._keys_down: set[str] = set()
        self._mouse_down = False

        for key in ("space", "Up"):
            root.bind(f"<KeyPress-{key}>", lambda e, k=key: self._key_down(k))
            root.bind(f"<KeyRelease-{key}>", lambda e, k=key: self._key_up(k))

        canvas.bind("<ButtonPress-1>", self._on_mouse_down)
        canvas.bind("<ButtonRelease-1>", self._on_mouse_up)

        # Helps ensure root gets key events.
        root.focus_set()

    @property
    def held(self) -> bool:
        return bool(self._keys_down) or self._mouse_down

    def _key_down(self, key: str) -> None:
        was_held = self.held
        self._keys_down.add(key)
        if not was_held:
            self._on_begin()

    def _key_up(self, key: str) -> None:
        self._keys_down.discard(key)
        if not self.held:
            self._on_end()

    def _on_mouse_down(self, _evt: tk.Event) -> None:
        was_held = self.held
        self._mouse_down = True
        if not was_held:
            self._on_begin()

    def _on_mouse_up(self, _evt: tk.Event) -> None:
        self._mouse_down = False
        if not self.held:
            self._on_end()

    def release_all(self) -> None:
        self._keys_down.clear()
        self._mouse_down = False
