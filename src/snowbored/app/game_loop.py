from __future__ import annotations

import logging
import time
import tkinter as tk
from collections.abc import Callable


logger = logging.getLogger("snowbored.loop")

FIXED_DT = 1.0 / 60.0


class GameLoop:
    """
    Drives the simulation from Tk's after() timer in fixed 1/60 s steps.

    Each frame the wall-clock delta is banked and paid out as whole steps
    (at most `max_steps` per frame), then the scene is rendered once.
    `step_fn` returns False when the session stops running; the remaining
    bank is dropped so a resumed session never replays stale time.
    stop() cancels the pending frame, so nothing runs against replaced state.
    """

    def __init__(
        self,
        *,
        root: tk.Misc,
        step_fn: Callable[[float], bool],
        render_fn: Callable[[], None],
        fps: int = 60,
        max_steps: int = 5,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._root = root
        self._step_fn = step_fn
        self._render_fn = render_fn
        self._frame_ms = max(1, int(1000 / max(1, fps)))
        self._max_steps = max_steps
        self._clock = clock

        self._pending: str | None = None
        self._prev_t = 0.0
        self._bank = 0.0

    @property
    def running(self) -> bool:
        return self._pending is not None

    def start(self) -> None:
        if self.running:
            return
        self._bank = 0.0
        self._prev_t = self._clock()
        self._arm()

    def stop(self) -> None:
        pending, self._pending = self._pending, None
        if pending is None:
            return
        try:
            self._root.after_cancel(pending)
        except tk.TclError:
            logger.debug("after_cancel on a destroyed root")

    def _arm(self) -> None:
        self._pending = self._root.after(self._frame_ms, self._frame)

    def _frame(self) -> None:
        now = self._clock()
        # A minimised window or a debugger pause must not fast-forward the run.
        self._bank += min(now - self._prev_t, 0.1)
        self._prev_t = now

        try:
            self._pay_out()
            self._render_fn()
        except Exception:
            logger.exception("Frame failed; stopping the loop")
            self._pending = None
            raise

        # stop() from inside a callback leaves nothing to re-arm.
        if self._pending is not None:
            self._arm()

    def _pay_out(self) -> None:
        steps = 0
        while self._bank >= FIXED_DT and steps < self._max_steps:
            self._bank -= FIXED_DT
            steps += 1
            if not self._step_fn(FIXED_DT):
                self._bank = 0.0
                return
