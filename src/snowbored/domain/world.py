from __future__ import annotations

import math
from dataclasses import replace

from snowbored.domain.avalanche import avalanche_reached, step_avalanche
from snowbored.domain.game_state import GameState, Obstacle, Player, TrailPoint
from snowbored.domain.input_state import InputState
from snowbored.domain.rng import RandomSource
from snowbored.domain.spawner import spawn_obstacle
from snowbored.domain.tuning import Tuning


# Frame dt sums drift below the exact period (150 * 1000/60 < 2500).
_RAMP_SLACK_MS = 1e-6


class World:
    def step(self, state: GameState, inp: InputState, dt: float, rng: RandomSource) -> GameState:
        if state.game_over:
            return state
        t = state.tuning

        # ----- Invulnerability window -----
        invulnerable = state.invulnerable
        inv_timer = state.invulnerability_timer
        if invulnerable:
            inv_timer -= 1
            if inv_timer <= 0:
                invulnerable = False
                inv_timer = 0

        # ----- Difficulty ramp (wall clock) -----
        elapsed_ms = state.elapsed_ms + dt * 1000.0
        speed = state.speed_multiplier
        interval = state.spawn_interval
        last_increase = state.last_speed_increase_ms
        if elapsed_ms - last_increase >= t.speed_ramp_ms - _RAMP_SLACK_MS:
            speed += t.speed_step
            interval = max(t.min_spawn_interval, interval - t.spawn_interval_step)
            last_increase += t.speed_ramp_ms

        # ----- Player physics -----
        p = state.player
        vy = p.vy + (t.ascend_accel if inp.ascending else t.gravity)
        vy = max(-t.movement_speed, min(t.movement_speed, vy))
        y = max(t.y_min, min(t.y_max, p.y + vy))
        player = Player(x=p.x, y=y, vy=vy, ascending=inp.ascending)

        # ----- Trail (newest first, capped) -----
        trail = (TrailPoint(x=player.x, y=player.y + t.trail_y_offset),) + state.trail
        trail = trail[: t.trail_cap]

        # ----- Scroll world left -----
        dx = t.movement_speed * speed
        obstacles = [
            Obstacle(x=o.x - dx, y=o.y, kind=o.kind, variant=o.variant)
            for o in state.obstacles
            if o.x - dx > t.despawn_x
        ]
        trail = tuple(TrailPoint(x=q.x - dx, y=q.y) for q in trail if q.x - dx > 0.0)

        # ----- Spawn -----
        frame = state.frame_count
        if frame % interval == 0:
            obstacles.append(spawn_obstacle(rng, t, x=t.width + 50.0))

        avalanche = step_avalanche(
            state.avalanche, frame_count=frame, player_x=player.x, tuning=t, rng=rng
        )

        nxt = replace(
            state,
            player=player,
            obstacles=tuple(obstacles),
            trail=trail,
            avalanche=avalanche,
            elapsed_ms=elapsed_ms,
            speed_multiplier=speed,
            spawn_interval=interval,
            last_speed_increase_ms=last_increase,
            invulnerable=invulnerable,
            invulnerability_timer=inv_timer,
        )

        # ----- Collision (avalanche always counts, obstacles only when vulnerable) -----
        # The window covers the full tick on which the timer runs out.
        hit = avalanche_reached(avalanche, t) or (
            not state.invulnerable and self._player_hits_any_obstacle(player, nxt.obstacles, t)
        )
        if hit:
            return self._lose_life(nxt)

        # ----- Score -----
        score = state.score
        if frame % t.score_every == 0:
            score += t.score_step

        return replace(nxt, score=score, frame_count=frame + 1)

    def _lose_life(self, state: GameState) -> GameState:
        lives = max(0, state.lives - 1)
        if lives == 0:
            return replace(
                state,
                lives=0,
                game_over=True,
                game_time=max(1, math.floor(state.elapsed_ms / 1000.0)),
            )
        return replace(
            state,
            lives=lives,
            invulnerable=True,
            invulnerability_timer=state.tuning.invulnerability_frames,
        )

    def _player_hits_any_obstacle(
        self, p: Player, obstacles: tuple[Obstacle, ...], t: Tuning
    ) -> bool:
        # Both boxes are centred on their positions.
        reach_x = (t.player_w + t.obstacle_w) / 2.0
        reach_y = (t.player_h + t.obstacle_h) / 2.0
        for o in obstacles:
            if abs(p.x - o.x) < reach_x and abs(p.y - o.y) < reach_y:
                return True
        return False
