from __future__ import annotations

import math
from dataclasses import replace

from snowbored.domain.game_state import Avalanche, AvalancheParticle
from snowbored.domain.rng import RandomSource
from snowbored.domain.tuning import Tuning


INTENSITY_STEP = 0.05
INTENSITY_EVERY = 60   # frames
MAX_INTENSITY = 1.0
APPROACH_EVERY = 30    # frames, distance shrinks by 1 px
PARTICLE_FADE = 0.005
TRICKLE_EVERY = 5      # frames
TRICKLE_BASE = 5       # particles per trickle at full intensity
_FRONT_DEPTH = 100.0   # particles are seeded within this many px of the front


def spawn_particles(
    rng: RandomSource, count: int, *, player_x: float, distance: float, height: float
) -> tuple[AvalancheParticle, ...]:
    front = player_x - distance
    return tuple(
        AvalancheParticle(
            x=front + rng.random() * _FRONT_DEPTH,
            y=rng.random() * height,
            size=4.0 + math.floor(rng.random() * 4) * 2.0,
            speed=1.0 + rng.random() * 3.0,
            opacity=0.5 + rng.random() * 0.5,
        )
        for _ in range(count)
    )


def step_avalanche(
    av: Avalanche, *, frame_count: int, player_x: float, tuning: Tuning, rng: RandomSource
) -> Avalanche:
    # ----- Countdown -----
    if not av.started:
        if av.timer <= 0:
            particles = spawn_particles(
                rng,
                tuning.avalanche_seed_particles,
                player_x=player_x,
                distance=av.distance,
                height=tuning.height,
            )
            return replace(av, started=True, particles=particles)
        return replace(av, timer=av.timer - 1)

    # ----- Ramp -----
    intensity = av.intensity
    if frame_count % INTENSITY_EVERY == 0 and intensity < MAX_INTENSITY:
        intensity = min(MAX_INTENSITY, intensity + INTENSITY_STEP)

    distance = av.distance
    if frame_count % APPROACH_EVERY == 0:
        distance = max(distance - 1.0, tuning.avalanche_min_distance)

    # ----- Drift + fade -----
    moved: list[AvalancheParticle] = []
    for p in av.particles:
        opacity = max(0.0, p.opacity - PARTICLE_FADE)
        if opacity <= 0.0:
            continue
        moved.append(
            AvalancheParticle(
                x=p.x + p.speed,
                y=p.y + (rng.random() - 0.5) * 2.0,
                size=p.size,
                speed=p.speed,
                opacity=opacity,
            )
        )

    # ----- Trickle -----
    if frame_count % TRICKLE_EVERY == 0:
        moved.extend(
            spawn_particles(
                rng,
                math.floor(TRICKLE_BASE * intensity),
                player_x=player_x,
                distance=distance,
                height=tuning.height,
            )
        )

    return Avalanche(
        started=True,
        intensity=intensity,
        distance=distance,
        timer=av.timer,
        particles=tuple(moved),
    )


def avalanche_reached(av: Avalanche, tuning: Tuning) -> bool:
    return av.started and av.distance <= tuning.avalanche_hit_distance
